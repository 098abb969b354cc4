from typing import NamedTuple

from .config import InvalidConfigurationError, MatchingConfig
from .models import DateLike, Invoice, Transaction
from .similarity import compare_token_sets, extract_tokens, similarity
from .utils import day_difference

# score used when either side has no usable tokens
NO_REFERENCE_SCORE = 0.3
# floor for dates outside the window so far pairs still rank
OUT_OF_WINDOW_DATE_SCORE = 0.1


class AmountResult(NamedTuple):
    score: float
    is_match: bool
    difference: float


class DateResult(NamedTuple):
    score: float
    in_window: bool
    difference: int


def amount_score(invoice_amount: float, transaction_amount: float, config: MatchingConfig) -> AmountResult:
    """
    Invoice amount must be positive. Within tolerance the score decays linearly
    from 1.0; outside it, half-weight decay against a 50% difference.
    """
    if invoice_amount == transaction_amount:
        return AmountResult(1.0, True, 0.0)

    difference = abs(invoice_amount - transaction_amount)
    if config.exact_amount_match:
        return AmountResult(0.0, False, difference)

    percent_diff = difference / invoice_amount * 100
    # amount_tolerance is a fraction, tolerance is then scaled down by 100 again
    tolerance = config.amount_tolerance * invoice_amount / 100

    if difference <= tolerance:
        score = 1 - percent_diff / (config.amount_tolerance * 100)
        return AmountResult(max(0.0, score), True, difference)

    score = max(0.0, 0.5 * (1 - percent_diff / 50))
    return AmountResult(score, False, difference)


def date_score(invoice_date: DateLike, transaction_date: DateLike, config: MatchingConfig) -> DateResult:
    days = day_difference(invoice_date, transaction_date)

    if days == 0:
        return DateResult(1.0, True, 0)
    if days > config.date_window_days:
        return DateResult(OUT_OF_WINDOW_DATE_SCORE, False, days)
    return DateResult(max(0.0, 1 - days / config.date_window_days), True, days)


def reference_score(invoice: Invoice, transaction: Transaction, config: MatchingConfig) -> float:
    invoice_text = f"{invoice.customer_name} {invoice.reference_id or ''} {invoice.description or ''}"
    invoice_tokens = extract_tokens(invoice_text)
    transaction_tokens = extract_tokens(transaction.description)

    if not invoice_tokens or not transaction_tokens:
        return NO_REFERENCE_SCORE

    token_similarity = compare_token_sets(invoice_tokens, transaction_tokens)
    # direct overlap the tokenizer can miss, e.g. "Acme Corp" vs "ACMECORP"
    name_similarity = similarity(invoice.customer_name, transaction.description)
    return max(token_similarity, 0.8 * name_similarity)


def compose_confidence(amount: float, date: float, reference: float, config: MatchingConfig) -> float:
    """Weighted mean of the three factor scores, clamped to [0, 1]."""
    total = config.total_weight()
    if total <= 0:
        raise InvalidConfigurationError("Cannot compose confidence: total factor weight is 0")

    confidence = (
        amount * config.amount_weight / total
        + date * config.date_weight / total
        + reference * config.reference_weight / total
    )
    return max(0.0, min(1.0, confidence))
