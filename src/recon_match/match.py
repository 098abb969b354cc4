import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Sequence

from .config import ConfigLike, MatchingConfig, resolve_config, validate_config
from .models import Invoice, MatchBreakdown, MatchCandidate, Transaction
from .scoring import amount_score, compose_confidence, date_score, reference_score

logger = logging.getLogger(__name__)

HIGH_CONFIDENCE = 0.8
MEDIUM_CONFIDENCE = 0.5


def _by_confidence(candidates: Iterable[MatchCandidate]) -> List[MatchCandidate]:
    return sorted(candidates, key=lambda c: c.confidence_score, reverse=True)


def score_pair(invoice: Invoice, transaction: Transaction, config: MatchingConfig) -> MatchCandidate:
    """Scores one invoice/transaction pair regardless of the confidence threshold."""
    amount = amount_score(invoice.amount, transaction.amount, config)
    dates = date_score(invoice.date, transaction.date, config)
    reference = reference_score(invoice, transaction, config)
    confidence = compose_confidence(amount.score, dates.score, reference, config)

    return MatchCandidate(
        invoice_id=invoice.id,
        transaction_id=transaction.id,
        confidence_score=confidence,
        amount_score=amount.score,
        date_score=dates.score,
        reference_score=reference,
        breakdown=MatchBreakdown(
            amount_difference=amount.difference,
            date_difference=dates.difference,
            amount_match=amount.is_match,
            date_in_window=dates.in_window,
            reference_similarity=reference,
        ),
    )


def candidates_for_invoice(invoice: Invoice,
                           transactions: Sequence[Transaction],
                           config: MatchingConfig) -> List[MatchCandidate]:
    rows = []
    for t in transactions:
        candidate = score_pair(invoice, t, config)
        if candidate.confidence_score >= config.min_confidence_score:
            rows.append(candidate)

    logger.debug("invoice %s: %d of %d transactions above %.2f",
                 invoice.id, len(rows), len(transactions), config.min_confidence_score)
    return _by_confidence(rows)


def find_matches(invoices: Sequence[Invoice],
                 transactions: Sequence[Transaction],
                 config: ConfigLike = None) -> List[MatchCandidate]:
    """
    Scores every invoice x transaction pair and returns the candidates at or
    above min_confidence_score, highest confidence first.
    `config` may be a MatchingConfig or a mapping of partial overrides.
    """
    cfg = validate_config(resolve_config(config))
    transactions = list(transactions)

    rows: List[MatchCandidate] = []
    for inv in invoices:
        rows.extend(candidates_for_invoice(inv, transactions, cfg))

    logger.info("Matched %d invoices against %d transactions: %d candidates",
                len(invoices), len(transactions), len(rows))
    return _by_confidence(rows)


def find_top_matches(invoices: Sequence[Invoice],
                     transactions: Sequence[Transaction],
                     top_n: int = 3,
                     config: ConfigLike = None) -> Dict[str, List[MatchCandidate]]:
    """Best `top_n` candidates per invoice id; invoices with none map to an empty list."""
    cfg = validate_config(resolve_config(config))
    transactions = list(transactions)

    return {inv.id: candidates_for_invoice(inv, transactions, cfg)[:top_n] for inv in invoices}


@dataclass(frozen=True)
class ConfidenceDistribution:
    high: int = 0      # >= 0.8
    medium: int = 0    # 0.5 - 0.8
    low: int = 0       # < 0.5


@dataclass(frozen=True)
class MatchingStats:
    total_invoices: int
    total_transactions: int
    total_candidates: int
    average_confidence: float
    confidence_distribution: ConfidenceDistribution


def matching_stats(candidates: Sequence[MatchCandidate]) -> MatchingStats:
    high = medium = low = 0
    total_confidence = 0.0

    for c in candidates:
        total_confidence += c.confidence_score
        if c.confidence_score >= HIGH_CONFIDENCE:
            high += 1
        elif c.confidence_score >= MEDIUM_CONFIDENCE:
            medium += 1
        else:
            low += 1

    return MatchingStats(
        total_invoices=len({c.invoice_id for c in candidates}),
        total_transactions=len({c.transaction_id for c in candidates}),
        total_candidates=len(candidates),
        average_confidence=total_confidence / len(candidates) if candidates else 0.0,
        confidence_distribution=ConfidenceDistribution(high=high, medium=medium, low=low),
    )
