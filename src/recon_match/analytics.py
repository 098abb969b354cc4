from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

import pandas as pd

from .models import MatchCandidate

Pair = Tuple[str, str]

SCORE_COLUMNS = ["amount_score", "date_score", "reference_score"]


def filter_by_confidence(candidates: Iterable[MatchCandidate],
                         min_confidence: float,
                         max_confidence: Optional[float] = None) -> List[MatchCandidate]:
    """Inclusive on both ends; no upper bound when max_confidence is None."""
    return [
        c for c in candidates
        if c.confidence_score >= min_confidence
        and (max_confidence is None or c.confidence_score <= max_confidence)
    ]


def _group(candidates: Iterable[MatchCandidate], key: str) -> Dict[str, List[MatchCandidate]]:
    grouped: Dict[str, List[MatchCandidate]] = defaultdict(list)
    for c in candidates:
        grouped[getattr(c, key)].append(c)
    for matches in grouped.values():
        matches.sort(key=lambda c: c.confidence_score, reverse=True)
    return dict(grouped)


def group_by_invoice(candidates: Iterable[MatchCandidate]) -> Dict[str, List[MatchCandidate]]:
    return _group(candidates, "invoice_id")


def group_by_transaction(candidates: Iterable[MatchCandidate]) -> Dict[str, List[MatchCandidate]]:
    return _group(candidates, "transaction_id")


def find_one_to_one_matches(candidates: Sequence[MatchCandidate]) -> List[MatchCandidate]:
    """Candidates whose invoice and transaction each appear exactly once. Safe to auto-reconcile."""
    by_invoice = group_by_invoice(candidates)
    by_txn = group_by_transaction(candidates)
    return [
        c for c in candidates
        if len(by_invoice[c.invoice_id]) == 1 and len(by_txn[c.transaction_id]) == 1
    ]


def find_ambiguous_matches(candidates: Sequence[MatchCandidate]) -> List[MatchCandidate]:
    """Candidates sharing an invoice or a transaction with another candidate. Needs manual review."""
    by_invoice = group_by_invoice(candidates)
    by_txn = group_by_transaction(candidates)
    return [
        c for c in candidates
        if len(by_invoice[c.invoice_id]) > 1 or len(by_txn[c.transaction_id]) > 1
    ]


@dataclass(frozen=True)
class MatchingMetrics:
    precision: float
    recall: float
    f1_score: float
    true_positives: int
    false_positives: int
    false_negatives: int


def calculate_metrics(proposed: Iterable[MatchCandidate], true_matches: Iterable[Pair]) -> MatchingMetrics:
    """
    Precision/recall of proposed candidates against ground-truth
    (invoice_id, transaction_id) pairs.
    """
    proposed_pairs = {c.pair for c in proposed}
    truth = set(true_matches)

    tp = len(proposed_pairs & truth)
    fp = len(proposed_pairs - truth)
    fn = len(truth - proposed_pairs)

    precision = tp / (tp + fp) if tp + fp else 0.0
    recall = tp / (tp + fn) if tp + fn else 0.0
    f1 = 2 * precision * recall / (precision + recall) if precision + recall else 0.0

    return MatchingMetrics(
        precision=precision,
        recall=recall,
        f1_score=f1,
        true_positives=tp,
        false_positives=fp,
        false_negatives=fn,
    )


@dataclass(frozen=True)
class ScoreDistribution:
    min: float = 0.0
    max: float = 0.0
    avg: float = 0.0


@dataclass(frozen=True)
class ScoringAnalysis:
    amount_score_influence: float = 0.0
    date_score_influence: float = 0.0
    reference_score_influence: float = 0.0
    amount_scores_distribution: ScoreDistribution = field(default_factory=ScoreDistribution)
    date_scores_distribution: ScoreDistribution = field(default_factory=ScoreDistribution)
    reference_scores_distribution: ScoreDistribution = field(default_factory=ScoreDistribution)


def analyze_scoring_factors(candidates: Sequence[MatchCandidate]) -> ScoringAnalysis:
    """
    Share of each factor in the summed scores, plus min/max/avg per factor.
    Empty input gives an all-zero analysis.
    """
    if not candidates:
        return ScoringAnalysis()

    scores = pd.DataFrame(
        [[c.amount_score, c.date_score, c.reference_score] for c in candidates],
        columns=SCORE_COLUMNS,
    )
    sums = scores.sum()
    stats = scores.agg(["min", "max", "mean"])
    grand_total = float(sums.sum())

    def share(col: str) -> float:
        return float(sums[col]) / grand_total if grand_total else 0.0

    def dist(col: str) -> ScoreDistribution:
        return ScoreDistribution(
            min=float(stats.at["min", col]),
            max=float(stats.at["max", col]),
            avg=float(stats.at["mean", col]),
        )

    return ScoringAnalysis(
        amount_score_influence=share("amount_score"),
        date_score_influence=share("date_score"),
        reference_score_influence=share("reference_score"),
        amount_scores_distribution=dist("amount_score"),
        date_scores_distribution=dist("date_score"),
        reference_scores_distribution=dist("reference_score"),
    )
