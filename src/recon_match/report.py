from dataclasses import asdict, dataclass
from typing import Dict, List, Literal, Optional, Sequence

import pandas as pd

from .config import MatchingConfig, resolve_config
from .match import matching_stats
from .models import MatchCandidate

ReconciliationStatus = Literal["auto", "manual", "review"]

MANUAL_THRESHOLD = 0.7

FRAME_COLUMNS = [
    "invoice_id", "transaction_id", "confidence_score",
    "amount_score", "date_score", "reference_score",
    "amount_difference", "date_difference", "amount_match", "date_in_window",
    "reference_similarity", "reference_match",
]


@dataclass(frozen=True)
class ExportedMatch:
    invoice_id: str
    transaction_id: str
    confidence: float
    reconciliation_status: ReconciliationStatus
    notes: str


def candidates_to_frame(candidates: Sequence[MatchCandidate],
                        config: Optional[MatchingConfig] = None) -> pd.DataFrame:
    """One row per candidate, breakdown fields inlined as columns."""
    cfg = resolve_config(config)
    rows = []
    for c in candidates:
        b = c.breakdown
        rows.append({
            "invoice_id": c.invoice_id,
            "transaction_id": c.transaction_id,
            "confidence_score": c.confidence_score,
            "amount_score": c.amount_score,
            "date_score": c.date_score,
            "reference_score": c.reference_score,
            "amount_difference": b.amount_difference,
            "date_difference": b.date_difference,
            "amount_match": b.amount_match,
            "date_in_window": b.date_in_window,
            "reference_similarity": b.reference_similarity,
            "reference_match": c.reference_score >= cfg.reference_similarity_threshold,
        })
    return pd.DataFrame(rows, columns=FRAME_COLUMNS)


def _status(confidence: float, auto_approve_threshold: float) -> ReconciliationStatus:
    if confidence >= auto_approve_threshold:
        return "auto"
    if confidence >= MANUAL_THRESHOLD:
        return "manual"
    return "review"


def _notes(c: MatchCandidate) -> str:
    b = c.breakdown
    parts = [
        "Amount match" if b.amount_match else f"Amount diff: ${b.amount_difference:.2f}",
        "Date in window" if b.date_in_window else f"Date diff: {b.date_difference}d",
        f"Reference similarity: {b.reference_similarity * 100:.0f}%",
    ]
    return ", ".join(parts)


def export_matches(candidates: Sequence[MatchCandidate],
                   auto_approve_threshold: float = 0.9) -> List[ExportedMatch]:
    return [
        ExportedMatch(
            invoice_id=c.invoice_id,
            transaction_id=c.transaction_id,
            confidence=c.confidence_score,
            reconciliation_status=_status(c.confidence_score, auto_approve_threshold),
            notes=_notes(c),
        )
        for c in candidates
    ]


def build_summary(candidates: Sequence[MatchCandidate],
                  auto_approve_threshold: float = 0.9) -> Dict:
    stats = matching_stats(candidates)
    exported = pd.DataFrame([asdict(e) for e in export_matches(candidates, auto_approve_threshold)])

    return {
        "total_candidates": stats.total_candidates,
        "total_invoices": stats.total_invoices,
        "total_transactions": stats.total_transactions,
        "average_confidence": stats.average_confidence,
        "confidence_distribution": asdict(stats.confidence_distribution),
        "status_breakdown": (
            {k: int(v) for k, v in exported["reconciliation_status"].value_counts().items()}
            if len(exported) else {}
        ),
    }
