from dataclasses import dataclass
from typing import List, Literal, Sequence

from .analytics import analyze_scoring_factors
from .models import MatchCandidate

Factor = Literal["amount", "date", "reference"]

LOW_AVERAGE_SCORE = 0.3
LOW_INFLUENCE = 0.1


@dataclass(frozen=True)
class ConfigurationSuggestion:
    factor: Factor
    issue: str
    suggestion: str
    recommended_change: str


def suggest_configuration_adjustments(candidates: Sequence[MatchCandidate],
                                      unmatched_invoices: int,
                                      unmatched_transactions: int) -> List[ConfigurationSuggestion]:
    """
    Advisory hints for tuning MatchingConfig from a run's results.
    Nothing here changes how matching behaves.
    """
    if not candidates:
        return [ConfigurationSuggestion(
            factor="amount",
            issue="No matches found at all",
            suggestion="Try increasing amount tolerance or date window",
            recommended_change="Increase amount_tolerance to 0.05-0.10",
        )]

    analysis = analyze_scoring_factors(candidates)
    rows = []

    if analysis.amount_scores_distribution.avg < LOW_AVERAGE_SCORE:
        rows.append(ConfigurationSuggestion(
            factor="amount",
            issue="Low average amount scores",
            suggestion="Consider increasing amount tolerance",
            recommended_change="Increase amount_tolerance by 1-2%",
        ))

    if analysis.date_scores_distribution.avg < LOW_AVERAGE_SCORE:
        rows.append(ConfigurationSuggestion(
            factor="date",
            issue="Low average date scores",
            suggestion="Consider increasing date window",
            recommended_change="Increase date_window_days by 10-20 days",
        ))

    if analysis.reference_score_influence < LOW_INFLUENCE:
        rows.append(ConfigurationSuggestion(
            factor="reference",
            issue="Reference matching has minimal influence",
            suggestion="Consider increasing reference weight for better clarity",
            recommended_change="Increase reference_weight from 0.3 to 0.4+",
        ))

    if unmatched_invoices > 0:
        rows.append(ConfigurationSuggestion(
            factor="amount",
            issue=f"{unmatched_invoices} invoices have no matches",
            suggestion="Relax matching thresholds to find more candidates",
            recommended_change="Lower min_confidence_score from 0.5 to 0.3-0.4",
        ))

    if unmatched_transactions > 0:
        rows.append(ConfigurationSuggestion(
            factor="date",
            issue=f"{unmatched_transactions} transactions have no matches",
            suggestion="Payments may land outside the date window",
            recommended_change="Increase date_window_days or lower min_confidence_score",
        ))

    return rows
