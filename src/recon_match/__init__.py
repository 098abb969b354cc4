from .analytics import (
    MatchingMetrics,
    ScoreDistribution,
    ScoringAnalysis,
    analyze_scoring_factors,
    calculate_metrics,
    filter_by_confidence,
    find_ambiguous_matches,
    find_one_to_one_matches,
    group_by_invoice,
    group_by_transaction,
)
from .config import (
    DEFAULT_MATCHING_CONFIG,
    InvalidConfigurationError,
    MatchingConfig,
    load_config,
    resolve_config,
    validate_config,
)
from .match import MatchingStats, find_matches, find_top_matches, matching_stats, score_pair
from .models import Invoice, MatchBreakdown, MatchCandidate, Transaction
from .report import ExportedMatch, build_summary, candidates_to_frame, export_matches
from .standardize import standardize_invoices, standardize_transactions
from .suggest import ConfigurationSuggestion, suggest_configuration_adjustments
