import json
from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Mapping, Union


class InvalidConfigurationError(ValueError):
    """Raised when a matching configuration cannot be used for scoring."""


@dataclass(frozen=True)
class MatchingConfig:
    # amount
    exact_amount_match: bool = False
    amount_tolerance: float = 0.02     # fraction of invoice amount (0.02 = 2%)
    amount_weight: float = 0.4

    # date
    date_window_days: int = 30         # days before/after invoice date
    date_weight: float = 0.3

    # reference / customer text
    reference_similarity_threshold: float = 0.5
    reference_weight: float = 0.3

    min_confidence_score: float = 0.5  # candidates below this are dropped

    def total_weight(self) -> float:
        return self.amount_weight + self.date_weight + self.reference_weight


DEFAULT_MATCHING_CONFIG = MatchingConfig()

_FIELD_NAMES = {f.name for f in fields(MatchingConfig)}

ConfigLike = Union[None, MatchingConfig, Mapping[str, Any]]


def validate_config(config: MatchingConfig) -> MatchingConfig:
    for name in ("amount_weight", "date_weight", "reference_weight"):
        if getattr(config, name) < 0:
            raise InvalidConfigurationError(f"{name} must not be negative, got {getattr(config, name)}")
    if config.total_weight() <= 0:
        raise InvalidConfigurationError("amount_weight + date_weight + reference_weight must be greater than 0")
    if config.date_window_days < 0:
        raise InvalidConfigurationError(f"date_window_days must not be negative, got {config.date_window_days}")
    if config.amount_tolerance < 0:
        raise InvalidConfigurationError(f"amount_tolerance must not be negative, got {config.amount_tolerance}")
    return config


def resolve_config(overrides: ConfigLike = None) -> MatchingConfig:
    """
    Returns a full MatchingConfig: defaults with only the supplied fields replaced.
    Accepts None, an existing MatchingConfig, or a mapping of partial overrides.
    """
    if overrides is None:
        return DEFAULT_MATCHING_CONFIG
    if isinstance(overrides, MatchingConfig):
        return overrides

    unknown = sorted(set(overrides) - _FIELD_NAMES)
    if unknown:
        raise InvalidConfigurationError(f"Unknown matching config fields: {unknown}")
    return replace(DEFAULT_MATCHING_CONFIG, **dict(overrides))


def load_config(path: str = "config/matching_config.json") -> MatchingConfig:
    with open(path, "r") as f:
        raw: Dict[str, Any] = json.load(f)

    d = DEFAULT_MATCHING_CONFIG
    return resolve_config({
        "exact_amount_match": bool(raw.get("exact_amount_match", d.exact_amount_match)),
        "amount_tolerance": float(raw.get("amount_tolerance", d.amount_tolerance)),
        "amount_weight": float(raw.get("amount_weight", d.amount_weight)),
        "date_window_days": int(raw.get("date_window_days", d.date_window_days)),
        "date_weight": float(raw.get("date_weight", d.date_weight)),
        "reference_similarity_threshold": float(
            raw.get("reference_similarity_threshold", d.reference_similarity_threshold)
        ),
        "reference_weight": float(raw.get("reference_weight", d.reference_weight)),
        "min_confidence_score": float(raw.get("min_confidence_score", d.min_confidence_score)),
    })

