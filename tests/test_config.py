import json

import pytest

from recon_match.config import (
    DEFAULT_MATCHING_CONFIG,
    InvalidConfigurationError,
    MatchingConfig,
    load_config,
    resolve_config,
    validate_config,
)


def test_defaults():
    cfg = DEFAULT_MATCHING_CONFIG
    assert cfg.exact_amount_match is False
    assert cfg.amount_tolerance == 0.02
    assert (cfg.amount_weight, cfg.date_weight, cfg.reference_weight) == (0.4, 0.3, 0.3)
    assert cfg.date_window_days == 30
    assert cfg.reference_similarity_threshold == 0.5
    assert cfg.min_confidence_score == 0.5


def test_partial_override_keeps_other_defaults():
    cfg = resolve_config({"date_window_days": 60, "min_confidence_score": 0.6})
    assert cfg.date_window_days == 60
    assert cfg.min_confidence_score == 0.6
    assert cfg.amount_weight == DEFAULT_MATCHING_CONFIG.amount_weight


def test_resolve_passthrough():
    cfg = MatchingConfig(amount_tolerance=0.1)
    assert resolve_config(cfg) is cfg
    assert resolve_config(None) == DEFAULT_MATCHING_CONFIG


def test_unknown_field():
    with pytest.raises(InvalidConfigurationError):
        resolve_config({"date_window": 10})


def test_invalid_configuration_is_value_error():
    assert issubclass(InvalidConfigurationError, ValueError)


@pytest.mark.parametrize("overrides", [
    {"amount_weight": 0, "date_weight": 0, "reference_weight": 0},
    {"amount_weight": -0.1},
    {"date_window_days": -1},
    {"amount_tolerance": -0.01},
])
def test_validate_rejects(overrides):
    with pytest.raises(InvalidConfigurationError):
        validate_config(resolve_config(overrides))


def test_weights_need_not_sum_to_one():
    cfg = resolve_config({"amount_weight": 4, "date_weight": 3, "reference_weight": 3})
    assert validate_config(cfg) is cfg


def test_load_config(tmp_path):
    path = tmp_path / "matching_config.json"
    path.write_text(json.dumps({"amount_tolerance": 0.05, "date_window_days": "45"}))

    cfg = load_config(str(path))

    assert cfg.amount_tolerance == 0.05
    assert cfg.date_window_days == 45
    assert cfg.reference_weight == 0.3
