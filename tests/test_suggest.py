from recon_match.models import MatchBreakdown, MatchCandidate
from recon_match.suggest import suggest_configuration_adjustments


def cand(amount, dt, ref):
    return MatchCandidate("I1", "T1", 0.6, amount, dt, ref, MatchBreakdown(0.0, 0, True, True, ref))


def test_no_candidates():
    rows = suggest_configuration_adjustments([], 3, 2)
    assert len(rows) == 1
    assert rows[0].issue == "No matches found at all"


def test_healthy_run_has_no_advice():
    assert suggest_configuration_adjustments([cand(0.9, 0.9, 0.9)], 0, 0) == []


def test_weak_factors_flagged():
    rows = suggest_configuration_adjustments([cand(0.1, 0.2, 0.0)], 0, 0)
    assert [r.factor for r in rows] == ["amount", "date", "reference"]


def test_unmatched_counts_flagged():
    rows = suggest_configuration_adjustments([cand(0.9, 0.9, 0.9)], 4, 1)
    issues = [r.issue for r in rows]
    assert "4 invoices have no matches" in issues
    assert "1 transactions have no matches" in issues
