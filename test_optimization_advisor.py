"""
Test script to verify optimization suggestion branching
"""

from optimization_advisor import suggest_optimizations
from tiers import FeasibilityLabel, HealthLabel, TierLabel
from yield_share_engine import TierYieldSummary


def summary(residual_after_ask, planned_ask, stretch_ask=3.0, safe_ask=2.5):
    return TierYieldSummary(
        tier_label=TierLabel.TIER_2,
        product_count=1,
        weighted_nybp=residual_after_ask + planned_ask,
        health_label=HealthLabel.STRONG,
        shareable_yield=stretch_ask / 0.85,
        safe_ask=safe_ask,
        stretch_ask=stretch_ask,
        planned_ask=planned_ask,
        residual_after_ask=residual_after_ask,
        feasibility_label=FeasibilityLabel.TIGHT,
    )


def test_healthy_residual_keeps_current_ask():
    suggestions = suggest_optimizations(summary(residual_after_ask=2.0, planned_ask=1.0))

    assert len(suggestions) == 1
    assert "Maintain the current ask" in suggestions[0]


def test_ask_above_stretch_band_recommends_lowering():
    suggestions = suggest_optimizations(summary(residual_after_ask=1.5, planned_ask=4.0))

    assert len(suggestions) == 2
    assert "Review" in suggestions[0]
    assert "Lower it toward" in suggestions[1]


def test_ask_within_band_recommends_reallocating_share():
    suggestions = suggest_optimizations(summary(residual_after_ask=0.5, planned_ask=3.0))

    assert len(suggestions) == 2
    assert "Review" in suggestions[0]
    assert "Reallocate product share" in suggestions[1]


def test_suggestions_are_deterministic():
    tier_summary = summary(residual_after_ask=1.0, planned_ask=5.0)
    assert suggest_optimizations(tier_summary) == suggest_optimizations(tier_summary)
