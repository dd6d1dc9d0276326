"""
Rule-based optimization suggestions for a tier summary
"""

from typing import List

from yield_share_engine import FEASIBILITY_BANDS, TierYieldSummary

# Residual below this triggers a pricing review (the "Healthy" floor)
HEALTHY_RESIDUAL_FLOOR = FEASIBILITY_BANDS[-1][0]


def suggest_optimizations(summary: TierYieldSummary) -> List[str]:
    """
    One or two short recommendations, in display order.

    Residual under the healthy floor: review pricing, then either lower the
    ask (if it exceeds the stretch band) or shift share toward higher-yield
    products. Otherwise: keep the current ask.
    """
    if summary.residual_after_ask >= HEALTHY_RESIDUAL_FLOOR:
        return [
            f"Residual of {summary.residual_after_ask:.2f}% is healthy. "
            f"Maintain the current ask of {summary.planned_ask:.2f}%."
        ]

    suggestions = [
        f"Residual after ask is only {summary.residual_after_ask:.2f}%. "
        "Review APR, MDR and cost assumptions for this tier."
    ]
    if summary.planned_ask > summary.stretch_ask:
        suggestions.append(
            f"Planned ask of {summary.planned_ask:.2f}% is above the stretch band. "
            f"Lower it toward {summary.safe_ask:.2f}%–{summary.stretch_ask:.2f}%."
        )
    else:
        suggestions.append(
            "Reallocate product share toward higher-yield products in this tier."
        )
    return suggestions
