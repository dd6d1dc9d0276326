"""
Lender Yield & Share Engine - per-tier net yield, ask bands and feasibility
"""

import logging
from dataclasses import asdict, dataclass
from typing import List, Mapping, Sequence

import pandas as pd

from calculator_state import Product
from input_parsing import parse_number
from tiers import TIER_DEFINITIONS, FeasibilityLabel, HealthLabel, TierDefinition, TierLabel

logger = logging.getLogger(__name__)

# Inclusive lower bounds on weighted NYBP, checked highest first
HEALTH_BANDS = (
    (8.0, HealthLabel.VERY_STRONG),
    (5.0, HealthLabel.STRONG),
    (2.0, HealthLabel.MODERATE),
)

# Strict upper bounds on residual after ask, checked lowest first
FEASIBILITY_BANDS = (
    (1.0, FeasibilityLabel.NOT_SUSTAINABLE),
    (2.0, FeasibilityLabel.TIGHT),
)

SAFE_ASK_MULTIPLIER = 0.70
STRETCH_ASK_MULTIPLIER = 0.85


@dataclass(frozen=True)
class TierYieldSummary:
    tier_label: TierLabel
    product_count: int
    weighted_nybp: float
    health_label: HealthLabel
    shareable_yield: float
    safe_ask: float
    stretch_ask: float
    planned_ask: float
    residual_after_ask: float
    feasibility_label: FeasibilityLabel


def calculate_product_yield(product: Product) -> float:
    """
    Net Yield Before Partner (NYBP) for one product, in %.

    NYBP = APR + base MDR + promo MDR - funding cost - loss rate - servicing cost

    Missing or non-numeric fields count as 0.
    """
    return (
        parse_number(getattr(product, 'apr', 0.0))
        + parse_number(getattr(product, 'base_mdr', 0.0))
        + parse_number(getattr(product, 'promo_mdr', 0.0))
        - parse_number(getattr(product, 'funding_cost', 0.0))
        - parse_number(getattr(product, 'loss_rate', 0.0))
        - parse_number(getattr(product, 'servicing_cost', 0.0))
    )


def classify_health(weighted_nybp: float) -> HealthLabel:
    for lower_bound, label in HEALTH_BANDS:
        if weighted_nybp >= lower_bound:
            return label
    return HealthLabel.WEAK


def classify_feasibility(residual_after_ask: float) -> FeasibilityLabel:
    for upper_bound, label in FEASIBILITY_BANDS:
        if residual_after_ask < upper_bound:
            return label
    return FeasibilityLabel.HEALTHY


def aggregate_tier_summary(
    tier_definition: TierDefinition,
    products_in_tier: Sequence[Product],
    planned_ask: float
) -> TierYieldSummary:
    """
    Roll a tier's products up into one summary.

    Each product's NYBP is weighted by its share of the tier's total share.
    A tier whose shares total zero or less (including an empty tier) is
    normalized against 1, which gives a weighted NYBP of 0 rather than a
    division by zero.

    Args:
        tier_definition: Fixed tier constants (label, residual fraction)
        products_in_tier: Products belonging to this tier
        planned_ask: Proposed platform ask for the tier (%)

    Returns:
        TierYieldSummary for the tier
    """
    planned_ask = parse_number(planned_ask)
    shares = [parse_number(product.share_pct) for product in products_in_tier]

    total_share = sum(shares)
    if total_share <= 0:
        if products_in_tier:
            logger.debug(
                f"{tier_definition.label.value}: product shares total {total_share}, normalizing against 1"
            )
        total_share = 1.0

    weighted_nybp = sum(
        calculate_product_yield(product) * share / total_share
        for product, share in zip(products_in_tier, shares)
    )

    shareable_yield = weighted_nybp * (1 - tier_definition.residual_fraction)
    residual_after_ask = weighted_nybp - planned_ask

    return TierYieldSummary(
        tier_label=tier_definition.label,
        product_count=len(products_in_tier),
        weighted_nybp=weighted_nybp,
        health_label=classify_health(weighted_nybp),
        shareable_yield=shareable_yield,
        safe_ask=shareable_yield * SAFE_ASK_MULTIPLIER,
        stretch_ask=shareable_yield * STRETCH_ASK_MULTIPLIER,
        planned_ask=planned_ask,
        residual_after_ask=residual_after_ask,
        feasibility_label=classify_feasibility(residual_after_ask),
    )


def calculate_tier_summaries(
    products: Sequence[Product],
    planned_asks: Mapping[TierLabel, float],
    tier_definitions: Sequence[TierDefinition] = TIER_DEFINITIONS
) -> List[TierYieldSummary]:
    """
    One summary per tier definition, in definition order, whatever the product mix.

    Call again whenever the product list or a planned ask changes; the
    result is a derived view and is never edited directly.
    """
    summaries = []
    for definition in tier_definitions:
        products_in_tier = [product for product in products if product.tier == definition.label]
        planned_ask = planned_asks.get(definition.label, 0.0)
        summaries.append(aggregate_tier_summary(definition, products_in_tier, planned_ask))
    return summaries


def tier_summaries_frame(summaries: Sequence[TierYieldSummary]) -> pd.DataFrame:
    """Tabular view of tier summaries, one row per tier, labels as plain strings."""
    rows = []
    for summary in summaries:
        row = asdict(summary)
        row['tier_label'] = summary.tier_label.value
        row['health_label'] = summary.health_label.value
        row['feasibility_label'] = summary.feasibility_label.value
        rows.append(row)

    columns = [
        'tier_label', 'product_count', 'weighted_nybp', 'health_label', 'shareable_yield',
        'safe_ask', 'stretch_ask', 'planned_ask', 'residual_after_ask', 'feasibility_label',
    ]
    return pd.DataFrame(rows, columns=columns)


def products_frame(products: Sequence[Product]) -> pd.DataFrame:
    """Product table with each product's computed NYBP."""
    rows = []
    for product in products:
        row = asdict(product)
        row['tier'] = product.tier.value
        row['product_type'] = product.product_type.value
        row['nybp'] = calculate_product_yield(product)
        rows.append(row)

    columns = [
        'id', 'name', 'tier', 'product_type', 'apr', 'base_mdr', 'promo_mdr',
        'funding_cost', 'loss_rate', 'servicing_cost', 'share_pct', 'nybp',
    ]
    return pd.DataFrame(rows, columns=columns)
