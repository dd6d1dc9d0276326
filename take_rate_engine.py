"""
Blended Take Rate Engine - baked fees plus merchant markups
"""

import logging
from typing import Dict, Mapping, Sequence, Tuple

import numpy as np

from calculator_state import MarkupBucket, TakeRateConfig, Tier
from input_parsing import parse_number
from tiers import MarkupBucketId

logger = logging.getLogger(__name__)

# Illustrative funded-volume checkpoints for the revenue chart (not editable)
VOLUME_CHECKPOINTS = (10_000_000, 25_000_000, 50_000_000, 100_000_000)

REQUIRED_TOTAL_SHARE = 100


def calculate_average_baked_fee(tiers: Sequence[Tier]) -> float:
    """
    Arithmetic mean of the baked fee across tiers.

    Returns 0 for an empty tier list. No rounding is applied here.
    """
    if len(tiers) == 0:
        return 0.0
    total_fee = sum(parse_number(tier.baked_fee_pct) for tier in tiers)
    return total_fee / len(tiers)


def calculate_total_markup_share(buckets: Mapping[MarkupBucketId, MarkupBucket]) -> float:
    return sum(parse_number(bucket.usage_share_pct) for bucket in buckets.values())


def markup_shares_valid(buckets: Mapping[MarkupBucketId, MarkupBucket]) -> bool:
    """True when the usage shares add up to exactly 100 (no tolerance)."""
    return calculate_total_markup_share(buckets) == REQUIRED_TOTAL_SHARE


def calculate_blended_markup_rate(buckets: Mapping[MarkupBucketId, MarkupBucket]) -> float:
    """
    Share-weighted markup rate across buckets.

    An invalid share configuration returns 0 instead of a partial weighted sum,
    so a mid-edit state never shows a plausible but wrong rate.

    Args:
        buckets: Markup rate (%) and usage share (%) per bucket

    Returns:
        Blended markup rate (%), or 0 if the shares do not sum to 100
    """
    if not markup_shares_valid(buckets):
        logger.debug(
            f"Markup shares sum to {calculate_total_markup_share(buckets)}, not 100; blended markup set to 0"
        )
        return 0.0

    return sum(
        parse_number(bucket.markup_rate_pct) * parse_number(bucket.usage_share_pct) / 100
        for bucket in buckets.values()
    )


def calculate_total_blended_rate(avg_baked_fee: float, blended_markup: float) -> float:
    # Baked fee and markup are independent levers, so they simply add
    return parse_number(avg_baked_fee) + parse_number(blended_markup)


def project_revenue(funded_volume: float, total_blended_rate_pct: float) -> float:
    return parse_number(funded_volume) * parse_number(total_blended_rate_pct) / 100


def calculate_revenue_per_million(total_blended_rate_pct: float) -> float:
    return project_revenue(1_000_000, total_blended_rate_pct)


def project_revenue_checkpoints(
    total_blended_rate_pct: float,
    checkpoints: Sequence[float] = VOLUME_CHECKPOINTS
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Revenue at each reference volume, independent of the live funded volume.

    Returns:
        Tuple of (volumes, revenues)
    """
    volumes = np.array(checkpoints, dtype=float)
    revenues = volumes * parse_number(total_blended_rate_pct) / 100
    return volumes, revenues


def calculate_take_rate_composition(avg_baked_fee: float, blended_markup: float) -> Dict[str, float]:
    """
    Percentage of the total blended rate coming from each component.

    Both shares are 0 when the total rate is 0.
    """
    total = calculate_total_blended_rate(avg_baked_fee, blended_markup)
    if total == 0:
        return {'baked_fee_share': 0.0, 'markup_share': 0.0}

    return {
        'baked_fee_share': parse_number(avg_baked_fee) / total * 100,
        'markup_share': parse_number(blended_markup) / total * 100,
    }


def calculate_take_rate_summary(config: TakeRateConfig) -> Dict[str, float]:
    """
    Every Page 1 metric for one configuration.

    Returns:
        Dictionary with the blended take rate breakdown and revenue projection
    """
    avg_baked_fee = calculate_average_baked_fee(config.tiers)
    total_share = calculate_total_markup_share(config.markup_buckets)
    shares_valid = markup_shares_valid(config.markup_buckets)
    blended_markup = calculate_blended_markup_rate(config.markup_buckets)
    total_rate = calculate_total_blended_rate(avg_baked_fee, blended_markup)
    composition = calculate_take_rate_composition(avg_baked_fee, blended_markup)

    return {
        'avg_baked_fee': avg_baked_fee,
        'total_markup_share': total_share,
        'shares_valid': shares_valid,
        'blended_markup_rate': blended_markup,
        'total_blended_rate': total_rate,
        'funded_volume': parse_number(config.funded_volume),
        'expected_gross_revenue': project_revenue(config.funded_volume, total_rate),
        'revenue_per_million': calculate_revenue_per_million(total_rate),
        'baked_fee_share': composition['baked_fee_share'],
        'markup_share': composition['markup_share'],
    }
