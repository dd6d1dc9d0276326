"""
Tier, bucket and product-type definitions shared by both calculator pages
"""

from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class TierLabel(str, Enum):
    """The four FICO risk bands. Every product and planned ask references one of these."""

    TIER_1 = "Tier 1 – FICO 680–850"
    TIER_2 = "Tier 2 – FICO 640–679"
    TIER_3 = "Tier 3 – FICO 600–639"
    TIER_4 = "Tier 4 – FICO 550–599"


class ProductType(str, Enum):
    """Informational only; does not affect any computation."""

    RETAIL_INSTALLMENT = "Retail Installment"
    PROMOTIONAL_ZERO_APR = "Promotional 0% APR"
    DEFERRED_INTEREST = "Deferred Interest"
    LEASE_TO_OWN = "Lease-to-Own"
    REVOLVING_LINE = "Revolving Line"


class MarkupBucketId(str, Enum):
    A = "A"
    B = "B"
    C = "C"


class HealthLabel(str, Enum):
    VERY_STRONG = "Very Strong"
    STRONG = "Strong"
    MODERATE = "Moderate"
    WEAK = "Weak"


class FeasibilityLabel(str, Enum):
    NOT_SUSTAINABLE = "Not Sustainable"
    TIGHT = "Tight – Defend Carefully"
    HEALTHY = "Healthy"


@dataclass(frozen=True)
class TierDefinition:
    """
    Fixed per-tier constants.

    residual_fraction is the portion of net yield the lender keeps regardless
    of what the platform asks for; suggested_baked_fee_pct is a soft guideline
    shown next to the editable baked fee.
    """
    id: str
    label: TierLabel
    default_baked_fee_pct: float
    suggested_baked_fee_pct: float
    residual_fraction: float

    @property
    def short_name(self) -> str:
        return f"T{self.id}"


TIER_DEFINITIONS: Tuple[TierDefinition, ...] = (
    TierDefinition("1", TierLabel.TIER_1, 0.25, 0.10, 0.80),
    TierDefinition("2", TierLabel.TIER_2, 0.75, 0.50, 0.70),
    TierDefinition("3", TierLabel.TIER_3, 1.50, 1.50, 0.60),
    TierDefinition("4", TierLabel.TIER_4, 2.50, 3.50, 0.50),
)


def tier_definition(label: TierLabel) -> TierDefinition:
    for definition in TIER_DEFINITIONS:
        if definition.label == label:
            return definition
    raise ValueError(f"Unknown risk tier: {label}")
