"""
Calculator configuration values and the reducers that edit them.

Configs are frozen; every setter returns a new config and leaves its input
untouched, so any earlier config can be kept around for undo or comparison.
Numeric setters take raw user input and normalize it through parse_number.
Negative values are accepted as entered.
"""

import uuid
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

from input_parsing import parse_number
from tiers import (
    TIER_DEFINITIONS,
    MarkupBucketId,
    ProductType,
    TierLabel,
)

DEFAULT_FUNDED_VOLUME = 50_000_000.0

DEFAULT_MARKUP_RATES = {
    MarkupBucketId.A: 1.0,
    MarkupBucketId.B: 2.0,
    MarkupBucketId.C: 3.0,
}

DEFAULT_MARKUP_SHARES = {
    MarkupBucketId.A: 40.0,
    MarkupBucketId.B: 30.0,
    MarkupBucketId.C: 30.0,
}

# Seed values for a freshly added product (all in %)
DEFAULT_PRODUCT_VALUES = {
    'apr': 18.0,
    'base_mdr': 3.0,
    'promo_mdr': 0.0,
    'funding_cost': 6.0,
    'loss_rate': 3.0,
    'servicing_cost': 1.5,
    'share_pct': 100.0,
}


# ---------------------------------------------------------------------------
# Page 1: take rate configuration
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Tier:
    id: str
    label: TierLabel
    baked_fee_pct: float


@dataclass(frozen=True)
class MarkupBucket:
    markup_rate_pct: float
    usage_share_pct: float


def default_tiers() -> Tuple[Tier, ...]:
    return tuple(
        Tier(id=definition.id, label=definition.label, baked_fee_pct=definition.default_baked_fee_pct)
        for definition in TIER_DEFINITIONS
    )


def default_markup_buckets() -> Dict[MarkupBucketId, MarkupBucket]:
    return {
        bucket: MarkupBucket(
            markup_rate_pct=DEFAULT_MARKUP_RATES[bucket],
            usage_share_pct=DEFAULT_MARKUP_SHARES[bucket],
        )
        for bucket in MarkupBucketId
    }


@dataclass(frozen=True)
class TakeRateConfig:
    tiers: Tuple[Tier, ...] = field(default_factory=default_tiers)
    markup_buckets: Mapping[MarkupBucketId, MarkupBucket] = field(default_factory=default_markup_buckets)
    funded_volume: float = DEFAULT_FUNDED_VOLUME

    def __post_init__(self):
        object.__setattr__(self, 'markup_buckets', MappingProxyType(dict(self.markup_buckets)))

    def __hash__(self):
        return hash((self.tiers, tuple(self.markup_buckets.items()), self.funded_volume))


def set_baked_fee(config: TakeRateConfig, tier_id: str, value: Any) -> TakeRateConfig:
    fee = parse_number(value)
    tiers = tuple(
        replace(tier, baked_fee_pct=fee) if tier.id == tier_id else tier
        for tier in config.tiers
    )
    return replace(config, tiers=tiers)


def _replace_bucket(config: TakeRateConfig, bucket: MarkupBucketId, **changes) -> TakeRateConfig:
    if bucket not in config.markup_buckets:
        return config
    buckets = dict(config.markup_buckets)
    buckets[bucket] = replace(buckets[bucket], **changes)
    return replace(config, markup_buckets=buckets)


def set_markup_rate(config: TakeRateConfig, bucket: MarkupBucketId, value: Any) -> TakeRateConfig:
    return _replace_bucket(config, bucket, markup_rate_pct=parse_number(value))


def set_usage_share(config: TakeRateConfig, bucket: MarkupBucketId, value: Any) -> TakeRateConfig:
    return _replace_bucket(config, bucket, usage_share_pct=parse_number(value))


def set_funded_volume(config: TakeRateConfig, value: Any) -> TakeRateConfig:
    return replace(config, funded_volume=parse_number(value))


# ---------------------------------------------------------------------------
# Page 2: lender product configuration
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Product:
    """
    A lending product offered within one tier.

    All rates are percentages. share_pct is the product's weight within its
    tier and is normalized against the tier total at aggregation time, so the
    shares in a tier do not have to add up to 100.
    """
    id: str
    name: str
    tier: TierLabel
    product_type: ProductType
    apr: float = DEFAULT_PRODUCT_VALUES['apr']
    base_mdr: float = DEFAULT_PRODUCT_VALUES['base_mdr']
    promo_mdr: float = DEFAULT_PRODUCT_VALUES['promo_mdr']
    funding_cost: float = DEFAULT_PRODUCT_VALUES['funding_cost']
    loss_rate: float = DEFAULT_PRODUCT_VALUES['loss_rate']
    servicing_cost: float = DEFAULT_PRODUCT_VALUES['servicing_cost']
    share_pct: float = DEFAULT_PRODUCT_VALUES['share_pct']


def default_products() -> Tuple[Product, ...]:
    """Starter product mix, one or two products per tier."""
    return (
        Product("p1", "Prime Installment", TierLabel.TIER_1, ProductType.RETAIL_INSTALLMENT,
                apr=12.0, base_mdr=2.0, promo_mdr=0.0, funding_cost=5.5, loss_rate=1.0,
                servicing_cost=1.0, share_pct=70.0),
        Product("p2", "Prime 0% Promo", TierLabel.TIER_1, ProductType.PROMOTIONAL_ZERO_APR,
                apr=0.0, base_mdr=4.0, promo_mdr=3.0, funding_cost=5.5, loss_rate=1.0,
                servicing_cost=1.0, share_pct=30.0),
        Product("p3", "Near-Prime Installment", TierLabel.TIER_2, ProductType.RETAIL_INSTALLMENT,
                apr=19.0, base_mdr=3.0, promo_mdr=0.0, funding_cost=6.0, loss_rate=3.0,
                servicing_cost=1.5, share_pct=100.0),
        Product("p4", "Deferred Interest 12M", TierLabel.TIER_3, ProductType.DEFERRED_INTEREST,
                apr=26.0, base_mdr=4.0, promo_mdr=1.0, funding_cost=6.5, loss_rate=6.0,
                servicing_cost=2.0, share_pct=100.0),
        Product("p5", "Lease-to-Own", TierLabel.TIER_4, ProductType.LEASE_TO_OWN,
                apr=30.0, base_mdr=5.0, promo_mdr=0.0, funding_cost=7.5, loss_rate=12.0,
                servicing_cost=3.0, share_pct=100.0),
    )


def default_planned_asks() -> Dict[TierLabel, float]:
    return {definition.label: 0.0 for definition in TIER_DEFINITIONS}


@dataclass(frozen=True)
class LenderConfig:
    products: Tuple[Product, ...] = field(default_factory=default_products)
    planned_asks: Mapping[TierLabel, float] = field(default_factory=default_planned_asks)

    def __post_init__(self):
        object.__setattr__(self, 'planned_asks', MappingProxyType(dict(self.planned_asks)))

    def __hash__(self):
        return hash((self.products, tuple(self.planned_asks.items())))


def new_product_id() -> str:
    return uuid.uuid4().hex[:12]


def add_product(
    config: LenderConfig,
    tier: TierLabel = TierLabel.TIER_1,
    product_type: ProductType = ProductType.RETAIL_INSTALLMENT,
    name: str = "New Product",
    product_id: Optional[str] = None
) -> LenderConfig:
    """Append a product seeded with default economics and a fresh id."""
    existing_ids = {product.id for product in config.products}
    if product_id is None or product_id in existing_ids:
        product_id = new_product_id()
        while product_id in existing_ids:
            product_id = new_product_id()

    product = Product(id=product_id, name=name, tier=tier, product_type=product_type)
    return replace(config, products=config.products + (product,))


def remove_product(config: LenderConfig, product_id: str) -> LenderConfig:
    products = tuple(product for product in config.products if product.id != product_id)
    return replace(config, products=products)


def _update_product(config: LenderConfig, product_id: str, **changes) -> LenderConfig:
    products = tuple(
        replace(product, **changes) if product.id == product_id else product
        for product in config.products
    )
    return replace(config, products=products)


def set_product_name(config: LenderConfig, product_id: str, name: str) -> LenderConfig:
    return _update_product(config, product_id, name=str(name))


def set_product_tier(config: LenderConfig, product_id: str, tier: TierLabel) -> LenderConfig:
    return _update_product(config, product_id, tier=TierLabel(tier))


def set_product_type(config: LenderConfig, product_id: str, product_type: ProductType) -> LenderConfig:
    return _update_product(config, product_id, product_type=ProductType(product_type))


def set_product_apr(config: LenderConfig, product_id: str, value: Any) -> LenderConfig:
    return _update_product(config, product_id, apr=parse_number(value))


def set_product_base_mdr(config: LenderConfig, product_id: str, value: Any) -> LenderConfig:
    return _update_product(config, product_id, base_mdr=parse_number(value))


def set_product_promo_mdr(config: LenderConfig, product_id: str, value: Any) -> LenderConfig:
    return _update_product(config, product_id, promo_mdr=parse_number(value))


def set_product_funding_cost(config: LenderConfig, product_id: str, value: Any) -> LenderConfig:
    return _update_product(config, product_id, funding_cost=parse_number(value))


def set_product_loss_rate(config: LenderConfig, product_id: str, value: Any) -> LenderConfig:
    return _update_product(config, product_id, loss_rate=parse_number(value))


def set_product_servicing_cost(config: LenderConfig, product_id: str, value: Any) -> LenderConfig:
    return _update_product(config, product_id, servicing_cost=parse_number(value))


def set_product_share(config: LenderConfig, product_id: str, value: Any) -> LenderConfig:
    return _update_product(config, product_id, share_pct=parse_number(value))


def set_planned_ask(config: LenderConfig, tier: TierLabel, value: Any) -> LenderConfig:
    try:
        tier = TierLabel(tier)
    except ValueError:
        return config
    asks = dict(config.planned_asks)
    asks[tier] = parse_number(value)
    return replace(config, planned_asks=asks)
