"""
Test script to verify configuration reducers never mutate their input
"""

import pytest

from calculator_state import (
    DEFAULT_PRODUCT_VALUES,
    LenderConfig,
    TakeRateConfig,
    add_product,
    remove_product,
    set_baked_fee,
    set_funded_volume,
    set_markup_rate,
    set_planned_ask,
    set_product_apr,
    set_product_base_mdr,
    set_product_funding_cost,
    set_product_loss_rate,
    set_product_name,
    set_product_promo_mdr,
    set_product_servicing_cost,
    set_product_share,
    set_product_tier,
    set_product_type,
    set_usage_share,
)
from tiers import TIER_DEFINITIONS, MarkupBucketId, ProductType, TierLabel


def test_default_take_rate_config():
    config = TakeRateConfig()

    assert [tier.baked_fee_pct for tier in config.tiers] == [0.25, 0.75, 1.50, 2.50]
    assert config.markup_buckets[MarkupBucketId.A].usage_share_pct == 40
    assert config.funded_volume == 50_000_000


def test_set_baked_fee_returns_new_config():
    original = TakeRateConfig()
    updated = set_baked_fee(original, "2", "1.25")

    assert updated.tiers[1].baked_fee_pct == 1.25
    assert original.tiers[1].baked_fee_pct == 0.75


def test_set_baked_fee_invalid_input_becomes_zero():
    updated = set_baked_fee(TakeRateConfig(), "1", "abc")
    assert updated.tiers[0].baked_fee_pct == 0


def test_set_baked_fee_unknown_tier_is_noop():
    original = TakeRateConfig()
    assert set_baked_fee(original, "9", 5) == original


def test_markup_setters():
    original = TakeRateConfig()
    updated = set_markup_rate(original, MarkupBucketId.B, "2.75")
    updated = set_usage_share(updated, MarkupBucketId.C, "")

    assert updated.markup_buckets[MarkupBucketId.B].markup_rate_pct == 2.75
    assert updated.markup_buckets[MarkupBucketId.C].usage_share_pct == 0
    assert original.markup_buckets[MarkupBucketId.B].markup_rate_pct == 2.0
    assert original.markup_buckets[MarkupBucketId.C].usage_share_pct == 30


def test_set_funded_volume_accepts_thousands_separators():
    updated = set_funded_volume(TakeRateConfig(), "25,000,000")
    assert updated.funded_volume == 25_000_000


def test_add_product_uses_seeded_defaults_and_fresh_id():
    config = LenderConfig(products=())
    config = add_product(config, TierLabel.TIER_3)
    config = add_product(config, TierLabel.TIER_3)

    first, second = config.products
    assert first.id != second.id
    assert first.tier == TierLabel.TIER_3
    assert first.apr == DEFAULT_PRODUCT_VALUES['apr']
    assert first.share_pct == DEFAULT_PRODUCT_VALUES['share_pct']


def test_add_product_replaces_duplicate_id():
    config = add_product(LenderConfig(products=()), product_id="dup")
    config = add_product(config, product_id="dup")

    assert config.products[0].id == "dup"
    assert config.products[1].id != "dup"


def test_remove_product():
    config = add_product(LenderConfig(products=()), product_id="keep")
    config = add_product(config, product_id="drop")

    updated = remove_product(config, "drop")
    assert [p.id for p in updated.products] == ["keep"]
    assert remove_product(updated, "missing") == updated


def test_product_field_setters():
    config = add_product(LenderConfig(products=()), product_id="p")
    config = set_product_name(config, "p", "Renamed")
    config = set_product_tier(config, "p", TierLabel.TIER_4)
    config = set_product_type(config, "p", ProductType.LEASE_TO_OWN)
    config = set_product_apr(config, "p", "24")
    config = set_product_base_mdr(config, "p", 4)
    config = set_product_promo_mdr(config, "p", "1.5")
    config = set_product_funding_cost(config, "p", 7)
    config = set_product_loss_rate(config, "p", "n/a")
    config = set_product_servicing_cost(config, "p", 2.5)
    config = set_product_share(config, "p", "-10")

    product = config.products[0]
    assert product.name == "Renamed"
    assert product.tier == TierLabel.TIER_4
    assert product.product_type == ProductType.LEASE_TO_OWN
    assert product.apr == 24
    assert product.base_mdr == 4
    assert product.promo_mdr == 1.5
    assert product.funding_cost == 7
    assert product.loss_rate == 0
    assert product.servicing_cost == 2.5
    # Negative values are kept as entered
    assert product.share_pct == -10


def test_set_product_tier_rejects_unknown_label():
    config = add_product(LenderConfig(products=()), product_id="p")
    with pytest.raises(ValueError):
        set_product_tier(config, "p", "Tier 9")


def test_planned_asks_default_to_zero_and_persist_per_tier():
    original = LenderConfig()
    assert all(original.planned_asks[d.label] == 0 for d in TIER_DEFINITIONS)

    updated = set_planned_ask(original, TierLabel.TIER_2, "1.25")
    updated = set_planned_ask(updated, TierLabel.TIER_3, 0.5)

    assert updated.planned_asks[TierLabel.TIER_2] == 1.25
    assert updated.planned_asks[TierLabel.TIER_3] == 0.5
    assert original.planned_asks[TierLabel.TIER_2] == 0


def test_set_planned_ask_unknown_tier_is_noop():
    original = LenderConfig()
    assert set_planned_ask(original, "Tier 9", 1) == original


def test_configs_are_deeply_immutable_and_hashable():
    take_rate = TakeRateConfig()
    lender = LenderConfig()

    with pytest.raises(TypeError):
        take_rate.markup_buckets[MarkupBucketId.A] = None
    with pytest.raises(TypeError):
        lender.planned_asks[TierLabel.TIER_1] = 5.0

    assert hash(take_rate) == hash(TakeRateConfig())
    assert hash(lender) == hash(LenderConfig())
    assert len({take_rate, set_usage_share(take_rate, MarkupBucketId.A, 10)}) == 2
