import pytest

from print_quote.services import rates
from print_quote.services.rates import RateTable


def test_lookup_known_code():
    assert rates.PRODUCT_BASE_PRICE.lookup("flyer") == 5000
    assert rates.BINDING_BASE_PRICE.lookup("perfect") == 3000
    assert rates.DELIVERY_SPEED_MULTIPLIER.lookup("express") == 1.8


def test_fallback_code_used_for_unknown_and_missing():
    assert rates.PRODUCT_BASE_PRICE.lookup("unknown-thing") == 10000
    assert rates.PRODUCT_BASE_PRICE.lookup(None) == 10000
    assert rates.PAPER_MULTIPLIER.lookup("") == 1.0
    assert rates.DELIVERY_SPEED_MULTIPLIER.lookup("warp") == 1.0


def test_additive_tables_fall_back_to_zero():
    assert rates.COLOR_MODIFIER.lookup("ultraviolet") == 0
    assert rates.FINISHING_PRICE.total(["lamination", "sparkles", "none"]) == 2000
    assert rates.CERTIFICATION_PRICE.total(None) == 0


def test_tables_are_read_only():
    with pytest.raises(TypeError):
        rates.FINISHING_PRICE.rates["none"] = 99


def test_fallback_code_must_exist():
    with pytest.raises(ValueError):
        RateTable("broken", {"a": 1.0}, fallback_code="b")


def test_discount_schedule_strictly_increasing():
    thresholds = [t for t, _ in rates.QUANTITY_DISCOUNTS]
    tier_rates = [r for _, r in rates.QUANTITY_DISCOUNTS]
    assert thresholds == sorted(set(thresholds))
    assert tier_rates == sorted(set(tier_rates))
