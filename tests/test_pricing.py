import pytest

from utils.pricing import price_breakdown, total_price

TIERS = {1: 150000, 2: 300000, 3: 400000}
CATALOG = {
    1: {"name": "Backdrop", "price": 50000},
    2: {"name": "Lighting Kit", "price": 75000},
}


def test_price_scenario():
    assert total_price(2, True, 150000, TIERS, {1: 2}, CATALOG) == 550000


@pytest.mark.parametrize("extra_price", [0, 1, 150000, 999999])
@pytest.mark.parametrize("addons", [{}, {1: 1}, {1: 2, 2: 1}])
def test_additional_hour_is_strictly_additive(extra_price, addons):
    without = total_price(3, False, extra_price, TIERS, addons, CATALOG)
    assert total_price(3, True, extra_price, TIERS, addons, CATALOG) == without + extra_price


def test_unknown_duration_contributes_nothing():
    assert total_price(7, False, 150000, TIERS, {}, CATALOG) == 0


def test_zero_quantity_and_unknown_addons_are_skipped():
    assert total_price(1, False, 150000, TIERS, {1: 0, 2: 1, 99: 3}, CATALOG) == 150000 + 75000


def test_catalog_may_hold_plain_prices_or_rows():
    class Row:
        name = "Props"
        price = 20000

    assert total_price(1, False, 0, TIERS, {5: 1, 6: 2}, {5: 10000, 6: Row()}) == 150000 + 10000 + 40000


def test_breakdown_lines():
    breakdown = price_breakdown(2, True, 150000, TIERS, {2: 1, 1: 2}, CATALOG)
    assert breakdown.base == 300000
    assert breakdown.additional_hour == 150000
    assert breakdown.to_dict()["addons"] == [
        {"addon_id": 2, "name": "Lighting Kit", "unit_price": 75000, "quantity": 1, "subtotal": 75000},
        {"addon_id": 1, "name": "Backdrop", "unit_price": 50000, "quantity": 2, "subtotal": 100000},
    ]
    assert breakdown.to_dict()["total"] == 625000
    assert isinstance(breakdown.total, int)
