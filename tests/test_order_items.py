"""
Tests for order-item sanitizing (strict and padded policies).
"""

from decimal import Decimal

import pytest

from core.errors import InvalidInput
from core.services.order_items import (
    SanitizePolicy,
    explode,
    sanitize_order,
    sanitize_padded,
    sanitize_strict,
    to_minor_units,
)


class TestHelpers:
    def test_explode_trims(self):
        assert explode(" a, b ,c ") == ["a", "b", "c"]

    def test_explode_none(self):
        assert explode(None) == []

    def test_explode_sequence(self):
        assert explode(["x ", 2]) == ["x", "2"]

    def test_explode_number(self):
        assert explode(10.5) == ["10.5"]

    @pytest.mark.parametrize(
        "amount, expected",
        [("10.00", 1000), (19.99, 1999), ("0.005", 1), (Decimal("1.005"), 101), (3, 300)],
    )
    def test_to_minor_units(self, amount, expected):
        assert to_minor_units(amount) == expected


class TestStrict:
    def test_converts_prices(self):
        items = sanitize_strict("Widget, Gadget", "10.00, 4.5", "W-1, G-2")

        assert [(i.name, i.price, i.sku) for i in items] == [("Widget", 1000, "W-1"), ("Gadget", 450, "G-2")]

    def test_length_mismatch_fails(self):
        with pytest.raises(InvalidInput) as info:
            sanitize_strict("a,b", "1.00", "s1,s2")
        assert info.value.field == "items"

    def test_sku_mismatch_fails(self):
        with pytest.raises(InvalidInput):
            sanitize_strict("a,b", "1,2", "s1")

    def test_missing_skus_default(self):
        items = sanitize_strict("a,b", "1,2")
        assert [i.sku for i in items] == ["NA", "NA"]

    @pytest.mark.parametrize("price", ["abc", "", "-1", "nan"])
    def test_invalid_price_fails(self, price):
        with pytest.raises(InvalidInput) as info:
            sanitize_strict("a", price, "s")
        assert info.value.field == "price[0]"


class TestPadded:
    def test_pads_to_longest_list(self):
        items = sanitize_padded("Widget,Gadget,Thing", "10.00", "W-1")

        assert [(i.name, i.price, i.sku) for i in items] == [
            ("Widget", 1000, "W-1"),
            ("Gadget", 100, "NA"),
            ("Thing", 100, "NA"),
        ]

    def test_missing_names_default(self):
        items = sanitize_padded("", "5,6", None)
        assert [i.name for i in items] == ["No Name", "No Name"]

    def test_zero_and_garbage_prices_default_to_one_unit(self):
        items = sanitize_padded("a,b,c", "0,abc,2.50")
        assert [i.price for i in items] == [100, 100, 250]


class TestSanitizeOrder:
    def test_dispatches_on_policy(self):
        with pytest.raises(InvalidInput):
            sanitize_order("a,b", "1", None, SanitizePolicy.STRICT)
        assert len(sanitize_order("a,b", "1", None, "padded")) == 2

    def test_unknown_policy(self):
        with pytest.raises(ValueError):
            sanitize_order("a", "1", None, "lenient")

    def test_two_items_with_missing_price(self):
        items = sanitize_order("First,Second", "10.00,0", None, SanitizePolicy.PADDED)
        assert [i.price for i in items] == [1000, 100]


class TestOutOfRangePrices:
    def test_to_minor_units_rejects_huge_amount(self):
        with pytest.raises(InvalidInput) as info:
            to_minor_units("1e30")
        assert info.value.field == "price"

    def test_strict_rejects_huge_price(self):
        with pytest.raises(InvalidInput) as info:
            sanitize_order("Widget", "1e30", None, SanitizePolicy.STRICT)
        assert info.value.field == "price[0]"

    def test_padded_falls_back_to_default_price(self):
        items = sanitize_order("Widget", "1e30", None, SanitizePolicy.PADDED)
        assert [i.price for i in items] == [100]
