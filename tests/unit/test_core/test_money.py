#!/usr/bin/env python3
"""Tests for Money primitive type."""

import pytest

from ordersync.core.money import Money, sum_money


class TestMoneyConstruction:
    """Test Money class construction."""

    @pytest.mark.currency
    def test_from_cents(self):
        """Test creating Money from cents."""
        m = Money.from_cents(1234)
        assert m.to_cents() == 1234

    @pytest.mark.currency
    def test_from_dollars_string(self):
        """Test parsing from dollar strings."""
        assert Money.from_dollars("$12.34").to_cents() == 1234
        assert Money.from_dollars("12.34").to_cents() == 1234

    @pytest.mark.currency
    def test_from_dollars_int(self):
        """Test creating from integer dollars."""
        assert Money.from_dollars(12).to_cents() == 1200

    @pytest.mark.currency
    def test_from_float_rounds_to_nearest_cent(self):
        """Bank feeds report floats; 52.55 must stay 5255 cents."""
        assert Money.from_float(52.55).to_cents() == 5255
        assert Money.from_float(-103.27).to_cents() == -10327

    @pytest.mark.currency
    @pytest.mark.parametrize(
        "value,expected_cents",
        [
            ("103.27", 10327),
            (103.27, 10327),
            (103, 10300),
            (None, 0),
            (Money.from_cents(7), 7),
        ],
        ids=["string", "float", "int", "none", "money"],
    )
    def test_parse(self, value, expected_cents):
        """Test coercing raw JSON/CSV values."""
        assert Money.parse(value).to_cents() == expected_cents

    @pytest.mark.currency
    def test_parse_string_and_float_agree_on_fractional_cents(self):
        """A CSV string and a JSON float for the same amount give the same Money."""
        assert Money.parse("10.005") == Money.parse(10.005) == Money.from_cents(1001)
        assert Money.from_dollars("2.675") == Money.from_float(2.675)

    @pytest.mark.currency
    def test_zero(self):
        assert Money.zero().is_zero()
        assert not Money.from_cents(1).is_zero()


class TestMoneyArithmetic:
    """Test Money arithmetic operations."""

    @pytest.mark.currency
    def test_addition_and_subtraction(self):
        a = Money.from_cents(100)
        b = Money.from_cents(30)
        assert (a + b).to_cents() == 130
        assert (a - b).to_cents() == 70

    @pytest.mark.currency
    def test_multiplication(self):
        assert (Money.from_cents(50) * 3).to_cents() == 150

    @pytest.mark.currency
    def test_negation(self):
        assert (-Money.from_cents(50)).to_cents() == -50

    @pytest.mark.currency
    def test_with_sign(self):
        """with_sign keeps magnitude and applies the given direction."""
        assert Money.from_cents(1234).with_sign(-1).to_cents() == -1234
        assert Money.from_cents(-1234).with_sign(-1).to_cents() == -1234
        assert Money.from_cents(-1234).with_sign(1).to_cents() == 1234

    @pytest.mark.currency
    def test_sum_money(self):
        amounts = [Money.from_cents(5255), Money.from_cents(5072)]
        assert sum_money(amounts) == Money.from_cents(10327)
        assert sum_money([]) == Money.zero()


class TestMoneyComparison:
    """Test Money comparison operations."""

    @pytest.mark.currency
    def test_equality(self):
        """Test Money equality."""
        assert Money.from_cents(100) == Money.from_cents(100)
        assert Money.from_cents(100) != Money.from_cents(50)

    @pytest.mark.currency
    def test_comparison(self):
        """Test Money ordering."""
        small = Money.from_cents(50)
        large = Money.from_cents(100)

        assert small < large
        assert large > small
        assert small <= Money.from_cents(50)
        assert large >= Money.from_cents(100)

    @pytest.mark.currency
    def test_hashable(self):
        assert len({Money.from_cents(1), Money.from_cents(1), Money.from_cents(2)}) == 2


class TestMoneyImmutability:
    """Test Money immutability."""

    @pytest.mark.currency
    def test_frozen_dataclass(self):
        """Test Money is immutable."""
        m = Money.from_cents(100)
        with pytest.raises(AttributeError):
            m.cents = 200  # type: ignore


class TestMoneyFormatting:
    """Test Money display."""

    @pytest.mark.currency
    def test_str(self):
        assert str(Money.from_cents(10327)) == "$103.27"
        assert str(Money.from_cents(-1234)) == "-$12.34"
        assert str(Money.zero()) == "$0.00"

    @pytest.mark.currency
    def test_repr(self):
        assert repr(Money.from_cents(5)) == "Money(cents=5)"

    @pytest.mark.currency
    def test_to_float_for_json(self):
        assert Money.from_cents(10327).to_float() == 103.27
