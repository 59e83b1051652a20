"""
Test suite for currency module

Tests Money class, amount parsing, and proper Decimal handling.
All monetary calculations must use Decimal precision.
"""

import pytest
from decimal import Decimal

from atm_console.currency import (
    MAX_AMOUNT, Money, Currency, decimal_from_string, to_money
)


class TestCurrency:
    """Test Currency enum helpers"""

    def test_currency_attributes(self):
        assert Currency.USD.code == "USD"
        assert Currency.USD.precision == 2
        assert Currency.USD.symbol == "$"
        assert Currency.JPY.precision == 0
        assert Currency.USD.quantum == Decimal('0.01')

    def test_from_code(self):
        assert Currency.from_code("usd") is Currency.USD
        assert Currency.from_code(" GBP ") is Currency.GBP

        with pytest.raises(ValueError, match="Unsupported currency code"):
            Currency.from_code("XYZ")


class TestMoney:
    """Test Money class operations"""

    def test_money_creation(self):
        """Test Money object creation and rounding"""
        money = Money(Decimal('100.50'), Currency.USD)
        assert money.amount == Decimal('100.50')
        assert money.currency == Currency.USD

        # Automatic rounding to currency precision
        assert Money(Decimal('100.555'), Currency.USD).amount == Decimal('100.56')
        assert Money(Decimal('100.7'), Currency.JPY).amount == Decimal('101')

        # Non-Decimal input is converted
        assert Money(50, Currency.USD).amount == Decimal('50.00')

    def test_negative_zero_is_normalized(self):
        money = Money(Decimal('-0.001'), Currency.USD)
        assert money.is_zero()
        assert money.format_amount() == "0.00"

    def test_non_finite_rejected(self):
        with pytest.raises(ValueError, match="finite"):
            Money(Decimal('NaN'), Currency.USD)
        with pytest.raises(ValueError, match="finite"):
            Money(Decimal('Infinity'), Currency.USD)

    def test_out_of_range_rejected(self):
        with pytest.raises(ValueError, match="out of range"):
            Money(Decimal('1E+40'), Currency.USD)

    def test_money_arithmetic(self):
        money1 = Money(Decimal('100.50'), Currency.USD)
        money2 = Money(Decimal('50.25'), Currency.USD)

        assert (money1 + money2).amount == Decimal('150.75')
        assert (money1 - money2).amount == Decimal('50.25')

    def test_no_float_drift(self):
        """0.1 + 0.2 must be exactly 0.30"""
        total = Money(Decimal('0.1'), Currency.USD) + Money(Decimal('0.2'), Currency.USD)
        assert total == Money(Decimal('0.30'), Currency.USD)

    def test_money_comparison(self):
        money1 = Money(Decimal('100.00'), Currency.USD)
        money2 = Money(Decimal('50.00'), Currency.USD)
        money3 = Money(Decimal('100.00'), Currency.USD)

        assert money1 == money3
        assert money1 != money2
        assert money1 > money2
        assert money2 < money1
        assert money1 >= money3
        assert money1 <= money3
        assert money1 != Decimal('100.00')

    def test_money_currency_mismatch(self):
        usd_money = Money(Decimal('100.00'), Currency.USD)
        eur_money = Money(Decimal('100.00'), Currency.EUR)

        with pytest.raises(ValueError, match="Cannot add USD and EUR"):
            usd_money + eur_money

        with pytest.raises(ValueError, match="Cannot subtract EUR from USD"):
            usd_money - eur_money

        with pytest.raises(ValueError, match="Cannot compare USD and EUR"):
            usd_money < eur_money

    def test_money_state_checks(self):
        zero_money = Money.zero(Currency.USD)
        positive_money = Money(Decimal('100.50'), Currency.USD)
        negative_money = Money(Decimal('-50.25'), Currency.USD)

        assert zero_money.is_zero()
        assert not positive_money.is_zero()

        assert positive_money.is_positive()
        assert not zero_money.is_positive()

        assert negative_money.is_negative()
        assert not zero_money.is_negative()

    def test_money_string_formatting(self):
        money = Money(Decimal('1234.5'), Currency.USD)
        assert money.format_amount() == "1234.50"
        assert money.to_display() == "$1234.50"
        assert str(money) == "$1234.50"
        assert money.to_string() == "USD 1,234.50"

        assert Money(Decimal('1234'), Currency.JPY).to_display() == "¥1234"
        assert Money(Decimal('7'), Currency.GBP).to_display() == "£7.00"

    def test_maximum(self):
        assert Money.maximum(Currency.USD).amount == MAX_AMOUNT
        assert Money.maximum(Currency.USD).to_display() == "$1000000000000.00"
        assert Money.maximum(Currency.JPY) == Money(MAX_AMOUNT, Currency.JPY)

    def test_money_is_immutable(self):
        money = Money(Decimal('10.00'), Currency.USD)
        with pytest.raises(AttributeError):
            money.amount = Decimal('20.00')


class TestDecimalParsing:
    """Test user-entered amount parsing"""

    @pytest.mark.parametrize("text,expected", [
        ("50", Decimal('50')),
        ("  50.25 ", Decimal('50.25')),
        ("$75.10", Decimal('75.10')),
        ("1,250.50", Decimal('1250.50')),
        ("0", Decimal('0')),
        ("-5", Decimal('-5')),
        ("1e3", Decimal('1E+3')),
    ])
    def test_valid_strings(self, text, expected):
        assert decimal_from_string(text) == expected

    @pytest.mark.parametrize("text", ["", "   ", "abc", "12abc", "1.2.3", "NaN", "Infinity", "1,2",
                                      "1_000", "1,000_000", "١٢٣", "\uff15"])
    def test_invalid_strings(self, text):
        with pytest.raises(ValueError):
            decimal_from_string(text)

    def test_to_money_normalization(self):
        assert to_money("10.5", Currency.USD) == Money(Decimal('10.50'), Currency.USD)
        assert to_money(Decimal('3'), Currency.USD).amount == Decimal('3.00')
        assert to_money(7, Currency.USD).amount == Decimal('7.00')

        existing = Money(Decimal('1.00'), Currency.USD)
        assert to_money(existing, Currency.USD) is existing

    def test_to_money_rejects_float_and_foreign_currency(self):
        with pytest.raises(ValueError, match="float"):
            to_money(1.5, Currency.USD)
        with pytest.raises(ValueError, match="does not match"):
            to_money(Money(Decimal('1.00'), Currency.EUR), Currency.USD)
