"""Unit tests for the Transaction record and Category parsing."""

import dataclasses
import datetime as dt
from decimal import Decimal

import pytest

from cardsim.engine.errors import ValidationError
from cardsim.engine.transaction import Category, Transaction, sort_transactions, to_amount


class TestCategory:

    @pytest.mark.parametrize("label, expected", [
        ("Groceries", Category.GROCERIES),
        ("  gas  ", Category.GAS),
        ("OTHER", Category.OTHER),
        ("payment", Category.PAYMENT),
        ("Unicorn", Category.OTHER),
        ("", Category.OTHER),
        (None, Category.OTHER),
        (Category.GAS, Category.GAS),
    ])
    def test_parse(self, label, expected):
        assert Category.parse(label) is expected


class TestAmounts:

    def test_half_up_at_construction(self):
        tx = Transaction(dt.date(2024, 1, 1), "Gas", Decimal("10.005"))
        assert tx.amount == Decimal("10.01")
        assert tx.amount.as_tuple().exponent == -2

    def test_float_and_int_inputs(self):
        assert Transaction(dt.date(2024, 1, 1), "Gas", 19.99).amount == Decimal("19.99")
        assert Transaction(dt.date(2024, 1, 1), "Gas", 600).amount == Decimal("600.00")

    def test_currency_symbol_string(self):
        assert to_amount(" $1,000 ".replace(",", "")) == Decimal("1000.00")

    def test_garbage_amount_rejected(self):
        with pytest.raises(ValidationError):
            to_amount("abc")

    @pytest.mark.parametrize("value", ["NaN", "sNaN", "Infinity", "-inf", float("nan")])
    def test_non_finite_amount_rejected(self, value):
        with pytest.raises(ValidationError):
            to_amount(value)


class TestTransaction:

    def test_category_normalized(self):
        tx = Transaction(dt.date(2024, 1, 15), "Groceries", Decimal("100"))
        assert tx.category is Category.GROCERIES
        assert tx.month_start == dt.date(2024, 1, 1)
        assert tx.is_payment is False

    def test_payment_flag(self):
        tx = Transaction(dt.date(2024, 1, 15), Category.PAYMENT, Decimal("50"))
        assert tx.is_payment is True

    @pytest.mark.parametrize("field", ["date", "category", "amount"])
    def test_missing_field_rejected(self, field):
        values = {"date": dt.date(2024, 1, 1), "category": "gas", "amount": Decimal("1")}
        values[field] = None
        with pytest.raises(ValidationError, match=field):
            Transaction(**values)

    def test_immutable(self):
        tx = Transaction(dt.date(2024, 1, 1), "gas", Decimal("1"))
        with pytest.raises(dataclasses.FrozenInstanceError):
            tx.amount = Decimal("2")  # type: ignore[misc]

    def test_sort_is_stable_on_ties(self):
        a = Transaction(dt.date(2024, 1, 5), "gas", Decimal("1"))
        b = Transaction(dt.date(2024, 1, 2), "other", Decimal("2"))
        c = Transaction(dt.date(2024, 1, 5), "groceries", Decimal("3"))
        assert sort_transactions([a, b, c]) == [b, a, c]
