"""Unit tests for the interest models.

Reference numbers use the 10-digit daily rate for the purchase APR:
    0.3499 / 365 = 0.0009586301 (HALF_UP)
"""

import datetime as dt
from decimal import Decimal

import pytest

from cardsim.engine.errors import ValidationError
from cardsim.engine.interest import (
    InterestMethod,
    compute_average_daily_balance_interest,
    compute_daily_balance_interest,
    compute_interest,
    daily_balance_breakdown,
    daily_rate,
)

APR = Decimal("0.3499")
JAN_START, JAN_END = dt.date(2024, 1, 1), dt.date(2024, 1, 31)
FEB_START, FEB_END = dt.date(2024, 2, 1), dt.date(2024, 2, 29)


class TestDailyRate:

    def test_ten_fractional_digits(self):
        rate = daily_rate(APR)
        assert rate == Decimal("0.0009586301")
        assert rate.as_tuple().exponent == -10


class TestAverageDailyBalance:

    def test_thirty_one_day_month(self):
        """1000 × 0.0009586301 × 31 = 29.7175331 → 29.72."""
        interest = compute_average_daily_balance_interest(Decimal("1000.00"), APR, JAN_START, JAN_END)
        assert interest == Decimal("29.72")

    def test_leap_february(self):
        """1000 × 0.0009586301 × 29 = 27.8002729 → 27.80."""
        interest = compute_average_daily_balance_interest(Decimal("1000.00"), APR, FEB_START, FEB_END)
        assert interest == Decimal("27.80")

    def test_no_minimum_charge_applied(self):
        """The model itself does not apply the $2 floor; the simulator does."""
        interest = compute_average_daily_balance_interest(Decimal("2.50"), APR, JAN_START, JAN_END)
        assert interest == Decimal("0.07")

    def test_zero_and_credit_balance(self):
        assert compute_average_daily_balance_interest(Decimal("0"), APR, JAN_START, JAN_END) == 0
        assert compute_average_daily_balance_interest(Decimal("-50"), APR, JAN_START, JAN_END) == 0


class TestSynchronyDailyBalance:

    def test_compounds_above_simple_model(self):
        """1000 × ((1 + r)^31 − 1) ≈ 30.1488 → 30.15, above the 29.72 flat charge."""
        interest = compute_daily_balance_interest(Decimal("1000.00"), APR, JAN_START, JAN_END)
        assert interest == Decimal("30.15")

    def test_breakdown_one_entry_per_day(self):
        daily = daily_balance_breakdown(Decimal("1000.00"), APR, JAN_START, JAN_END)
        assert len(daily) == 31
        # First day accrues on the opening balance only
        assert daily[0] == Decimal("0.9586301000")
        # Compounding makes each day's accrual grow
        assert all(later > earlier for earlier, later in zip(daily, daily[1:]))

    def test_breakdown_sums_to_total(self):
        daily = daily_balance_breakdown(Decimal("1000.00"), APR, JAN_START, JAN_END)
        total = sum(daily, Decimal("0")).quantize(Decimal("0.01"))
        assert total == compute_daily_balance_interest(Decimal("1000.00"), APR, JAN_START, JAN_END)

    def test_minimum_charge(self):
        """$10 accrues about $0.30; raised to the $2.00 minimum."""
        interest = compute_daily_balance_interest(Decimal("10.00"), APR, JAN_START, JAN_END)
        assert interest == Decimal("2.00")

    def test_zero_balance_no_minimum(self):
        interest = compute_daily_balance_interest(Decimal("0.00"), APR, JAN_START, JAN_END)
        assert interest == Decimal("0.00")

    def test_credit_balance_accrues_nothing(self):
        daily = daily_balance_breakdown(Decimal("-25.00"), APR, JAN_START, JAN_END)
        assert all(d == 0 for d in daily)

    def test_single_day_cycle(self):
        daily = daily_balance_breakdown(Decimal("1000.00"), APR, JAN_START, JAN_START)
        assert len(daily) == 1

    def test_positive_interest_never_below_minimum(self):
        for balance in ["0.01", "1.00", "25.00", "60.00"]:
            interest = compute_daily_balance_interest(Decimal(balance), APR, JAN_START, JAN_END)
            assert interest >= Decimal("2.00")


class TestDispatch:

    def test_dispatches_each_method(self):
        bal = Decimal("1000.00")
        assert compute_interest(
            InterestMethod.SYNCHRONY_DAILY_BALANCE, bal, APR, JAN_START, JAN_END
        ) == Decimal("30.15")
        assert compute_interest(
            InterestMethod.AVERAGE_DAILY_BALANCE, bal, APR, JAN_START, JAN_END
        ) == Decimal("29.72")

    def test_unknown_method_rejected(self):
        with pytest.raises(ValidationError):
            compute_interest("simple", Decimal("1"), APR, JAN_START, JAN_END)

    @pytest.mark.parametrize("name, expected", [
        ("synchrony_daily_balance", InterestMethod.SYNCHRONY_DAILY_BALANCE),
        ("SYNCHRONY_DAILY_BALANCE", InterestMethod.SYNCHRONY_DAILY_BALANCE),
        (" average_daily_balance ", InterestMethod.AVERAGE_DAILY_BALANCE),
        (InterestMethod.AVERAGE_DAILY_BALANCE, InterestMethod.AVERAGE_DAILY_BALANCE),
    ])
    def test_parse(self, name, expected):
        assert InterestMethod.parse(name) is expected

    def test_parse_unknown(self):
        with pytest.raises(ValidationError, match="Unknown interest method"):
            InterestMethod.parse("compound_hourly")
