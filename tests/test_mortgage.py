"""Tests for core mortgage calculations."""

import pytest
from src.mortgage import (
    AmortizationYear,
    calculate_amortization_schedule,
    calculate_monthly_payment,
    calculate_total_cost,
    calculate_total_interest,
    monthly_rate,
    schedule_to_dataframe,
)


class TestMonthlyPayment:
    """Tests for monthly payment calculation."""

    def test_monthly_payment_calculation(self):
        """Test standard amortization formula."""
        # 200,000 at 3% for 30 years
        payment = calculate_monthly_payment(200000, 3.0, 30)

        # Expected: ~843.21
        assert round(payment, 2) == 843.21

    def test_monthly_payment_zero_rate(self):
        """Test straight-line repayment at 0% interest."""
        payment = calculate_monthly_payment(120000, 0.0, 10)

        assert payment == 1000.0

    def test_negative_rate_is_straight_line(self):
        """Test that a negative rate is treated as zero interest."""
        assert calculate_monthly_payment(100000, -1.5, 10) == 100000 / 120

    @pytest.mark.parametrize("principal,years", [
        (0, 30),
        (-5000, 30),
        (200000, 0),
        (200000, -3),
    ])
    def test_degenerate_inputs_return_zero(self, principal, years):
        """Test that non-positive principal or term returns 0."""
        assert calculate_monthly_payment(principal, 3.0, years) == 0

    def test_higher_rate_means_higher_payment(self):
        """Test that payment grows with the rate."""
        low = calculate_monthly_payment(200000, 2.0, 25)
        high = calculate_monthly_payment(200000, 4.0, 25)

        assert high > low

    def test_monthly_rate_conversion(self):
        """Test annual percentage to monthly fraction."""
        assert monthly_rate(6.0) == pytest.approx(0.005)
        assert monthly_rate(0) == 0.0
        assert monthly_rate(-2) == 0.0


class TestTotals:
    """Tests for total cost and total interest."""

    def test_scenario_totals(self):
        """Test total cost and interest for 200,000 at 3% over 30 years."""
        payment = calculate_monthly_payment(200000, 3.0, 30)
        total = calculate_total_cost(payment, 30)
        interest = calculate_total_interest(200000, payment, 30)

        assert abs(total - 303555) < 1.5
        assert abs(interest - 103555) < 1.5

    def test_total_cost_is_payment_times_months(self):
        """Test total cost formula."""
        assert calculate_total_cost(1000, 15) == 180000

    @pytest.mark.parametrize("principal,payment,years", [
        (200000, 843.21, 30),
        (0, 0, 0),
        (-100, 50, 2),
        (100000, 2000, 5),
    ])
    def test_total_interest_identity(self, principal, payment, years):
        """Test that interest is always total cost minus principal."""
        assert calculate_total_interest(principal, payment, years) == (
            calculate_total_cost(payment, years) - principal
        )

    def test_15_year_vs_30_year(self):
        """Test that 15-year loan has higher payment but less total interest."""
        payment_30 = calculate_monthly_payment(300000, 3.5, 30)
        payment_15 = calculate_monthly_payment(300000, 3.5, 15)

        assert payment_15 > payment_30
        assert (
            calculate_total_interest(300000, payment_15, 15)
            < calculate_total_interest(300000, payment_30, 30)
        )


class TestAmortizationSchedule:
    """Tests for yearly amortization schedule."""

    @pytest.mark.parametrize("principal,years", [(0, 30), (-1, 30), (100000, 0)])
    def test_degenerate_inputs_return_empty(self, principal, years):
        """Test that non-positive principal or term gives no schedule."""
        assert calculate_amortization_schedule(principal, 3.0, years) == []

    def test_schedule_length(self):
        """Test that schedule has one row per year."""
        schedule = calculate_amortization_schedule(200000, 5.0, 15)

        assert len(schedule) == 15
        assert [entry.year for entry in schedule] == list(range(1, 16))

    def test_schedule_principal_sum(self):
        """Test that total principal paid equals original principal."""
        principal = 250000
        schedule = calculate_amortization_schedule(principal, 4.2, 25)
        total_principal = sum(entry.principal_paid for entry in schedule)

        assert abs(total_principal - principal) <= principal * 1e-6

    def test_schedule_final_balance(self):
        """Test that the loan is fully repaid in the last year."""
        principal = 250000
        schedule = calculate_amortization_schedule(principal, 5.5, 30)

        assert schedule[-1].remaining_balance <= principal * 1e-6

    def test_schedule_interest_matches_total_interest(self):
        """Test that yearly interest adds up to the closed-form total."""
        principal = 180000
        payment = calculate_monthly_payment(principal, 2.75, 20)
        schedule = calculate_amortization_schedule(principal, 2.75, 20)

        total_interest = sum(entry.interest_paid for entry in schedule)
        assert total_interest == pytest.approx(
            calculate_total_interest(principal, payment, 20), rel=1e-6
        )

    def test_balance_decreases(self):
        """Test that the balance goes down every year."""
        schedule = calculate_amortization_schedule(300000, 6.5, 30)
        balances = [entry.remaining_balance for entry in schedule]

        assert all(a > b for a, b in zip(balances, balances[1:]))

    def test_early_years_are_mostly_interest(self):
        """Test the usual shape of a long amortizing loan."""
        schedule = calculate_amortization_schedule(300000, 6.5, 30)

        assert schedule[0].interest_paid > schedule[0].principal_paid
        assert schedule[-1].principal_paid > schedule[-1].interest_paid

    def test_zero_rate_schedule(self):
        """Test 100,000 at 0% over 10 years."""
        schedule = calculate_amortization_schedule(100000, 0, 10)

        assert len(schedule) == 10
        for entry in schedule:
            assert entry.interest_paid == 0
            assert entry.principal_paid == pytest.approx(10000, abs=1e-6)
        assert schedule[-1].remaining_balance == pytest.approx(0, abs=1e-6)

    def test_no_negative_amounts(self):
        """Test that no year reports negative principal, interest or balance."""
        schedule = calculate_amortization_schedule(1000, 19.9, 50)

        for entry in schedule:
            assert entry.principal_paid >= 0
            assert entry.interest_paid >= 0
            assert entry.remaining_balance >= 0

    def test_returns_fresh_list_each_call(self):
        """Test that each call recomputes the schedule."""
        first = calculate_amortization_schedule(50000, 3.0, 5)
        second = calculate_amortization_schedule(50000, 3.0, 5)

        assert first == second
        assert first is not second


class TestScheduleToDataFrame:
    """Tests for DataFrame conversion."""

    def test_columns_and_derived_values(self):
        """Test payment and cumulative interest columns."""
        schedule = [
            AmortizationYear(year=1, principal_paid=900.0, interest_paid=100.0, remaining_balance=1100.0),
            AmortizationYear(year=2, principal_paid=950.0, interest_paid=50.0, remaining_balance=150.0),
        ]

        df = schedule_to_dataframe(schedule)

        assert list(df['year']) == [1, 2]
        assert list(df['payment']) == [1000.0, 1000.0]
        assert list(df['cumulative_interest']) == [100.0, 150.0]

    def test_empty_schedule(self):
        """Test that an empty schedule gives an empty frame with columns."""
        df = schedule_to_dataframe([])

        assert len(df) == 0
        assert 'remaining_balance' in df.columns
        assert 'payment' in df.columns
