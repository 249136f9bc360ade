"""Core mortgage and amortization calculations.

All rates in this module are annual percentages (3.0 means 3%). Every
function is total over its numeric domain: degenerate inputs produce zero
results instead of raising, so a half-typed form never breaks a rerun.
"""

from dataclasses import asdict, dataclass
from typing import List

import pandas as pd


@dataclass
class AmortizationYear:
    """Principal and interest paid during one year of the loan."""

    year: int
    principal_paid: float
    interest_paid: float
    remaining_balance: float


def monthly_rate(annual_rate: float) -> float:
    """Convert an annual percentage rate to a monthly fractional rate."""
    if annual_rate <= 0:
        return 0.0
    return annual_rate / 100 / 12


def calculate_monthly_payment(principal: float, annual_rate: float, years: float) -> float:
    """Calculate monthly payment using standard amortization formula.

    M = P * [r(1+r)^n] / [(1+r)^n - 1]

    Returns 0 for a non-positive principal or term, and straight-line
    repayment for a non-positive rate.
    """
    if principal <= 0 or years <= 0:
        return 0.0
    if annual_rate <= 0:
        return principal / (years * 12)

    r = monthly_rate(annual_rate)
    n = years * 12
    factor = (1 + r)**n

    return principal * (r * factor) / (factor - 1)


def calculate_total_cost(monthly_payment: float, years: float) -> float:
    """Total amount paid over the life of the loan."""
    return monthly_payment * years * 12


def calculate_total_interest(principal: float, monthly_payment: float, years: float) -> float:
    """Total interest paid over the life of the loan."""
    return calculate_total_cost(monthly_payment, years) - principal


def calculate_amortization_schedule(
    principal: float,
    annual_rate: float,
    years: float,
) -> List[AmortizationYear]:
    """Generate a year-by-year amortization schedule.

    Months are simulated with a fixed payment and grouped per year. The
    principal portion is capped at the outstanding balance; once the balance
    is exhausted the remaining years are still emitted with zero amounts.
    """
    if principal <= 0 or years <= 0:
        return []

    r = monthly_rate(annual_rate)
    payment = calculate_monthly_payment(principal, annual_rate, years)
    balance = principal
    schedule = []

    for year in range(1, int(years) + 1):
        year_principal = 0.0
        year_interest = 0.0

        for _ in range(12):
            if balance <= 0:
                break
            interest = balance * r
            principal_paid = min(payment - interest, balance)
            year_interest += interest
            year_principal += principal_paid
            balance -= principal_paid

        schedule.append(AmortizationYear(
            year=year,
            principal_paid=year_principal,
            interest_paid=year_interest,
            remaining_balance=max(0.0, balance),
        ))

    return schedule


def schedule_to_dataframe(schedule: List[AmortizationYear]) -> pd.DataFrame:
    """Convert a schedule to a DataFrame for charts, tables and CSV export.

    Returns DataFrame with columns:
    - year: loan year (1-indexed)
    - principal_paid: principal repaid during the year
    - interest_paid: interest paid during the year
    - remaining_balance: balance left at the end of the year
    - payment: principal_paid + interest_paid
    - cumulative_interest: total interest paid to date
    """
    columns = ['year', 'principal_paid', 'interest_paid', 'remaining_balance']
    df = pd.DataFrame([asdict(entry) for entry in schedule], columns=columns)
    df['payment'] = df['principal_paid'] + df['interest_paid']
    df['cumulative_interest'] = df['interest_paid'].cumsum()
    return df
