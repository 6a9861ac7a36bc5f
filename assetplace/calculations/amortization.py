"""
Loan Amortization

Pure functions for level-payment loans. Rates are annual decimals.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict


class AmortizationEntry(BaseModel):
    """One period of an amortization schedule."""
    model_config = ConfigDict(frozen=True)

    period: int
    payment: float
    principal: float
    interest: float
    balance: float


def loan_payment(
    principal: float,
    rate: float,
    years: float,
    payments_per_year: int = 12,
) -> float:
    """
    Level periodic payment that retires `principal` over `years`.

    PMT = P * r * (1 + r)^n / ((1 + r)^n - 1), with r the periodic rate.
    A zero rate degrades to straight-line repayment.
    """
    number_of_payments = years * payments_per_year

    if rate == 0:
        return principal / number_of_payments

    periodic_rate = rate / payments_per_year
    factor = (1 + periodic_rate) ** number_of_payments
    return (principal * periodic_rate * factor) / (factor - 1)


def principal_and_interest_split(
    balance: float,
    rate: float,
    payment: float,
    payments_per_year: int = 12,
) -> tuple[float, float]:
    """
    Split one payment into its (principal, interest) portions.

    Interest accrues on the opening balance; the rest reduces principal.
    """
    interest = balance * rate / payments_per_year
    principal = payment - interest
    return principal, interest


def amortization_schedule(
    principal: float,
    rate: float,
    years: float,
    payments_per_year: int = 12,
    periods: Optional[int] = None,
) -> list[AmortizationEntry]:
    """
    Period-by-period schedule for a level-payment loan.

    Args:
        principal: Amount borrowed
        rate: Annual interest rate (decimal)
        years: Loan term in years
        payments_per_year: Payment frequency
        periods: How many periods to generate (defaults to the full term)

    The balance never goes below zero; the final payment shrinks to whatever
    is left, and the schedule stops as soon as the loan is repaid.
    """
    if periods is None:
        periods = int(round(years * payments_per_year))

    payment = loan_payment(principal, rate, years, payments_per_year)
    balance = principal
    schedule: list[AmortizationEntry] = []

    for period in range(1, periods + 1):
        principal_part, interest = principal_and_interest_split(
            balance, rate, payment, payments_per_year
        )
        principal_part = min(principal_part, balance)
        balance = max(0.0, balance - principal_part)

        schedule.append(AmortizationEntry(
            period=period,
            payment=principal_part + interest,
            principal=principal_part,
            interest=interest,
            balance=balance,
        ))

        if balance <= 0:
            break

    return schedule
