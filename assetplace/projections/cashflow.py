"""
Income and Expense Derivation

Annual income and annual expenses of a single holding, today.
The engine grows these numbers over time; this module only answers
"what does this holding earn and cost per year right now".

DESIGN DECISION: Income rules dispatch on the holding's kind tag.
Liabilities never earn income, but they can still cost money.
"""

from collections import defaultdict
from datetime import date
from typing import Iterable, Optional

from dateutil.relativedelta import relativedelta

from assetplace.calculations import loan_payment
from assetplace.models.holding import (
    FREQUENCY_MULTIPLIERS,
    PAYMENTS_PER_YEAR,
    AssetClass,
    BonusType,
    CashDetails,
    EmploymentDetails,
    Holding,
    LoanDetails,
    PaymentFrequency,
    PropertyDetails,
    RecurringExpense,
    RentalFrequency,
    ShareDetails,
)
from assetplace.projections.rates import resolve_income_yield


# Percent; applied to loans recorded without a rate
DEFAULT_LOAN_INTEREST_RATE = 5.0

RENTAL_PERIODS_PER_YEAR: dict[RentalFrequency, int] = {
    RentalFrequency.WEEKLY: 52,
    RentalFrequency.FORTNIGHTLY: 26,
    RentalFrequency.MONTHLY: 12,
}


# =============================================================================
# INCOME
# =============================================================================

def rental_income(details: PropertyDetails) -> float:
    """Annual rent after vacancy. Frequency defaults to monthly."""
    if not details.rental_income:
        return 0.0

    periods = RENTAL_PERIODS_PER_YEAR[details.rental_frequency or RentalFrequency.MONTHLY]
    annual = details.rental_income * periods

    if details.vacancy_rate and details.vacancy_rate > 0:
        annual *= 1 - details.vacancy_rate / 100

    return annual


def interest_income(value: float, details: CashDetails) -> float:
    """Simple annual interest on the account balance."""
    if not details.interest_rate:
        return 0.0
    return value * details.interest_rate / 100


def dividend_income(
    value: float,
    details: ShareDetails,
    as_of: Optional[date] = None,
) -> float:
    """
    Annual dividends.

    A stated dividend yield wins; otherwise dividends received in the
    twelve months up to `as_of` are summed.
    """
    if details.dividend_yield:
        return value * details.dividend_yield / 100

    if details.dividend_history:
        one_year_ago = (as_of or date.today()) - relativedelta(years=1)
        return sum(
            dividend.amount
            for dividend in details.dividend_history
            if dividend.paid_on >= one_year_ago
        )

    return 0.0


def employment_income(details: EmploymentDetails) -> float:
    """
    Annual salary plus expected bonus.

    Bonus likelihood below 100% scales the bonus down to its expected value.
    """
    if not details.base_salary:
        return 0.0

    frequency = details.payment_frequency or PaymentFrequency.ANNUALLY
    annual_salary = details.base_salary * PAYMENTS_PER_YEAR[frequency]

    fixed = details.bonus_fixed_amount or 0.0
    percentage = annual_salary * (details.bonus_percentage or 0.0) / 100

    if details.bonus_type == BonusType.FIXED:
        bonus = fixed
    elif details.bonus_type == BonusType.PERCENTAGE:
        bonus = percentage
    elif details.bonus_type == BonusType.MIXED:
        bonus = fixed + percentage
    else:
        bonus = 0.0

    if bonus > 0 and details.bonus_likelihood is not None and details.bonus_likelihood < 100:
        bonus *= details.bonus_likelihood / 100

    return annual_salary + bonus


def annual_income(
    holding: Holding,
    asset_class: Optional[AssetClass],
    as_of: Optional[date] = None,
) -> float:
    """
    Annual income a holding produces today.

    Property (rented), cash, shares and employment have their own rules.
    Everything else earns value x income yield.
    """
    if holding.is_liability:
        return 0.0

    details = holding.details

    if isinstance(details, PropertyDetails) and details.is_rental:
        return rental_income(details)
    if isinstance(details, CashDetails):
        return interest_income(holding.value, details)
    if isinstance(details, ShareDetails):
        return dividend_income(holding.value, details, as_of)
    if isinstance(details, EmploymentDetails):
        return employment_income(details)

    return holding.value * resolve_income_yield(holding, asset_class)


# =============================================================================
# EXPENSES
# =============================================================================

def loan_repayments(holding: Holding, details: LoanDetails) -> float:
    """
    Annual repayments on a loan.

    A recorded repayment amount is annualised by its frequency; otherwise
    the level payment is derived from the term.
    """
    if details.payment_amount:
        frequency = details.payment_frequency or PaymentFrequency.MONTHLY
        return details.payment_amount * PAYMENTS_PER_YEAR[frequency]

    if details.loan_term:
        principal = details.original_loan_amount or holding.balance
        rate = details.interest_rate
        if rate is None:
            rate = DEFAULT_LOAN_INTEREST_RATE
        return loan_payment(principal, rate / 100, details.loan_term / 12) * 12

    return 0.0


def annual_expenses(holding: Holding) -> float:
    """
    Annual running costs of a holding.

    Sums every recorded recurring expense (each already annualised), plus
    mortgage repayments for a mortgaged property and repayments on a loan.
    """
    details = holding.details
    total = 0.0

    for expense_map in details.expense_maps():
        for expense in expense_map.values():
            total += annual_amount(expense)

    if isinstance(details, PropertyDetails):
        mortgage = details.mortgage
        if mortgage is not None and mortgage.is_amortizing:
            monthly = loan_payment(
                mortgage.amount,
                mortgage.interest_rate / 100,
                mortgage.term_months / 12,
            )
            total += monthly * 12
    elif isinstance(details, LoanDetails):
        total += loan_repayments(holding, details)

    return total


# =============================================================================
# EXPENSE SUMMARIES
# =============================================================================

def annual_amount(expense: RecurringExpense) -> float:
    """Stored annual total, else amount x frequency multiplier."""
    if expense.annual_total is not None:
        return expense.annual_total
    return expense.amount * FREQUENCY_MULTIPLIERS[expense.frequency]


def total_annual_expenses(expenses: Iterable[RecurringExpense]) -> float:
    return sum(annual_amount(expense) for expense in expenses)


def group_expenses_by_category(
    expenses: Iterable[RecurringExpense],
) -> dict[str, float]:
    """Annual totals keyed by expense category."""
    grouped: dict[str, float] = defaultdict(float)
    for expense in expenses:
        grouped[expense.category_id] += annual_amount(expense)
    return dict(grouped)


def expense_to_value_ratio(
    expenses: Iterable[RecurringExpense],
    value: float,
) -> float:
    """Annual expenses as a percentage of the holding's value (0 if no value)."""
    if not value:
        return 0.0
    return total_annual_expenses(expenses) / value * 100


def monthly_expense_breakdown(expenses: Iterable[RecurringExpense]) -> float:
    """Average monthly cost: the annual total spread over 12 months."""
    return total_annual_expenses(expenses) / 12


def monthly_interest_expense(holding: Holding) -> float:
    """
    Interest-only cost of one month of debt on a holding.

    Property uses its embedded mortgage; loans use their outstanding
    balance. Nothing is charged when the amount or rate is missing.
    """
    details = holding.details
    if isinstance(details, PropertyDetails) and details.mortgage is not None:
        principal = details.mortgage.amount
        rate = details.mortgage.interest_rate
    elif isinstance(details, LoanDetails):
        principal = holding.balance
        rate = details.interest_rate
    else:
        return 0.0

    if not principal or not rate:
        return 0.0
    return principal * rate / 100 / 12
