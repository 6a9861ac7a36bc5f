"""
Tests for income and expense derivation.
"""

from datetime import date

import pytest

from assetplace.calculations import loan_payment
from assetplace.models import (
    AssetClass,
    CashDetails,
    DividendRecord,
    EmploymentDetails,
    ExpenseFrequency,
    GenericDetails,
    Holding,
    LoanDetails,
    MortgageDetails,
    PropertyDetails,
    RecurringExpense,
    ShareDetails,
)
from assetplace.projections import (
    annual_amount,
    annual_expenses,
    annual_income,
    expense_to_value_ratio,
    group_expenses_by_category,
    monthly_expense_breakdown,
    monthly_interest_expense,
    total_annual_expenses,
)


def make_holding(details, value=10000, **overrides) -> Holding:
    fields = dict(
        id=1,
        user_id=1,
        name="Test Holding",
        asset_class_id=1,
        holding_type_id=1,
        value=value,
        details=details,
    )
    fields.update(overrides)
    return Holding(**fields)


class TestIncome:
    """Tests for annual income by holding kind."""

    def test_rental_income_after_vacancy(self, rental_property):
        """2000 a month at 5% vacancy is 22800 a year."""
        assert annual_income(rental_property, None) == pytest.approx(22800)

    def test_weekly_rent(self):
        """Weekly rent is annualised over 52 weeks."""
        details = PropertyDetails(is_rental=True, rental_income=500, rental_frequency="weekly")
        assert annual_income(make_holding(details), None) == pytest.approx(26000)

    def test_owner_occupied_property_uses_yield(self):
        """A property that isn't rented earns only its income yield."""
        details = PropertyDetails(is_rental=False, rental_income=500)
        holding = make_holding(details, value=400000, income_yield=1)
        assert annual_income(holding, None) == pytest.approx(4000)

    def test_cash_interest(self, savings_account):
        """50000 at 2.5% earns 1250."""
        assert annual_income(savings_account, None) == pytest.approx(1250)

    def test_stated_dividend_yield(self):
        """A stated yield wins over dividend history."""
        details = ShareDetails(
            dividend_yield=4,
            dividend_history=[DividendRecord(paid_on=date(2024, 12, 1), amount=999)],
        )
        assert annual_income(make_holding(details), None) == pytest.approx(400)

    def test_trailing_dividends(self):
        """Without a yield, the last twelve months of dividends are summed."""
        details = ShareDetails(dividend_history=[
            DividendRecord(date=date(2024, 6, 29), amount=50),
            DividendRecord(date=date(2024, 7, 1), amount=100),
            DividendRecord(date=date(2025, 3, 1), amount=200),
        ])
        income = annual_income(make_holding(details), None, as_of=date(2025, 6, 30))
        assert income == pytest.approx(300)

    def test_salary_with_mixed_bonus(self):
        """Mixed bonus adds the fixed amount and the percentage."""
        details = EmploymentDetails(
            base_salary=100000,
            bonus_type="mixed",
            bonus_fixed_amount=5000,
            bonus_percentage=10,
        )
        assert annual_income(make_holding(details), None) == pytest.approx(115000)

    def test_bonus_scaled_by_likelihood(self):
        """A 50% likely bonus counts for half."""
        details = EmploymentDetails(
            base_salary=100000,
            bonus_type="mixed",
            bonus_fixed_amount=5000,
            bonus_percentage=10,
            bonus_likelihood=50,
        )
        assert annual_income(make_holding(details), None) == pytest.approx(107500)

    def test_monthly_salary(self):
        """A monthly salary is annualised over 12 payments."""
        details = EmploymentDetails(base_salary=8000, payment_frequency="monthly")
        assert annual_income(make_holding(details), None) == pytest.approx(96000)

    def test_generic_holding_uses_class_yield(self):
        """Other holdings earn value x class income yield."""
        asset_class = AssetClass(id=1, name="Super", default_income_yield=3)
        assert annual_income(make_holding(GenericDetails()), asset_class) == pytest.approx(300)

    def test_liabilities_earn_nothing(self, home_loan):
        """Debts never produce income."""
        debt = make_holding(GenericDetails(), value=5000, is_liability=True, income_yield=10)
        assert annual_income(home_loan, None) == 0.0
        assert annual_income(debt, None) == 0.0


class TestExpenses:
    """Tests for annual running costs."""

    def test_property_expenses_summed(self):
        """Recorded expenses are summed by their annual totals."""
        details = PropertyDetails(property_expenses={
            "rates": RecurringExpense(id="rates", category="council", amount=500, frequency="quarterly"),
            "insurance": RecurringExpense(id="insurance", category="insurance", amount=1200, frequency="annually"),
        })
        assert annual_expenses(make_holding(details)) == pytest.approx(3200)

    def test_mortgage_repayments_added(self):
        """An amortizing mortgage adds twelve monthly repayments."""
        details = PropertyDetails(mortgage=MortgageDetails(amount=200000, interest_rate=4.5))
        expected = loan_payment(200000, 0.045, 30) * 12
        assert annual_expenses(make_holding(details)) == pytest.approx(expected)

    def test_mortgage_without_rate_ignored(self):
        """A mortgage with no rate recorded adds nothing."""
        details = PropertyDetails(mortgage=MortgageDetails(amount=200000))
        assert annual_expenses(make_holding(details)) == 0.0

    def test_loan_recorded_repayment(self):
        """A recorded repayment is annualised by its frequency."""
        details = LoanDetails(payment_amount=700, payment_frequency="fortnightly")
        assert annual_expenses(make_holding(details, is_liability=True)) == pytest.approx(18200)

    def test_loan_repayment_defaults_to_monthly(self):
        """A repayment with no frequency is taken as monthly."""
        details = LoanDetails(payment_amount=1500)
        assert annual_expenses(make_holding(details, is_liability=True)) == pytest.approx(18000)

    def test_loan_repayment_derived_from_term(self, home_loan):
        """Without a recorded repayment, the level payment is derived."""
        expected = loan_payment(300000, 0.04, 30) * 12
        assert annual_expenses(home_loan) == pytest.approx(expected)

    def test_loan_without_rate_uses_default(self):
        """Loans with no rate are costed at 5%."""
        details = LoanDetails(loan_term=120, original_loan_amount=50000)
        expected = loan_payment(50000, 0.05, 10) * 12
        assert annual_expenses(make_holding(details, is_liability=True)) == pytest.approx(expected)

    def test_cash_has_no_expenses(self, savings_account):
        """Cash accounts carry no running costs."""
        assert annual_expenses(savings_account) == 0.0


class TestExpenseSummaries:
    """Tests for expense summary helpers."""

    @pytest.fixture
    def expenses(self) -> list[RecurringExpense]:
        return [
            RecurringExpense(id="a", category="insurance", amount=100, frequency="monthly"),
            RecurringExpense(id="b", category="insurance", amount=300, frequency="annually"),
            RecurringExpense(id="c", category="maintenance", amount=50, frequency="weekly"),
        ]

    def test_annual_total_filled(self, expenses):
        """Each expense carries its annualised amount."""
        assert [e.annual_total for e in expenses] == [1200, 300, 2600]

    def test_supplied_annual_total_kept(self):
        """A total from the upstream normaliser is not recomputed."""
        expense = RecurringExpense(id="x", amount=100, frequency="monthly", annual_total=999)
        assert expense.annual_total == 999

    def test_annual_amount_without_stored_total(self):
        """Unnormalised records are annualised on the fly."""
        expense = RecurringExpense.model_construct(
            id="x", amount=10, frequency=ExpenseFrequency.WEEKLY, annual_total=None,
        )
        assert annual_amount(expense) == 520

    def test_total(self, expenses):
        """Totals add up every annual amount."""
        assert total_annual_expenses(expenses) == pytest.approx(4100)

    def test_group_by_category(self, expenses):
        """Grouping sums within each category."""
        assert group_expenses_by_category(expenses) == {
            "insurance": pytest.approx(1500),
            "maintenance": pytest.approx(2600),
        }

    def test_ratio(self, expenses):
        """Expenses as a percentage of value."""
        assert expense_to_value_ratio(expenses, 41000) == pytest.approx(10)

    def test_ratio_zero_value(self, expenses):
        """Zero value gives a zero ratio, not a division error."""
        assert expense_to_value_ratio(expenses, 0) == 0.0

    def test_monthly_breakdown(self, expenses):
        """The monthly figure is a twelfth of the annual total."""
        assert monthly_expense_breakdown(expenses) == pytest.approx(4100 / 12)

    def test_monthly_interest_on_mortgage(self):
        """400000 at 6% costs 2000 of interest a month."""
        details = PropertyDetails(mortgage=MortgageDetails(amount=400000, interest_rate=6))
        assert monthly_interest_expense(make_holding(details)) == pytest.approx(2000)

    def test_monthly_interest_on_loan_balance(self):
        """Loans are charged on their outstanding balance."""
        details = LoanDetails(interest_rate=4.8)
        debt = make_holding(details, value=-50000, is_liability=True)
        assert monthly_interest_expense(debt) == pytest.approx(200)

    def test_monthly_interest_needs_amount_and_rate(self, savings_account):
        """Missing rates, missing mortgages and non-debts cost nothing."""
        no_rate = PropertyDetails(mortgage=MortgageDetails(amount=400000))
        assert monthly_interest_expense(make_holding(no_rate)) == 0.0
        assert monthly_interest_expense(make_holding(PropertyDetails())) == 0.0
        assert monthly_interest_expense(savings_account) == 0.0


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
