"""Financial projection package."""

from assetplace.projections.cashflow import (
    DEFAULT_LOAN_INTEREST_RATE,
    annual_amount,
    annual_expenses,
    annual_income,
    expense_to_value_ratio,
    group_expenses_by_category,
    monthly_expense_breakdown,
    monthly_interest_expense,
    total_annual_expenses,
)
from assetplace.projections.defaults import default_configuration, merge_configuration
from assetplace.projections.engine import (
    ProjectionEngine,
    filter_holdings,
    generate_projections,
    project_holding_value,
)
from assetplace.projections.rates import (
    map_period_to_years,
    resolve_growth_rate,
    resolve_income_yield,
)

__all__ = [
    "DEFAULT_LOAN_INTEREST_RATE",
    "annual_amount",
    "ProjectionEngine",
    "annual_expenses",
    "annual_income",
    "default_configuration",
    "expense_to_value_ratio",
    "filter_holdings",
    "generate_projections",
    "group_expenses_by_category",
    "map_period_to_years",
    "merge_configuration",
    "monthly_expense_breakdown",
    "monthly_interest_expense",
    "project_holding_value",
    "resolve_growth_rate",
    "resolve_income_yield",
    "total_annual_expenses",
]
