"""
Projection Engine

DESIGN DECISION: Projection is DETERMINISTIC and side-effect free.
Given the same holdings, reference data, configuration and `as_of` date,
it returns the same numbers, down to the last bit. Nothing is cached;
every run recomputes the full trajectory.

The engine works in two passes:
1. Nominal simulation: each holding's value for each year comes from a pure
   per-holding function, and the yearly totals are summed fresh.
2. Inflation normalization: if inflation is positive, every series is
   discounted back to today's dollars.

Nominal growth and inflation discounting are never mixed mid-simulation.
"""

from datetime import date
from typing import Iterable, Mapping, Optional, Union

from assetplace.calculations import (
    future_value,
    inflation_adjusted_value,
    loan_payment,
    principal_and_interest_split,
)
from assetplace.models.holding import (
    AssetClass,
    Holding,
    HoldingType,
    LoanDetails,
)
from assetplace.models.projection import (
    AssetClassSeries,
    CashflowProjection,
    HoldingTypeSeries,
    ProjectionConfig,
    ProjectionResult,
)
from assetplace.projections.cashflow import (
    DEFAULT_LOAN_INTEREST_RATE,
    annual_expenses,
    annual_income,
)
from assetplace.projections.rates import resolve_growth_rate


UNKNOWN_NAME = "Unknown"


def filter_holdings(
    holdings: Iterable[Holding],
    config: ProjectionConfig,
) -> list[Holding]:
    """Holdings that take part in a projection under `config`."""
    selected = []
    for holding in holdings:
        if holding.is_hidden and not config.include_hidden_holdings:
            continue
        if holding.is_liability and config.exclude_liabilities:
            continue
        if (
            config.enabled_asset_classes
            and holding.asset_class_id not in config.enabled_asset_classes
        ):
            continue
        if (
            config.enabled_holding_types
            and holding.holding_type_id not in config.enabled_holding_types
        ):
            continue
        selected.append(holding)
    return selected


def months_between(start: date, end: date) -> int:
    """Whole calendar months from `start` to `end` (day of month ignored)."""
    return (end.year - start.year) * 12 + (end.month - start.month)


def amortized_balance(
    holding: Holding,
    loan: LoanDetails,
    year: int,
    as_of: date,
) -> float:
    """
    Outstanding balance of an amortizing loan `year` years after `as_of`.

    The loan is paid off once the projection reaches the end of its
    remaining term. Before that, repayments are simulated month by month
    from today's balance at the level payment implied by the original
    amount and full term.
    """
    elapsed = months_between(loan.start_date, as_of)
    remaining_term = max(0, loan.loan_term - elapsed)
    months_to_project = year * 12

    if months_to_project >= remaining_term:
        return 0.0

    rate = loan.interest_rate
    if rate is None:
        rate = DEFAULT_LOAN_INTEREST_RATE
    rate /= 100

    balance = holding.balance
    payment = loan_payment(
        loan.original_loan_amount or balance,
        rate,
        loan.loan_term / 12,
    )

    for _ in range(months_to_project):
        principal, _interest = principal_and_interest_split(balance, rate, payment)
        balance -= min(principal, balance)
        if balance <= 0:
            break

    return max(0.0, balance)


def project_holding_value(
    holding: Holding,
    asset_class: Optional[AssetClass],
    config: ProjectionConfig,
    year: int,
    as_of: date,
) -> float:
    """
    Nominal value of one holding `year` years from `as_of`.

    Liabilities come back as positive balances. Year 0 is today's value.

    NOTE: With income reinvestment on, only a single year's income is
    compounded forward (for year - 1 years). This approximates
    reinvestment; it does not accumulate reinvested income year on year.
    """
    if year == 0:
        return holding.balance

    growth_rate = resolve_growth_rate(holding, asset_class, config.growth_rate_scenario)

    if holding.is_liability:
        details = holding.details
        if isinstance(details, LoanDetails) and details.is_amortizing:
            return amortized_balance(holding, details, year, as_of)
        # Freeform debts may grow (or shrink) at their own rate
        return future_value(holding.balance, growth_rate, year)

    value = future_value(holding.value, growth_rate, year)

    if config.reinvest_income:
        income = annual_income(holding, asset_class, as_of)
        value += future_value(income, growth_rate, year - 1)

    return value


def project_holding_income(
    holding: Holding,
    asset_class: Optional[AssetClass],
    config: ProjectionConfig,
    year: int,
    as_of: date,
) -> float:
    """Income grows with the holding's own growth rate."""
    base = annual_income(holding, asset_class, as_of)
    if year == 0 or base == 0:
        return base
    growth_rate = resolve_growth_rate(holding, asset_class, config.growth_rate_scenario)
    return base * (1 + growth_rate) ** year


def project_holding_expenses(
    holding: Holding,
    config: ProjectionConfig,
    year: int,
) -> float:
    """Expenses grow with inflation, whatever the holding itself does."""
    base = annual_expenses(holding)
    return base * (1 + config.inflation_rate / 100) ** year


class ProjectionEngine:
    """
    Builds a ProjectionResult from holdings and a configuration.

    GUARANTEES:
    - Pure: no I/O, no logging, no shared state between runs
    - Every series has years_to_project + 1 entries
    - An empty (or fully filtered) portfolio gives all-zero series
    """

    def __init__(self, as_of: Optional[date] = None):
        """
        Args:
            as_of: The "today" of the projection. Drives year labels, loan
                   ages and the dividend window. Defaults to date.today().
        """
        self._as_of = as_of

    def run(
        self,
        holdings: Iterable[Holding],
        asset_classes: Mapping[int, AssetClass],
        holding_types: Mapping[int, HoldingType],
        config: ProjectionConfig,
    ) -> ProjectionResult:
        as_of = self._as_of or date.today()
        selected = filter_holdings(holdings, config)
        horizon = config.years_to_project + 1

        total_assets = [0.0] * horizon
        total_liabilities = [0.0] * horizon
        total_income = [0.0] * horizon
        total_expenses = [0.0] * horizon
        class_values: dict[int, list[float]] = {}
        type_values: dict[int, list[float]] = {}

        for holding in selected:
            class_values.setdefault(holding.asset_class_id, [0.0] * horizon)
            type_values.setdefault(holding.holding_type_id, [0.0] * horizon)

        for year in range(horizon):
            for holding in selected:
                asset_class = asset_classes.get(holding.asset_class_id)

                value = project_holding_value(holding, asset_class, config, year, as_of)
                if holding.is_liability:
                    total_liabilities[year] += value
                    signed = -value
                else:
                    total_assets[year] += value
                    signed = value

                class_values[holding.asset_class_id][year] += signed
                type_values[holding.holding_type_id][year] += signed

                if config.include_income:
                    total_income[year] += project_holding_income(
                        holding, asset_class, config, year, as_of
                    )
                if config.include_expenses:
                    total_expenses[year] += project_holding_expenses(holding, config, year)

        net_worth = [a - l for a, l in zip(total_assets, total_liabilities)]
        net_cashflow = [i - e for i, e in zip(total_income, total_expenses)]

        inflation_adjusted = config.inflation_rate > 0
        if inflation_adjusted:
            series = [
                total_assets,
                total_liabilities,
                net_worth,
                total_income,
                total_expenses,
                net_cashflow,
                *class_values.values(),
                *type_values.values(),
            ]
            self._deflate(series, config.inflation_rate / 100)

        return ProjectionResult(
            total_asset_value=total_assets,
            total_liability_value=total_liabilities,
            net_worth=net_worth,
            asset_breakdown=[
                AssetClassSeries(
                    asset_class_id=class_id,
                    asset_class=self._name_of(asset_classes, class_id),
                    values=values,
                )
                for class_id, values in class_values.items()
            ],
            holding_type_breakdown=[
                HoldingTypeSeries(
                    holding_type_id=type_id,
                    holding_type=self._name_of(holding_types, type_id),
                    values=values,
                )
                for type_id, values in type_values.items()
            ],
            cashflow=CashflowProjection(
                total_income=total_income,
                total_expenses=total_expenses,
                net_cashflow=net_cashflow,
            ),
            dates=[str(as_of.year + offset) for offset in range(horizon)],
            inflation_adjusted=inflation_adjusted,
        )

    @staticmethod
    def _deflate(series: list[list[float]], inflation_rate: float) -> None:
        """Convert nominal values to today's dollars, in place."""
        for values in series:
            for year in range(1, len(values)):
                values[year] = inflation_adjusted_value(values[year], inflation_rate, year)

    @staticmethod
    def _name_of(lookup: Mapping[int, Union[AssetClass, HoldingType]], key: int) -> str:
        entry = lookup.get(key)
        return entry.name if entry is not None else UNKNOWN_NAME


def generate_projections(
    holdings: Iterable[Holding],
    asset_classes: Mapping[int, AssetClass],
    holding_types: Mapping[int, HoldingType],
    config: ProjectionConfig,
    as_of: Optional[date] = None,
) -> ProjectionResult:
    """Run a projection with a throwaway engine."""
    return ProjectionEngine(as_of).run(holdings, asset_classes, holding_types, config)
