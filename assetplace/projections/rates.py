"""
Growth-Rate Resolution

Which growth rate and income yield apply to a holding.

Resolution order:
1. The holding's own override (advanced-mode users set these)
2. The asset class default for the selected scenario
3. A hard default

Rates come back as decimals. Stored values are percentages.
"""

from typing import Optional, Union

from assetplace.models.holding import AssetClass, Holding
from assetplace.models.projection import GrowthScenario, ProjectionPeriod


# Used when an asset class leaves a scenario tier unset (percent)
SCENARIO_FALLBACK_RATES: dict[GrowthScenario, float] = {
    GrowthScenario.LOW: 2.0,
    GrowthScenario.MEDIUM: 5.0,
    GrowthScenario.HIGH: 8.0,
}

# Used when the holding has no asset class at all (decimal)
DEFAULT_GROWTH_RATE = 0.05

PERIOD_YEARS: dict[ProjectionPeriod, int] = {
    ProjectionPeriod.ANNUALLY: 1,
    ProjectionPeriod.FIVE_YEARS: 5,
    ProjectionPeriod.TEN_YEARS: 10,
    ProjectionPeriod.TWENTY_YEARS: 20,
    ProjectionPeriod.THIRTY_YEARS: 30,
}
DEFAULT_RETIREMENT_YEARS = 30
DEFAULT_PERIOD_YEARS = 10


def resolve_growth_rate(
    holding: Holding,
    asset_class: Optional[AssetClass],
    scenario: Union[GrowthScenario, str],
) -> float:
    """Annual growth rate (decimal) for a holding under a scenario."""
    if holding.growth_rate is not None:
        return holding.growth_rate / 100

    if asset_class is not None:
        try:
            scenario = GrowthScenario(scenario)
        except ValueError:
            scenario = GrowthScenario.MEDIUM
        if scenario == GrowthScenario.LOW:
            rate = asset_class.default_low_growth_rate
        elif scenario == GrowthScenario.HIGH:
            rate = asset_class.default_high_growth_rate
        else:
            # medium, and custom without a holding override
            scenario = GrowthScenario.MEDIUM
            rate = asset_class.default_medium_growth_rate

        if rate is None:
            rate = SCENARIO_FALLBACK_RATES[scenario]
        return rate / 100

    return DEFAULT_GROWTH_RATE


def resolve_income_yield(
    holding: Holding,
    asset_class: Optional[AssetClass],
) -> float:
    """Annual income yield (decimal): override, class default, else none."""
    if holding.income_yield is not None:
        return holding.income_yield / 100

    if asset_class is not None and asset_class.default_income_yield is not None:
        return asset_class.default_income_yield / 100

    return 0.0


def map_period_to_years(
    period: Union[ProjectionPeriod, str],
    retirement_age: Optional[int] = None,
    current_age: Optional[int] = None,
) -> int:
    """
    Number of years a named projection period covers.

    "retirement" runs until the target retirement age when both ages are
    known and retirement is not already behind the user; otherwise 30.
    Unrecognised periods give 10.
    """
    try:
        period = ProjectionPeriod(period)
    except ValueError:
        return DEFAULT_PERIOD_YEARS

    if period == ProjectionPeriod.RETIREMENT:
        if (
            retirement_age is not None
            and current_age is not None
            and retirement_age >= current_age
        ):
            return retirement_age - current_age
        return DEFAULT_RETIREMENT_YEARS

    return PERIOD_YEARS[period]
