"""
Default Projection Configuration

Builds the configuration a user starts from, and merges their
request-time overrides on top of it.
"""

from typing import Any, Optional, Union

from assetplace.config import get_settings
from assetplace.models.holding import SystemSettings, UserMode, UserProfile
from assetplace.models.projection import (
    GrowthScenario,
    ProjectionConfig,
    ProjectionPeriod,
)
from assetplace.projections.rates import map_period_to_years


def default_configuration(
    system_settings: Optional[SystemSettings],
    user_mode: Union[UserMode, str] = UserMode.BASIC,
) -> ProjectionConfig:
    """
    Starting configuration for a user.

    Basic mode projects the admin's basic horizon (else 10 years).
    Advanced mode projects the advanced horizon (else 30 years) and turns
    on after-tax calculation. Both include income and expenses, include
    liabilities, exclude hidden holdings and restrict nothing.
    """
    fallbacks = get_settings().projection
    system_settings = system_settings or SystemSettings()

    inflation_rate = system_settings.default_medium_inflation_rate
    if inflation_rate is None:
        inflation_rate = fallbacks.fallback_inflation_rate

    if UserMode(user_mode) == UserMode.ADVANCED:
        years = system_settings.default_advanced_mode_years or fallbacks.fallback_advanced_mode_years
        period = ProjectionPeriod.THIRTY_YEARS
        after_tax = True
    else:
        years = system_settings.default_basic_mode_years or fallbacks.fallback_basic_mode_years
        period = ProjectionPeriod.TEN_YEARS
        after_tax = False

    return ProjectionConfig(
        inflation_rate=inflation_rate,
        growth_rate_scenario=GrowthScenario.MEDIUM,
        include_income=True,
        include_expenses=True,
        period=period,
        reinvest_income=False,
        years_to_project=years,
        enabled_asset_classes=(),
        enabled_holding_types=(),
        include_hidden_holdings=False,
        exclude_liabilities=False,
        calculate_after_tax=after_tax,
    )


def merge_configuration(
    defaults: ProjectionConfig,
    overrides: Optional[dict[str, Any]] = None,
    user: Optional[UserProfile] = None,
) -> ProjectionConfig:
    """
    Apply caller overrides on top of a default configuration.

    When the caller picks a period without saying how many years, the year
    count follows the period (using the user's ages for "retirement").

    Raises:
        pydantic.ValidationError: If an override has an invalid value
    """
    overrides = dict(overrides or {})

    if "period" in overrides and "years_to_project" not in overrides:
        overrides["years_to_project"] = map_period_to_years(
            overrides["period"],
            retirement_age=user.target_retirement_age if user else None,
            current_age=user.age if user else None,
        )

    merged = defaults.model_dump()
    merged.update(overrides)
    return ProjectionConfig.model_validate(merged)
