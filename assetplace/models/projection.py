"""
Projection Models

Input configuration and output result of a projection run.

DESIGN DECISION: ProjectionConfig is frozen. A run reads it many times
(per holding, per year) and must see the same values every time.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class GrowthScenario(str, Enum):
    """Which asset-class growth tier to apply."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CUSTOM = "custom"  # holding overrides only; classes fall back to medium


class ProjectionPeriod(str, Enum):
    """Named horizons offered to users."""
    ANNUALLY = "annually"
    FIVE_YEARS = "5-years"
    TEN_YEARS = "10-years"
    TWENTY_YEARS = "20-years"
    THIRTY_YEARS = "30-years"
    RETIREMENT = "retirement"


class ProjectionConfig(BaseModel):
    """
    Assumptions for a single projection run.

    Constructed per request from system defaults merged with caller
    overrides (see assetplace.projections.defaults).
    """
    model_config = ConfigDict(frozen=True, extra="forbid")

    inflation_rate: float = Field(
        default=2.5,
        description="Annual inflation (%); > 0 also turns on present-dollar output"
    )
    growth_rate_scenario: GrowthScenario = GrowthScenario.MEDIUM
    include_income: bool = True
    include_expenses: bool = True
    period: ProjectionPeriod = ProjectionPeriod.TEN_YEARS
    reinvest_income: bool = False
    years_to_project: int = Field(default=10, ge=0)

    # Empty means "no restriction"
    enabled_asset_classes: tuple[int, ...] = ()
    enabled_holding_types: tuple[int, ...] = ()

    include_hidden_holdings: bool = False
    exclude_liabilities: bool = False

    # Carried through for the tax layer; projections ignore it.
    calculate_after_tax: bool = False


class AssetClassSeries(BaseModel):
    """Net value of one asset class per year (liabilities negative)."""
    asset_class_id: int
    asset_class: str
    values: list[float]


class HoldingTypeSeries(BaseModel):
    """Net value of one holding type per year (liabilities negative)."""
    holding_type_id: int
    holding_type: str
    values: list[float]


class CashflowProjection(BaseModel):
    """Yearly income, expenses and their difference."""
    total_income: list[float]
    total_expenses: list[float]
    net_cashflow: list[float]


class ProjectionResult(BaseModel):
    """
    Year-indexed projection output.

    Every series has `years_to_project + 1` entries; index 0 is today.
    """
    total_asset_value: list[float]
    total_liability_value: list[float]
    net_worth: list[float]
    asset_breakdown: list[AssetClassSeries] = Field(default_factory=list)
    holding_type_breakdown: list[HoldingTypeSeries] = Field(default_factory=list)
    cashflow: CashflowProjection
    dates: list[str]
    inflation_adjusted: bool = False

    @property
    def years(self) -> int:
        """Number of projected years (excluding today)."""
        return len(self.dates) - 1

    def breakdown_for_class(self, asset_class_id: int) -> Optional[AssetClassSeries]:
        for series in self.asset_breakdown:
            if series.asset_class_id == asset_class_id:
                return series
        return None

    def breakdown_for_type(self, holding_type_id: int) -> Optional[HoldingTypeSeries]:
        for series in self.holding_type_breakdown:
            if series.holding_type_id == holding_type_id:
                return series
        return None
