"""
Tests for growth-rate, yield and period resolution.
"""

import pytest

from assetplace.models import AssetClass, Holding, ProjectionPeriod
from assetplace.projections import (
    map_period_to_years,
    resolve_growth_rate,
    resolve_income_yield,
)


def make_holding(**overrides) -> Holding:
    fields = dict(
        id=1,
        user_id=1,
        name="Test Holding",
        asset_class_id=1,
        holding_type_id=1,
        value=10000,
    )
    fields.update(overrides)
    return Holding(**fields)


@pytest.fixture
def equities() -> AssetClass:
    return AssetClass(
        id=1,
        name="Equities",
        default_low_growth_rate=4.0,
        default_medium_growth_rate=7.0,
        default_high_growth_rate=10.0,
        default_income_yield=3.0,
    )


class TestResolveGrowthRate:
    """Tests for the override → class tier → default chain."""

    def test_holding_override_wins(self, equities):
        """A holding's own rate beats every class tier."""
        holding = make_holding(growth_rate=4.5)
        for scenario in ("low", "medium", "high", "custom"):
            assert resolve_growth_rate(holding, equities, scenario) == pytest.approx(0.045)

    def test_zero_override_is_respected(self, equities):
        """An explicit 0% override is not treated as missing."""
        holding = make_holding(growth_rate=0)
        assert resolve_growth_rate(holding, equities, "high") == 0

    def test_unknown_scenario_uses_medium_tier(self, equities):
        """An unrecognised scenario name falls back to the medium tier."""
        assert resolve_growth_rate(make_holding(), equities, "aggressive") == pytest.approx(0.07)

    @pytest.mark.parametrize("scenario, expected", [
        ("low", 0.04),
        ("medium", 0.07),
        ("high", 0.10),
    ])
    def test_class_tier_by_scenario(self, equities, scenario, expected):
        """Each scenario picks its own class tier."""
        assert resolve_growth_rate(make_holding(), equities, scenario) == pytest.approx(expected)

    def test_custom_scenario_uses_medium_tier(self, equities):
        """Custom without a holding override falls back to the medium tier."""
        assert resolve_growth_rate(make_holding(), equities, "custom") == pytest.approx(0.07)

    @pytest.mark.parametrize("scenario, expected", [
        ("low", 0.02),
        ("medium", 0.05),
        ("high", 0.08),
        ("custom", 0.05),
    ])
    def test_unset_tiers_fall_back(self, scenario, expected):
        """A class without tiers uses 2/5/8%."""
        bare = AssetClass(id=9, name="Collectibles")
        assert resolve_growth_rate(make_holding(), bare, scenario) == pytest.approx(expected)

    def test_no_asset_class(self):
        """Without a class the hard default of 5% applies."""
        assert resolve_growth_rate(make_holding(), None, "high") == pytest.approx(0.05)


class TestResolveIncomeYield:
    """Tests for income yield resolution."""

    def test_holding_override(self, equities):
        """A holding's yield beats the class default."""
        assert resolve_income_yield(make_holding(income_yield=5), equities) == pytest.approx(0.05)

    def test_class_default(self, equities):
        """The class default applies when the holding has none."""
        assert resolve_income_yield(make_holding(), equities) == pytest.approx(0.03)

    def test_no_yield_anywhere(self):
        """Nothing set means no income."""
        assert resolve_income_yield(make_holding(), None) == 0.0


class TestMapPeriodToYears:
    """Tests for named period → year count."""

    @pytest.mark.parametrize("period, years", [
        ("annually", 1),
        ("5-years", 5),
        ("10-years", 10),
        ("20-years", 20),
        (ProjectionPeriod.THIRTY_YEARS, 30),
    ])
    def test_fixed_periods(self, period, years):
        """Fixed periods map to their year counts."""
        assert map_period_to_years(period) == years

    def test_retirement_from_ages(self):
        """Retirement runs until the target retirement age."""
        assert map_period_to_years("retirement", retirement_age=65, current_age=40) == 25

    def test_retirement_this_year(self):
        """Already at retirement age gives a zero-year horizon."""
        assert map_period_to_years("retirement", retirement_age=60, current_age=60) == 0

    def test_retirement_already_passed(self):
        """Past retirement falls back to 30 years."""
        assert map_period_to_years("retirement", retirement_age=60, current_age=70) == 30

    def test_retirement_without_ages(self):
        """Unknown ages fall back to 30 years."""
        assert map_period_to_years("retirement") == 30
        assert map_period_to_years("retirement", retirement_age=65) == 30

    def test_unknown_period(self):
        """Unrecognised periods give 10 years."""
        assert map_period_to_years("fortnightly") == 10


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
