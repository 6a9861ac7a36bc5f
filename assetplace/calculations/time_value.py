"""
Time-Value-of-Money Functions

Pure functions: floats in, floats out. No I/O, no state, no logging.

All rates are annual decimals (0.05 for 5%), not percentages.
Converting stored percentages is the caller's job.
"""


class InvalidArgumentError(ValueError):
    """A calculation was asked for a value outside its domain."""
    pass


def future_value(
    present_value: float,
    rate: float,
    years: float,
    compounding_per_year: int = 1,
) -> float:
    """FV = PV * (1 + r/m)^(n*m)"""
    compound_rate = rate / compounding_per_year
    periods = years * compounding_per_year
    return present_value * (1 + compound_rate) ** periods


def present_value(
    future_value: float,
    rate: float,
    years: float,
    compounding_per_year: int = 1,
) -> float:
    """PV = FV / (1 + r/m)^(n*m)"""
    compound_rate = rate / compounding_per_year
    periods = years * compounding_per_year
    return future_value / (1 + compound_rate) ** periods


def cagr(initial_value: float, final_value: float, years: float) -> float:
    """
    Compound annual growth rate: (final / initial)^(1/years) - 1.

    Raises:
        InvalidArgumentError: If initial_value or years is not positive
    """
    if initial_value <= 0 or years <= 0:
        raise InvalidArgumentError(
            "Initial value and years must be positive numbers"
        )
    return (final_value / initial_value) ** (1 / years) - 1


def inflation_adjusted_value(
    value: float,
    inflation_rate: float,
    years: float,
) -> float:
    """Express a value `years` out in today's money."""
    return value / (1 + inflation_rate) ** years


def required_periodic_savings(
    goal: float,
    current_savings: float,
    years: float,
    expected_return: float,
    contributions_per_year: int = 12,
) -> float:
    """
    Contribution needed each period to reach `goal` in `years`.

    Current savings are compounded at the expected return; the remaining
    shortfall is covered by an ordinary annuity of equal contributions.
    Returns 0 when current savings alone already reach the goal.
    """
    periods = years * contributions_per_year

    grown_savings = future_value(
        current_savings,
        expected_return,
        years,
        contributions_per_year,
    )
    shortfall = goal - grown_savings
    if shortfall <= 0:
        return 0.0

    if expected_return == 0:
        return shortfall / periods

    periodic_rate = expected_return / contributions_per_year
    annuity_factor = ((1 + periodic_rate) ** periods - 1) / periodic_rate
    return shortfall / annuity_factor
