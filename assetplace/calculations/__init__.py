"""Time-value and amortization calculations."""

from assetplace.calculations.amortization import (
    AmortizationEntry,
    amortization_schedule,
    loan_payment,
    principal_and_interest_split,
)
from assetplace.calculations.time_value import (
    InvalidArgumentError,
    cagr,
    future_value,
    inflation_adjusted_value,
    present_value,
    required_periodic_savings,
)

__all__ = [
    "AmortizationEntry",
    "InvalidArgumentError",
    "amortization_schedule",
    "cagr",
    "future_value",
    "inflation_adjusted_value",
    "loan_payment",
    "present_value",
    "principal_and_interest_split",
    "required_periodic_savings",
]
