"""
Projection Request Validation

DESIGN DECISION: A request is checked in two stages before the engine runs:

STAGE 1 - CONFIGURATION:
- Horizon within the configured maximum
- Inflation rate that can actually be discounted by

STAGE 2 - PORTFOLIO CONSISTENCY:
- Holdings pointing at asset classes or holding types that don't exist
- Allow-list ids that match no known class or type
- Liability flags that disagree with their asset class
- Loans recorded without an interest rate

Configuration problems are errors and block the run. Portfolio problems are
warnings: the engine has a defined fallback for each one, and the user
should see which fallback was taken.

IMPORTANT: Validation NEVER silently fixes issues.
It reports them for human review.
"""

from typing import Optional

from assetplace.config import get_settings
from assetplace.models.holding import (
    AssetClass,
    Holding,
    HoldingType,
    LoanDetails,
)
from assetplace.models.projection import ProjectionConfig
from assetplace.models.validation import ValidationIssue, ValidationResult
from assetplace.projections.cashflow import DEFAULT_LOAN_INTEREST_RATE


class ProjectionRequestValidator:
    """
    Validates a resolved configuration against the portfolio it will run on.

    Stage 1: Configuration checks (no portfolio needed)
    Stage 2: Portfolio consistency checks
    """

    def __init__(self, max_projection_years: Optional[int] = None):
        """
        Initialize validator.

        Args:
            max_projection_years: Longest horizon accepted.
                                  If None, read from settings.
        """
        if max_projection_years is None:
            max_projection_years = get_settings().projection.max_projection_years
        self._max_years = max_projection_years

    def _validate_config(self, config: ProjectionConfig) -> list[ValidationIssue]:
        """Stage 1: checks on the configuration alone."""
        issues = []

        if config.years_to_project > self._max_years:
            issues.append(ValidationIssue(
                field="years_to_project",
                issue_type="out_of_range",
                message=(
                    f"Projection horizon of {config.years_to_project} years exceeds "
                    f"the maximum of {self._max_years}"
                ),
                severity="error",
                suggested_fix=f"Choose {self._max_years} years or fewer",
            ))

        if config.inflation_rate <= -100:
            issues.append(ValidationIssue(
                field="inflation_rate",
                issue_type="out_of_range",
                message=f"Inflation rate ({config.inflation_rate}%) must be above -100%",
                severity="error",
            ))

        return issues

    def _validate_portfolio(
        self,
        config: ProjectionConfig,
        holdings: list[Holding],
        asset_classes: list[AssetClass],
        holding_types: list[HoldingType],
    ) -> list[ValidationIssue]:
        """Stage 2: checks on holdings and the reference data they use."""
        issues = []
        classes = {ac.id: ac for ac in asset_classes}
        type_ids = {ht.id for ht in holding_types}

        for class_id in config.enabled_asset_classes:
            if class_id not in classes:
                issues.append(ValidationIssue(
                    field="enabled_asset_classes",
                    issue_type="unknown_reference",
                    message=f"Asset class {class_id} does not exist",
                    severity="warning",
                ))

        for type_id in config.enabled_holding_types:
            if type_id not in type_ids:
                issues.append(ValidationIssue(
                    field="enabled_holding_types",
                    issue_type="unknown_reference",
                    message=f"Holding type {type_id} does not exist",
                    severity="warning",
                ))

        for holding in holdings:
            asset_class = classes.get(holding.asset_class_id)

            if asset_class is None:
                issues.append(ValidationIssue(
                    field="asset_class_id",
                    issue_type="unknown_reference",
                    message=(
                        f"'{holding.name}' refers to unknown asset class "
                        f"{holding.asset_class_id}; default growth rates apply"
                    ),
                    severity="warning",
                    holding_id=holding.id,
                ))
            elif asset_class.is_liability != holding.is_liability:
                issues.append(ValidationIssue(
                    field="is_liability",
                    issue_type="inconsistent",
                    message=(
                        f"'{holding.name}' is marked as "
                        f"{'a liability' if holding.is_liability else 'an asset'} "
                        f"but its asset class '{asset_class.name}' is not"
                    ),
                    severity="warning",
                    holding_id=holding.id,
                    suggested_fix="Check the liability flag on the holding",
                ))

            if holding.holding_type_id not in type_ids:
                issues.append(ValidationIssue(
                    field="holding_type_id",
                    issue_type="unknown_reference",
                    message=(
                        f"'{holding.name}' refers to unknown holding type "
                        f"{holding.holding_type_id}"
                    ),
                    severity="warning",
                    holding_id=holding.id,
                ))

            if isinstance(holding.details, LoanDetails) and holding.details.interest_rate is None:
                issues.append(ValidationIssue(
                    field="interest_rate",
                    issue_type="missing",
                    message=(
                        f"Loan '{holding.name}' has no interest rate; "
                        f"{DEFAULT_LOAN_INTEREST_RATE}% is assumed"
                    ),
                    severity="warning",
                    holding_id=holding.id,
                    suggested_fix="Enter the loan's interest rate",
                ))

        return issues

    def validate(
        self,
        config: ProjectionConfig,
        holdings: list[Holding],
        asset_classes: list[AssetClass],
        holding_types: list[HoldingType],
    ) -> ValidationResult:
        """
        Run both validation stages.

        Stage 2 runs even when stage 1 fails so that the user sees every
        problem in one pass.
        """
        issues = self._validate_config(config)
        issues.extend(
            self._validate_portfolio(config, holdings, asset_classes, holding_types)
        )
        return ValidationResult(issues=issues)
