"""
Tests for projection request validation.
"""

import pytest

from assetplace.models import (
    GenericDetails,
    Holding,
    LoanDetails,
    ProjectionConfig,
    ValidationIssue,
    ValidationResult,
)
from assetplace.validation import ProjectionRequestValidator

from tests.conftest import CASH_CLASS_ID, LOAN_CLASS_ID, PERSONAL_TYPE_ID


@pytest.fixture
def validator() -> ProjectionRequestValidator:
    return ProjectionRequestValidator(max_projection_years=50)


class TestConfigurationChecks:
    """Stage 1: checks on the configuration alone."""

    def test_clean_request(self, validator, portfolio, asset_classes, holding_types):
        """A consistent portfolio and configuration raise nothing."""
        result = validator.validate(ProjectionConfig(), portfolio, asset_classes, holding_types)
        assert result.is_valid
        assert result.issues == []

    def test_horizon_at_maximum_allowed(self, validator):
        """The maximum itself is accepted."""
        result = validator.validate(ProjectionConfig(years_to_project=50), [], [], [])
        assert result.is_valid

    def test_horizon_too_long(self, validator):
        """Horizons beyond the maximum are errors."""
        result = validator.validate(ProjectionConfig(years_to_project=51), [], [], [])
        assert not result.is_valid
        assert result.errors[0].field == "years_to_project"

    def test_inflation_of_minus_100(self, validator):
        """Inflation at or below -100% can't be discounted by."""
        result = validator.validate(ProjectionConfig(inflation_rate=-100), [], [], [])
        assert not result.is_valid
        assert result.errors[0].field == "inflation_rate"

    def test_deflation_allowed(self, validator):
        """Negative inflation above -100% is fine."""
        result = validator.validate(ProjectionConfig(inflation_rate=-1.5), [], [], [])
        assert result.is_valid

    def test_maximum_from_settings(self):
        """Without an explicit maximum the configured one applies."""
        result = ProjectionRequestValidator().validate(
            ProjectionConfig(years_to_project=51), [], [], []
        )
        assert not result.is_valid


class TestPortfolioChecks:
    """Stage 2: portfolio consistency warnings."""

    def test_unknown_asset_class(self, validator, savings_account, holding_types):
        """Holdings pointing at a missing class are flagged."""
        result = validator.validate(ProjectionConfig(), [savings_account], [], holding_types)
        assert result.is_valid
        assert [w.field for w in result.warnings] == ["asset_class_id"]
        assert result.warnings[0].holding_id == savings_account.id

    def test_unknown_holding_type(self, validator, savings_account, asset_classes):
        """Holdings pointing at a missing type are flagged."""
        result = validator.validate(ProjectionConfig(), [savings_account], asset_classes, [])
        assert [w.field for w in result.warnings] == ["holding_type_id"]

    def test_liability_flag_mismatch(self, validator, asset_classes, holding_types):
        """An asset filed under a liability class is flagged."""
        holding = Holding(
            id=7, user_id=1, name="Offset", asset_class_id=LOAN_CLASS_ID,
            holding_type_id=PERSONAL_TYPE_ID, value=1000, details=GenericDetails(),
        )
        result = validator.validate(ProjectionConfig(), [holding], asset_classes, holding_types)
        assert [w.issue_type for w in result.warnings] == ["inconsistent"]

    def test_loan_without_rate(self, validator, asset_classes, holding_types):
        """Loans with no interest rate are flagged with the assumed rate."""
        loan = Holding(
            id=8, user_id=1, name="Family Loan", asset_class_id=LOAN_CLASS_ID,
            holding_type_id=PERSONAL_TYPE_ID, value=20000, is_liability=True,
            details=LoanDetails(loan_term=60),
        )
        result = validator.validate(ProjectionConfig(), [loan], asset_classes, holding_types)
        assert [w.field for w in result.warnings] == ["interest_rate"]
        assert "5.0%" in result.warnings[0].message

    def test_allow_list_ids_that_match_nothing(self, validator, asset_classes, holding_types):
        """Allow-list ids missing from reference data are flagged."""
        config = ProjectionConfig(
            enabled_asset_classes=(CASH_CLASS_ID, 404),
            enabled_holding_types=(405,),
        )
        result = validator.validate(config, [], asset_classes, holding_types)
        assert result.is_valid
        assert sorted(w.field for w in result.warnings) == [
            "enabled_asset_classes",
            "enabled_holding_types",
        ]

    def test_errors_and_warnings_reported_together(self, validator, savings_account):
        """Both stages run so every problem shows up at once."""
        result = validator.validate(
            ProjectionConfig(years_to_project=80), [savings_account], [], []
        )
        assert len(result.errors) == 1
        assert len(result.warnings) == 2


class TestValidationResult:
    """Tests for the result model."""

    def test_warnings_only_is_valid(self):
        """Warnings don't block a projection."""
        result = ValidationResult(issues=[
            ValidationIssue(field="x", issue_type="missing", message="m", severity="warning"),
        ])
        assert result.is_valid
        assert result.errors == []

    def test_bad_severity_rejected(self):
        """Severity must be error, warning or info."""
        with pytest.raises(ValueError):
            ValidationIssue(field="x", issue_type="t", message="m", severity="fatal")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
