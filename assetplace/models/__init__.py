"""
Data Models Package

This package contains all Pydantic models used by AssetPlace projections.
All data flowing into the engine must conform to these schemas.
"""

from assetplace.models.holding import (
    FREQUENCY_MULTIPLIERS,
    PAYMENTS_PER_YEAR,
    AssetClass,
    BonusType,
    CashDetails,
    DividendRecord,
    EmploymentDetails,
    ExpenseFrequency,
    GenericDetails,
    Holding,
    HoldingKind,
    HoldingType,
    LoanDetails,
    MortgageDetails,
    PaymentFrequency,
    PropertyDetails,
    RateType,
    RecurringExpense,
    RentalFrequency,
    ShareDetails,
    StockOptionDetails,
    SystemSettings,
    UserMode,
    UserProfile,
    VestingEntry,
)
from assetplace.models.projection import (
    AssetClassSeries,
    CashflowProjection,
    GrowthScenario,
    HoldingTypeSeries,
    ProjectionConfig,
    ProjectionPeriod,
    ProjectionResult,
)
from assetplace.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)
from assetplace.models.validation import ValidationIssue, ValidationResult
from assetplace.models.legacy import coerce_holding, infer_holding_kind

__all__ = [
    # Holding models
    "FREQUENCY_MULTIPLIERS",
    "PAYMENTS_PER_YEAR",
    "AssetClass",
    "BonusType",
    "CashDetails",
    "DividendRecord",
    "EmploymentDetails",
    "ExpenseFrequency",
    "GenericDetails",
    "Holding",
    "HoldingKind",
    "HoldingType",
    "LoanDetails",
    "MortgageDetails",
    "PaymentFrequency",
    "PropertyDetails",
    "RateType",
    "RecurringExpense",
    "RentalFrequency",
    "ShareDetails",
    "StockOptionDetails",
    "SystemSettings",
    "UserMode",
    "UserProfile",
    "VestingEntry",
    # Projection models
    "AssetClassSeries",
    "CashflowProjection",
    "GrowthScenario",
    "HoldingTypeSeries",
    "ProjectionConfig",
    "ProjectionPeriod",
    "ProjectionResult",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
    # Validation models
    "ValidationIssue",
    "ValidationResult",
    # Legacy migration
    "coerce_holding",
    "infer_holding_kind",
]
