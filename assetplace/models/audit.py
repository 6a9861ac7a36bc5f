"""
Audit Models for AssetPlace

Every projection request leaves a trail: what was asked, which
assumptions were resolved, whether validation passed, and what came out.
This provides:
1. Traceability of the numbers a user was shown
2. Debugging information when a projection looks wrong
3. Ability to replay a request with the same assumptions

DESIGN DECISION: Audit logs are append-only. We never delete or modify them.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """
    Types of events we audit.

    Every step of the projection flow has its own event type.
    """
    # Request lifecycle
    PROJECTION_REQUESTED = "projection_requested"
    PORTFOLIO_LOADED = "portfolio_loaded"
    CONFIGURATION_RESOLVED = "configuration_resolved"

    # Validation
    VALIDATION_PASSED = "validation_passed"
    VALIDATION_FAILED = "validation_failed"

    # Outcome
    PROJECTION_COMPLETED = "projection_completed"
    PROJECTION_FAILED = "projection_failed"

    # System events
    STORAGE_ERROR = "storage_error"
    SYSTEM_ERROR = "system_error"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuditEvent(BaseModel):
    """
    A single audit event.

    This is the core unit of our audit trail.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Context - what entity is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'user', 'projection')"
    )
    entity_id: Optional[str] = Field(
        default=None,
        description="ID of the entity this event relates to"
    )

    # Correlation - for tracking related events
    correlation_id: Optional[UUID] = Field(
        default=None,
        description="ID shared by all events of one projection request"
    )

    # Event details
    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )

    # Error information (if applicable)
    error_code: Optional[str] = None
    error_message: Optional[str] = None

    is_user_action: bool = Field(
        default=False,
        description="Was this triggered by a user action?"
    )

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "description": self.description,
            "details": self.details,
            "error_code": self.error_code,
            "error_message": self.error_message,
            "is_user_action": self.is_user_action,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.projection_requested(user_id, overrides, correlation_id)
        event = AuditEventBuilder.projection_completed(user_id, years, count, correlation_id)
    """

    @staticmethod
    def projection_requested(
        user_id: int,
        overrides: dict[str, Any],
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.PROJECTION_REQUESTED,
            entity_type="user",
            entity_id=str(user_id),
            correlation_id=correlation_id,
            description="Projection requested",
            details={
                "overrides": overrides,
            },
            is_user_action=True,
        )

    @staticmethod
    def portfolio_loaded(
        user_id: int,
        holding_count: int,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.PORTFOLIO_LOADED,
            severity=AuditSeverity.INFO if holding_count else AuditSeverity.WARNING,
            entity_type="user",
            entity_id=str(user_id),
            correlation_id=correlation_id,
            description=f"Loaded {holding_count} holdings",
            details={
                "holding_count": holding_count,
            },
        )

    @staticmethod
    def configuration_resolved(
        user_id: int,
        config: dict[str, Any],
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.CONFIGURATION_RESOLVED,
            entity_type="user",
            entity_id=str(user_id),
            correlation_id=correlation_id,
            description=(
                f"Projecting {config.get('years_to_project')} years, "
                f"{config.get('growth_rate_scenario')} scenario"
            ),
            details={
                "config": config,
            },
        )

    @staticmethod
    def validation_result(
        user_id: int,
        issues: list[dict],
        is_valid: bool,
        correlation_id: UUID
    ) -> AuditEvent:
        if is_valid:
            return AuditEvent(
                event_type=AuditEventType.VALIDATION_PASSED,
                entity_type="user",
                entity_id=str(user_id),
                correlation_id=correlation_id,
                description=f"Projection request valid ({len(issues)} warnings)",
                details={
                    "issues": issues,
                },
            )
        return AuditEvent(
            event_type=AuditEventType.VALIDATION_FAILED,
            severity=AuditSeverity.WARNING,
            entity_type="user",
            entity_id=str(user_id),
            correlation_id=correlation_id,
            description=f"Projection request rejected with {len(issues)} issues",
            details={
                "issues": issues,
            },
        )

    @staticmethod
    def projection_completed(
        user_id: int,
        years: int,
        holding_count: int,
        final_net_worth: float,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.PROJECTION_COMPLETED,
            entity_type="projection",
            entity_id=str(user_id),
            correlation_id=correlation_id,
            description=f"Projected {holding_count} holdings over {years} years",
            details={
                "years": years,
                "holding_count": holding_count,
                "final_net_worth": final_net_worth,
            },
        )

    @staticmethod
    def projection_failed(
        user_id: int,
        error_message: str,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.PROJECTION_FAILED,
            severity=AuditSeverity.ERROR,
            entity_type="projection",
            entity_id=str(user_id),
            correlation_id=correlation_id,
            description="Projection failed",
            error_message=error_message,
        )

    @staticmethod
    def storage_error(
        operation: str,
        error_message: str,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STORAGE_ERROR,
            severity=AuditSeverity.ERROR,
            description=f"Storage error during {operation}",
            error_message=error_message,
            details={
                "operation": operation,
            },
            correlation_id=correlation_id,
        )

    @staticmethod
    def system_error(
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SYSTEM_ERROR,
            severity=AuditSeverity.ERROR,
            description=f"System error: {error_type}",
            error_message=error_message,
            details=details or {},
            correlation_id=correlation_id,
        )
