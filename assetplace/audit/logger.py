"""
Audit Logger

DESIGN DECISION: Every projection request is logged step by step.
This provides:
1. Traceability of the numbers a user was shown
2. Debugging capability when a projection looks wrong
3. A record of which assumptions were in effect

The audit logger:
- Is async to match the storage interface
- Gracefully handles failures (doesn't fail a projection if logging fails)
- Supports correlation IDs to trace related events
"""

import logging
from typing import Any, Optional
from uuid import UUID, uuid4

import structlog

from assetplace.config import get_settings
from assetplace.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity
from assetplace.services.storage import AuditStorageInterface


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


def configure_logging(level: Optional[str] = None) -> None:
    """
    Apply the minimum log level to the stdlib loggers structlog writes to.

    Defaults to the LOG_LEVEL setting.
    """
    level = level or get_settings().app.log_level
    logging.basicConfig(format="%(message)s", level=level)
    logging.getLogger("assetplace").setLevel(level)


configure_logging()


class AuditLogger:
    """
    Central audit logging service.

    Logs events both to:
    1. Structured local log (for debugging)
    2. Audit storage, when one is configured
    """

    def __init__(
        self,
        storage: Optional[AuditStorageInterface] = None,
    ):
        """
        Initialize audit logger.

        Args:
            storage: Storage backend for persistence.
                    If None, only logs locally.
        """
        self._storage = storage
        self._logger = structlog.get_logger("assetplace.audit")

    async def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.

        Always logs locally. Persists to storage if available.

        Returns True if storage write succeeded (or no storage configured).
        """
        log_dict = event.to_log_dict()

        if event.severity in (AuditSeverity.ERROR, AuditSeverity.CRITICAL):
            self._logger.error("audit_event", **log_dict)
        elif event.severity == AuditSeverity.WARNING:
            self._logger.warning("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

        if self._storage:
            try:
                return await self._storage.append_event(event)
            except Exception as e:
                # Log failure but don't raise
                self._logger.error(
                    "audit_storage_failed",
                    error=str(e),
                    event_id=str(event.event_id),
                )
                return False

        return True

    async def log_projection_requested(
        self,
        user_id: int,
        overrides: dict[str, Any],
        correlation_id: UUID,
    ) -> None:
        event = AuditEventBuilder.projection_requested(
            user_id=user_id,
            overrides=overrides,
            correlation_id=correlation_id,
        )
        await self.log(event)

    async def log_portfolio_loaded(
        self,
        user_id: int,
        holding_count: int,
        correlation_id: UUID,
    ) -> None:
        event = AuditEventBuilder.portfolio_loaded(
            user_id=user_id,
            holding_count=holding_count,
            correlation_id=correlation_id,
        )
        await self.log(event)

    async def log_configuration_resolved(
        self,
        user_id: int,
        config: dict[str, Any],
        correlation_id: UUID,
    ) -> None:
        event = AuditEventBuilder.configuration_resolved(
            user_id=user_id,
            config=config,
            correlation_id=correlation_id,
        )
        await self.log(event)

    async def log_validation_result(
        self,
        user_id: int,
        issues: list[dict],
        is_valid: bool,
        correlation_id: UUID,
    ) -> None:
        event = AuditEventBuilder.validation_result(
            user_id=user_id,
            issues=issues,
            is_valid=is_valid,
            correlation_id=correlation_id,
        )
        await self.log(event)

    async def log_projection_completed(
        self,
        user_id: int,
        years: int,
        holding_count: int,
        final_net_worth: float,
        correlation_id: UUID,
    ) -> None:
        """Log a successful projection run."""
        event = AuditEventBuilder.projection_completed(
            user_id=user_id,
            years=years,
            holding_count=holding_count,
            final_net_worth=final_net_worth,
            correlation_id=correlation_id,
        )
        await self.log(event)

    async def log_projection_failed(
        self,
        user_id: int,
        error_message: str,
        correlation_id: UUID,
    ) -> None:
        event = AuditEventBuilder.projection_failed(
            user_id=user_id,
            error_message=error_message,
            correlation_id=correlation_id,
        )
        await self.log(event)

    async def log_storage_error(
        self,
        operation: str,
        error_message: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log a storage read that failed after retries."""
        event = AuditEventBuilder.storage_error(
            operation=operation,
            error_message=error_message,
            correlation_id=correlation_id,
        )
        await self.log(event)

    async def log_error(
        self,
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log an error."""
        event = AuditEventBuilder.system_error(
            error_type=error_type,
            error_message=error_message,
            details=details,
            correlation_id=correlation_id,
        )
        await self.log(event)


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    Use this at the start of a projection request.
    Pass it through all subsequent operations.
    """
    return uuid4()
