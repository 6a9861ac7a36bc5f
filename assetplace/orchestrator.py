"""
Projection Orchestrator for AssetPlace

This module ties together storage, configuration, validation, the engine
and the audit trail, and defines the end-to-end projection flow:

    fetch → default configuration → merge overrides → validate → project

DESIGN DECISION: The orchestrator enforces the boundaries:
- The engine never touches storage; everything it needs is fetched first
- No projection runs on a configuration that failed validation
- Every step is audited under one correlation id

The engine itself stays pure and synchronous. All I/O, retries and logging
live here.
"""

from datetime import date
from typing import Any, Awaitable, Callable, Optional, TypeVar

import structlog
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from assetplace.audit import AuditLogger, create_correlation_id
from assetplace.config import StorageSettings, get_settings
from assetplace.models.holding import AssetClass, Holding, HoldingType, UserProfile
from assetplace.models.projection import ProjectionConfig, ProjectionResult
from assetplace.models.validation import ValidationResult
from assetplace.projections import (
    ProjectionEngine,
    default_configuration,
    merge_configuration,
)
from assetplace.services.storage import (
    PortfolioStorageInterface,
    StorageConnectionError,
)
from assetplace.validation import ProjectionRequestValidator


T = TypeVar("T")

logger = structlog.get_logger("assetplace.orchestrator")


class ProjectionRequestError(Exception):
    """A projection request failed validation."""

    def __init__(self, result: ValidationResult):
        self.result = result
        messages = "; ".join(issue.message for issue in result.errors)
        super().__init__(f"Invalid projection request: {messages}")


class ProjectionService:
    """
    Orchestrates a projection request.

    Flow:
    1. Fetch → user, holdings, asset classes, holding types, system settings
    2. Configure → defaults for the user's mode, then caller overrides
    3. Validate → configuration errors block, portfolio warnings are reported
    4. Project → run the engine
    5. Audit → each step above, tied together by a correlation id
    """

    def __init__(
        self,
        storage: PortfolioStorageInterface,
        audit_logger: Optional[AuditLogger] = None,
        validator: Optional[ProjectionRequestValidator] = None,
        storage_settings: Optional[StorageSettings] = None,
    ):
        self._storage = storage
        self._audit_logger = audit_logger or AuditLogger()
        self._validator = validator or ProjectionRequestValidator()
        self._retry_settings = storage_settings or get_settings().storage

    async def _fetch(
        self,
        operation: str,
        call: Callable[[], Awaitable[T]],
        correlation_id: Optional[Any] = None,
    ) -> T:
        """
        Run a storage read, retrying transient connection failures.

        Only StorageConnectionError is retried. Anything else (a missing
        user, a malformed record) propagates on the first attempt.
        """
        retrying = AsyncRetrying(
            stop=stop_after_attempt(self._retry_settings.retry_attempts),
            wait=wait_exponential(
                multiplier=self._retry_settings.retry_wait_seconds,
                max=self._retry_settings.retry_max_wait_seconds,
            ),
            retry=retry_if_exception_type(StorageConnectionError),
            reraise=True,
        )
        try:
            async for attempt in retrying:
                with attempt:
                    return await call()
        except StorageConnectionError as e:
            await self._audit_logger.log_storage_error(
                operation=operation,
                error_message=str(e),
                correlation_id=correlation_id,
            )
            raise

    async def get_default_configuration(self, user_id: int) -> ProjectionConfig:
        """
        The configuration a user starts from, before any overrides.

        Raises:
            NotFoundError: If the user doesn't exist
            StorageConnectionError: If storage stays unreachable after retries
        """
        user = await self._fetch("get_user", lambda: self._storage.get_user(user_id))
        system_settings = await self._fetch(
            "get_system_settings", self._storage.get_system_settings
        )
        return default_configuration(system_settings, user.preferred_mode)

    async def _load_portfolio(
        self,
        user_id: int,
        correlation_id: Any,
    ) -> tuple[UserProfile, list[Holding], list[AssetClass], list[HoldingType], ProjectionConfig]:
        user = await self._fetch(
            "get_user", lambda: self._storage.get_user(user_id), correlation_id
        )
        holdings = await self._fetch(
            "list_holdings", lambda: self._storage.list_holdings(user_id), correlation_id
        )
        asset_classes = await self._fetch(
            "list_asset_classes", self._storage.list_asset_classes, correlation_id
        )
        holding_types = await self._fetch(
            "list_holding_types", self._storage.list_holding_types, correlation_id
        )
        system_settings = await self._fetch(
            "get_system_settings", self._storage.get_system_settings, correlation_id
        )
        defaults = default_configuration(system_settings, user.preferred_mode)
        return user, holdings, asset_classes, holding_types, defaults

    async def generate(
        self,
        user_id: int,
        overrides: Optional[dict[str, Any]] = None,
        as_of: Optional[date] = None,
    ) -> ProjectionResult:
        """
        Generate a projection for a user.

        Args:
            user_id: Whose portfolio to project
            overrides: ProjectionConfig fields to change from the defaults
            as_of: The projection's "today" (defaults to date.today())

        Returns:
            The projection result

        Raises:
            ProjectionRequestError: If the resolved configuration is invalid
            pydantic.ValidationError: If an override is malformed
            StorageError: If portfolio data can't be fetched
        """
        correlation_id = create_correlation_id()
        overrides = dict(overrides or {})
        log = logger.bind(user_id=user_id, correlation_id=str(correlation_id))

        await self._audit_logger.log_projection_requested(
            user_id=user_id,
            overrides=overrides,
            correlation_id=correlation_id,
        )

        try:
            user, holdings, asset_classes, holding_types, defaults = (
                await self._load_portfolio(user_id, correlation_id)
            )
            await self._audit_logger.log_portfolio_loaded(
                user_id=user_id,
                holding_count=len(holdings),
                correlation_id=correlation_id,
            )
            if not holdings:
                log.warning("projecting_empty_portfolio")

            config = merge_configuration(defaults, overrides, user)
            await self._audit_logger.log_configuration_resolved(
                user_id=user_id,
                config=config.model_dump(mode="json"),
                correlation_id=correlation_id,
            )

            validation = self._validator.validate(
                config, holdings, asset_classes, holding_types
            )
            await self._audit_logger.log_validation_result(
                user_id=user_id,
                issues=[issue.model_dump() for issue in validation.issues],
                is_valid=validation.is_valid,
                correlation_id=correlation_id,
            )
            if not validation.is_valid:
                raise ProjectionRequestError(validation)
            for issue in validation.warnings:
                log.warning(
                    "projection_request_warning",
                    field=issue.field,
                    holding_id=issue.holding_id,
                    message=issue.message,
                )

            engine = ProjectionEngine(as_of)
            result = engine.run(
                holdings,
                {ac.id: ac for ac in asset_classes},
                {ht.id: ht for ht in holding_types},
                config,
            )
        except Exception as e:
            await self._audit_logger.log_projection_failed(
                user_id=user_id,
                error_message=str(e),
                correlation_id=correlation_id,
            )
            raise

        await self._audit_logger.log_projection_completed(
            user_id=user_id,
            years=result.years,
            holding_count=len(holdings),
            final_net_worth=result.net_worth[-1],
            correlation_id=correlation_id,
        )
        log.info("projection_generated", years=result.years, holdings=len(holdings))

        return result


def create_projection_service(
    storage: PortfolioStorageInterface,
    audit_storage=None,
) -> ProjectionService:
    """
    Factory function to wire a ProjectionService.

    Args:
        storage: Where portfolio data is read from
        audit_storage: Where audit events are persisted.
                       If None, events are only logged locally.
    """
    audit_logger = AuditLogger(audit_storage)
    return ProjectionService(storage=storage, audit_logger=audit_logger)
