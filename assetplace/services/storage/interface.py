"""
Abstract Storage Interface

DESIGN DECISION: The projection flow reads portfolio data through an
abstract interface. This allows us to:
1. Plug in whatever relational store the API layer uses
2. Use in-memory storage for testing
3. Keep the engine decoupled from persistence

The interface is read-only and deliberately small: projections need the
user's holdings, the reference data, and the system defaults. Nothing else.
"""

from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from assetplace.models.audit import AuditEvent
from assetplace.models.holding import (
    AssetClass,
    Holding,
    HoldingType,
    SystemSettings,
    UserProfile,
)


class PortfolioStorageInterface(ABC):
    """
    Abstract interface for reading portfolio data.

    Any storage implementation must implement these methods.
    """

    @abstractmethod
    async def list_holdings(self, user_id: int) -> list[Holding]:
        """
        All holdings owned by a user, hidden ones included.

        Args:
            user_id: The owning user's identifier

        Returns:
            The user's holdings (possibly empty)

        Raises:
            StorageConnectionError: If the backend cannot be reached
        """
        pass

    @abstractmethod
    async def list_asset_classes(self) -> list[AssetClass]:
        """All asset classes."""
        pass

    @abstractmethod
    async def list_holding_types(self) -> list[HoldingType]:
        """All holding types."""
        pass

    @abstractmethod
    async def get_system_settings(self) -> Optional[SystemSettings]:
        """
        System-wide defaults.

        Returns:
            The settings record, or None if the admin never saved one
        """
        pass

    @abstractmethod
    async def get_user(self, user_id: int) -> UserProfile:
        """
        A user's profile.

        Raises:
            NotFoundError: If the user doesn't exist
        """
        pass


class AuditStorageInterface(ABC):
    """
    Abstract interface for audit log storage.

    Audit logs are append-only.
    """

    @abstractmethod
    async def append_event(self, event: AuditEvent) -> bool:
        """
        Append an audit event.

        Returns:
            True if logged successfully
        """
        pass

    @abstractmethod
    async def get_events_by_correlation_id(
        self,
        correlation_id: UUID,
    ) -> list[AuditEvent]:
        """
        Get all events for a correlation ID (e.g., one projection request).

        Returns:
            List of related events in chronological order
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class NotFoundError(StorageError):
    """Entity not found in storage."""
    pass


class StorageConnectionError(StorageError):
    """Could not connect to storage backend."""
    pass
