"""
In-Memory Storage

Dict-backed implementations of the storage interfaces, for tests and for
callers that already hold the data in memory.
"""

from typing import Iterable, Optional
from uuid import UUID

from assetplace.models.audit import AuditEvent
from assetplace.models.holding import (
    AssetClass,
    Holding,
    HoldingType,
    SystemSettings,
    UserProfile,
)
from assetplace.services.storage.interface import (
    AuditStorageInterface,
    NotFoundError,
    PortfolioStorageInterface,
)


class InMemoryPortfolioStorage(PortfolioStorageInterface):
    """Portfolio storage over plain Python collections."""

    def __init__(
        self,
        holdings: Iterable[Holding] = (),
        asset_classes: Iterable[AssetClass] = (),
        holding_types: Iterable[HoldingType] = (),
        users: Iterable[UserProfile] = (),
        system_settings: Optional[SystemSettings] = None,
    ):
        self._holdings = list(holdings)
        self._asset_classes = {ac.id: ac for ac in asset_classes}
        self._holding_types = {ht.id: ht for ht in holding_types}
        self._users = {user.id: user for user in users}
        self._system_settings = system_settings

    def add_holding(self, holding: Holding) -> None:
        self._holdings.append(holding)

    async def list_holdings(self, user_id: int) -> list[Holding]:
        return [h.model_copy(deep=True) for h in self._holdings if h.user_id == user_id]

    async def list_asset_classes(self) -> list[AssetClass]:
        return list(self._asset_classes.values())

    async def list_holding_types(self) -> list[HoldingType]:
        return list(self._holding_types.values())

    async def get_system_settings(self) -> Optional[SystemSettings]:
        return self._system_settings

    async def get_user(self, user_id: int) -> UserProfile:
        try:
            return self._users[user_id]
        except KeyError:
            raise NotFoundError(f"User {user_id} not found") from None


class InMemoryAuditStorage(AuditStorageInterface):
    """Append-only list of audit events."""

    def __init__(self):
        self._events: list[AuditEvent] = []

    @property
    def events(self) -> list[AuditEvent]:
        return list(self._events)

    async def append_event(self, event: AuditEvent) -> bool:
        self._events.append(event)
        return True

    async def get_events_by_correlation_id(
        self,
        correlation_id: UUID,
    ) -> list[AuditEvent]:
        return [e for e in self._events if e.correlation_id == correlation_id]
