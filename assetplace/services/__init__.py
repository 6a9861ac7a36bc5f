"""Services package."""

from assetplace.services.storage import (
    AuditStorageInterface,
    InMemoryAuditStorage,
    InMemoryPortfolioStorage,
    NotFoundError,
    PortfolioStorageInterface,
    StorageConnectionError,
    StorageError,
)

__all__ = [
    "AuditStorageInterface",
    "InMemoryAuditStorage",
    "InMemoryPortfolioStorage",
    "NotFoundError",
    "PortfolioStorageInterface",
    "StorageConnectionError",
    "StorageError",
]
