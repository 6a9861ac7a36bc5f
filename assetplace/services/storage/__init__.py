"""
Storage Services Package

Provides abstract interfaces and an in-memory implementation for the data
projections read. Real backends live with the API layer.
"""

from assetplace.services.storage.interface import (
    AuditStorageInterface,
    NotFoundError,
    PortfolioStorageInterface,
    StorageConnectionError,
    StorageError,
)
from assetplace.services.storage.memory import (
    InMemoryAuditStorage,
    InMemoryPortfolioStorage,
)

__all__ = [
    # Interfaces
    "AuditStorageInterface",
    "PortfolioStorageInterface",
    # Exceptions
    "NotFoundError",
    "StorageConnectionError",
    "StorageError",
    # In-memory implementation
    "InMemoryAuditStorage",
    "InMemoryPortfolioStorage",
]
