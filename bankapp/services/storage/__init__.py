"""
Storage Services Package

Provides the abstract audit sink and its in-memory implementation.
"""

from bankapp.services.storage.interface import (
    AuditStorageInterface,
    StorageError,
)
from bankapp.services.storage.memory import InMemoryAuditStorage

__all__ = [
    # Interfaces
    "AuditStorageInterface",
    # Exceptions
    "StorageError",
    # In-memory implementation
    "InMemoryAuditStorage",
]
