"""
Abstract Storage Interface

DESIGN DECISION: The audit logger writes through an abstract sink.
This allows us to:
1. Keep events in memory for the lifetime of a session
2. Inspect exactly what was recorded in tests
3. Add a durable backend later without touching the logger

The ledger's own state is never stored here; the balance lives only in
the AccountLedger instance.
"""

from abc import ABC, abstractmethod
from uuid import UUID

from bankapp.models.audit import AuditEvent


class AuditStorageInterface(ABC):
    """
    Abstract interface for audit log storage.

    Audit logs are append-only - we never delete or modify them.
    """

    @abstractmethod
    def append_event(self, event: AuditEvent) -> bool:
        """
        Append an audit event to the log.

        Args:
            event: The audit event to log

        Returns:
            True if logged successfully

        Raises:
            StorageError: If the event could not be written
        """
        pass

    @abstractmethod
    def get_events_by_correlation_id(
        self,
        correlation_id: UUID,
    ) -> list[AuditEvent]:
        """
        Get all events for a correlation ID (one session).

        Returns:
            List of related events in chronological order
        """
        pass

    @abstractmethod
    def get_recent_events(
        self,
        limit: int = 100,
    ) -> list[AuditEvent]:
        """
        Get the most recent audit events.

        Returns:
            List of recent events (newest first)
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass
