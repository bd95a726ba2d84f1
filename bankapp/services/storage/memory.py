"""
In-Memory Audit Storage

Session-scoped event sink. Nothing survives a restart.
"""

from typing import Optional
from uuid import UUID

from bankapp.models.audit import AuditEvent
from bankapp.services.storage.interface import AuditStorageInterface, StorageError


class InMemoryAuditStorage(AuditStorageInterface):
    """
    Keeps audit events in a list, in the order they were appended.

    Args:
        max_events: Optional cap. Once reached, further appends raise
                    StorageError instead of silently dropping events.
    """

    def __init__(self, max_events: Optional[int] = None):
        if max_events is not None and max_events < 1:
            raise ValueError("max_events must be at least 1")
        self._events: list[AuditEvent] = []
        self._max_events = max_events

    def __len__(self) -> int:
        return len(self._events)

    def append_event(self, event: AuditEvent) -> bool:
        if self._max_events is not None and len(self._events) >= self._max_events:
            raise StorageError(
                f"Audit storage is full ({self._max_events} events)"
            )
        self._events.append(event)
        return True

    def get_events_by_correlation_id(
        self,
        correlation_id: UUID,
    ) -> list[AuditEvent]:
        return [e for e in self._events if e.correlation_id == correlation_id]

    def get_recent_events(
        self,
        limit: int = 100,
    ) -> list[AuditEvent]:
        if limit < 1:
            return []
        return list(reversed(self._events[-limit:]))
