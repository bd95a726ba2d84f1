"""
Audit Models for the Account Ledger

Every balance mutation attempt is recorded as an event, whether it was
applied or rejected. This gives:
1. A trace of what the user tried, not only what succeeded
2. Debugging information when a balance looks wrong
3. A way to reconstruct a session from its events

DESIGN DECISION: Audit events are append-only. We never delete or modify them.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field

from bankapp.models.transaction import OperationResult, TransactionKind


class AuditEventType(str, Enum):
    """
    Types of events we audit.

    Each mutating operation has an applied and a rejected variant.
    """
    # Balance mutations
    DEPOSIT_APPLIED = "deposit_applied"
    DEPOSIT_REJECTED = "deposit_rejected"
    WITHDRAWAL_APPLIED = "withdrawal_applied"
    WITHDRAWAL_REJECTED = "withdrawal_rejected"
    RECHARGE_APPLIED = "recharge_applied"
    RECHARGE_REJECTED = "recharge_rejected"

    # User input that never reached the ledger
    INPUT_REJECTED = "input_rejected"

    # Reads
    STATEMENT_VIEWED = "statement_viewed"

    # System events
    SYSTEM_ERROR = "system_error"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


_OPERATION_EVENTS = {
    TransactionKind.DEPOSIT: (
        AuditEventType.DEPOSIT_APPLIED,
        AuditEventType.DEPOSIT_REJECTED,
    ),
    TransactionKind.WITHDRAW: (
        AuditEventType.WITHDRAWAL_APPLIED,
        AuditEventType.WITHDRAWAL_REJECTED,
    ),
    TransactionKind.RECHARGE: (
        AuditEventType.RECHARGE_APPLIED,
        AuditEventType.RECHARGE_REJECTED,
    ),
}


class AuditEvent(BaseModel):
    """
    A single audit event.

    This is the core unit of the audit trail.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
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

    # Context
    entity_id: Optional[UUID] = Field(
        default=None,
        description="Transaction ID when the event produced one"
    )
    correlation_id: Optional[UUID] = Field(
        default=None,
        description="ID shared by every event in one session"
    )

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )

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
            "entity_id": str(self.entity_id) if self.entity_id else None,
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
            "is_user_action": self.is_user_action,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.operation(result, correlation_id)
        event = AuditEventBuilder.input_rejected(kind, "12abc", correlation_id)
    """

    @staticmethod
    def operation(
        result: OperationResult,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        applied_type, rejected_type = _OPERATION_EVENTS[result.kind]
        details = {
            "kind": result.kind.value,
            "requested_amount": str(result.requested_amount),
            "balance": str(result.balance),
        }

        if result.success:
            return AuditEvent(
                event_type=applied_type,
                entity_id=result.transaction.id,
                correlation_id=correlation_id,
                description=f"{result.kind.label} of {result.transaction.amount} applied",
                details={**details, "amount": str(result.transaction.amount)},
                is_user_action=True,
            )

        reason = result.reason.value if result.reason else "unspecified"
        return AuditEvent(
            event_type=rejected_type,
            severity=AuditSeverity.WARNING,
            correlation_id=correlation_id,
            description=f"{result.kind.label} rejected: {reason}",
            details={**details, "reason": reason},
            is_user_action=True,
        )

    @staticmethod
    def input_rejected(
        kind: TransactionKind,
        raw_input: Any,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.INPUT_REJECTED,
            severity=AuditSeverity.WARNING,
            correlation_id=correlation_id,
            description=f"{kind.label} input could not be read as an amount",
            details={
                "kind": kind.value,
                "raw_input": raw_input,
            },
            is_user_action=True,
        )

    @staticmethod
    def statement_viewed(
        balance: str,
        transaction_count: int,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STATEMENT_VIEWED,
            severity=AuditSeverity.DEBUG,
            correlation_id=correlation_id,
            description=f"Statement built with {transaction_count} transactions",
            details={
                "balance": balance,
                "transaction_count": transaction_count,
            },
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
