"""
Data Models Package

This package contains all Pydantic models used by the ledger.
Everything the ledger hands back to a caller is one of these.
"""

from bankapp.models.transaction import (
    AccountStatement,
    OperationResult,
    RejectionReason,
    Transaction,
    TransactionKind,
    format_money,
)
from bankapp.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Ledger models
    "AccountStatement",
    "OperationResult",
    "RejectionReason",
    "Transaction",
    "TransactionKind",
    "format_money",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
