"""
Audit Logger

DESIGN DECISION: Every attempt to move money is logged, applied or not.
This provides:
1. Complete traceability of a session
2. Debugging capability when a balance looks wrong
3. A record of rejected input the user never saw explained in detail

The audit logger:
- Is synchronous, like the ledger it observes
- Gracefully handles failures (a broken sink never breaks an operation)
- Supports correlation IDs to tie one session's events together
"""

import logging
from typing import Any, Optional
from uuid import UUID, uuid4

import structlog

from bankapp.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity
from bankapp.models.transaction import OperationResult, TransactionKind
from bankapp.services.storage import AuditStorageInterface


def configure_logging(level: str = "INFO", json: bool = True) -> None:
    """
    Configure structlog on top of the standard library logger.

    Args:
        level: Minimum level name (DEBUG, INFO, ...)
        json: JSON lines when True, human-readable console output otherwise
    """
    logging.basicConfig(format="%(message)s", level=getattr(logging, level.upper()))
    logging.getLogger().setLevel(getattr(logging, level.upper()))

    renderer = (
        structlog.processors.JSONRenderer()
        if json
        else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


class AuditLogger:
    """
    Central audit logging service.

    Logs events both to:
    1. Structured local log (for debugging)
    2. An audit sink (for inspection during the session)
    """

    def __init__(
        self,
        storage: Optional[AuditStorageInterface] = None,
        environment: Optional[str] = None,
    ):
        """
        Initialize audit logger.

        Args:
            storage: Sink for events.
                    If None, only logs locally.
            environment: Added to every local log line when set
                    (e.g. "development", "production").
        """
        self._storage = storage
        self._environment = environment
        self._logger = structlog.get_logger("bankapp.audit")

    @property
    def storage(self) -> Optional[AuditStorageInterface]:
        return self._storage

    @property
    def environment(self) -> Optional[str]:
        return self._environment

    def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.

        Always logs locally. Appends to storage if available.

        Returns True if the storage write succeeded (or no storage configured).
        A failed write is reported as a SYSTEM_ERROR event, logged locally only.
        """
        self._log_locally(event)

        if self._storage is not None:
            try:
                return self._storage.append_event(event)
            except Exception as e:
                # Log failure but don't raise
                self._log_locally(AuditEventBuilder.system_error(
                    error_type="audit_storage_failed",
                    error_message=str(e),
                    details={"event_id": str(event.event_id)},
                    correlation_id=event.correlation_id,
                ))
                return False

        return True

    def _log_locally(self, event: AuditEvent) -> None:
        log_dict = event.to_log_dict()
        if self._environment:
            log_dict["environment"] = self._environment

        if event.severity in (AuditSeverity.ERROR, AuditSeverity.CRITICAL):
            self._logger.error("audit_event", **log_dict)
        elif event.severity == AuditSeverity.WARNING:
            self._logger.warning("audit_event", **log_dict)
        elif event.severity == AuditSeverity.DEBUG:
            self._logger.debug("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

    def log_operation(
        self,
        result: OperationResult,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log an applied or rejected balance mutation."""
        event = AuditEventBuilder.operation(
            result=result,
            correlation_id=correlation_id,
        )
        self.log(event)

    def log_input_rejected(
        self,
        kind: TransactionKind,
        raw_input: Any,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log user input that could not be parsed into an amount."""
        event = AuditEventBuilder.input_rejected(
            kind=kind,
            raw_input=raw_input,
            correlation_id=correlation_id,
        )
        self.log(event)

    def log_statement_viewed(
        self,
        balance: str,
        transaction_count: int,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        event = AuditEventBuilder.statement_viewed(
            balance=balance,
            transaction_count=transaction_count,
            correlation_id=correlation_id,
        )
        self.log(event)

    def log_error(
        self,
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log an error."""
        event = AuditEventBuilder.system_error(
            error_type=error_type,
            error_message=error_message,
            details=details,
            correlation_id=correlation_id,
        )
        self.log(event)


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    One per session; every event the session logs carries it.
    """
    return uuid4()
