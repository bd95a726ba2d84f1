"""
Session Orchestrator for the Account Ledger

This module is the surface a host (terminal, web page, desktop window)
talks to. It ties together:
1. The ledger (the only owner of the balance)
2. The audit logger (one event per attempted operation)
3. Presentation settings (currency symbol, timestamp format)

DESIGN DECISION: Hosts never read ledger internals. They send commands
(deposit, withdraw, recharge, or raw text via submit) and read back an
AccountStatement. Nothing here renders UI.
"""

from typing import Any, Optional, Union
from uuid import UUID

from bankapp.audit import AuditLogger, configure_logging, create_correlation_id
from bankapp.config import LedgerSettings, Settings, get_settings
from bankapp.ledger import AccountLedger, UnsupportedOperationError, parse_amount
from bankapp.models.transaction import (
    AccountStatement,
    OperationResult,
    RejectionReason,
    TransactionKind,
)
from bankapp.services.storage import InMemoryAuditStorage


INSUFFICIENT_FUNDS_MESSAGE = "Insufficient funds"
INVALID_AMOUNT_MESSAGE = "Invalid amount"

_REJECTION_MESSAGES = {
    RejectionReason.INSUFFICIENT_FUNDS: INSUFFICIENT_FUNDS_MESSAGE,
    RejectionReason.INVALID_AMOUNT: INVALID_AMOUNT_MESSAGE,
}


class LedgerSession:
    """
    One user's session with one account.

    Flow for every button in a host:
    1. Collect an amount (number or typed text)
    2. perform() / submit() with the matching TransactionKind
    3. Show message_for(result)
    4. Redraw from statement()
    """

    def __init__(
        self,
        ledger: Optional[AccountLedger] = None,
        audit_logger: Optional[AuditLogger] = None,
        settings: Optional[LedgerSettings] = None,
        correlation_id: Optional[UUID] = None,
    ):
        self._ledger = ledger or AccountLedger()
        self._audit_logger = audit_logger
        self._settings = settings or get_settings().ledger
        self._correlation_id = correlation_id or create_correlation_id()

        self._handlers = {
            TransactionKind.DEPOSIT: self._ledger.deposit,
            TransactionKind.WITHDRAW: self._ledger.withdraw,
            TransactionKind.RECHARGE: self._ledger.recharge_phone,
        }

    @property
    def ledger(self) -> AccountLedger:
        return self._ledger

    @property
    def audit_logger(self) -> Optional[AuditLogger]:
        return self._audit_logger

    @property
    def correlation_id(self) -> UUID:
        return self._correlation_id

    @property
    def settings(self) -> LedgerSettings:
        return self._settings

    # =========================================================================
    # COMMANDS
    # =========================================================================

    def deposit_cash(self, amount: Any) -> OperationResult:
        return self.perform(TransactionKind.DEPOSIT, amount)

    def withdraw_cash(self, amount: Any) -> OperationResult:
        return self.perform(TransactionKind.WITHDRAW, amount)

    def recharge_phone(self, amount: Any) -> OperationResult:
        return self.perform(TransactionKind.RECHARGE, amount)

    def perform(
        self,
        kind: Union[TransactionKind, str],
        amount: Any,
    ) -> OperationResult:
        """
        Dispatch an amount to the ledger operation matching kind.

        Raises:
            UnsupportedOperationError: If kind is not a TransactionKind

        Anything the ledger itself raises is logged as a system error
        and re-raised.
        """
        resolved = self._resolve_kind(kind)
        try:
            result = self._handlers[resolved](amount)
        except Exception as e:
            if self._audit_logger:
                self._audit_logger.log_error(
                    error_type=type(e).__name__,
                    error_message=str(e),
                    details={"kind": resolved.value, "requested_amount": str(amount)},
                    correlation_id=self._correlation_id,
                )
            raise

        if self._audit_logger:
            self._audit_logger.log_operation(result, self._correlation_id)

        return result

    def submit(
        self,
        kind: Union[TransactionKind, str],
        raw_text: Any,
    ) -> OperationResult:
        """
        Handle an amount typed by the user.

        Text that is not a positive number never reaches the ledger; it
        comes back as a rejected result with INVALID_AMOUNT.
        """
        resolved = self._resolve_kind(kind)
        amount = parse_amount(raw_text)

        if amount is None:
            if self._audit_logger:
                self._audit_logger.log_input_rejected(
                    kind=resolved,
                    raw_input=raw_text,
                    correlation_id=self._correlation_id,
                )
            return OperationResult.rejected(
                resolved,
                raw_text,
                RejectionReason.INVALID_AMOUNT,
                self._ledger.balance,
            )

        return self.perform(resolved, amount)

    @staticmethod
    def _resolve_kind(kind: Union[TransactionKind, str]) -> TransactionKind:
        try:
            return TransactionKind(kind)
        except ValueError:
            raise UnsupportedOperationError(kind) from None

    # =========================================================================
    # QUERIES
    # =========================================================================

    def statement(self) -> AccountStatement:
        """Read-only snapshot: balance plus transactions, newest first."""
        statement = AccountStatement(
            balance=self._ledger.balance,
            transactions=self._ledger.get_sorted_transactions(),
            currency_symbol=self._settings.currency_symbol,
            timestamp_format=self._settings.timestamp_format,
            amount_places=self._settings.amount_places,
        )

        if self._audit_logger:
            self._audit_logger.log_statement_viewed(
                balance=str(statement.balance),
                transaction_count=statement.transaction_count,
                correlation_id=self._correlation_id,
            )

        return statement

    def message_for(self, result: OperationResult) -> str:
        """
        User-facing text for an operation outcome.

        Successes show the new balance; rejections show a short reason.
        """
        if result.success:
            return AccountStatement(
                balance=result.balance,
                currency_symbol=self._settings.currency_symbol,
                amount_places=self._settings.amount_places,
            ).balance_line()
        return _REJECTION_MESSAGES.get(result.reason, INVALID_AMOUNT_MESSAGE)


def create_session(
    settings: Optional[Settings] = None,
) -> LedgerSession:
    """
    Factory function to create a ready-to-use session.

    Configures logging from settings and wires an in-memory audit sink.
    """
    settings = settings or get_settings()
    app_settings = settings.app

    configure_logging(
        level=app_settings.effective_log_level,
        json=app_settings.log_json,
    )

    audit_logger = AuditLogger(
        InMemoryAuditStorage(),
        environment=app_settings.app_environment,
    )

    return LedgerSession(
        ledger=AccountLedger(),
        audit_logger=audit_logger,
        settings=settings.ledger,
    )
