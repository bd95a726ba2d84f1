"""
Tests for Bankapp models

Test strategy:
1. Unit tests for individual models (transactions, results, statements)
2. Audit event construction and serialization
3. No ledger state involved; models are built directly
"""

import pytest
from datetime import datetime, timezone
from decimal import Decimal
from uuid import uuid4

from pydantic import ValidationError

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


WHEN = datetime(2024, 12, 15, 14, 30, 5, tzinfo=timezone.utc)


def _transaction(kind=TransactionKind.DEPOSIT, amount="100.00", sequence=0):
    return Transaction(kind=kind, amount=Decimal(amount), timestamp=WHEN, sequence=sequence)


class TestTransactionKind:
    """Tests for the transaction kind enum."""

    def test_all_kinds_exist(self):
        """Test that the three kinds exist and nothing else."""
        assert {k.value for k in TransactionKind} == {"withdraw", "deposit", "recharge"}

    def test_labels(self):
        """Test labels are derived from the kind."""
        assert TransactionKind.WITHDRAW.label == "Withdrawal"
        assert TransactionKind.DEPOSIT.label == "Deposit"
        assert TransactionKind.RECHARGE.label == "Phone recharge"

    def test_debit_flags(self):
        """Test only deposits are credits."""
        assert TransactionKind.WITHDRAW.is_debit is True
        assert TransactionKind.RECHARGE.is_debit is True
        assert TransactionKind.DEPOSIT.is_debit is False


class TestTransaction:
    """Tests for the Transaction record."""

    def test_transaction_creation(self):
        """Test Transaction model creation."""
        t = _transaction()
        assert t.kind == TransactionKind.DEPOSIT
        assert t.amount == Decimal("100.00")
        assert t.label == "Deposit"

    def test_transaction_rejects_non_positive_amount(self):
        """Test that zero and negative amounts are rejected."""
        with pytest.raises(ValidationError):
            _transaction(amount="0")
        with pytest.raises(ValidationError):
            _transaction(amount="-5")

    def test_transaction_is_frozen(self):
        """Test that a recorded transaction cannot be changed."""
        t = _transaction()
        with pytest.raises(ValidationError):
            t.amount = Decimal("1")

    def test_signed_amount(self):
        """Test debits are negative and credits positive."""
        assert _transaction(TransactionKind.DEPOSIT, "10").signed_amount == Decimal("10")
        assert _transaction(TransactionKind.WITHDRAW, "10").signed_amount == Decimal("-10")
        assert _transaction(TransactionKind.RECHARGE, "10").signed_amount == Decimal("-10")

    def test_describe(self):
        """Test the '<label>: <amount> (<timestamp>)' rendering."""
        t = _transaction(TransactionKind.RECHARGE, "20")
        assert t.describe() == "Phone recharge: 20.00 (2024-12-15 14:30:05)"
        assert t.describe("₽") == "Phone recharge: 20.00 ₽ (2024-12-15 14:30:05)"
        assert t.describe("$", "%d.%m.%Y", 0) == "Phone recharge: 20 $ (15.12.2024)"

    def test_format_money(self):
        """Test amount formatting."""
        assert format_money(Decimal("1250.5")) == "1250.50"
        assert format_money(Decimal("3"), "₽", 1) == "3.0 ₽"


class TestOperationResult:
    """Tests for the uniform result type."""

    def test_applied_is_truthy(self):
        """Test applied results behave like True."""
        t = _transaction()
        result = OperationResult.applied(t, 100.0, Decimal("100.00"))
        assert result
        assert result.kind == TransactionKind.DEPOSIT
        assert result.reason is None
        assert result.transaction == t

    def test_rejected_is_falsy(self):
        """Test rejected results behave like False and carry a reason."""
        result = OperationResult.rejected(
            TransactionKind.WITHDRAW,
            150.0,
            RejectionReason.INSUFFICIENT_FUNDS,
            Decimal("100"),
        )
        assert not result
        assert result.reason == RejectionReason.INSUFFICIENT_FUNDS
        assert result.transaction is None
        assert result.requested_amount == 150.0


class TestAccountStatement:
    """Tests for statement rendering."""

    def test_balance_line(self):
        """Test balance rendering with a currency symbol."""
        statement = AccountStatement(balance=Decimal("40"), currency_symbol="₽")
        assert statement.balance_line() == "Balance: 40.00 ₽"

    def test_lines(self):
        """Test one line per transaction, in the order given."""
        statement = AccountStatement(
            balance=Decimal("80"),
            transactions=[
                _transaction(TransactionKind.WITHDRAW, "20", 1),
                _transaction(TransactionKind.DEPOSIT, "100", 0),
            ],
            currency_symbol="₽",
        )
        assert statement.transaction_count == 2
        assert statement.lines() == [
            "Withdrawal: 20.00 ₽ (2024-12-15 14:30:05)",
            "Deposit: 100.00 ₽ (2024-12-15 14:30:05)",
        ]


class TestAuditModels:
    """Tests for audit-related models."""

    def test_audit_event_creation(self):
        """Test AuditEvent model creation."""
        event = AuditEvent(
            event_type=AuditEventType.DEPOSIT_APPLIED,
            description="Deposit applied",
        )
        assert event.event_type == AuditEventType.DEPOSIT_APPLIED
        assert event.severity == AuditSeverity.INFO

    def test_audit_event_to_log_dict(self):
        """Test conversion to log dictionary."""
        event = AuditEvent(
            event_type=AuditEventType.WITHDRAWAL_REJECTED,
            description="Withdrawal rejected",
            details={"reason": "insufficient_funds"},
        )
        log_dict = event.to_log_dict()
        assert "event_id" in log_dict
        assert log_dict["event_type"] == "withdrawal_rejected"
        assert log_dict["details"]["reason"] == "insufficient_funds"
        assert log_dict["correlation_id"] is None

    def test_builder_applied_operation(self):
        """Test AuditEventBuilder.operation for an applied result."""
        correlation_id = uuid4()
        t = _transaction(TransactionKind.RECHARGE, "20")
        result = OperationResult.applied(t, 20.0, Decimal("40"))

        event = AuditEventBuilder.operation(result, correlation_id)

        assert event.event_type == AuditEventType.RECHARGE_APPLIED
        assert event.severity == AuditSeverity.INFO
        assert event.entity_id == t.id
        assert event.correlation_id == correlation_id
        assert event.details["amount"] == "20"
        assert event.details["balance"] == "40"
        assert event.is_user_action is True

    def test_builder_rejected_operation(self):
        """Test AuditEventBuilder.operation for a rejected result."""
        result = OperationResult.rejected(
            TransactionKind.DEPOSIT,
            -5,
            RejectionReason.INVALID_AMOUNT,
            Decimal("0"),
        )

        event = AuditEventBuilder.operation(result)

        assert event.event_type == AuditEventType.DEPOSIT_REJECTED
        assert event.severity == AuditSeverity.WARNING
        assert event.entity_id is None
        assert event.details["reason"] == "invalid_amount"
        assert event.details["requested_amount"] == "-5"

    def test_builder_input_rejected(self):
        """Test AuditEventBuilder.input_rejected."""
        event = AuditEventBuilder.input_rejected(TransactionKind.WITHDRAW, "12abc")
        assert event.event_type == AuditEventType.INPUT_REJECTED
        assert event.details == {"kind": "withdraw", "raw_input": "12abc"}

    def test_builder_system_error(self):
        """Test AuditEventBuilder.system_error."""
        event = AuditEventBuilder.system_error("storage", "disk full")
        assert event.severity == AuditSeverity.ERROR
        assert event.error_message == "disk full"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
