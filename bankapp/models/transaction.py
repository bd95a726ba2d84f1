"""
Core Data Models for the Account Ledger

These models define the records that flow out of the ledger:
1. Transactions - immutable history entries
2. Operation results - the uniform outcome of every balance mutation
3. Statements - read-only snapshots for whatever host renders them

DESIGN DECISION: Money is Decimal, never float.
Floats are accepted at the edges and converted through their string form,
so 100.0 becomes Decimal("100.0") rather than a binary approximation.
"""

from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field


DEFAULT_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def utcnow() -> datetime:
    """Timezone-aware current time in UTC."""
    return datetime.now(timezone.utc)


def format_money(amount: Decimal, currency_symbol: str = "", places: int = 2) -> str:
    """Render an amount with a fixed number of places and optional symbol."""
    text = f"{amount:.{places}f}"
    if currency_symbol:
        return f"{text} {currency_symbol}"
    return text


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class TransactionKind(str, Enum):
    """
    Kinds of balance-affecting operations.

    The label is derived from the kind alone; nothing about it is stored
    on the transaction.
    """
    WITHDRAW = "withdraw"  # Cash out
    DEPOSIT = "deposit"    # Cash in
    RECHARGE = "recharge"  # Phone top-up

    @property
    def label(self) -> str:
        return _KIND_LABELS[self]

    @property
    def is_debit(self) -> bool:
        """Withdrawals and recharges take money out of the account."""
        return self is not TransactionKind.DEPOSIT


_KIND_LABELS = {
    TransactionKind.WITHDRAW: "Withdrawal",
    TransactionKind.DEPOSIT: "Deposit",
    TransactionKind.RECHARGE: "Phone recharge",
}


class RejectionReason(str, Enum):
    """Why a mutating operation left the account untouched."""
    INVALID_AMOUNT = "invalid_amount"          # Not a finite number > 0
    INSUFFICIENT_FUNDS = "insufficient_funds"  # Amount exceeds balance


# =============================================================================
# TRANSACTION RECORD
# =============================================================================

class Transaction(BaseModel):
    """
    One completed balance-affecting operation.

    CRITICAL: Transactions are only created by the ledger, after the
    amount has been checked. They are frozen and never removed.
    """
    model_config = ConfigDict(frozen=True)

    id: UUID = Field(
        default_factory=uuid4,
        description="Unique transaction ID"
    )
    kind: TransactionKind = Field(
        ...,
        description="What kind of operation this was"
    )
    amount: Decimal = Field(
        ...,
        gt=0,
        description="Amount moved, always positive"
    )
    timestamp: datetime = Field(
        ...,
        description="When the operation was applied"
    )
    sequence: int = Field(
        ...,
        ge=0,
        description="Insertion index within the owning ledger"
    )

    @property
    def label(self) -> str:
        return self.kind.label

    @property
    def signed_amount(self) -> Decimal:
        """Effect on the balance: negative for debits."""
        return -self.amount if self.kind.is_debit else self.amount

    def describe(
        self,
        currency_symbol: str = "",
        timestamp_format: str = DEFAULT_TIMESTAMP_FORMAT,
        places: int = 2,
    ) -> str:
        """
        Render as "<label>: <amount> (<timestamp>)".

        The currency symbol, when given, follows the amount.
        """
        amount = format_money(self.amount, currency_symbol, places)
        return f"{self.label}: {amount} ({self.timestamp.strftime(timestamp_format)})"


# =============================================================================
# OPERATION RESULT
# =============================================================================

class OperationResult(BaseModel):
    """
    Outcome of withdraw, deposit or recharge.

    All three mutations return this type. It is truthy exactly when the
    operation was applied, so code written against a plain boolean
    ("if ledger.withdraw(x):") keeps working.
    """
    model_config = ConfigDict(frozen=True)

    success: bool
    kind: TransactionKind
    requested_amount: Any = Field(
        default=None,
        description="The amount exactly as the caller supplied it"
    )
    reason: Optional[RejectionReason] = None
    transaction: Optional[Transaction] = None
    balance: Decimal = Field(
        ...,
        description="Balance after the call"
    )

    def __bool__(self) -> bool:
        return self.success

    @classmethod
    def applied(
        cls,
        transaction: Transaction,
        requested_amount: Any,
        balance: Decimal,
    ) -> "OperationResult":
        return cls(
            success=True,
            kind=transaction.kind,
            requested_amount=requested_amount,
            transaction=transaction,
            balance=balance,
        )

    @classmethod
    def rejected(
        cls,
        kind: TransactionKind,
        requested_amount: Any,
        reason: RejectionReason,
        balance: Decimal,
    ) -> "OperationResult":
        return cls(
            success=False,
            kind=kind,
            requested_amount=requested_amount,
            reason=reason,
            balance=balance,
        )


# =============================================================================
# STATEMENT (read-only query result)
# =============================================================================

class AccountStatement(BaseModel):
    """
    Snapshot of the account for display.

    Built on demand by the session; holding one never keeps the ledger
    from changing.
    """
    model_config = ConfigDict(frozen=True)

    balance: Decimal
    transactions: list[Transaction] = Field(
        default_factory=list,
        description="Newest first"
    )
    currency_symbol: str = ""
    timestamp_format: str = DEFAULT_TIMESTAMP_FORMAT
    amount_places: int = Field(default=2, ge=0)
    generated_at: datetime = Field(default_factory=utcnow)

    @property
    def transaction_count(self) -> int:
        return len(self.transactions)

    def balance_line(self) -> str:
        return f"Balance: {format_money(self.balance, self.currency_symbol, self.amount_places)}"

    def lines(self) -> list[str]:
        return [
            t.describe(self.currency_symbol, self.timestamp_format, self.amount_places)
            for t in self.transactions
        ]
