"""
Account Ledger

The only place in the system where the balance changes.

GUARANTEES:
- balance == sum(deposits) - sum(withdrawals + recharges) in history
- balance never goes negative
- a rejected operation changes nothing
- history is append-only; transactions are frozen

Every public method runs under one re-entrant lock, so a ledger shared
between threads still sees each check-then-mutate step as atomic.
"""

import threading
from datetime import datetime
from decimal import Decimal, Inexact, localcontext
from typing import Any, Callable, Optional

from bankapp.ledger.amounts import coerce_amount
from bankapp.models.transaction import (
    OperationResult,
    RejectionReason,
    Transaction,
    TransactionKind,
    utcnow,
)


class AccountLedger:
    """
    Single account: a running balance and its transaction history.

    Args:
        clock: Source of transaction timestamps. Defaults to UTC now.
    """

    def __init__(self, clock: Optional[Callable[[], datetime]] = None):
        self._clock = clock or utcnow
        self._balance = Decimal("0")
        self._history: list[Transaction] = []
        self._lock = threading.RLock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._history)

    def __repr__(self) -> str:
        return f"AccountLedger(balance={self.balance}, transactions={len(self)})"

    @property
    def balance(self) -> Decimal:
        with self._lock:
            return self._balance

    @property
    def history(self) -> tuple[Transaction, ...]:
        """All transactions in insertion order."""
        with self._lock:
            return tuple(self._history)

    # =========================================================================
    # MUTATIONS
    # =========================================================================

    def withdraw(self, amount: Any) -> OperationResult:
        """Take cash out. Rejected if amount <= 0 or amount > balance."""
        return self._debit(TransactionKind.WITHDRAW, amount)

    def recharge_phone(self, amount: Any) -> OperationResult:
        """Top up a phone from the balance. Same rules as withdraw."""
        return self._debit(TransactionKind.RECHARGE, amount)

    def deposit(self, amount: Any) -> OperationResult:
        """
        Put cash in.

        A non-positive or non-numeric amount leaves the account untouched
        and comes back as a rejected result with INVALID_AMOUNT.
        So does an amount whose sum with the balance cannot be held exactly.
        """
        value = coerce_amount(amount)
        with self._lock:
            if value is None or value <= 0:
                return self._reject(TransactionKind.DEPOSIT, amount, RejectionReason.INVALID_AMOUNT)

            new_balance = self._exact(lambda: self._balance + value)
            if new_balance is None:
                return self._reject(TransactionKind.DEPOSIT, amount, RejectionReason.INVALID_AMOUNT)

            return self._apply(TransactionKind.DEPOSIT, amount, value, new_balance)

    def _debit(self, kind: TransactionKind, amount: Any) -> OperationResult:
        value = coerce_amount(amount)
        with self._lock:
            if value is None or value <= 0:
                return self._reject(kind, amount, RejectionReason.INVALID_AMOUNT)
            if value > self._balance:
                return self._reject(kind, amount, RejectionReason.INSUFFICIENT_FUNDS)

            new_balance = self._exact(lambda: self._balance - value)
            if new_balance is None:
                return self._reject(kind, amount, RejectionReason.INVALID_AMOUNT)

            return self._apply(kind, amount, value, new_balance)

    @staticmethod
    def _exact(compute: Callable[[], Decimal]) -> Optional[Decimal]:
        # None when the result does not fit the context precision
        with localcontext() as ctx:
            ctx.traps[Inexact] = True
            try:
                return compute()
            except Inexact:
                return None

    def _apply(
        self,
        kind: TransactionKind,
        requested: Any,
        value: Decimal,
        new_balance: Decimal,
    ) -> OperationResult:
        # Caller holds the lock. The record is built before anything changes.
        transaction = Transaction(
            kind=kind,
            amount=value,
            timestamp=self._clock(),
            sequence=len(self._history),
        )
        self._history.append(transaction)
        self._balance = new_balance
        return OperationResult.applied(transaction, requested, self._balance)

    def _reject(self, kind: TransactionKind, requested: Any, reason: RejectionReason) -> OperationResult:
        return OperationResult.rejected(kind, requested, reason, self._balance)

    # =========================================================================
    # QUERIES
    # =========================================================================

    def get_sorted_transactions(self) -> list[Transaction]:
        """
        All transactions, most recent first.

        Equal timestamps keep a deterministic order: the later insertion
        comes first.
        """
        with self._lock:
            return sorted(
                self._history,
                key=lambda t: (t.timestamp, t.sequence),
                reverse=True,
            )

    def totals(self) -> dict[TransactionKind, Decimal]:
        """Sum of amounts per transaction kind."""
        with self._lock:
            totals = {kind: Decimal("0") for kind in TransactionKind}
            for t in self._history:
                totals[t.kind] += t.amount
            return totals
