"""Account ledger package."""

from bankapp.ledger.account import AccountLedger
from bankapp.ledger.amounts import coerce_amount, parse_amount
from bankapp.ledger.errors import LedgerError, UnsupportedOperationError

__all__ = [
    "AccountLedger",
    "LedgerError",
    "UnsupportedOperationError",
    "coerce_amount",
    "parse_amount",
]
