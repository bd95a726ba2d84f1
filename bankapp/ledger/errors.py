"""Ledger exceptions.

Bad amounts are never raised; they come back as rejected results.
These exceptions are for callers using the ledger incorrectly.
"""


class LedgerError(Exception):
    """Base exception for ledger misuse."""
    pass


class UnsupportedOperationError(LedgerError):
    """The requested transaction kind has no matching operation."""

    def __init__(self, kind):
        self.kind = kind
        super().__init__(f"Unsupported transaction kind: {kind!r}")
