"""
Bankapp - Account Ledger Package

A small personal-finance ledger: one balance, one history of cash
withdrawals, deposits and phone recharges.

DESIGN PRINCIPLES:
1. Only the ledger changes the balance
2. Rejected operations change nothing
3. Every attempt is auditable
4. Hosts read snapshots, never internals
"""

__version__ = "1.0.0"
__author__ = "Bankapp Team"
