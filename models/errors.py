'''
    File Name: errors.py
    Version: 1.0.0
    Date: 19/10/2026
    Author: Pablo Bartolomé Molina
    Description: Exceptions raised by the ledger and its persistence layer.
'''


class LedgerError(Exception):
    """Base class for ledger errors."""


class InvalidAmount(LedgerError, ValueError):
    """Amount is not a finite number greater than zero."""

    def __init__(self, amount):
        self.amount = amount
        super().__init__(f"Invalid amount: {amount!r}. Expected a positive number")


class CorruptPersistedState(LedgerError):
    """Persisted ledger data is absent, malformed or has the wrong shape."""
