'''
    File Name: transaction_store.py
    Version: 1.0.0
    Date: 19/10/2026
    Author: Pablo Bartolomé Molina
'''
import logging
import threading
from typing import Callable, Iterable, List, Tuple

import config
from models.errors import InvalidAmount
from models.transaction import Category, Transaction, TransactionKind

logger = logging.getLogger(__name__)

Listener = Callable[["TransactionStore", Transaction], None]


def fold_balance(ledger: Iterable[Transaction]) -> float:
    """Recompute the balance from scratch by summing signed amounts."""
    return sum(t.signed_amount for t in ledger)


class TransactionStore:
    """Append-only ledger with an incrementally maintained balance.

    One instance per session; hand it to whatever needs to record or read
    transactions. `record_transaction` is the only mutating operation.
    """

    def __init__(self):
        # Oldest first internally; get_ledger() reverses it
        self._entries: List[Transaction] = []
        self._balance = 0.0
        self._lock = threading.Lock()
        self._listeners: List[Listener] = []

    @classmethod
    def from_transactions(cls, transactions: Iterable[Transaction]) -> "TransactionStore":
        """Rebuild a store from a persisted newest-first ledger."""
        store = cls()
        entries = list(transactions)
        entries.reverse()
        store._entries = entries
        store._balance = fold_balance(entries)
        logger.debug("Restored %d transactions, balance=%.2f", len(entries), store._balance)
        return store

    def add_listener(self, callback: Listener) -> None:
        """Register a callback run after every successful record."""
        self._listeners.append(callback)

    def record_transaction(self, amount, description, kind, category=Category.OTHER,
                           occurred_at=None) -> Transaction:
        """Validate, append and fold a new transaction into the balance.

        Raises InvalidAmount (ledger untouched) when amount is not a positive
        finite number.
        """
        tx = Transaction.create(amount, description, kind, category, occurred_at)
        with self._lock:
            self._entries.append(tx)
            self._balance += tx.signed_amount
        logger.info("Recorded %s %.2f (%s) balance=%.2f",
                    tx.kind.value, tx.amount, tx.category.value, self._balance)
        self._notify(tx)
        return tx

    def _notify(self, tx: Transaction) -> None:
        for callback in list(self._listeners):
            try:
                callback(self, tx)
            except Exception:
                logger.exception("Transaction listener %r failed", callback)

    def get_balance(self) -> float:
        return self._balance

    def get_ledger(self) -> Tuple[Transaction, ...]:
        """Immutable newest-first snapshot of the ledger."""
        with self._lock:
            return tuple(reversed(self._entries))

    def get_recent(self, n: int = config.RECENT_LIMIT) -> Tuple[Transaction, ...]:
        if n <= 0:
            return ()
        return self.get_ledger()[:n]

    def snapshot(self) -> Tuple[Tuple[Transaction, ...], float]:
        """Ledger and balance read together under the lock."""
        with self._lock:
            return tuple(reversed(self._entries)), self._balance

    def __len__(self) -> int:
        return len(self._entries)

    # --- Caller conveniences ---
    def add_money(self, amount, description: str = "") -> Transaction:
        return self.record_transaction(amount, description, TransactionKind.INCOME)

    def add_expense(self, amount, description: str = "", category=Category.FOOD) -> Transaction:
        return self.record_transaction(amount, description, TransactionKind.EXPENSE, category)

    def quick_expense(self, amount, category=Category.FOOD) -> Transaction:
        """Record one of the preset amounts with a generated description."""
        if amount not in config.QUICK_AMOUNTS:
            raise InvalidAmount(amount)
        return self.add_expense(amount, f"Quick expense ${amount}", category)


def recompute_balance(store: TransactionStore) -> float:
    """Fold the store's current ledger; must always equal store.get_balance()."""
    return fold_balance(store.get_ledger())
