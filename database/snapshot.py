'''
    File Name: snapshot.py
    Version: 1.0.0
    Date: 19/10/2026
    Author: Pablo Bartolomé Molina
'''

import csv
import json
import logging
import math
from pathlib import Path
from typing import Any, Iterable, List, Optional, Tuple

import config
from database.gateway import PersistenceGateway
from ledger.transaction_store import TransactionStore
from models.errors import CorruptPersistedState
from models.transaction import Transaction

logger = logging.getLogger(__name__)

SNAPSHOT_VERSION = 1
BALANCE_TOLERANCE = 1e-6
CSV_FIELDS = ["id", "date", "description", "type", "category", "amount"]


def encode_snapshot(ledger: Iterable[Transaction], balance: float) -> str:
    """Serialize balance and newest-first ledger into a single JSON record."""
    return json.dumps({
        "version": SNAPSHOT_VERSION,
        "balance": balance,
        "transactions": [t.to_dict() for t in ledger],
    })


def decode_transactions(items: Any) -> List[Transaction]:
    """Decode a persisted list of transactions.

    Entries that fail validation or repeat an id are skipped with a warning.
    """
    if not isinstance(items, list):
        raise CorruptPersistedState(f"Expected a list of transactions, got {type(items).__name__}")
    transactions: List[Transaction] = []
    seen = set()
    for item in items:
        try:
            tx = Transaction.from_dict(item)
        except CorruptPersistedState as exc:
            logger.warning("Skipping persisted transaction: %s", exc)
            continue
        if tx.id in seen:
            logger.warning("Skipping duplicate transaction id %s", tx.id)
            continue
        seen.add(tx.id)
        transactions.append(tx)
    return transactions


def _parse_balance(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        balance = float(value)
    except (TypeError, ValueError):
        logger.warning("Ignoring malformed persisted balance %r", value)
        return None
    return balance if math.isfinite(balance) else None


def decode_snapshot(raw: str) -> Tuple[List[Transaction], Optional[float]]:
    try:
        data = json.loads(raw)
    except ValueError as exc:
        raise CorruptPersistedState(f"Snapshot is not valid JSON: {exc}") from exc
    if not isinstance(data, dict) or "transactions" not in data:
        raise CorruptPersistedState("Snapshot has no transactions field")
    return decode_transactions(data["transactions"]), _parse_balance(data.get("balance"))


def _decode_legacy(raw_balance: Optional[str], raw_ledger: Optional[str]) -> Tuple[List[Transaction], Optional[float]]:
    """Read the balance/ledger pair written by versions before the snapshot key."""
    transactions: List[Transaction] = []
    if raw_ledger is not None:
        try:
            items = json.loads(raw_ledger)
        except ValueError as exc:
            raise CorruptPersistedState(f"Stored ledger is not valid JSON: {exc}") from exc
        transactions = decode_transactions(items)
    return transactions, _parse_balance(raw_balance)


def _read_state(gateway: PersistenceGateway) -> Tuple[List[Transaction], Optional[float]]:
    raw = gateway.get(config.SNAPSHOT_KEY)
    if raw is not None:
        return decode_snapshot(raw)
    raw_balance = gateway.get(config.BALANCE_KEY)
    raw_ledger = gateway.get(config.LEDGER_KEY)
    if raw_balance is None and raw_ledger is None:
        logger.warning("No persisted ledger found, starting empty")
        return [], None
    logger.info("Reading ledger from legacy keys")
    return _decode_legacy(raw_balance, raw_ledger)


def load_store(gateway: PersistenceGateway) -> TransactionStore:
    """Build a TransactionStore from persisted state.

    Never raises: absent or malformed data gives an empty store. The balance
    is recomputed from the ledger rather than trusted.
    """
    try:
        transactions, persisted_balance = _read_state(gateway)
    except CorruptPersistedState as exc:
        logger.warning("Discarding persisted state: %s", exc)
        return TransactionStore()
    except Exception:
        logger.warning("Failed reading persisted state, starting empty", exc_info=True)
        return TransactionStore()

    store = TransactionStore.from_transactions(transactions)
    if persisted_balance is not None and not math.isclose(
        persisted_balance, store.get_balance(), abs_tol=BALANCE_TOLERANCE
    ):
        logger.warning(
            "Persisted balance %.2f disagrees with ledger total %.2f; using ledger total",
            persisted_balance, store.get_balance(),
        )
    logger.info("Loaded %d transactions, balance=%.2f", len(store), store.get_balance())
    return store


def save_store(store: TransactionStore, gateway: PersistenceGateway) -> None:
    """Persist ledger and balance in one write."""
    ledger, balance = store.snapshot()
    gateway.set(config.SNAPSHOT_KEY, encode_snapshot(ledger, balance))
    logger.debug("Saved %d transactions", len(ledger))


def attach_autosave(store: TransactionStore, gateway: PersistenceGateway) -> None:
    """Save the store after every recorded transaction."""
    def _save(s: TransactionStore, _tx: Transaction) -> None:
        save_store(s, gateway)

    store.add_listener(_save)


def export_to_csv(ledger: Iterable[Transaction], path: Path) -> bool:
    """Export transactions to a CSV file at `path`. Returns True on success."""
    try:
        with open(path, "w", newline="", encoding="utf-8") as f:
            writer = csv.DictWriter(f, fieldnames=CSV_FIELDS)
            writer.writeheader()
            for t in ledger:
                row = t.to_dict()
                writer.writerow({k: row[k] for k in CSV_FIELDS})
        return True
    except OSError:
        logger.exception("Failed exporting transactions to CSV %s", path)
        return False
