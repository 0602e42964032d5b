'''
    File Name: test_transaction_store.py
    Version: 1.0.0
    Date: 19/10/2026
    Author: Pablo Bartolomé Molina
'''
from datetime import datetime, timedelta, timezone
import math
import random

import pytest

from ledger.transaction_store import TransactionStore, fold_balance, recompute_balance
from models.errors import InvalidAmount
from models.transaction import Category, TransactionKind
from reports.statistics import total_expenses, total_income
from reports.time_series import aggregate_daily_spending

EPSILON = 1e-9


def test_paycheck_and_coffee():
    store = TransactionStore()
    paycheck = store.record_transaction(100, "paycheck", TransactionKind.INCOME)
    coffee = store.record_transaction(20, "coffee", TransactionKind.EXPENSE, "Food")

    assert store.get_balance() == 80
    assert store.get_ledger() == (coffee, paycheck)
    assert coffee.category is Category.FOOD
    assert coffee.signed_amount == -20
    assert paycheck.category is Category.OTHER
    assert total_income(store.get_ledger()) == 100
    assert total_expenses(store.get_ledger()) == 20

    today = coffee.occurred_at.astimezone(timezone.utc).date()
    buckets = aggregate_daily_spending(store.get_ledger(), 30, today)
    assert len(buckets) == 30
    assert buckets[-1].date_key == today.isoformat()
    assert buckets[-1].total == 20
    assert all(b.total == 0 for b in buckets[:-1])


def test_balance_matches_fold_after_every_record():
    rng = random.Random(7)
    store = TransactionStore()
    for _ in range(300):
        kind = rng.choice(list(TransactionKind))
        store.record_transaction(round(rng.uniform(0.01, 500), 2), "", kind)
        assert abs(store.get_balance() - recompute_balance(store)) < EPSILON
    ledger = store.get_ledger()
    assert abs(total_income(ledger) - total_expenses(ledger) - store.get_balance()) < EPSILON


@pytest.mark.parametrize("amount", [0, -10, "abc", None, math.nan, math.inf])
def test_rejected_amount_is_a_no_op(amount):
    store = TransactionStore()
    store.add_money(50)
    before_ledger, before_balance = store.get_ledger(), store.get_balance()

    with pytest.raises(InvalidAmount):
        store.record_transaction(amount, "bad", TransactionKind.EXPENSE)

    assert store.get_ledger() == before_ledger
    assert store.get_balance() == before_balance


def test_unknown_kind_is_rejected_without_mutation():
    store = TransactionStore()
    with pytest.raises(ValueError):
        store.record_transaction(10, "gift", "bonus")
    assert store.get_ledger() == ()
    assert store.get_balance() == 0


def test_ledger_is_newest_first_even_with_equal_timestamps():
    store = TransactionStore()
    when = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)
    first = store.record_transaction(1, "a", "expense", occurred_at=when)
    second = store.record_transaction(2, "b", "expense", occurred_at=when)
    third = store.record_transaction(3, "c", "expense", occurred_at=when)
    assert store.get_ledger() == (third, second, first)


def test_get_recent():
    store = TransactionStore()
    txs = [store.add_expense(i + 1) for i in range(7)]
    assert store.get_recent() == tuple(reversed(txs))[:5]
    assert store.get_recent(2) == (txs[6], txs[5])
    assert len(store.get_recent(100)) == 7
    assert store.get_recent(0) == ()
    assert store.get_recent(-3) == ()


def test_ledger_snapshot_is_not_live():
    store = TransactionStore()
    store.add_money(10)
    snapshot = store.get_ledger()
    store.add_money(5)
    assert len(snapshot) == 1
    assert len(store.get_ledger()) == 2


def test_convenience_helpers_use_default_descriptions():
    store = TransactionStore()
    assert store.add_money(100).description == "Money added"
    spent = store.add_expense(12, category="Transport")
    assert spent.description == "Expense"
    assert spent.category is Category.TRANSPORT
    quick = store.quick_expense(10)
    assert quick.description == "Quick expense $10"
    assert quick.category is Category.FOOD
    assert store.get_balance() == 78


def test_from_transactions_recomputes_balance():
    source = TransactionStore()
    base = datetime(2026, 10, 1, tzinfo=timezone.utc)
    for i in range(5):
        source.record_transaction(10 * (i + 1), "", "income" if i % 2 else "expense",
                                  occurred_at=base + timedelta(days=i))
    rebuilt = TransactionStore.from_transactions(source.get_ledger())
    assert rebuilt.get_ledger() == source.get_ledger()
    assert rebuilt.get_balance() == pytest.approx(fold_balance(source.get_ledger()))


def test_listeners_run_after_record_and_failures_do_not_roll_back():
    store = TransactionStore()
    seen = []

    def broken(_store, _tx):
        raise RuntimeError("disk full")

    store.add_listener(lambda s, tx: seen.append((tx.id, s.get_balance())))
    store.add_listener(broken)
    tx = store.add_money(25)

    assert seen == [(tx.id, 25)]
    assert store.get_ledger() == (tx,)


def test_failed_record_does_not_notify():
    store = TransactionStore()
    seen = []
    store.add_listener(lambda s, tx: seen.append(tx))
    with pytest.raises(InvalidAmount):
        store.add_expense(0)
    assert seen == []


@pytest.mark.parametrize("amount", [7, 0, "10", 10.5])
def test_quick_expense_only_accepts_presets(amount):
    store = TransactionStore()
    store.add_money(100)
    with pytest.raises(InvalidAmount):
        store.quick_expense(amount)
    assert len(store.get_ledger()) == 1
    assert store.get_balance() == 100
