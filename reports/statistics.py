'''
    File Name: statistics.py
    Version: 1.0.0
    Date: 19/10/2026
    Author: Pablo Bartolomé Molina
'''
from typing import Any, Dict, Iterable

from models.transaction import Transaction, TransactionKind


def total_income(ledger: Iterable[Transaction]) -> float:
    return sum(t.amount for t in ledger if t.kind is TransactionKind.INCOME)


def total_expenses(ledger: Iterable[Transaction]) -> float:
    return sum(t.amount for t in ledger if t.kind is TransactionKind.EXPENSE)


def ledger_summary(ledger: Iterable[Transaction]) -> Dict[str, Any]:
    """Totals shown in the summary panel.

    `net` is income minus expenses and always matches the store balance.
    `average` is the mean unsigned amount, 0.0 for an empty ledger.
    """
    entries = list(ledger)
    income = total_income(entries)
    expenses = total_expenses(entries)
    count = len(entries)
    return {
        "income": income,
        "expenses": expenses,
        "net": income - expenses,
        "count": count,
        "average": (income + expenses) / count if count else 0.0,
    }
