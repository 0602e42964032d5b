'''
    File Name: main.py
    Version: 3.0.0
    Date: 19/10/2026
    Author: Pablo Bartolomé Molina
'''
import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

import config
from config import APP_NAME, APP_VERSION, LOGGING_CONFIG, ensure_data_dir
from database.gateway import SqliteGateway
from database.snapshot import attach_autosave, export_to_csv, load_store
from ledger.transaction_store import TransactionStore
from models.errors import InvalidAmount
from models.transaction import Category
from reports.statistics import ledger_summary
from reports.time_series import aggregate_daily_spending, reconstruct_balance_series

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="expense-tracker", description=f"{APP_NAME} {APP_VERSION}")
    parser.add_argument("--db", type=Path, default=None, help=f"SQLite file (default: {config.DATABASE_PATH})")
    sub = parser.add_subparsers(dest="command", required=True)

    income = sub.add_parser("income", help="Add money")
    income.add_argument("amount")
    income.add_argument("-d", "--description", default="")

    expense = sub.add_parser("expense", help="Record an expense")
    expense.add_argument("amount")
    expense.add_argument("-d", "--description", default="")
    expense.add_argument("-c", "--category", default=Category.FOOD.value, choices=config.DEFAULT_CATEGORIES)

    quick = sub.add_parser("quick", help="Record a preset expense")
    quick.add_argument("amount", type=int, choices=config.QUICK_AMOUNTS)
    quick.add_argument("-c", "--category", default=Category.FOOD.value, choices=config.DEFAULT_CATEGORIES)

    summary = sub.add_parser("summary", help="Balance, totals and daily charts data")
    summary.add_argument("--days", type=int, default=config.DEFAULT_WINDOW_DAYS)

    history = sub.add_parser("history", help="List transactions, newest first")
    history.add_argument("-n", "--limit", type=int, default=None)

    export = sub.add_parser("export", help="Export the ledger to CSV")
    export.add_argument("path", type=Path)
    return parser


def print_summary(store: TransactionStore, days: int) -> None:
    ledger = store.get_ledger()
    stats = ledger_summary(ledger)
    print(f"Balance: ${store.get_balance():,.2f}")
    print(f"Total income: ${stats['income']:,.2f} | Total expenses: ${stats['expenses']:,.2f} "
          f"| Transactions: {stats['count']}")
    print(f"\nDaily spending and balance (last {days} days):")
    spending = aggregate_daily_spending(ledger, days)
    balances = reconstruct_balance_series(ledger, days)
    for day, point in zip(spending, balances):
        print(f"  {day.date_key}  spent {day.total:>10,.2f}  balance {point.balance:>12,.2f}")
    print("\nRecent transactions:")
    print_history(store, config.RECENT_LIMIT)


def print_history(store: TransactionStore, limit: Optional[int]) -> None:
    entries = store.get_ledger() if limit is None else store.get_recent(limit)
    if not entries:
        print("  No transactions yet")
        return
    for t in entries:
        sign = "+" if t.signed_amount > 0 else "-"
        when = t.occurred_at.astimezone(config.report_tz()).strftime(config.DATE_FORMAT)
        print(f"  {when}  {sign}${t.amount:,.2f}  {t.category.value:<13} {t.description}")


def main(argv: Optional[List[str]] = None) -> int:
    logging.basicConfig(**LOGGING_CONFIG)
    args = build_parser().parse_args(argv)

    if args.db is None:
        # Ensure runtime dirs exist early
        try:
            ensure_data_dir()
        except OSError:
            logger.exception("Failed to ensure data directory exists")
            return 1
    gateway = SqliteGateway(args.db)
    store = load_store(gateway)
    attach_autosave(store, gateway)

    try:
        if args.command == "income":
            tx = store.add_money(args.amount, args.description)
            print(f"Added ${tx.amount:,.2f}. Balance: ${store.get_balance():,.2f}")
        elif args.command == "expense":
            tx = store.add_expense(args.amount, args.description, args.category)
            print(f"Spent ${tx.amount:,.2f} on {tx.category.value}. Balance: ${store.get_balance():,.2f}")
        elif args.command == "quick":
            tx = store.quick_expense(args.amount, args.category)
            print(f"{tx.description}. Balance: ${store.get_balance():,.2f}")
        elif args.command == "summary":
            print_summary(store, args.days)
        elif args.command == "history":
            print_history(store, args.limit)
        elif args.command == "export":
            if not export_to_csv(store.get_ledger(), args.path):
                print(f"Could not write {args.path}", file=sys.stderr)
                return 1
            print(f"Exported {len(store)} transactions to {args.path}")
    except InvalidAmount as exc:
        print(str(exc), file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
