'''
    File Name: time_series.py
    Version: 1.0.0
    Date: 19/10/2026
    Author: Pablo Bartolomé Molina
    Description: Day-by-day views over the ledger for the spending and balance charts.
'''
from dataclasses import dataclass
from datetime import date, datetime, timezone, tzinfo
import logging
from typing import Iterable, List, Optional

import pandas as pd

import config
from models.transaction import Transaction, TransactionKind

logger = logging.getLogger(__name__)

FRAME_COLUMNS = ["id", "occurred_at", "day", "kind", "category", "amount", "signed"]


@dataclass(frozen=True)
class DailySpending:
    date_key: str  # YYYY-MM-DD
    total: float
    label: str     # chart label, e.g. "Oct 19"


@dataclass(frozen=True)
class BalancePoint:
    date_key: str
    balance: float
    label: str


def ledger_to_frame(ledger: Iterable[Transaction], tz: Optional[tzinfo] = None) -> pd.DataFrame:
    """Build a DataFrame with one row per transaction.

    `day` is the calendar date of the transaction in `tz` (the report time
    zone by default) as a midnight Timestamp, so it lines up with the
    buckets produced by `window_days_index`.
    """
    tz = tz or config.report_tz()
    rows = [
        {
            "id": t.id,
            "occurred_at": t.occurred_at.astimezone(timezone.utc),
            "day": pd.Timestamp(t.occurred_at.astimezone(tz).date()),
            "kind": t.kind.value,
            "category": t.category.value,
            "amount": t.amount,
            "signed": t.signed_amount,
        }
        for t in ledger
    ]
    if not rows:
        return pd.DataFrame(columns=FRAME_COLUMNS)
    frame = pd.DataFrame(rows, columns=FRAME_COLUMNS)
    # Same resolution as the window index so reindex lines up
    frame["day"] = frame["day"].astype("datetime64[ns]")
    return frame


def window_days_index(window_days: int, today: Optional[date] = None,
                      tz: Optional[tzinfo] = None) -> pd.DatetimeIndex:
    """Contiguous daily index of `window_days` dates, oldest first, ending at `today`."""
    if today is None:
        today = datetime.now(tz or config.report_tz()).date()
    days = pd.date_range(end=pd.Timestamp(today), periods=max(window_days, 0), freq="D")
    return days.astype("datetime64[ns]")


def aggregate_daily_spending(ledger: Iterable[Transaction], window_days: int = config.DEFAULT_WINDOW_DAYS,
                             today: Optional[date] = None, tz: Optional[tzinfo] = None) -> List[DailySpending]:
    """Total expenses per calendar day over the trailing window.

    Income is ignored. Days without expenses report 0.
    """
    if window_days <= 0:
        return []
    window = window_days_index(window_days, today, tz)
    df = ledger_to_frame(ledger, tz)
    expenses = df[df["kind"] == TransactionKind.EXPENSE.value]

    if expenses.empty:
        totals = pd.Series(0.0, index=window)
    else:
        totals = expenses.groupby("day")["amount"].sum().reindex(window, fill_value=0.0)

    logger.debug("Aggregated %d expenses into %d daily buckets", len(expenses), window_days)
    return [
        DailySpending(
            date_key=day.strftime(config.DATE_FORMAT),
            total=float(total),
            label=day.strftime(config.CHART_LABEL_FORMAT),
        )
        for day, total in totals.items()
    ]


def reconstruct_balance_series(ledger: Iterable[Transaction], window_days: int = config.DEFAULT_WINDOW_DAYS,
                               today: Optional[date] = None, tz: Optional[tzinfo] = None) -> List[BalancePoint]:
    """Running balance at the end of each day of the trailing window.

    The whole history is folded, not just the window: each bucket carries
    the cumulative signed total of every transaction dated on or before it.
    """
    if window_days <= 0:
        return []
    window = window_days_index(window_days, today, tz)
    df = ledger_to_frame(ledger, tz)

    if df.empty:
        balances = pd.Series(0.0, index=window)
    else:
        # The live ledger is newest-first; accumulate in chronological order
        df = df.sort_values("occurred_at", kind="stable")
        running = df.groupby("day")["signed"].sum().sort_index().cumsum()
        # Carry the last known total forward; days before the first entry are 0
        balances = running.reindex(window, method="ffill").fillna(0.0)

    return [
        BalancePoint(
            date_key=day.strftime(config.DATE_FORMAT),
            balance=float(balance),
            label=day.strftime(config.CHART_LABEL_FORMAT),
        )
        for day, balance in balances.items()
    ]
