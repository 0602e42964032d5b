'''
    File Name: config.py
    Version: 2.0.0
    Date: 19/10/2026
    Author: Pablo Bartolomé Molina
'''

from pathlib import Path
from zoneinfo import ZoneInfo
import logging

# Project paths & files
BASE_DIR = Path(__file__).resolve().parent
DATA_DIR = BASE_DIR / "data"
DB_FILENAME = "expense_tracker.db"
DATABASE_PATH = DATA_DIR / DB_FILENAME   # Path object

# App metadata
APP_NAME = "Expense Tracker"
APP_VERSION = "2.0.0"

# Formatting
DEFAULT_CURRENCY = "USD"
DATE_FORMAT = "%Y-%m-%d"
CHART_LABEL_FORMAT = "%b %d"

# Reports
DEFAULT_WINDOW_DAYS = 30
RECENT_LIMIT = 5
# Calendar days are always computed in this zone, never the machine's local one
REPORT_TIMEZONE = "UTC"

# Defaults
DEFAULT_CATEGORIES = [
    "Food", "Transport", "Entertainment", "Shopping", "Bills", "Healthcare", "Other"
]
QUICK_AMOUNTS = (5, 10, 20, 50, 100)
DEFAULT_INCOME_DESCRIPTION = "Money added"
DEFAULT_EXPENSE_DESCRIPTION = "Expense"

# Persistence keys
SNAPSHOT_KEY = "expenseTracker_snapshot"
# Written by older versions as two separate values; read-only now
BALANCE_KEY = "expenseTracker_balance"
LEDGER_KEY = "expenseTracker_transactions"

# Logging (simple default; the host calls logging.basicConfig(**LOGGING_CONFIG))
LOGGING_CONFIG = {
    "level": logging.INFO,
    "format": "%(asctime)s - %(levelname)s - %(name)s - %(message)s",
}


# Helpers
def ensure_data_dir():
    """
    Ensure the data directory exists. Database creation should be handled
    by the gateway (see `database.gateway.SqliteGateway`).
    """
    DATA_DIR.mkdir(parents=True, exist_ok=True)


def report_tz() -> ZoneInfo:
    """Return the time zone used to turn timestamps into calendar days."""
    return ZoneInfo(REPORT_TIMEZONE)
