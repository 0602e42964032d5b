'''
    File Name: transaction.py
    Version: 3.0.0
    Date: 19/10/2026
    Author: Pablo Bartolomé Molina
    Description: Transaction data model for the expense tracker ledger.
'''
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
import math
import uuid

import config
from models.errors import CorruptPersistedState, InvalidAmount


class TransactionKind(str, Enum):
    INCOME = "income"
    EXPENSE = "expense"

    @classmethod
    def parse(cls, value) -> "TransactionKind":
        """Accept a member or its name/value in any case. Unknown kinds raise ValueError."""
        if isinstance(value, cls):
            return value
        text = str(value).strip().lower()
        for member in cls:
            if text in (member.value, member.name.lower()):
                return member
        raise ValueError(f"Unknown transaction kind: {value!r}")

    @property
    def sign(self) -> int:
        return 1 if self is TransactionKind.INCOME else -1


class Category(str, Enum):
    FOOD = "Food"
    TRANSPORT = "Transport"
    ENTERTAINMENT = "Entertainment"
    SHOPPING = "Shopping"
    BILLS = "Bills"
    HEALTHCARE = "Healthcare"
    OTHER = "Other"

    @classmethod
    def parse(cls, value) -> "Category":
        """Map user input onto a known category, falling back to OTHER."""
        if isinstance(value, cls):
            return value
        if value is None:
            return cls.OTHER
        text = str(value).strip().lower()
        for member in cls:
            if text == member.value.lower():
                return member
        return cls.OTHER


def parse_amount(value) -> float:
    """Convert caller input to a positive finite float or raise InvalidAmount.

    Numeric strings are accepted since amounts usually come from text fields.
    """
    if isinstance(value, bool) or value is None:
        raise InvalidAmount(value)
    try:
        amount = float(value)
    except (TypeError, ValueError):
        raise InvalidAmount(value) from None
    if not math.isfinite(amount) or amount <= 0:
        raise InvalidAmount(value)
    return amount


def default_description(kind: TransactionKind) -> str:
    if kind is TransactionKind.INCOME:
        return config.DEFAULT_INCOME_DESCRIPTION
    return config.DEFAULT_EXPENSE_DESCRIPTION


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 timestamp. Naive values are read as UTC."""
    text = str(value).strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    ts = datetime.fromisoformat(text)
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts


@dataclass(frozen=True)
class Transaction:
    """
    A single immutable ledger entry.

    Attributes:
        id: Unique identifier, never reused
        amount: Positive amount in the ledger's currency
        kind: INCOME adds to the balance, EXPENSE subtracts from it
        category: Spending category (OTHER when not recognized)
        description: Free-text label, never empty
        occurred_at: Timezone-aware instant the entry was recorded
    """
    id: str
    amount: float
    kind: TransactionKind
    category: Category
    description: str
    occurred_at: datetime

    def __post_init__(self):
        """Validate transaction data after initialization."""
        if not self.id:
            raise ValueError("Transaction id cannot be empty")
        if isinstance(self.amount, bool) or not math.isfinite(self.amount) or self.amount <= 0:
            raise InvalidAmount(self.amount)
        if not isinstance(self.kind, TransactionKind):
            raise ValueError(f"Invalid kind: {self.kind!r}")
        if not isinstance(self.category, Category):
            raise ValueError(f"Invalid category: {self.category!r}")
        if not self.description or not self.description.strip():
            raise ValueError("Description cannot be empty")
        if self.occurred_at.tzinfo is None:
            raise ValueError("occurred_at must be timezone-aware")

    @classmethod
    def create(cls, amount, description, kind, category=Category.OTHER, occurred_at=None) -> "Transaction":
        """Validate raw caller input and build a new entry with a fresh id."""
        amount = parse_amount(amount)
        kind = TransactionKind.parse(kind)
        description = (description or "").strip() or default_description(kind)
        if occurred_at is None:
            occurred_at = datetime.now(timezone.utc)
        elif occurred_at.tzinfo is None:
            occurred_at = occurred_at.replace(tzinfo=timezone.utc)
        return cls(
            id=uuid.uuid4().hex,
            amount=amount,
            kind=kind,
            category=Category.parse(category),
            description=description,
            occurred_at=occurred_at,
        )

    @property
    def signed_amount(self) -> float:
        return self.kind.sign * self.amount

    def to_dict(self) -> dict:
        """Convert transaction to a JSON-compatible dictionary."""
        return {
            "id": self.id,
            "amount": self.amount,
            "type": self.kind.value,
            "category": self.category.value,
            "description": self.description,
            "date": self.occurred_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Transaction":
        """Create a Transaction from a persisted dictionary.

        Raises CorruptPersistedState when a field is missing or invalid.
        """
        if not isinstance(data, dict):
            raise CorruptPersistedState(f"Expected a transaction object, got {type(data).__name__}")
        try:
            kind = TransactionKind.parse(data["type"])
            description = str(data.get("description") or "").strip() or default_description(kind)
            return cls(
                id=str(data["id"]),
                amount=parse_amount(data["amount"]),
                kind=kind,
                category=Category.parse(data.get("category")),
                description=description,
                occurred_at=parse_timestamp(data["date"]),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise CorruptPersistedState(f"Malformed transaction {data!r}: {exc}") from exc

    def __repr__(self) -> str:
        return (
            f"Transaction(id={self.id}, kind={self.kind.value}, amount={self.amount}, "
            f"category='{self.category.value}', desc='{self.description}', "
            f"date={self.occurred_at.isoformat()})"
        )
