"""Mini README: Daily record data model.

Structure:
    * ExpenseItem - one expense line with its amount and bill photo refs.
    * ExpenseCategory - ordered group of expense items.
    * DailyRecord - one calendar day's sales, expense tree and status flags.
    * new_identifier / parse_date - small helpers shared by the factory.

Records serialise to the camelCase shape kept by the storage collaborator
(``id``, ``date``, ``morningSales``, ``totalSales``, ``expenses``,
``isClosed``, ``isCompleted``). ``clone`` performs an explicit deep copy so a
form's working record never aliases the stored one.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Dict, List, Mapping, Optional
from uuid import uuid4


def new_identifier() -> str:
    """Generate a unique identifier for records, categories and items."""

    return str(uuid4())


def parse_date(value: object) -> Optional[date]:
    """Parse ISO strings or date objects; blank input means no date."""

    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return date.fromisoformat(value.strip())
    raise ValueError("Dates must be provided as ISO strings or date/datetime instances.")


def coerce_amount(value: object) -> float:
    """Lenient numeric coercion used for computation: falsy or NaN is 0."""

    if not value:
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return 0.0 if math.isnan(number) else number


@dataclass(slots=True)
class ExpenseItem:
    """Single expense line owned by a category."""

    item_id: str
    name: str
    amount: float = 0.0
    bill_photos: List[str] = field(default_factory=list)

    def clone(self) -> "ExpenseItem":
        return ExpenseItem(self.item_id, self.name, self.amount, list(self.bill_photos))

    def as_dict(self) -> Dict[str, object]:
        return {
            "id": self.item_id,
            "name": self.name,
            "amount": self.amount,
            "billPhotos": list(self.bill_photos),
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, object]) -> "ExpenseItem":
        return cls(
            item_id=str(payload.get("id") or new_identifier()),
            name=str(payload["name"]),
            amount=coerce_amount(payload.get("amount")),
            bill_photos=[str(photo) for photo in (payload.get("billPhotos") or [])],
        )


@dataclass(slots=True)
class ExpenseCategory:
    """Ordered group of expense items."""

    category_id: str
    name: str
    items: List[ExpenseItem] = field(default_factory=list)

    @property
    def total(self) -> float:
        return sum(coerce_amount(item.amount) for item in self.items)

    @property
    def active_count(self) -> int:
        """Number of items with a positive amount."""

        return sum(1 for item in self.items if coerce_amount(item.amount) > 0)

    def find_item(self, item_id: str) -> ExpenseItem:
        for item in self.items:
            if item.item_id == item_id:
                return item
        raise KeyError(f"Item {item_id} not found in category {self.name}")

    def has_item_named(self, name: str) -> bool:
        wanted = name.strip().lower()
        return any(item.name.lower() == wanted for item in self.items)

    def clone(self) -> "ExpenseCategory":
        return ExpenseCategory(self.category_id, self.name, [item.clone() for item in self.items])

    def as_dict(self) -> Dict[str, object]:
        return {
            "id": self.category_id,
            "name": self.name,
            "items": [item.as_dict() for item in self.items],
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, object]) -> "ExpenseCategory":
        return cls(
            category_id=str(payload.get("id") or new_identifier()),
            name=str(payload["name"]),
            items=[ExpenseItem.from_dict(item) for item in (payload.get("items") or [])],
        )


@dataclass(slots=True)
class DailyRecord:
    """One day's ledger entry.

    ``total_sales`` and ``morning_sales`` stay ``None`` until entered so the
    lifecycle can tell "not provided" apart from an explicit zero.
    """

    record_id: str
    record_date: Optional[date]
    morning_sales: Optional[float] = None
    total_sales: Optional[float] = None
    expenses: List[ExpenseCategory] = field(default_factory=list)
    is_closed: bool = False
    is_completed: bool = False

    @property
    def night_sales(self) -> float:
        return coerce_amount(self.total_sales) - coerce_amount(self.morning_sales)

    def find_category(self, category_id: str) -> ExpenseCategory:
        for category in self.expenses:
            if category.category_id == category_id:
                return category
        raise KeyError(f"Category {category_id} not found in record {self.record_id}")

    def category_named(self, name: str) -> Optional[ExpenseCategory]:
        for category in self.expenses:
            if category.name == name:
                return category
        return None

    def active_categories(self) -> List[ExpenseCategory]:
        """Categories with at least one positive amount, in display order."""

        return [category for category in self.expenses if category.active_count > 0]

    def clone(self) -> "DailyRecord":
        return DailyRecord(
            record_id=self.record_id,
            record_date=self.record_date,
            morning_sales=self.morning_sales,
            total_sales=self.total_sales,
            expenses=[category.clone() for category in self.expenses],
            is_closed=self.is_closed,
            is_completed=self.is_completed,
        )

    def as_dict(self) -> Dict[str, object]:
        return {
            "id": self.record_id,
            "date": self.record_date.isoformat() if self.record_date else "",
            "morningSales": coerce_amount(self.morning_sales),
            "totalSales": coerce_amount(self.total_sales),
            "expenses": [category.as_dict() for category in self.expenses],
            "isClosed": self.is_closed,
            "isCompleted": self.is_completed,
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, object]) -> "DailyRecord":
        """Decode a stored record.

        Legacy records written before the three-state status have no
        ``isCompleted`` key; those decode as completed.
        """

        is_closed = bool(payload.get("isClosed", False))
        raw_completed = payload.get("isCompleted")
        is_completed = True if raw_completed is None else bool(raw_completed)
        return cls(
            record_id=str(payload.get("id") or new_identifier()),
            record_date=parse_date(payload.get("date")),
            morning_sales=coerce_amount(payload.get("morningSales")),
            total_sales=coerce_amount(payload.get("totalSales")),
            expenses=[ExpenseCategory.from_dict(category) for category in (payload.get("expenses") or [])],
            is_closed=is_closed,
            is_completed=is_completed or is_closed,
        )
