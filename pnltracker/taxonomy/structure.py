"""Mini README: Expense structure value types.

Structure:
    * ItemTemplate - a named expense line with its default amount.
    * ExpenseStructure - ordered mapping of category name to item templates
      plus the set of categories that accept bill photos.
    * default_structure - built-in structure used on first start.
    * parse_default_value - lenient default amount parsing shared with the editor.

An ``ExpenseStructure`` is plain data: the editor in ``editor.py`` owns all
mutation rules. ``clone`` builds a fully independent tree so a record or a
working copy never aliases the persisted structure.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, Optional


@dataclass(slots=True)
class ItemTemplate:
    """Template for an expense item seeded into new records."""

    name: str
    default_value: float = 0.0

    def as_dict(self) -> Dict[str, object]:
        return {"name": self.name, "defaultValue": self.default_value}


@dataclass(slots=True)
class ExpenseStructure:
    """Ordered expense taxonomy and its bill-upload flags."""

    categories: Dict[str, List[ItemTemplate]] = field(default_factory=dict)
    bill_upload_categories: List[str] = field(default_factory=list)

    def clone(self) -> "ExpenseStructure":
        """Return a deep copy sharing no mutable state with ``self``."""

        return ExpenseStructure(
            categories={
                name: [ItemTemplate(item.name, item.default_value) for item in items]
                for name, items in self.categories.items()
            },
            bill_upload_categories=list(self.bill_upload_categories),
        )

    def category_names(self) -> List[str]:
        return list(self.categories.keys())

    def allows_bill_upload(self, category: str) -> bool:
        return category in self.bill_upload_categories

    def as_dict(self) -> Dict[str, object]:
        """Export in the persisted camelCase shape."""

        return {
            "structure": {
                name: [item.as_dict() for item in items]
                for name, items in self.categories.items()
            },
            "billUploadCategories": list(self.bill_upload_categories),
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, object]) -> "ExpenseStructure":
        """Build a structure from its persisted shape.

        Unknown bill-upload names are dropped so the flag set always refers
        to existing categories.
        """

        raw_structure = payload.get("structure") or {}
        if not isinstance(raw_structure, Mapping):
            raise ValueError("Expense structure must map category names to item lists.")
        categories: Dict[str, List[ItemTemplate]] = {}
        for name, items in raw_structure.items():
            categories[str(name)] = [
                ItemTemplate(
                    name=str(item["name"]),
                    default_value=parse_default_value(item.get("defaultValue")),
                )
                for item in (items or [])
            ]
        flags = [
            str(name)
            for name in (payload.get("billUploadCategories") or [])
            if str(name) in categories
        ]
        return cls(categories=categories, bill_upload_categories=flags)


def parse_default_value(value: Optional[object]) -> float:
    """Lenient default parsing: anything non-numeric or negative becomes 0."""

    try:
        number = float(value) if value not in (None, "") else 0.0
    except (TypeError, ValueError):
        return 0.0
    return number if number == number and number >= 0 else 0.0


def _templates(pairs: Iterable[tuple]) -> List[ItemTemplate]:
    return [ItemTemplate(name, float(default)) for name, default in pairs]


def default_structure() -> ExpenseStructure:
    """Return the starter taxonomy for a small food shop."""

    return ExpenseStructure(
        categories={
            "Vegetables": _templates([("Onion", 0), ("Tomato", 0), ("Potato", 0), ("Green Chilli", 0)]),
            "Groceries": _templates([("Rice", 0), ("Oil", 0), ("Flour", 0), ("Sugar", 0)]),
            "Dairy": _templates([("Milk", 0), ("Curd", 0), ("Paneer", 0)]),
            "Meat": _templates([("Chicken", 0), ("Mutton", 0), ("Eggs", 0)]),
            "Staff": _templates([("Cook", 0), ("Helper", 0)]),
            "Utilities": _templates([("Gas", 0), ("Electricity", 0), ("Water", 0)]),
            "Fixed": _templates([("Rent", 0)]),
        },
        bill_upload_categories=["Groceries", "Meat"],
    )
