"""Mini README: Working-copy editor for the expense taxonomy.

Structure:
    * ExpenseTaxonomy - validates and applies category/item edits on a deep
      working copy, exposing the result only through ``commit``.

Every reorder gesture (drag-and-drop or the arrow buttons) goes through
``move_element`` so identical ``(from, to)`` pairs give identical orders.
Rejected edits raise before touching the working copy, so the prior state
is always intact after an exception.
"""

from __future__ import annotations

from typing import List, Optional

from ..errors import DuplicateName
from ..logging_utils import get_logger
from ..utils.ordering import move_element, step_target
from .structure import ExpenseStructure, ItemTemplate, parse_default_value

LOGGER = get_logger(__name__)


def _clean_name(name: str, kind: str) -> str:
    cleaned = (name or "").strip()
    if not cleaned:
        raise ValueError(f"{kind} name cannot be blank.")
    return cleaned


class ExpenseTaxonomy:
    """Editable expense taxonomy operating on a private working copy."""

    def __init__(self, structure: Optional[ExpenseStructure] = None) -> None:
        self._working = structure.clone() if structure is not None else ExpenseStructure()
        LOGGER.debug("Taxonomy editor opened with %s categories", len(self._working.categories))

    # -- read helpers -------------------------------------------------
    def category_names(self) -> List[str]:
        return self._working.category_names()

    def item_names(self, category: str) -> List[str]:
        return [item.name for item in self._items(category)]

    def bill_upload_categories(self) -> List[str]:
        return list(self._working.bill_upload_categories)

    def has_category(self, category: str) -> bool:
        return category.strip() in self._working.categories

    def has_item(self, category: str, name: str) -> bool:
        wanted = name.strip().lower()
        return any(item.name.lower() == wanted for item in self._items(category))

    def _items(self, category: str) -> List[ItemTemplate]:
        key = category.strip()
        if key not in self._working.categories:
            raise KeyError(f"Category '{category}' not found")
        return self._working.categories[key]

    def _item_index(self, category: str, name: str) -> int:
        wanted = name.strip().lower()
        for index, item in enumerate(self._items(category)):
            if item.name.lower() == wanted:
                return index
        raise KeyError(f"Item '{name}' not found in category '{category}'")

    # -- categories ---------------------------------------------------
    def add_category(self, name: str) -> str:
        """Append an empty category; reject names already in use."""

        cleaned = _clean_name(name, "Category")
        if cleaned in self._working.categories:
            LOGGER.warning("Rejected duplicate category '%s'", cleaned)
            raise DuplicateName(cleaned, "taxonomy")
        self._working.categories[cleaned] = []
        LOGGER.debug("Added category '%s'", cleaned)
        return cleaned

    def delete_category(self, name: str) -> None:
        """Remove a category, its items and its bill-upload flag."""

        key = name.strip()
        if key not in self._working.categories:
            raise KeyError(f"Category '{name}' not found")
        del self._working.categories[key]
        self._working.bill_upload_categories = [
            flagged for flagged in self._working.bill_upload_categories if flagged != key
        ]
        LOGGER.debug("Deleted category '%s'", key)

    def reorder_categories(self, from_index: int, to_index: int) -> List[str]:
        """Move one category to a new position keeping the others' order."""

        order = move_element(self.category_names(), from_index, to_index)
        self._working.categories = {name: self._working.categories[name] for name in order}
        return order

    def move_category_up(self, index: int) -> List[str]:
        return self.reorder_categories(index, step_target(index, -1, len(self._working.categories)))

    def move_category_down(self, index: int) -> List[str]:
        return self.reorder_categories(index, step_target(index, 1, len(self._working.categories)))

    # -- items --------------------------------------------------------
    def add_item(self, category: str, name: str, default_value: object = 0) -> ItemTemplate:
        """Append an item template; names compare case-insensitively."""

        cleaned = _clean_name(name, "Item")
        items = self._items(category)
        if any(item.name.lower() == cleaned.lower() for item in items):
            LOGGER.warning("Rejected duplicate item '%s' in '%s'", cleaned, category)
            raise DuplicateName(cleaned, f"category '{category.strip()}'")
        template = ItemTemplate(name=cleaned, default_value=parse_default_value(default_value))
        items.append(template)
        LOGGER.debug("Added item '%s' to '%s'", cleaned, category)
        return template

    def delete_item(self, category: str, name: str) -> None:
        items = self._items(category)
        del items[self._item_index(category, name)]
        LOGGER.debug("Deleted item '%s' from '%s'", name, category)

    def set_default_value(self, category: str, name: str, value: object) -> float:
        template = self._items(category)[self._item_index(category, name)]
        template.default_value = parse_default_value(value)
        return template.default_value

    def reorder_items(self, category: str, from_index: int, to_index: int) -> List[str]:
        key = category.strip()
        self._working.categories[key] = move_element(self._items(key), from_index, to_index)
        return self.item_names(key)

    def move_item_up(self, category: str, index: int) -> List[str]:
        return self.reorder_items(category, index, step_target(index, -1, len(self._items(category))))

    def move_item_down(self, category: str, index: int) -> List[str]:
        return self.reorder_items(category, index, step_target(index, 1, len(self._items(category))))

    # -- flags and commit ---------------------------------------------
    def set_bill_upload_enabled(self, category: str, enabled: bool) -> None:
        key = category.strip()
        if key not in self._working.categories:
            raise KeyError(f"Category '{category}' not found")
        flags = self._working.bill_upload_categories
        if enabled and key not in flags:
            flags.append(key)
        elif not enabled and key in flags:
            flags.remove(key)

    def commit(self) -> ExpenseStructure:
        """Return an independent snapshot of the edited structure for persistence."""

        LOGGER.info(
            "Committing taxonomy with %s categories and %s bill-upload flags",
            len(self._working.categories),
            len(self._working.bill_upload_categories),
        )
        return self._working.clone()
