"""Mini README: Building and editing daily records.

Structure:
    * instantiate_from_structure - materialise a fresh expense tree.
    * new_record - a complete IN_PROGRESS record for a date.
    * parse_amount - strict parsing of user typed amounts.
    * apply_amount_edit / apply_photo_edit / apply_sales_edit - form edits.
    * add_custom_item_to_record - one-off expense line, optionally saved
      back into the taxonomy as a template.

Input parsing here is strict on purpose: a typo must surface as a
``ValidationError`` instead of quietly becoming a zero expense. The
aggregator uses the lenient ``coerce_amount`` for computation only.
"""

from __future__ import annotations

import math
from datetime import date
from typing import Iterable, List, Optional

from ..errors import DuplicateName, ValidationError
from ..logging_utils import get_logger
from ..taxonomy import ExpenseStructure, ExpenseTaxonomy
from .models import DailyRecord, ExpenseCategory, ExpenseItem, new_identifier

LOGGER = get_logger(__name__)


def instantiate_from_structure(structure: ExpenseStructure) -> List[ExpenseCategory]:
    """Build a new expense tree with fresh ids and template default amounts."""

    return [
        ExpenseCategory(
            category_id=new_identifier(),
            name=name,
            items=[
                ExpenseItem(
                    item_id=new_identifier(),
                    name=template.name,
                    amount=float(template.default_value or 0.0),
                    bill_photos=[],
                )
                for template in templates
            ],
        )
        for name, templates in structure.categories.items()
    ]


def new_record(structure: ExpenseStructure, on: Optional[date] = None) -> DailyRecord:
    """Return an IN_PROGRESS record for ``on`` (today by default)."""

    record = DailyRecord(
        record_id=new_identifier(),
        record_date=on or date.today(),
        expenses=instantiate_from_structure(structure),
    )
    LOGGER.debug("Created record %s for %s", record.record_id, record.record_date)
    return record


def parse_amount(raw: object, *, blank: Optional[float] = 0.0) -> Optional[float]:
    """Parse a user entered amount.

    Empty input returns ``blank``. Non-numeric, infinite, NaN or negative
    input raises ``ValidationError``.
    """

    if raw is None or (isinstance(raw, str) and raw.strip() == ""):
        return blank
    if isinstance(raw, bool):
        raise ValidationError(f"Invalid amount: {raw!r}")
    try:
        value = float(raw.strip() if isinstance(raw, str) else raw)
    except (TypeError, ValueError) as error:
        raise ValidationError(f"Invalid amount: {raw!r}") from error
    if math.isnan(value) or math.isinf(value):
        raise ValidationError(f"Invalid amount: {raw!r}")
    if value < 0:
        raise ValidationError(f"Amount cannot be negative: {raw!r}")
    return value


def apply_amount_edit(record: DailyRecord, category_id: str, item_id: str, raw_value: object) -> ExpenseItem:
    """Set an item's amount from raw input; unknown ids raise ``KeyError``."""

    item = record.find_category(category_id).find_item(item_id)
    item.amount = parse_amount(raw_value)
    return item


def apply_photo_edit(
    record: DailyRecord, category_id: str, item_id: str, photos: Iterable[str]
) -> ExpenseItem:
    """Replace an item's bill photo list wholesale."""

    item = record.find_category(category_id).find_item(item_id)
    item.bill_photos = [str(photo) for photo in photos]
    return item


def apply_sales_edit(record: DailyRecord, morning_sales: object = None, total_sales: object = None) -> DailyRecord:
    """Set both sales fields; blank input means "not provided"."""

    morning = parse_amount(morning_sales, blank=None)
    total = parse_amount(total_sales, blank=None)
    record.morning_sales = morning
    record.total_sales = total
    return record


def add_custom_item_to_record(
    record: DailyRecord,
    category_id: str,
    name: str,
    *,
    taxonomy: Optional[ExpenseTaxonomy] = None,
    default_value: float = 0.0,
) -> ExpenseItem:
    """Append a one-off item (amount 0) to a record's category.

    When ``taxonomy`` is passed the item is also added there as a template so
    future records include it. Other existing records are never touched; a
    template that already exists in the taxonomy is left as it is.
    """

    cleaned = (name or "").strip()
    if not cleaned:
        raise ValueError("Item name cannot be blank.")
    category = record.find_category(category_id)
    if category.has_item_named(cleaned):
        raise DuplicateName(cleaned, f"category '{category.name}'")

    item = ExpenseItem(item_id=new_identifier(), name=cleaned, amount=0.0)
    category.items.append(item)
    LOGGER.debug("Added custom item '%s' to record %s", cleaned, record.record_id)

    if taxonomy is not None:
        if not taxonomy.has_category(category.name):
            taxonomy.add_category(category.name)
        if taxonomy.has_item(category.name, cleaned):
            LOGGER.debug("Template '%s' already present in '%s'", cleaned, category.name)
        else:
            taxonomy.add_item(category.name, cleaned, default_value)
    return item
