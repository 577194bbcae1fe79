"""Mini README: Tests for the record model and factory.

Structure:
    * instantiate_from_structure - templates become independent items.
    * amount, photo and sales edits - strict input parsing.
    * add_custom_item_to_record - duplicates rejected, optional template save.
    * clone / persisted shape - no aliasing, legacy status decoding.
"""

from __future__ import annotations

from datetime import date

import pytest

from pnltracker.errors import DuplicateName, ValidationError
from pnltracker.records import (
    DailyRecord,
    add_custom_item_to_record,
    apply_amount_edit,
    apply_photo_edit,
    apply_sales_edit,
    instantiate_from_structure,
    new_record,
    parse_amount,
)
from pnltracker.taxonomy import ExpenseStructure, ExpenseTaxonomy, ItemTemplate


def _structure() -> ExpenseStructure:
    return ExpenseStructure(
        categories={
            "Vegetables": [ItemTemplate("Onion", 50.0), ItemTemplate("Tomato", 30.0)],
            "Groceries": [ItemTemplate("Rice", 0.0)],
        },
        bill_upload_categories=["Groceries"],
    )


def test_instantiate_from_structure_copies_defaults() -> None:
    structure = _structure()

    expenses = instantiate_from_structure(structure)

    vegetables = expenses[0]
    assert [category.name for category in expenses] == ["Vegetables", "Groceries"]
    assert [item.name for item in vegetables.items] == ["Onion", "Tomato"]
    assert [item.amount for item in vegetables.items] == [50.0, 30.0]
    assert all(item.bill_photos == [] for item in vegetables.items)

    vegetables.items[0].amount = 75.0
    assert vegetables.items[1].amount == 30.0
    assert structure.categories["Vegetables"][0].default_value == 50.0


def test_instantiate_assigns_unique_ids() -> None:
    first = instantiate_from_structure(_structure())
    second = instantiate_from_structure(_structure())

    ids = [category.category_id for category in first + second]
    ids += [item.item_id for category in first + second for item in category.items]
    assert len(ids) == len(set(ids))


def test_new_record_defaults_to_in_progress() -> None:
    record = new_record(_structure(), on=date(2024, 3, 1))

    assert record.record_date == date(2024, 3, 1)
    assert record.is_closed is False
    assert record.is_completed is False
    assert record.total_sales is None


def test_apply_amount_edit_parses_strictly() -> None:
    record = new_record(_structure(), on=date(2024, 3, 1))
    category = record.expenses[0]
    onion = category.items[0]

    apply_amount_edit(record, category.category_id, onion.item_id, "120.5")
    assert onion.amount == pytest.approx(120.5)

    apply_amount_edit(record, category.category_id, onion.item_id, "")
    assert onion.amount == 0.0

    with pytest.raises(ValidationError):
        apply_amount_edit(record, category.category_id, onion.item_id, "12o")
    assert onion.amount == 0.0

    with pytest.raises(ValidationError):
        apply_amount_edit(record, category.category_id, onion.item_id, "-5")


@pytest.mark.parametrize("raw", ["abc", "nan", "inf", True])
def test_parse_amount_rejects_non_numbers(raw) -> None:
    with pytest.raises(ValidationError):
        parse_amount(raw)


def test_apply_amount_edit_unknown_item() -> None:
    record = new_record(_structure(), on=date(2024, 3, 1))

    with pytest.raises(KeyError):
        apply_amount_edit(record, record.expenses[0].category_id, "missing", "10")


def test_apply_photo_edit_replaces_list() -> None:
    record = new_record(_structure(), on=date(2024, 3, 1))
    groceries = record.expenses[1]
    rice = groceries.items[0]

    apply_photo_edit(record, groceries.category_id, rice.item_id, ["bill-1.png", "bill-2.png"])
    apply_photo_edit(record, groceries.category_id, rice.item_id, ["bill-2.png"])

    assert rice.bill_photos == ["bill-2.png"]


def test_apply_sales_edit_blank_means_not_provided() -> None:
    record = new_record(_structure(), on=date(2024, 3, 1))

    apply_sales_edit(record, "", "4500")
    assert record.morning_sales is None
    assert record.total_sales == pytest.approx(4500.0)
    assert record.night_sales == pytest.approx(4500.0)

    with pytest.raises(ValidationError):
        apply_sales_edit(record, "1000", "lots")


def test_add_custom_item_rejects_duplicate() -> None:
    record = new_record(_structure(), on=date(2024, 3, 1))
    category_id = record.expenses[0].category_id

    with pytest.raises(DuplicateName):
        add_custom_item_to_record(record, category_id, "TOMATO")

    item = add_custom_item_to_record(record, category_id, "Garlic")
    assert item.amount == 0.0
    assert [entry.name for entry in record.expenses[0].items] == ["Onion", "Tomato", "Garlic"]


def test_add_custom_item_can_save_template_without_touching_other_records() -> None:
    structure = _structure()
    other = new_record(structure, on=date(2024, 3, 1))
    record = new_record(structure, on=date(2024, 3, 2))
    editor = ExpenseTaxonomy(structure)

    add_custom_item_to_record(record, record.expenses[1].category_id, "Oil", taxonomy=editor, default_value=90)

    assert editor.item_names("Groceries") == ["Rice", "Oil"]
    assert editor.commit().categories["Groceries"][-1].default_value == pytest.approx(90.0)
    assert [item.name for item in other.expenses[1].items] == ["Rice"]
    assert [item.name for item in structure.categories["Groceries"]] == ["Rice"]


def test_clone_does_not_alias() -> None:
    record = new_record(_structure(), on=date(2024, 3, 1))
    copy = record.clone()

    copy.expenses[0].items[0].amount = 999.0
    copy.expenses[0].items[0].bill_photos.append("x.png")

    assert record.expenses[0].items[0].amount == 50.0
    assert record.expenses[0].items[0].bill_photos == []


def test_from_dict_treats_missing_is_completed_as_completed() -> None:
    legacy = DailyRecord.from_dict({"id": "r1", "date": "2023-12-01", "totalSales": 1000, "expenses": []})
    explicit = DailyRecord.from_dict(
        {"id": "r2", "date": "2023-12-02", "totalSales": 0, "expenses": [], "isCompleted": False}
    )

    assert legacy.is_completed is True
    assert explicit.is_completed is False


def test_as_dict_uses_persisted_field_names() -> None:
    record = new_record(_structure(), on=date(2024, 3, 1))

    payload = record.as_dict()

    assert set(payload) == {"id", "date", "morningSales", "totalSales", "expenses", "isClosed", "isCompleted"}
    assert payload["date"] == "2024-03-01"
    assert set(payload["expenses"][0]["items"][0]) == {"id", "name", "amount", "billPhotos"}
