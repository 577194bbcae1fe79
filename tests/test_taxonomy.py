"""Mini README: Tests for the expense taxonomy editor.

Structure:
    * duplicate names - categories and items reject collisions, leaving state intact.
    * reordering - drag-and-drop and arrow steps agree, moves are invertible.
    * working copy - nothing leaks into the source structure before commit.
"""

from __future__ import annotations

import pytest

from pnltracker.errors import DuplicateName
from pnltracker.taxonomy import ExpenseStructure, ExpenseTaxonomy, ItemTemplate, default_structure
from pnltracker.taxonomy.structure import parse_default_value
from pnltracker.utils import move_element


def _structure() -> ExpenseStructure:
    return ExpenseStructure(
        categories={
            "Vegetables": [ItemTemplate("Onion", 50.0), ItemTemplate("Tomato", 30.0)],
            "Groceries": [ItemTemplate("Rice", 0.0)],
            "Staff": [],
            "Fixed": [ItemTemplate("Rent", 500.0)],
        },
        bill_upload_categories=["Groceries"],
    )


def test_add_category_rejects_trimmed_duplicate() -> None:
    editor = ExpenseTaxonomy(_structure())

    with pytest.raises(DuplicateName):
        editor.add_category("  Staff ")

    assert editor.category_names() == ["Vegetables", "Groceries", "Staff", "Fixed"]
    assert editor.add_category(" Dairy ") == "Dairy"
    assert editor.category_names()[-1] == "Dairy"
    assert editor.item_names("Dairy") == []


def test_blank_category_name_is_rejected() -> None:
    editor = ExpenseTaxonomy(_structure())

    with pytest.raises(ValueError):
        editor.add_category("   ")


def test_add_item_is_case_insensitive_and_appends() -> None:
    editor = ExpenseTaxonomy(_structure())

    with pytest.raises(DuplicateName):
        editor.add_item("Vegetables", "onion", 10)

    editor.add_item("Vegetables", "Potato", "25")
    assert editor.item_names("Vegetables") == ["Onion", "Tomato", "Potato"]
    assert editor.commit().categories["Vegetables"][-1].default_value == pytest.approx(25.0)


def test_add_item_to_unknown_category_raises_key_error() -> None:
    editor = ExpenseTaxonomy(_structure())

    with pytest.raises(KeyError):
        editor.add_item("Meat", "Chicken")


def test_add_then_delete_item_restores_order() -> None:
    editor = ExpenseTaxonomy(_structure())
    before = editor.item_names("Vegetables")

    editor.add_item("Vegetables", "Garlic")
    editor.delete_item("Vegetables", "Garlic")

    assert editor.item_names("Vegetables") == before


def test_delete_category_clears_bill_upload_flag() -> None:
    editor = ExpenseTaxonomy(_structure())

    editor.delete_category("Groceries")

    assert "Groceries" not in editor.category_names()
    assert editor.bill_upload_categories() == []


def test_reorder_categories_is_invertible() -> None:
    editor = ExpenseTaxonomy(_structure())
    original = editor.category_names()

    moved = editor.reorder_categories(2, 0)
    assert moved == ["Staff", "Vegetables", "Groceries", "Fixed"]
    restored = editor.reorder_categories(0, 2)

    assert restored == original


def test_arrow_steps_match_drag_and_drop() -> None:
    dragged = ExpenseTaxonomy(_structure())
    stepped = ExpenseTaxonomy(_structure())

    dragged.reorder_categories(1, 2)
    stepped.move_category_down(1)
    assert dragged.category_names() == stepped.category_names()

    dragged.reorder_items("Vegetables", 1, 0)
    stepped.move_item_up("Vegetables", 1)
    assert dragged.item_names("Vegetables") == stepped.item_names("Vegetables") == ["Tomato", "Onion"]


def test_arrow_step_at_edge_keeps_order() -> None:
    editor = ExpenseTaxonomy(_structure())

    assert editor.move_category_up(0) == ["Vegetables", "Groceries", "Staff", "Fixed"]
    assert editor.move_category_down(3) == ["Vegetables", "Groceries", "Staff", "Fixed"]


def test_move_element_rejects_out_of_range() -> None:
    with pytest.raises(IndexError):
        move_element(["a", "b"], 0, 2)


def test_bill_upload_toggle() -> None:
    editor = ExpenseTaxonomy(_structure())

    editor.set_bill_upload_enabled("Vegetables", True)
    editor.set_bill_upload_enabled("Vegetables", True)
    editor.set_bill_upload_enabled("Groceries", False)

    assert editor.bill_upload_categories() == ["Vegetables"]


def test_edits_stay_private_until_commit() -> None:
    source = _structure()
    editor = ExpenseTaxonomy(source)

    editor.add_item("Staff", "Cook", 400)
    editor.set_default_value("Vegetables", "onion", "not a number")
    committed = editor.commit()

    assert source.categories["Staff"] == []
    assert source.categories["Vegetables"][0].default_value == pytest.approx(50.0)
    assert committed.categories["Vegetables"][0].default_value == 0.0

    editor.add_item("Staff", "Helper")
    assert [item.name for item in committed.categories["Staff"]] == ["Cook"]


def test_structure_round_trips_through_persisted_shape() -> None:
    structure = default_structure()

    restored = ExpenseStructure.from_dict(structure.as_dict())

    assert restored.category_names() == structure.category_names()
    assert restored.bill_upload_categories == structure.bill_upload_categories


def test_from_dict_drops_flags_for_missing_categories() -> None:
    restored = ExpenseStructure.from_dict(
        {"structure": {"Dairy": [{"name": "Milk", "defaultValue": 40}]}, "billUploadCategories": ["Dairy", "Gone"]}
    )

    assert restored.bill_upload_categories == ["Dairy"]
    assert restored.categories["Dairy"][0].default_value == pytest.approx(40.0)


@pytest.mark.parametrize("raw", ["abc", -5, float("nan"), None, ""])
def test_invalid_defaults_become_zero_when_loaded_or_edited(raw) -> None:
    restored = ExpenseStructure.from_dict({"structure": {"Dairy": [{"name": "Milk", "defaultValue": raw}]}})
    editor = ExpenseTaxonomy(restored)

    assert restored.categories["Dairy"][0].default_value == 0.0
    assert editor.set_default_value("Dairy", "Milk", raw) == 0.0
    assert parse_default_value("12.5") == pytest.approx(12.5)
