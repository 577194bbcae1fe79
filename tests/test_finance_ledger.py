"""Mini README: Tests covering the daily ledger service.

Structure:
    * save / delete - lifecycle validation, replace by id, storage failures.
    * taxonomy - structure edits only affect new records.
    * gas - events persist, failed events leave state untouched.
    * dashboard - combined payload shape.
"""

from __future__ import annotations

from datetime import date

import pytest

from pnltracker.configuration import GasConfig
from pnltracker.errors import DeleteFailed, InsufficientStock, SaveFailed, ValidationError
from pnltracker.finance import DailyLedger
from pnltracker.records import RecordStatus, apply_amount_edit, apply_sales_edit
from pnltracker.storage import InMemoryRecordStore
from pnltracker.taxonomy import ExpenseStructure, ItemTemplate

CONFIG = GasConfig(total_cylinders=6, cylinders_per_bank=2)


class FlakyStore(InMemoryRecordStore):
    """Store whose writes fail while ``broken`` is set."""

    def __init__(self) -> None:
        super().__init__()
        self.broken = False

    def save_record(self, payload) -> None:
        if self.broken:
            raise OSError("disk full")
        super().save_record(payload)

    def delete_record(self, record_id: str) -> None:
        if self.broken:
            raise OSError("disk full")
        super().delete_record(record_id)

    def save_gas(self, payload) -> None:
        if self.broken:
            raise OSError("disk full")
        super().save_gas(payload)

    def save_structure(self, payload) -> None:
        if self.broken:
            raise OSError("disk full")
        super().save_structure(payload)


def _ledger(store=None) -> DailyLedger:
    store = store or InMemoryRecordStore()
    store.save_structure(
        ExpenseStructure(
            categories={
                "Vegetables": [ItemTemplate("Onion", 50.0), ItemTemplate("Tomato", 30.0)],
                "Groceries": [ItemTemplate("Rice", 0.0)],
            }
        ).as_dict()
    )
    return DailyLedger(store, CONFIG)


def _completed(ledger: DailyLedger, on: date, sales: str):
    record = ledger.new_record(on)
    apply_sales_edit(record, "", sales)
    return ledger.save(record, status=RecordStatus.COMPLETED)


def test_save_creates_and_lists_descending() -> None:
    ledger = _ledger()

    _completed(ledger, date(2024, 3, 1), "1000")
    _completed(ledger, date(2024, 3, 2), "1200")

    assert [record.record_date for record in ledger.list_records()] == [date(2024, 3, 2), date(2024, 3, 1)]


def test_save_validation_blocks_persistence() -> None:
    store = InMemoryRecordStore()
    ledger = _ledger(store)
    record = ledger.new_record(date(2024, 3, 1))

    with pytest.raises(ValidationError):
        ledger.save(record, status=RecordStatus.COMPLETED)

    assert store.load_records() == []
    assert ledger.list_records() == []


def test_save_with_existing_id_replaces_record() -> None:
    ledger = _ledger()
    saved = _completed(ledger, date(2024, 3, 1), "1000")

    working = ledger.edit_copy(saved.record_id)
    category = working.expenses[0]
    apply_amount_edit(working, category.category_id, category.items[0].item_id, "80")
    ledger.save(working, saved.record_id)

    assert len(ledger.list_records()) == 1
    assert ledger.get_record(saved.record_id).expenses[0].items[0].amount == pytest.approx(80.0)


def test_edit_copy_is_independent_until_saved() -> None:
    ledger = _ledger()
    saved = _completed(ledger, date(2024, 3, 1), "1000")

    working = ledger.edit_copy(saved.record_id)
    working.expenses[0].items[0].amount = 999.0

    assert ledger.get_record(saved.record_id).expenses[0].items[0].amount == pytest.approx(50.0)


def test_failed_save_keeps_previous_state() -> None:
    store = FlakyStore()
    ledger = _ledger(store)
    saved = _completed(ledger, date(2024, 3, 1), "1000")

    store.broken = True
    working = ledger.edit_copy(saved.record_id)
    apply_sales_edit(working, "", "5000")
    with pytest.raises(SaveFailed):
        ledger.save(working, saved.record_id)

    assert ledger.get_record(saved.record_id).total_sales == pytest.approx(1000.0)


def test_failed_delete_keeps_record() -> None:
    store = FlakyStore()
    ledger = _ledger(store)
    saved = _completed(ledger, date(2024, 3, 1), "1000")

    store.broken = True
    with pytest.raises(DeleteFailed):
        ledger.delete(saved.record_id)
    assert ledger.get_record(saved.record_id)

    store.broken = False
    ledger.delete(saved.record_id)
    ledger.delete(saved.record_id)
    with pytest.raises(KeyError):
        ledger.get_record(saved.record_id)


def test_structure_changes_only_affect_new_records() -> None:
    ledger = _ledger()
    existing = _completed(ledger, date(2024, 3, 1), "1000")

    editor = ledger.taxonomy_editor()
    editor.add_item("Vegetables", "Garlic", 20)
    editor.delete_item("Vegetables", "Onion")
    ledger.save_structure(editor.commit())

    fresh = ledger.new_record(date(2024, 3, 2))
    assert [item.name for item in fresh.expenses[0].items] == ["Tomato", "Garlic"]
    assert [item.name for item in ledger.get_record(existing.record_id).expenses[0].items] == ["Onion", "Tomato"]


def test_add_custom_item_saves_template_when_requested() -> None:
    ledger = _ledger()
    record = ledger.new_record(date(2024, 3, 1))

    ledger.add_custom_item(record, record.expenses[1].category_id, "Oil", save_as_template=True)
    ledger.add_custom_item(record, record.expenses[1].category_id, "Salt")

    assert [item.name for item in record.expenses[1].items] == ["Rice", "Oil", "Salt"]
    assert [item.name for item in ledger.structure.categories["Groceries"]] == ["Rice", "Oil"]


def test_failed_template_save_leaves_record_untouched() -> None:
    store = FlakyStore()
    ledger = _ledger(store)
    record = ledger.new_record(date(2024, 3, 1))
    vegetables = record.expenses[0].category_id

    store.broken = True
    with pytest.raises(SaveFailed):
        ledger.add_custom_item(record, vegetables, "Garlic", save_as_template=True)
    assert [item.name for item in record.expenses[0].items] == ["Onion", "Tomato"]
    assert not ledger.taxonomy_editor().has_item("Vegetables", "Garlic")

    store.broken = False
    ledger.add_custom_item(record, vegetables, "Garlic", save_as_template=True)
    assert [item.name for item in record.expenses[0].items] == ["Onion", "Tomato", "Garlic"]
    assert ledger.taxonomy_editor().has_item("Vegetables", "Garlic")


def test_save_custom_item_creates_missing_category() -> None:
    ledger = _ledger()

    structure = ledger.save_custom_item("Dairy", "Milk", 40)

    assert structure.category_names()[-1] == "Dairy"
    assert structure.categories["Dairy"][0].default_value == pytest.approx(40.0)


def test_gas_events_persist_and_failures_roll_back() -> None:
    store = FlakyStore()
    ledger = _ledger(store)

    ledger.swap_gas(on=date(2024, 3, 1))
    assert store.load_gas()["currentStock"] == 2

    with pytest.raises(InsufficientStock):
        ledger.swap_gas(3, on=date(2024, 3, 2))

    store.broken = True
    with pytest.raises(SaveFailed):
        ledger.swap_gas(on=date(2024, 3, 2))
    assert ledger.gas.current_stock == 2
    assert ledger.gas.empty_cylinders == 2


def test_ledger_reloads_from_store() -> None:
    store = InMemoryRecordStore()
    ledger = _ledger(store)
    saved = _completed(ledger, date(2024, 3, 1), "1000")
    ledger.swap_gas(on=date(2024, 3, 1))

    reloaded = DailyLedger(store, CONFIG)

    assert reloaded.get_record(saved.record_id).total_sales == pytest.approx(1000.0)
    assert reloaded.gas.current_stock == 2


def test_dashboard_payload() -> None:
    ledger = _ledger()
    _completed(ledger, date(2024, 3, 8), "1000")
    _completed(ledger, date(2024, 3, 9), "1200")

    payload = ledger.dashboard(
        date(2024, 3, 10),
        tracked_items=["Onion", "Rice"],
        chart_filter="WEEK",
        cost_categories=["Vegetables"],
    )

    assert payload["pulse"]["label"] == "Yesterday"
    assert payload["pulse"]["profit"] == pytest.approx(1120.0)
    assert [point["date"] for point in payload["trend"]] == ["2024-03-08", "2024-03-09"]
    assert [alert["name"] for alert in payload["watchlist"]] == ["Rice", "Onion"]
    assert payload["month"]["current"]["cost_ratios"]["Vegetables"] == pytest.approx(160 / 2200 * 100)
    assert payload["gas"]["current_stock"] == 4
