"""Mini README: Daily ledger service tying the engine to a storage backend.

Structure:
    * DailyLedger - loads records, the expense structure and the gas ledger
      from a ``RecordStore``, validates saves through the record lifecycle
      and builds the dashboard payload from the aggregator.

In-memory state changes only after the store confirms a write, so a failed
save or delete leaves the previous state visible. Storage failures surface
as ``SaveFailed``/``DeleteFailed``; nothing is retried here.
"""

from __future__ import annotations

from datetime import date
from typing import Callable, Dict, Iterable, List, Optional, TypeVar

from ..configuration import GasConfig
from ..errors import DeleteFailed, SaveFailed
from ..gas import GasEvent, GasLedger
from ..logging_utils import get_logger
from ..metrics import (
    CostCategories,
    chart_window,
    compare_months,
    inventory_watch,
    pulse_summary,
    trend_series,
)
from ..records import (
    DailyRecord,
    ExpenseItem,
    RecordStatus,
    add_custom_item_to_record,
    finalise_for_save,
    new_record,
)
from ..storage import RecordStore
from ..taxonomy import ExpenseStructure, ExpenseTaxonomy, default_structure

LOGGER = get_logger(__name__)

T = TypeVar("T")


class DailyLedger:
    """Manage daily records, the expense taxonomy and gas stock for one shop."""

    def __init__(
        self,
        store: RecordStore,
        gas_config: GasConfig,
        *,
        seed_default_structure: bool = True,
    ) -> None:
        self._store = store
        self._records: Dict[str, DailyRecord] = {}
        for payload in store.load_records():
            record = DailyRecord.from_dict(payload)
            self._records[record.record_id] = record

        stored_structure = store.load_structure()
        if stored_structure is not None:
            self._structure = ExpenseStructure.from_dict(stored_structure)
        elif seed_default_structure:
            self._structure = default_structure()
        else:
            self._structure = ExpenseStructure()

        self._gas = GasLedger.from_dict(gas_config, store.load_gas())
        LOGGER.debug("Daily ledger initialised with %s records", len(self._records))

    def _persist(self, action: Callable[[], T], description: str, failure=SaveFailed) -> T:
        """Run a storage call, translating any backend failure."""

        try:
            return action()
        except Exception as error:
            LOGGER.exception("Storage failure while trying to %s", description)
            raise failure(f"Failed to {description}: {error}") from error

    # -- records ------------------------------------------------------
    def list_records(self) -> List[DailyRecord]:
        """Return records ordered by most recent date first."""

        return sorted(
            self._records.values(),
            key=lambda record: (record.record_date or date.min, record.record_id),
            reverse=True,
        )

    def get_record(self, record_id: str) -> DailyRecord:
        """Retrieve a record, raising informative errors when missing."""

        if record_id not in self._records:
            raise KeyError(f"Record {record_id} not found")
        return self._records[record_id]

    def edit_copy(self, record_id: str) -> DailyRecord:
        """Deep copy of a stored record for a form to mutate."""

        return self.get_record(record_id).clone()

    def new_record(self, on: Optional[date] = None) -> DailyRecord:
        """Fresh IN_PROGRESS record seeded from the current structure."""

        return new_record(self._structure, on=on)

    def save(
        self,
        record: DailyRecord,
        existing_id: Optional[str] = None,
        status: Optional[RecordStatus] = None,
    ) -> DailyRecord:
        """Validate and persist ``record``; replaces ``existing_id`` when given."""

        prepared = finalise_for_save(record, status)
        if existing_id:
            prepared.record_id = existing_id
        self._persist(
            lambda: self._store.save_record(prepared.as_dict()),
            f"save record {prepared.record_id}",
        )
        self._records[prepared.record_id] = prepared
        LOGGER.info(
            "%s record %s for %s",
            "Updated" if existing_id else "Created",
            prepared.record_id,
            prepared.record_date,
        )
        return prepared.clone()

    def delete(self, record_id: str) -> None:
        """Remove a record; unknown ids are left for the store to ignore."""

        self._persist(
            lambda: self._store.delete_record(record_id),
            f"delete record {record_id}",
            failure=DeleteFailed,
        )
        self._records.pop(record_id, None)
        LOGGER.info("Deleted record %s", record_id)

    # -- taxonomy -----------------------------------------------------
    @property
    def structure(self) -> ExpenseStructure:
        return self._structure.clone()

    def taxonomy_editor(self) -> ExpenseTaxonomy:
        """Working-copy editor over the current structure."""

        return ExpenseTaxonomy(self._structure)

    def save_structure(self, structure: ExpenseStructure) -> ExpenseStructure:
        """Persist a committed structure; only new records pick it up."""

        snapshot = structure.clone()
        self._persist(lambda: self._store.save_structure(snapshot.as_dict()), "save expense structure")
        self._structure = snapshot
        LOGGER.info("Saved expense structure with %s categories", len(snapshot.categories))
        return snapshot.clone()

    def save_custom_item(self, category_name: str, item_name: str, default_value: float = 0.0) -> ExpenseStructure:
        """Append an item template to the stored structure."""

        editor = self.taxonomy_editor()
        if not editor.has_category(category_name):
            editor.add_category(category_name)
        editor.add_item(category_name, item_name, default_value)
        return self.save_structure(editor.commit())

    def add_custom_item(
        self,
        record: DailyRecord,
        category_id: str,
        name: str,
        *,
        save_as_template: bool = False,
        default_value: float = 0.0,
    ) -> ExpenseItem:
        """Add a one-off item to a record being edited.

        With ``save_as_template`` the item is also stored in the structure;
        other records are left exactly as they were.
        """

        if not save_as_template:
            return add_custom_item_to_record(record, category_id, name)
        editor = self.taxonomy_editor()
        staged = record.clone()
        item = add_custom_item_to_record(
            staged, category_id, name, taxonomy=editor, default_value=default_value
        )
        self.save_structure(editor.commit())
        record.find_category(category_id).items.append(item)
        return item

    # -- gas ----------------------------------------------------------
    @property
    def gas(self) -> GasLedger:
        return self._gas

    def _apply_gas(self, event: Callable[[GasLedger], GasEvent], description: str) -> GasEvent:
        candidate = GasLedger.from_dict(self._gas.config, self._gas.as_dict())
        applied = event(candidate)
        self._persist(lambda: self._store.save_gas(candidate.as_dict()), description)
        self._gas = candidate
        return applied

    def swap_gas(self, count: Optional[int] = None, on: Optional[date] = None) -> GasEvent:
        return self._apply_gas(lambda ledger: ledger.swap(count, on=on), "record gas swap")

    def refill_gas(self, count: int, on: Optional[date] = None) -> GasEvent:
        return self._apply_gas(lambda ledger: ledger.refill(count, on=on), "record gas refill")

    # -- dashboard ----------------------------------------------------
    def dashboard(
        self,
        today: date,
        *,
        tracked_items: Iterable[str] = (),
        chart_filter: str = "WEEK",
        cost_categories: CostCategories = (),
        watch_alert_days: int = 7,
    ) -> Dict[str, object]:
        """Export every dashboard figure as JSON friendly values."""

        records = self.list_records()
        pulse = pulse_summary(records, today)
        months = compare_months(records, today, cost_categories)
        return {
            "pulse": pulse.as_dict() if pulse else None,
            "trend": [point.as_dict() for point in trend_series(records, chart_window(chart_filter))],
            "watchlist": [
                alert.as_dict()
                for alert in inventory_watch(records, tracked_items, today, watch_alert_days)
            ],
            "gas": self._gas.snapshot(today).as_dict(),
            "month": {
                "current": months["current"].as_dict(),
                "prior": months["prior"].as_dict(),
                "profit_delta_percent": months["profit_delta_percent"],
            },
        }
