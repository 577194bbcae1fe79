"""Mini README: FastAPI JSON service over the daily ledger.

Structure:
    * create_application - application factory wiring routes to a
      ``DailyLedger`` built from settings (or one passed in by tests).
    * Payload models - Pydantic bodies for record, taxonomy and gas calls.

Engine errors are translated into HTTP errors in one place: unknown ids give
404, name collisions 409, validation and stock errors 400, and storage
failures 503 so the client can offer a retry.
"""

from __future__ import annotations

from datetime import date
from typing import Any, Dict, List, Optional, Union

from fastapi import FastAPI, HTTPException, Query
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from ..configuration import PnlTrackerSettings, get_settings
from ..errors import DeleteFailed, DuplicateName, LedgerError, SaveFailed
from ..finance import DailyLedger
from ..logging_utils import configure_root_logger, get_logger, level_for_environment
from ..metrics import category_totals, profit, total_expenses
from ..records import (
    DailyRecord,
    ExpenseCategory,
    ExpenseItem,
    RecordStatus,
    apply_sales_edit,
    parse_amount,
    parse_date,
    record_status,
)
from ..records.models import new_identifier
from ..storage import STORE_REGISTRY
from ..taxonomy import ExpenseTaxonomy
from ..utils import format_signed_amount

LOGGER = get_logger(__name__)

RawNumber = Optional[Union[float, str]]


class ItemPayload(BaseModel):
    id: Optional[str] = None
    name: str
    amount: RawNumber = None
    billPhotos: List[str] = Field(default_factory=list)


class CategoryPayload(BaseModel):
    id: Optional[str] = None
    name: str
    items: List[ItemPayload] = Field(default_factory=list)


class RecordPayload(BaseModel):
    date: Optional[str] = None
    morningSales: RawNumber = None
    totalSales: RawNumber = None
    status: str = RecordStatus.IN_PROGRESS.value
    expenses: List[CategoryPayload] = Field(default_factory=list)


class StructurePayload(BaseModel):
    structure: Dict[str, List[Dict[str, Any]]]
    billUploadCategories: List[str] = Field(default_factory=list)


class CustomItemPayload(BaseModel):
    category: str
    name: str
    defaultValue: float = Field(0.0, ge=0)


class GasEventPayload(BaseModel):
    count: Optional[int] = Field(None, ge=1)
    date: Optional[str] = None


def build_ledger(settings: PnlTrackerSettings) -> DailyLedger:
    """Create the ledger for the configured storage backend."""

    store = STORE_REGISTRY.create(settings.storage_backend, data_directory=settings.data_directory)
    return DailyLedger(
        store,
        settings.gas_config(),
        seed_default_structure=settings.seed_default_structure,
    )


def _record_from_payload(payload: RecordPayload) -> DailyRecord:
    """Build a working record, parsing every amount strictly."""

    expenses = [
        ExpenseCategory(
            category_id=category.id or new_identifier(),
            name=category.name,
            items=[
                ExpenseItem(
                    item_id=item.id or new_identifier(),
                    name=item.name,
                    amount=parse_amount(item.amount),
                    bill_photos=list(item.billPhotos),
                )
                for item in category.items
            ],
        )
        for category in payload.expenses
    ]
    record = DailyRecord(
        record_id=new_identifier(),
        record_date=parse_date(payload.date),
        expenses=expenses,
    )
    return apply_sales_edit(record, payload.morningSales, payload.totalSales)


def _record_view(record: DailyRecord, currency_symbol: str) -> Dict[str, object]:
    view = record.as_dict()
    view.update(
        {
            "status": record_status(record).value,
            "totalExpenses": total_expenses(record),
            "profit": profit(record),
            "profitLabel": format_signed_amount(profit(record), currency_symbol),
            "nightSales": record.night_sales,
            "categoryTotals": category_totals(record),
        }
    )
    return view


def _http_error(error: Exception) -> HTTPException:
    if isinstance(error, KeyError):
        return HTTPException(status_code=404, detail=str(error.args[0] if error.args else error))
    if isinstance(error, DuplicateName):
        return HTTPException(status_code=409, detail=str(error))
    if isinstance(error, (SaveFailed, DeleteFailed)):
        return HTTPException(status_code=503, detail=str(error))
    return HTTPException(status_code=400, detail=str(error))


def create_application(
    ledger: Optional[DailyLedger] = None,
    settings: Optional[PnlTrackerSettings] = None,
) -> FastAPI:
    """Create the FastAPI application with routes and dependencies."""

    settings = settings or get_settings()
    configure_root_logger(level_for_environment(settings.environment))
    ledger = ledger or build_ledger(settings)
    app = FastAPI(title="Daily P&L Tracker", version="0.1.0")

    def _parse_day(value: Optional[str]) -> date:
        try:
            return parse_date(value) or date.today()
        except ValueError as error:
            raise HTTPException(status_code=400, detail=str(error)) from error

    @app.get("/health")
    async def health() -> JSONResponse:
        return JSONResponse({"status": "ok", "records": len(ledger.list_records())})

    @app.get("/dashboard")
    async def dashboard(
        today: Optional[str] = Query(None),
        chart_filter: str = Query("WEEK"),
    ) -> JSONResponse:
        """Return pulse, trend, watch list, gas and month figures."""

        try:
            payload = ledger.dashboard(
                _parse_day(today),
                tracked_items=settings.tracked_items,
                chart_filter=chart_filter,
                cost_categories=settings.cost_categories,
                watch_alert_days=settings.watch_alert_days,
            )
        except ValueError as error:
            raise _http_error(error) from error
        LOGGER.debug("Dashboard built with %s trend points", len(payload["trend"]))
        return JSONResponse(payload)

    @app.get("/records")
    async def list_records() -> JSONResponse:
        records = [_record_view(record, settings.currency_symbol) for record in ledger.list_records()]
        return JSONResponse({"records": records})

    @app.get("/records/new")
    async def new_record_template(on: Optional[str] = Query(None)) -> JSONResponse:
        """Return an unsaved record seeded from the expense structure."""

        record = ledger.new_record(_parse_day(on))
        view = _record_view(record, settings.currency_symbol)
        view["billUploadCategories"] = ledger.structure.bill_upload_categories
        return JSONResponse(view)

    @app.get("/records/{record_id}")
    async def get_record(record_id: str) -> JSONResponse:
        try:
            record = ledger.get_record(record_id)
        except KeyError as error:
            raise _http_error(error) from error
        view = _record_view(record, settings.currency_symbol)
        view["activeCategories"] = [category.name for category in record.active_categories()]
        return JSONResponse(view)

    def _save(payload: RecordPayload, existing_id: Optional[str]) -> JSONResponse:
        try:
            if existing_id:
                ledger.get_record(existing_id)
            record = _record_from_payload(payload)
            saved = ledger.save(record, existing_id, RecordStatus.from_str(payload.status))
        except (KeyError, LedgerError, ValueError) as error:
            raise _http_error(error) from error
        return JSONResponse(
            _record_view(saved, settings.currency_symbol),
            status_code=200 if existing_id else 201,
        )

    @app.post("/records")
    async def create_record(payload: RecordPayload) -> JSONResponse:
        return _save(payload, None)

    @app.put("/records/{record_id}")
    async def update_record(record_id: str, payload: RecordPayload) -> JSONResponse:
        return _save(payload, record_id)

    @app.delete("/records/{record_id}")
    async def delete_record(record_id: str) -> JSONResponse:
        try:
            ledger.delete(record_id)
        except DeleteFailed as error:
            raise _http_error(error) from error
        return JSONResponse({"deleted": record_id})

    @app.get("/taxonomy")
    async def get_taxonomy() -> JSONResponse:
        return JSONResponse(ledger.structure.as_dict())

    @app.put("/taxonomy")
    async def put_taxonomy(payload: StructurePayload) -> JSONResponse:
        """Replace the structure with a committed copy from the editor."""

        editor = ExpenseTaxonomy()
        try:
            for category, items in payload.structure.items():
                editor.add_category(category)
                for item in items:
                    editor.add_item(category, str(item.get("name", "")), item.get("defaultValue", 0))
            for category in payload.billUploadCategories:
                editor.set_bill_upload_enabled(category, True)
            saved = ledger.save_structure(editor.commit())
        except (LedgerError, ValueError, KeyError) as error:
            raise _http_error(error) from error
        return JSONResponse(saved.as_dict())

    @app.post("/taxonomy/items")
    async def add_template_item(payload: CustomItemPayload) -> JSONResponse:
        try:
            saved = ledger.save_custom_item(payload.category, payload.name, payload.defaultValue)
        except (LedgerError, ValueError, KeyError) as error:
            raise _http_error(error) from error
        return JSONResponse(saved.as_dict(), status_code=201)

    @app.get("/gas")
    async def gas_state(today: Optional[str] = Query(None)) -> JSONResponse:
        return JSONResponse(ledger.gas.snapshot(_parse_day(today)).as_dict())

    @app.post("/gas/swap")
    async def gas_swap(payload: GasEventPayload) -> JSONResponse:
        on = _parse_day(payload.date)
        try:
            event = ledger.swap_gas(payload.count, on=on)
        except (LedgerError, ValueError) as error:
            raise _http_error(error) from error
        return JSONResponse({"event": event.as_dict(), "state": ledger.gas.snapshot(on).as_dict()})

    @app.post("/gas/refill")
    async def gas_refill(payload: GasEventPayload) -> JSONResponse:
        on = _parse_day(payload.date)
        if payload.count is None:
            raise HTTPException(status_code=400, detail="Refill count required")
        try:
            event = ledger.refill_gas(payload.count, on=on)
        except (LedgerError, ValueError) as error:
            raise _http_error(error) from error
        return JSONResponse({"event": event.as_dict(), "state": ledger.gas.snapshot(on).as_dict()})

    return app
