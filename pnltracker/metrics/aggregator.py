"""Mini README: Pure aggregation functions behind every dashboard number.

Structure:
    * total_expenses / profit / category_totals - per record figures.
    * TrendPoint, trend_series, chart_window - chronological chart data.
    * MonthAggregate, month_aggregate, month_over_month_delta,
      compare_months - monthly totals, cost ratios and change.
    * WatchAlert, inventory_watch - days since a consumable was last bought.
    * PulseSummary, pulse_summary - the "yesterday" hero card.

Functions never mutate their arguments and never raise on odd stored
numbers: missing, zero or NaN amounts count as 0. Day gaps use calendar
day difference everywhere, so a purchase earlier today is 0 days ago.
``NEVER`` (-1) marks an item or event that has no history.
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from ..logging_utils import get_logger
from ..records.models import DailyRecord, coerce_amount

LOGGER = get_logger(__name__)

NEVER = -1

CHART_WINDOWS: Dict[str, int] = {"WEEK": 7, "MONTH": 30, "YEAR": 90}

CostCategories = Union[Mapping[str, Union[str, Sequence[str]]], Sequence[str]]


def days_between(earlier: date, later: date) -> int:
    """Calendar day difference, never negative."""

    return max((later - earlier).days, 0)


def _by_date_descending(records: Iterable[DailyRecord]) -> List[DailyRecord]:
    dated = [record for record in records if record.record_date is not None]
    return sorted(dated, key=lambda record: (record.record_date, record.record_id), reverse=True)


def total_expenses(record: DailyRecord) -> float:
    """Sum every item amount across every category."""

    return sum(coerce_amount(item.amount) for category in record.expenses for item in category.items)


def profit(record: DailyRecord) -> float:
    """Sales minus expenses; negative values are valid."""

    return coerce_amount(record.total_sales) - total_expenses(record)


def category_totals(record: DailyRecord) -> Dict[str, float]:
    """Per-category totals in display order."""

    totals: Dict[str, float] = {}
    for category in record.expenses:
        totals[category.name] = totals.get(category.name, 0.0) + category.total
    return totals


@dataclass(frozen=True, slots=True)
class TrendPoint:
    """One chart point."""

    on: date
    sales: float
    expenses: float
    profit: float

    def as_dict(self) -> Dict[str, object]:
        return {
            "date": self.on.isoformat(),
            "sales": self.sales,
            "expenses": self.expenses,
            "profit": self.profit,
        }


def chart_window(filter_name: str) -> int:
    """Window size for a chart filter label (WEEK, MONTH or YEAR)."""

    try:
        return CHART_WINDOWS[filter_name.strip().upper()]
    except (KeyError, AttributeError) as error:
        raise ValueError(f"Unsupported chart filter: {filter_name}") from error


def trend_series(records: Iterable[DailyRecord], window_size: int) -> List[TrendPoint]:
    """Latest ``window_size`` records as an ascending chronological series."""

    if window_size < 0:
        raise ValueError("window_size cannot be negative")
    latest = _by_date_descending(records)[:window_size]
    return [
        TrendPoint(
            on=record.record_date,
            sales=coerce_amount(record.total_sales),
            expenses=total_expenses(record),
            profit=profit(record),
        )
        for record in reversed(latest)
    ]


@dataclass(slots=True)
class MonthAggregate:
    """Totals for the trading days of a date range."""

    month_start: date
    month_end: date
    trading_days: int = 0
    total_sales: float = 0.0
    total_expenses: float = 0.0
    cost_ratios: Dict[str, float] = field(default_factory=dict)

    @property
    def profit(self) -> float:
        return self.total_sales - self.total_expenses

    @property
    def average_daily_profit(self) -> float:
        return self.profit / self.trading_days if self.trading_days else 0.0

    def as_dict(self) -> Dict[str, object]:
        return {
            "month_start": self.month_start.isoformat(),
            "month_end": self.month_end.isoformat(),
            "trading_days": self.trading_days,
            "total_sales": self.total_sales,
            "total_expenses": self.total_expenses,
            "profit": self.profit,
            "average_daily_profit": self.average_daily_profit,
            "cost_ratios": dict(self.cost_ratios),
        }


def cost_category_sets(cost_categories: CostCategories) -> Dict[str, List[str]]:
    """Normalise ratio definitions to ``{ratio name: [category, ...]}``.

    A mapping names each ratio and the categories it spans; a bare string,
    as a mapping value or as a list entry, is a one-category set.
    """

    if isinstance(cost_categories, Mapping):
        return {
            name: [members] if isinstance(members, str) else list(members)
            for name, members in cost_categories.items()
        }
    return {name: [name] for name in cost_categories}


def month_aggregate(
    records: Iterable[DailyRecord],
    month_start: date,
    month_end: date,
    cost_categories: CostCategories = (),
) -> MonthAggregate:
    """Sum sales and expenses of non-closed records in ``[month_start, month_end]``.

    Cost ratios are ``sum of the set's category totals / sales * 100`` and 0
    when there were no sales.
    """

    in_range = [
        record
        for record in records
        if record.record_date is not None
        and month_start <= record.record_date <= month_end
        and not record.is_closed
    ]
    sales = sum(coerce_amount(record.total_sales) for record in in_range)
    expenses = sum(total_expenses(record) for record in in_range)

    ratios: Dict[str, float] = {}
    per_record = [category_totals(record) for record in in_range]
    for name, members in cost_category_sets(cost_categories).items():
        category_sum = sum(totals.get(member, 0.0) for totals in per_record for member in members)
        ratios[name] = category_sum / sales * 100 if sales else 0.0

    return MonthAggregate(
        month_start=month_start,
        month_end=month_end,
        trading_days=len(in_range),
        total_sales=sales,
        total_expenses=expenses,
        cost_ratios=ratios,
    )


def month_over_month_delta(current_avg_profit: float, prior_avg_profit: float) -> float:
    """Percentage change of average profit; a zero baseline counts as flat."""

    if not prior_avg_profit:
        return 0.0
    return (current_avg_profit - prior_avg_profit) / abs(prior_avg_profit) * 100


def month_bounds(any_day: date) -> Tuple[date, date]:
    """First and last day of the month containing ``any_day``."""

    last = calendar.monthrange(any_day.year, any_day.month)[1]
    return any_day.replace(day=1), any_day.replace(day=last)


def compare_months(
    records: Sequence[DailyRecord],
    current_month: date,
    cost_categories: CostCategories = (),
) -> Dict[str, object]:
    """Aggregate ``current_month`` and the month before it, with the profit delta."""

    current_start, current_end = month_bounds(current_month)
    prior_start, prior_end = month_bounds(current_start - timedelta(days=1))
    current = month_aggregate(records, current_start, current_end, cost_categories)
    prior = month_aggregate(records, prior_start, prior_end, cost_categories)
    delta = month_over_month_delta(current.average_daily_profit, prior.average_daily_profit)
    LOGGER.debug(
        "Month comparison %s vs %s -> %.2f%%", current_start, prior_start, delta
    )
    return {"current": current, "prior": prior, "profit_delta_percent": delta}


@dataclass(frozen=True, slots=True)
class WatchAlert:
    """Restocking status for one tracked item."""

    name: str
    days_ago: int
    last_purchased: Optional[date] = None
    overdue: bool = False

    @property
    def never(self) -> bool:
        return self.days_ago == NEVER

    def as_dict(self) -> Dict[str, object]:
        return {
            "name": self.name,
            "days_ago": self.days_ago,
            "last_purchased": self.last_purchased.isoformat() if self.last_purchased else None,
            "never": self.never,
            "overdue": self.overdue,
        }


def inventory_watch(
    records: Iterable[DailyRecord],
    tracked_item_names: Iterable[str],
    today: date,
    alert_after_days: int = 7,
) -> List[WatchAlert]:
    """Days since each tracked item was last bought, longest-unseen first.

    Items never bought report ``NEVER`` and sort ahead of everything else.
    Records dated after ``today`` are ignored.
    """

    ordered = [record for record in _by_date_descending(records) if record.record_date <= today]
    alerts: List[WatchAlert] = []
    for name in tracked_item_names:
        last = next(
            (
                record
                for record in ordered
                if any(
                    item.name == name and coerce_amount(item.amount) > 0
                    for category in record.expenses
                    for item in category.items
                )
            ),
            None,
        )
        if last is None:
            alerts.append(WatchAlert(name=name, days_ago=NEVER, overdue=True))
            continue
        days_ago = days_between(last.record_date, today)
        alerts.append(
            WatchAlert(
                name=name,
                days_ago=days_ago,
                last_purchased=last.record_date,
                overdue=days_ago > alert_after_days,
            )
        )
    return sorted(alerts, key=lambda alert: (not alert.never, -alert.days_ago))


@dataclass(frozen=True, slots=True)
class PulseSummary:
    """Figures for the most recent finished day."""

    record_id: str
    on: date
    label: str
    sales: float
    expenses: float
    profit: float
    is_closed: bool

    def as_dict(self) -> Dict[str, object]:
        return {
            "record_id": self.record_id,
            "date": self.on.isoformat(),
            "label": self.label,
            "sales": self.sales,
            "expenses": self.expenses,
            "profit": self.profit,
            "is_closed": self.is_closed,
        }


def pulse_summary(records: Iterable[DailyRecord], today: date) -> Optional[PulseSummary]:
    """Summarise the latest record dated strictly before ``today``."""

    previous = next((record for record in _by_date_descending(records) if record.record_date < today), None)
    if previous is None:
        return None
    if previous.record_date == today - timedelta(days=1):
        label = "Yesterday"
    else:
        label = previous.record_date.strftime("%A")
    return PulseSummary(
        record_id=previous.record_id,
        on=previous.record_date,
        label=label,
        sales=coerce_amount(previous.total_sales),
        expenses=total_expenses(previous),
        profit=profit(previous),
        is_closed=previous.is_closed,
    )
