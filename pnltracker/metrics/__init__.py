"""Mini README: Derived metrics over daily records.

Everything here is a pure function of its inputs; see ``aggregator`` for
the per-record figures, trend series, monthly aggregates, the restocking
watch list and the dashboard pulse card.
"""

from .aggregator import (
    CHART_WINDOWS,
    NEVER,
    CostCategories,
    MonthAggregate,
    PulseSummary,
    TrendPoint,
    WatchAlert,
    category_totals,
    chart_window,
    compare_months,
    cost_category_sets,
    days_between,
    inventory_watch,
    month_aggregate,
    month_bounds,
    month_over_month_delta,
    profit,
    pulse_summary,
    total_expenses,
    trend_series,
)

__all__ = [
    "CHART_WINDOWS",
    "NEVER",
    "CostCategories",
    "MonthAggregate",
    "PulseSummary",
    "TrendPoint",
    "WatchAlert",
    "category_totals",
    "chart_window",
    "compare_months",
    "cost_category_sets",
    "days_between",
    "inventory_watch",
    "month_aggregate",
    "month_bounds",
    "month_over_month_delta",
    "profit",
    "pulse_summary",
    "total_expenses",
    "trend_series",
]
