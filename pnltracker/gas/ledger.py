"""Mini README: Gas cylinder stock ledger.

Structure:
    * GasEventType - swap versus refill events.
    * GasEvent - one logged event with its date and cylinder count.
    * GasState - read-only snapshot used by the dashboard card.
    * GasLedger - applies swap/refill events and derives usage figures.

A swap connects a fresh bank: the cylinders leave the full stock and are
counted as empty shells straight away, since the time each bank takes to
run out is not tracked. A refill exchanges empty shells for full ones, but
the full stock never grows past ``total_cylinders - cylinders_per_bank``
(one bank is always connected). Rejected events leave the state unchanged.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Dict, Iterable, List, Mapping, Optional

from ..configuration import GasConfig
from ..errors import InsufficientStock
from ..logging_utils import get_logger
from ..metrics.aggregator import NEVER, days_between
from ..records.models import parse_date

LOGGER = get_logger(__name__)


class GasEventType(str, Enum):
    """Kinds of events recorded by the gas ledger."""

    SWAP = "swap"
    REFILL = "refill"

    @classmethod
    def from_str(cls, value: str) -> "GasEventType":
        try:
            return cls(value.strip().lower())
        except (ValueError, AttributeError) as error:
            raise ValueError(f"Unsupported gas event type: {value}") from error


@dataclass(frozen=True, slots=True)
class GasEvent:
    """Logged swap or refill."""

    event_type: GasEventType
    count: int
    occurred_on: date

    def as_dict(self) -> Dict[str, object]:
        return {
            "type": self.event_type.value,
            "count": self.count,
            "date": self.occurred_on.isoformat(),
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, object]) -> "GasEvent":
        return cls(
            event_type=GasEventType.from_str(str(payload["type"])),
            count=int(payload["count"]),
            occurred_on=parse_date(payload["date"]),
        )


@dataclass(frozen=True, slots=True)
class GasState:
    """Snapshot of the cylinder counts and derived usage."""

    current_stock: int
    empty_cylinders: int
    total_cylinders: int
    cylinders_per_bank: int
    last_swap_date: Optional[date]
    avg_daily_usage: float
    days_since_last_swap: int
    days_of_stock_remaining: Optional[float]

    def as_dict(self) -> Dict[str, object]:
        return {
            "current_stock": self.current_stock,
            "empty_cylinders": self.empty_cylinders,
            "total_cylinders": self.total_cylinders,
            "cylinders_per_bank": self.cylinders_per_bank,
            "last_swap_date": self.last_swap_date.isoformat() if self.last_swap_date else None,
            "avg_daily_usage": self.avg_daily_usage,
            "days_since_last_swap": self.days_since_last_swap,
            "days_of_stock_remaining": self.days_of_stock_remaining,
        }


def _positive_count(count: int) -> int:
    if isinstance(count, bool) or int(count) != count or count <= 0:
        raise ValueError(f"Cylinder count must be a positive whole number, got {count!r}")
    return int(count)


class GasLedger:
    """Track full and empty cylinders through swap and refill events."""

    def __init__(
        self,
        config: GasConfig,
        *,
        current_stock: Optional[int] = None,
        empty_cylinders: int = 0,
        events: Optional[Iterable[GasEvent]] = None,
    ) -> None:
        self._config = config
        self._current_stock = config.stock_ceiling if current_stock is None else int(current_stock)
        self._empty_cylinders = int(empty_cylinders)
        if self._current_stock < 0 or self._empty_cylinders < 0:
            raise ValueError("Cylinder counts cannot be negative.")
        self._events: List[GasEvent] = list(events or [])
        LOGGER.debug(
            "Gas ledger initialised stock=%s empty=%s events=%s",
            self._current_stock,
            self._empty_cylinders,
            len(self._events),
        )

    @property
    def config(self) -> GasConfig:
        return self._config

    @property
    def current_stock(self) -> int:
        return self._current_stock

    @property
    def empty_cylinders(self) -> int:
        return self._empty_cylinders

    @property
    def events(self) -> List[GasEvent]:
        return list(self._events)

    def _swaps(self) -> List[GasEvent]:
        return [event for event in self._events if event.event_type is GasEventType.SWAP]

    @property
    def last_swap_date(self) -> Optional[date]:
        swaps = self._swaps()
        return max(event.occurred_on for event in swaps) if swaps else None

    def swap(self, count: Optional[int] = None, on: Optional[date] = None) -> GasEvent:
        """Connect ``count`` full cylinders (one bank by default)."""

        count = _positive_count(self._config.cylinders_per_bank if count is None else count)
        if count > self._current_stock:
            LOGGER.warning("Swap of %s rejected with %s in stock", count, self._current_stock)
            raise InsufficientStock(count, self._current_stock)
        event = GasEvent(GasEventType.SWAP, count, on or date.today())
        self._current_stock -= count
        self._empty_cylinders += count
        self._events.append(event)
        LOGGER.info("Swapped %s cylinders on %s", count, event.occurred_on)
        return event

    def refill(self, count: int, on: Optional[date] = None) -> GasEvent:
        """Exchange empty shells for full cylinders, capped at the stock ceiling.

        The returned event carries the number actually accepted; shells that
        would overflow the ceiling stay in the empty pile. A refill with the
        stock already at the ceiling is rejected and logs no event.
        """

        count = _positive_count(count)
        if count > self._empty_cylinders:
            LOGGER.warning("Refill of %s rejected with %s empty", count, self._empty_cylinders)
            raise InsufficientStock(count, self._empty_cylinders, pile="empty cylinders")
        headroom = max(self._config.stock_ceiling - self._current_stock, 0)
        if not headroom:
            LOGGER.warning("Refill of %s rejected with stock at ceiling %s", count, self._config.stock_ceiling)
            raise ValueError(f"Full stock already at the ceiling of {self._config.stock_ceiling} cylinders.")
        accepted = min(count, headroom)
        if accepted < count:
            LOGGER.warning("Refill clipped from %s to %s at stock ceiling", count, accepted)
        event = GasEvent(GasEventType.REFILL, accepted, on or date.today())
        self._empty_cylinders -= accepted
        self._current_stock += accepted
        self._events.append(event)
        LOGGER.info("Refilled %s cylinders on %s", accepted, event.occurred_on)
        return event

    def avg_daily_usage(self, today: date) -> float:
        """Cylinders swapped per day since the first logged swap."""

        swaps = self._swaps()
        if not swaps:
            return 0.0
        first = min(event.occurred_on for event in swaps)
        elapsed = max(days_between(first, today), 1)
        return sum(event.count for event in swaps) / elapsed

    def days_since_last_swap(self, today: date) -> int:
        last = self.last_swap_date
        return NEVER if last is None else days_between(last, today)

    def days_of_stock_remaining(self, today: date) -> Optional[float]:
        """Forecast of days the full stock lasts at the average usage rate."""

        usage = self.avg_daily_usage(today)
        return self._current_stock / usage if usage else None

    def snapshot(self, today: date) -> GasState:
        return GasState(
            current_stock=self._current_stock,
            empty_cylinders=self._empty_cylinders,
            total_cylinders=self._config.total_cylinders,
            cylinders_per_bank=self._config.cylinders_per_bank,
            last_swap_date=self.last_swap_date,
            avg_daily_usage=self.avg_daily_usage(today),
            days_since_last_swap=self.days_since_last_swap(today),
            days_of_stock_remaining=self.days_of_stock_remaining(today),
        )

    def as_dict(self) -> Dict[str, object]:
        return {
            "currentStock": self._current_stock,
            "emptyCylinders": self._empty_cylinders,
            "events": [event.as_dict() for event in self._events],
        }

    @classmethod
    def from_dict(cls, config: GasConfig, payload: Optional[Mapping[str, object]]) -> "GasLedger":
        """Restore a ledger; an empty payload starts with a full reserve."""

        if not payload:
            return cls(config)
        return cls(
            config,
            current_stock=int(payload.get("currentStock", config.stock_ceiling)),
            empty_cylinders=int(payload.get("emptyCylinders", 0)),
            events=[GasEvent.from_dict(event) for event in (payload.get("events") or [])],
        )
