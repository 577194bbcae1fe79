"""Mini README: Centralised configuration models and helpers for the tracker.

Structure:
    * GasConfig - read-only cylinder settings handed to the gas ledger.
    * PnlTrackerSettings - Pydantic model describing runtime configuration.
    * get_settings - cached accessor for environment-aware settings.

Usage:
    Import ``get_settings`` to read environment variables (prefixed with
    ``PNLTRACKER_``), choose the storage backend and supply the watch list
    and gas configuration to the engine. Settings are validated once per
    process and cached.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Dict, List

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


@dataclass(frozen=True, slots=True)
class GasConfig:
    """Cylinder counts supplied by settings; never mutated by the engine."""

    total_cylinders: int
    cylinders_per_bank: int

    @property
    def stock_ceiling(self) -> int:
        """Largest number of full cylinders that can sit in reserve."""

        return max(self.total_cylinders - self.cylinders_per_bank, 0)


class PnlTrackerSettings(BaseSettings):
    """Runtime configuration for the P&L tracker."""

    model_config = SettingsConfigDict(
        env_prefix="PNLTRACKER_",
        env_file=".env",
        case_sensitive=False,
    )

    environment: str = Field(
        "development",
        description="Environment label controlling debug toggles and logging levels.",
    )
    data_directory: Path = Field(
        Path("data"),
        description="Directory where the JSON store keeps records, structure and gas state.",
    )
    storage_backend: str = Field(
        "json",
        description="Name of the registered storage backend ('json' or 'memory').",
    )
    interface_host: str = Field(
        "0.0.0.0",
        description="Network interface for the HTTP service to bind to.",
    )
    interface_port: int = Field(
        8000,
        description="Default port the HTTP service exposes.",
        ge=1,
        le=65535,
    )
    total_cylinders: int = Field(
        6,
        description="Total gas cylinders owned by the shop (full, empty and connected).",
        ge=0,
    )
    cylinders_per_bank: int = Field(
        2,
        description="Cylinders connected together and exchanged as one batch.",
        ge=1,
    )
    tracked_items: List[str] = Field(
        default_factory=list,
        description="Expense item names shown on the restocking watch list.",
    )
    watch_alert_days: int = Field(
        7,
        description="Days without a purchase after which a watch item is flagged.",
        ge=0,
    )
    cost_categories: Dict[str, List[str]] = Field(
        default_factory=lambda: {
            "Food cost": ["Vegetables", "Groceries", "Dairy", "Meat"],
            "Labor cost": ["Staff"],
        },
        description="Named cost ratios, each the categories reported together as a percentage of sales.",
    )
    currency_symbol: str = Field("₹", description="Symbol prefixed to formatted amounts.")
    seed_default_structure: bool = Field(
        True,
        description="Seed the built-in expense structure when the store has none.",
    )

    @field_validator("data_directory", mode="before")
    @classmethod
    def _expand_path(cls, value: str | Path) -> Path:
        """Ensure configured paths expand user directories and exist."""

        path = Path(value).expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path

    @field_validator("storage_backend")
    @classmethod
    def _normalise_backend(cls, value: str) -> str:
        return value.strip().lower()

    @model_validator(mode="after")
    def _check_cylinders(self) -> "PnlTrackerSettings":
        if self.cylinders_per_bank > self.total_cylinders > 0:
            raise ValueError("cylinders_per_bank cannot exceed total_cylinders")
        return self

    def gas_config(self) -> GasConfig:
        """Return the read-only gas configuration view."""

        return GasConfig(
            total_cylinders=self.total_cylinders,
            cylinders_per_bank=self.cylinders_per_bank,
        )


@lru_cache()
def get_settings() -> PnlTrackerSettings:
    """Return cached settings, ensuring consistent configuration across modules."""

    return PnlTrackerSettings()
