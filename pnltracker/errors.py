"""Mini README: Exception types raised by the ledger engine.

Structure:
    * LedgerError - common base so callers can catch every engine failure.
    * DuplicateName - category or item name collision in a tree or taxonomy.
    * ValidationError - a record or input value cannot be accepted.
    * InsufficientStock - a gas event asks for more cylinders than available.
    * SaveFailed / DeleteFailed - the storage collaborator reported a failure.

Validation style errors also derive from ``ValueError`` and storage errors
from ``RuntimeError`` so generic handlers keep working.
"""

from __future__ import annotations


class LedgerError(Exception):
    """Base class for all engine level failures."""


class DuplicateName(LedgerError, ValueError):
    """Raised when a category or item name already exists in its container."""

    def __init__(self, name: str, container: str = "") -> None:
        self.name = name
        self.container = container
        where = f" in {container}" if container else ""
        super().__init__(f"'{name}' already exists{where}")


class ValidationError(LedgerError, ValueError):
    """Raised when a record cannot be saved or an input cannot be parsed."""


class InsufficientStock(LedgerError, ValueError):
    """Raised when a swap or refill exceeds the cylinders on hand."""

    def __init__(self, requested: int, available: int, pile: str = "full cylinders") -> None:
        self.requested = requested
        self.available = available
        super().__init__(f"Requested {requested} {pile} but only {available} available")


class SaveFailed(LedgerError, RuntimeError):
    """Raised when the storage collaborator could not persist a change."""


class DeleteFailed(LedgerError, RuntimeError):
    """Raised when the storage collaborator could not remove a record."""
