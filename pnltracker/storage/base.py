"""Mini README: Abstract storage collaborator for the ledger.

Structure:
    * RecordStore - interface every persistence backend implements.

Backends deal only in the plain dictionaries produced by ``as_dict`` on the
model types, which keeps the engine independent of any storage format.
Backends raise whatever their medium raises (``OSError``, ``ValueError``);
the ledger service translates those into ``SaveFailed``/``DeleteFailed``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, List, Optional

from ..logging_utils import get_logger

LOGGER = get_logger(__name__)

Payload = Dict[str, object]


class RecordStore(ABC):
    """Base interface for persistence backends."""

    backend_name: str = "generic"

    def __init__(self, data_directory: Optional[Path] = None) -> None:
        self.data_directory = data_directory
        LOGGER.debug("Initialising %s store at '%s'", self.backend_name, data_directory)

    @abstractmethod
    def load_records(self) -> List[Payload]:
        """Return every stored record payload."""

    @abstractmethod
    def save_record(self, payload: Payload) -> None:
        """Create or replace the record whose ``id`` matches ``payload``."""

    @abstractmethod
    def delete_record(self, record_id: str) -> None:
        """Remove a record; unknown ids are ignored."""

    @abstractmethod
    def load_structure(self) -> Optional[Payload]:
        """Return the stored expense structure, or ``None`` before first save."""

    @abstractmethod
    def save_structure(self, payload: Payload) -> None:
        """Persist the expense structure and bill-upload flags."""

    @abstractmethod
    def load_gas(self) -> Optional[Payload]:
        """Return the stored gas ledger, or ``None`` before first save."""

    @abstractmethod
    def save_gas(self, payload: Payload) -> None:
        """Persist the gas ledger."""

    def metadata(self) -> Dict[str, str]:
        """Return diagnostic metadata for the health endpoint."""

        return {
            "backend": self.backend_name,
            "location": str(self.data_directory) if self.data_directory else "in-memory",
        }
