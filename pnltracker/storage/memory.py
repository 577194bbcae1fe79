"""Mini README: In-memory storage backend.

Keeps deep copies of every payload in dictionaries. Used by the test suite
and by ``PNLTRACKER_STORAGE_BACKEND=memory`` for throwaway demos.
"""

from __future__ import annotations

import copy
from typing import Dict, List, Optional

from .base import Payload, RecordStore
from .registry import STORE_REGISTRY


class InMemoryRecordStore(RecordStore):
    """Dictionary backed store; nothing survives the process."""

    backend_name = "memory"

    def __init__(self, data_directory=None) -> None:
        super().__init__(data_directory=None)
        self._records: Dict[str, Payload] = {}
        self._structure: Optional[Payload] = None
        self._gas: Optional[Payload] = None

    def load_records(self) -> List[Payload]:
        return [copy.deepcopy(payload) for payload in self._records.values()]

    def save_record(self, payload: Payload) -> None:
        self._records[str(payload["id"])] = copy.deepcopy(payload)

    def delete_record(self, record_id: str) -> None:
        self._records.pop(record_id, None)

    def load_structure(self) -> Optional[Payload]:
        return copy.deepcopy(self._structure)

    def save_structure(self, payload: Payload) -> None:
        self._structure = copy.deepcopy(payload)

    def load_gas(self) -> Optional[Payload]:
        return copy.deepcopy(self._gas)

    def save_gas(self, payload: Payload) -> None:
        self._gas = copy.deepcopy(payload)


STORE_REGISTRY.register(InMemoryRecordStore)
