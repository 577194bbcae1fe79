"""Mini README: JSON file storage backend.

Structure:
    * atomic_write_json - write to a temp file beside the target, then
      ``os.replace`` it so readers never see a half written file.
    * JsonFileRecordStore - keeps ``records.json``, ``structure.json`` and
      ``gas.json`` inside the configured data directory.

Each save rewrites the whole records file; a failed write leaves the
previous file in place.
"""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Dict, List, Optional

from ..logging_utils import get_logger
from .base import Payload, RecordStore
from .registry import STORE_REGISTRY

LOGGER = get_logger(__name__)


def atomic_write_json(target: Path, data: object) -> None:
    """Serialise ``data`` to ``target`` atomically."""

    target.parent.mkdir(parents=True, exist_ok=True)
    with tempfile.NamedTemporaryFile(
        mode="w",
        encoding="utf-8",
        prefix=target.name + "-",
        suffix=".tmp",
        dir=str(target.parent),
        delete=False,
    ) as handle:
        temp_name = handle.name
        try:
            json.dump(data, handle, indent=2, ensure_ascii=False)
            handle.flush()
            os.fsync(handle.fileno())
        except (OSError, TypeError, ValueError):
            handle.close()
            os.unlink(temp_name)
            raise
    try:
        os.replace(temp_name, target)
    except OSError:
        if os.path.exists(temp_name):
            os.unlink(temp_name)
        raise
    LOGGER.debug("Atomic write successful: %s", target)


def _read_json(path: Path) -> Optional[object]:
    if not path.exists():
        return None
    with path.open("r", encoding="utf-8") as handle:
        return json.load(handle)


class JsonFileRecordStore(RecordStore):
    """Persist payloads as JSON documents in a directory."""

    backend_name = "json"

    def __init__(self, data_directory: Optional[Path] = None) -> None:
        directory = Path(data_directory or "data").expanduser()
        directory.mkdir(parents=True, exist_ok=True)
        super().__init__(data_directory=directory)
        self._records_path = directory / "records.json"
        self._structure_path = directory / "structure.json"
        self._gas_path = directory / "gas.json"

    def _read_records(self) -> Dict[str, Payload]:
        raw = _read_json(self._records_path) or []
        if not isinstance(raw, list):
            raise ValueError(f"{self._records_path} must contain a JSON list of records")
        return {str(payload["id"]): payload for payload in raw}

    def load_records(self) -> List[Payload]:
        return list(self._read_records().values())

    def save_record(self, payload: Payload) -> None:
        records = self._read_records()
        records[str(payload["id"])] = payload
        atomic_write_json(self._records_path, list(records.values()))

    def delete_record(self, record_id: str) -> None:
        records = self._read_records()
        if records.pop(record_id, None) is None:
            LOGGER.debug("Delete of unknown record %s ignored", record_id)
            return
        atomic_write_json(self._records_path, list(records.values()))

    def load_structure(self) -> Optional[Payload]:
        return _read_json(self._structure_path)

    def save_structure(self, payload: Payload) -> None:
        atomic_write_json(self._structure_path, payload)

    def load_gas(self) -> Optional[Payload]:
        return _read_json(self._gas_path)

    def save_gas(self, payload: Payload) -> None:
        atomic_write_json(self._gas_path, payload)


STORE_REGISTRY.register(JsonFileRecordStore)
