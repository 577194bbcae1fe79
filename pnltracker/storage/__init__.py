"""Mini README: Storage collaborator package.

``base`` defines the ``RecordStore`` interface, ``registry`` maps backend
names to classes, and the ``memory`` and ``json_store`` modules provide the
built-in backends (importing this package registers both).
"""

from .base import RecordStore
from .registry import STORE_REGISTRY, StoreRegistry
from .json_store import JsonFileRecordStore, atomic_write_json
from .memory import InMemoryRecordStore

__all__ = [
    "InMemoryRecordStore",
    "JsonFileRecordStore",
    "RecordStore",
    "STORE_REGISTRY",
    "StoreRegistry",
    "atomic_write_json",
]
