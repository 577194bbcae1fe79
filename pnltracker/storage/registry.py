"""Mini README: Registry mapping backend names to store classes.

Structure:
    * StoreRegistry - registration and instantiation of ``RecordStore``
      implementations.

Backends register themselves on import; the settings value
``storage_backend`` picks one by name.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Dict, Iterable, Optional, Type

from ..logging_utils import get_logger

if TYPE_CHECKING:
    from .base import RecordStore

LOGGER = get_logger(__name__)


class StoreRegistry:
    """Simple registry for mapping backend identifiers to classes."""

    def __init__(self) -> None:
        self._backends: Dict[str, Type["RecordStore"]] = {}

    def register(self, backend: Type["RecordStore"]) -> None:
        identifier = backend.backend_name.lower()
        LOGGER.debug("Registering storage backend '%s'", identifier)
        self._backends[identifier] = backend

    def available_backends(self) -> Iterable[str]:
        return sorted(self._backends.keys())

    def create(self, identifier: str, *, data_directory: Optional[Path] = None) -> "RecordStore":
        """Instantiate the backend matching ``identifier``."""

        backend_cls = self._backends.get(identifier.lower())
        if not backend_cls:
            raise KeyError(f"Unknown storage backend '{identifier}'")
        LOGGER.info("Creating storage backend '%s'", identifier)
        return backend_cls(data_directory=data_directory)


STORE_REGISTRY = StoreRegistry()
