"""Thread-safe keyed index of watched Kubernetes objects."""

import threading
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple
import structlog

from kubemeta.core.exceptions import StoreException

logger = structlog.get_logger(__name__)

KeyFunc = Callable[[Any], str]


def meta_namespace_key(obj: Any) -> str:
    """Return the ``namespace/name`` key of an object, or ``name`` when cluster scoped."""
    metadata = getattr(obj, "metadata", None)
    if metadata is None or not metadata.name:
        raise StoreException(repr(obj), "object has no metadata.name")

    if metadata.namespace:
        return f"{metadata.namespace}/{metadata.name}"
    return metadata.name


class ObjectStore:
    """In-memory store of objects of one kind, indexed by key.

    Writes come from whatever layer watches the API server; reads come from
    metadata generators resolving objects by key. All access goes through a
    single re-entrant lock.
    """

    def __init__(self, key_func: KeyFunc = meta_namespace_key, name: Optional[str] = None):
        self.key_func = key_func
        self.name = name or self.__class__.__name__
        self._items: Dict[str, Any] = {}
        self._lock = threading.RLock()
        self.logger = logger.bind(store=self.name)

    def add(self, obj: Any) -> None:
        key = self.key_func(obj)
        with self._lock:
            self._items[key] = obj
        self.logger.debug("Stored object", key=key)

    update = add

    def delete(self, obj: Any) -> None:
        key = self.key_func(obj)
        with self._lock:
            self._items.pop(key, None)
        self.logger.debug("Deleted object", key=key)

    def get(self, obj: Any) -> Tuple[Optional[Any], bool]:
        """Look up the stored version of ``obj``."""
        return self.get_by_key(self.key_func(obj))

    def get_by_key(self, key: str) -> Tuple[Optional[Any], bool]:
        """Return ``(object, found)`` for ``key``."""
        with self._lock:
            if key in self._items:
                return self._items[key], True
        return None, False

    def list(self) -> List[Any]:
        with self._lock:
            return list(self._items.values())

    def list_keys(self) -> List[str]:
        with self._lock:
            return list(self._items.keys())

    def replace(self, objects: Iterable[Any]) -> None:
        """Swap the whole content of the store for ``objects``."""
        items = {self.key_func(obj): obj for obj in objects}
        with self._lock:
            self._items = items
        self.logger.debug("Replaced store content", count=len(items))

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def __contains__(self, key: str) -> bool:
        with self._lock:
            return key in self._items
