"""MetaGen contract shared by all metadata generators."""

from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Optional
import structlog

from kubemeta.core.utils import safe_put

logger = structlog.get_logger(__name__)

# Field options mutate the Kubernetes document a generator has just built
FieldOption = Callable[[Dict[str, Any]], None]


def with_fields(key: str, value: Any) -> FieldOption:
    """Add ``value`` at the dotted ``key``."""
    def option(meta: Dict[str, Any]) -> None:
        safe_put(meta, key, value)
    return option


def with_metadata(kind: str) -> FieldOption:
    """Copy labels and annotations under ``<kind>.labels`` and ``<kind>.annotations``.

    Used when one object's metadata is nested inside another's, e.g. a
    service enriched onto a pod record.
    """
    prefix = kind.lower()

    def option(meta: Dict[str, Any]) -> None:
        if meta.get("labels") is not None:
            safe_put(meta, f"{prefix}.labels", meta["labels"])
        if meta.get("annotations") is not None:
            safe_put(meta, f"{prefix}.annotations", meta["annotations"])
    return option


class MetaGen(ABC):
    """Abstract base class for kind-specific metadata generators."""

    def __init__(self):
        self.logger = logger.bind(generator=self.__class__.__name__)

    @abstractmethod
    def generate(self, obj: Any, *opts: FieldOption) -> Dict[str, Any]:
        """Generate the full metadata document, Kubernetes subtree plus ECS fields."""
        pass

    @abstractmethod
    def generate_ecs(self, obj: Any) -> Dict[str, Any]:
        """Generate ECS fields for the object."""
        pass

    @abstractmethod
    def generate_k8s(self, obj: Any, *opts: FieldOption) -> Optional[Dict[str, Any]]:
        """Generate fields stored under the ``kubernetes`` key."""
        pass

    @abstractmethod
    def generate_from_name(self, name: str, *opts: FieldOption) -> Optional[Dict[str, Any]]:
        """Resolve an object by store key and generate its Kubernetes fields."""
        pass
