"""Route objects to the generator registered for their kind."""

from enum import Enum
from typing import Any, Dict, Optional
import structlog
from kubernetes.client import V1Namespace, V1Service

from kubemeta.metadata.base import FieldOption, MetaGen

logger = structlog.get_logger(__name__)


class ResourceKind(str, Enum):
    """Kinds with a metadata generator."""
    SERVICE = "service"
    NAMESPACE = "namespace"


_MODEL_KINDS = {
    V1Service: ResourceKind.SERVICE,
    V1Namespace: ResourceKind.NAMESPACE,
}


def resource_kind(obj: Any) -> Optional[ResourceKind]:
    """Return the kind tag of a Kubernetes model object, or None if unsupported."""
    for model, kind in _MODEL_KINDS.items():
        if isinstance(obj, model):
            return kind
    return None


class MetadataDispatcher:
    """Holds one generator per kind and picks it by the object's kind tag."""

    def __init__(self, generators: Optional[Dict[ResourceKind, MetaGen]] = None):
        self.generators: Dict[ResourceKind, MetaGen] = dict(generators or {})
        self.logger = logger.bind(component="dispatcher")

    def register(self, kind: ResourceKind, generator: MetaGen) -> None:
        self.generators[ResourceKind(kind)] = generator

    def generator_for(self, obj: Any) -> Optional[MetaGen]:
        kind = resource_kind(obj)
        if kind is None:
            self.logger.debug("Unsupported object", type=type(obj).__name__)
            return None

        generator = self.generators.get(kind)
        if generator is None:
            self.logger.debug("No generator registered", kind=kind.value)
        return generator

    def generate(self, obj: Any, *opts: FieldOption) -> Optional[Dict[str, Any]]:
        """Full metadata document for ``obj``, or None when no generator applies."""
        generator = self.generator_for(obj)
        if generator is None:
            return None
        return generator.generate(obj, *opts)

    def generate_k8s(self, obj: Any, *opts: FieldOption) -> Optional[Dict[str, Any]]:
        generator = self.generator_for(obj)
        if generator is None:
            return None
        return generator.generate_k8s(obj, *opts)

    def generate_from_name(self, kind: ResourceKind, name: str, *opts: FieldOption) -> Optional[Dict[str, Any]]:
        generator = self.generators.get(ResourceKind(kind))
        if generator is None:
            return None
        return generator.generate_from_name(name, *opts)
