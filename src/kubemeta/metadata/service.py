"""Service metadata generator."""

from typing import Any, Dict, Optional, Union
from kubernetes.client import V1Service

from kubemeta.config.settings import MetadataSettings
from kubemeta.core.exceptions import StoreException
from kubemeta.core.utils import deep_merge, safe_put
from kubemeta.metadata.base import FieldOption, MetaGen
from kubemeta.metadata.labels import generate_map
from kubemeta.metadata.resource import ResourceMetadataGenerator
from kubemeta.store.object_store import ObjectStore


class ServiceMetadataGenerator(MetaGen):
    """Generates metadata for Service objects."""

    def __init__(
        self,
        settings: Union[MetadataSettings, Dict[str, Any], None],
        store: Optional[ObjectStore],
        namespace: Optional[MetaGen],
        client: Any = None
    ):
        super().__init__()
        self.resource = ResourceMetadataGenerator(settings, client, namespace)
        self.store = store

    def generate(self, obj: Any, *opts: FieldOption) -> Dict[str, Any]:
        """Generate service metadata from a resource object.

        The document has the form::

            {
                "kubernetes": {...},
                "orchestrator": {"cluster": {...}},
            }

        Fields under ``kubernetes`` come from ``generate_k8s``; top level ECS
        fields come from ``generate_ecs`` and are deep-merged over them.
        """
        ecs_fields = self.generate_ecs(obj)
        meta = {"kubernetes": self.generate_k8s(obj, *opts)}
        return deep_merge(meta, ecs_fields)

    def generate_ecs(self, obj: Any) -> Dict[str, Any]:
        return self.resource.generate_ecs(obj)

    def generate_k8s(self, obj: Any, *opts: FieldOption) -> Optional[Dict[str, Any]]:
        """Generate service fields, adding ``selectors`` when the service has any."""
        if not isinstance(obj, V1Service):
            self.logger.debug("Not a service", type=type(obj).__name__)
            return None

        out = self.resource.generate_k8s("service", obj, *opts)
        if out is None:
            return None

        selectors = obj.spec.selector if obj.spec else None
        if not selectors:
            return out

        selector_map = generate_map(selectors, self.resource.settings.labels_dedot)
        if selector_map:
            safe_put(out, "selectors", selector_map)

        return out

    def generate_from_name(self, name: str, *opts: FieldOption) -> Optional[Dict[str, Any]]:
        """Generate service fields for the service stored under ``name``.

        Store faults are logged and treated like a miss.
        """
        if self.store is None:
            return None

        try:
            obj, found = self.store.get_by_key(name)
        except StoreException as e:
            self.logger.warning("Service lookup failed", key=name, error=str(e))
            return None

        if not found:
            return None
        if not isinstance(obj, V1Service):
            self.logger.debug("Stored object is not a service", key=name, type=type(obj).__name__)
            return None

        return self.generate_k8s(obj, *opts)
