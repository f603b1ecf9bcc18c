"""Namespace metadata generator."""

from typing import Any, Dict, Optional, Union
from kubernetes.client import V1Namespace

from kubemeta.config.settings import MetadataSettings
from kubemeta.core.exceptions import StoreException
from kubemeta.core.utils import deep_merge
from kubemeta.metadata.base import FieldOption, MetaGen
from kubemeta.metadata.resource import ResourceMetadataGenerator
from kubemeta.store.object_store import ObjectStore

RESOURCE = "namespace"


class NamespaceMetadataGenerator(MetaGen):
    """Generates namespace fields to be merged into namespaced objects.

    Fields are flattened to ``namespace``, ``namespace_uid``,
    ``namespace_labels`` and ``namespace_annotations`` so they sit next to the
    object's own fields without nesting under ``namespace``.
    """

    def __init__(
        self,
        settings: Union[MetadataSettings, Dict[str, Any], None],
        store: Optional[ObjectStore],
        client: Any = None
    ):
        super().__init__()
        self.resource = ResourceMetadataGenerator(settings, client)
        self.store = store

    def generate(self, obj: Any, *opts: FieldOption) -> Dict[str, Any]:
        return deep_merge({"kubernetes": self.generate_k8s(obj, *opts)}, self.generate_ecs(obj))

    def generate_ecs(self, obj: Any) -> Dict[str, Any]:
        return self.resource.generate_ecs(obj)

    def generate_k8s(self, obj: Any, *opts: FieldOption) -> Optional[Dict[str, Any]]:
        if not isinstance(obj, V1Namespace):
            self.logger.debug("Not a namespace", type=type(obj).__name__)
            return None

        meta = self.resource.generate_k8s(RESOURCE, obj, *opts)
        if meta is None:
            return None
        return _flatten(meta)

    def generate_from_name(self, name: str, *opts: FieldOption) -> Optional[Dict[str, Any]]:
        if self.store is None:
            return None

        try:
            obj, found = self.store.get_by_key(name)
        except StoreException as e:
            self.logger.warning("Namespace lookup failed", key=name, error=str(e))
            return None

        if not found or not isinstance(obj, V1Namespace):
            return None
        return self.generate_k8s(obj, *opts)


def _flatten(meta: Dict[str, Any]) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for key, value in (meta.get(RESOURCE) or {}).items():
        if key == "name":
            out[RESOURCE] = value
        else:
            out[f"{RESOURCE}_{key}"] = value

    for key in ("labels", "annotations"):
        values = meta.get(key)
        if values:
            out[f"{RESOURCE}_{key}"] = dict(values)
    return out
