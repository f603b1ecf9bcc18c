"""Maps raw manifests (YAML documents) to Kubernetes client models."""

from typing import Any, Dict, Iterable, Iterator, List, Optional
import structlog
import yaml
from kubernetes.client import (
    V1Namespace,
    V1ObjectMeta,
    V1OwnerReference,
    V1Service,
    V1ServiceSpec,
)

from kubemeta.core.exceptions import ManifestException
from kubemeta.core.utils import safe_get

logger = structlog.get_logger(__name__)


class ManifestMapper:
    """Maps manifest dictionaries to ``kubernetes.client`` models."""

    def __init__(self):
        self._mappers = {
            "Service": self.map_service,
            "Namespace": self.map_namespace,
        }

    @property
    def supported_kinds(self) -> List[str]:
        return list(self._mappers)

    def map_manifest(self, manifest: Dict[str, Any]) -> Optional[Any]:
        """Map a single manifest, returning None for unsupported kinds."""
        kind = manifest.get("kind")
        mapper = self._mappers.get(kind)
        if mapper is None:
            logger.warning("Skipping unsupported manifest", kind=kind, supported=self.supported_kinds)
            return None
        return mapper(manifest)

    def map_manifests(self, manifests: Iterable[Dict[str, Any]]) -> List[Any]:
        objects = []
        for manifest in manifests:
            obj = self.map_manifest(manifest)
            if obj is not None:
                objects.append(obj)
        return objects

    def map_service(self, manifest: Dict[str, Any]) -> V1Service:
        metadata = self._map_metadata("Service", manifest)
        try:
            return V1Service(
                api_version=manifest.get("apiVersion", "v1"),
                kind="Service",
                metadata=metadata,
                spec=V1ServiceSpec(
                    selector=_string_map("Service", "spec.selector", safe_get(manifest, "spec.selector")),
                    type=safe_get(manifest, "spec.type", "ClusterIP"),
                    cluster_ip=safe_get(manifest, "spec.clusterIP"),
                ),
            )
        except (ValueError, TypeError) as e:
            raise ManifestException("Service", str(e))

    def map_namespace(self, manifest: Dict[str, Any]) -> V1Namespace:
        metadata = self._map_metadata("Namespace", manifest)
        try:
            return V1Namespace(
                api_version=manifest.get("apiVersion", "v1"),
                kind="Namespace",
                metadata=metadata,
            )
        except (ValueError, TypeError) as e:
            raise ManifestException("Namespace", str(e))

    def _map_metadata(self, kind: str, manifest: Dict[str, Any]) -> V1ObjectMeta:
        metadata = manifest.get("metadata") or {}
        if not isinstance(metadata, dict):
            raise ManifestException(kind, "metadata is not a mapping")
        if not metadata.get("name"):
            raise ManifestException(kind, "metadata.name is required")

        try:
            owner_references = [
                V1OwnerReference(
                    api_version=_string(ref.get("apiVersion")),
                    kind=_string(ref.get("kind")),
                    name=_string(ref.get("name")),
                    uid=_string(ref.get("uid")),
                    controller=ref.get("controller"),
                )
                for ref in metadata.get("ownerReferences") or []
            ]
        except (ValueError, TypeError, AttributeError) as e:
            raise ManifestException(kind, f"invalid ownerReferences: {e}")

        try:
            return V1ObjectMeta(
                name=_string(metadata["name"]),
                namespace=_string(metadata.get("namespace")),
                uid=_string(metadata.get("uid")),
                labels=_string_map(kind, "metadata.labels", metadata.get("labels")),
                annotations=_string_map(kind, "metadata.annotations", metadata.get("annotations")),
                creation_timestamp=metadata.get("creationTimestamp"),
                owner_references=owner_references or None,
            )
        except (ValueError, TypeError) as e:
            raise ManifestException(kind, str(e))


def _string(value: Any) -> Optional[str]:
    # YAML turns unquoted numbers and booleans into non-string scalars
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, bool):
        return str(value).lower()
    return str(value)


def _string_map(kind: str, field: str, value: Any) -> Optional[Dict[str, str]]:
    if not value:
        return None
    if not isinstance(value, dict):
        raise ManifestException(kind, f"{field} is not a mapping")
    return {str(k): _string(v) for k, v in value.items()}


def load_manifests(stream: Any) -> Iterator[Dict[str, Any]]:
    """Yield every non-empty document of a (multi-document) YAML stream."""
    try:
        for document in yaml.safe_load_all(stream):
            if not document:
                continue
            if not isinstance(document, dict):
                raise ManifestException("YAML", "document is not a mapping")
            if document.get("kind") == "List":
                yield from (item for item in document.get("items") or [] if item)
            else:
                yield document
    except yaml.YAMLError as e:
        raise ManifestException("YAML", str(e))
