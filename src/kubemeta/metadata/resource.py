"""Generic metadata generator shared by all kind-specific generators."""

from typing import Any, Dict, Optional, Union
import structlog
from pydantic import ValidationError
from pydantic_settings import SettingsError

from kubemeta.config.settings import MetadataSettings
from kubemeta.core.exceptions import ConfigurationException
from kubemeta.core.utils import deep_update, dotted_put, safe_put
from kubemeta.metadata.base import FieldOption, MetaGen
from kubemeta.metadata.labels import generate_map, generate_map_subset

logger = structlog.get_logger(__name__)

# Controller kinds whose name is copied onto the owned object's metadata
CREATOR_KINDS = ("Deployment", "ReplicaSet", "StatefulSet", "DaemonSet", "Job", "CronJob")


def load_settings(settings: Union[MetadataSettings, Dict[str, Any], None]) -> MetadataSettings:
    """Accept settings as a model, a plain dict or nothing at all."""
    if settings is None:
        return MetadataSettings()
    if isinstance(settings, MetadataSettings):
        return settings
    try:
        return MetadataSettings(**settings)
    except (ValidationError, SettingsError, TypeError) as e:
        raise ConfigurationException(f"Invalid metadata settings: {e}", {"settings": settings})


class ResourceMetadataGenerator:
    """Produces the fields every Kubernetes object has in common.

    The Kubernetes document looks like::

        {
            "<kind>": {"name": ..., "uid": ..., "creation_timestamp": ...},
            "namespace": ...,
            "labels": {...},
            "annotations": {...},
        }

    ECS fields describe the cluster the object lives in and do not depend on
    the object itself.
    """

    def __init__(
        self,
        settings: Union[MetadataSettings, Dict[str, Any], None] = None,
        client: Any = None,
        namespace: Optional[MetaGen] = None
    ):
        self.settings = load_settings(settings)
        self.client = client
        self.namespace = namespace
        self.logger = logger.bind(generator=self.__class__.__name__)

    def generate_ecs(self, obj: Any) -> Dict[str, Any]:
        """Generate ECS orchestrator fields."""
        ecs_meta: Dict[str, Any] = {}
        if self.settings.cluster_url:
            dotted_put(ecs_meta, "orchestrator.cluster.url", self.settings.cluster_url)
        if self.settings.cluster_name:
            dotted_put(ecs_meta, "orchestrator.cluster.name", self.settings.cluster_name)
        return ecs_meta

    def generate_k8s(self, kind: str, obj: Any, *opts: FieldOption) -> Optional[Dict[str, Any]]:
        """Generate the common Kubernetes fields of ``obj`` under ``kind``."""
        metadata = getattr(obj, "metadata", None)
        if metadata is None:
            self.logger.debug("Object has no metadata", kind=kind, type=type(obj).__name__)
            return None

        labels = self._labels(metadata.labels)
        annotations = generate_map_subset(
            metadata.annotations,
            self.settings.include_annotations,
            self.settings.annotations_dedot
        )

        meta: Dict[str, Any] = {
            kind.lower(): {
                "name": metadata.name,
                "uid": metadata.uid,
            }
        }

        created = metadata.creation_timestamp
        if created:
            meta[kind.lower()]["creation_timestamp"] = created.isoformat() if hasattr(created, "isoformat") else str(created)

        if metadata.namespace:
            safe_put(meta, "namespace", metadata.namespace)
            if self.namespace is not None:
                deep_update(meta, self.namespace.generate_from_name(metadata.namespace))

        if self.settings.include_creator_metadata:
            for ref in metadata.owner_references or []:
                if ref.controller and ref.kind in CREATOR_KINDS:
                    safe_put(meta, f"{ref.kind.lower()}.name", ref.name)

        if labels:
            safe_put(meta, "labels", labels)
        if annotations:
            safe_put(meta, "annotations", annotations)

        for option in opts:
            option(meta)

        return meta

    def _labels(self, labels: Optional[Dict[str, str]]) -> Dict[str, Any]:
        labels = {
            key: value for key, value in (labels or {}).items()
            if key not in self.settings.exclude_labels
        }
        if not self.settings.include_labels:
            return generate_map(labels, self.settings.labels_dedot)
        return generate_map_subset(labels, self.settings.include_labels, self.settings.labels_dedot)
