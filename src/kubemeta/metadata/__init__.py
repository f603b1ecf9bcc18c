from .base import MetaGen, FieldOption, with_fields, with_metadata
from .labels import generate_map, generate_map_subset
from .resource import ResourceMetadataGenerator
from .namespace import NamespaceMetadataGenerator
from .service import ServiceMetadataGenerator
from .dispatch import MetadataDispatcher, ResourceKind, resource_kind

__all__ = [
    "MetaGen",
    "FieldOption",
    "with_fields",
    "with_metadata",
    "generate_map",
    "generate_map_subset",
    "ResourceMetadataGenerator",
    "NamespaceMetadataGenerator",
    "ServiceMetadataGenerator",
    "MetadataDispatcher",
    "ResourceKind",
    "resource_kind",
]
