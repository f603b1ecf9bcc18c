from .manifest_mapper import ManifestMapper, load_manifests

__all__ = [
    "ManifestMapper",
    "load_manifests"
]
