from .object_store import ObjectStore, meta_namespace_key

__all__ = ["ObjectStore", "meta_namespace_key"]
