from .exceptions import *
from .utils import *

__all__ = [
    "KubeMetaException",
    "StoreException",
    "ManifestException",
    "ConfigurationException",
    "setup_logging",
    "safe_get",
    "safe_put",
    "dotted_put",
    "deep_update",
    "deep_merge",
    "dedot",
]
