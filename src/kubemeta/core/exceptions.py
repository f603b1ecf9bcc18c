"""Custom exceptions for the kubemeta package."""

from typing import Optional, Dict, Any


class KubeMetaException(Exception):
    """Base exception for kubemeta."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class StoreException(KubeMetaException):
    """Raised when an object store lookup fails internally."""

    def __init__(self, key: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.key = key
        super().__init__(f"Store lookup failed for {key}: {message}", details)


class ManifestException(KubeMetaException):
    """Raised when a manifest cannot be mapped to a Kubernetes object."""

    def __init__(self, kind: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.kind = kind
        super().__init__(f"Invalid {kind} manifest: {message}", details)


class ConfigurationException(KubeMetaException):
    """Raised when configuration is invalid."""
    pass
