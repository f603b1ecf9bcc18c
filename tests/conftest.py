"""
Pytest fixtures for kubemeta tests.
"""
import os

import pytest
from kubernetes.client import (
    V1Namespace,
    V1ObjectMeta,
    V1OwnerReference,
    V1Pod,
    V1Service,
    V1ServiceSpec,
)

from kubemeta.config.settings import MetadataSettings
from kubemeta.store.object_store import ObjectStore


def make_service(name="frontend", namespace="shop", selector=None, labels=None,
                 annotations=None, uid="svc-uid", owner_references=None):
    """Build a V1Service with the given metadata and selector."""
    return V1Service(
        api_version="v1",
        kind="Service",
        metadata=V1ObjectMeta(
            name=name,
            namespace=namespace,
            uid=uid,
            labels=labels,
            annotations=annotations,
            owner_references=owner_references,
        ),
        spec=V1ServiceSpec(selector=selector),
    )


def make_namespace(name="shop", labels=None, annotations=None, uid="ns-uid"):
    """Build a V1Namespace."""
    return V1Namespace(
        api_version="v1",
        kind="Namespace",
        metadata=V1ObjectMeta(name=name, uid=uid, labels=labels, annotations=annotations),
    )


def make_owner(kind, name, controller=True):
    return V1OwnerReference(api_version="apps/v1", kind=kind, name=name, uid=f"{name}-uid",
                            controller=controller)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep KUBEMETA_* variables from the host out of the settings."""
    for key in list(os.environ):
        if key.startswith("KUBEMETA_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def settings():
    """Default metadata settings (dedot on)."""
    return MetadataSettings()


@pytest.fixture
def dotted_settings():
    """Metadata settings with dedot disabled."""
    return MetadataSettings(labels_dedot=False, annotations_dedot=False)


@pytest.fixture
def service():
    """Service with a two-key selector."""
    return make_service(
        selector={"app": "frontend", "tier": "web"},
        labels={"app": "frontend"},
    )


@pytest.fixture
def pod():
    """An object of a kind the service generator does not handle."""
    return V1Pod(
        api_version="v1",
        kind="Pod",
        metadata=V1ObjectMeta(name="frontend-abc", namespace="shop", uid="pod-uid"),
    )


@pytest.fixture
def service_store(service):
    """Store holding the default service under shop/frontend."""
    store = ObjectStore(name="services")
    store.add(service)
    return store


@pytest.fixture
def namespace_store():
    """Store holding the shop namespace."""
    store = ObjectStore(name="namespaces")
    store.add(make_namespace(labels={"team": "payments"}))
    return store
