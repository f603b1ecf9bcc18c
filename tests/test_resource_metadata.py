"""
Tests for the generic ResourceMetadataGenerator.
"""
from datetime import datetime, timezone

from kubemeta.config.settings import MetadataSettings
from kubemeta.metadata.base import with_fields, with_metadata
from kubemeta.metadata.namespace import NamespaceMetadataGenerator
from kubemeta.metadata.resource import ResourceMetadataGenerator

from conftest import make_owner, make_service


class TestGenerateK8s:
    """Tests for common Kubernetes fields."""

    def test_common_fields(self, settings):
        generator = ResourceMetadataGenerator(settings)
        obj = make_service(labels={"app.kubernetes.io/name": "shop"})

        assert generator.generate_k8s("service", obj) == {
            "service": {"name": "frontend", "uid": "svc-uid"},
            "namespace": "shop",
            "labels": {"app_kubernetes_io/name": "shop"},
        }

    def test_creation_timestamp(self, settings):
        obj = make_service()
        obj.metadata.creation_timestamp = datetime(2024, 5, 1, 12, 30, tzinfo=timezone.utc)
        meta = ResourceMetadataGenerator(settings).generate_k8s("service", obj)

        assert meta["service"]["creation_timestamp"] == "2024-05-01T12:30:00+00:00"

    def test_kind_is_lowercased(self, settings):
        meta = ResourceMetadataGenerator(settings).generate_k8s("Service", make_service())
        assert "service" in meta

    def test_cluster_scoped_object_has_no_namespace(self, settings):
        obj = make_service(namespace=None)
        meta = ResourceMetadataGenerator(settings).generate_k8s("service", obj)
        assert "namespace" not in meta

    def test_object_without_metadata(self, settings):
        assert ResourceMetadataGenerator(settings).generate_k8s("service", object()) is None

    def test_include_labels(self):
        settings = MetadataSettings(include_labels=["app"])
        obj = make_service(labels={"app": "a", "tier": "web"})
        meta = ResourceMetadataGenerator(settings).generate_k8s("service", obj)
        assert meta["labels"] == {"app": "a"}

    def test_exclude_labels_matches_raw_key(self):
        settings = MetadataSettings(exclude_labels=["app.kubernetes.io/version"])
        obj = make_service(labels={"app.kubernetes.io/version": "1", "app": "a"})
        meta = ResourceMetadataGenerator(settings).generate_k8s("service", obj)
        assert meta["labels"] == {"app": "a"}

    def test_annotations_only_when_included(self):
        obj = make_service(annotations={"prometheus.io/scrape": "true", "owner": "me"})

        meta = ResourceMetadataGenerator(MetadataSettings()).generate_k8s("service", obj)
        assert "annotations" not in meta

        settings = MetadataSettings(include_annotations=["prometheus.io/scrape"])
        meta = ResourceMetadataGenerator(settings).generate_k8s("service", obj)
        assert meta["annotations"] == {"prometheus_io/scrape": "true"}

    def test_settings_as_dict(self):
        generator = ResourceMetadataGenerator({"labels_dedot": False})
        meta = generator.generate_k8s("service", make_service(labels={"a.b": "c"}))
        assert meta["labels"] == {"a": {"b": "c"}}

    def test_creator_metadata(self, settings):
        obj = make_service(owner_references=[
            make_owner("Deployment", "web"),
            make_owner("ConfigMap", "cfg"),
            make_owner("StatefulSet", "db", controller=False),
        ])
        meta = ResourceMetadataGenerator(settings).generate_k8s("service", obj)

        assert meta["deployment"] == {"name": "web"}
        assert "configmap" not in meta
        assert "statefulset" not in meta

    def test_creator_metadata_disabled(self):
        settings = MetadataSettings(include_creator_metadata=False)
        obj = make_service(owner_references=[make_owner("Deployment", "web")])
        meta = ResourceMetadataGenerator(settings).generate_k8s("service", obj)
        assert "deployment" not in meta

    def test_namespace_enrichment(self, settings, namespace_store):
        namespace_gen = NamespaceMetadataGenerator(settings, namespace_store)
        generator = ResourceMetadataGenerator(settings, namespace=namespace_gen)
        meta = generator.generate_k8s("service", make_service())

        assert meta["namespace"] == "shop"
        assert meta["namespace_uid"] == "ns-uid"
        assert meta["namespace_labels"] == {"team": "payments"}

    def test_unknown_namespace_adds_nothing(self, settings, namespace_store):
        namespace_gen = NamespaceMetadataGenerator(settings, namespace_store)
        generator = ResourceMetadataGenerator(settings, namespace=namespace_gen)
        meta = generator.generate_k8s("service", make_service(namespace="other"))

        assert meta["namespace"] == "other"
        assert "namespace_uid" not in meta

    def test_options_applied_in_order(self, settings):
        obj = make_service(labels={"app": "a"})
        meta = ResourceMetadataGenerator(settings).generate_k8s(
            "service", obj, with_fields("extra.field", "x"), with_metadata("Service")
        )

        assert meta["extra"] == {"field": "x"}
        assert meta["service"]["labels"] == {"app": "a"}
        assert meta["service"]["name"] == "frontend"


class TestGenerateECS:
    """Tests for ECS orchestrator fields."""

    def test_empty_without_cluster_settings(self, settings):
        assert ResourceMetadataGenerator(settings).generate_ecs(make_service()) == {}

    def test_cluster_fields(self):
        settings = MetadataSettings(cluster_name="prod", cluster_url="https://k8s.example:6443")
        ecs = ResourceMetadataGenerator(settings).generate_ecs(object())

        assert ecs == {"orchestrator": {"cluster": {"name": "prod", "url": "https://k8s.example:6443"}}}
