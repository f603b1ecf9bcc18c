# src/kubemeta/cli.py
"""Generate Service metadata documents from manifest files."""

import json
import sys
import click
import structlog

from kubemeta.config.settings import Settings
from kubemeta.core.exceptions import ConfigurationException, KubeMetaException
from kubemeta.core.utils import setup_logging
from kubemeta.mappers.manifest_mapper import ManifestMapper, load_manifests
from kubemeta.metadata.dispatch import MetadataDispatcher, ResourceKind, resource_kind
from kubemeta.metadata.namespace import NamespaceMetadataGenerator
from kubemeta.metadata.service import ServiceMetadataGenerator
from kubemeta.store.object_store import ObjectStore

logger = structlog.get_logger(__name__)


def build_dispatcher(settings, services: ObjectStore, namespaces: ObjectStore) -> MetadataDispatcher:
    """Wire the namespace and service generators over their stores."""
    namespace_gen = NamespaceMetadataGenerator(settings, namespaces)
    service_gen = ServiceMetadataGenerator(settings, services, namespace_gen)
    return MetadataDispatcher({
        ResourceKind.SERVICE: service_gen,
        ResourceKind.NAMESPACE: namespace_gen,
    })


@click.group()
def cli():
    """Kubernetes metadata enrichment tools."""


@cli.command()
@click.argument('manifests', nargs=-1, required=True, type=click.File('r'))
@click.option('--name', '-n', 'names', multiple=True, help='Only emit the service stored under this key (namespace/name)')
@click.option('--no-labels-dedot', is_flag=True, help='Nest dotted label and selector keys instead of replacing dots')
@click.option('--include-annotation', 'annotations', multiple=True, help='Annotation to include (repeatable)')
@click.option('--cluster-name', default=None, help='Value for orchestrator.cluster.name')
@click.option('--debug', is_flag=True, help='Enable debug logging')
def generate(manifests, names, no_labels_dedot, annotations, cluster_name, debug):
    """
    Print the metadata document of every Service found in MANIFESTS.

    Namespace manifests in the same input enrich the services living in them.

    Example:
        kubemeta generate deploy/*.yaml --name shop/frontend
    """
    try:
        settings = Settings.create_from_env()
    except ConfigurationException as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(2)
    if debug:
        settings.debug = True
    setup_logging(log_level="DEBUG" if settings.debug else settings.log_level.value,
                  log_format=settings.log_format.value)

    overrides = {}
    if no_labels_dedot:
        overrides["labels_dedot"] = False
    if annotations:
        overrides["include_annotations"] = list(annotations)
    if cluster_name:
        overrides["cluster_name"] = cluster_name
    metadata_settings = settings.metadata.model_copy(update=overrides)

    services = ObjectStore(name="services")
    namespaces = ObjectStore(name="namespaces")
    mapper = ManifestMapper()

    try:
        for stream in manifests:
            for obj in mapper.map_manifests(load_manifests(stream)):
                if resource_kind(obj) is ResourceKind.SERVICE:
                    services.add(obj)
                else:
                    namespaces.add(obj)
    except KubeMetaException as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    logger.debug("Loaded manifests", services=len(services), namespaces=len(namespaces))
    dispatcher = build_dispatcher(metadata_settings, services, namespaces)

    if names:
        for name in names:
            meta = dispatcher.generate_from_name(ResourceKind.SERVICE, name)
            if meta is None:
                click.echo(f"Service {name} not found", err=True)
                continue
            click.echo(json.dumps({"key": name, "kubernetes": meta}, indent=2, default=str))
        return

    for key in sorted(services.list_keys()):
        obj, _ = services.get_by_key(key)
        click.echo(json.dumps({"key": key, **dispatcher.generate(obj)}, indent=2, default=str))


if __name__ == '__main__':
    cli()
