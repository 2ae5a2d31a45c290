"""CLI entry point for rest-service-importer."""

import getpass
import logging
from pathlib import Path

import click

from rest_service_importer.artifact.endpoint import create_endpoint_element, endpoint_address
from rest_service_importer.artifact.serializer import to_element, to_xml_string
from rest_service_importer.config import load_config
from rest_service_importer.errors import ImporterError
from rest_service_importer.log import setup_logging
from rest_service_importer.parser.base import SWAGGER_VERSION_12, RestServiceArtifact
from rest_service_importer.parser.detect import (
    detect_swagger_version,
    load_document,
    load_resource_documents,
)
from rest_service_importer.parser.swagger import create_rest_service_artifact
from rest_service_importer.registry.publisher import RegistryPublisher, StaticPublishContext
from rest_service_importer.registry.store import FileSystemStore


def _convert(doc_path: Path, provider: str, default_version: str) -> tuple[RestServiceArtifact, dict, str | None, list[dict]]:
    """Load a Swagger document (and its 1.2 declarations) and map it."""
    document = load_document(doc_path)
    version = detect_swagger_version(document)
    resources = []
    if version == SWAGGER_VERSION_12:
        resources = load_resource_documents(document, doc_path)
    artifact = create_rest_service_artifact(
        document, version, resources, provider=provider, default_version=default_version
    )
    return artifact, document, version, resources


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
def main(verbose: bool):
    """Import Swagger documents into a governance registry as REST service artifacts."""
    setup_logging(logging.DEBUG if verbose else logging.INFO)


@main.command()
@click.argument("doc_path", type=click.Path(exists=True, path_type=Path))
@click.option("-o", "--output", default=None, type=click.Path(path_type=Path), help="Write the XML artifact to this file.")
@click.option("--provider", default=None, help="Provider name recorded in the artifact.")
@click.option("--config", "config_path", default=None, type=click.Path(exists=True, path_type=Path), help="Registry config YAML.")
def convert(doc_path: Path, output: Path | None, provider: str | None, config_path: Path | None):
    """Convert a Swagger document into a REST service XML artifact."""
    try:
        config = load_config(config_path)
        artifact, _, _, _ = _convert(doc_path, provider or getpass.getuser(), config.default_version)
    except ImporterError as e:
        raise click.ClickException(str(e))

    xml_text = to_xml_string(artifact)
    if output is None:
        click.echo(xml_text)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(xml_text, encoding="utf-8")
    click.echo(f"Artifact saved to {output}")


@main.command("import")
@click.argument("doc_path", type=click.Path(exists=True, path_type=Path))
@click.option("--registry", "registry_dir", required=True, type=click.Path(file_okay=False, path_type=Path), help="Local registry directory.")
@click.option("--config", "config_path", default=None, type=click.Path(exists=True, path_type=Path), help="Registry config YAML.")
@click.option("--user", default=None, help="User the service is published for.")
@click.option("--root", default="", help="Registry chroot prepended to every path.")
def import_(doc_path: Path, registry_dir: Path, config_path: Path | None, user: str | None, root: str):
    """Convert a Swagger document and publish the service and its endpoint."""
    user = user or getpass.getuser()
    context = StaticPublishContext(user=user, root=root)
    try:
        config = load_config(config_path)
        click.echo(f"Parsing {doc_path}...")
        artifact, document, version, resources = _convert(doc_path, user, config.default_version)
        click.echo(f"Found {len(artifact.uri_templates)} URI templates.")

        publisher = RegistryPublisher(FileSystemStore(registry_dir), config)
        service_path = publisher.publish_service(context, to_element(artifact))
        click.echo(f"  REST service: {service_path}")

        address = endpoint_address(document, version, resources)
        if address:
            endpoint = create_endpoint_element(address, artifact.overview.version)
            endpoint_path = publisher.publish_endpoint(context, endpoint, artifact.overview.name)
            click.echo(f"  Endpoint: {endpoint_path}")
    except ImporterError as e:
        raise click.ClickException(str(e))

    click.echo(f"Imported {artifact.overview.name} {artifact.overview.version}")
