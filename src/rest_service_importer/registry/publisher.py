"""Publishes REST service and endpoint artifacts to an artifact store."""

import logging
import uuid
from typing import Protocol
from xml.etree.ElementTree import Element

from rest_service_importer.artifact.serializer import read_overview, to_xml_string
from rest_service_importer.config import RegistryConfig
from rest_service_importer.errors import ImporterError, StoreWriteError
from .store import PATH_SEPARATOR, ArtifactStore, Resource

logger = logging.getLogger(__name__)

REST_SERVICE_MEDIA_TYPE = "application/vnd.wso2-restservice+xml"
ENDPOINT_MEDIA_TYPE = "application/vnd.wso2-endpoint+xml"
VERSION_PARAMETER_NAME = "version"
REST_SERVICE_SUFFIX = "-rest_service"


class PublishContext(Protocol):
    def current_user(self) -> str: ...

    def registry_root(self) -> str: ...


class StaticPublishContext:
    """Publish context with a fixed user and registry chroot."""

    def __init__(self, user: str, root: str = ""):
        self.user = user
        self.root = root

    def current_user(self) -> str:
        return self.user

    def registry_root(self) -> str:
        return self.root


class RegistryPublisher:
    """Writes artifacts under the configured governance locations."""

    def __init__(self, store: ArtifactStore, config: RegistryConfig | None = None):
        self.store = store
        self.config = config or RegistryConfig()

    def publish_service(self, context: PublishContext, data: Element) -> str:
        """Store a REST service artifact and return its registry path.

        Path: <root>/<governance>/<service root>/<user>/<name>/<version>/<name>-rest_service
        """
        name, version = read_overview(data, self.config.default_version)
        path = join_path(
            context.registry_root(),
            self.config.governance_base,
            self.config.service_root,
            context.current_user(),
            name,
            version,
            name + REST_SERVICE_SUFFIX,
        )
        self._put(path, _build_resource(REST_SERVICE_MEDIA_TYPE, version, data))
        logger.info("REST service created at %s", path)
        return path

    def publish_endpoint(self, context: PublishContext, endpoint: Element, service_name: str) -> str:
        """Store an endpoint artifact under the owning service's name."""
        name, version = read_overview(endpoint, self.config.default_version)
        path = join_path(
            context.registry_root(),
            self.config.governance_base,
            self.config.endpoint_root,
            service_name,
            version,
            name,
        )
        self._put(path, _build_resource(ENDPOINT_MEDIA_TYPE, version, endpoint))
        logger.info("Endpoint created at %s", path)
        return path

    def _put(self, path: str, resource: Resource) -> None:
        try:
            self.store.put(path, resource)
        except ImporterError:
            raise
        except Exception as e:
            raise StoreWriteError(path, str(e)) from e


def _build_resource(media_type: str, version: str, data: Element) -> Resource:
    return Resource(
        media_type=media_type,
        properties={VERSION_PARAMETER_NAME: version},
        content=to_xml_string(data).encode("utf-8"),
        uuid=str(uuid.uuid4()),
    )


def join_path(*segments: str) -> str:
    """Join registry path segments with single separators."""
    parts = []
    for segment in segments:
        parts.extend(p for p in segment.split(PATH_SEPARATOR) if p)
    return PATH_SEPARATOR + PATH_SEPARATOR.join(parts)
