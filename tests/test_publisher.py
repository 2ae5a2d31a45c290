import uuid
from unittest.mock import MagicMock

import pytest

from rest_service_importer.artifact.endpoint import create_endpoint_element
from rest_service_importer.artifact.serializer import parse_xml, read_overview, to_element
from rest_service_importer.config import RegistryConfig
from rest_service_importer.errors import MalformedArtifactError, StoreWriteError
from rest_service_importer.parser.base import RestServiceArtifact, RouteTemplate, ServiceOverview
from rest_service_importer.registry.publisher import (
    ENDPOINT_MEDIA_TYPE,
    REST_SERVICE_MEDIA_TYPE,
    RegistryPublisher,
    StaticPublishContext,
    join_path,
)
from rest_service_importer.registry.store import InMemoryStore

CONTEXT = StaticPublishContext(user="admin")


def _service_element(name: str = "PetStoreAPI", version: str = "2.0.0"):
    artifact = RestServiceArtifact(
        overview=ServiceOverview(provider="admin", name=name, context="/" + name, version=version),
        uri_templates=[RouteTemplate(url_pattern="/pets", http_verb="get")],
    )
    return to_element(artifact)


class TestJoinPath:
    def test_collapses_separators(self):
        assert join_path("", "/_system/governance", "/trunk/restservices/", "admin") == (
            "/_system/governance/trunk/restservices/admin"
        )


class TestPublishService:
    def test_path_and_resource(self):
        store = InMemoryStore()
        path = RegistryPublisher(store).publish_service(CONTEXT, _service_element())

        assert path == "/_system/governance/trunk/restservices/admin/PetStoreAPI/2.0.0/PetStoreAPI-rest_service"
        resource = store.get(path)
        assert resource.media_type == REST_SERVICE_MEDIA_TYPE
        assert resource.properties == {"version": "2.0.0"}
        uuid.UUID(resource.uuid)
        assert read_overview(parse_xml(resource.content)) == ("PetStoreAPI", "2.0.0")

    def test_configured_roots_and_chroot(self):
        store = InMemoryStore()
        config = RegistryConfig(service_root="services", endpoint_root="eps")
        context = StaticPublishContext(user="bob", root="/tenant1")
        path = RegistryPublisher(store, config).publish_service(context, _service_element("A", "1"))
        assert path == "/tenant1/_system/governance/services/bob/A/1/A-rest_service"

    def test_same_artifact_same_path(self):
        store = InMemoryStore()
        publisher = RegistryPublisher(store)
        first = publisher.publish_service(CONTEXT, _service_element())
        second = publisher.publish_service(CONTEXT, _service_element())
        assert first == second
        assert store.paths() == [first]

    def test_each_publish_gets_a_new_uuid(self):
        store = MagicMock()
        publisher = RegistryPublisher(store)
        publisher.publish_service(CONTEXT, _service_element())
        publisher.publish_service(CONTEXT, _service_element())
        first, second = (c.args[1].uuid for c in store.put.call_args_list)
        assert first != second

    def test_missing_version_uses_configured_default(self):
        element = _service_element()
        overview = element.find("{http://www.wso2.org/governance/metadata}overview")
        overview.find("{http://www.wso2.org/governance/metadata}version").text = None
        store = InMemoryStore()
        publisher = RegistryPublisher(store, RegistryConfig(default_version="0.0.1"))
        path = publisher.publish_service(CONTEXT, element)
        assert "/PetStoreAPI/0.0.1/" in path
        assert store.get(path).properties["version"] == "0.0.1"

    def test_malformed_artifact(self):
        element = _service_element()
        element.remove(element.find("{http://www.wso2.org/governance/metadata}overview"))
        store = InMemoryStore()
        with pytest.raises(MalformedArtifactError):
            RegistryPublisher(store).publish_service(CONTEXT, element)
        assert store.paths() == []

    def test_store_failure_propagates(self):
        store = MagicMock()
        store.put.side_effect = PermissionError("read-only registry")
        with pytest.raises(StoreWriteError) as exc:
            RegistryPublisher(store).publish_service(CONTEXT, _service_element())
        assert isinstance(exc.value.__cause__, PermissionError)
        assert exc.value.path.endswith("PetStoreAPI-rest_service")


class TestPublishEndpoint:
    def test_path_and_resource(self):
        store = InMemoryStore()
        endpoint = create_endpoint_element("https://petstore.example.com/v2", "2.0.0")
        path = RegistryPublisher(store).publish_endpoint(CONTEXT, endpoint, "PetStoreAPI")

        assert path == "/_system/governance/trunk/endpoints/PetStoreAPI/2.0.0/ep-petstore-example-com-v2"
        resource = store.get(path)
        assert resource.media_type == ENDPOINT_MEDIA_TYPE
        assert resource.properties == {"version": "2.0.0"}
