import pytest
from pydantic import ValidationError

from rest_service_importer.config import RegistryConfig, load_config
from rest_service_importer.errors import ImporterError


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in ("REGISTRY_SERVICE_ROOT", "REGISTRY_ENDPOINT_ROOT", "REGISTRY_GOVERNANCE_BASE"):
        monkeypatch.delenv(name, raising=False)


class TestLoadConfig:
    def test_defaults(self):
        config = load_config()
        assert config.service_root == "/trunk/restservices"
        assert config.endpoint_root == "/trunk/endpoints"
        assert config.governance_base == "/_system/governance"
        assert config.default_version == "1.0.0"

    def test_yaml_file(self, tmp_path):
        f = tmp_path / "registry.yaml"
        f.write_text("service_root: /apis/rest\nendpoint_root: /apis/endpoints\n")
        config = load_config(f)
        assert config.service_root == "/apis/rest"
        assert config.endpoint_root == "/apis/endpoints"

    def test_env_overrides_file(self, tmp_path, monkeypatch):
        f = tmp_path / "registry.yaml"
        f.write_text("service_root: /apis/rest\n")
        monkeypatch.setenv("REGISTRY_SERVICE_ROOT", "/from/env")
        assert load_config(f).service_root == "/from/env"

    def test_invalid_file(self, tmp_path):
        f = tmp_path / "registry.yaml"
        f.write_text("- not\n- a mapping\n")
        with pytest.raises(ImporterError):
            load_config(f)

    def test_invalid_value(self, tmp_path):
        f = tmp_path / "registry.yaml"
        f.write_text("service_root: [1, 2]\n")
        with pytest.raises(ImporterError):
            load_config(f)


class TestRegistryConfig:
    def test_frozen(self):
        config = RegistryConfig()
        with pytest.raises(ValidationError):
            config.service_root = "/other"
