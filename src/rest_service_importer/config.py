"""Publisher configuration.

Values come from an optional YAML file, then environment overrides.
"""

import os
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError

from rest_service_importer.errors import ImporterError
from rest_service_importer.parser.base import DEFAULT_SERVICE_VERSION

GOVERNANCE_REGISTRY_BASE_PATH = "/_system/governance"

ENV_OVERRIDES = {
    "REGISTRY_SERVICE_ROOT": "service_root",
    "REGISTRY_ENDPOINT_ROOT": "endpoint_root",
    "REGISTRY_GOVERNANCE_BASE": "governance_base",
}


class RegistryConfig(BaseModel):
    """Registry locations used by the publisher. Immutable once built."""

    model_config = ConfigDict(frozen=True)

    service_root: str = "/trunk/restservices"
    endpoint_root: str = "/trunk/endpoints"
    governance_base: str = GOVERNANCE_REGISTRY_BASE_PATH
    default_version: str = DEFAULT_SERVICE_VERSION


def load_config(path: Path | None = None) -> RegistryConfig:
    values: dict = {}
    if path is not None:
        try:
            loaded = yaml.safe_load(path.read_text(encoding="utf-8"))
        except (OSError, yaml.YAMLError) as e:
            raise ImporterError(f"Cannot load config {path}: {e}") from e
        if loaded is not None and not isinstance(loaded, dict):
            raise ImporterError(f"Config {path} must be a mapping")
        values.update(loaded or {})

    for env_name, field in ENV_OVERRIDES.items():
        if env_name in os.environ:
            values[field] = os.environ[env_name]

    try:
        return RegistryConfig(**values)
    except ValidationError as e:
        raise ImporterError(f"Invalid registry configuration: {e}") from e
