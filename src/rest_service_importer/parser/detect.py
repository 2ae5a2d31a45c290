"""Load Swagger documents from disk and detect their version."""

import json
from pathlib import Path

import yaml

from rest_service_importer.errors import DocumentLoadError

RESOURCE_SUFFIXES = ("", ".json", ".yaml", ".yml")


def load_document(file_path: Path) -> dict:
    """Read a JSON or YAML API document into a dict."""
    try:
        text = file_path.read_text(encoding="utf-8")
    except OSError as e:
        raise DocumentLoadError(f"Cannot read {file_path}: {e}") from e

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError:
        # Some valid JSON (e.g. tabs in strings) is rejected by the YAML loader
        try:
            data = json.loads(text)
        except ValueError as e:
            raise DocumentLoadError(f"{file_path} is neither YAML nor JSON: {e}") from e

    if not isinstance(data, dict):
        raise DocumentLoadError(f"{file_path} does not contain a document object")
    return data


def detect_swagger_version(document: dict) -> str | None:
    """Return '2.0' or '1.2' style version tag of a Swagger document.

    Unquoted YAML versions are parsed as floats, so the tag is normalised
    to a string.
    """
    for key in ("swagger", "swaggerVersion"):
        if key in document:
            return str(document[key])
    return None


def load_resource_documents(listing: dict, listing_path: Path) -> list[dict]:
    """Load the Swagger 1.2 API declarations referenced by a resource listing.

    Each ``apis[*].path`` is resolved relative to the listing's directory.
    """
    base_dir = listing_path.parent
    documents = []
    for api in listing.get("apis", []):
        ref = api.get("path")
        if not ref:
            continue
        documents.append(load_document(_resolve(base_dir, ref)))
    return documents


def _resolve(base_dir: Path, ref: str) -> Path:
    relative = ref.lstrip("/")
    for suffix in RESOURCE_SUFFIXES:
        candidate = base_dir / f"{relative}{suffix}"
        if candidate.is_file():
            return candidate
    raise DocumentLoadError(f"Resource document '{ref}' not found under {base_dir}")
