"""Swagger 1.2 / 2.0 document mapper.

Builds a RestServiceArtifact from a parsed Swagger document. Key and array
order of the source document is preserved in the route templates.
"""

import logging
import re

from rest_service_importer.errors import InvalidFieldError, MissingFieldError
from .base import (
    DEFAULT_SERVICE_VERSION,
    SWAGGER_VERSION_12,
    SWAGGER_VERSION_2,
    RestServiceArtifact,
    RouteTemplate,
    ServiceOverview,
)

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s")


def create_rest_service_artifact(
    document: dict,
    swagger_version: str | None,
    resource_documents: list[dict] | None = None,
    provider: str = "",
    default_version: str = DEFAULT_SERVICE_VERSION,
) -> RestServiceArtifact:
    """Map a Swagger document into a RestServiceArtifact.

    ``resource_documents`` holds the Swagger 1.2 API declarations and is
    ignored for other versions. An unrecognised ``swagger_version`` yields an
    artifact without route templates.
    """
    info = document.get("info")
    if not isinstance(info, dict):
        raise MissingFieldError("info")
    title = _text(info, "title")
    if title is None:
        raise MissingFieldError("info.title")

    name = _WHITESPACE.sub("", title)
    version = None
    transports = ""
    templates: list[RouteTemplate] = []

    if swagger_version == SWAGGER_VERSION_2:
        version = _text(info, "version")
        transports = _text(document, "schemes") or ""
        templates = _templates_from_swagger2(document)
    elif swagger_version == SWAGGER_VERSION_12:
        version = _text(document, "apiVersion")
        templates = _templates_from_swagger12(resource_documents or [])
    else:
        logger.debug("Unsupported swagger version %r, no URI templates created", swagger_version)

    overview = ServiceOverview(
        provider=provider,
        name=name,
        context="/" + name,
        version=default_version if version is None else version,
        transports=transports,
        description=_text(info, "description") or "",
    )
    logger.debug("Mapped %s with %d URI templates", name, len(templates))
    return RestServiceArtifact(overview=overview, uri_templates=templates)


def _templates_from_swagger2(document: dict) -> list[RouteTemplate]:
    templates = []
    for path, operations in (document.get("paths") or {}).items():
        if operations is None:
            continue
        if not isinstance(operations, dict):
            raise InvalidFieldError(f"paths.{path}", "a mapping of operations")
        for method in operations:
            templates.append(RouteTemplate(url_pattern=path, http_verb=method))
    return templates


def _templates_from_swagger12(resource_documents: list[dict]) -> list[RouteTemplate]:
    templates = []
    for resource in resource_documents:
        for api in resource.get("apis", []):
            path = api.get("path")
            if path is None:
                raise MissingFieldError("apis[].path")
            for operation in api.get("operations", []):
                method = operation.get("method")
                if method is None:
                    raise MissingFieldError("operations[].method")
                templates.append(RouteTemplate(url_pattern=path, http_verb=method))
    return templates


def _text(obj: dict, key: str) -> str | None:
    """Return a child value as text, joining arrays with commas."""
    value = obj.get(key)
    if value is None:
        return None
    if isinstance(value, list):
        return ",".join(str(v) for v in value)
    return str(value)
