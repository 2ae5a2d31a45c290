"""Canonical models for an imported REST service.

Both Swagger variants are mapped into these models before they are
serialized to the registry's XML artifact format.
"""

from pydantic import BaseModel

SWAGGER_VERSION_12 = "1.2"
SWAGGER_VERSION_2 = "2.0"

DEFAULT_SERVICE_VERSION = "1.0.0"


class RouteTemplate(BaseModel):
    """A single (URL pattern, HTTP verb) pair declared by the document."""

    url_pattern: str  # /pets/{petId}
    http_verb: str  # get / post / ...
    auth_type: str = ""  # never populated from the source document


class ServiceOverview(BaseModel):
    """Top-level metadata of a REST service."""

    provider: str
    name: str
    context: str  # "/" + name
    version: str = DEFAULT_SERVICE_VERSION
    transports: str = ""  # Swagger 2.0 only
    description: str = ""


class RestServiceArtifact(BaseModel):
    """An overview plus its route templates in declaration order."""

    overview: ServiceOverview
    uri_templates: list[RouteTemplate] = []
