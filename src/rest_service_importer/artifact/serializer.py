"""XML form of the REST service artifact.

The registry stores artifacts as XML under a single governance namespace.
Child order inside ``overview`` and ``uritemplate`` is fixed.
"""

import xml.etree.ElementTree as ET
from xml.etree.ElementTree import Element

import defusedxml.ElementTree as DET

from rest_service_importer.errors import MalformedArtifactError
from rest_service_importer.parser.base import DEFAULT_SERVICE_VERSION, RestServiceArtifact

SERVICE_ELEMENT_NAMESPACE = "http://www.wso2.org/governance/metadata"
SERVICE_ELEMENT_ROOT = "service"

OVERVIEW = "overview"
PROVIDER = "provider"
NAME = "name"
CONTEXT = "context"
VERSION = "version"
TRANSPORTS = "transports"
DESCRIPTION = "description"
URI_TEMPLATE = "uritemplate"
URL_PATTERN = "urlPattern"
HTTP_VERB = "httpVerb"
AUTH_TYPE = "authType"

ET.register_namespace("", SERVICE_ELEMENT_NAMESPACE)


def qname(tag: str) -> str:
    return f"{{{SERVICE_ELEMENT_NAMESPACE}}}{tag}"


def to_element(artifact: RestServiceArtifact) -> Element:
    """Build the ``service`` element tree for an artifact."""
    root = Element(qname(SERVICE_ELEMENT_ROOT))

    ov = artifact.overview
    overview = ET.SubElement(root, qname(OVERVIEW))
    for tag, text in (
        (PROVIDER, ov.provider),
        (NAME, ov.name),
        (CONTEXT, ov.context),
        (VERSION, ov.version),
        (TRANSPORTS, ov.transports),
        (DESCRIPTION, ov.description),
    ):
        _child(overview, tag, text)

    for template in artifact.uri_templates:
        uri_template = ET.SubElement(root, qname(URI_TEMPLATE))
        _child(uri_template, URL_PATTERN, template.url_pattern)
        _child(uri_template, HTTP_VERB, template.http_verb)
        _child(uri_template, AUTH_TYPE, template.auth_type)

    return root


def to_xml_string(element: Element | RestServiceArtifact) -> str:
    """Serialize an element (or an artifact) to XML text."""
    if isinstance(element, RestServiceArtifact):
        element = to_element(element)
    return ET.tostring(element, encoding="unicode")


def parse_xml(text: str | bytes) -> Element:
    """Parse stored artifact content back into an element."""
    return DET.fromstring(text)


def read_overview(element: Element, default_version: str = DEFAULT_SERVICE_VERSION) -> tuple[str, str]:
    """Return (name, version) from an artifact's overview.

    A missing or empty version falls back to ``default_version``.
    """
    overview = element.find(qname(OVERVIEW))
    if overview is None:
        raise MalformedArtifactError(f"<{OVERVIEW}> element not found in <{_local(element.tag)}>")

    name = overview.findtext(qname(NAME))
    if not name:
        raise MalformedArtifactError(f"<{OVERVIEW}> has no <{NAME}>")
    version = overview.findtext(qname(VERSION)) or default_version
    return name, version


def _child(parent: Element, tag: str, text: str) -> Element:
    element = ET.SubElement(parent, qname(tag))
    element.text = text or None
    return element


def _local(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]
