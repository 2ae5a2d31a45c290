"""Endpoint artifacts derived from a Swagger document's host information."""

import re
import xml.etree.ElementTree as ET
from xml.etree.ElementTree import Element

from rest_service_importer.parser.base import SWAGGER_VERSION_12, SWAGGER_VERSION_2
from .serializer import NAME, OVERVIEW, VERSION, qname

ENDPOINT_ELEMENT_ROOT = "endpoint"
ADDRESS = "address"

_SCHEME = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*://")
_NON_ALNUM = re.compile(r"[^a-zA-Z0-9]+")


def endpoint_address(
    document: dict,
    swagger_version: str | None,
    resource_documents: list[dict] | None = None,
) -> str | None:
    """Return the backend address a Swagger document points to, if any.

    Swagger 1.2 keeps ``basePath`` on each API declaration; the first
    declaration that has one is used, then the listing's own value.
    """
    if swagger_version == SWAGGER_VERSION_2:
        host = document.get("host")
        if not host:
            return None
        schemes = document.get("schemes") or ["http"]
        scheme = schemes[0] if isinstance(schemes, list) else schemes
        return f"{scheme}://{host}{document.get('basePath', '')}"
    if swagger_version == SWAGGER_VERSION_12:
        for doc in [*(resource_documents or []), document]:
            if doc.get("basePath"):
                return doc["basePath"]
        return None
    return None


def endpoint_name(address: str) -> str:
    """ep-api-example-com-v1 for https://api.example.com/v1"""
    stripped = _NON_ALNUM.sub("-", _SCHEME.sub("", address)).strip("-")
    return f"ep-{stripped}"


def create_endpoint_element(address: str, version: str) -> Element:
    root = Element(qname(ENDPOINT_ELEMENT_ROOT))
    overview = ET.SubElement(root, qname(OVERVIEW))
    for tag, text in ((NAME, endpoint_name(address)), (VERSION, version), (ADDRESS, address)):
        ET.SubElement(overview, qname(tag)).text = text
    return root
