"""Integration adapters for flexml nodes.

Key Components:
    LxmlAdapter: XMLNode <-> lxml.etree elements
    ElementTreeAdapter: XMLNode <-> xml.etree.ElementTree elements
    get_adapter: Look up a registered adapter by name
"""

from .adapters import (
    AdapterMetadata,
    AdapterRegistry,
    AdapterType,
    ElementTreeAdapter,
    IntegrationAdapter,
    LxmlAdapter,
    get_adapter,
    list_available_adapters,
    register_adapter,
)

__all__ = [
    "AdapterMetadata",
    "AdapterRegistry",
    "AdapterType",
    "ElementTreeAdapter",
    "IntegrationAdapter",
    "LxmlAdapter",
    "get_adapter",
    "list_available_adapters",
    "register_adapter",
]
