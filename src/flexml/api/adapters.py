"""Integration adapters between XML nodes and popular XML libraries.

Adapters convert an :class:`~flexml.node.xml.XMLNode` into another library's
element type and back, always through markup. Target libraries resolve
namespaces, so a node whose names use an undeclared prefix cannot be
converted and raises :class:`~flexml.errors.AdapterError`.

    >>> adapter = get_adapter("lxml")
    >>> element = adapter.to_target(XMLNode("<a><b>1</b></a>"))
    >>> element.findtext("b")
    '1'
"""

import copy
import threading
import time
import xml.etree.ElementTree as ET
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Dict, List, Optional, Type

from lxml import etree

from flexml.errors import AdapterError, MalformedMarkupError
from flexml.node import XMLNode
from flexml.shared import NodeConfig, get_logger


class AdapterType(Enum):
    """Types of integration adapters."""

    XML_LIBRARY = auto()     # Element-tree style XML libraries
    PLUGIN = auto()          # Custom adapters registered by callers


@dataclass
class AdapterMetadata:
    """Metadata about an integration adapter."""

    name: str
    version: str
    adapter_type: AdapterType
    target_library: str
    description: str


class IntegrationAdapter(ABC):
    """Abstract base class for all integration adapters.

    Subclasses convert nodes to the target representation and back. Both
    directions raise :class:`AdapterError` rather than returning partial
    results.
    """

    def __init__(
        self,
        correlation_id: Optional[str] = None,
        config: Optional[NodeConfig] = None,
    ) -> None:
        """Initialize the integration adapter.

        Args:
            correlation_id: Optional correlation ID for request tracking
            config: Node configuration used for nodes built by from_target
        """
        self.correlation_id = correlation_id
        self.config = config
        self._logger = get_logger(__name__, correlation_id, self.__class__.__name__)

    @property
    @abstractmethod
    def metadata(self) -> AdapterMetadata:
        """Get adapter metadata."""

    def is_available(self) -> bool:
        """Check if the target library is usable."""
        return True

    @abstractmethod
    def to_target(self, node: XMLNode) -> Any:
        """Convert ``node`` into the target library's element type."""

    @abstractmethod
    def from_target(self, target_data: Any) -> XMLNode:
        """Convert a target library element into a node."""

    def _node_from_markup(self, markup: str, started: float) -> XMLNode:
        try:
            node = XMLNode(markup, self.config)
        except MalformedMarkupError as e:
            raise AdapterError(f"{self.metadata.name}: cannot read element markup: {e}") from e
        self._log_conversion("from_target", started)
        return node

    def _log_conversion(self, direction: str, started: float) -> None:
        self._logger.debug(
            "Converted node",
            extra={
                "adapter": self.metadata.name,
                "direction": direction,
                "conversion_time_ms": (time.time() - started) * 1000,
            },
        )


class LxmlAdapter(IntegrationAdapter):
    """Adapter for bidirectional conversion with lxml.etree."""

    @property
    def metadata(self) -> AdapterMetadata:
        """Get adapter metadata."""
        return AdapterMetadata(
            name="lxml",
            version="1.0.0",
            adapter_type=AdapterType.XML_LIBRARY,
            target_library="lxml",
            description="Bidirectional conversion between XMLNode and lxml.etree",
        )

    def to_target(self, node: XMLNode) -> Any:
        """Convert ``node`` to an ``lxml.etree._Element``."""
        started = time.time()
        try:
            element = etree.fromstring(node.to_xml_string())
        except (etree.XMLSyntaxError, ValueError) as e:
            raise AdapterError(f"lxml rejected node {node.name()!r}: {e}") from e
        self._log_conversion("to_target", started)
        return element

    def from_target(self, target_data: Any) -> XMLNode:
        """Convert an ``lxml.etree._Element`` to a node (tail text excluded)."""
        started = time.time()
        if not etree.iselement(target_data):
            raise AdapterError("Target data is not a valid lxml element")
        markup = etree.tostring(target_data, encoding="unicode", with_tail=False)
        return self._node_from_markup(markup, started)


class ElementTreeAdapter(IntegrationAdapter):
    """Adapter for bidirectional conversion with xml.etree.ElementTree."""

    @property
    def metadata(self) -> AdapterMetadata:
        """Get adapter metadata."""
        return AdapterMetadata(
            name="elementtree",
            version="1.0.0",
            adapter_type=AdapterType.XML_LIBRARY,
            target_library="xml.etree.ElementTree",
            description="Bidirectional conversion between XMLNode and ElementTree",
        )

    def to_target(self, node: XMLNode) -> Any:
        """Convert ``node`` to an ``xml.etree.ElementTree.Element``."""
        started = time.time()
        try:
            element = ET.fromstring(node.to_xml_string())
        except ET.ParseError as e:
            raise AdapterError(f"ElementTree rejected node {node.name()!r}: {e}") from e
        self._log_conversion("to_target", started)
        return element

    def from_target(self, target_data: Any) -> XMLNode:
        """Convert an ElementTree element to a node (tail text excluded)."""
        started = time.time()
        if not isinstance(target_data, ET.Element):
            raise AdapterError("Target data is not a valid ElementTree element")
        element = copy.copy(target_data)
        element.tail = None
        markup = ET.tostring(element, encoding="unicode")
        return self._node_from_markup(markup, started)


class AdapterRegistry:
    """Registry for managing integration adapters."""

    def __init__(self) -> None:
        """Initialize the adapter registry."""
        self._adapters: Dict[str, Type[IntegrationAdapter]] = {}
        self._lock = threading.RLock()

    def register(self, adapter_class: Type[IntegrationAdapter]) -> None:
        """Register an adapter class under its metadata name."""
        with self._lock:
            metadata = adapter_class().metadata
            self._adapters[metadata.name] = adapter_class

    def get_adapter(
        self,
        adapter_name: str,
        correlation_id: Optional[str] = None,
        config: Optional[NodeConfig] = None,
    ) -> Optional[IntegrationAdapter]:
        """Get a new adapter instance by name.

        Returns:
            Adapter instance if registered and available, None otherwise
        """
        with self._lock:
            adapter_class = self._adapters.get(adapter_name)
        if adapter_class is None:
            return None
        instance = adapter_class(correlation_id, config)
        return instance if instance.is_available() else None

    def list_available_adapters(self) -> List[AdapterMetadata]:
        """List metadata of all registered adapters that are available."""
        with self._lock:
            adapter_classes = list(self._adapters.values())
        available_adapters = []
        for adapter_class in adapter_classes:
            instance = adapter_class()
            if instance.is_available():
                available_adapters.append(instance.metadata)
        return available_adapters


# Global adapter registry instance
_adapter_registry = AdapterRegistry()


def register_adapter(adapter_class: Type[IntegrationAdapter]) -> None:
    """Register an integration adapter globally."""
    _adapter_registry.register(adapter_class)


def get_adapter(
    adapter_name: str,
    correlation_id: Optional[str] = None,
    config: Optional[NodeConfig] = None,
) -> Optional[IntegrationAdapter]:
    """Get a registered adapter instance, or None if unknown."""
    return _adapter_registry.get_adapter(adapter_name, correlation_id, config)


def list_available_adapters() -> List[AdapterMetadata]:
    """List all available integration adapters."""
    return _adapter_registry.list_available_adapters()


register_adapter(LxmlAdapter)
register_adapter(ElementTreeAdapter)
