"""Flexml: Flex-style XML node objects.

Models an XML element the way the Adobe Flex ``XML`` class did: a node whose
name, attributes, text and child elements can be read, mutated and written
back to markup. Internally each node holds a key/value mapping tree.

Progressive API Disclosure:
- Level 1: The node object - XMLNode
- Level 2: Behaviour tuning - NodeConfig, CollisionPolicy
- Level 3: The markup <-> tree boundary - parse_markup(), emit_markup()
- Level 4: Library interop - flexml.api adapters (lxml, ElementTree)
"""

__version__ = "0.1.0"
__author__ = "Flexml Team"

from .errors import (
    AdapterError,
    FlexmlError,
    MalformedMarkupError,
    NameCollisionError,
)
from .mapping import TEXT_KEY, emit_markup, parse_markup
from .node import XMLNode
from .shared.config import CollisionPolicy, NodeConfig

__all__ = [
    # Version and metadata
    "__author__",
    "__version__",

    # Level 1: The node object
    "XMLNode",

    # Level 2: Configuration
    "NodeConfig",
    "CollisionPolicy",

    # Level 3: Conversion boundary
    "parse_markup",
    "emit_markup",
    "TEXT_KEY",

    # Errors
    "FlexmlError",
    "MalformedMarkupError",
    "NameCollisionError",
    "AdapterError",
]
