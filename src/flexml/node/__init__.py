"""Node layer for flexml.

Key Components:
    XMLNode: Flex-style XML element backed by a mapping tree
"""

from .xml import XMLNode

__all__ = [
    "XMLNode",
]
