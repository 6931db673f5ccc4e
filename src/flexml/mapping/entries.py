"""Shape classification of body entries.

A body is the inner mapping of a tree. Each of its entries is an attribute,
the element's text, a single child element or a run of repeated child
elements, and only the shape of the value tells them apart. The helpers here
make that decision once and hand back a tagged entry, so the converter and
the node never inspect raw shapes themselves.
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Tuple, Union

from flexml.mapping.names import is_text_key

Body = Dict[str, Any]
Tree = Dict[str, Body]


@dataclass(frozen=True)
class Text:
    """The element's direct text content (the ``$t`` entry)."""

    value: str


@dataclass(frozen=True)
class Attribute:
    """A scalar entry: attribute name (escaped) and value."""

    name: str
    value: str


@dataclass(frozen=True)
class Child:
    """A single child element stored as a bare body."""

    name: str
    body: Body


@dataclass(frozen=True)
class Children:
    """Repeated child elements sharing ``name``, in document order."""

    name: str
    bodies: List[Body]


Entry = Union[Text, Attribute, Child, Children]


def classify_entry(key: str, value: Any) -> Entry:
    """Classify one body entry by the shape of its value.

    Raises:
        ValueError: If the value has a shape no entry kind accepts
    """
    if isinstance(value, str):
        if is_text_key(key):
            return Text(value)
        return Attribute(key, value)
    if is_text_key(key):
        raise ValueError(f"Text entry must be a string, got {type(value).__name__}")
    if isinstance(value, dict):
        return Child(key, value)
    if isinstance(value, list) and all(isinstance(item, dict) for item in value):
        return Children(key, value)
    raise ValueError(
        f"Unsupported value for entry {key!r}: {type(value).__name__}"
    )


def classify_body(body: Body) -> Iterator[Entry]:
    """Yield the classified entries of ``body`` in its iteration order."""
    for key, value in body.items():
        yield classify_entry(key, value)


def is_element_entry(entry: Entry) -> bool:
    """Return True if ``entry`` contributes at least one child element."""
    if isinstance(entry, Children):
        return bool(entry.bodies)
    return isinstance(entry, Child)


def single_entry(tree: Tree) -> Tuple[str, Body]:
    """Return the ``(name, body)`` pair of a tree.

    Raises:
        ValueError: If ``tree`` does not hold exactly one mapping entry
    """
    if not isinstance(tree, dict) or len(tree) != 1:
        raise ValueError("A tree must have exactly one top-level key")
    (name, body), = tree.items()
    if not isinstance(body, dict):
        raise ValueError(f"Body of {name!r} must be a mapping, got {type(body).__name__}")
    return name, body


def validate_tree(tree: Tree) -> None:
    """Check that ``tree`` is single-rooted and every entry has a known shape.

    Raises:
        ValueError: On the first malformed entry found
    """
    name, body = single_entry(tree)
    if not name or is_text_key(name):
        raise ValueError(f"Invalid element name: {name!r}")
    _validate_body(body)


def _validate_body(body: Body) -> None:
    for entry in classify_body(body):
        if isinstance(entry, Child):
            _validate_body(entry.body)
        elif isinstance(entry, Children):
            for item in entry.bodies:
                _validate_body(item)
