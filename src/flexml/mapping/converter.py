"""Markup <-> mapping tree conversion.

This module is the only place where markup text is read or written. It
turns XML into the key/value tree the rest of the package works on, and turns
such a tree back into markup:

    >>> parse_markup('<item id="7">five<part/></item>')
    {'item': {'id': '7', 'part': {}, '$t': 'five'}}
    >>> emit_markup({'item': {'id': '7', '$t': 'five'}})
    '<item id="7">five</item>'

Parsing uses expat without namespace processing, so a prefixed name such as
``ns:tag`` is kept literally (and stored as ``ns$tag``) whether or not its
prefix is declared. Comments, processing instructions and the doctype are
dropped. Sibling elements sharing a name are folded into a list.
"""

import logging
from typing import Any, List, Optional, Tuple, Union
from xml.parsers import expat
from xml.sax.saxutils import escape

from flexml.errors import MalformedMarkupError, NameCollisionError
from flexml.mapping.entries import (
    Attribute,
    Body,
    Child,
    Children,
    Text,
    Tree,
    classify_body,
    single_entry,
)
from flexml.mapping.names import TEXT_KEY, decode_name, encode_name
from flexml.shared import (
    DEFAULT_CONFIG,
    CollisionPolicy,
    CorrelationLogger,
    NodeConfig,
    get_logger,
)

XML_DECLARATION = '<?xml version="1.0"?>'

_TEXT_ENTITIES = {"\r": "&#13;"}
_ATTRIBUTE_ENTITIES = {
    '"': "&quot;",
    "\n": "&#10;",
    "\r": "&#13;",
    "\t": "&#9;",
}

MarkupInput = Union[str, bytes]


def fold_child(body: Body, key: str, child: Body) -> bool:
    """Store ``child`` under ``key`` in ``body``, folding repeats into a list.

    Returns:
        True if an existing single child was promoted to a list

    Raises:
        NameCollisionError: If ``key`` already holds an attribute or text
    """
    existing = body.get(key)
    if existing is None:
        body[key] = child
        return False
    if isinstance(existing, list):
        existing.append(child)
        return False
    if isinstance(existing, dict):
        body[key] = [existing, child]
        return True
    raise NameCollisionError(
        f"Cannot add child element {decode_name(key)!r}: "
        f"an attribute of that name already exists",
        name=key,
    )


class _TreeBuilder:
    """Expat handler set that assembles a mapping tree."""

    def __init__(self, parser: Any, config: NodeConfig, logger: CorrelationLogger) -> None:
        self._parser = parser
        self._config = config
        self._logger = logger
        self._stack: List[Tuple[str, Body, List[str]]] = []
        self.tree: Optional[Tree] = None

    def start(self, name: str, attributes: List[str]) -> None:
        if len(self._stack) >= self._config.max_depth:
            raise MalformedMarkupError(
                f"Element nesting exceeds max_depth={self._config.max_depth}",
                line=self._parser.CurrentLineNumber,
                column=self._parser.CurrentColumnNumber,
            )
        body: Body = {}
        # ordered_attributes gives a flat [name, value, name, value, ...] list
        for attr_name, attr_value in zip(attributes[::2], attributes[1::2]):
            body[encode_name(attr_name)] = attr_value
        self._stack.append((encode_name(name), body, []))

    def end(self, name: str) -> None:
        key, body, chunks = self._stack.pop()
        text = "".join(chunks)
        if text and (self._config.preserve_whitespace or text.strip()):
            body[TEXT_KEY] = text
        if self._stack:
            parent_key, parent, _ = self._stack[-1]
            if (
                isinstance(parent.get(key), str)
                and self._config.collision_policy is CollisionPolicy.OVERWRITE
            ):
                self._logger.warning(
                    "Child element overwrote attribute",
                    extra={"element": parent_key, "key": key},
                )
                del parent[key]
            fold_child(parent, key, body)
        else:
            self.tree = {key: body}

    def data(self, text: str) -> None:
        if self._stack:
            self._stack[-1][2].append(text)


def parse_markup(markup: MarkupInput, config: Optional[NodeConfig] = None) -> Tree:
    """Parse XML markup into a mapping tree.

    Args:
        markup: Well-formed XML as text or encoded bytes
        config: Optional node configuration

    Returns:
        Tree with the root element's name as its single key

    Raises:
        TypeError: If ``markup`` is neither str nor bytes
        MalformedMarkupError: If ``markup`` is not well-formed XML
        NameCollisionError: If an element has an attribute and a child
            element of the same name and the collision policy is ``RAISE``.
            Under ``OVERWRITE`` the child replaces the attribute.
    """
    if not isinstance(markup, (str, bytes)):
        raise TypeError(f"markup must be str or bytes, got {type(markup).__name__}")

    config = config or DEFAULT_CONFIG
    logger = get_logger(__name__, config.correlation_id, "converter")

    parser = expat.ParserCreate()
    parser.ordered_attributes = True
    parser.buffer_text = True
    builder = _TreeBuilder(parser, config, logger)
    parser.StartElementHandler = builder.start
    parser.EndElementHandler = builder.end
    parser.CharacterDataHandler = builder.data

    try:
        parser.Parse(markup, True)
    except expat.ExpatError as e:
        logger.debug(
            "Rejected malformed markup",
            extra={"line": e.lineno, "column": e.offset, "length": len(markup)},
        )
        raise MalformedMarkupError(
            f"Malformed markup: {expat.ErrorString(e.code)}",
            line=e.lineno,
            column=e.offset,
        ) from e

    if builder.tree is None:
        # expat reports a missing root itself; this only guards odd inputs
        raise MalformedMarkupError("Malformed markup: no element found")

    if logger.is_enabled_for(logging.DEBUG):
        logger.debug("Parsed markup", extra={"length": len(markup)})
    return builder.tree


def emit_markup(tree: Tree, config: Optional[NodeConfig] = None) -> str:
    """Serialize a mapping tree back to XML markup.

    Attributes are written in body order, then the text, then child
    elements in body order.

    Raises:
        ValueError: If ``tree`` is not a single-rooted tree of supported shapes
    """
    config = config or DEFAULT_CONFIG
    name, body = single_entry(tree)

    parts: List[str] = []
    if config.xml_declaration:
        parts.append(XML_DECLARATION)
    _emit_element(name, body, parts, config)
    markup = "".join(parts)

    logger = get_logger(__name__, config.correlation_id, "converter")
    if logger.is_enabled_for(logging.DEBUG):
        logger.debug("Emitted markup", extra={"element": name, "length": len(markup)})
    return markup


def _emit_element(key: str, body: Body, parts: List[str], config: NodeConfig) -> None:
    tag = decode_name(key)
    attributes: List[str] = []
    text = None
    children: List[Tuple[str, Body]] = []

    for entry in classify_body(body):
        if isinstance(entry, Text):
            text = entry.value
        elif isinstance(entry, Attribute):
            value = escape(entry.value, _ATTRIBUTE_ENTITIES)
            attributes.append(f' {decode_name(entry.name)}="{value}"')
        elif isinstance(entry, Child):
            children.append((entry.name, entry.body))
        elif isinstance(entry, Children):
            children.extend((entry.name, item) for item in entry.bodies)

    parts.append(f"<{tag}{''.join(attributes)}")
    if not text and not children and config.self_closing_empty:
        parts.append("/>")
        return

    parts.append(">")
    if text:
        parts.append(escape(text, _TEXT_ENTITIES))
    for child_key, child_body in children:
        _emit_element(child_key, child_body, parts, config)
    parts.append(f"</{tag}>")
