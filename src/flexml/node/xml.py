"""XML node value object modelled on the Flex ``XML`` class.

An :class:`XMLNode` wraps one element converted to a mapping tree. Markup is
parsed once, at construction; every accessor re-derives its answer from the
stored tree, and every mutation writes straight into it.

Nodes handed out by :meth:`XMLNode.elements`, :meth:`XMLNode.attributes`
and :meth:`XMLNode.child` are independent copies. Changing one never
touches the node it came from, and appending a node copies its body.

Methods are snake_case; the legacy camelCase names (``localName``,
``appendChild``, ``setAttribute``, ``toXMLString``, ...) are kept as aliases
so code written against the old object model runs unchanged.
"""

import copy
from typing import Any, List, Optional, Union

from flexml.mapping import (
    TEXT_KEY,
    Attribute,
    Body,
    Child,
    Children,
    Entry,
    Tree,
    classify_body,
    classify_entry,
    decode_name,
    emit_markup,
    encode_name,
    fold_child,
    has_illegal_chars,
    is_element_entry,
    is_text_key,
    is_xml_name,
    local_part,
    parse_markup,
    single_entry,
    validate_tree,
)
from flexml.mapping.converter import MarkupInput
from flexml.errors import NameCollisionError
from flexml.shared import DEFAULT_CONFIG, CollisionPolicy, NodeConfig, get_logger


class XMLNode:
    """A single XML element backed by a mapping tree.

    Args:
        markup: Well-formed XML whose root element becomes this node
        config: Optional node configuration, inherited by derived nodes

    Raises:
        MalformedMarkupError: If ``markup`` is not well-formed

    Example:
        >>> node = XMLNode('<a x="1">5</a>')
        >>> node.name(), node.value(), node.attribute("x")
        ('a', '5', '1')
        >>> node.append_child("<b/>")
        >>> node.to_xml_string()
        '<a x="1">5<b></b></a>'
    """

    def __init__(self, markup: MarkupInput, config: Optional[NodeConfig] = None) -> None:
        config = config or DEFAULT_CONFIG
        self._init_state(parse_markup(markup, config), config)

    @classmethod
    def from_tree(cls, tree: Tree, config: Optional[NodeConfig] = None) -> "XMLNode":
        """Build a node from an already converted tree.

        The tree is deep-copied, so the caller keeps ownership of its object.

        Raises:
            ValueError: If ``tree`` is not a valid single-rooted tree
        """
        validate_tree(tree)
        node = cls.__new__(cls)
        node._init_state(copy.deepcopy(tree), config or DEFAULT_CONFIG)
        return node

    def _init_state(self, tree: Tree, config: NodeConfig) -> None:
        self._tree = tree
        self._config = config
        self._logger = get_logger(__name__, config.correlation_id, self.__class__.__name__)

    @property
    def config(self) -> NodeConfig:
        return self._config

    @property
    def _body(self) -> Body:
        return single_entry(self._tree)[1]

    # Names and text

    def name(self) -> str:
        """Return the raw element name, ':' escaping intact (``ns$tag``)."""
        return next(iter(self._tree))

    def local_name(self) -> str:
        """Return the element name without its namespace prefix."""
        return local_part(self.name())

    def value(self) -> Optional[str]:
        """Return the element's direct text, or None if it has none."""
        return self._body.get(TEXT_KEY)

    # Attributes

    def attributes(self) -> List["XMLNode"]:
        """Return one ``<name>value</name>`` node per attribute, in body order."""
        return self._attribute_nodes(self._body)

    def attribute(self, name: str) -> Optional[str]:
        """Return the value of attribute ``name`` (escaped or not), or None."""
        key = encode_name(name)
        if is_text_key(key):
            return None
        value = self._body.get(key)
        return value if isinstance(value, str) else None

    def set_attribute(self, name: str, value: str) -> None:
        """Write attribute ``name``, replacing any previous value.

        Raises:
            TypeError: If ``name`` or ``value`` is not a string
            ValueError: If ``name`` is not an XML name or is the reserved
                text key, or ``value`` holds characters XML cannot carry
            NameCollisionError: If ``name`` is a child element and the
                collision policy is ``RAISE``
        """
        if not isinstance(name, str) or not isinstance(value, str):
            raise TypeError("Attribute name and value must be strings")
        key = encode_name(name)
        if is_text_key(key) or not is_xml_name(key):
            raise ValueError(f"Invalid attribute name: {name!r}")
        if has_illegal_chars(value):
            raise ValueError(f"Invalid characters in value of attribute {name!r}")

        body = self._body
        if isinstance(body.get(key), (dict, list)):
            if self._config.collision_policy is CollisionPolicy.RAISE:
                raise NameCollisionError(
                    f"Cannot set attribute {decode_name(key)!r}: "
                    f"a child element of that name already exists",
                    name=key,
                )
            self._logger.warning(
                "Attribute overwrote child element",
                extra={"element": self.name(), "key": key},
            )
        body[key] = value

    # Child elements

    def elements(self) -> List["XMLNode"]:
        """Return every child element as an independent node, in body order.

        Repeated children appear in their stored (document) order.
        """
        return self._element_nodes(self._body)

    def child(self, name: str) -> List["XMLNode"]:
        """Return the child elements called ``name`` (escaped or not)."""
        key = encode_name(name)
        value = self._body.get(key)
        if value is None:
            return []
        return self._nodes_for(classify_entry(key, value))

    def append_child(self, child: Union[MarkupInput, "XMLNode"]) -> None:
        """Append a child element given as markup or as a node.

        The first child of a name is stored as a bare body. A second child
        of the same name turns that entry into a list, which later appends
        extend.

        Raises:
            TypeError: If ``child`` is neither markup nor a node
            MalformedMarkupError: If ``child`` is malformed markup
            NameCollisionError: If an attribute already uses the child's name
                and the collision policy is ``RAISE``
        """
        if isinstance(child, (str, bytes)):
            child = self._spawn(child)
        elif not isinstance(child, XMLNode):
            raise TypeError(f"child must be markup or XMLNode, got {type(child).__name__}")

        key = child.name()
        body = self._body
        if (
            isinstance(body.get(key), str)
            and self._config.collision_policy is CollisionPolicy.OVERWRITE
        ):
            self._logger.warning(
                "Child element overwrote attribute",
                extra={"element": self.name(), "key": key},
            )
            del body[key]

        if fold_child(body, key, copy.deepcopy(child._body)):
            self._logger.debug(
                "Promoted child entry to list",
                extra={"element": self.name(), "key": key},
            )

    # Content

    def has_simple_content(self) -> bool:
        """Return True if the element has no child elements."""
        return not any(is_element_entry(entry) for entry in classify_body(self._body))

    def has_complex_content(self) -> bool:
        """Return True if the element has at least one child element."""
        return not self.has_simple_content()

    def to_string(self) -> Optional[str]:
        """Return the text value for simple content, full markup otherwise."""
        if self.has_simple_content():
            return self.value()
        return self.to_xml_string()

    def to_xml_string(self) -> str:
        """Return the full markup of this element."""
        return emit_markup(self._tree, self._config)

    def to_json_string(self) -> Tree:
        """Return the live converted tree (a mapping, not text)."""
        return self._tree

    def copy(self) -> "XMLNode":
        """Return an independent deep copy of this node."""
        return type(self).from_tree(self._tree, self._config)

    # Derivation helpers

    def _spawn(self, markup: MarkupInput) -> "XMLNode":
        return type(self)(markup, self._config)

    def _attribute_nodes(self, body: Body) -> List["XMLNode"]:
        nodes = []
        for entry in classify_body(body):
            if isinstance(entry, Attribute):
                # <name></name> carries no text, so an empty value reads as None
                inner = {TEXT_KEY: entry.value} if entry.value else {}
                nodes.append(type(self).from_tree({entry.name: inner}, self._config))
        return nodes

    def _element_nodes(self, body: Body) -> List["XMLNode"]:
        nodes: List[XMLNode] = []
        for entry in classify_body(body):
            nodes.extend(self._nodes_for(entry))
        return nodes

    def _nodes_for(self, entry: Entry) -> List["XMLNode"]:
        if isinstance(entry, Child):
            return [self._spawn(emit_markup({entry.name: entry.body}, self._config))]
        if isinstance(entry, Children):
            return [self._rebuild(entry.name, item) for item in entry.bodies]
        return []

    def _rebuild(self, key: str, item: Body) -> "XMLNode":
        """Rebuild one member of a repeated child run as a standalone node."""
        tag = decode_name(key)
        shell = self._spawn(f"<{tag}></{tag}>")
        for element in self._element_nodes(item):
            shell.append_child(element)
        for attribute in self._attribute_nodes(item):
            attribute_value = attribute.value()
            if attribute_value is not None:
                shell.set_attribute(attribute.name(), attribute_value)
        text = item.get(TEXT_KEY)
        if text is not None:
            shell._body[TEXT_KEY] = text
        return shell

    # Python protocol

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, XMLNode):
            return NotImplemented
        return self._tree == other._tree

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        text = self.to_string()
        return "" if text is None else text

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.to_xml_string()!r})"

    # Legacy object-model names
    localName = local_name
    setAttribute = set_attribute
    appendChild = append_child
    hasSimpleContent = has_simple_content
    hasComplexContent = has_complex_content
    toString = to_string
    toXMLString = to_xml_string
    toJsonString = to_json_string
