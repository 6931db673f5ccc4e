"""Mapping tree layer for flexml.

Converts markup to and from the key/value tree and owns the rules that give
that tree its meaning: the reserved text key, ':' escaping in names, and the
shape classification of body entries.

Key Components:
    parse_markup / emit_markup: The markup <-> tree boundary
    classify_entry: Tags a body entry as Attribute, Text, Child or Children
    encode_name / decode_name: ':' <-> '$' escaping for names
"""

from .converter import emit_markup, fold_child, parse_markup
from .entries import (
    Attribute,
    Body,
    Child,
    Children,
    Entry,
    Text,
    Tree,
    classify_body,
    classify_entry,
    is_element_entry,
    single_entry,
    validate_tree,
)
from .names import (
    NAMESPACE_ESCAPE,
    NAMESPACE_SEPARATOR,
    TEXT_KEY,
    decode_name,
    encode_name,
    has_illegal_chars,
    is_text_key,
    is_xml_name,
    local_part,
)

__all__ = [
    "emit_markup",
    "fold_child",
    "parse_markup",
    "Attribute",
    "Body",
    "Child",
    "Children",
    "Entry",
    "Text",
    "Tree",
    "classify_body",
    "classify_entry",
    "is_element_entry",
    "single_entry",
    "validate_tree",
    "NAMESPACE_ESCAPE",
    "NAMESPACE_SEPARATOR",
    "TEXT_KEY",
    "decode_name",
    "encode_name",
    "has_illegal_chars",
    "is_text_key",
    "is_xml_name",
    "local_part",
]
