"""Reserved keys and name escaping for the mapping tree.

Mapping keys cannot carry ':' so a namespace-prefixed name such as
``ns:tag`` is stored as ``ns$tag``. ``$`` is not a legal XML name character,
which keeps the escape unambiguous and also frees ``$t`` to hold an
element's direct text.
"""

import re

TEXT_KEY = "$t"
NAMESPACE_SEPARATOR = ":"
NAMESPACE_ESCAPE = "$"

# XML 1.0 (Fifth Edition) NameStartChar / NameChar / Char productions
_NAME_START_CHARS = (
    ":A-Z_a-z\u00C0-\u00D6\u00D8-\u00F6\u00F8-\u02FF\u0370-\u037D"
    "\u037F-\u1FFF\u200C-\u200D\u2070-\u218F\u2C00-\u2FEF\u3001-\uD7FF"
    "\uF900-\uFDCF\uFDF0-\uFFFD\U00010000-\U000EFFFF"
)
_NAME_CHARS = _NAME_START_CHARS + "\\-.0-9\u00B7\u0300-\u036F\u203F-\u2040"
_NAME_PATTERN = re.compile(f"[{_NAME_START_CHARS}][{_NAME_CHARS}]*")
_ILLEGAL_CHAR_PATTERN = re.compile(
    "[^\t\n\r\u0020-\uD7FF\uE000-\uFFFD\U00010000-\U0010FFFF]"
)


def is_text_key(key: str) -> bool:
    """Return True if ``key`` is the reserved text-content key."""
    return key == TEXT_KEY


def encode_name(name: str) -> str:
    """Turn an XML name into a mapping key (``ns:tag`` -> ``ns$tag``)."""
    return name.replace(NAMESPACE_SEPARATOR, NAMESPACE_ESCAPE)


def decode_name(key: str) -> str:
    """Turn a mapping key back into an XML name (``ns$tag`` -> ``ns:tag``)."""
    return key.replace(NAMESPACE_ESCAPE, NAMESPACE_SEPARATOR)


def local_part(key: str) -> str:
    """Return the unqualified part of a name, given escaped or decoded.

    >>> local_part("ns$tag")
    'tag'
    >>> local_part("tag")
    'tag'
    """
    return decode_name(key).rpartition(NAMESPACE_SEPARATOR)[2]


def is_xml_name(name: str) -> bool:
    """Return True if ``name`` (escaped or decoded) is a legal XML Name."""
    return _NAME_PATTERN.fullmatch(decode_name(name)) is not None


def has_illegal_chars(text: str) -> bool:
    """Return True if ``text`` holds characters XML 1.0 cannot carry."""
    return _ILLEGAL_CHAR_PATTERN.search(text) is not None
