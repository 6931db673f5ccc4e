"""Tests for reserved keys and name escaping."""

import pytest

from flexml.mapping.names import (
    NAMESPACE_ESCAPE,
    TEXT_KEY,
    decode_name,
    encode_name,
    has_illegal_chars,
    is_text_key,
    is_xml_name,
    local_part,
)


class TestReservedKeys:
    """Tests for the text key constant."""

    def test_text_key_value(self):
        """Test the reserved text key matches the converter convention."""
        assert TEXT_KEY == "$t"
        assert NAMESPACE_ESCAPE == "$"

    @pytest.mark.parametrize("key,expected", [
        ("$t", True),
        ("t", False),
        ("$text", False),
        ("", False),
    ])
    def test_is_text_key(self, key, expected):
        """Test only the exact reserved key is recognised."""
        assert is_text_key(key) is expected


class TestNameEscaping:
    """Tests for ':' <-> '$' escaping."""

    def test_encode_prefixed_name(self):
        """Test a prefixed name is escaped."""
        assert encode_name("ns:tag") == "ns$tag"

    def test_decode_prefixed_name(self):
        """Test an escaped key is decoded."""
        assert decode_name("ns$tag") == "ns:tag"

    def test_plain_names_unchanged(self):
        """Test names without a prefix pass through."""
        assert encode_name("tag") == "tag"
        assert decode_name("tag") == "tag"

    def test_encode_is_idempotent(self):
        """Test encoding an already escaped key changes nothing."""
        assert encode_name(encode_name("xmlns:ns")) == "xmlns$ns"


class TestLocalPart:
    """Tests for local name extraction."""

    @pytest.mark.parametrize("name,expected", [
        ("ns$tag", "tag"),
        ("ns:tag", "tag"),
        ("tag", "tag"),
        ("a$b$c", "c"),
    ])
    def test_local_part(self, name, expected):
        """Test the part after the last separator is returned."""
        assert local_part(name) == expected


class TestXmlNames:
    """Tests for XML name and character checks."""

    @pytest.mark.parametrize("name", [
        "a", "_x", "item-2", "v1.0", "xml:lang", "ns$id", "café", "データ",
    ])
    def test_valid_names(self, name):
        """Test plain, prefixed, escaped and non-ASCII names are accepted."""
        assert is_xml_name(name)

    @pytest.mark.parametrize("name", ["", "bad name", "x<y", "1st", "-a", "a&b", 'q"'])
    def test_invalid_names(self, name):
        """Test names that cannot appear in a tag are rejected."""
        assert not is_xml_name(name)

    @pytest.mark.parametrize("text", ["plain", "tab\tand\nnewline", "é\U0001f600", ""])
    def test_legal_text(self, text):
        """Test ordinary text, whitespace controls and astral characters pass."""
        assert not has_illegal_chars(text)

    @pytest.mark.parametrize("text", ["\x01", "a\x00b", "\x1f", "\ufffe", "\ud800"])
    def test_illegal_text(self, text):
        """Test control characters, non-characters and lone surrogates are found."""
        assert has_illegal_chars(text)
