"""Tests for body entry classification."""

import pytest

from flexml.mapping.entries import (
    Attribute,
    Child,
    Children,
    Text,
    classify_body,
    classify_entry,
    is_element_entry,
    single_entry,
    validate_tree,
)


class TestClassifyEntry:
    """Tests for classify_entry."""

    def test_text_entry(self):
        """Test the reserved key with a string is text."""
        assert classify_entry("$t", "hello") == Text("hello")

    def test_attribute_entry(self):
        """Test any other string entry is an attribute."""
        assert classify_entry("id", "7") == Attribute("id", "7")

    def test_single_child_entry(self):
        """Test a mapping value is a single child."""
        assert classify_entry("b", {"x": "1"}) == Child("b", {"x": "1"})

    def test_repeated_children_entry(self):
        """Test a list of mappings is a run of children."""
        entry = classify_entry("b", [{}, {"$t": "2"}])

        assert isinstance(entry, Children)
        assert entry.name == "b"
        assert entry.bodies == [{}, {"$t": "2"}]

    def test_non_string_text_rejected(self):
        """Test the text key cannot hold a mapping."""
        with pytest.raises(ValueError, match="Text entry must be a string"):
            classify_entry("$t", {})

    @pytest.mark.parametrize("value", [5, None, ["a"], [{}, "b"]])
    def test_unsupported_shapes_rejected(self, value):
        """Test values of no known shape are rejected."""
        with pytest.raises(ValueError, match="Unsupported value"):
            classify_entry("b", value)


class TestClassifyBody:
    """Tests for classify_body and helpers."""

    def test_partition_covers_every_key(self):
        """Test each key maps to exactly one entry kind, in body order."""
        body = {"id": "1", "$t": "x", "b": {}, "c": [{}, {}]}

        entries = list(classify_body(body))

        assert [type(e) for e in entries] == [Attribute, Text, Child, Children]

    def test_is_element_entry(self):
        """Test only children that yield elements count as elements."""
        assert is_element_entry(Child("b", {}))
        assert is_element_entry(Children("b", [{}]))
        assert not is_element_entry(Children("b", []))
        assert not is_element_entry(Attribute("b", "1"))
        assert not is_element_entry(Text("1"))


class TestTreeHelpers:
    """Tests for single_entry and validate_tree."""

    def test_single_entry(self):
        """Test the root pair is returned."""
        assert single_entry({"a": {"x": "1"}}) == ("a", {"x": "1"})

    @pytest.mark.parametrize("tree", [{}, {"a": {}, "b": {}}, "a", {"a": "text"}])
    def test_single_entry_rejects_bad_roots(self, tree):
        """Test trees without exactly one mapping root are rejected."""
        with pytest.raises(ValueError):
            single_entry(tree)

    def test_validate_tree_walks_nested_bodies(self):
        """Test malformed entries deep in the tree are found."""
        with pytest.raises(ValueError):
            validate_tree({"a": {"b": [{"c": {"d": 3}}]}})

    def test_validate_tree_rejects_reserved_root(self):
        """Test the text key cannot be an element name."""
        with pytest.raises(ValueError, match="Invalid element name"):
            validate_tree({"$t": {}})

    def test_validate_tree_accepts_valid_tree(self):
        """Test a well-shaped tree passes."""
        validate_tree({"a": {"id": "1", "$t": "x", "b": [{}, {"c": {}}]}})
