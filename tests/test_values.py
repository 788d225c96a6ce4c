"""Tests for comparable values and their wire shapes."""

import pytest

from webcompare.comparison.values import (
    EMPTY,
    AttributeMap,
    ChildrenSerialization,
    ComparisonKind,
    CustomValue,
    EmptyValue,
    StyleMap,
    TextValue,
    value_from_wire,
)
from webcompare.exceptions import DescriptorError


class TestComparisonKind:
    """Test suite for ComparisonKind.parse."""

    def test_parses_known_names(self):
        """Test parsing known kind names."""
        assert ComparisonKind.parse("text") is ComparisonKind.TEXT
        assert ComparisonKind.parse("ATTRIBUTE") is ComparisonKind.ATTRIBUTE
        assert ComparisonKind.parse(ComparisonKind.STYLE) is ComparisonKind.STYLE

    def test_unknown_name_is_none(self):
        """Test parsing an unknown kind name."""
        assert ComparisonKind.parse("layout") is None


class TestValueFromWire:
    """Test suite for decoding stored snapshot values."""

    def test_text(self):
        """Test decoding text."""
        assert value_from_wire("text", "Hello") == TextValue("Hello")

    def test_text_null_is_absent(self):
        """Test decoding null text."""
        value = value_from_wire("text", None)
        assert value == TextValue(None)
        assert value != TextValue("")

    def test_empty_object_is_empty_for_every_kind(self):
        """Test that {} decodes to EMPTY."""
        for kind in ComparisonKind:
            assert isinstance(value_from_wire(kind, {}), EmptyValue)

    def test_attribute(self):
        """Test decoding an attribute map."""
        value = value_from_wire("attribute", {"src": "/old.png", "alt": None})
        assert value == AttributeMap({"src": "/old.png", "alt": None})

    def test_style(self):
        """Test decoding a style map."""
        value = value_from_wire("style", {"style": {"color": "rgb(0, 0, 0)"}})
        assert value == StyleMap({"color": "rgb(0, 0, 0)"})

    def test_children(self):
        """Test decoding children markup."""
        value = value_from_wire("children", {"children": "<li>One</li>"})
        assert value == ChildrenSerialization("<li>One</li>")

    def test_custom(self):
        """Test decoding custom data."""
        assert value_from_wire("custom", {"custom": {}}) == CustomValue({})

    def test_unknown_kind_accepts_placeholder_shape(self):
        """Test decoding for unknown kinds."""
        assert value_from_wire("layout", {"custom": {}}) == CustomValue({})

    def test_rejects_number_for_text(self):
        """Test a number where text is expected."""
        with pytest.raises(DescriptorError):
            value_from_wire("text", 42)

    def test_rejects_unwrapped_style(self):
        """Test a style map missing its wrapper."""
        with pytest.raises(DescriptorError):
            value_from_wire("style", {"color": "red"})

    def test_rejects_non_string_attribute(self):
        """Test a non-string attribute value."""
        with pytest.raises(DescriptorError):
            value_from_wire("attribute", {"width": 100})


class TestCanonicalEncoding:
    """Test suite for canonical_encoding."""

    def test_key_order_does_not_matter(self):
        """Test encoding with reordered keys."""
        a = AttributeMap({"a": "1", "b": "2"})
        b = AttributeMap({"b": "2", "a": "1"})
        assert a.canonical_encoding() == b.canonical_encoding()

    def test_null_and_empty_string_differ(self):
        """Test that null and "" encode apart."""
        assert TextValue(None).canonical_encoding() != TextValue("").canonical_encoding()

    def test_variant_is_part_of_encoding(self):
        """Test that the tag is encoded."""
        assert TextValue("x").canonical_encoding() != ChildrenSerialization("x").canonical_encoding()

    def test_empty_differs_from_empty_custom(self):
        """Test EMPTY against an empty custom value."""
        assert EMPTY != CustomValue({})

    def test_nested_custom_data_sorted(self):
        """Test key sorting in nested data."""
        a = CustomValue({"outer": {"y": 1, "x": [1, 2]}})
        b = CustomValue({"outer": {"x": [1, 2], "y": 1}})
        assert a.canonical_encoding() == b.canonical_encoding()

    def test_equal_values_hash_alike(self):
        """Test hashing of equal values."""
        assert hash(StyleMap({"a": "1", "b": "2"})) == hash(StyleMap({"b": "2", "a": "1"}))
