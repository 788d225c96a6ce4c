"""Tests for the in-page scripts of the Playwright renderer."""

from webcompare.browser.controller import (
    ATTRIBUTES_SCRIPT,
    CHILDREN_MARKUP_SCRIPT,
    COMPUTED_STYLE_SCRIPT,
)


class TestPageScripts:
    """Test suite for the scripts evaluated against element handles."""

    def test_style_reads_indexed_values(self):
        """Test that computed style is read by index, so custom properties drop out."""
        assert "computed[name]" in COMPUTED_STYLE_SCRIPT
        assert "getPropertyValue" not in COMPUTED_STYLE_SCRIPT
        assert "!== undefined" in COMPUTED_STYLE_SCRIPT

    def test_attributes_use_get_attribute(self):
        """Test that missing attributes come back as null."""
        assert "getAttribute(name)" in ATTRIBUTES_SCRIPT

    def test_children_serialize_element_children(self):
        """Test that only element children are serialized."""
        assert "el.children" in CHILDREN_MARKUP_SCRIPT
        assert "outerHTML" in CHILDREN_MARKUP_SCRIPT
