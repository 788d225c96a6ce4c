"""Tests for the static HTML renderer."""

import pytest

from webcompare.browser.static import StaticHtmlRenderer
from webcompare.comparison.extractor import ValueExtractor
from webcompare.comparison.values import (
    EMPTY,
    AttributeMap,
    ChildrenSerialization,
    TextValue,
)
from webcompare.exceptions import ExtractionError, PageLoadError

from tests.fakes import make_descriptor


URL = "https://example.test/"


class TestStaticHtmlRenderer:
    """Test suite for StaticHtmlRenderer."""

    @pytest.fixture
    def extractor(self):
        return ValueExtractor()

    @pytest.mark.asyncio
    async def test_text_content(self, static_renderer, extractor):
        """Test text extraction."""
        async with static_renderer.session(URL) as page:
            value = await extractor.extract(page, make_descriptor("text", "#title"))
        assert value == TextValue("Hello")

    @pytest.mark.asyncio
    async def test_text_includes_descendants(self, static_renderer, extractor):
        """Test text from nested elements."""
        async with static_renderer.session(URL) as page:
            value = await extractor.extract(page, make_descriptor("text", "#mixed"))
        assert value == TextValue("Some bold text")

    @pytest.mark.asyncio
    async def test_text_includes_script_and_style_bodies(self, extractor):
        """Test that inline script and style text counts, comments do not."""
        renderer = StaticHtmlRenderer({URL: "<div id='d'>a<script>var x=1;</script><!-- note -->b<style>p{}</style></div>"})
        async with renderer.session(URL) as page:
            value = await extractor.extract(page, make_descriptor("text", "#d"))
        assert value == TextValue("avar x=1;bp{}")

    @pytest.mark.asyncio
    async def test_element_without_text(self, static_renderer, extractor):
        """Test an element with no text."""
        async with static_renderer.session(URL) as page:
            value = await extractor.extract(page, make_descriptor("text", "#empty"))
        assert value == TextValue(None)

    @pytest.mark.asyncio
    async def test_attributes(self, static_renderer, extractor):
        """Test attribute lookup."""
        descriptor = make_descriptor("attribute", "img#logo", attributes=("src", "ALT", "width"))
        async with static_renderer.session(URL) as page:
            value = await extractor.extract(page, descriptor)
        assert value == AttributeMap({"src": "/new.png", "ALT": "Logo", "width": None})

    @pytest.mark.asyncio
    async def test_class_attribute_is_raw_string(self, extractor):
        """Test that class is not split."""
        renderer = StaticHtmlRenderer({URL: '<div id="box" class="a  b">x</div>'})
        async with renderer.session(URL) as page:
            value = await extractor.extract(page, make_descriptor("attribute", "#box", attributes=("class",)))
        assert value == AttributeMap({"class": "a  b"})

    @pytest.mark.asyncio
    async def test_children_markup(self, static_renderer, extractor):
        """Test children serialization."""
        async with static_renderer.session(URL) as page:
            value = await extractor.extract(page, make_descriptor("children", "#list"))
        assert value == ChildrenSerialization('<li>One</li><li class="second">Two</li>')

    @pytest.mark.asyncio
    async def test_missing_element(self, static_renderer, extractor):
        """Test a selector with no match."""
        async with static_renderer.session(URL) as page:
            value = await extractor.extract(page, make_descriptor("text", "#nothing-here"))
        assert value is EMPTY

    @pytest.mark.asyncio
    async def test_style_needs_rendering_engine(self, static_renderer, extractor):
        """Test that style is unsupported."""
        async with static_renderer.session(URL) as page:
            with pytest.raises(ExtractionError):
                await extractor.extract(page, make_descriptor("style", "#title"))

    @pytest.mark.asyncio
    async def test_malformed_selector(self, static_renderer, extractor):
        """Test an invalid selector."""
        async with static_renderer.session(URL) as page:
            with pytest.raises(ExtractionError) as exc_info:
                await extractor.extract(page, make_descriptor("text", "div[[", monitor_id=4))
        assert exc_info.value.monitor_id == 4

    @pytest.mark.asyncio
    async def test_loads_local_file(self, tmp_path, extractor):
        """Test loading from disk."""
        path = tmp_path / "page.html"
        path.write_text("<html><body><h1 id='title'>From disk</h1></body></html>", encoding="utf-8")
        renderer = StaticHtmlRenderer()

        for url in (str(path), path.as_uri()):
            async with renderer.session(url) as page:
                value = await extractor.extract(page, make_descriptor("text", "#title"))
            assert value == TextValue("From disk")

    @pytest.mark.asyncio
    async def test_unknown_url(self):
        """Test an unregistered URL."""
        renderer = StaticHtmlRenderer()
        with pytest.raises(PageLoadError):
            await renderer.open("https://unregistered.test/")

    @pytest.mark.asyncio
    async def test_missing_file(self, tmp_path):
        """Test a missing local file."""
        renderer = StaticHtmlRenderer()
        with pytest.raises(PageLoadError):
            await renderer.open(str(tmp_path / "absent.html"))

    def test_register(self):
        """Test page registration."""
        renderer = StaticHtmlRenderer()
        renderer.register(URL, "<p>hi</p>")
        assert renderer.pages[URL] == "<p>hi</p>"
