"""
Static HTML renderer for webcompare.
Serves pre-rendered markup through BeautifulSoup for offline checks and tests.
"""

from pathlib import Path
from typing import Optional, Sequence
from urllib.parse import unquote, urlparse

from bs4 import BeautifulSoup, Tag
from bs4.element import Comment, Declaration, Doctype, NavigableString, ProcessingInstruction
from soupsieve import SelectorSyntaxError

from webcompare.browser.page import ElementRef, PageContext, PageRenderer
from webcompare.exceptions import ExtractionError, PageLoadError
from webcompare.utils.logger import compare_logger as logger


NON_TEXT_NODES = (Comment, Declaration, Doctype, ProcessingInstruction)


class StaticElement(ElementRef):
    """ElementRef backed by a BeautifulSoup tag."""

    def __init__(self, tag: Tag, selector: str):
        self._tag = tag
        self.selector = selector

    async def text_content(self) -> Optional[str]:
        # Every descendant text node, script and style bodies included, as textContent reads them
        return "".join(
            node for node in self._tag.descendants
            if isinstance(node, NavigableString) and not isinstance(node, NON_TEXT_NODES)
        )

    async def attributes(self, names: Sequence[str]) -> dict[str, Optional[str]]:
        # lxml lower-cases HTML attribute names, as the DOM does
        return {name: self._tag.get(name.lower()) for name in names}

    async def computed_style(self) -> dict[str, str]:
        raise ExtractionError(
            "Computed style needs a rendering engine; use the Playwright renderer",
            selector=self.selector,
        )

    async def children_markup(self) -> list[str]:
        return [str(child) for child in self._tag.children if isinstance(child, Tag)]


class StaticPageContext(PageContext):
    """A parsed HTML document."""

    def __init__(self, url: str, html: str):
        self.url = url
        # Keep class/rel/... as the raw strings the DOM would report
        self.soup = BeautifulSoup(html, "lxml", multi_valued_attributes=None)

    async def query(self, selector: str) -> Optional[ElementRef]:
        try:
            tag = self.soup.select_one(selector)
        except SelectorSyntaxError as e:
            raise ExtractionError(f"Selector {selector!r} failed: {e}", selector=selector) from e

        if tag is None:
            return None
        return StaticElement(tag, selector)


class StaticHtmlRenderer(PageRenderer):
    """
    Renderer over markup that is already available.

    URLs resolve to registered documents first, then to local files
    (plain paths or file:// URLs). No scripts run and no network is used.
    """

    def __init__(self, pages: dict[str, str] = None):
        self.pages = dict(pages or {})

    def register(self, url: str, html: str):
        """Serve html for url."""
        self.pages[url] = html

    def _load(self, url: str) -> str:
        if url in self.pages:
            return self.pages[url]

        parsed = urlparse(url)
        if parsed.scheme == "file":
            path = Path(unquote(parsed.path))
        elif parsed.scheme == "":
            path = Path(url)
        else:
            raise PageLoadError(url, "no document registered for this URL")

        try:
            return path.read_text(encoding="utf-8")
        except OSError as e:
            raise PageLoadError(url, str(e)) from e

    async def open(self, url: str) -> StaticPageContext:
        html = self._load(url)
        logger.debug(f"Parsed static document for {url} ({len(html)} chars)")
        return StaticPageContext(url, html)

    async def close(self, context: StaticPageContext):
        context.soup.decompose()
