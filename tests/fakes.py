"""In-memory page doubles for the comparison engine."""

import asyncio
from typing import Optional, Sequence

from webcompare.browser.page import ElementRef, PageContext, PageRenderer
from webcompare.comparison.descriptor import ComparisonDescriptor
from webcompare.comparison.values import EMPTY
from webcompare.exceptions import ExtractionError


class FakeElement(ElementRef):
    """ElementRef with canned values."""

    def __init__(
        self,
        text: Optional[str] = None,
        attributes: dict = None,
        style: dict = None,
        children: list = None,
        delay: float = 0.0,
    ):
        self.text = text
        self.attrs = attributes or {}
        self.style = style or {}
        self.children = children or []
        self.delay = delay
        self.disposed = False

    async def text_content(self) -> Optional[str]:
        await asyncio.sleep(self.delay)
        return self.text

    async def attributes(self, names: Sequence[str]) -> dict:
        return {name: self.attrs.get(name) for name in names}

    async def computed_style(self) -> dict:
        return dict(self.style)

    async def children_markup(self) -> list:
        return list(self.children)

    async def dispose(self):
        self.disposed = True


class FakePage(PageContext):
    """PageContext over a selector -> FakeElement table."""

    def __init__(self, elements: dict = None, broken_selectors: set = None, url: str = "https://example.test/"):
        self.url = url
        self.elements = elements or {}
        self.broken_selectors = broken_selectors or set()
        self.queries: list[str] = []

    async def query(self, selector: str) -> Optional[ElementRef]:
        self.queries.append(selector)
        if selector in self.broken_selectors:
            raise ExtractionError(f"Selector {selector!r} failed: bad syntax", selector=selector)
        return self.elements.get(selector)


class FakeRenderer(PageRenderer):
    """Renderer that hands out one FakePage and records its lifecycle."""

    def __init__(self, page: FakePage = None, open_error: Exception = None):
        self.page = page or FakePage()
        self.open_error = open_error
        self.opened: list[str] = []
        self.closed = 0

    async def open(self, url: str) -> PageContext:
        self.opened.append(url)
        if self.open_error:
            raise self.open_error
        self.page.url = url
        return self.page

    async def close(self, context: PageContext):
        self.closed += 1


def make_descriptor(kind="text", selector="#target", attributes=(), value=None, strategy=None, monitor_id=1):
    """Descriptor built from field names; value defaults to "no element expected"."""
    return ComparisonDescriptor(
        monitor_id=monitor_id,
        selector=selector,
        kind=kind,
        attribute_names=attributes,
        expected_value=EMPTY if value is None else value,
        strategy=strategy,
    )
