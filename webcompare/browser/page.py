"""
Page-rendering collaborator interfaces.

A PageRenderer loads a URL into a PageContext. The comparison engine only
reads from a PageContext: it looks elements up and asks them for text,
attributes, computed style or child markup. It never mutates the page.
"""

from abc import ABC, abstractmethod
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional, Sequence

from webcompare.utils.logger import compare_logger as logger


class ElementRef(ABC):
    """Read-only handle to one element of a loaded page."""

    @abstractmethod
    async def text_content(self) -> Optional[str]:
        """Concatenated text of all descendant text nodes (DOM textContent)."""

    @abstractmethod
    async def attributes(self, names: Sequence[str]) -> dict[str, Optional[str]]:
        """Value of each requested attribute, None where it is not set."""

    @abstractmethod
    async def computed_style(self) -> dict[str, str]:
        """Every enumerable computed CSS property mapped to its resolved value."""

    @abstractmethod
    async def children_markup(self) -> list[str]:
        """Outer markup of each direct child element, in document order."""

    async def dispose(self):
        """Release the handle. No-op unless the backend holds remote references."""


class PageContext(ABC):
    """A loaded document the engine can query."""

    url: str

    @abstractmethod
    async def query(self, selector: str) -> Optional[ElementRef]:
        """
        First element matching a CSS selector, or None.

        Raises:
            ExtractionError: if the selector cannot be evaluated
        """


class PageRenderer(ABC):
    """Loads pages and tears them down again."""

    @abstractmethod
    async def open(self, url: str) -> PageContext:
        """
        Load a URL and wait until it is ready for extraction.

        Raises:
            PageLoadError: if the page cannot be loaded
            NavigationTimeoutError: if loading does not settle in time
        """

    @abstractmethod
    async def close(self, context: PageContext):
        """Release everything open() acquired for this context."""

    @asynccontextmanager
    async def session(self, url: str) -> AsyncIterator[PageContext]:
        """Open a page for the duration of a block; always closes it."""
        context = await self.open(url)
        try:
            yield context
        finally:
            await self.close(context)
            logger.debug(f"Closed page context for {url}")
