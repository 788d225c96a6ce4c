"""Page-rendering collaborators."""

from .page import ElementRef, PageContext, PageRenderer
from .controller import PlaywrightRenderer, PlaywrightPageContext
from .static import StaticHtmlRenderer, StaticPageContext

__all__ = [
    "ElementRef",
    "PageContext",
    "PageRenderer",
    "PlaywrightRenderer",
    "PlaywrightPageContext",
    "StaticHtmlRenderer",
    "StaticPageContext",
]
