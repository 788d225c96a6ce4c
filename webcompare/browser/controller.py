"""
Playwright page renderer for webcompare.
Launches Chromium, navigates, and exposes the loaded page to the comparison engine.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Sequence

from playwright.async_api import (
    async_playwright,
    Browser,
    BrowserContext,
    ElementHandle,
    Page,
    Playwright,
    TimeoutError as PlaywrightTimeout,
    Error as PlaywrightError,
)

from webcompare.browser.page import ElementRef, PageContext, PageRenderer
from webcompare.config.settings import BrowserSettings, settings
from webcompare.exceptions import ExtractionError, NavigationTimeoutError, PageLoadError
from webcompare.utils.logger import compare_logger as logger


ATTRIBUTES_SCRIPT = """(el, names) => {
    const values = {};
    for (const name of names) {
        values[name] = el.getAttribute(name);
    }
    return values;
}"""

COMPUTED_STYLE_SCRIPT = """el => {
    const computed = window.getComputedStyle(el);
    const style = {};
    for (const name of Array.from(computed)) {
        // Custom properties (--*) have no indexed value and are left out
        const value = computed[name];
        if (value !== undefined) {
            style[name] = value;
        }
    }
    return style;
}"""

CHILDREN_MARKUP_SCRIPT = "el => Array.from(el.children).map(child => child.outerHTML)"


class PlaywrightElement(ElementRef):
    """ElementRef backed by a Playwright element handle."""

    def __init__(self, handle: ElementHandle, selector: str):
        self._handle = handle
        self.selector = selector

    async def _evaluate(self, script: str, arg=None):
        try:
            if arg is None:
                return await self._handle.evaluate(script)
            return await self._handle.evaluate(script, arg)
        except PlaywrightError as e:
            raise ExtractionError(f"In-page evaluation failed: {e}", selector=self.selector) from e

    async def text_content(self) -> Optional[str]:
        return await self._evaluate("el => el.textContent")

    async def attributes(self, names: Sequence[str]) -> dict[str, Optional[str]]:
        return await self._evaluate(ATTRIBUTES_SCRIPT, list(names))

    async def computed_style(self) -> dict[str, str]:
        return await self._evaluate(COMPUTED_STYLE_SCRIPT)

    async def children_markup(self) -> list[str]:
        return await self._evaluate(CHILDREN_MARKUP_SCRIPT)

    async def dispose(self):
        try:
            await self._handle.dispose()
        except PlaywrightError as e:
            logger.debug(f"Could not dispose handle for {self.selector}: {e}")


@dataclass
class PlaywrightPageContext(PageContext):
    """A navigated Playwright page plus everything launched to host it."""
    url: str
    page: Page
    playwright: Playwright
    browser: Browser
    browser_context: BrowserContext

    async def query(self, selector: str) -> Optional[ElementRef]:
        try:
            handle = await self.page.query_selector(selector)
        except PlaywrightError as e:
            raise ExtractionError(f"Selector {selector!r} failed: {e}", selector=selector) from e

        if handle is None:
            return None
        return PlaywrightElement(handle, selector)


class PlaywrightRenderer(PageRenderer):
    """
    Async Playwright renderer.
    Every open() launches its own browser, so contexts share nothing and
    close() tears all of it down.
    """

    def __init__(
        self,
        headless: bool = None,
        executable_path: str = None,
        no_sandbox: bool = None,
        timeout_ms: int = None,
        wait_until: str = None,
        browser_settings: BrowserSettings = None,
    ):
        config = browser_settings or settings.browser

        # Use settings defaults if not specified
        self.headless = headless if headless is not None else config.headless
        self.executable_path = executable_path or config.executable_path
        self.no_sandbox = no_sandbox if no_sandbox is not None else config.no_sandbox
        self.timeout_ms = timeout_ms or config.timeout_ms
        self.wait_until = wait_until or config.wait_until
        self.viewport_width = config.viewport_width
        self.viewport_height = config.viewport_height
        self.user_agent = config.user_agent

    def _launch_args(self) -> list[str]:
        return ["--no-sandbox"] if self.no_sandbox else []

    async def open(self, url: str) -> PlaywrightPageContext:
        """Launch Chromium, navigate to url and wait for the configured load state."""
        start_time = datetime.now()
        playwright = None
        browser = None

        try:
            logger.info(f"Opening {url} (wait_until={self.wait_until})")

            playwright = await async_playwright().start()
            browser = await playwright.chromium.launch(
                headless=self.headless,
                executable_path=str(self.executable_path) if self.executable_path else None,
                args=self._launch_args(),
            )

            browser_context = await browser.new_context(
                viewport={"width": self.viewport_width, "height": self.viewport_height},
                user_agent=self.user_agent,
                java_script_enabled=True,
            )
            browser_context.set_default_timeout(self.timeout_ms)

            page = await browser_context.new_page()
            await page.goto(url, wait_until=self.wait_until, timeout=self.timeout_ms)

        except PlaywrightTimeout as e:
            logger.error(f"Timed out loading {url}", exception=e)
            await self._release(browser, playwright)
            raise NavigationTimeoutError(url, self.timeout_ms) from e

        except PlaywrightError as e:
            logger.error(f"Failed to load {url}", exception=e)
            await self._release(browser, playwright)
            raise PageLoadError(url, str(e)[:200]) from e

        except BaseException:
            await self._release(browser, playwright)
            raise

        duration = (datetime.now() - start_time).total_seconds() * 1000
        logger.debug(f"Loaded {url} in {duration:.0f}ms")

        return PlaywrightPageContext(
            url=url,
            page=page,
            playwright=playwright,
            browser=browser,
            browser_context=browser_context,
        )

    async def close(self, context: PlaywrightPageContext):
        """Close the page and cleanup the browser behind it."""
        try:
            await context.page.close()
            await context.browser_context.close()
        except PlaywrightError as e:
            logger.error(f"Error closing page for {context.url}: {e}", exception=e)
        finally:
            await self._release(context.browser, context.playwright)

    async def _release(self, browser: Optional[Browser], playwright: Optional[Playwright]):
        try:
            if browser:
                await browser.close()
        except PlaywrightError as e:
            logger.error(f"Error closing browser: {e}", exception=e)
        finally:
            if playwright:
                await playwright.stop()
