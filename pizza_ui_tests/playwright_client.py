"""
Direct Playwright Client
========================

Owns the Playwright lifecycle for one test: playwright -> browser ->
context -> page. The context is created with the configured base URL, so
scenarios navigate with relative paths (``await page.goto("/about")``).

Usage:
    from pizza_ui_tests.playwright_client import PlaywrightClient

    async with PlaywrightClient() as client:
        await client.page.goto("/")
        await client.page.get_by_role("link", name="Login").click()
"""

import logging
from typing import Optional

from playwright.async_api import async_playwright, Browser, BrowserContext, Page, Playwright

from pizza_ui_tests.config import settings

logger = logging.getLogger(__name__)


class PlaywrightClient:
    """
    Playwright client launching its own browser in-process.

    Each client has a default context and page; extra isolated contexts can
    be opened with new_context().

    Example:
        async with PlaywrightClient(base_url="http://localhost:5173") as client:
            await client.page.goto("/menu")
    """

    def __init__(
        self,
        browser_type: Optional[str] = None,
        headless: Optional[bool] = None,
        timeout: Optional[int] = None,
        base_url: Optional[str] = None,
    ):
        """
        Initialize Playwright client.

        Args:
            browser_type: Browser to use (chromium, firefox, webkit); defaults to PLAYWRIGHT_BROWSER
            headless: Run in headless mode (None = PLAYWRIGHT_HEADLESS)
            timeout: Default timeout in milliseconds (None = UI_DEFAULT_TIMEOUT_MS)
            base_url: Base URL for relative navigation (None = active profile)
        """
        self.browser_type = browser_type or settings.browser_type
        self.headless = settings.playwright_headless if headless is None else headless
        self.timeout = timeout or settings.default_timeout_ms
        self.base_url = base_url or settings.base_url

        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._context: Optional[BrowserContext] = None
        self._page: Optional[Page] = None

    async def __aenter__(self):
        """Async context manager entry."""
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()

    async def connect(self):
        """Launch the browser and open the default context and page."""
        self._playwright = await async_playwright().start()

        try:
            if self.browser_type == 'firefox':
                self._browser = await self._playwright.firefox.launch(headless=self.headless)
            elif self.browser_type == 'webkit':
                self._browser = await self._playwright.webkit.launch(headless=self.headless)
            else:
                self._browser = await self._playwright.chromium.launch(headless=self.headless)
        except Exception:
            await self._playwright.stop()
            self._playwright = None
            raise

        logger.debug("Launched %s (headless=%s) for %s", self.browser_type, self.headless, self.base_url)

        try:
            self._context = await self.new_context()
            self._page = await self._context.new_page()
        except Exception:
            await self.close()
            raise

    async def new_context(self, **kwargs) -> BrowserContext:
        """
        Create a new isolated browser context.

        Args:
            **kwargs: Context options (viewport, user_agent, ...); base_url is preset

        Returns:
            BrowserContext object
        """
        if not self._browser:
            raise RuntimeError("Client not connected. Use 'async with' or call connect()")

        kwargs.setdefault("base_url", self.base_url)
        context = await self._browser.new_context(**kwargs)
        context.set_default_timeout(self.timeout)
        return context

    async def close(self):
        """Close all connections and cleanup resources."""
        if self._page:
            await self._page.close()
            self._page = None

        if self._context:
            await self._context.close()
            self._context = None

        if self._browser:
            await self._browser.close()
            self._browser = None

        if self._playwright:
            await self._playwright.stop()
            self._playwright = None

    @property
    def page(self) -> Page:
        """Get the default page."""
        if not self._page:
            raise RuntimeError("Client not connected or page not created")
        return self._page
