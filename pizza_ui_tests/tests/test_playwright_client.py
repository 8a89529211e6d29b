"""Tests for the PlaywrightClient lifecycle, using a stand-in Playwright driver.

Run with: pytest pizza_ui_tests/tests/test_playwright_client.py -v
"""
from typing import Any, Dict, Optional

import pytest
from playwright.async_api import Error as PlaywrightError

from pizza_ui_tests import playwright_client
from pizza_ui_tests.playwright_client import PlaywrightClient

pytestmark = pytest.mark.asyncio


class FakePage:
    closed = False

    async def close(self):
        self.closed = True


class FakeContext:
    def __init__(self, fail_new_page: bool):
        self.fail_new_page = fail_new_page
        self.timeout: Optional[int] = None
        self.page = FakePage()
        self.closed = False

    def set_default_timeout(self, timeout: int) -> None:
        self.timeout = timeout

    async def new_page(self):
        if self.fail_new_page:
            raise PlaywrightError("Target page, context or browser has been closed")
        return self.page

    async def close(self):
        self.closed = True


class FakeBrowser:
    def __init__(self, fail_new_page: bool):
        self.context = FakeContext(fail_new_page)
        self.context_options: Dict[str, Any] = {}
        self.closed = False

    async def new_context(self, **kwargs):
        self.context_options = kwargs
        return self.context

    async def close(self):
        self.closed = True


class FakeBrowserType:
    def __init__(self, browser: FakeBrowser, fail_launch: bool):
        self.browser = browser
        self.fail_launch = fail_launch
        self.launched_headless: Optional[bool] = None

    async def launch(self, headless: bool):
        if self.fail_launch:
            raise PlaywrightError("Executable doesn't exist")
        self.launched_headless = headless
        return self.browser


class FakePlaywright:
    def __init__(self, fail_launch: bool = False, fail_new_page: bool = False):
        self.browser = FakeBrowser(fail_new_page)
        self.chromium = FakeBrowserType(self.browser, fail_launch)
        self.firefox = FakeBrowserType(self.browser, fail_launch)
        self.webkit = FakeBrowserType(self.browser, fail_launch)
        self.stopped = False

    async def start(self):
        return self

    async def stop(self):
        self.stopped = True


@pytest.fixture
def install_driver(monkeypatch):
    def install(**kwargs) -> FakePlaywright:
        driver = FakePlaywright(**kwargs)
        monkeypatch.setattr(playwright_client, "async_playwright", lambda: driver)
        return driver

    return install


async def test_connect_opens_context_on_base_url(install_driver):
    driver = install_driver()

    async with PlaywrightClient(browser_type="firefox", headless=True, timeout=1234,
                                base_url="http://pizza.test") as client:
        assert client.page is driver.browser.context.page
        assert driver.firefox.launched_headless is True
        assert driver.browser.context_options == {"base_url": "http://pizza.test"}
        assert driver.browser.context.timeout == 1234

    assert driver.browser.context.page.closed
    assert driver.browser.closed
    assert driver.stopped


async def test_failed_page_creation_closes_browser(install_driver):
    driver = install_driver(fail_new_page=True)
    client = PlaywrightClient(base_url="http://pizza.test")

    with pytest.raises(PlaywrightError):
        await client.connect()

    assert driver.browser.context.closed
    assert driver.browser.closed
    assert driver.stopped
    with pytest.raises(RuntimeError):
        client.page


async def test_failed_launch_stops_driver(install_driver):
    driver = install_driver(fail_launch=True)
    client = PlaywrightClient(browser_type="chromium", base_url="http://pizza.test")

    with pytest.raises(PlaywrightError):
        await client.connect()

    assert driver.stopped
    assert not driver.browser.closed

    # Closing again after a failed connect is a no-op.
    await client.close()
