"""Thin wrapper around direct Playwright for ergonomic assertions."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

import anyio
from playwright.async_api import Page, TimeoutError as PlaywrightTimeout


@dataclass
class ToolError(Exception):
    """Raised when a browser operation fails."""

    name: str
    payload: Dict[str, Any]
    message: str

    def __str__(self) -> str:  # pragma: no cover - human readable helper
        return f"{self.name} failed ({self.message}) with payload={self.payload}"


class Browser:
    """Convenience wrapper over a Playwright page."""

    def __init__(self, page: Page) -> None:
        self._page = page
        self.current_url: str | None = None
        self.current_title: str | None = None

    @property
    def page(self) -> Page:
        return self._page

    async def _update_state(self) -> None:
        self.current_url = self._page.url
        self.current_title = await self._page.title()

    async def goto(self, path: str, wait_until: str = "load", timeout: int | None = None) -> Dict[str, Any]:
        """Navigate to ``path`` (relative to the context base URL) and report the status.

        Args:
            path: Path or absolute URL
            wait_until: "load", "domcontentloaded" or "networkidle"
            timeout: Timeout in milliseconds (None = context default)
        """
        try:
            response = await self._page.goto(path, wait_until=wait_until, timeout=timeout)
            await self._update_state()
            return {
                "url": self.current_url,
                "title": self.current_title,
                "status": response.status if response else None,
            }
        except PlaywrightTimeout as exc:
            raise ToolError(name="goto", payload={"path": path, "wait_until": wait_until}, message=str(exc))

    async def current_path(self) -> str:
        return await self.evaluate("() => window.location.pathname")

    async def fill_placeholder(self, placeholder: str, value: str) -> Dict[str, Any]:
        """Fill the input carrying the given placeholder."""
        try:
            await self._page.get_by_placeholder(placeholder).fill(value)
            return {"placeholder": placeholder, "value": value}
        except Exception as exc:
            raise ToolError(name="fill_placeholder", payload={"placeholder": placeholder}, message=str(exc))

    async def click_role(self, role: str, name: str) -> Dict[str, Any]:
        """Click the element with the given ARIA role and accessible name."""
        try:
            await self._page.get_by_role(role, name=name).click()
            await self._update_state()
            return {"role": role, "name": name, "url": self.current_url}
        except Exception as exc:
            raise ToolError(name="click_role", payload={"role": role, "name": name}, message=str(exc))

    async def text(self, selector: str) -> str:
        """Get text content of element."""
        try:
            text = await self._page.text_content(selector, timeout=5000)
            return text or ""
        except Exception as exc:
            raise ToolError(name="text", payload={"selector": selector}, message=str(exc))

    async def evaluate(self, script: str, arg: Any = None) -> Any:
        """Execute JavaScript in the page context."""
        try:
            return await self._page.evaluate(script, arg)
        except Exception as exc:
            raise ToolError(name="evaluate", payload={"script": script}, message=str(exc))

    async def wait_for_text(self, selector: str, expected: str, timeout: float = 3.0, interval: float = 0.5) -> str:
        """Poll for text content until it contains the expected substring."""
        deadline = anyio.current_time() + timeout
        last_error: ToolError | None = None

        while anyio.current_time() <= deadline:
            try:
                content = await self.text(selector)
            except ToolError as exc:
                content = ""
                last_error = exc
            if expected in content:
                return content
            await anyio.sleep(interval)

        if last_error:
            raise AssertionError(
                f"Timed out waiting for '{expected}' in selector '{selector}'. Last error: {last_error}"
            ) from last_error
        raise AssertionError(f"Timed out waiting for '{expected}' in selector '{selector}'")

    async def expect_substring(self, selector: str, expected: str) -> str:
        content = await self.text(selector)
        assert expected in content, f"'{expected}' not found in '{content}'"
        return content

