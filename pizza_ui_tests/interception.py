"""Serve a PizzaMockBackend to the browser through Playwright request routing."""
from __future__ import annotations

import logging
import re
from typing import Any, Union

from playwright.async_api import BrowserContext, Error as PlaywrightError, Page, Route

from pizza_ui_tests.mock_backend import MockRequest, PizzaMockBackend

logger = logging.getLogger(__name__)

# Every API call goes through the backend; anything it does not know is
# passed on with route.fallback().
API_URL_PATTERN = re.compile(r"/api/")


def _request_body(route: Route) -> Any:
    try:
        return route.request.post_data_json
    except (PlaywrightError, KeyError, ValueError):
        return None


class MockBackendRouter:
    """Route handler bridging Playwright routes and a PizzaMockBackend."""

    def __init__(self, backend: PizzaMockBackend) -> None:
        self.backend = backend
        self.handled = 0
        self.passed_through = 0

    async def __call__(self, route: Route) -> None:
        request = MockRequest(
            method=route.request.method,
            url=route.request.url,
            body=_request_body(route),
        )
        response = self.backend.dispatch(request)

        if response is None:
            self.passed_through += 1
            await route.fallback()
            return

        self.handled += 1
        if response.has_body:
            await route.fulfill(status=response.status, json=response.body)
        else:
            await route.fulfill(status=response.status)


async def install_mock_backend(
    target: Union[Page, BrowserContext],
    backend: PizzaMockBackend | None = None,
) -> MockBackendRouter:
    """Route the API calls of ``target`` (a page or a whole context) to ``backend``.

    A fresh backend is created when none is given. Returns the router so
    tests can reach the backend and its counters.
    """
    router = MockBackendRouter(backend or PizzaMockBackend())
    await target.route(API_URL_PATTERN, router)
    logger.debug("Installed mock backend on %s", type(target).__name__)
    return router


async def remove_mock_backend(target: Union[Page, BrowserContext], router: MockBackendRouter) -> None:
    await target.unroute(API_URL_PATTERN, router)
