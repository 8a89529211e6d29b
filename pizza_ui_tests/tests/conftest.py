import sys
import threading
from pathlib import Path
from typing import Dict

import httpx
import pytest
import pytest_asyncio
from playwright.async_api import Error as PlaywrightError

ROOT = Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from pizza_ui_tests.browser import Browser
from pizza_ui_tests.config import UiTargetProfile, settings
from pizza_ui_tests.interception import API_URL_PATTERN, install_mock_backend, remove_mock_backend
from pizza_ui_tests.mock_backend import PizzaMockBackend
from pizza_ui_tests.mock_pizza_api import create_mock_pizza_app
from pizza_ui_tests.playwright_client import PlaywrightClient

_frontend_probe: Dict[str, str | None] = {}


def _profile_id(profile: UiTargetProfile) -> str:
    return profile.name


@pytest.fixture(params=settings.profiles(), ids=_profile_id)
def active_profile(request):
    """Activate each configured UI target profile for the test run."""
    profile: UiTargetProfile = request.param
    with settings.use_profile(profile):
        yield profile


@pytest.fixture()
def frontend_available(active_profile):
    """Skip browser scenarios when the front-end under test is not running."""
    base_url = active_profile.base_url
    if base_url not in _frontend_probe:
        try:
            httpx.get(settings.url("/"), timeout=3.0, follow_redirects=True)
            _frontend_probe[base_url] = None
        except httpx.HTTPError as exc:
            _frontend_probe[base_url] = f"{type(exc).__name__}: {exc}"
    reason = _frontend_probe[base_url]
    if reason:
        pytest.skip(f"JWT Pizza front-end not reachable at {base_url} ({reason})")
    return base_url


async def connect_or_skip(client: PlaywrightClient) -> PlaywrightClient:
    """Connect ``client``, skipping the test when no browser binary is installed."""
    try:
        await client.connect()
    except PlaywrightError as exc:
        await client.close()
        pytest.skip(f"Playwright browser not available (run 'playwright install'): {exc}")
    return client


@pytest_asyncio.fixture()
async def playwright_client(frontend_available):
    """Create a Playwright client for the active profile."""
    client = await connect_or_skip(PlaywrightClient(base_url=frontend_available))
    try:
        yield client
    finally:
        await client.close()


@pytest_asyncio.fixture()
async def page(playwright_client):
    """A page talking to whatever backend the front-end is configured with."""
    return playwright_client.page


@pytest.fixture()
def mock_backend():
    """A fresh fake backend (logged out) for one test."""
    return PizzaMockBackend()


@pytest_asyncio.fixture()
async def pizza_page(page, mock_backend):
    """A page whose API calls are answered by ``mock_backend``, opened at the home page."""
    router = await install_mock_backend(page, mock_backend)
    await page.goto("/")
    yield page
    await remove_mock_backend(page, router)


@pytest_asyncio.fixture()
async def browser(pizza_page):
    """Browser wrapper around the mocked page."""
    return Browser(pizza_page)


OFFLINE_ORIGIN = "http://pizza.test"
OFFLINE_DOCUMENT = "<!doctype html><title>JWT Pizza</title><main></main>"


@pytest_asyncio.fixture()
async def offline_page():
    """A page on a routed origin that needs a browser but no front-end.

    The origin serves a blank document; API calls nothing else answers get
    404 ``{"error": "offline"}``.
    """
    client = await connect_or_skip(PlaywrightClient(base_url=OFFLINE_ORIGIN))
    page = client.page

    async def offline_api(route):
        await route.fulfill(status=404, json={"error": "offline"})

    async def blank_document(route):
        await route.fulfill(status=200, content_type="text/html", body=OFFLINE_DOCUMENT)

    try:
        await page.route(API_URL_PATTERN, offline_api)
        await page.route(f"{OFFLINE_ORIGIN}/", blank_document)
        await page.goto("/")
        yield page
    finally:
        await client.close()


# ============================================================================
# Mock JWT Pizza API fixtures
# ============================================================================

@pytest.fixture()
def mock_api_app(mock_backend):
    """Flask app serving ``mock_backend``."""
    return create_mock_pizza_app(mock_backend)


@pytest.fixture()
def mock_api_client(mock_api_app):
    with mock_api_app.test_client() as client:
        yield client


@pytest.fixture(scope='function')
def mock_pizza_api_server(mock_api_app):
    """Fixture that provides a running mock JWT Pizza API server."""
    from werkzeug.serving import make_server

    class MockServer:
        def __init__(self, app, host='127.0.0.1'):
            # Port 0 lets the OS pick a free port.
            self.server = make_server(host, 0, app, threaded=True)
            self.thread = threading.Thread(target=self.server.serve_forever, daemon=True)

        def start(self):
            self.thread.start()

        def stop(self):
            self.server.shutdown()
            self.thread.join(timeout=5)

        @property
        def url(self):
            return f"http://{self.server.host}:{self.server.server_port}"

    server = MockServer(mock_api_app)
    server.start()

    yield server

    server.stop()
