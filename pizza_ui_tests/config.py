"""Shared configuration for the JWT Pizza UI tests.

Values come from the environment, falling back to the repository's
.env.defaults file:

- PIZZA_BASE_URL: front-end under test
- PLAYWRIGHT_HEADLESS / PLAYWRIGHT_BROWSER / UI_DEFAULT_TIMEOUT_MS
- UI_SMOKE_BASE_URL: optional second target, tested alongside the primary one
"""
from __future__ import annotations

from contextlib import contextmanager
from copy import deepcopy
from dataclasses import dataclass
from typing import Dict, Iterator, List
from urllib.parse import urljoin

from pizza_ui_tests.env_defaults import get_setting

SUPPORTED_BROWSERS = ("chromium", "firefox", "webkit")

DEFAULT_BASE_URL = "http://localhost:5173"
DEFAULT_TIMEOUT_MS = 30000


@dataclass
class UiTargetProfile:
    """A front-end deployment the scenarios can run against."""

    name: str
    base_url: str


def _parse_bool(value: str | None) -> bool:
    return (value or "").lower() in {"true", "1"}


def _parse_timeout(value: str | None) -> int:
    try:
        timeout = int(value or DEFAULT_TIMEOUT_MS)
    except ValueError:
        raise ValueError(f"UI_DEFAULT_TIMEOUT_MS must be an integer, got {value!r}") from None
    if timeout <= 0:
        raise ValueError(f"UI_DEFAULT_TIMEOUT_MS must be positive, got {timeout}")
    return timeout


class UiTestConfig:
    """Configuration for one test run.

    The primary profile always exists; a "smoke" profile is added when
    UI_SMOKE_BASE_URL is set.
    """

    def __init__(self) -> None:
        self.playwright_headless: bool = _parse_bool(get_setting("PLAYWRIGHT_HEADLESS", "true"))

        browser_type = (get_setting("PLAYWRIGHT_BROWSER", "chromium") or "chromium").lower()
        if browser_type not in SUPPORTED_BROWSERS:
            raise ValueError(
                f"PLAYWRIGHT_BROWSER must be one of {', '.join(SUPPORTED_BROWSERS)}, got {browser_type!r}"
            )
        self.browser_type: str = browser_type

        self.default_timeout_ms: int = _parse_timeout(get_setting("UI_DEFAULT_TIMEOUT_MS"))

        self.mock_api_host: str = get_setting("MOCK_API_HOST", "127.0.0.1") or "127.0.0.1"
        self.mock_api_port: int = int(get_setting("MOCK_API_PORT", "5556") or 5556)

        primary = UiTargetProfile(
            name="primary",
            base_url=get_setting("PIZZA_BASE_URL", DEFAULT_BASE_URL) or DEFAULT_BASE_URL,
        )
        self._profiles: Dict[str, UiTargetProfile] = {primary.name: primary}

        smoke_base = get_setting("UI_SMOKE_BASE_URL")
        if smoke_base:
            smoke = UiTargetProfile(name="smoke", base_url=smoke_base)
            self._profiles[smoke.name] = smoke

        self._active: UiTargetProfile = primary

        print(
            f"[CONFIG] base_url={primary.base_url} browser={self.browser_type} "
            f"headless={self.playwright_headless} profiles={','.join(self._profiles)}"
        )

    # ---- active profile helpers -------------------------------------------------
    @property
    def base_url(self) -> str:
        return self._active.base_url

    @property
    def active_profile_name(self) -> str:
        return self._active.name

    # ---- profile orchestration --------------------------------------------------
    def profiles(self) -> List[UiTargetProfile]:
        return list(self._profiles.values())

    @contextmanager
    def use_profile(self, profile: UiTargetProfile) -> Iterator[UiTargetProfile]:
        """Temporarily switch the active profile.

        The profile is copied so a test mutating it leaves the registered
        profile untouched.
        """
        previous = self._active
        self._active = deepcopy(profile)
        try:
            yield self._active
        finally:
            self._active = previous

    # ---- utility helpers --------------------------------------------------------
    def url(self, path: str) -> str:
        """Return an absolute URL for the provided path."""
        return urljoin(self.base_url.rstrip("/") + "/", path.lstrip("/"))


# Singleton instance - initialized on first import
settings = UiTestConfig()
