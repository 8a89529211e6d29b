"""Reusable JWT Pizza UI workflows shared by the scenario tests."""
from __future__ import annotations

import secrets
from dataclasses import dataclass
from typing import Callable, Iterable, List

import anyio
from playwright.async_api import Page, expect

from pizza_ui_tests.browser import Browser
from pizza_ui_tests.mock_backend import MENU, SEEDED_USERS, User

# Highlighted message the views render when the backend rejects a form.
ERROR_INDICATOR = "main .text-yellow-200"

ORDER_HEADING = "Awesome is a click away"


@dataclass
class RegistrationFormData:
    name: str
    email: str
    password: str


def generate_registration_data(prefix: str = "ui-diner") -> RegistrationFormData:
    suffix = secrets.token_hex(4)
    return RegistrationFormData(
        name=f"{prefix} {suffix}",
        email=f"{prefix}-{suffix}@jwt.com",
        password=secrets.token_urlsafe(8),
    )


def seeded_user(email: str) -> User:
    try:
        return SEEDED_USERS[email]
    except KeyError:
        raise KeyError(f"No seeded user with email {email!r}") from None


def pizza_link_name(title: str) -> str:
    """Accessible name prefix of a menu card link."""
    for item in MENU:
        if item["title"] == title:
            return f"Image Description {title}"
    raise KeyError(f"{title!r} is not on the menu")


def order_total(titles: Iterable[str]) -> str:
    """Cart total as the checkout table renders it, e.g. ``0.008 ₿``."""
    prices = {item["title"]: item["price"] for item in MENU}
    return f"{sum(prices[title] for title in titles):.3f} ₿"


# ---- authentication -----------------------------------------------------------
async def fill_login_form(page: Page, email: str, password: str) -> None:
    await page.get_by_role("textbox", name="Email address").fill(email)
    await page.get_by_role("textbox", name="Password").fill(password)
    await page.get_by_role("button", name="Login").click()


async def login_via_nav(page: Page, email: str, password: str) -> None:
    """Open the login view from the header link and submit credentials."""
    await page.get_by_role("link", name="Login").click()
    await fill_login_form(page, email, password)


async def login_as(page: Page, email: str) -> User:
    """Log in as a seeded user through the header link."""
    user = seeded_user(email)
    await login_via_nav(page, user.email, user.password)
    await expect(page.get_by_role("link", name="Logout")).to_be_visible()
    return user


async def login_at_checkout(page: Page, email: str, password: str) -> None:
    """Answer the login gate shown when checking out anonymously."""
    await page.get_by_placeholder("Email address").fill(email)
    await page.get_by_placeholder("Password").fill(password)
    await page.get_by_role("button", name="Login").click()


async def submit_registration(browser: Browser, data: RegistrationFormData) -> None:
    await browser.goto("/register")
    await browser.fill_placeholder("Full name", data.name)
    await browser.fill_placeholder("Email address", data.email)
    await browser.fill_placeholder("Password", data.password)
    await browser.click_role("button", "Register")


# ---- ordering -----------------------------------------------------------------
async def start_order(page: Page, store_id: str = "4") -> None:
    await page.get_by_role("button", name="Order now").click()
    await expect(page.locator("h2")).to_contain_text(ORDER_HEADING)
    await page.get_by_role("combobox").select_option(store_id)


async def add_pizzas(page: Page, titles: List[str]) -> None:
    for title in titles:
        await page.get_by_role("link", name=pizza_link_name(title)).click()
    await expect(page.locator("form")).to_contain_text(f"Selected pizzas: {len(titles)}")


async def checkout(page: Page) -> None:
    await page.get_by_role("button", name="Checkout").click()


async def pay(page: Page) -> None:
    await page.get_by_role("button", name="Pay now").click()


# ---- polling helpers ----------------------------------------------------------
async def wait_for_path(
    browser: Browser,
    predicate: Callable[[str], bool],
    timeout: float = 5.0,
    interval: float = 0.2,
) -> str:
    deadline = anyio.current_time() + timeout
    last_path = ""
    while anyio.current_time() <= deadline:
        last_path = await browser.current_path()
        if predicate(last_path):
            return last_path
        await anyio.sleep(interval)
    raise AssertionError(f"Timed out waiting for location; last path='{last_path}'")
