"""In-memory JWT Pizza backend used by the UI tests.

The fake answers the endpoints the front-end needs for the scenarios:
- /api/auth: login (PUT), logout (DELETE)
- /api/user/me: the currently logged in user
- /api/order/menu: static two-pizza menu
- /api/franchise: static franchise list (query string allowed)
- /api/order: echoes the submitted order with an id and a signed token

One instance is built per test. Its only mutable state is the session
pointer (the logged in user); menu and franchise data are handed out as
copies so responses never share state.
"""
from __future__ import annotations

import logging
import re
from copy import deepcopy
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Pattern

logger = logging.getLogger(__name__)

AUTH_TOKEN = "abcdef"
ORDER_ID = 23
ORDER_JWT = "eyJpYXQ"


class Role(str, Enum):
    DINER = "diner"
    ADMIN = "admin"


@dataclass(frozen=True)
class User:
    id: str
    name: str
    email: str
    password: str
    role: Role

    def to_json(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "password": self.password,
            "roles": [{"role": self.role.value}],
        }


DINER = User(id="3", name="KC", email="d@jwt.com", password="a", role=Role.DINER)
ADMIN = User(id="1", name="Admin", email="admin@jwt.com", password="a", role=Role.ADMIN)

SEEDED_USERS: Dict[str, User] = {user.email: user for user in (DINER, ADMIN)}

MENU: List[Dict[str, Any]] = [
    {"id": 1, "title": "Veggie", "image": "pizza1.png", "price": 0.0038, "description": "A garden of delight"},
    {"id": 2, "title": "Pepperoni", "image": "pizza2.png", "price": 0.0042, "description": "Spicy treat"},
]

FRANCHISES: List[Dict[str, Any]] = [
    {
        "id": 2,
        "name": "LotaPizza",
        "stores": [
            {"id": 4, "name": "Lehi"},
            {"id": 5, "name": "Springville"},
            {"id": 6, "name": "American Fork"},
        ],
    },
    {"id": 3, "name": "PizzaCorp", "stores": [{"id": 7, "name": "Spanish Fork"}]},
    {"id": 4, "name": "topSpot", "stores": []},
]


@dataclass
class MockRequest:
    """What a handler gets to see of an intercepted request.

    ``body`` is the parsed JSON payload, or None when the request had no
    body or the body was not valid JSON.
    """

    method: str
    url: str
    body: Any = None


@dataclass
class MockResponse:
    status: int = 200
    body: Any = None

    @property
    def has_body(self) -> bool:
        return self.body is not None


Handler = Callable[[MockRequest], MockResponse]


@dataclass
class MockRoute:
    name: str
    pattern: Pattern[str]
    handler: Handler

    def matches(self, url: str) -> bool:
        return self.pattern.search(url) is not None


@dataclass
class PizzaMockBackend:
    """Fake backend with a single session pointer.

    Routes are matched against the full request URL in registration order;
    the first match handles the request.
    """

    users: Dict[str, User] = field(default_factory=lambda: dict(SEEDED_USERS))
    logged_in_user: Optional[User] = None
    routes: List[MockRoute] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        self.routes = [
            MockRoute("auth", re.compile(r"/api/auth$"), self.handle_auth),
            MockRoute("user_me", re.compile(r"/api/user/me$"), self.handle_current_user),
            MockRoute("menu", re.compile(r"/api/order/menu$"), self.handle_menu),
            MockRoute("franchises", re.compile(r"/api/franchise(\?.*)?$"), self.handle_franchises),
            MockRoute("order", re.compile(r"/api/order$"), self.handle_order),
        ]

    def match(self, url: str) -> Optional[MockRoute]:
        for route in self.routes:
            if route.matches(url):
                return route
        return None

    def dispatch(self, request: MockRequest) -> Optional[MockResponse]:
        """Answer ``request``, or return None when no route matches its URL."""
        route = self.match(request.url)
        if route is None:
            logger.debug("No mock route for %s %s", request.method, request.url)
            return None

        response = route.handler(request)
        logger.debug("%s %s -> %s (%d)", request.method, request.url, route.name, response.status)
        return response

    # ---- session -----------------------------------------------------------------
    @property
    def is_logged_in(self) -> bool:
        return self.logged_in_user is not None

    def authenticate(self, email: Any, password: Any) -> Optional[User]:
        """Return the seeded user when both email and password match exactly."""
        user = self.users.get(email) if isinstance(email, str) else None
        if user is None or user.password != password:
            return None
        return user

    # ---- handlers ----------------------------------------------------------------
    def handle_auth(self, request: MockRequest) -> MockResponse:
        method = request.method.upper()

        if method == "DELETE":
            self.logged_in_user = None
            return MockResponse(status=200)

        if method != "PUT":
            return MockResponse(status=400)

        login = request.body
        if login is None:
            return MockResponse(status=400)

        # Any other JSON value is a login attempt without credentials.
        credentials = login if isinstance(login, dict) else {}
        email = credentials.get("email")
        user = self.authenticate(email, credentials.get("password"))
        if user is None:
            logger.info("Rejected login for %r", email)
            return MockResponse(status=401, body={"error": "Unauthorized"})

        self.logged_in_user = user
        logger.info("Logged in %s (%s)", user.email, user.role.value)
        return MockResponse(body={"user": user.to_json(), "token": AUTH_TOKEN})

    def handle_current_user(self, request: MockRequest) -> MockResponse:
        if self.logged_in_user is None:
            return MockResponse(status=401, body={"error": "Not logged in"})
        return MockResponse(body=self.logged_in_user.to_json())

    def handle_menu(self, request: MockRequest) -> MockResponse:
        return MockResponse(body=deepcopy(MENU))

    def handle_franchises(self, request: MockRequest) -> MockResponse:
        return MockResponse(body={"franchises": deepcopy(FRANCHISES)})

    def handle_order(self, request: MockRequest) -> MockResponse:
        submitted = request.body if isinstance(request.body, dict) else {}
        order = {**deepcopy(submitted), "id": ORDER_ID}
        return MockResponse(body={"order": order, "jwt": ORDER_JWT})
