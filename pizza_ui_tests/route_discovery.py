"""
Front-end route registry.

Lists the JWT Pizza routes the suite visits and categorizes them, so the
smoke scenarios are generated from one list instead of hardcoded paths
spread across test modules.
"""
from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class RouteInfo:
    """A navigable front-end route."""
    path: str
    category: str  # public, diner, franchise, admin
    login_as: Optional[str] = None  # seeded email to log in with before visiting
    per_persona: bool = False  # visited once per seeded persona

    @property
    def needs_login(self) -> bool:
        return self.login_as is not None

    @property
    def test_id(self) -> str:
        return self.path.strip("/") or "home"


@dataclass
class RouteRegistry:
    """Registry of all known routes."""
    routes: List[RouteInfo] = field(default_factory=list)

    def add(self, route: RouteInfo) -> None:
        self.routes.append(route)

    def smoke_routes(self) -> List[RouteInfo]:
        """Routes whose only check is that the page stays reachable."""
        return [r for r in self.routes if r.category != "public" and not r.per_persona]

    def persona_routes(self) -> List[RouteInfo]:
        return [r for r in self.routes if r.per_persona]

    def get(self, path: str) -> RouteInfo:
        for route in self.routes:
            if route.path == path:
                return route
        raise KeyError(path)


# Path that no view claims; the app renders its not-found page.
UNKNOWN_ROUTE = "/thispagedoesnotexist"


def discover_routes() -> RouteRegistry:
    registry = RouteRegistry()

    for path in ["/", "/about", "/docs", "/register", "/logout"]:
        registry.add(RouteInfo(path, "public"))

    registry.add(RouteInfo("/history", "diner"))
    registry.add(RouteInfo("/diner", "diner", login_as="d@jwt.com"))
    registry.add(RouteInfo("/diner-dashboard", "diner", login_as="d@jwt.com"))
    registry.add(RouteInfo("/delivery", "diner", login_as="d@jwt.com"))

    registry.add(RouteInfo("/franchise-dashboard", "franchise", per_persona=True))
    registry.add(RouteInfo("/create-store", "franchise", login_as="admin@jwt.com"))
    registry.add(RouteInfo("/close-store", "franchise", login_as="admin@jwt.com"))

    registry.add(RouteInfo("/admin-dashboard", "admin", login_as="admin@jwt.com"))
    registry.add(RouteInfo("/create-franchise", "admin", login_as="admin@jwt.com"))
    registry.add(RouteInfo("/close-franchise", "admin", login_as="admin@jwt.com"))

    return registry


routes = discover_routes()
