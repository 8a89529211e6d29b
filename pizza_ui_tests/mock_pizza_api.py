"""Mock JWT Pizza service served over HTTP.

Wraps a PizzaMockBackend in a Flask app so the front-end can be pointed at
the fake backend outside of the test run, and so the HTTP contract can be
exercised without a browser.

Usage:
    # Start the mock server (host/port from MOCK_API_HOST / MOCK_API_PORT)
    python -m pizza_ui_tests.mock_pizza_api

    # Or build an app in a test
    app = create_mock_pizza_app()
    with app.test_client() as client:
        client.put("/api/auth", json={"email": "d@jwt.com", "password": "a"})
"""
from __future__ import annotations

import logging

from flask import Flask, Response, jsonify, request

from pizza_ui_tests.config import settings
from pizza_ui_tests.mock_backend import MockRequest, PizzaMockBackend

logger = logging.getLogger(__name__)

API_METHODS = ["GET", "POST", "PUT", "DELETE"]


def create_mock_pizza_app(backend: PizzaMockBackend | None = None) -> Flask:
    """Create the mock API app around ``backend`` (a fresh one by default)."""
    app = Flask(__name__)
    app.config["TESTING"] = True
    app.config["PIZZA_BACKEND"] = backend or PizzaMockBackend()

    @app.after_request
    def allow_cross_origin(response: Response) -> Response:
        # The front-end dev server runs on another origin.
        response.headers["Access-Control-Allow-Origin"] = request.headers.get("Origin", "*")
        response.headers["Access-Control-Allow-Credentials"] = "true"
        response.headers["Access-Control-Allow-Headers"] = "Content-Type, Authorization"
        response.headers["Access-Control-Allow-Methods"] = ", ".join(API_METHODS)
        return response

    @app.route("/health", methods=["GET"])
    def health():
        return jsonify({"status": "ok"})

    @app.route("/api/<path:subpath>", methods=API_METHODS)
    def api(subpath: str):
        mock_request = MockRequest(
            method=request.method,
            url=request.url,
            body=request.get_json(silent=True),
        )
        mock_response = app.config["PIZZA_BACKEND"].dispatch(mock_request)

        if mock_response is None:
            return jsonify({"error": f"Unknown endpoint: /api/{subpath}"}), 404
        if mock_response.has_body:
            return jsonify(mock_response.body), mock_response.status
        return Response(status=mock_response.status)

    return app


def reset_mock_state(app: Flask) -> PizzaMockBackend:
    """Replace the app's backend with a fresh one (logged out)."""
    backend = PizzaMockBackend()
    app.config["PIZZA_BACKEND"] = backend
    return backend


if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    host, port = settings.mock_api_host, settings.mock_api_port
    print(f"Mock JWT Pizza API running on http://{host}:{port}")
    print("Endpoints:")
    print("  PUT/DELETE /api/auth        - Login / logout")
    print("  GET        /api/user/me     - Current user")
    print("  GET        /api/order/menu  - Menu")
    print("  GET        /api/franchise   - Franchises")
    print("  POST       /api/order       - Place order")
    print("\nSeeded users: d@jwt.com / a (diner), admin@jwt.com / a (admin)")
    create_mock_pizza_app().run(host=host, port=port, debug=True)
