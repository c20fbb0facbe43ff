"""Shared fixtures: an in-memory booking backend behind httpx.MockTransport."""
import json

import httpx
import pytest
from fastapi.testclient import TestClient

from wanderlust.dependencies import get_api_transport
from wanderlust.main import app

API_PREFIX = "/api"

TRAVELLER = {"id": "u1", "name": "Asha Rao", "email": "asha@example.com", "role": "user"}
ADMIN = {"id": "a1", "name": "Admin User", "email": "admin@example.com", "role": "ADMIN"}


class FakeBackend:
    """Routes (method, path) to canned responses and records every request it sees."""

    def __init__(self):
        self.routes = {}
        self.requests = []

    def on(self, method: str, path: str, body=None, status: int = 200):
        self.routes[(method.upper(), path)] = (status, body)
        return self

    def __call__(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path
        if path.startswith(API_PREFIX):
            path = path[len(API_PREFIX):]
        self.requests.append(request)
        status, body = self.routes.get((request.method, path), (404, {"message": "Not found"}))
        if callable(body):
            return body(request)
        return httpx.Response(status, json=body)

    def sent(self, method: str, path: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == method and r.url.path == API_PREFIX + path]

    def last_json(self, method: str, path: str) -> dict:
        requests = self.sent(method, path)
        assert requests, f"no {method} {path} reached the backend"
        return json.loads(requests[-1].content)


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def client(backend):
    app.dependency_overrides[get_api_transport] = lambda: httpx.MockTransport(backend)
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


def sign_in(client: TestClient, backend: FakeBackend, user: dict, token: str = "tok-123") -> None:
    """Log in through the real form so the session cookie lands in the client's jar."""
    backend.on("POST", "/auth/login", {"token": token, "user": user})
    response = client.post("/login", data={"email": user["email"], "password": "secret"}, follow_redirects=False)
    assert response.status_code == 303


@pytest.fixture
def traveller_client(client, backend):
    sign_in(client, backend, TRAVELLER)
    return client


@pytest.fixture
def admin_client(client, backend):
    sign_in(client, backend, ADMIN)
    return client
