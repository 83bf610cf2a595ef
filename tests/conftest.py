"""Pytest configuration and fixtures."""

import json

import httpx
import pytest

from backoffice.config import reload_settings
from backoffice.modules.backend import client


class FakeBackend:
    """In-process stand-in for the REST backend.

    Routes map (method, path) to either a (status, payload) tuple or a callable
    taking (request, body) and returning an httpx.Response. Unknown routes 404.
    """

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], object] = {}
        self.calls: list[tuple[str, str, object]] = []

    def add(self, method: str, path: str, payload=None, status: int = 200) -> None:
        self.routes[(method, path)] = (status, payload)

    def add_handler(self, method: str, path: str, handler) -> None:
        self.routes[(method, path)] = handler

    def calls_to(self, method: str, path: str) -> list:
        return [body for m, p, body in self.calls if m == method and p == path]

    def handle(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content) if request.content else None
        self.calls.append((request.method, request.url.path, body))
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, json={"message": "Recurso no encontrado"})
        if callable(route):
            return route(request, body)
        status, payload = route
        if payload is None:
            return httpx.Response(status)
        return httpx.Response(status, json=payload)


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch):
    """Isolate tests from any local .env overrides."""
    monkeypatch.setenv("API_BASE_URL", "http://backend.test")
    reload_settings()
    yield
    reload_settings()


@pytest.fixture
def backend(monkeypatch) -> FakeBackend:
    fake = FakeBackend()

    def factory() -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url="http://backend.test",
            transport=httpx.MockTransport(fake.handle),
        )

    monkeypatch.setattr(client, "get_http_client", factory)
    return fake


@pytest.fixture
def property_types_payload() -> list[dict]:
    return [
        {"id": 1, "name": "Casa"},
        {"id": 2, "name": "Apartamento", "parentId": 1, "parentName": "Casa"},
        {"id": 3, "name": "Terreno"},
    ]


@pytest.fixture
def developments_payload() -> list[dict]:
    return [
        {"id": 10, "title": "Torre Palermo", "type": "EDIFICIO", "status": "AVAILABLE",
         "price": 500000, "views": 40, "favoritesCount": 3, "createdAt": "2024-03-01T10:00:00"},
        {"id": 20, "title": "Barrio Los Álamos", "type": "BARRIO_CERRADO", "status": "SOLD",
         "price": 300000, "views": 90, "favoritesCount": 1, "createdAt": "2024-02-01T10:00:00"},
    ]


@pytest.fixture
def units_payload() -> list[dict]:
    return [
        {"id": 1, "developmentId": 10, "unitNumber": "10", "type": "DEPARTAMENTO", "status": "AVAILABLE", "price": 100000},
        {"id": 2, "developmentId": 10, "unitNumber": "2", "type": "DEPARTAMENTO", "status": "SOLD", "price": 90000},
        {"id": 3, "developmentId": 20, "unitNumber": "L-1", "type": "LOT", "status": "RESERVED", "price": 30000},
    ]
