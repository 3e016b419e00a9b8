from __future__ import annotations

import json
import logging
from typing import Any

import httpx
import pytest

from adapters.medications_api import MedicationsApi
from core.config import AppSettings

BASE_URL = "http://testserver"


class FakeBackend:
    """In-memory `/medications` REST backend served through `httpx.MockTransport`."""

    def __init__(self, records: list[dict[str, Any]] | None = None) -> None:
        self.records: dict[str, dict[str, Any]] = {r["id"]: dict(r) for r in records or []}
        self.next_id = 100
        self.requests: list[httpx.Request] = []
        self.failures: dict[tuple[str, str], int] = {}
        self.put_echoes_body = True

    def fail(self, method: str, path: str, status: int) -> None:
        self.failures[(method, path)] = status

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        status = self.failures.get((request.method, path))
        if status is not None:
            return httpx.Response(status, json={"error": "injected"})

        if path == "/medications":
            if request.method == "GET":
                return httpx.Response(200, json=list(self.records.values()))
            if request.method == "POST":
                payload = json.loads(request.content)
                record = {**payload, "id": str(self.next_id)}
                self.next_id += 1
                self.records[record["id"]] = record
                return httpx.Response(201, json=record)

        if path.startswith("/medications/"):
            medication_id = path.removeprefix("/medications/")
            if medication_id not in self.records:
                return httpx.Response(404, json={"error": "not found"})
            if request.method == "PUT":
                payload = json.loads(request.content)
                self.records[medication_id] = {**payload, "id": medication_id}
                if self.put_echoes_body:
                    return httpx.Response(200, json=self.records[medication_id])
                return httpx.Response(204)
            if request.method == "DELETE":
                del self.records[medication_id]
                return httpx.Response(204)

        return httpx.Response(405)

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


def make_settings(**overrides: Any) -> AppSettings:
    values: dict[str, Any] = {"base_url": BASE_URL, "request_timeout_seconds": 2.0}
    values.update(overrides)
    return AppSettings(_env_file=None, **values)


def make_api(backend: FakeBackend, **overrides: Any) -> MedicationsApi:
    return MedicationsApi(make_settings(**overrides), transport=backend.transport())


def sample_records() -> list[dict[str, Any]]:
    return [
        {
            "id": "1",
            "name": "Ibuprofen",
            "description": "200mg tablets",
            "price": 4.5,
            "imageUrl": "https://img.example/ibuprofen.png",
        },
        {
            "id": "2",
            "name": "Saline",
            "description": "Nasal spray",
            "price": 0,
            "imageUrl": "",
        },
    ]


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend(sample_records())


@pytest.fixture
def empty_backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def restore_root_logging():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers = handlers
    root.setLevel(level)
