"""Shared fixtures: an in-process fake backend and an in-memory keyring."""

import json
from dataclasses import dataclass, field
from typing import Any

import httpx
import keyring
import pytest
import pytest_asyncio
from keyring.backend import KeyringBackend
from keyring.errors import PasswordDeleteError
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.routing import Route

from fitpro.shell.api_client import APIClient
from fitpro.shell.session import SessionStore


BASE_URL = "http://testserver"

METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE"]


@dataclass
class RecordedRequest:
    method: str
    path: str
    query: dict[str, str]
    headers: dict[str, str]
    json: Any = None


@dataclass
class FakeBackend:
    """Starlette app answering canned responses and recording every request."""

    routes: dict[tuple[str, str], tuple[int, Any, bytes | None]] = field(default_factory=dict)
    requests: list[RecordedRequest] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.app = Starlette(routes=[Route("/{path:path}", self._handle, methods=METHODS)])

    def respond(self, method: str, path: str, body: Any = None, status: int = 200, raw: bytes | None = None) -> None:
        self.routes[(method, path)] = (status, body, raw)

    def envelope(self, method: str, path: str, data: Any = None, message: str | None = None,
                 success: bool = True, status: int = 200) -> None:
        self.respond(method, path, {"success": success, "data": data, "message": message}, status)

    @property
    def last(self) -> RecordedRequest:
        return self.requests[-1]

    async def _handle(self, request: Request) -> Response:
        content = await request.body()
        self.requests.append(
            RecordedRequest(
                method=request.method,
                path=request.url.path,
                query=dict(request.query_params),
                headers=dict(request.headers),
                json=json.loads(content) if content else None,
            )
        )
        key = (request.method, request.url.path)
        if key not in self.routes:
            return JSONResponse({"success": False, "message": "Route not found"}, status_code=404)
        status, body, raw = self.routes[key]
        if raw is not None:
            return Response(raw, status_code=status, media_type="application/json")
        return JSONResponse(body, status_code=status)

    def transport(self) -> httpx.ASGITransport:
        return httpx.ASGITransport(app=self.app)


class InMemoryKeyring(KeyringBackend):
    """Keyring backend that keeps passwords in a dict."""

    priority = 1

    def __init__(self) -> None:
        super().__init__()
        self.passwords: dict[tuple[str, str], str] = {}

    def get_password(self, service, username):
        return self.passwords.get((service, username))

    def set_password(self, service, username, password):
        self.passwords[(service, username)] = password

    def delete_password(self, service, username):
        if (service, username) not in self.passwords:
            raise PasswordDeleteError("Password not found")
        del self.passwords[(service, username)]


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def session() -> SessionStore:
    return SessionStore()


@pytest_asyncio.fixture
async def api(backend, session):
    client = APIClient(BASE_URL, session.token_provider, transport=backend.transport())
    yield client
    await client.aclose()


@pytest.fixture
def fake_keyring():
    previous = keyring.get_keyring()
    store = InMemoryKeyring()
    keyring.set_keyring(store)
    yield store
    keyring.set_keyring(previous)


USER = {"_id": "u1", "email": "ann@example.com", "name": "Ann"}

EXERCISE = {
    "_id": "e1",
    "user": "u1",
    "name": "Bench Press",
    "category": "strength",
    "sets": 3,
    "reps": 8,
    "weightKg": 80,
    "performedAt": "2026-10-19T08:00:00Z",
}

ROUTINE = {
    "_id": "r1",
    "name": "Arms Day",
    "exercises": [{"name": "Curl", "defaultSets": 3, "defaultReps": 10, "order": 1}],
    "isArchived": False,
}

SESSION = {
    "_id": "s1",
    "user": "u1",
    "workoutRoutine": {"_id": "r1", "name": "Arms Day"},
    "startedAt": "2026-10-19T08:00:00Z",
    "finishedAt": "2026-10-19T09:00:00Z",
    "durationSec": 3600,
    "exercises": [{"name": "Curl", "sets": [{"index": 1, "weightKg": 12, "reps": 10}]}],
}

MEAL = {
    "_id": "m1",
    "user": "u1",
    "date": "2026-10-19T00:00:00Z",
    "type": "lunch",
    "title": "Salad",
    "calories": 400,
    "proteinG": 20,
    "carbsG": 30,
    "fatsG": 15,
}

NUTRITION_SUMMARY = {
    "date": "2026-10-19",
    "calories": {"eaten": 1500, "burned": 300, "goal": 2000},
    "macros": {
        "protein": {"grams": 90, "target": 150},
        "carbs": {"grams": 180, "target": 200},
        "fats": {"grams": 50, "target": 65},
    },
}


@pytest.fixture
def samples() -> dict[str, dict]:
    return {
        "user": USER,
        "exercise": EXERCISE,
        "routine": ROUTINE,
        "session": SESSION,
        "meal": MEAL,
        "nutrition_summary": NUTRITION_SUMMARY,
    }
