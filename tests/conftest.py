"""Shared test fixtures: in-memory Supabase, mocked providers, fake LLM clients."""

import json
import os
import uuid
from types import SimpleNamespace

os.environ.setdefault("SUPABASE_URL", "http://supabase.test")
os.environ.setdefault("SUPABASE_SERVICE_ROLE_KEY", "service-role-key")
os.environ.setdefault("FUNCTIONS_BASE_URL", "http://functions.test/functions/v1")
os.environ.setdefault("AI_GATEWAY_URL", "http://gateway.test")
os.environ.setdefault("AI_GATEWAY_API_KEY", "gateway-key")
os.environ.setdefault("ELEVENLABS_URL", "http://tts.test")
os.environ.setdefault("ELEVENLABS_API_KEY", "tts-key")
os.environ.setdefault("HUGGINGFACE_URL", "http://hf.test")
os.environ.setdefault("HUGGINGFACE_API_KEY", "hf-key")
os.environ.setdefault("TAVILY_URL", "http://tavily.test")
os.environ.setdefault("TAVILY_API_KEY", "tavily-key")
os.environ.setdefault("RATE_LIMIT_STANDARD", "10000")
os.environ.setdefault("RATE_LIMIT_AI", "10000")

import httpx
import pytest
from fastapi.testclient import TestClient

from src.db import client as db_client
from src.llm import client as llm_client
from src.llm import token_counter
from src.main import app
from src.providers import http as provider_http

VALID_TOKEN = "valid-token"
OTHER_TOKEN = "other-token"
USERS = {
    VALID_TOKEN: SimpleNamespace(id="user-1", email="user1@example.com"),
    OTHER_TOKEN: SimpleNamespace(id="user-2", email="user2@example.com"),
}


# --- In-memory Supabase ---

class FakeQuery:
    def __init__(self, db: "FakeSupabase", table: str):
        self.db = db
        self.table = table
        self.op = "select"
        self.payload = None
        self.filters: list[tuple[str, object]] = []

    def select(self, columns: str = "*", count: str | None = None):
        self.op = "select"
        return self

    def insert(self, row: dict):
        self.op = "insert"
        self.payload = row
        return self

    def update(self, data: dict):
        self.op = "update"
        self.payload = data
        return self

    def eq(self, column: str, value):
        self.filters.append((column, value))
        return self

    def _matches(self, row: dict) -> bool:
        return all(row.get(column) == value for column, value in self.filters)

    def execute(self):
        if self.db.fail_tables and self.table in self.db.fail_tables:
            raise RuntimeError(f"{self.table} is unavailable")
        rows = self.db.tables.setdefault(self.table, [])
        if self.op == "insert":
            stored = {"id": str(uuid.uuid4()), **self.payload}
            rows.append(stored)
            data = [stored]
        elif self.op == "update":
            data = []
            for row in rows:
                if self._matches(row):
                    row.update(self.payload)
                    data.append(row)
        else:
            data = [dict(row) for row in rows if self._matches(row)]
        return SimpleNamespace(data=data, count=len(data))


class FakeAuth:
    def get_user(self, token: str):
        user = USERS.get(token)
        if user is None:
            raise RuntimeError("invalid JWT")
        return SimpleNamespace(user=user)


class FakeSupabase:
    def __init__(self):
        self.tables: dict[str, list[dict]] = {}
        self.fail_tables: set[str] = set()
        self.auth = FakeAuth()

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)

    def rows(self, name: str) -> list[dict]:
        return self.tables.get(name, [])


class FakeEncoding:
    def encode(self, text: str) -> list[str]:
        return text.split()


class FakeLLM:
    def __init__(self, content: str = "fake reply", error: Exception | None = None):
        self.content = content
        self.error = error
        self.calls: list[tuple[list[dict], str]] = []

    async def generate(self, messages: list[dict], model: str) -> dict:
        self.calls.append((messages, model))
        if self.error is not None:
            raise self.error
        return {"content": self.content, "finish_reason": "stop", "input_tokens": 12, "output_tokens": 3}


# --- Mocked provider HTTP ---

class ProviderMock:
    """Route table for httpx.MockTransport: (method, url) -> handler or response."""

    def __init__(self):
        self.routes: dict[str, object] = {}
        self.requests: list[httpx.Request] = []

    def add(self, url: str, handler) -> None:
        self.routes[url] = handler

    def json_body(self, index: int = -1) -> dict:
        return json.loads(self.requests[index].content)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        url = str(request.url)
        handler = self.routes.get(url)
        if handler is None:
            return httpx.Response(404, json={"error": f"no mock for {url}"})
        if isinstance(handler, httpx.Response):
            return handler
        return handler(request)


@pytest.fixture
def fake_db(monkeypatch):
    db = FakeSupabase()
    monkeypatch.setattr(db_client, "_client", db)
    return db


@pytest.fixture
def providers(monkeypatch):
    mock = ProviderMock()
    monkeypatch.setattr(provider_http, "_http_client", httpx.AsyncClient(transport=httpx.MockTransport(mock)))
    return mock


@pytest.fixture(autouse=True)
def offline(monkeypatch, fake_db, providers):
    monkeypatch.setattr(token_counter, "_encoding", FakeEncoding())
    monkeypatch.setattr(llm_client, "_clients", {})


@pytest.fixture
def client():
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def auth_header():
    return {"Authorization": f"Bearer {VALID_TOKEN}"}


def gateway_reply(content: str) -> httpx.Response:
    return httpx.Response(200, json={
        "choices": [{"message": {"role": "assistant", "content": content}, "finish_reason": "stop"}],
        "usage": {"prompt_tokens": 10, "completion_tokens": 5},
    })


GATEWAY_URL = "http://gateway.test/v1/chat/completions"
