"""Shared pytest fixtures."""

import copy
from collections.abc import AsyncIterator, Callable
from datetime import UTC, datetime, timedelta
from http.cookies import Morsel, SimpleCookie
from types import SimpleNamespace
from typing import Any

import httpx
import pytest
from pymongo import ReturnDocument

from tabsession.app import App
from tabsession.config import Config
from tabsession.core.core import Services
from tabsession.web.server import create_fastapi_app

START = datetime(2026, 1, 1, 12, 0, tzinfo=UTC)


class FakeClock:
    """Clock that only moves when told to."""

    def __init__(self, start: datetime = START) -> None:
        self.current = start

    def __call__(self) -> datetime:
        return self.current

    def advance(self, delta: timedelta) -> datetime:
        self.current += delta
        return self.current


def _matches(document: dict[str, Any], query: dict[str, Any]) -> bool:
    for key, condition in query.items():
        value = document.get(key)
        if isinstance(condition, dict) and any(op.startswith("$") for op in condition):
            for op, operand in condition.items():
                if value is None and op != "$in":
                    return False
                if op == "$gt" and not value > operand:
                    return False
                if op == "$gte" and not value >= operand:
                    return False
                if op == "$lt" and not value < operand:
                    return False
                if op == "$lte" and not value <= operand:
                    return False
                if op == "$in" and value not in operand:
                    return False
        elif value != condition:
            return False
    return True


def _apply_update(document: dict[str, Any], update: dict[str, Any]) -> None:
    for op, fields in update.items():
        for key, operand in fields.items():
            if op == "$set":
                document[key] = operand
            elif op == "$inc":
                document[key] = document.get(key, 0) + operand
            elif op == "$addToSet":
                items = operand["$each"] if isinstance(operand, dict) else [operand]
                current = document.setdefault(key, [])
                current.extend(item for item in items if item not in current)
            elif op == "$pull":
                removed = operand["$in"] if isinstance(operand, dict) else [operand]
                document[key] = [item for item in document.get(key, []) if item not in removed]
            else:
                raise NotImplementedError(op)


class FakeCursor:
    def __init__(self, documents: list[dict[str, Any]]) -> None:
        self._documents = documents

    def __aiter__(self) -> AsyncIterator[dict[str, Any]]:
        return self._iterate()

    async def _iterate(self) -> AsyncIterator[dict[str, Any]]:
        for document in self._documents:
            yield document


class FakeCollection:
    """In-memory stand-in for an async pymongo collection; records every call."""

    def __init__(self, name: str) -> None:
        self.name = name
        self.documents: list[dict[str, Any]] = []
        self.calls: list[str] = []

    async def create_index(self, keys: list[tuple[str, int]], **kwargs: Any) -> str:
        self.calls.append("create_index")
        return "_".join(f"{key}_{direction}" for key, direction in keys)

    async def insert_one(self, document: dict[str, Any]) -> SimpleNamespace:
        self.calls.append("insert_one")
        self.documents.append(copy.deepcopy(document))
        return SimpleNamespace(inserted_id=document["_id"])

    async def find_one(self, query: dict[str, Any], **kwargs: Any) -> dict[str, Any] | None:
        self.calls.append("find_one")
        found = next((doc for doc in self.documents if _matches(doc, query)), None)
        return copy.deepcopy(found)

    def find(self, query: dict[str, Any]) -> FakeCursor:
        self.calls.append("find")
        return FakeCursor([copy.deepcopy(doc) for doc in self.documents if _matches(doc, query)])

    async def find_one_and_update(
        self, query: dict[str, Any], update: dict[str, Any], return_document: bool = ReturnDocument.BEFORE
    ) -> dict[str, Any] | None:
        self.calls.append("find_one_and_update")
        found = next((doc for doc in self.documents if _matches(doc, query)), None)
        if found is None:
            return None
        before = copy.deepcopy(found)
        _apply_update(found, update)
        return copy.deepcopy(found) if return_document == ReturnDocument.AFTER else before

    async def delete_many(self, query: dict[str, Any]) -> SimpleNamespace:
        self.calls.append("delete_many")
        kept = [doc for doc in self.documents if not _matches(doc, query)]
        deleted_count = len(self.documents) - len(kept)
        self.documents = kept
        return SimpleNamespace(deleted_count=deleted_count)

    @property
    def data_calls(self) -> list[str]:
        """Calls other than index creation."""
        return [call for call in self.calls if call != "create_index"]


class FakeDatabase:
    def __init__(self) -> None:
        self.collections: dict[str, FakeCollection] = {}

    def get_collection(self, name: str) -> FakeCollection:
        return self.collections.setdefault(name, FakeCollection(name))


@pytest.fixture
def config() -> Config:
    return Config(database_url="mongodb://localhost:27017/tabsession_test", host="127.0.0.1", port=8000, debug=True)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def database() -> FakeDatabase:
    return FakeDatabase()


@pytest.fixture
async def app(config: Config, clock: FakeClock, database: FakeDatabase) -> AsyncIterator[App]:
    app = App(config, clock=clock, database=database)  # type: ignore[arg-type]
    async with app.lifespan():
        yield app


@pytest.fixture
def services(app: App) -> Services:
    return app.core.services


@pytest.fixture
async def client(app: App, config: Config) -> AsyncIterator[httpx.AsyncClient]:
    fastapi_app = create_fastapi_app(app, config)
    transport = httpx.ASGITransport(app=fastapi_app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client


@pytest.fixture
def parse_set_cookies() -> Callable[[httpx.Response], dict[str, Morsel[str]]]:
    """Parse every Set-Cookie header of a response into morsels keyed by cookie name."""

    def parse(response: httpx.Response) -> dict[str, Morsel[str]]:
        cookies: dict[str, Morsel[str]] = {}
        for header in response.headers.get_list("set-cookie"):
            parsed: SimpleCookie = SimpleCookie()
            parsed.load(header)
            cookies.update(parsed)
        return cookies

    return parse
