"""Shared fixtures: in-memory database, stubbed Claude client, test app."""

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ANTHROPIC_API_KEY"] = ""

from types import SimpleNamespace  # noqa: E402
from unittest.mock import AsyncMock, MagicMock  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from expiry_tracker.database import Base, SessionLocal, engine, get_db  # noqa: E402
from expiry_tracker.main import app  # noqa: E402
from expiry_tracker.services.shelf_life_ai import ShelfLifeAI, get_shelf_life_ai  # noqa: E402


def claude_reply(text: str) -> SimpleNamespace:
    """Shape of an Anthropic Messages response carrying one text block."""
    return SimpleNamespace(content=[SimpleNamespace(type="text", text=text)], stop_reason="end_turn")


def tool_use(tool_id: str, name: str, tool_input: dict) -> SimpleNamespace:
    return SimpleNamespace(type="tool_use", id=tool_id, name=name, input=tool_input)


def tool_use_reply(*blocks: SimpleNamespace) -> SimpleNamespace:
    """A response that stops to ask for the given tool calls."""
    return SimpleNamespace(content=list(blocks), stop_reason="tool_use")


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def anthropic_client():
    client = MagicMock()
    client.messages.create = AsyncMock()
    return client


@pytest.fixture
def ai(anthropic_client) -> ShelfLifeAI:
    return ShelfLifeAI(api_key="test-key", model="test-model", client=anthropic_client)


@pytest.fixture
def client(db, ai):
    app.dependency_overrides[get_db] = lambda: db
    app.dependency_overrides[get_shelf_life_ai] = lambda: ai
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
