"""Shared pytest fixtures and test helpers for storyboard tests."""

import random

import httpx
import pytest
from fastapi.testclient import TestClient

from server import create_app
from storyboard.api_client import BoardApiClient
from storyboard.entities import Comment, Note
from storyboard.store import NoteStore

BASE_URL = "http://testserver"


class FakeClock:
    """Monotonic clock the test advances by hand."""

    def __init__(self, now: float = 100.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def store(tmp_path):
    """A store backed by a fresh file in a temporary directory."""
    return NoteStore(str(tmp_path / "data" / "notes.json"), rng=random.Random(7))


@pytest.fixture
def app(store):
    return create_app(store)


@pytest.fixture
def http(app):
    """Synchronous FastAPI test client."""
    with TestClient(app) as client:
        yield client


@pytest.fixture
async def api(app):
    """Async board client talking to the app in-process."""
    client = BoardApiClient(base_url=BASE_URL, transport=httpx.ASGITransport(app=app))
    yield client
    await client.aclose()


@pytest.fixture
def clock():
    return FakeClock()


# Test helper functions (not fixtures, but available for import)


def make_note(note_id="n1", **overrides) -> Note:
    """
    Build a client-side note with sensible defaults.

    Args:
        note_id: The note identity.
        **overrides: Any Note field, by its Python name.

    """
    fields = {
        "id": note_id,
        "author_name": "Ada",
        "use_case": "summarise meeting notes",
        "industry": "Technology",
        "experience": "",
        "sentiment": 0,
        "x": 100,
        "y": 100,
        "created_at": "2026-01-01T00:00:00.000Z",
    }
    fields.update(overrides)
    return Note(**fields)


def make_comment(comment_id="c1", text="nice", author="Bob") -> Comment:
    return Comment(id=comment_id, author=author, text=text, created_at="2026-01-02T00:00:00.000Z")


def draft_payload(**overrides) -> dict:
    """A valid ``POST /notes`` body in wire form."""
    payload = {
        "authorName": "Ada",
        "profession": "Teacher",
        "industry": "Education",
        "region": "EU",
        "useCase": "automate reports",
        "experience": "I spend hours on grading",
        "aiType": "automation",
        "aiRealness": "possible",
        "sentiment": 1,
        "painPoints": "",
        "extraThoughts": "",
    }
    payload.update(overrides)
    return payload
