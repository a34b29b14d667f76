"""Tests for the notes HTTP API."""

from storyboard.entities import DEFAULT_NOTE_COLOR, SENTIMENT_COLORS
from tests.conftest import draft_payload


def _create(http, **overrides):
    response = http.post("/notes", json=draft_payload(**overrides))
    assert response.status_code == 201
    return response.json()


def test_list_empty_board(http):
    response = http.get("/notes")

    assert response.status_code == 200
    assert response.json() == []


def test_create_note_returns_full_record(http):
    note = _create(http, useCase="automate reports", sentiment=2)

    assert note["color"] == SENTIMENT_COLORS[2]
    assert note["color"] != DEFAULT_NOTE_COLOR
    assert note["useCase"] == "automate reports"
    assert note["comments"] == []
    assert set(note) >= {"id", "rotation", "x", "y", "createdAt", "authorName"}


def test_blank_use_case_rejected_without_store_change(http, store):
    _create(http)

    response = http.post("/notes", json=draft_payload(useCase="   "))

    assert response.status_code == 400
    assert len(store.list_notes()) == 1


def test_list_is_newest_first(http, store):
    store.write({
        "notes": [
            {"id": "a", "useCase": "a", "createdAt": "2026-01-01T00:00:00.000Z"},
            {"id": "b", "useCase": "b", "createdAt": "2026-01-03T00:00:00.000Z"},
        ]
    })

    assert [n["id"] for n in http.get("/notes").json()] == ["b", "a"]


def test_patch_ignores_non_numeric_coordinates(http):
    note = _create(http)

    response = http.patch(f"/notes/{note['id']}", json={"x": "five", "y": 12.5})

    assert response.status_code == 200
    assert response.json()["x"] == note["x"]
    assert response.json()["y"] == 12.5


def test_patch_unknown_note(http):
    response = http.patch("/notes/nope", json={"x": 1})

    assert response.status_code == 404


def test_delete_then_poll_excludes_note(http):
    keep = _create(http, useCase="keep")
    gone = _create(http, useCase="gone")

    response = http.delete(f"/notes/{gone['id']}")

    assert response.status_code == 200
    assert response.json() == {"success": True}
    assert [n["id"] for n in http.get("/notes").json()] == [keep["id"]]
    assert http.delete(f"/notes/{gone['id']}").status_code == 404


def test_comments_append_in_order(http):
    note = _create(http)

    first = http.post(f"/notes/{note['id']}/comments", json={"author": "Bob", "text": "A"})
    second = http.post(f"/notes/{note['id']}/comments", json={"text": "B"})

    assert first.status_code == 201
    assert second.status_code == 201
    assert second.json()["author"] == "Anonymous"
    comments = http.get("/notes").json()[0]["comments"]
    assert [c["text"] for c in comments] == ["A", "B"]
    assert comments[0]["id"] != comments[1]["id"]


def test_comment_requires_text(http):
    note = _create(http)

    response = http.post(f"/notes/{note['id']}/comments", json={"author": "Bob", "text": "  "})

    assert response.status_code == 400
    assert http.get("/notes").json()[0]["comments"] == []


def test_comment_on_unknown_note(http):
    response = http.post("/notes/nope/comments", json={"text": "hello"})

    assert response.status_code == 404
