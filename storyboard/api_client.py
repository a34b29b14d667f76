# storyboard/api_client.py

import logging

import httpx
from pydantic import ValidationError

from storyboard.entities import Comment, CommentDraft, Note, NoteDraft
from storyboard.exc import BoardTransportError, NoteNotFoundError, NoteValidationError
from storyboard.settings import API_URL, REQUEST_TIMEOUT

logger = logging.getLogger("storyboard_client")


class BoardApiClient:
    """
    Async client for the notes HTTP API.

    Every failure comes back as a :class:`~storyboard.exc.StoryboardError`:
    validation (400), not-found (404), or transport for everything else
    (connection errors, unexpected statuses, bodies that do not decode).
    """

    def __init__(
        self,
        base_url: str = API_URL,
        timeout: float = REQUEST_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._client = httpx.AsyncClient(base_url=base_url, timeout=timeout, transport=transport)

    async def __aenter__(self) -> "BoardApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, path: str, json=None) -> httpx.Response:
        try:
            return await self._client.request(method, path, json=json)
        except httpx.HTTPError as e:
            raise BoardTransportError(f"{method} {path} failed: {e}") from e

    def _check(self, response: httpx.Response, note_id: str | None = None, field: str = "") -> None:
        if response.status_code == 400:
            raise NoteValidationError(field, self._detail(response))
        if response.status_code == 404:
            raise NoteNotFoundError(note_id or "")
        if not response.is_success:
            raise BoardTransportError(
                f"{response.request.method} {response.request.url.path} returned {response.status_code}"
            )

    def _detail(self, response: httpx.Response) -> str | None:
        try:
            return response.json().get("detail")
        except (ValueError, AttributeError):
            return None

    def _decode(self, response: httpx.Response):
        try:
            return response.json()
        except ValueError as e:
            raise BoardTransportError(f"Malformed response body: {e}") from e

    # -----------------------
    # Endpoints
    # -----------------------

    async def list_notes(self) -> list[Note]:
        response = await self._request("GET", "/notes")
        self._check(response)
        data = self._decode(response)
        if not isinstance(data, list):
            raise BoardTransportError("Expected a list of notes")
        try:
            return [Note.model_validate(item) for item in data]
        except ValidationError as e:
            raise BoardTransportError(f"Malformed note in snapshot: {e}") from e

    async def create_note(self, draft: NoteDraft) -> Note:
        response = await self._request("POST", "/notes", json=draft.payload())
        self._check(response, field="useCase")
        try:
            return Note.model_validate(self._decode(response))
        except ValidationError as e:
            raise BoardTransportError(f"Malformed note: {e}") from e

    async def update_position(self, note_id: str, x: float, y: float) -> Note:
        response = await self._request("PATCH", f"/notes/{note_id}", json={"x": x, "y": y})
        self._check(response, note_id=note_id)
        try:
            return Note.model_validate(self._decode(response))
        except ValidationError as e:
            raise BoardTransportError(f"Malformed note: {e}") from e

    async def delete_note(self, note_id: str) -> None:
        response = await self._request("DELETE", f"/notes/{note_id}")
        self._check(response, note_id=note_id)

    async def add_comment(self, note_id: str, draft: CommentDraft) -> Comment:
        response = await self._request(
            "POST", f"/notes/{note_id}/comments", json=draft.model_dump(exclude_none=True)
        )
        self._check(response, note_id=note_id, field="text")
        try:
            return Comment.model_validate(self._decode(response))
        except ValidationError as e:
            raise BoardTransportError(f"Malformed comment: {e}") from e
