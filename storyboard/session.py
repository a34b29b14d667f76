# storyboard/session.py

import asyncio
import logging
import time
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable

from storyboard.api_client import BoardApiClient
from storyboard.board_state import BoardState
from storyboard.delete_confirm import DeleteConfirmation
from storyboard.drag_session import DragController, DragOutcome
from storyboard.entities import Comment, CommentDraft, Note, NoteDraft, clean_text
from storyboard.exc import NoteValidationError, StoryboardError
from storyboard.poller import SnapshotPoller
from storyboard.preferences import DisplayNamePreference
from storyboard.settings import DELETE_CONFIRM_SECONDS, DRAG_THRESHOLD, POLL_INTERVAL
from storyboard.view_projection import BoardStats, FilterCriteria, board_stats, forest_order, project_notes

logger = logging.getLogger("storyboard_client")

NOTE_FAILED_MESSAGE = "Something went wrong. Please try again."
COMMENT_FAILED_MESSAGE = "Could not post comment. Please try again."
USE_CASE_REQUIRED_MESSAGE = "Please describe what you want AI to do."
COMMENT_REQUIRED_MESSAGE = "Comment text is required"


@dataclass
class SubmissionResult:
    value: Any = None
    error: str = ""

    @property
    def ok(self) -> bool:
        return not self.error


@dataclass
class CommentForm:
    """The comment box of the detail view. Text survives a failed post."""

    author: str = ""
    text: str = ""
    error: str = ""
    submitting: bool = False


@dataclass
class NoteForm:
    """The story submission form. Fields survive a failed submission."""

    draft: NoteDraft = field(default_factory=NoteDraft)
    error: str = ""
    submitting: bool = False


class BoardSession:
    """
    One client's view of the shared board.

    Everything runs on a single event loop. Pointer handlers are plain
    synchronous calls; network work happens in awaited calls or in tasks that
    are fired and never awaited by the caller. Every local mutation is applied
    before its request goes out, and none is rolled back when the request
    fails. The next successful poll replaces the whole collection.
    """

    def __init__(
        self,
        api: BoardApiClient,
        preferences: DisplayNamePreference | None = None,
        poll_interval: float = POLL_INTERVAL,
        drag_threshold: int = DRAG_THRESHOLD,
        delete_window: float = DELETE_CONFIRM_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.api = api
        self.preferences = preferences
        self.state = BoardState()
        self.criteria = FilterCriteria()
        self.display_name = preferences.load() if preferences else ""

        self.poller = SnapshotPoller(
            fetch=api.list_notes,
            apply=self.state.replace_all,
            interval=poll_interval,
            on_settled=self.state.finish_loading,
        )
        self.drag = DragController(
            self.state,
            on_commit=self._commit_position,
            on_select=self.open_detail,
            threshold=drag_threshold,
        )
        self.delete_confirmation = DeleteConfirmation(window=delete_window, clock=clock)
        self.note_form = NoteForm(draft=NoteDraft(author_name=self.display_name))
        self.comment_form = CommentForm(author=self.display_name)
        self._pending: set[asyncio.Task] = set()

    # -----------------------
    # Lifecycle
    # -----------------------

    def start(self) -> None:
        self.poller.start()

    async def stop(self) -> None:
        await self.poller.stop()
        await self.wait_for_pending()

    async def refresh(self) -> bool:
        return await self.poller.poll_once()

    async def wait_for_pending(self) -> None:
        """Wait for every fire-and-forget request issued so far."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    def _spawn(self, coro: Awaitable, label: str) -> asyncio.Task:
        task = asyncio.create_task(self._best_effort(coro, label))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def _best_effort(self, coro: Awaitable, label: str) -> None:
        try:
            await coro
        except StoryboardError as e:
            logger.debug(f"{label} failed, local view left as is: {e}")

    # -----------------------
    # Views
    # -----------------------

    @property
    def notes(self) -> list[Note]:
        return self.state.notes

    def visible_notes(self) -> list[Note]:
        return project_notes(self.state.notes, self.criteria)

    def forest_notes(self) -> list[Note]:
        return forest_order(self.state.notes)

    def stats(self) -> BoardStats:
        return board_stats(self.state.notes)

    def set_filters(self, **changes) -> FilterCriteria:
        self.criteria = self.criteria.update(**changes)
        return self.criteria

    def clear_filters(self) -> FilterCriteria:
        self.criteria = self.criteria.cleared()
        return self.criteria

    def open_detail(self, note_id: str) -> Note | None:
        note = self.state.select(note_id)
        if note is not None:
            self.comment_form = CommentForm(author=self.display_name)
        return note

    def close_detail(self) -> None:
        self.state.close_detail()

    # -----------------------
    # Pointer input
    # -----------------------

    def pointer_down(self, note_id: str, x: float, y: float) -> bool:
        return self.drag.pointer_down(note_id, x, y)

    def pointer_move(self, x: float, y: float) -> None:
        self.drag.pointer_move(x, y)

    def pointer_up(self, x: float | None = None, y: float | None = None) -> DragOutcome | None:
        return self.drag.pointer_up(x, y)

    def _commit_position(self, note_id: str, x: float, y: float) -> None:
        self._spawn(self.api.update_position(note_id, x, y), f"Position update for {note_id}")

    # -----------------------
    # Mutations
    # -----------------------

    def _remember_name(self, name: str) -> None:
        name = clean_text(name)
        if not name:
            return
        self.display_name = name
        if self.preferences is not None:
            self.preferences.save(name)

    async def submit_note(self, draft: NoteDraft | None = None) -> SubmissionResult:
        form = self.note_form
        if draft is not None:
            form.draft = draft
        form.error = ""

        if not clean_text(form.draft.use_case):
            form.error = USE_CASE_REQUIRED_MESSAGE
            return SubmissionResult(error=form.error)

        form.submitting = True
        try:
            note = await self.api.create_note(form.draft)
        except NoteValidationError as e:
            form.error = str(e)
            return SubmissionResult(error=form.error)
        except StoryboardError as e:
            logger.info(f"Note submission failed: {e}")
            form.error = NOTE_FAILED_MESSAGE
            return SubmissionResult(error=form.error)
        finally:
            form.submitting = False

        self.state.prepend(note)
        self._remember_name(form.draft.author_name or "")
        self.note_form = NoteForm(draft=NoteDraft(author_name=self.display_name))
        return SubmissionResult(value=note)

    async def submit_comment(self, note_id: str | None = None, form: CommentForm | None = None) -> SubmissionResult:
        form = form or self.comment_form
        if note_id is None:
            if self.state.selected is None:
                raise ValueError("No note is open and no note_id was given")
            note_id = self.state.selected.id
        form.error = ""

        if not clean_text(form.text):
            form.error = COMMENT_REQUIRED_MESSAGE
            return SubmissionResult(error=form.error)

        form.submitting = True
        try:
            comment: Comment = await self.api.add_comment(
                note_id, CommentDraft(author=form.author or None, text=form.text)
            )
        except StoryboardError as e:
            logger.info(f"Comment on {note_id} failed: {e}")
            form.error = COMMENT_FAILED_MESSAGE
            return SubmissionResult(error=form.error)
        finally:
            form.submitting = False

        self.state.append_comment(note_id, comment)
        self._remember_name(form.author)
        form.text = ""
        return SubmissionResult(value=comment)

    def press_delete(self, note_id: str) -> bool:
        """
        First press arms the note; a second press within the window deletes
        it. Returns True when the delete was issued.
        """
        if not self.delete_confirmation.press(note_id):
            return False
        self.delete_note(note_id)
        return True

    def leave_note(self, note_id: str) -> None:
        if self.delete_confirmation.is_armed(note_id):
            self.delete_confirmation.disarm()

    def delete_note(self, note_id: str) -> asyncio.Task:
        self.state.remove(note_id)
        return self._spawn(self.api.delete_note(note_id), f"Delete of {note_id}")
