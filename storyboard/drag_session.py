# storyboard/drag_session.py
"""
Pointer-driven position editing for sticky notes.

One gesture at a time per client:

    IDLE --pointer_down--> ARMED --moved past threshold--> DRAGGING
    ARMED    --pointer_up--> SELECTION_TRIGGERED --> IDLE   (detail opens, no write)
    DRAGGING --pointer_up--> COMMITTING          --> IDLE   (one position write)

The drag-vs-click decision is the displacement threshold only; timing plays
no part. Once the threshold has been crossed the gesture stays a drag even if
the pointer comes back to where it started.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable

from storyboard.board_state import BoardState
from storyboard.settings import DRAG_THRESHOLD

logger = logging.getLogger("storyboard_client")


class DragState(str, Enum):
    IDLE = "idle"
    ARMED = "armed"
    DRAGGING = "dragging"
    COMMITTING = "committing"
    SELECTION_TRIGGERED = "selection_triggered"


@dataclass
class DragSession:
    note_id: str
    #: Pointer position at pointer-down.
    origin_x: float
    origin_y: float
    #: Note position at pointer-down.
    start_x: float
    start_y: float
    pointer_x: float
    pointer_y: float
    moved: bool = False

    def displacement(self) -> tuple[float, float]:
        return self.pointer_x - self.origin_x, self.pointer_y - self.origin_y

    def target(self) -> tuple[float, float]:
        dx, dy = self.displacement()
        return max(0, self.start_x + dx), max(0, self.start_y + dy)


@dataclass(frozen=True)
class DragOutcome:
    note_id: str
    state: DragState
    x: float | None = None
    y: float | None = None

    @property
    def committed(self) -> bool:
        return self.state is DragState.COMMITTING


class DragController:
    """
    Owns the single live :class:`DragSession` and turns pointer events into
    optimistic moves on the :class:`BoardState`.

    ``on_commit(note_id, x, y)`` is called exactly once per drag, on release.
    ``on_select(note_id)`` is called for a release that never crossed the
    threshold.
    """

    def __init__(
        self,
        state: BoardState,
        on_commit: Callable[[str, float, float], None],
        on_select: Callable[[str], None],
        threshold: int = DRAG_THRESHOLD,
    ) -> None:
        self.board = state
        self.on_commit = on_commit
        self.on_select = on_select
        self.threshold = threshold
        self.session: DragSession | None = None

    @property
    def state(self) -> DragState:
        if self.session is None:
            return DragState.IDLE
        return DragState.DRAGGING if self.session.moved else DragState.ARMED

    @property
    def active_note_id(self) -> str | None:
        return self.session.note_id if self.session else None

    def pointer_down(self, note_id: str, x: float, y: float) -> bool:
        if self.session is not None:
            logger.debug(f"Ignoring pointer-down on {note_id}: {self.session.note_id} is still held")
            return False
        note = self.board.find(note_id)
        if note is None:
            return False
        self.session = DragSession(
            note_id=note_id,
            origin_x=x,
            origin_y=y,
            start_x=note.x,
            start_y=note.y,
            pointer_x=x,
            pointer_y=y,
        )
        return True

    def pointer_move(self, x: float, y: float) -> None:
        session = self.session
        if session is None:
            return
        session.pointer_x = x
        session.pointer_y = y
        if not session.moved:
            dx, dy = session.displacement()
            if abs(dx) >= self.threshold or abs(dy) >= self.threshold:
                session.moved = True
        if session.moved:
            self.board.move(session.note_id, *session.target())

    def pointer_up(self, x: float | None = None, y: float | None = None) -> DragOutcome | None:
        if self.session is None:
            return None
        if x is not None and y is not None:
            self.pointer_move(x, y)

        session = self.session
        self.session = None

        if session.moved:
            final_x, final_y = session.target()
            outcome = DragOutcome(session.note_id, DragState.COMMITTING, final_x, final_y)
            self.on_commit(session.note_id, final_x, final_y)
        else:
            outcome = DragOutcome(session.note_id, DragState.SELECTION_TRIGGERED)
            self.on_select(session.note_id)
        return outcome

    def cancel(self) -> None:
        """Drop the live session without committing or selecting."""
        self.session = None
