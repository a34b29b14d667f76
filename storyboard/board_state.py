# storyboard/board_state.py

import logging
from typing import Callable, Iterable

from storyboard.entities import Comment, Note

logger = logging.getLogger("storyboard_client")

Listener = Callable[["BoardState"], None]


class BoardState:
    """
    The client's local collection of notes plus the note open in the detail
    view.

    Snapshots from the poller replace the collection wholesale. Local
    mutations patch it in place between polls, always by replacing the entry
    with a matching id, so no id ever appears twice. The detail view keeps its
    own copy of the note it was opened with; only comment appends are mirrored
    into it.
    """

    def __init__(self, notes: Iterable[Note] = ()) -> None:
        self.notes: list[Note] = _unique(notes)
        self.selected: Note | None = None
        #: True until the first poll attempt settles.
        self.loading = True
        self._listeners: list[Listener] = []

    # -----------------------
    # Observation
    # -----------------------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _changed(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    def find(self, note_id: str) -> Note | None:
        return next((n for n in self.notes if n.id == note_id), None)

    def ids(self) -> list[str]:
        return [n.id for n in self.notes]

    # -----------------------
    # Snapshot
    # -----------------------

    def replace_all(self, notes: Iterable[Note]) -> None:
        self.notes = _unique(notes)
        self._changed()

    def finish_loading(self) -> None:
        if self.loading:
            self.loading = False
            self._changed()

    # -----------------------
    # Optimistic mutations
    # -----------------------

    def prepend(self, note: Note) -> None:
        self.notes = [note] + [n for n in self.notes if n.id != note.id]
        self._changed()

    def remove(self, note_id: str) -> bool:
        before = len(self.notes)
        self.notes = [n for n in self.notes if n.id != note_id]
        if self.selected is not None and self.selected.id == note_id:
            self.selected = None
        removed = len(self.notes) != before
        self._changed()
        return removed

    def append_comment(self, note_id: str, comment: Comment) -> bool:
        note = self.find(note_id)
        if note is not None:
            self._replace(_with_comment(note, comment))
        if self.selected is not None and self.selected.id == note_id:
            self.selected = _with_comment(self.selected, comment)
        self._changed()
        return note is not None

    def move(self, note_id: str, x: float, y: float) -> Note | None:
        note = self.find(note_id)
        if note is None:
            return None
        moved = note.model_copy(update={"x": x, "y": y})
        self._replace(moved)
        self._changed()
        return moved

    def _replace(self, note: Note) -> None:
        self.notes = [note if n.id == note.id else n for n in self.notes]

    # -----------------------
    # Detail view
    # -----------------------

    def select(self, note_id: str) -> Note | None:
        note = self.find(note_id)
        if note is not None:
            self.selected = note
            self._changed()
        return note

    def close_detail(self) -> None:
        if self.selected is not None:
            self.selected = None
            self._changed()


def _unique(notes: Iterable[Note]) -> list[Note]:
    seen = set()
    result = []
    for note in notes:
        if note.id in seen:
            logger.debug(f"Dropping duplicate note id {note.id} from snapshot")
            continue
        seen.add(note.id)
        result.append(note)
    return result


def _with_comment(note: Note, comment: Comment) -> Note:
    if any(c.id == comment.id for c in note.comments):
        return note
    return note.model_copy(update={"comments": [*note.comments, comment]})
