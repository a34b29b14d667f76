# storyboard/delete_confirm.py

import time
from typing import Callable

from storyboard.settings import DELETE_CONFIRM_SECONDS


class DeleteConfirmation:
    """
    Two-step delete: the first press arms the note, a second press on the
    same note inside the window confirms. The arm lapses on its own once the
    window has passed.
    """

    def __init__(
        self,
        window: float = DELETE_CONFIRM_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.window = window
        self.clock = clock
        self._note_id: str | None = None
        self._expires_at = 0.0

    @property
    def armed_for(self) -> str | None:
        if self._note_id is not None and self.clock() >= self._expires_at:
            self.disarm()
        return self._note_id

    def is_armed(self, note_id: str) -> bool:
        return self.armed_for == note_id

    def press(self, note_id: str) -> bool:
        """Returns True when this press confirms the delete."""
        if self.is_armed(note_id):
            self.disarm()
            return True
        self._note_id = note_id
        self._expires_at = self.clock() + self.window
        return False

    def disarm(self) -> None:
        self._note_id = None
        self._expires_at = 0.0
