# storyboard/exc.py


class StoryboardError(Exception):
    """Base class for board errors surfaced to the client."""


class NoteValidationError(StoryboardError):
    """
    A required text field is missing or blank.

    Raised before any request is made when the client can tell, and mapped
    from HTTP 400 otherwise.
    """

    def __init__(self, field: str, message: str | None = None) -> None:
        #: The wire name of the offending field.
        self.field = field
        super().__init__(message or f"'{field}' is required")


class NoteNotFoundError(StoryboardError):
    """The note identity is no longer present in the store."""

    def __init__(self, note_id: str) -> None:
        #: The identity that was not found.
        self.note_id = note_id
        super().__init__(f"Note not found: {note_id}")


class BoardTransportError(StoryboardError):
    """Network failure, unexpected status, or an undecodable response body."""
