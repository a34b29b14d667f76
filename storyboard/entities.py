# storyboard/entities.py
from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

AI_TYPES = ("generative", "predictive", "automation", "conversational", "unsure")
AI_REALNESS = ("using", "possible", "imagined")
DEFAULT_AI_TYPE = "unsure"
DEFAULT_AI_REALNESS = "imagined"

SENTIMENT_MIN = -2
SENTIMENT_MAX = 2

SENTIMENT_COLORS = {
    -2: "#A8D8F0",  # sky blue  - pessimistic
    -1: "#C9BAED",  # lavender  - skeptical
    0: "#A8EDCE",   # mint      - neutral
    1: "#FFE566",   # yellow    - optimistic
    2: "#FFC48C",   # peach     - very optimistic
}
DEFAULT_NOTE_COLOR = "#FEF9C3"

ANONYMOUS = "Anonymous"


class WireModel(BaseModel):
    """
    Base for everything that crosses the HTTP boundary.

    Python attributes are snake_case; the JSON on the wire (and in the store
    file) is camelCase.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True)


class Comment(WireModel):
    model_config = ConfigDict(frozen=True)

    id: str
    author: str = ANONYMOUS
    text: str
    created_at: str


class Note(WireModel):
    model_config = ConfigDict(frozen=True)

    id: str
    author_name: str = ANONYMOUS
    profession: str = ""
    industry: str = ""
    region: str = ""
    use_case: str = ""
    experience: str = ""
    ai_type: str = DEFAULT_AI_TYPE
    ai_realness: str = DEFAULT_AI_REALNESS
    sentiment: int = 0
    pain_points: str = ""
    extra_thoughts: str = ""
    color: str = DEFAULT_NOTE_COLOR
    rotation: float = 0.0
    x: float = 0.0
    y: float = 0.0
    comments: list[Comment] = Field(default_factory=list)
    created_at: str


class NoteDraft(WireModel):
    """Body of ``POST /notes``. Everything is optional except a non-blank use case."""

    author_name: Optional[str] = None
    profession: Optional[str] = None
    industry: Optional[str] = None
    region: Optional[str] = None
    use_case: Optional[str] = None
    experience: Optional[str] = None
    ai_type: Optional[str] = None
    ai_realness: Optional[str] = None
    sentiment: Any = 0
    pain_points: Optional[str] = None
    extra_thoughts: Optional[str] = None

    def payload(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


class CommentDraft(WireModel):
    author: Optional[str] = None
    text: Optional[str] = None


def coerce_sentiment(value) -> int | None:
    """
    Parse a submitted sentiment.

    Missing or empty means neutral. Anything that is not an integral number
    returns None.
    """
    if value is None or value == "":
        return 0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not number.is_integer():
        return None
    return int(number)


def color_for_sentiment(sentiment: int | None) -> str:
    return SENTIMENT_COLORS.get(sentiment, DEFAULT_NOTE_COLOR)


def clamp_sentiment(sentiment: int | None) -> int:
    if sentiment is None:
        return 0
    return max(SENTIMENT_MIN, min(SENTIMENT_MAX, sentiment))


def clean_text(value) -> str:
    if value is None:
        return ""
    return str(value).strip()


def display_name(value) -> str:
    return clean_text(value) or ANONYMOUS


def utc_timestamp() -> str:
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_timestamp(value) -> datetime:
    try:
        parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError:
        return datetime.min.replace(tzinfo=timezone.utc)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed
