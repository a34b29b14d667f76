# storyboard/view_projection.py

from dataclasses import dataclass, replace
from typing import Iterable

from storyboard.entities import Note, parse_timestamp

SENTIMENT_BUCKETS = ("optimistic", "neutral", "pessimistic")


@dataclass(frozen=True)
class FilterCriteria:
    """Empty strings mean "no restriction" for that criterion."""

    industry: str = ""
    ai_type: str = ""
    realness: str = ""
    sentiment: str = ""
    search: str = ""

    @property
    def is_active(self) -> bool:
        return any((self.industry, self.ai_type, self.realness, self.sentiment, self.search))

    def update(self, **changes) -> "FilterCriteria":
        return replace(self, **changes)

    def cleared(self) -> "FilterCriteria":
        return FilterCriteria()


def in_sentiment_bucket(sentiment: int, bucket: str) -> bool:
    if bucket == "optimistic":
        return sentiment >= 1
    if bucket == "pessimistic":
        return sentiment <= -1
    if bucket == "neutral":
        return sentiment == 0
    return True


def matches_search(note: Note, search: str) -> bool:
    query = search.lower()
    fields = (note.use_case, note.author_name, note.industry, note.experience)
    return any(query in field.lower() for field in fields)


def matches(note: Note, criteria: FilterCriteria) -> bool:
    if criteria.industry and note.industry != criteria.industry:
        return False
    if criteria.ai_type and note.ai_type != criteria.ai_type:
        return False
    if criteria.realness and note.ai_realness != criteria.realness:
        return False
    if criteria.sentiment and not in_sentiment_bucket(note.sentiment, criteria.sentiment):
        return False
    if criteria.search and not matches_search(note, criteria.search):
        return False
    return True


def project_notes(notes: Iterable[Note], criteria: FilterCriteria) -> list[Note]:
    return [note for note in notes if matches(note, criteria)]


def forest_order(notes: Iterable[Note]) -> list[Note]:
    """Oldest first, the order trees are grown in."""
    return sorted(notes, key=lambda n: parse_timestamp(n.created_at))


@dataclass(frozen=True)
class BoardStats:
    total: int
    optimistic: int
    pessimistic: int
    industries: int


def board_stats(notes: Iterable[Note]) -> BoardStats:
    notes = list(notes)
    return BoardStats(
        total=len(notes),
        optimistic=sum(1 for n in notes if n.sentiment > 0),
        pessimistic=sum(1 for n in notes if n.sentiment < 0),
        industries=len({n.industry for n in notes if n.industry}),
    )
