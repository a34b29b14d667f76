# storyboard/store.py

import json
import logging
import math
import os
import random
import uuid

from storyboard.entities import (
    AI_REALNESS,
    AI_TYPES,
    DEFAULT_AI_REALNESS,
    DEFAULT_AI_TYPE,
    NoteDraft,
    clamp_sentiment,
    clean_text,
    coerce_sentiment,
    color_for_sentiment,
    display_name,
    parse_timestamp,
    utc_timestamp,
)

logger = logging.getLogger("storyboard_store")

# New notes are scattered across a virtual 900x600 board.
SCATTER_X = (20, 699)
SCATTER_Y = (20, 479)
ROTATION_SPREAD = 4.0


def is_number(value) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def build_note_record(draft: NoteDraft, rng: random.Random | None = None) -> dict:
    """
    Turn a submission into a full note record, assigning identity, color,
    rotation, a scattered default position and the creation timestamp.
    """
    rng = rng or random
    raw_sentiment = coerce_sentiment(draft.sentiment)
    ai_type = draft.ai_type if draft.ai_type in AI_TYPES else DEFAULT_AI_TYPE
    ai_realness = draft.ai_realness if draft.ai_realness in AI_REALNESS else DEFAULT_AI_REALNESS

    return {
        "id": str(uuid.uuid4()),
        "authorName": display_name(draft.author_name),
        "profession": clean_text(draft.profession),
        "industry": clean_text(draft.industry),
        "region": clean_text(draft.region),
        "useCase": clean_text(draft.use_case),
        "experience": clean_text(draft.experience),
        "aiType": ai_type,
        "aiRealness": ai_realness,
        "sentiment": clamp_sentiment(raw_sentiment),
        "painPoints": clean_text(draft.pain_points),
        "extraThoughts": clean_text(draft.extra_thoughts),
        "color": color_for_sentiment(raw_sentiment),
        "rotation": round(rng.uniform(-ROTATION_SPREAD, ROTATION_SPREAD), 2),
        "x": rng.randint(*SCATTER_X),
        "y": rng.randint(*SCATTER_Y),
        "comments": [],
        "createdAt": utc_timestamp(),
    }


def build_comment_record(author, text) -> dict:
    return {
        "id": str(uuid.uuid4()),
        "author": display_name(author),
        "text": clean_text(text),
        "createdAt": utc_timestamp(),
    }


class NoteStore:
    """
    Flat JSON file holding every note and its comments.

    Every operation reads the whole document, mutates it in memory and writes
    the whole document back. There is no locking: two concurrent writers can
    each start from the same snapshot and the last one to write wins.
    """

    def __init__(self, path: str, rng: random.Random | None = None):
        self.path = path
        self.rng = rng

    def _ensure_dir(self) -> None:
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)

    def read(self) -> dict:
        try:
            self._ensure_dir()
            if not os.path.exists(self.path):
                initial = {"notes": []}
                with open(self.path, "w", encoding="utf-8") as f:
                    json.dump(initial, f, indent=2)
                return initial
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(f"[STORE] Could not read {self.path}: {e}. Serving an empty board.")
            return {"notes": []}

        if not isinstance(data, dict) or not isinstance(data.get("notes"), list):
            logger.warning(f"[STORE] Unexpected document shape in {self.path}. Serving an empty board.")
            return {"notes": []}
        return data

    def write(self, data: dict) -> None:
        try:
            self._ensure_dir()
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
        except OSError as e:
            logger.error(f"[STORE] Failed to write {self.path}: {e}")

    # -----------------------
    # Operations
    # -----------------------

    def list_notes(self) -> list[dict]:
        notes = self.read()["notes"]
        return sorted(notes, key=lambda n: parse_timestamp(n.get("createdAt")), reverse=True)

    def create_note(self, draft: NoteDraft) -> dict:
        data = self.read()
        note = build_note_record(draft, self.rng)
        data["notes"].append(note)
        self.write(data)
        logger.info(f"[STORE] Created note {note['id']}")
        return note

    def update_position(self, note_id: str, changes: dict) -> dict | None:
        """
        Apply ``x``/``y`` from ``changes`` when they are real numbers. Anything
        else in ``changes`` is ignored. Returns None when the note is unknown.
        """
        data = self.read()
        note = next((n for n in data["notes"] if n.get("id") == note_id), None)
        if note is None:
            return None
        for axis in ("x", "y"):
            if is_number(changes.get(axis)):
                note[axis] = changes[axis]
        self.write(data)
        return note

    def delete_note(self, note_id: str) -> bool:
        data = self.read()
        before = len(data["notes"])
        data["notes"] = [n for n in data["notes"] if n.get("id") != note_id]
        if len(data["notes"]) == before:
            return False
        self.write(data)
        logger.info(f"[STORE] Deleted note {note_id}")
        return True

    def add_comment(self, note_id: str, author, text) -> dict | None:
        data = self.read()
        note = next((n for n in data["notes"] if n.get("id") == note_id), None)
        if note is None:
            return None
        comment = build_comment_record(author, text)
        note.setdefault("comments", []).append(comment)
        self.write(data)
        return comment
