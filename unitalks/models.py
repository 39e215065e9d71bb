"""Script data models — the interview outline and its stored projections.

Attributes are snake_case in Python; the JSON wire format (exported files and
the key-value store) uses the camelCase keys the browser editor has always
written (``savedAt``, ``totalQuestions`` ...).  Dump with ``by_alias=True``.
extra="ignore" on all models: unknown keys in imported files are dropped
rather than rejected.  Assignments are validated as well, so values set by
editing code get the same coercion as loaded ones.
"""
from __future__ import annotations

import math
import re
from typing import Any, List, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from unitalks.textutil import sanitize_filename

SectionType = Literal["intro", "qa", "topic", "outro"]

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")

_MODEL_CONFIG = ConfigDict(
    extra="ignore",
    alias_generator=to_camel,
    populate_by_name=True,
    validate_assignment=True,
)


def coerce_minutes(value: Any) -> int:
    """Read a section duration the lenient way: leading integer, else 0."""
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else 0
    if isinstance(value, str):
        m = _LEADING_INT.match(value)
        return int(m.group(1)) if m else 0
    return 0


# ── Editing entities ──────────────────────────────────────────────────────────


class Question(BaseModel):
    """A single question with an optional interviewer tip."""

    model_config = _MODEL_CONFIG

    id: int
    text: str = ""
    tip: str = ""


class Variation(BaseModel):
    """One alternative phrasing/grouping of questions within a section."""

    model_config = _MODEL_CONFIG

    id: int
    label: str = "Questions"
    collapsed: bool = False
    questions: List[Question] = []


class Section(BaseModel):
    """A named, timed block of the interview."""

    model_config = _MODEL_CONFIG

    id: int
    name: str = "New Section"
    time: int = 5  # minutes
    type: SectionType = "qa"
    collapsed: bool = False
    variations: List[Variation] = []

    @field_validator("time", mode="before")
    @classmethod
    def lenient_time(cls, value: Any) -> int:
        return coerce_minutes(value)

    def question_count(self) -> int:
        return sum(len(v.questions) for v in self.variations)


class Guest(BaseModel):
    model_config = _MODEL_CONFIG

    name: str = ""
    role: str = ""
    achievements: List[str] = []


# ── Stored documents ──────────────────────────────────────────────────────────


class ScriptMeta(BaseModel):
    """Derived totals; recomputed whenever a payload is built."""

    model_config = _MODEL_CONFIG

    total_questions: int = 0
    total_time: int = 0
    section_count: int = 0


class Payload(BaseModel):
    """A complete, versioned, timestamped script document."""

    model_config = _MODEL_CONFIG

    id: str
    title: str = ""
    notes: str = ""
    version: Literal[1] = 1
    saved_at: str  # ISO 8601
    guest: Guest = Field(default_factory=Guest)
    sections: List[Section]
    meta: ScriptMeta = Field(default_factory=ScriptMeta)

    def to_json_dict(self) -> dict:
        """Return the camelCase, JSON-ready representation."""
        return self.model_dump(mode="json", by_alias=True)


class ManifestEntry(BaseModel):
    """Listing record for a stored script: a Payload without section bodies."""

    model_config = _MODEL_CONFIG

    id: str
    filename: str
    title: str = ""
    notes: str = ""
    saved_at: str = ""
    meta: ScriptMeta = Field(default_factory=ScriptMeta)
    guest: Guest = Field(default_factory=Guest)

    @classmethod
    def from_payload(cls, payload: Payload) -> "ManifestEntry":
        return cls(
            id=payload.id,
            filename=sanitize_filename(payload.title) + ".json",
            title=payload.title,
            notes=payload.notes,
            saved_at=payload.saved_at,
            meta=payload.meta.model_copy(),
            guest=Guest(
                name=payload.guest.name,
                role=payload.guest.role,
                achievements=list(payload.guest.achievements),
            ),
        )
