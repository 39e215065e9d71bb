"""Payload assembly — snapshot an editing state into a versioned document.

All functions are pure apart from reading the clock, and the clock can be
pinned with ``now=`` for deterministic output.
"""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional, Sequence

from unitalks.models import Guest, Payload, ScriptMeta, Section, coerce_minutes
from unitalks.textutil import deep_clone

PAYLOAD_VERSION = 1
SCRIPT_ID_PREFIX = "ut-"
TITLE_SUFFIX = " — UniTalks"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(moment: datetime) -> str:
    """ISO 8601 in UTC with millisecond precision and a ``Z`` suffix."""
    moment = moment.astimezone(timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


def new_script_id(now: Optional[datetime] = None) -> str:
    moment = now or utc_now()
    return f"{SCRIPT_ID_PREFIX}{int(moment.timestamp() * 1000)}"


def compute_meta(sections: Sequence[Section]) -> ScriptMeta:
    """Derive question count, total minutes and section count."""
    return ScriptMeta(
        total_questions=sum(section.question_count() for section in sections),
        total_time=sum(coerce_minutes(section.time) for section in sections),
        section_count=len(sections),
    )


def build_payload(
    guest: Guest,
    sections: Sequence[Section],
    *,
    title: str = "",
    notes: str = "",
    id: Optional[str] = None,
    now: Optional[datetime] = None,
) -> Payload:
    """Snapshot *guest* and *sections* into a new Payload.

    Args:
        guest:    Guest details; deep-copied into the payload.
        sections: Ordered sections; deep-copied into the payload.
        title:    Defaults to ``"<guest name> — UniTalks"`` when empty.
        notes:    Free-form notes stored alongside the script.
        id:       Existing script id to keep (re-save); a fresh ``ut-<millis>``
                  id is generated when empty.
        now:      Timestamp to use instead of the current time.

    Returns:
        A Payload that shares no mutable state with the inputs.
    """
    moment = now or utc_now()
    return Payload(
        id=id or new_script_id(moment),
        title=title or f"{guest.name}{TITLE_SUFFIX}",
        notes=notes,
        version=PAYLOAD_VERSION,
        saved_at=format_timestamp(moment),
        guest=deep_clone(guest),
        sections=[deep_clone(section) for section in sections],
        meta=compute_meta(sections),
    )
