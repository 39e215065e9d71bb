"""In-memory editing state for one script.

The session owns its own allocator, so two sessions never share id
sequences.  Loading a stored payload deep-copies it and resyncs the
allocator against the loaded sections before any new entity is created.
"""
from __future__ import annotations

import logging
from datetime import datetime
from typing import List, Optional

from unitalks.factory import EntityFactory
from unitalks.ids import IdAllocator
from unitalks.models import Guest, Payload, Question, Section, SectionType, Variation
from unitalks.payload import build_payload
from unitalks.textutil import deep_clone

logger = logging.getLogger(__name__)


class EditingSession:
    def __init__(
        self,
        guest: Optional[Guest] = None,
        sections: Optional[List[Section]] = None,
        *,
        title: str = "",
        notes: str = "",
        script_id: Optional[str] = None,
        allocator: Optional[IdAllocator] = None,
    ) -> None:
        self.factory = EntityFactory(allocator)
        self.guest = guest if guest is not None else Guest()
        self.sections: List[Section] = sections if sections is not None else []
        self.title = title
        self.notes = notes
        self.script_id = script_id
        if sections:
            self.factory.allocator.resync(self.sections)

    @classmethod
    def from_payload(cls, payload: Payload) -> "EditingSession":
        """Open a stored payload for editing without aliasing it."""
        session = cls(
            guest=deep_clone(payload.guest),
            sections=[deep_clone(s) for s in payload.sections],
            title=payload.title,
            notes=payload.notes,
            script_id=payload.id,
        )
        logger.debug("Opened script %s with %d sections", payload.id, len(session.sections))
        return session

    # ── Lookup ────────────────────────────────────────────────────────────────

    def find_section(self, section_id: int) -> Section:
        for section in self.sections:
            if section.id == section_id:
                return section
        raise KeyError(f"Section {section_id} does not exist")

    def find_variation(self, section_id: int, variation_id: int) -> Variation:
        for variation in self.find_section(section_id).variations:
            if variation.id == variation_id:
                return variation
        raise KeyError(f"Variation {variation_id} does not exist in section {section_id}")

    # ── Edits ─────────────────────────────────────────────────────────────────

    def add_section(
        self,
        name: str = "New Section",
        time: int = 5,
        type: SectionType = "qa",
    ) -> Section:
        section = self.factory.make_section(name, time, type)
        self.sections.append(section)
        return section

    def add_variation(self, section_id: int, label: str = "Questions") -> Variation:
        variation = self.factory.make_variation(label)
        self.find_section(section_id).variations.append(variation)
        return variation

    def add_question(
        self,
        section_id: int,
        variation_id: int,
        text: str = "",
        tip: str = "",
    ) -> Question:
        question = self.factory.make_question(text, tip)
        self.find_variation(section_id, variation_id).questions.append(question)
        return question

    def remove_section(self, section_id: int) -> None:
        self.sections = [s for s in self.sections if s.id != section_id]

    # ── Snapshot ──────────────────────────────────────────────────────────────

    def snapshot(self, now: Optional[datetime] = None) -> Payload:
        """Build a payload; later snapshots keep the same script id."""
        payload = build_payload(
            self.guest,
            self.sections,
            title=self.title,
            notes=self.notes,
            id=self.script_id,
            now=now,
        )
        self.script_id = payload.id
        return payload
