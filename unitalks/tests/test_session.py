"""Tests for EditingSession: edits, snapshots and reopening stored payloads."""
from __future__ import annotations

import pytest

from unitalks.models import Guest
from unitalks.session import EditingSession


def _session() -> EditingSession:
    session = EditingSession(guest=Guest(name="Ivan"), title="Pilot")
    session.add_section("Intro", 2, "intro")
    session.add_section("Story", 10, "topic")
    return session


class TestEdits:

    def test_add_variation_and_question(self):
        session = _session()
        section = session.sections[1]
        variation = session.add_variation(section.id, "Deeper")
        question = session.add_question(section.id, variation.id, "What broke first?")

        assert section.variations[-1] is variation
        assert variation.questions[-1] is question
        assert question.text == "What broke first?"

    def test_unknown_section_raises(self):
        with pytest.raises(KeyError):
            _session().add_variation(999)

    def test_remove_section(self):
        session = _session()
        first_id = session.sections[0].id
        session.remove_section(first_id)
        assert [s.name for s in session.sections] == ["Story"]


class TestSnapshot:

    def test_resave_keeps_script_id(self):
        session = _session()
        first = session.snapshot()
        session.add_section()
        second = session.snapshot()
        assert first.id == second.id
        assert second.meta.section_count == 3

    def test_snapshot_meta(self):
        payload = _session().snapshot()
        assert payload.meta.total_time == 12
        assert payload.meta.total_questions == 2
        assert payload.title == "Pilot"

    def test_time_assigned_as_text_is_coerced(self):
        session = _session()
        section = session.add_section()
        section.time = "10"
        payload = session.snapshot()
        assert section.time == 10
        assert payload.meta.total_time == 22

    def test_unreadable_assigned_time_counts_as_zero(self):
        session = _session()
        session.sections[1].time = "abc"
        assert session.snapshot().meta.total_time == 2


class TestFromPayload:

    def test_reopened_session_does_not_collide_with_loaded_ids(self):
        payload = _session().snapshot()
        reopened = EditingSession.from_payload(payload)

        new_section = reopened.add_section()
        loaded_ids = {s.id for s in payload.sections}
        assert new_section.id == max(loaded_ids) + 1

        loaded_qids = {q.id for s in payload.sections for v in s.variations for q in v.questions}
        assert new_section.variations[0].questions[0].id == max(loaded_qids) + 1

    def test_edits_do_not_touch_payload(self):
        payload = _session().snapshot()
        reopened = EditingSession.from_payload(payload)
        reopened.sections[0].name = "Changed"
        reopened.guest.name = "Other"
        assert payload.sections[0].name == "Intro"
        assert payload.guest.name == "Ivan"
        assert reopened.script_id == payload.id
