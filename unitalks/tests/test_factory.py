"""Tests for EntityFactory defaults and id allocation."""
from __future__ import annotations

from unitalks.factory import EntityFactory
from unitalks.ids import IdAllocator


class TestMakeQuestion:

    def test_defaults(self):
        q = EntityFactory().make_question()
        assert (q.id, q.text, q.tip) == (1, "", "")

    def test_text_and_tip(self):
        q = EntityFactory().make_question("Why?", "Let them pause")
        assert q.text == "Why?"
        assert q.tip == "Let them pause"


class TestMakeVariation:

    def test_default_seeds_one_empty_question(self):
        v = EntityFactory().make_variation()
        assert v.label == "Questions"
        assert v.collapsed is False
        assert len(v.questions) == 1
        assert v.questions[0].text == ""

    def test_explicit_questions_kept(self):
        f = EntityFactory()
        qs = [f.make_question("a"), f.make_question("b")]
        v = f.make_variation("Alt", qs)
        assert [q.text for q in v.questions] == ["a", "b"]

    def test_explicit_empty_list_stays_empty(self):
        v = EntityFactory().make_variation(questions=[])
        assert v.questions == []


class TestMakeSection:

    def test_defaults(self):
        s = EntityFactory().make_section()
        assert s.name == "New Section"
        assert s.time == 5
        assert s.type == "qa"
        assert s.collapsed is False
        assert len(s.variations) == 1
        assert len(s.variations[0].questions) == 1

    def test_custom_fields(self):
        s = EntityFactory().make_section("Intro", 2, "intro")
        assert (s.name, s.time, s.type) == ("Intro", 2, "intro")

    def test_ids_unique_and_increasing_across_many_calls(self):
        f = EntityFactory()
        sections = [f.make_section() for _ in range(5)]
        sections.append(f.make_section(variations=[f.make_variation(), f.make_variation()]))

        section_ids = [s.id for s in sections]
        variation_ids = [v.id for s in sections for v in s.variations]
        question_ids = [q.id for s in sections for v in s.variations for q in v.questions]

        for ids in (section_ids, variation_ids, question_ids):
            assert len(set(ids)) == len(ids)
        assert section_ids == sorted(section_ids)

    def test_uses_supplied_allocator(self):
        alloc = IdAllocator()
        alloc.next("section")
        s = EntityFactory(alloc).make_section()
        assert s.id == 2
        assert alloc.peek("variation") == 1
        assert alloc.peek("question") == 1
