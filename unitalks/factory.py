"""Entity constructors for sections, variations and questions.

All ids come from the factory's ``IdAllocator``; nothing else is touched.
A collection argument of ``None`` gets one default child, an explicit empty
list is kept empty.
"""
from __future__ import annotations

from typing import List, Optional

from unitalks.ids import IdAllocator
from unitalks.models import Question, Section, SectionType, Variation


class EntityFactory:
    def __init__(self, allocator: Optional[IdAllocator] = None) -> None:
        self.allocator = allocator if allocator is not None else IdAllocator()

    def make_question(self, text: str = "", tip: str = "") -> Question:
        return Question(id=self.allocator.next("question"), text=text, tip=tip)

    def make_variation(
        self,
        label: str = "Questions",
        questions: Optional[List[Question]] = None,
    ) -> Variation:
        var_id = self.allocator.next("variation")
        if questions is None:
            questions = [self.make_question()]
        return Variation(id=var_id, label=label, collapsed=False, questions=questions)

    def make_section(
        self,
        name: str = "New Section",
        time: int = 5,
        type: SectionType = "qa",
        variations: Optional[List[Variation]] = None,
    ) -> Section:
        section_id = self.allocator.next("section")
        if variations is None:
            variations = [self.make_variation()]
        return Section(
            id=section_id,
            name=name,
            time=time,
            type=type,
            collapsed=False,
            variations=variations,
        )
