"""Per-kind integer id allocation for sections, variations and questions."""
from __future__ import annotations

from typing import Dict, Iterable, Tuple

from unitalks.models import Section

KINDS: Tuple[str, ...] = ("section", "variation", "question")


class IdAllocator:
    """Issue strictly increasing ids, one independent counter per entity kind.

    Each document being edited owns its own allocator; ids from one allocator
    say nothing about ids from another.
    """

    def __init__(self) -> None:
        self._counters: Dict[str, int] = dict.fromkeys(KINDS, 0)

    def next(self, kind: str) -> int:
        self._check_kind(kind)
        self._counters[kind] += 1
        return self._counters[kind]

    def peek(self, kind: str) -> int:
        """Return the last id issued for *kind* (0 if none)."""
        self._check_kind(kind)
        return self._counters[kind]

    def reset_all(self) -> None:
        for kind in KINDS:
            self._counters[kind] = 0

    def resync(self, sections: Iterable[Section]) -> None:
        """Raise every counter to the highest id found in *sections*.

        Counters are zeroed first, so the result depends only on the tree:
        the next id of each kind is exactly the observed maximum plus one.
        """
        self.reset_all()
        for section in sections or []:
            self._raise_to("section", section.id)
            for variation in section.variations:
                self._raise_to("variation", variation.id)
                for question in variation.questions:
                    self._raise_to("question", question.id)

    def _raise_to(self, kind: str, value: int) -> None:
        if value > self._counters[kind]:
            self._counters[kind] = value

    @staticmethod
    def _check_kind(kind: str) -> None:
        if kind not in KINDS:
            raise ValueError(f"Unknown entity kind {kind!r}; expected one of {list(KINDS)}")
