"""
Insertion-ordered, duplicate-suppressing fact collection.

Facts are compared by exact string match. When a similarity threshold is
given, near-duplicates are suppressed as well using rapidfuzz's ratio
(Levenshtein similarity percentage).
"""

from __future__ import annotations

from typing import Iterable, Iterator

from rapidfuzz import fuzz


class FactSet:
    """Ordered set of fact strings, local to one pipeline run.

    Attributes:
        similarity_threshold: Fuzzy match threshold (0-100), or None for exact matching only
    """

    def __init__(self, facts: Iterable[str] = (), similarity_threshold: int | None = None):
        self.similarity_threshold = similarity_threshold
        self._facts: dict[str, None] = {}
        self.extend(facts)

    def add(self, fact: str) -> bool:
        """Add a fact unless it is empty or already present.

        Returns:
            True if the fact was kept, False if it was suppressed
        """
        if not fact or fact in self._facts:
            return False
        if self.similarity_threshold is not None and self._is_similar(fact):
            return False
        self._facts[fact] = None
        return True

    def extend(self, facts: Iterable[str]) -> int:
        """Add several facts in order, returning how many were kept."""
        return sum(1 for fact in facts if self.add(fact))

    def to_list(self) -> list[str]:
        return list(self._facts)

    def _is_similar(self, fact: str) -> bool:
        for existing in self._facts:
            if fuzz.ratio(fact, existing) >= self.similarity_threshold:
                return True
        return False

    def __contains__(self, fact: object) -> bool:
        return fact in self._facts

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._facts))

    def __len__(self) -> int:
        return len(self._facts)

    def __repr__(self) -> str:
        return f"FactSet({self.to_list()!r})"
