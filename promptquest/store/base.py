"""
Base Question Store.

Provides the abstract base for both storage backends. Callers hold a
QuestionStore and never branch on which backend sits behind it; the
capability set is identical, only the query dialect and the consistency
guarantees differ.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator
from contextlib import contextmanager
from typing import ClassVar

from .models import DISTINCT_FIELDS, Question, QuestionFilters


class QuestionStore(ABC):
    """
    Abstract base class for question stores.

    Stores are responsible for:
    1. Assigning ids and persisting questions
    2. Filtered, randomized, limited reads
    3. Aggregate reads (counts, distinct tags, difficulty histogram)

    Subclasses must implement every abstract method below. None of them
    retries: backend faults surface as StorageError with the driver
    exception chained.
    """

    name: ClassVar[str] = "base_store"
    # True when batch() is all-or-nothing
    transactional: ClassVar[bool] = False

    # ========================================
    # Writes
    # ========================================

    @abstractmethod
    def save(self, question: Question) -> int:
        """
        Persist a question, assigning an id if it has none.

        Returns:
            The effective id (also written back to `question.id`)
        """

    @abstractmethod
    def delete_all(self) -> None:
        """Delete every question. Succeeds on an empty store."""

    @contextmanager
    def batch(self) -> Iterator[None]:
        """
        Group a series of saves.

        The default scope adds nothing: every save stands on its own.
        """
        yield

    # ========================================
    # Reads
    # ========================================

    @abstractmethod
    def find_all(self) -> list[Question]:
        """Snapshot of every stored question."""

    @abstractmethod
    def find_by_id(self, question_id: int) -> Question | None:
        """Look up one question; None when the id is unknown."""

    @abstractmethod
    def find_random(self, limit: int, filters: QuestionFilters | None = None) -> list[Question]:
        """
        Randomized, filtered read without replacement.

        Args:
            limit: Maximum number of questions (<= 0 yields an empty list)
            filters: Conjunctive filters (None for the whole bank)

        Returns:
            At most `limit` distinct questions; empty when nothing matches
        """

    @abstractmethod
    def count_all(self) -> int:
        """Number of stored questions."""

    @abstractmethod
    def distinct_values(self, field: str) -> list[str]:
        """Sorted distinct non-empty values of skill, area or degree."""

    @abstractmethod
    def difficulty_distribution(self) -> dict[int, int]:
        """Question count per stored difficulty level."""

    # ========================================
    # Helpers
    # ========================================

    @staticmethod
    def _check_distinct_field(field: str) -> str:
        if field not in DISTINCT_FIELDS:
            raise ValueError(
                f"Unsupported distinct field: {field!r} (expected one of {', '.join(DISTINCT_FIELDS)})"
            )
        return field

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name}>"
