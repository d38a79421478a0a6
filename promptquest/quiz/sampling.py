"""
Sampling engine: randomized, filter-constrained question subsets.

Selection is without replacement inside one call and unseeded across calls,
so two identical requests usually return different subsets.
"""
from __future__ import annotations

from loguru import logger

from promptquest.store.base import QuestionStore
from promptquest.store.models import Question, QuestionFilters


class SamplingEngine:
    """Draws random questions from the active store."""

    def __init__(self, store: QuestionStore):
        self.store = store

    def sample(self, limit: int, filters: QuestionFilters | None = None) -> list[Question]:
        """
        Select up to `limit` random questions matching every filter.

        Args:
            limit: Maximum number of questions; <= 0 returns an empty list
            filters: skill/area/degree (case-insensitive) and difficulty (exact)

        Returns:
            Distinct questions, fewer than `limit` when the population is smaller
        """
        if limit <= 0:
            return []

        filters = filters or QuestionFilters()
        questions = self.store.find_random(limit, filters)

        # Guard the without-replacement contract against backend duplicates
        seen: set[int | None] = set()
        unique: list[Question] = []
        for question in questions:
            if question.id in seen:
                continue
            seen.add(question.id)
            unique.append(question)

        logger.debug(f"Sampled {len(unique)}/{limit} questions with filters {filters}")
        return unique[:limit]
