"""Question bank statistics."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from promptquest.store.base import QuestionStore
from promptquest.store.models import MAX_DIFFICULTY, MIN_DIFFICULTY


@dataclass
class QuestionBankStats:
    """Statistics for the stored question bank."""

    total_questions: int
    skills: list[str] = field(default_factory=list)
    areas: list[str] = field(default_factory=list)
    degrees: list[str] = field(default_factory=list)
    difficulty_distribution: dict[int, int] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalQuestions": self.total_questions,
            "skills": self.skills,
            "areas": self.areas,
            "degrees": self.degrees,
            "difficultyDistribution": self.difficulty_distribution,
        }


def collect_stats(store: QuestionStore) -> QuestionBankStats:
    """
    Gather totals, distinct tags and the difficulty histogram.

    The histogram always carries every level from 1 to 5 (zero when no
    question has that difficulty); out-of-range levels found in the store
    are kept as extra keys.
    """
    distribution = {level: 0 for level in range(MIN_DIFFICULTY, MAX_DIFFICULTY + 1)}
    distribution.update(store.difficulty_distribution())

    return QuestionBankStats(
        total_questions=store.count_all(),
        skills=store.distinct_values("skill"),
        areas=store.distinct_values("area"),
        degrees=store.distinct_values("degree"),
        difficulty_distribution=dict(sorted(distribution.items())),
    )
