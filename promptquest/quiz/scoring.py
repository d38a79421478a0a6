"""
Scoring engine.

Resolves submitted answers against the persisted correct answers:

- Answer keys are question ids (ints, or numeric strings from JSON bodies)
- A selected letter is correct on exact, case-sensitive equality
- Results are emitted in ascending question id order
- Ids with no stored question are left out of the per-question results and
  reported in `unresolved_ids`; `count_unresolved` decides whether they still
  count toward the total (legacy behavior) or not (default)
"""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from loguru import logger

from promptquest.core.errors import ValidationError
from promptquest.store.base import QuestionStore
from promptquest.store.models import Question


@dataclass
class QuestionResult:
    """Outcome for one answered question."""

    question: Question
    selected: str | None
    is_correct: bool

    def to_dict(self) -> dict[str, Any]:
        q = self.question
        return {
            "id": q.id,
            "question": q.text,
            "userAnswer": self.selected,
            "correctAnswer": q.correct_answer,
            "isCorrect": self.is_correct,
            "explanation": q.explanation,
            "optionA": q.option_a,
            "optionB": q.option_b,
            "optionC": q.option_c,
            "optionD": q.option_d,
            "difficulty": q.difficulty,
            "area": q.area,
            "skill": q.skill,
            "degree": q.degree,
        }


@dataclass
class ScoreResult:
    """Aggregate score for a set of submitted answers."""

    total: int = 0
    correct: int = 0
    results: list[QuestionResult] = field(default_factory=list)
    unresolved_ids: list[int] = field(default_factory=list)

    @property
    def percentage(self) -> float:
        if self.total <= 0:
            return 0.0
        return self.correct / self.total * 100

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the response shape quiz clients render."""
        return {
            "totalQuestions": self.total,
            "correctAnswers": self.correct,
            "score": self.percentage,
            "questionResults": [r.to_dict() for r in self.results],
            "unresolvedIds": self.unresolved_ids,
        }


def _parse_question_id(key: int | str) -> int:
    if isinstance(key, bool):
        raise ValidationError(f"Invalid question id: {key!r}", field="answers")
    if isinstance(key, int):
        return key
    try:
        return int(str(key).strip())
    except ValueError as e:
        raise ValidationError(f"Invalid question id: {key!r}", field="answers") from e


class ScoringEngine:
    """Scores answer sheets against the active store."""

    def __init__(self, store: QuestionStore, count_unresolved: bool = False):
        """
        Args:
            store: Active question store
            count_unresolved: Count unknown question ids toward the total
        """
        self.store = store
        self.count_unresolved = count_unresolved

    def score(self, answers: Mapping[int | str, str | None]) -> ScoreResult:
        """
        Score a mapping of question id -> selected letter.

        Raises:
            ValidationError: A key is not a numeric question id
        """
        parsed: dict[int, str | None] = {}
        for key, selected in answers.items():
            parsed[_parse_question_id(key)] = selected

        result = ScoreResult()
        for question_id in sorted(parsed):
            selected = parsed[question_id]
            question = self.store.find_by_id(question_id)

            if question is None:
                result.unresolved_ids.append(question_id)
                if self.count_unresolved:
                    result.total += 1
                continue

            is_correct = selected is not None and selected == question.correct_answer
            if is_correct:
                result.correct += 1
            result.total += 1
            result.results.append(QuestionResult(question=question, selected=selected, is_correct=is_correct))

        if result.unresolved_ids:
            logger.warning(f"Scoring skipped unknown question ids: {result.unresolved_ids}")

        logger.info(f"Scored {result.correct}/{result.total} ({result.percentage:.1f}%)")
        return result
