"""
Question Store Data Models.

The canonical Question entity shared by both storage backends, plus the
filter set accepted by randomized reads.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

OPTION_KEYS: tuple[str, ...] = ("A", "B", "C", "D")
DEGREES: tuple[str, ...] = ("junior", "mid", "senior")
MIN_DIFFICULTY = 1
MAX_DIFFICULTY = 5

# Fields accepted by QuestionStore.distinct_values()
DISTINCT_FIELDS: tuple[str, ...] = ("skill", "area", "degree")


def _empty_options() -> dict[str, str]:
    return {key: "" for key in OPTION_KEYS}


@dataclass
class Question:
    """
    A multiple-choice question.

    `options` always holds the four slots A-D; a slot the source document
    omitted is an empty string. `id` is None until a store assigns one.
    """

    text: str
    correct_answer: str
    options: dict[str, str] = field(default_factory=_empty_options)
    explanation: str | None = None
    difficulty: int | None = None
    area: str | None = None
    skill: str | None = None
    degree: str | None = None
    id: int | None = None

    def __post_init__(self) -> None:
        self.options = {key: self.options.get(key) or "" for key in OPTION_KEYS}

    @property
    def option_a(self) -> str:
        return self.options["A"]

    @property
    def option_b(self) -> str:
        return self.options["B"]

    @property
    def option_c(self) -> str:
        return self.options["C"]

    @property
    def option_d(self) -> str:
        return self.options["D"]

    def to_row(self) -> dict[str, Any]:
        """Flatten into the column layout both stores persist."""
        return {
            "id": self.id,
            "question": self.text,
            "option_a": self.option_a,
            "option_b": self.option_b,
            "option_c": self.option_c,
            "option_d": self.option_d,
            "correct_answer": self.correct_answer,
            "explanation": self.explanation,
            "difficulty": self.difficulty,
            "area": self.area,
            "skill": self.skill,
            "degree": self.degree,
        }

    @classmethod
    def from_row(cls, row: Any) -> Question:
        """Build from a mapping-like row (dict or BigQuery Row)."""
        get = row.get
        raw_id = get("id")
        raw_difficulty = get("difficulty")
        return cls(
            id=int(raw_id) if raw_id is not None else None,
            text=get("question") or "",
            options={
                "A": get("option_a") or "",
                "B": get("option_b") or "",
                "C": get("option_c") or "",
                "D": get("option_d") or "",
            },
            correct_answer=get("correct_answer") or "",
            explanation=get("explanation"),
            difficulty=int(raw_difficulty) if raw_difficulty is not None else None,
            area=get("area"),
            skill=get("skill"),
            degree=get("degree"),
        )

    def to_dict(self, include_answer: bool = True) -> dict[str, Any]:
        """Serialize to the camelCase shape served to quiz clients."""
        data: dict[str, Any] = {
            "id": self.id,
            "question": self.text,
            "optionA": self.option_a,
            "optionB": self.option_b,
            "optionC": self.option_c,
            "optionD": self.option_d,
            "area": self.area,
            "skill": self.skill,
            "difficulty": self.difficulty,
            "degree": self.degree,
        }
        if include_answer:
            data["correctAnswer"] = self.correct_answer
            data["explanation"] = self.explanation
        return data


@dataclass
class QuestionFilters:
    """
    Conjunctive filters for randomized reads.

    String filters match case-insensitively; difficulty matches exactly.
    Blank strings count as "no filter".
    """

    skill: str | None = None
    area: str | None = None
    difficulty: int | None = None
    degree: str | None = None

    def __post_init__(self) -> None:
        for name in ("skill", "area", "degree"):
            value = getattr(self, name)
            if value is not None and not str(value).strip():
                setattr(self, name, None)

    def string_filters(self) -> dict[str, str]:
        """Active string filters in declaration order."""
        return {
            name: value
            for name in ("skill", "area", "degree")
            if (value := getattr(self, name)) is not None
        }

    def matches(self, question: Question) -> bool:
        """Evaluate the filters against an in-memory question."""
        for name, value in self.string_filters().items():
            actual = getattr(question, name)
            if actual is None or actual.lower() != value.lower():
                return False
        if self.difficulty is not None and question.difficulty != self.difficulty:
            return False
        return True
