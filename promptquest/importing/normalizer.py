"""
Question bank document parsing and record normalization.

Turns the raw JSON document into canonical Question entities:

    {"questions": [{"question": ..., "answer": "B", "options": [{"key": "A", "text": ...}, ...]}]}

The option list is projected onto the four fixed slots A-D. A key missing
from the list becomes an empty string rather than a validation failure, so
downstream code cannot tell a missing option from an intentionally empty one.
"""

from __future__ import annotations

import json
from typing import Any

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from promptquest.core.errors import SchemaError, ValidationError
from promptquest.store.models import (
    DEGREES,
    MAX_DIFFICULTY,
    MIN_DIFFICULTY,
    OPTION_KEYS,
    Question,
)

QUESTIONS_FIELD = "questions"


# =============================================================================
# Raw record schema
# =============================================================================


class RawOption(BaseModel):
    """One `{key, text}` entry of a record's option list."""

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    key: str
    text: str

    @field_validator("key")
    @classmethod
    def _normalize_key(cls, value: str) -> str:
        return value.strip().upper()


class RawQuestionRecord(BaseModel):
    """A question record exactly as it appears in the document."""

    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True, coerce_numbers_to_str=True)

    question: str = Field(min_length=1)
    answer: str
    explanation: str | None
    # Strict so JSON booleans are rejected instead of read as 0/1
    difficulty: int = Field(strict=True, ge=MIN_DIFFICULTY, le=MAX_DIFFICULTY)
    area: str = Field(min_length=1)
    skill: str = Field(min_length=1)
    degree: str
    options: list[RawOption] = Field(default_factory=list)

    @field_validator("answer")
    @classmethod
    def _check_answer(cls, value: str) -> str:
        letter = value.upper()
        if letter not in OPTION_KEYS:
            raise ValueError(f"must be one of {', '.join(OPTION_KEYS)}")
        return letter

    @field_validator("degree")
    @classmethod
    def _check_degree(cls, value: str) -> str:
        degree = value.lower()
        if degree not in DEGREES:
            raise ValueError(f"must be one of {', '.join(DEGREES)}")
        return degree

    @field_validator("difficulty", mode="before")
    @classmethod
    def _numeric_string_difficulty(cls, value: Any) -> Any:
        if isinstance(value, str) and value.strip().isdecimal():
            return int(value.strip())
        return value

    @field_validator("options", mode="before")
    @classmethod
    def _null_options(cls, value: Any) -> Any:
        return [] if value is None else value


# =============================================================================
# Parsing
# =============================================================================


def parse_document(document: bytes | str) -> list[Any]:
    """
    Parse a question bank document and return its raw records.

    Raises:
        SchemaError: Not JSON, not an object, or no `questions` array
    """
    try:
        root = json.loads(document)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise SchemaError(f"Invalid JSON document: {e}") from e

    if not isinstance(root, dict):
        raise SchemaError(f"Invalid JSON format: expected an object, got {type(root).__name__}")

    records = root.get(QUESTIONS_FIELD)
    if not isinstance(records, list):
        raise SchemaError(f"Invalid JSON format: '{QUESTIONS_FIELD}' array not found")

    return records


def project_options(options: list[RawOption], record_index: int | None = None) -> dict[str, str]:
    """Map `{key, text}` pairs onto the four fixed option slots."""
    by_key: dict[str, str] = {}
    for option in options:
        if option.key not in OPTION_KEYS:
            logger.warning(f"Record {record_index}: ignoring unknown option key {option.key!r}")
            continue
        by_key[option.key] = option.text

    missing = [key for key in OPTION_KEYS if key not in by_key]
    if missing:
        logger.warning(f"Record {record_index}: options {', '.join(missing)} missing, defaulting to empty")

    return {key: by_key.get(key, "") for key in OPTION_KEYS}


def normalize_record(raw: Any, record_index: int) -> Question:
    """
    Convert one raw record into a Question (id unassigned).

    Raises:
        ValidationError: Missing/blank required field or out-of-range value
    """
    if not isinstance(raw, dict):
        raise ValidationError(
            f"Record {record_index}: expected an object, got {type(raw).__name__}",
            record_index=record_index,
        )

    try:
        record = RawQuestionRecord.model_validate(raw)
    except PydanticValidationError as e:
        raise _to_validation_error(e, record_index) from e

    return Question(
        text=record.question,
        options=project_options(record.options, record_index),
        correct_answer=record.answer,
        explanation=record.explanation,
        difficulty=record.difficulty,
        area=record.area,
        skill=record.skill,
        degree=record.degree,
    )


def _to_validation_error(error: PydanticValidationError, record_index: int) -> ValidationError:
    first = error.errors()[0]
    location = ".".join(str(part) for part in first["loc"])
    field = str(first["loc"][0]) if first["loc"] else None

    if first["type"] == "missing":
        message = f"Record {record_index}: missing required field '{location}'"
    elif first["type"] == "string_too_short":
        message = f"Record {record_index}: field '{location}' must not be blank"
    else:
        message = f"Record {record_index}: field '{location}' {first['msg']}"

    return ValidationError(message, record_index=record_index, field=field)
