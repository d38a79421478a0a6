"""
Question table model.

One row per multiple-choice question. The four option slots are flat columns
(option_a .. option_d), matching the BigQuery warehouse schema column for
column so that both stores share the same row shape.
"""
from __future__ import annotations

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base


class QuestionRecord(Base):
    """Persisted multiple-choice question."""

    __tablename__ = "questions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    question: Mapped[str] = mapped_column(Text, nullable=False)
    option_a: Mapped[str] = mapped_column(String(1024), nullable=False, default="")
    option_b: Mapped[str] = mapped_column(String(1024), nullable=False, default="")
    option_c: Mapped[str] = mapped_column(String(1024), nullable=False, default="")
    option_d: Mapped[str] = mapped_column(String(1024), nullable=False, default="")
    correct_answer: Mapped[str] = mapped_column(String(1), nullable=False)
    explanation: Mapped[str | None] = mapped_column(Text)
    difficulty: Mapped[int | None] = mapped_column(Integer, index=True)
    area: Mapped[str | None] = mapped_column(String(255), index=True)
    skill: Mapped[str | None] = mapped_column(String(255), index=True)
    degree: Mapped[str | None] = mapped_column(String(32))

    def __repr__(self) -> str:
        return (
            f"<QuestionRecord id={self.id} answer={self.correct_answer!r} "
            f"difficulty={self.difficulty} skill={self.skill!r}>"
        )
