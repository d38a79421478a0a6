"""
Quiz router for quiz delivery.

Endpoints for:
- Listing all questions
- Random question subsets (answers withheld)
- Answer checking
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Query

from promptquest.api.dependencies import get_quiz_bank
from promptquest.services import QuizBank
from promptquest.store import QuestionFilters

router = APIRouter()


@router.get("/questions")
def get_all_questions(bank: QuizBank = Depends(get_quiz_bank)) -> List[Dict[str, Any]]:
    """Get all questions, correct answers included."""
    return [q.to_dict() for q in bank.all_questions()]


@router.get("/random/{count}")
def get_random_questions(
    count: int,
    skill: Optional[str] = Query(None, description="Skill filter (case-insensitive)"),
    area: Optional[str] = Query(None, description="Area filter (case-insensitive)"),
    difficulty: Optional[int] = Query(None, ge=1, le=5, description="Exact difficulty"),
    degree: Optional[str] = Query(None, description="Degree filter: junior, mid, senior"),
    bank: QuizBank = Depends(get_quiz_bank),
) -> List[Dict[str, Any]]:
    """Get up to `count` random questions, without answers or explanations."""
    filters = QuestionFilters(skill=skill, area=area, difficulty=difficulty, degree=degree)
    return [q.to_dict(include_answer=False) for q in bank.sample(count, filters)]


@router.post("/check")
def check_answers(
    answers: Dict[str, Optional[str]],
    bank: QuizBank = Depends(get_quiz_bank),
) -> Dict[str, Any]:
    """Check answers (`{"<question id>": "<letter>"}`) and return the score."""
    return bank.score(answers).to_dict()
