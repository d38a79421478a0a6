"""FastAPI dependencies and domain-error mapping."""

from __future__ import annotations

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from loguru import logger

from promptquest.core.errors import (
    NotFoundError,
    QuizBankError,
    SchemaError,
    StorageError,
    ValidationError,
)
from promptquest.services import QuizBank

_STATUS_BY_ERROR: list[tuple[type[QuizBankError], int]] = [
    (SchemaError, 400),
    (ValidationError, 400),
    (NotFoundError, 404),
    (StorageError, 503),
]


def get_quiz_bank(request: Request) -> QuizBank:
    """FastAPI dependency returning the process-wide QuizBank."""
    bank = getattr(request.app.state, "bank", None)
    if bank is None:
        raise HTTPException(status_code=503, detail="Question bank not initialized")
    return bank


def _error_body(exc: QuizBankError) -> dict:
    body = {
        "success": False,
        "message": str(exc),
        "error": exc.__class__.__name__,
    }
    committed = getattr(exc, "committed_count", 0)
    if committed:
        body["committedCount"] = committed
    return body


async def quiz_bank_error_handler(request: Request, exc: QuizBankError) -> JSONResponse:
    status_code = 500
    for error_type, code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            status_code = code
            break

    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc}")
    else:
        logger.warning(f"{request.method} {request.url.path} rejected: {exc}")

    return JSONResponse(status_code=status_code, content=_error_body(exc))


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(QuizBankError, quiz_bank_error_handler)
