"""
Admin router for question bank maintenance.

Endpoints for:
- Importing a question bank document (raw JSON body)
- Re-importing the default document, or another file from the input directory
- Clearing and resetting the bank
- Statistics and storage info
"""
from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from loguru import logger
from pydantic import BaseModel, Field

from promptquest.api.dependencies import get_quiz_bank
from promptquest.core.errors import QuizBankError
from promptquest.importing import resolve_source_path
from promptquest.services import QuizBank

router = APIRouter()


class ImportFileRequest(BaseModel):
    """Body of POST /import-file."""

    file_name: str = Field(..., alias="fileName", description="File name inside the input directory")


@router.post("/import")
async def import_questions(
    request: Request,
    clear_first: bool = Query(False, alias="clearFirst", description="Delete existing questions first"),
    bank: QuizBank = Depends(get_quiz_bank),
) -> Dict[str, Any]:
    """Import questions from the raw JSON request body."""
    document = await request.body()
    if not document:
        raise HTTPException(status_code=400, detail="Please provide a JSON document")

    logger.info(f"Admin import requested: {len(document)} bytes, clear_first={clear_first}")
    # The import is synchronous and can take one backend round-trip per record
    imported = await asyncio.to_thread(bank.import_document, document, clear_first)
    return {
        "success": True,
        "message": "Questions imported successfully",
        "importedCount": imported,
    }


@router.post("/import-default")
def import_default(bank: QuizBank = Depends(get_quiz_bank)) -> Dict[str, Any]:
    """Import the configured default question bank (existing questions kept)."""
    imported = bank.import_default()
    return {
        "success": True,
        "message": f"Imported {imported} questions from the default question bank",
        "importedCount": imported,
        "jsonFilePath": bank.settings.json_file_path,
    }


@router.post("/reset")
def reset_question_bank(bank: QuizBank = Depends(get_quiz_bank)) -> Dict[str, Any]:
    """Clear every question, then re-import the default question bank."""
    imported = bank.import_file(bank.settings.json_file_path, clear_first=True)
    return {
        "success": True,
        "message": "Question bank reset successfully",
        "questionsImported": imported,
        "statistics": bank.stats().to_dict(),
    }


@router.delete("/questions")
def clear_questions(bank: QuizBank = Depends(get_quiz_bank)) -> Dict[str, Any]:
    """Delete every question."""
    bank.clear_all()
    return {"success": True, "message": "All questions cleared"}


@router.get("/statistics")
def get_statistics(bank: QuizBank = Depends(get_quiz_bank)) -> Dict[str, Any]:
    """Totals, distinct tags and difficulty distribution."""
    return bank.stats().to_dict()


@router.post("/import-file")
def import_named_file(
    request: ImportFileRequest,
    bank: QuizBank = Depends(get_quiz_bank),
) -> Dict[str, Any]:
    """Replace the bank with another document from the input directory."""
    name = request.file_name.strip()
    if not name or Path(name).name != name or name in (".", ".."):
        raise HTTPException(status_code=400, detail="fileName must be a plain file name")

    input_dir = resolve_source_path(bank.settings.json_file_path).parent
    path = input_dir / name
    logger.info(f"Admin import of {path} requested")

    imported = bank.import_file(path, clear_first=True)
    return {
        "success": True,
        "message": f"Question bank rebuilt with {imported} questions",
        "questionsImported": imported,
        "jsonFilePath": str(path),
        "statistics": bank.stats().to_dict(),
    }


@router.get("/info")
def get_storage_info(bank: QuizBank = Depends(get_quiz_bank)) -> Dict[str, Any]:
    """Storage location, default document presence and statistics."""
    settings = bank.settings
    info: Dict[str, Any] = {"success": True, "backend": settings.storage_backend}

    if settings.storage_backend == "relational":
        db_path: Optional[Path] = settings.get_sqlite_path()
        info["databaseUrl"] = settings.database_url
        if db_path is not None:
            info["databasePath"] = str(db_path.resolve())
            info["databaseExists"] = db_path.is_file()
            if db_path.is_file():
                stat = db_path.stat()
                info["databaseSize"] = stat.st_size
                info["lastModified"] = stat.st_mtime
    else:
        info["tableId"] = bank.store.table_id

    json_file = resolve_source_path(settings.json_file_path)
    info["inputJsonPath"] = str(json_file.resolve())
    info["inputJsonExists"] = json_file.is_file()

    try:
        info["statistics"] = bank.stats().to_dict()
    except QuizBankError as e:
        logger.warning(f"Statistics unavailable for info request: {e}")
        info["statistics"] = None
        info["statisticsError"] = str(e)

    return info
