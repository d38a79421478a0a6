"""
Startup initialization of the question bank.

Runs once when the API starts:
1. Create the SQLite database directory if needed
2. Clear existing questions (clear_on_startup)
3. Import the default question bank document
4. Log the resulting statistics

Failures are logged and swallowed so the service still comes up; an operator
can re-run the import through the admin endpoints or the CLI.
"""

from __future__ import annotations

from loguru import logger

from config import Settings
from promptquest.core.errors import QuizBankError
from promptquest.importing import resolve_source_path
from promptquest.services import QuizBank


def initialize_question_bank(bank: QuizBank, settings: Settings) -> int:
    """
    Populate the question bank from the default document.

    Returns:
        Number of imported questions (0 when skipped or failed)
    """
    if not settings.auto_initialize:
        logger.info("Question bank auto-initialization is disabled")
        return 0

    logger.info("Starting question bank initialization...")

    db_path = settings.get_sqlite_path() if settings.storage_backend == "relational" else None
    if db_path is not None and not db_path.parent.exists():
        db_path.parent.mkdir(parents=True, exist_ok=True)
        logger.info(f"Created database directory: {db_path.parent.resolve()}")

    if settings.clear_on_startup:
        logger.info("Clearing existing data as configured")
        try:
            bank.clear_all()
        except QuizBankError as e:
            logger.info(f"No existing data to clear: {e}")

    json_file = resolve_source_path(settings.json_file_path)
    if not json_file.is_file():
        logger.error(f"JSON file not found at: {settings.json_file_path} (absolute: {json_file.resolve()})")
        logger.error("Please ensure the JSON file exists before starting the application")
        return 0

    try:
        imported = bank.import_file(json_file, clear_first=False)
    except QuizBankError as e:
        logger.error(f"Failed to initialize question bank on startup: {e}")
        logger.error("Application will continue but the question bank may be incomplete")
        return 0

    try:
        stats = bank.stats()
        logger.info("Question bank initialization completed successfully:")
        logger.info(f"  - Questions imported: {imported}")
        logger.info(f"  - Statistics: {stats.to_dict()}")
    except QuizBankError as e:
        logger.warning(f"Could not retrieve statistics: {e}")

    return imported
