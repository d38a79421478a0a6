"""Select and build the configured question store once per process."""

from __future__ import annotations

from loguru import logger

from config import Settings
from promptquest.core.errors import StorageError

from .base import QuestionStore


def create_store(settings: Settings) -> QuestionStore:
    """
    Build the question store named by `settings.storage_backend`.

    Driver imports stay local so a relational deployment does not need the
    BigQuery client configured (and vice versa).
    """
    backend = settings.storage_backend

    if backend == "relational":
        from promptquest.db.database import create_db_engine

        from .relational import RelationalQuestionStore

        engine = create_db_engine(settings.database_url, echo=settings.log_level == "DEBUG")
        logger.info(f"Using relational question store: {settings.database_url}")
        return RelationalQuestionStore(engine)

    if backend == "warehouse":
        from google.cloud import bigquery

        from .warehouse import BACKEND_ERRORS, WarehouseQuestionStore

        try:
            client = bigquery.Client(project=settings.gcp_project_id, location=settings.bigquery_location)
        except BACKEND_ERRORS as e:
            logger.error(f"Could not create BigQuery client: {e}")
            raise StorageError(f"BigQuery client unavailable: {e}") from e
        table_id = settings.get_bigquery_table_id()
        if not settings.gcp_project_id:
            # Table references need the project; fall back to the client's default
            table_id = f"{client.project}.{table_id}"
        store = WarehouseQuestionStore(client, table_id, location=settings.bigquery_location)
        store.ensure_table()
        logger.info(f"Using warehouse question store: {store.table_id}")
        return store

    raise ValueError(f"Unknown storage backend: {backend}")
