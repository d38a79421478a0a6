"""
Warehouse Question Store.

BigQuery-backed store for cloud deployments. BigQuery has no auto-increment
and no multi-statement transactions here, so:

- ids are derived as MAX(id) + 1 (once per batch, then incremented locally)
- every save is an independent streaming insert; a failed import leaves the
  rows written before the failure in place
- reads are eventually consistent: rows streamed a moment ago may be missing
  from COUNT(*) or from a random sample
"""

from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, ClassVar

from google.api_core.exceptions import GoogleAPIError, NotFound
from google.auth.exceptions import GoogleAuthError
from google.cloud import bigquery
from loguru import logger

from promptquest.core.errors import StorageError

from .base import QuestionStore
from .models import Question, QuestionFilters

QUESTIONS_SCHEMA = [
    bigquery.SchemaField("id", "INT64"),
    bigquery.SchemaField("question", "STRING"),
    bigquery.SchemaField("option_a", "STRING"),
    bigquery.SchemaField("option_b", "STRING"),
    bigquery.SchemaField("option_c", "STRING"),
    bigquery.SchemaField("option_d", "STRING"),
    bigquery.SchemaField("correct_answer", "STRING"),
    bigquery.SchemaField("explanation", "STRING"),
    bigquery.SchemaField("difficulty", "INT64"),
    bigquery.SchemaField("area", "STRING"),
    bigquery.SchemaField("skill", "STRING"),
    bigquery.SchemaField("degree", "STRING"),
]

# Credential refresh failures raise GoogleAuthError; network failures from the
# HTTP transport surface as OSError subclasses
BACKEND_ERRORS = (GoogleAPIError, GoogleAuthError, OSError)


class WarehouseQuestionStore(QuestionStore):
    """Question store on an append-oriented analytical warehouse."""

    name: ClassVar[str] = "warehouse"
    transactional: ClassVar[bool] = False

    def __init__(
        self,
        client: bigquery.Client,
        table_id: str,
        location: str | None = None,
    ):
        """
        Initialize store.

        Args:
            client: BigQuery client
            table_id: `project.dataset.table` (or `dataset.table` in the client's project)
            location: Job location, None to let BigQuery pick
        """
        self.client = client
        self.table_id = table_id
        self.location = location
        self._local = threading.local()

    # ========================================
    # Table management
    # ========================================

    def ensure_table(self) -> bool:
        """
        Create the questions table if it does not exist.

        Returns:
            True when the table was created, False when it already existed
        """
        try:
            self.client.get_table(self.table_id)
            return False
        except NotFound:
            pass
        except BACKEND_ERRORS as e:
            raise StorageError(f"Error checking table {self.table_id}: {e}") from e

        try:
            self.client.create_table(bigquery.Table(self.table_id, schema=QUESTIONS_SCHEMA))
        except BACKEND_ERRORS as e:
            raise StorageError(f"Error creating table {self.table_id}: {e}") from e

        logger.info(f"Table created successfully: {self.table_id}")
        return True

    # ========================================
    # Writes
    # ========================================

    @contextmanager
    def batch(self) -> Iterator[None]:
        """
        Cache the id counter for the saves made inside the block.

        Rows are still inserted one by one; nothing is rolled back on error.
        """
        if getattr(self._local, "in_batch", False):
            yield
            return

        self._local.in_batch = True
        self._local.next_id = None
        try:
            yield
        finally:
            self._local.in_batch = False
            self._local.next_id = None

    def save(self, question: Question) -> int:
        if question.id is None:
            question.id = self._allocate_id()
        elif getattr(self._local, "in_batch", False) and self._local.next_id is not None:
            self._local.next_id = max(self._local.next_id, question.id + 1)

        try:
            errors = self.client.insert_rows_json(self.table_id, [question.to_row()])
        except BACKEND_ERRORS as e:
            raise StorageError(f"Error saving question to BigQuery: {e}") from e

        if errors:
            raise StorageError(f"Errors occurred while inserting rows: {errors}")

        logger.debug(f"Streamed question id={question.id} into {self.table_id}")
        return question.id

    def delete_all(self) -> None:
        self._query(f"DELETE FROM `{self.table_id}` WHERE TRUE")
        logger.info(f"Deleted all questions from {self.table_id}")

    def _allocate_id(self) -> int:
        if not getattr(self._local, "in_batch", False):
            return self._derive_next_id()

        if self._local.next_id is None:
            self._local.next_id = self._derive_next_id()
        allocated = self._local.next_id
        self._local.next_id += 1
        return allocated

    def _derive_next_id(self) -> int:
        try:
            rows = self._query(f"SELECT COALESCE(MAX(id), 0) AS max_id FROM `{self.table_id}`")
        except StorageError as e:
            raise StorageError(f"Cannot derive next question id: {e}") from e
        if not rows:
            return 1
        return int(rows[0]["max_id"]) + 1

    # ========================================
    # Reads
    # ========================================

    def find_all(self) -> list[Question]:
        rows = self._query(f"SELECT * FROM `{self.table_id}` ORDER BY id")
        return [Question.from_row(row) for row in rows]

    def find_by_id(self, question_id: int) -> Question | None:
        rows = self._query(
            f"SELECT * FROM `{self.table_id}` WHERE id = @id LIMIT 1",
            [bigquery.ScalarQueryParameter("id", "INT64", question_id)],
        )
        return Question.from_row(rows[0]) if rows else None

    def find_random(self, limit: int, filters: QuestionFilters | None = None) -> list[Question]:
        if limit <= 0:
            return []

        filters = filters or QuestionFilters()
        clauses = ["1=1"]
        params: list[bigquery.ScalarQueryParameter] = []

        for name, value in filters.string_filters().items():
            clauses.append(f"LOWER({name}) = LOWER(@{name})")
            params.append(bigquery.ScalarQueryParameter(name, "STRING", value))
        if filters.difficulty is not None:
            clauses.append("difficulty = @difficulty")
            params.append(bigquery.ScalarQueryParameter("difficulty", "INT64", filters.difficulty))

        params.append(bigquery.ScalarQueryParameter("limit", "INT64", limit))
        sql = (
            f"SELECT * FROM `{self.table_id}` WHERE {' AND '.join(clauses)} "
            "ORDER BY RAND() LIMIT @limit"
        )
        return [Question.from_row(row) for row in self._query(sql, params)]

    def count_all(self) -> int:
        rows = self._query(f"SELECT COUNT(*) AS total FROM `{self.table_id}`")
        return int(rows[0]["total"]) if rows else 0

    def distinct_values(self, field: str) -> list[str]:
        column = self._check_distinct_field(field)
        rows = self._query(
            f"SELECT DISTINCT {column} FROM `{self.table_id}` "
            f"WHERE {column} IS NOT NULL AND {column} != '' ORDER BY {column}"
        )
        return [row[column] for row in rows if row[column]]

    def difficulty_distribution(self) -> dict[int, int]:
        rows = self._query(
            f"SELECT difficulty, COUNT(*) AS count FROM `{self.table_id}` "
            "WHERE difficulty IS NOT NULL GROUP BY difficulty ORDER BY difficulty"
        )
        return {int(row["difficulty"]): int(row["count"]) for row in rows}

    # ========================================
    # Query execution
    # ========================================

    def _query(self, sql: str, params: list[Any] | None = None) -> list[Any]:
        """Run a query job and materialize its rows."""
        job_config = bigquery.QueryJobConfig(query_parameters=params or [])
        try:
            job = self.client.query(sql, job_config=job_config, location=self.location)
            return list(job.result())
        except BACKEND_ERRORS as e:
            logger.error(f"BigQuery query failed: {e}")
            raise StorageError(f"Error executing query: {e}") from e
