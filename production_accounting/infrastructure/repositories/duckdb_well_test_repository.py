import asyncio
import logging
from datetime import date
from pathlib import Path
from typing import List, Optional

import duckdb

from ...domain.entities.well_test import WellTestRate
from ...domain.repositories.well_test_repository import WellTestRepository
from ...shared.config.settings import get_settings
from ...shared.exceptions import BusinessRuleViolationException, DatabaseException
from .duckdb_schema import WELL_TEST_SCHEMA

logger = logging.getLogger(__name__)


class DuckDBWellTestRepository(WellTestRepository):
    """DuckDB implementation of the well test repository."""

    def __init__(self, db_path: Optional[Path] = None):
        self.db_path = db_path or get_settings().database_path
        Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
        self._initialize_database()

    def _initialize_database(self):
        """Create the well test table if it doesn't exist."""
        with duckdb.connect(str(self.db_path)) as conn:
            conn.execute(WELL_TEST_SCHEMA.get_sql_create_table())

    async def find_latest(self, well_id: str, on_or_before: date) -> Optional[WellTestRate]:
        """Get the most recent test for a well taken on or before a date."""
        def _find_latest_sync():
            query = f"""
            SELECT {', '.join(WELL_TEST_SCHEMA.get_column_names())}
            FROM {WELL_TEST_SCHEMA.table_name}
            WHERE well_id = ? AND test_date <= ?
            ORDER BY test_date DESC
            LIMIT 1
            """
            try:
                with duckdb.connect(str(self.db_path)) as conn:
                    row = conn.execute(query, [well_id, on_or_before]).fetchone()
            except duckdb.Error as e:
                raise DatabaseException(
                    message=f"Failed to look up latest well test for {well_id}: {str(e)}",
                    query=query,
                    cause=e
                )
            return self._row_to_entity(row) if row else None

        return await asyncio.to_thread(_find_latest_sync)

    async def save(self, well_test: WellTestRate) -> WellTestRate:
        """Record a new well test. Existing tests are never overwritten."""
        def _save_sync():
            query = WELL_TEST_SCHEMA.get_sql_insert()
            try:
                with duckdb.connect(str(self.db_path)) as conn:
                    conn.execute(query, self._entity_to_params(well_test))
            except duckdb.ConstraintException as e:
                raise BusinessRuleViolationException(
                    message=f"Well test for {well_test.well_id} on {well_test.test_date} is already recorded",
                    rule="well_test_immutable",
                    context={"well_id": well_test.well_id, "test_date": well_test.test_date.isoformat()}
                ) from e
            except duckdb.Error as e:
                raise DatabaseException(
                    message=f"Failed to save well test: {str(e)}",
                    query=query,
                    table=WELL_TEST_SCHEMA.table_name,
                    cause=e
                )
            logger.debug(f"Recorded well test {well_test.get_primary_key()}")
            return well_test

        return await asyncio.to_thread(_save_sync)

    async def get_by_well(self, well_id: str) -> List[WellTestRate]:
        """Get all tests for a well, newest first."""
        def _get_by_well_sync():
            query = f"""
            SELECT {', '.join(WELL_TEST_SCHEMA.get_column_names())}
            FROM {WELL_TEST_SCHEMA.table_name}
            WHERE well_id = ?
            ORDER BY test_date DESC
            """
            try:
                with duckdb.connect(str(self.db_path)) as conn:
                    rows = conn.execute(query, [well_id]).fetchall()
            except duckdb.Error as e:
                raise DatabaseException(
                    message=f"Failed to read well tests for {well_id}: {str(e)}",
                    query=query,
                    cause=e
                )
            return [self._row_to_entity(row) for row in rows]

        return await asyncio.to_thread(_get_by_well_sync)

    def _entity_to_params(self, well_test: WellTestRate) -> list:
        data = well_test.model_dump(mode="json")
        data["test_date"] = well_test.test_date
        return [data[column] for column in WELL_TEST_SCHEMA.get_column_names()]

    def _row_to_entity(self, row: tuple) -> WellTestRate:
        return WellTestRate.model_validate(dict(zip(WELL_TEST_SCHEMA.get_column_names(), row)))
