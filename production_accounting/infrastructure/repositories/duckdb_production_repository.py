import asyncio
import logging
from datetime import date
from pathlib import Path
from typing import List, Optional, Tuple

import duckdb

from ...domain.entities.production_reading import ProductionReading, StandardizedProduction
from ...domain.repositories.production_repository import ProductionRepository
from ...shared.config.settings import get_settings
from ...shared.exceptions import DatabaseException
from .duckdb_schema import PRODUCTION_READING_SCHEMA, STANDARDIZED_PRODUCTION_SCHEMA

logger = logging.getLogger(__name__)


class DuckDBProductionRepository(ProductionRepository):
    """
    DuckDB implementation of the production repository.

    Readings and standardized records live in two tables keyed by
    (well_id, production_date); every write touches both inside one
    transaction.
    """

    def __init__(self, db_path: Optional[Path] = None):
        self.db_path = db_path or get_settings().database_path
        Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
        self._initialize_database()

    def _initialize_database(self):
        """Create the reading and standardized tables if they don't exist."""
        with duckdb.connect(str(self.db_path)) as conn:
            conn.execute(PRODUCTION_READING_SCHEMA.get_sql_create_table())
            conn.execute(STANDARDIZED_PRODUCTION_SCHEMA.get_sql_create_table())

    async def get(self, well_id: str, production_date: date) -> Optional[ProductionReading]:
        """Get the reading for a well and day."""
        def _get_sync():
            row = self._fetch_one_sync(PRODUCTION_READING_SCHEMA.table_name, PRODUCTION_READING_SCHEMA.get_column_names(), well_id, production_date)
            return ProductionReading.model_validate(row) if row else None

        return await asyncio.to_thread(_get_sync)

    async def get_standardized(self, well_id: str, production_date: date) -> Optional[StandardizedProduction]:
        """Get the standardized record derived from a reading."""
        def _get_standardized_sync():
            row = self._fetch_one_sync(STANDARDIZED_PRODUCTION_SCHEMA.table_name, STANDARDIZED_PRODUCTION_SCHEMA.get_column_names(), well_id, production_date)
            return StandardizedProduction.model_validate(row) if row else None

        return await asyncio.to_thread(_get_standardized_sync)

    async def save(
        self,
        reading: ProductionReading,
        standardized: StandardizedProduction,
        replaces: Optional[Tuple[str, date]] = None
    ) -> None:
        """Upsert a reading and its standardized record in one transaction."""
        def _save_sync():
            with duckdb.connect(str(self.db_path)) as conn:
                conn.begin()
                try:
                    if replaces is not None and replaces != reading.get_primary_key():
                        self._delete_key(conn, *replaces)
                    conn.execute(
                        PRODUCTION_READING_SCHEMA.get_sql_upsert(),
                        self._to_params(reading.model_dump(), PRODUCTION_READING_SCHEMA.get_column_names())
                    )
                    conn.execute(
                        STANDARDIZED_PRODUCTION_SCHEMA.get_sql_upsert(),
                        self._to_params(standardized.model_dump(), STANDARDIZED_PRODUCTION_SCHEMA.get_column_names())
                    )
                    conn.commit()
                except duckdb.Error as e:
                    conn.rollback()
                    raise DatabaseException(
                        message=f"Failed to save production reading {reading.get_primary_key()}: {str(e)}",
                        table=PRODUCTION_READING_SCHEMA.table_name,
                        cause=e
                    )
            logger.debug(f"Saved production reading {reading.get_primary_key()}")

        await asyncio.to_thread(_save_sync)

    async def delete(self, well_id: str, production_date: date) -> bool:
        """Delete a reading and its standardized record together."""
        def _delete_sync():
            with duckdb.connect(str(self.db_path)) as conn:
                conn.begin()
                try:
                    existed = conn.execute(
                        f"SELECT COUNT(*) FROM {PRODUCTION_READING_SCHEMA.table_name} WHERE well_id = ? AND production_date = ?",
                        [well_id, production_date]
                    ).fetchone()[0] > 0
                    self._delete_key(conn, well_id, production_date)
                    conn.commit()
                except duckdb.Error as e:
                    conn.rollback()
                    raise DatabaseException(
                        message=f"Failed to delete production reading ({well_id}, {production_date}): {str(e)}",
                        cause=e
                    )
            return existed

        return await asyncio.to_thread(_delete_sync)

    async def get_by_well(self, well_id: str) -> List[ProductionReading]:
        """Get all readings of a well, newest first."""
        def _get_by_well_sync():
            columns = PRODUCTION_READING_SCHEMA.get_column_names()
            query = f"""
            SELECT {', '.join(columns)} FROM {PRODUCTION_READING_SCHEMA.table_name}
            WHERE well_id = ?
            ORDER BY production_date DESC
            """
            try:
                with duckdb.connect(str(self.db_path)) as conn:
                    rows = conn.execute(query, [well_id]).fetchall()
            except duckdb.Error as e:
                raise DatabaseException(message=f"Failed to read production for {well_id}: {str(e)}", query=query, cause=e)
            return [ProductionReading.model_validate(dict(zip(columns, row))) for row in rows]

        return await asyncio.to_thread(_get_by_well_sync)

    async def count(self) -> int:
        """Get the total count of readings."""
        def _count_sync():
            with duckdb.connect(str(self.db_path)) as conn:
                return conn.execute(f"SELECT COUNT(*) FROM {PRODUCTION_READING_SCHEMA.table_name}").fetchone()[0]

        return await asyncio.to_thread(_count_sync)

    def _fetch_one_sync(self, table_name: str, columns: List[str], well_id: str, production_date: date) -> Optional[dict]:
        query = f"SELECT {', '.join(columns)} FROM {table_name} WHERE well_id = ? AND production_date = ?"
        try:
            with duckdb.connect(str(self.db_path)) as conn:
                row = conn.execute(query, [well_id, production_date]).fetchone()
        except duckdb.Error as e:
            raise DatabaseException(message=f"Failed to read {table_name}: {str(e)}", query=query, table=table_name, cause=e)
        return dict(zip(columns, row)) if row else None

    @staticmethod
    def _delete_key(conn, well_id: str, production_date: date):
        for table_name in (STANDARDIZED_PRODUCTION_SCHEMA.table_name, PRODUCTION_READING_SCHEMA.table_name):
            conn.execute(
                f"DELETE FROM {table_name} WHERE well_id = ? AND production_date = ?",
                [well_id, production_date]
            )

    @staticmethod
    def _to_params(data: dict, columns: List[str]) -> list:
        return [data[column] for column in columns]
