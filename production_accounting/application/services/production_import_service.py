"""
Bulk import of gross production readings from CSV files.
Each row is validated, standardized and stored; row failures are collected
instead of aborting the run.
"""
import logging
import time
from io import BytesIO
from pathlib import Path
from typing import Any, Dict, List, Union

import polars as pl
from pydantic import ValidationError

from ...domain.entities.production_reading import ProductionReading
from ...shared.exceptions import (
    ApplicationException,
    ErrorCode,
    FileSystemException,
    ValidationException
)
from ...shared.responses import ErrorDetail, ImportResult
from ...shared.utils.timing_decorator import async_timed
from .production_service import ProductionService

logger = logging.getLogger(__name__)

# Spreadsheet header -> entity field
COLUMN_MAPPING = {
    "productionDate": "production_date",
    "wellId": "well_id",
    "grossOilVolume": "gross_oil_volume",
    "grossGasVolume": "gross_gas_volume",
    "grossWaterVolume": "gross_water_volume",
    "operatingHours": "operating_hours",
    "sandWaterPercentage": "sand_water_percentage",
    "temperature": "temperature",
    "flowingTubingPressure": "flowing_tubing_pressure",
    "flowingCasingPressure": "flowing_casing_pressure",
    "chokeSize": "choke_size",
    "comments": "comments",
}

REQUIRED_COLUMNS = ("production_date", "well_id")

# Header row plus 1-based numbering
FIRST_DATA_ROW = 2

CsvSource = Union[str, Path, bytes]


class ProductionImportService:
    """Imports gross production readings through the production service."""

    def __init__(self, production_service: ProductionService):
        self._production_service = production_service

    @async_timed
    async def import_csv(self, source: CsvSource, upsert: bool = True) -> ImportResult:
        """
        Import a CSV of daily readings.

        Args:
            source: File path, or raw CSV bytes
            upsert: Overwrite existing readings for the same well and day;
                when False such rows fail with a duplicate error

        Returns:
            ImportResult with per-row errors

        Raises:
            FileSystemException: When the file cannot be read
            ValidationException: When the file is empty or lacks required columns
        """
        start_time = time.perf_counter()
        source_name = str(source) if not isinstance(source, bytes) else "<bytes>"
        logger.info(f"Starting production import from {source_name}")

        dataframe = self._read_csv(source, source_name)
        dataframe = self._apply_column_mapping(dataframe)

        errors: List[ErrorDetail] = []
        successful = 0

        for index, row in enumerate(dataframe.iter_rows(named=True)):
            row_number = index + FIRST_DATA_ROW
            try:
                reading = ProductionReading.model_validate(self._clean_row(row))
                if upsert:
                    await self._production_service.upsert_reading(reading)
                else:
                    await self._production_service.record_reading(reading)
                successful += 1
            except ValidationError as e:
                errors.append(self._validation_error_detail(e, row_number))
            except ApplicationException as e:
                errors.append(ErrorDetail.from_exception(e, row=row_number))

        result = ImportResult.build(
            source=source_name,
            total_records=dataframe.height,
            successful_records=successful,
            execution_time_ms=(time.perf_counter() - start_time) * 1000,
            errors=errors
        )
        logger.info(
            f"Production import from {source_name} {result.status}: "
            f"{result.successful_records}/{result.total_records} rows, {result.failed_records} failed"
        )
        return result

    def _read_csv(self, source: CsvSource, source_name: str) -> pl.DataFrame:
        """Read every column as text; parsing happens in entity validation."""
        try:
            if isinstance(source, bytes):
                dataframe = pl.read_csv(BytesIO(source), infer_schema_length=0)
            else:
                dataframe = pl.read_csv(Path(source), infer_schema_length=0)
        except FileNotFoundError as e:
            raise FileSystemException(
                message=f"Import file not found: {source_name}",
                file_path=source_name,
                cause=e
            )
        except pl.exceptions.NoDataError:
            raise ValidationException(message="Import file is empty", field="file", value=source_name)
        except pl.exceptions.ComputeError as e:
            raise ValidationException(message=f"Import file could not be parsed: {str(e)}", field="file", value=source_name)

        # Blank lines come back as all-null rows
        dataframe = dataframe.filter(~pl.all_horizontal(pl.all().is_null()))
        if dataframe.height == 0:
            raise ValidationException(message="Import file has no data rows", field="file", value=source_name)
        return dataframe

    def _apply_column_mapping(self, dataframe: pl.DataFrame) -> pl.DataFrame:
        """Rename spreadsheet headers to entity field names and check required columns."""
        dataframe = dataframe.rename({c: c.strip() for c in dataframe.columns})
        actual_rename_map = {k: v for k, v in COLUMN_MAPPING.items() if k in dataframe.columns}
        if actual_rename_map:
            dataframe = dataframe.rename(actual_rename_map)

        missing = [c for c in REQUIRED_COLUMNS if c not in dataframe.columns]
        if missing:
            raise ValidationException(
                message=f"Missing required columns: {', '.join(missing)}",
                field="columns",
                value=", ".join(dataframe.columns)
            )

        known_fields = set(COLUMN_MAPPING.values())
        return dataframe.select([c for c in dataframe.columns if c in known_fields])

    @staticmethod
    def _clean_row(row: Dict[str, Any]) -> Dict[str, Any]:
        """Drop blank cells so they fall back to entity defaults."""
        cleaned = {}
        for key, value in row.items():
            if value is None:
                continue
            value = value.strip()
            if value:
                cleaned[key] = value
        return cleaned

    @staticmethod
    def _validation_error_detail(error: ValidationError, row_number: int) -> ErrorDetail:
        first_error = error.errors()[0]
        field = ".".join(str(part) for part in first_error.get("loc", ())) or None
        return ErrorDetail(
            error_code=ErrorCode.VALIDATION_ERROR.value,
            message=f"Row {row_number}: {first_error.get('msg', 'invalid value')}",
            context={"error_count": error.error_count()},
            field=field,
            row=row_number
        )
