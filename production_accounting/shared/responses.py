"""
Typed result models returned by the application services.
"""
from typing import Optional, Dict, Any, List
from pydantic import BaseModel

from .exceptions import ApplicationException


class ErrorDetail(BaseModel):
    """Detailed error information"""
    error_code: str
    message: str
    context: Optional[Dict[str, Any]] = None
    field: Optional[str] = None
    row: Optional[int] = None

    @classmethod
    def from_exception(cls, exception: ApplicationException, row: Optional[int] = None) -> 'ErrorDetail':
        """Build an error detail from an application exception"""
        return cls(
            error_code=exception.error_code.value,
            message=exception.message,
            context=exception.context,
            field=exception.context.get("field"),
            row=row
        )


class ImportResult(BaseModel):
    """Result of a production data import run"""
    source: str
    status: str
    total_records: int
    successful_records: int
    failed_records: int
    success_rate: float
    errors: List[ErrorDetail] = []
    execution_time_ms: float

    @classmethod
    def build(
        cls,
        source: str,
        total_records: int,
        successful_records: int,
        execution_time_ms: float,
        errors: Optional[List[ErrorDetail]] = None
    ) -> 'ImportResult':
        """Compute derived counters and status for an import run"""
        failed_records = total_records - successful_records
        success_rate = (successful_records / total_records * 100) if total_records > 0 else 0
        status = "failed" if total_records > 0 and failed_records == total_records else "completed"

        return cls(
            source=source,
            status=status,
            total_records=total_records,
            successful_records=successful_records,
            failed_records=failed_records,
            success_rate=success_rate,
            errors=errors or [],
            execution_time_ms=execution_time_ms
        )
