"""
Exception hierarchy for the production accounting engine.

Domain exceptions signal bad input or a broken accounting rule and are safe to
show to a user; infrastructure exceptions wrap storage and file failures and
keep the underlying error as ``cause``.
"""
from datetime import date
from enum import Enum
from typing import Any, Dict, Optional


class ErrorCode(str, Enum):
    """Machine-readable error codes carried by every application exception"""
    # Domain
    VALIDATION_ERROR = "VALIDATION_ERROR"
    BUSINESS_RULE_VIOLATION = "BUSINESS_RULE_VIOLATION"
    NOT_FOUND_ERROR = "NOT_FOUND_ERROR"

    # Infrastructure
    DATABASE_ERROR = "DATABASE_ERROR"
    FILE_SYSTEM_ERROR = "FILE_SYSTEM_ERROR"

    INTERNAL_ERROR = "INTERNAL_ERROR"


def _format_key(key: Any) -> str:
    """Render a record key, e.g. ('WELL-001', date(2024, 1, 15)) -> 'WELL-001/2024-01-15'."""
    if isinstance(key, tuple):
        return "/".join(_format_key(part) for part in key)
    if isinstance(key, date):
        return key.isoformat()
    return str(key)


class ApplicationException(Exception):
    """Base class of every error raised on purpose by the package"""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        context: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.context = context or {}
        self.cause = cause

    def to_dict(self) -> Dict[str, Any]:
        """Serializable view used in import error reports and logs"""
        payload = {
            "error": True,
            "error_code": self.error_code.value,
            "message": self.message,
            "context": self.context
        }
        if self.cause is not None:
            payload["cause"] = f"{type(self.cause).__name__}: {self.cause}"
        return payload


class DomainException(ApplicationException):
    """Invalid input or a violated accounting rule"""
    pass


class ValidationException(DomainException):
    """A value is outside the range a calculation accepts"""

    def __init__(self, message: str, field: Optional[str] = None, value: Any = None):
        self.field = field
        self.value = value
        context = {}
        if field:
            context["field"] = field
        if value is not None:
            context["value"] = str(value)
        super().__init__(message=message, error_code=ErrorCode.VALIDATION_ERROR, context=context)


class BusinessRuleViolationException(DomainException):
    """Input is well-formed but breaks an accounting rule (duplicates, zero factor sums, ...)"""

    def __init__(self, message: str, rule: str, context: Optional[Dict[str, Any]] = None):
        self.rule = rule
        super().__init__(
            message=message,
            error_code=ErrorCode.BUSINESS_RULE_VIOLATION,
            context={**(context or {}), "rule": rule}
        )


class NotFoundException(DomainException):
    """No stored record for the requested key"""

    def __init__(self, message: str, resource: str, key: Any = None):
        context = {"resource": resource}
        if key is not None:
            context["key"] = _format_key(key)
        super().__init__(message=message, error_code=ErrorCode.NOT_FOUND_ERROR, context=context)


class InfrastructureException(ApplicationException):
    """Storage, file or lookup failure outside the domain"""
    pass


class DatabaseException(InfrastructureException):
    """A DuckDB statement failed"""

    def __init__(
        self,
        message: str,
        query: Optional[str] = None,
        table: Optional[str] = None,
        cause: Optional[Exception] = None
    ):
        context = {}
        if table:
            context["table"] = table
        if query:
            context["query"] = " ".join(query.split())
        super().__init__(message=message, error_code=ErrorCode.DATABASE_ERROR, context=context, cause=cause)


class FileSystemException(InfrastructureException):
    """An import file could not be opened or read"""

    def __init__(self, message: str, file_path: Optional[str] = None, cause: Optional[Exception] = None):
        context = {"file_path": file_path} if file_path else {}
        super().__init__(message=message, error_code=ErrorCode.FILE_SYSTEM_ERROR, context=context, cause=cause)
