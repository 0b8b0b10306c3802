"""
Application services module.
This package contains the business logic services for the application.
"""

from .allocation_service import AllocationService
from .production_import_service import ProductionImportService
from .production_service import ProductionService

__all__ = [
    "AllocationService",
    "ProductionImportService",
    "ProductionService",
]
