"""
Dependency injection container wiring repositories into services.
Keeps service construction in one place so tests can swap storage.
"""
from pathlib import Path
from typing import Any, Dict, Optional

from ..domain.repositories.production_repository import ProductionRepository
from ..domain.repositories.well_test_repository import WellTestRepository
from ..application.services.allocation_service import AllocationService
from ..application.services.production_import_service import ProductionImportService
from ..application.services.production_service import ProductionService
from ..infrastructure.repositories.duckdb_production_repository import DuckDBProductionRepository
from ..infrastructure.repositories.duckdb_well_test_repository import DuckDBWellTestRepository
from .config.settings import Settings, get_settings


class DependencyContainer:
    """
    Dependency injection container for managing service instances.
    Implements singleton pattern with lazy initialization.
    """

    def __init__(self, settings: Optional[Settings] = None, db_path: Optional[Path] = None):
        self._settings = settings or get_settings()
        self._db_path = db_path or self._settings.database_path
        self._instances: Dict[str, Any] = {}

    def get_production_repository(self) -> ProductionRepository:
        """Get the production repository instance"""
        if 'production_repository' not in self._instances:
            self._instances['production_repository'] = DuckDBProductionRepository(db_path=self._db_path)
        return self._instances['production_repository']

    def get_well_test_repository(self) -> WellTestRepository:
        """Get the well test repository instance"""
        if 'well_test_repository' not in self._instances:
            self._instances['well_test_repository'] = DuckDBWellTestRepository(db_path=self._db_path)
        return self._instances['well_test_repository']

    def get_production_service(self) -> ProductionService:
        """Get the production service instance"""
        if 'production_service' not in self._instances:
            self._instances['production_service'] = ProductionService(
                repository=self.get_production_repository(),
                conditions=self._settings.standard_conditions(),
                decimals=self._settings.ROUNDING_DECIMALS
            )
        return self._instances['production_service']

    def get_allocation_service(self) -> AllocationService:
        """Get the allocation service instance"""
        if 'allocation_service' not in self._instances:
            self._instances['allocation_service'] = AllocationService(
                well_test_repository=self.get_well_test_repository(),
                max_concurrent_lookups=self._settings.WELL_TEST_LOOKUP_CONCURRENCY,
                balance_tolerance=self._settings.ALLOCATION_BALANCE_TOLERANCE
            )
        return self._instances['allocation_service']

    def get_import_service(self) -> ProductionImportService:
        """Get the production import service instance"""
        if 'import_service' not in self._instances:
            self._instances['import_service'] = ProductionImportService(self.get_production_service())
        return self._instances['import_service']

    def reset(self) -> None:
        """Drop cached instances so they are rebuilt on next access"""
        self._instances.clear()
