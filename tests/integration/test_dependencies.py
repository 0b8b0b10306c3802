"""
Integration tests for the dependency container wiring.
"""
from datetime import date

import pytest

from production_accounting.application.services import AllocationService, ProductionImportService, ProductionService
from production_accounting.domain.entities.allocation import AllocationMethod, AllocationTotals, WellAllocationInput
from production_accounting.infrastructure.repositories.duckdb_production_repository import DuckDBProductionRepository
from production_accounting.shared.config.settings import Settings
from production_accounting.shared.dependencies import DependencyContainer


@pytest.fixture
def container(tmp_path):
    settings = Settings(ROUNDING_DECIMALS=1, WELL_TEST_LOOKUP_CONCURRENCY=4)
    return DependencyContainer(settings=settings, db_path=tmp_path / "container.duckdb")


class TestDependencyContainer:

    def test_services_are_cached(self, container):
        assert isinstance(container.get_production_service(), ProductionService)
        assert container.get_production_service() is container.get_production_service()
        assert container.get_allocation_service() is container.get_allocation_service()
        assert isinstance(container.get_import_service(), ProductionImportService)

    def test_settings_flow_into_services(self, container):
        assert container.get_production_service().decimals == 1
        assert isinstance(container.get_allocation_service(), AllocationService)
        assert container.get_allocation_service().max_concurrent_lookups == 4
        assert isinstance(container.get_production_repository(), DuckDBProductionRepository)

    def test_reset_rebuilds_instances(self, container):
        service = container.get_production_service()

        container.reset()

        assert container.get_production_service() is not service

    @pytest.mark.asyncio
    async def test_end_to_end_import_and_allocation(self, container):
        csv_bytes = b"productionDate,wellId,grossOilVolume,sandWaterPercentage\n2024-01-15,WELL-001,100,5\n"

        result = await container.get_import_service().import_csv(csv_bytes)
        allocation = await container.get_allocation_service().allocate(
            AllocationMethod.TEST_BASED,
            AllocationTotals(oil_volume=90.0),
            [WellAllocationInput(well_id="WELL-001", test_oil_rate=1.0)]
        )

        assert result.successful_records == 1
        repository = container.get_production_repository()
        standardized = await repository.get_standardized("WELL-001", date(2024, 1, 15))
        assert standardized.net_oil_volume == 95.0
        assert allocation.well_allocations[0].allocated_oil_volume == pytest.approx(90.0)
