"""
Pytest configuration and shared fixtures for the production accounting tests.
"""

import logging

import pytest
from datetime import date

from production_accounting.domain.entities.allocation import AllocationTotals, WellAllocationInput
from production_accounting.domain.entities.production_reading import ProductionReading
from production_accounting.domain.entities.well_test import WellTestRate
from production_accounting.application.services.allocation_service import AllocationService
from production_accounting.application.services.production_service import ProductionService
from production_accounting.infrastructure.repositories.in_memory_repositories import (
    InMemoryProductionRepository,
    InMemoryWellTestRepository
)


@pytest.fixture
def production_date():
    """Production day used across reading tests."""
    return date(2024, 1, 15)


@pytest.fixture
def sample_reading(production_date):
    """Reading matching the documented end-to-end example."""
    return ProductionReading(
        well_id="WELL-001",
        production_date=production_date,
        gross_oil_volume=100.0,
        gross_water_volume=25.0,
        sand_water_percentage=5.0,
        operating_hours=20.0
    )


@pytest.fixture
def well_tests():
    """Historical tests for two wells, one with a superseded test."""
    return [
        WellTestRate(well_id="WELL-A", test_date=date(2023, 12, 1), oil_rate=40.0, gas_rate=100.0, water_rate=10.0),
        WellTestRate(well_id="WELL-A", test_date=date(2024, 1, 10), oil_rate=50.0, gas_rate=120.0, water_rate=20.0),
        WellTestRate(well_id="WELL-A", test_date=date(2024, 2, 1), oil_rate=999.0, gas_rate=999.0, water_rate=999.0),
        WellTestRate(well_id="WELL-B", test_date=date(2024, 1, 5), oil_rate=50.0, gas_rate=80.0, water_rate=20.0),
    ]


@pytest.fixture
def well_test_repository(well_tests):
    return InMemoryWellTestRepository(well_tests)


@pytest.fixture
def production_repository():
    return InMemoryProductionRepository()


@pytest.fixture
def allocation_service(well_test_repository):
    return AllocationService(well_test_repository, max_concurrent_lookups=2, balance_tolerance=0.01)


@pytest.fixture
def production_service(production_repository):
    return ProductionService(production_repository)


@pytest.fixture
def facility_totals():
    return AllocationTotals(oil_volume=1000.0, gas_volume=400.0, water_volume=200.0)


@pytest.fixture
def make_well_input():
    """Factory for allocation input lines."""
    def _make(well_id: str, **kwargs) -> WellAllocationInput:
        return WellAllocationInput(well_id=well_id, **kwargs)
    return _make


@pytest.fixture
def restore_root_logging():
    """Undo handler changes made by configure_logging."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers = handlers
    root.setLevel(level)
