from datetime import date
from typing import Dict, List, Optional, Tuple

from ...domain.entities.production_reading import ProductionReading, StandardizedProduction
from ...domain.entities.well_test import WellTestRate
from ...domain.repositories.production_repository import ProductionRepository
from ...domain.repositories.well_test_repository import WellTestRepository
from ...shared.exceptions import BusinessRuleViolationException


class InMemoryWellTestRepository(WellTestRepository):
    """Dictionary-backed well test store, used in tests and previews."""

    def __init__(self, well_tests: Optional[List[WellTestRate]] = None):
        self._tests: Dict[Tuple[str, date], WellTestRate] = {}
        for well_test in well_tests or []:
            self._tests[well_test.get_primary_key()] = well_test

    async def find_latest(self, well_id: str, on_or_before: date) -> Optional[WellTestRate]:
        candidates = [
            t for t in self._tests.values()
            if t.well_id == well_id and t.test_date <= on_or_before
        ]
        if not candidates:
            return None
        return max(candidates, key=lambda t: t.test_date)

    async def save(self, well_test: WellTestRate) -> WellTestRate:
        key = well_test.get_primary_key()
        if key in self._tests:
            raise BusinessRuleViolationException(
                message=f"Well test for {well_test.well_id} on {well_test.test_date} is already recorded",
                rule="well_test_immutable",
                context={"well_id": well_test.well_id, "test_date": well_test.test_date.isoformat()}
            )
        self._tests[key] = well_test
        return well_test

    async def get_by_well(self, well_id: str) -> List[WellTestRate]:
        tests = [t for t in self._tests.values() if t.well_id == well_id]
        return sorted(tests, key=lambda t: t.test_date, reverse=True)


class InMemoryProductionRepository(ProductionRepository):
    """Dictionary-backed reading store, used in tests and previews."""

    def __init__(self):
        self._readings: Dict[Tuple[str, date], ProductionReading] = {}
        self._standardized: Dict[Tuple[str, date], StandardizedProduction] = {}

    async def get(self, well_id: str, production_date: date) -> Optional[ProductionReading]:
        return self._readings.get((well_id, production_date))

    async def get_standardized(self, well_id: str, production_date: date) -> Optional[StandardizedProduction]:
        return self._standardized.get((well_id, production_date))

    async def save(
        self,
        reading: ProductionReading,
        standardized: StandardizedProduction,
        replaces: Optional[Tuple[str, date]] = None
    ) -> None:
        key = reading.get_primary_key()
        if replaces is not None and replaces != key:
            self._readings.pop(replaces, None)
            self._standardized.pop(replaces, None)
        self._readings[key] = reading
        self._standardized[key] = standardized

    async def delete(self, well_id: str, production_date: date) -> bool:
        key = (well_id, production_date)
        self._standardized.pop(key, None)
        return self._readings.pop(key, None) is not None

    async def get_by_well(self, well_id: str) -> List[ProductionReading]:
        readings = [r for r in self._readings.values() if r.well_id == well_id]
        return sorted(readings, key=lambda r: r.production_date, reverse=True)

    async def count(self) -> int:
        return len(self._readings)
