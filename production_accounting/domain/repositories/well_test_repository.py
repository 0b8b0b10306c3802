from abc import ABC, abstractmethod
from datetime import date
from typing import List, Optional
from ..entities.well_test import WellTestRate


class WellTestRepository(ABC):
    """Repository interface for well test rates."""

    @abstractmethod
    async def find_latest(self, well_id: str, on_or_before: date) -> Optional[WellTestRate]:
        """Get the most recent test for a well taken on or before a date."""
        pass

    @abstractmethod
    async def save(self, well_test: WellTestRate) -> WellTestRate:
        """
        Record a new well test.

        Raises:
            BusinessRuleViolationException: When a test already exists for the same well and date
        """
        pass

    @abstractmethod
    async def get_by_well(self, well_id: str) -> List[WellTestRate]:
        """Get all tests for a well, newest first."""
        pass
