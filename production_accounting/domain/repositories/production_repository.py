from abc import ABC, abstractmethod
from datetime import date
from typing import List, Optional, Tuple
from ..entities.production_reading import ProductionReading, StandardizedProduction


class ProductionRepository(ABC):
    """Repository interface for gross readings and their standardized records."""

    @abstractmethod
    async def get(self, well_id: str, production_date: date) -> Optional[ProductionReading]:
        """Get the reading for a well and day."""
        pass

    @abstractmethod
    async def get_standardized(self, well_id: str, production_date: date) -> Optional[StandardizedProduction]:
        """Get the standardized record derived from a reading."""
        pass

    @abstractmethod
    async def save(
        self,
        reading: ProductionReading,
        standardized: StandardizedProduction,
        replaces: Optional[Tuple[str, date]] = None
    ) -> None:
        """
        Insert or replace a reading together with its standardized record.

        Both rows are written atomically. When ``replaces`` names another key,
        that reading and its standardized record are removed in the same
        transaction.
        """
        pass

    @abstractmethod
    async def delete(self, well_id: str, production_date: date) -> bool:
        """Delete a reading and its standardized record. Returns whether it existed."""
        pass

    @abstractmethod
    async def get_by_well(self, well_id: str) -> List[ProductionReading]:
        """Get all readings of a well, newest first."""
        pass

    @abstractmethod
    async def count(self) -> int:
        """Get the total count of readings."""
        pass
