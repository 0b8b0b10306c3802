"""
Production service managing the lifecycle of gross readings and their
standardized records.
"""
import logging
from datetime import date
from typing import Optional, Tuple

from ...domain.entities.production_reading import ProductionReading, StandardizedProduction
from ...domain.repositories.production_repository import ProductionRepository
from ...domain.services.standardization import standardize
from ...domain.value_objects.standard_conditions import StandardConditions
from ...shared.config.settings import get_settings
from ...shared.exceptions import BusinessRuleViolationException, NotFoundException

logger = logging.getLogger(__name__)


class ProductionService:
    """Records, recomputes and removes production readings."""

    def __init__(
        self,
        repository: ProductionRepository,
        conditions: Optional[StandardConditions] = None,
        decimals: Optional[int] = None
    ):
        settings = get_settings()
        self.repository = repository
        self.conditions = conditions or settings.standard_conditions()
        self.decimals = decimals if decimals is not None else settings.ROUNDING_DECIMALS

    def preview(self, reading: ProductionReading) -> StandardizedProduction:
        """Standardize a reading without persisting anything."""
        return standardize(reading, self.conditions, self.decimals)

    async def record_reading(self, reading: ProductionReading) -> Tuple[ProductionReading, StandardizedProduction]:
        """
        Store a new reading with its standardized record.

        Raises:
            BusinessRuleViolationException: When the well already has a reading for that day
        """
        await self._ensure_key_free(reading.well_id, reading.production_date)

        standardized = self.preview(reading)
        await self.repository.save(reading, standardized)
        logger.info(f"Recorded production for {reading.well_id} on {reading.production_date.isoformat()}")
        return reading, standardized

    async def update_reading(
        self,
        well_id: str,
        production_date: date,
        reading: ProductionReading
    ) -> Tuple[ProductionReading, StandardizedProduction]:
        """
        Replace an existing reading and recompute its standardized record.

        The new reading may move to another well or day as long as that key is free.

        Raises:
            NotFoundException: When no reading exists for the given key
            BusinessRuleViolationException: When the new key is already taken
        """
        existing = await self.repository.get(well_id, production_date)
        if existing is None:
            raise NotFoundException(
                message=f"No production reading for {well_id} on {production_date.isoformat()}",
                resource="production_reading",
                key=(well_id, production_date)
            )

        if reading.get_primary_key() != existing.get_primary_key():
            await self._ensure_key_free(reading.well_id, reading.production_date)

        standardized = self.preview(reading)
        await self.repository.save(reading, standardized, replaces=existing.get_primary_key())
        logger.info(f"Updated production for {well_id} on {production_date.isoformat()}")
        return reading, standardized

    async def upsert_reading(self, reading: ProductionReading) -> Tuple[ProductionReading, StandardizedProduction]:
        """Create or overwrite the reading for its well and day."""
        standardized = self.preview(reading)
        await self.repository.save(reading, standardized)
        return reading, standardized

    async def delete_reading(self, well_id: str, production_date: date) -> None:
        """
        Delete a reading together with its standardized record.

        Raises:
            NotFoundException: When no reading exists for the given key
        """
        deleted = await self.repository.delete(well_id, production_date)
        if not deleted:
            raise NotFoundException(
                message=f"No production reading for {well_id} on {production_date.isoformat()}",
                resource="production_reading",
                key=(well_id, production_date)
            )
        logger.info(f"Deleted production for {well_id} on {production_date.isoformat()}")

    async def get_standardized(self, well_id: str, production_date: date) -> Optional[StandardizedProduction]:
        """Get the standardized record for a well and day."""
        return await self.repository.get_standardized(well_id, production_date)

    async def _ensure_key_free(self, well_id: str, production_date: date) -> None:
        if await self.repository.get(well_id, production_date) is not None:
            raise BusinessRuleViolationException(
                message="Production entry already exists for this well and date",
                rule="unique_well_date",
                context={"well_id": well_id, "production_date": production_date.isoformat()}
            )
