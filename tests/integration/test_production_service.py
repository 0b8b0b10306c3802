"""
Integration tests for the production reading lifecycle.
"""
from datetime import date

import pytest

from production_accounting.application.services.production_service import ProductionService
from production_accounting.domain.entities.production_reading import ProductionReading
from production_accounting.domain.value_objects.standard_conditions import StandardConditions
from production_accounting.shared.exceptions import BusinessRuleViolationException, NotFoundException


class TestRecordReading:

    @pytest.mark.asyncio
    async def test_record_stores_reading_and_standardized(self, production_service, production_repository, sample_reading):
        reading, standardized = await production_service.record_reading(sample_reading)

        assert reading == sample_reading
        assert standardized.net_oil_volume == 95.0
        assert await production_repository.get("WELL-001", sample_reading.production_date) == sample_reading
        assert await production_service.get_standardized("WELL-001", sample_reading.production_date) == standardized

    @pytest.mark.asyncio
    async def test_duplicate_reading_rejected(self, production_service, production_repository, sample_reading):
        await production_service.record_reading(sample_reading)

        with pytest.raises(BusinessRuleViolationException) as exc_info:
            await production_service.record_reading(sample_reading.model_copy(update={"gross_oil_volume": 10.0}))

        assert exc_info.value.message == "Production entry already exists for this well and date"
        assert exc_info.value.context["rule"] == "unique_well_date"
        stored = await production_repository.get("WELL-001", sample_reading.production_date)
        assert stored.gross_oil_volume == 100.0

    @pytest.mark.asyncio
    async def test_preview_does_not_persist(self, production_service, production_repository, sample_reading):
        standardized = production_service.preview(sample_reading)

        assert standardized.water_cut == 20.83
        assert await production_repository.count() == 0

    @pytest.mark.asyncio
    async def test_custom_conditions_and_decimals(self, production_repository):
        service = ProductionService(
            production_repository,
            conditions=StandardConditions(temperature_f=60.0, pressure_psia=29.4),
            decimals=1
        )
        reading = ProductionReading(
            well_id="W1",
            production_date=date(2024, 1, 1),
            gross_gas_volume=100.0,
            flowing_tubing_pressure=14.7,
            operating_hours=1.0
        )

        _, standardized = await service.record_reading(reading)

        assert standardized.std_gas_volume == 50.0
        assert standardized.production_efficiency == 4.2


class TestUpdateReading:

    @pytest.mark.asyncio
    async def test_update_recomputes(self, production_service, sample_reading):
        await production_service.record_reading(sample_reading)
        updated = sample_reading.model_copy(update={"sand_water_percentage": 10.0})

        _, standardized = await production_service.update_reading("WELL-001", sample_reading.production_date, updated)

        assert standardized.net_oil_volume == 90.0
        stored = await production_service.get_standardized("WELL-001", sample_reading.production_date)
        assert stored.net_oil_volume == 90.0

    @pytest.mark.asyncio
    async def test_update_can_move_reading(self, production_service, production_repository, sample_reading):
        await production_service.record_reading(sample_reading)
        moved = sample_reading.model_copy(update={"production_date": date(2024, 1, 16)})

        await production_service.update_reading("WELL-001", sample_reading.production_date, moved)

        assert await production_repository.get("WELL-001", sample_reading.production_date) is None
        assert await production_service.get_standardized("WELL-001", sample_reading.production_date) is None
        assert await production_repository.get("WELL-001", date(2024, 1, 16)) == moved
        assert await production_repository.count() == 1

    @pytest.mark.asyncio
    async def test_update_onto_existing_key_rejected(self, production_service, sample_reading):
        other_day = sample_reading.model_copy(update={"production_date": date(2024, 1, 16)})
        await production_service.record_reading(sample_reading)
        await production_service.record_reading(other_day)

        with pytest.raises(BusinessRuleViolationException):
            await production_service.update_reading("WELL-001", sample_reading.production_date, other_day)

    @pytest.mark.asyncio
    async def test_update_missing_reading(self, production_service, sample_reading):
        with pytest.raises(NotFoundException) as exc_info:
            await production_service.update_reading("WELL-001", sample_reading.production_date, sample_reading)

        assert exc_info.value.context["resource"] == "production_reading"

    @pytest.mark.asyncio
    async def test_upsert_overwrites(self, production_service, production_repository, sample_reading):
        await production_service.upsert_reading(sample_reading)
        _, standardized = await production_service.upsert_reading(
            sample_reading.model_copy(update={"gross_oil_volume": 200.0})
        )

        assert standardized.net_oil_volume == 190.0
        assert await production_repository.count() == 1


class TestDeleteReading:

    @pytest.mark.asyncio
    async def test_delete_removes_both_records(self, production_service, production_repository, sample_reading):
        await production_service.record_reading(sample_reading)

        await production_service.delete_reading("WELL-001", sample_reading.production_date)

        assert await production_repository.get("WELL-001", sample_reading.production_date) is None
        assert await production_service.get_standardized("WELL-001", sample_reading.production_date) is None

    @pytest.mark.asyncio
    async def test_delete_missing_reading(self, production_service, production_date):
        with pytest.raises(NotFoundException):
            await production_service.delete_reading("WELL-404", production_date)
