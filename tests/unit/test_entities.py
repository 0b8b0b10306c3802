"""
Unit tests for entity validation and allocation balance helpers.
"""
import pytest
from datetime import date
from pydantic import ValidationError

from production_accounting.domain.entities.allocation import (
    Allocation,
    AllocationMethod,
    AllocationTotals,
    WellAllocation,
    WellAllocationInput
)
from production_accounting.domain.entities.production_reading import ProductionReading
from production_accounting.domain.entities.well_test import WellTestRate, WellTestType
from production_accounting.domain.value_objects.standard_conditions import StandardConditions, WellRates


class TestProductionReading:

    def test_minimal_reading(self):
        reading = ProductionReading(well_id="W1", production_date="2024-01-15")

        assert reading.production_date == date(2024, 1, 15)
        assert reading.gross_oil_volume is None
        assert reading.get_primary_key() == ("W1", date(2024, 1, 15))

    @pytest.mark.parametrize("field,value", [
        ("operating_hours", 24.5),
        ("operating_hours", -1.0),
        ("sand_water_percentage", 100.1),
        ("sand_water_percentage", -0.1),
        ("gross_oil_volume", -5.0),
        ("gross_gas_volume", -5.0),
        ("gross_water_volume", -5.0),
        ("flowing_tubing_pressure", -1.0),
        ("temperature", -500.0),
    ])
    def test_out_of_range_values_rejected(self, field, value):
        with pytest.raises(ValidationError):
            ProductionReading(well_id="W1", production_date=date(2024, 1, 15), **{field: value})

    @pytest.mark.parametrize("hours", [0.0, 24.0])
    def test_operating_hours_bounds_are_inclusive(self, hours):
        reading = ProductionReading(well_id="W1", production_date=date(2024, 1, 15), operating_hours=hours)
        assert reading.operating_hours == hours

    def test_empty_well_id_rejected(self):
        with pytest.raises(ValidationError):
            ProductionReading(well_id="", production_date=date(2024, 1, 15))

    def test_dict_round_trip(self, sample_reading):
        assert ProductionReading.from_dict(sample_reading.to_dict()) == sample_reading


class TestWellTestRate:

    def test_test_type_parsed(self):
        well_test = WellTestRate(well_id="W1", test_date=date(2024, 1, 1), test_type="flow_test")
        assert well_test.test_type == WellTestType.FLOW_TEST

    def test_negative_rate_rejected(self):
        with pytest.raises(ValidationError):
            WellTestRate(well_id="W1", test_date=date(2024, 1, 1), oil_rate=-1.0)

    def test_immutable(self):
        well_test = WellTestRate(well_id="W1", test_date=date(2024, 1, 1), oil_rate=1.0)
        with pytest.raises(ValidationError):
            well_test.oil_rate = 2.0


class TestAllocation:

    def _allocation(self, oil_volumes):
        return Allocation(
            allocation_date=date(2024, 1, 15),
            facility_id="FAC-1",
            method=AllocationMethod.PRO_RATA,
            totals=AllocationTotals(oil_volume=600.0),
            well_allocations=[
                WellAllocation(well_id=f"W{i}", allocated_oil_volume=v) for i, v in enumerate(oil_volumes)
            ]
        )

    def test_balanced_allocation(self):
        allocation = self._allocation([300.0, 200.0, 100.0])

        assert allocation.allocated_totals().oil_volume == pytest.approx(600.0)
        assert allocation.is_balanced()

    def test_unbalanced_allocation(self):
        allocation = self._allocation([300.0, 200.0])

        assert allocation.conservation_gap() == pytest.approx(100.0)
        assert not allocation.is_balanced()
        assert allocation.is_balanced(tolerance=100.0)

    def test_primary_key(self):
        assert self._allocation([]).get_primary_key() == (date(2024, 1, 15), "FAC-1", "pro_rata")

    def test_negative_totals_rejected(self):
        with pytest.raises(ValidationError):
            AllocationTotals(oil_volume=-1.0)

    @pytest.mark.parametrize("method,expected", [
        (AllocationMethod.MANUAL, False),
        (AllocationMethod.TEST_BASED, True),
        (AllocationMethod.PRO_RATA, True),
        (AllocationMethod.POTENTIAL_BASED, False),
    ])
    def test_computes_from_totals(self, method, expected):
        assert method.computes_from_totals is expected


class TestValueObjects:

    def test_standard_conditions_rankine(self):
        assert StandardConditions().temperature_rankine == pytest.approx(519.67)

    @pytest.mark.parametrize("temperature,pressure", [(-459.67, 14.7), (60.0, 0.0)])
    def test_invalid_standard_conditions(self, temperature, pressure):
        with pytest.raises(ValueError):
            StandardConditions(temperature_f=temperature, pressure_psia=pressure)

    def test_well_rates_add(self):
        assert WellRates(1.0, 2.0, 3.0) + WellRates(4.0, 5.0, 6.0) == WellRates(5.0, 7.0, 9.0)


class TestNonFiniteValues:
    """Infinite and NaN values never reach the calculators."""

    @pytest.mark.parametrize("value", [float("inf"), float("nan"), "inf"])
    def test_reading_rejects_non_finite_volume(self, value):
        with pytest.raises(ValidationError):
            ProductionReading(well_id="W1", production_date=date(2024, 1, 15), gross_oil_volume=value)

    def test_reading_rejects_infinite_temperature(self):
        with pytest.raises(ValidationError):
            ProductionReading(well_id="W1", production_date=date(2024, 1, 15), temperature=float("inf"))

    def test_well_test_rejects_infinite_rate(self):
        with pytest.raises(ValidationError):
            WellTestRate(well_id="W1", test_date=date(2024, 1, 1), gas_rate=float("inf"))

    def test_allocation_inputs_reject_infinite_values(self):
        with pytest.raises(ValidationError):
            AllocationTotals(oil_volume=float("inf"))
        with pytest.raises(ValidationError):
            WellAllocationInput(well_id="W1", allocation_factor=float("inf"))
