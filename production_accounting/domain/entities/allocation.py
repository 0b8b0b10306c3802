from datetime import date
from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field


class AllocationMethod(str, Enum):
    """How a facility total is distributed back to its wells"""
    MANUAL = "manual"
    TEST_BASED = "test_based"
    PRO_RATA = "pro_rata"
    POTENTIAL_BASED = "potential_based"

    @property
    def computes_from_totals(self) -> bool:
        """Whether the method derives well volumes from the facility totals."""
        return self in (AllocationMethod.TEST_BASED, AllocationMethod.PRO_RATA)


class AllocationTotals(BaseModel):
    """Facility meter totals for one allocation day"""
    oil_volume: float = Field(0.0, ge=0, description="Facility oil total (bbl)")
    gas_volume: float = Field(0.0, ge=0, description="Facility gas total (Mcf)")
    water_volume: float = Field(0.0, ge=0, description="Facility water total (bbl)")

    model_config = ConfigDict(allow_inf_nan=False)


class WellAllocationInput(BaseModel):
    """Caller-supplied allocation line for one well"""
    well_id: str = Field(min_length=1)
    allocated_oil_volume: Optional[float] = Field(None, ge=0)
    allocated_gas_volume: Optional[float] = Field(None, ge=0)
    allocated_water_volume: Optional[float] = Field(None, ge=0)
    allocation_factor: Optional[float] = Field(None, ge=0, description="Manual weight or percent share")
    test_oil_rate: Optional[float] = Field(None, ge=0, description="Fallback oil rate when no test is on record")
    test_gas_rate: Optional[float] = Field(None, ge=0, description="Fallback gas rate when no test is on record")
    test_water_rate: Optional[float] = Field(None, ge=0, description="Fallback water rate when no test is on record")
    comments: Optional[str] = None

    model_config = ConfigDict(allow_inf_nan=False)


class WellAllocation(BaseModel):
    """Allocated share of a facility total for one well"""
    well_id: str
    allocated_oil_volume: float = 0.0
    allocated_gas_volume: float = 0.0
    allocated_water_volume: float = 0.0
    allocation_factor: float = 0.0
    test_oil_rate: float = 0.0
    test_gas_rate: float = 0.0
    test_water_rate: float = 0.0
    comments: Optional[str] = None


class Allocation(BaseModel):
    """One allocation batch per (date, facility, method)"""
    allocation_date: date
    facility_id: Optional[str] = None
    method: AllocationMethod
    totals: AllocationTotals = Field(default_factory=AllocationTotals)
    well_allocations: List[WellAllocation] = Field(default_factory=list)
    comments: Optional[str] = None

    def get_primary_key(self) -> tuple:
        """Get the primary key components"""
        return (self.allocation_date, self.facility_id, self.method.value)

    def allocated_totals(self) -> AllocationTotals:
        """Sum of the allocated well volumes per stream."""
        return AllocationTotals(
            oil_volume=sum(wa.allocated_oil_volume for wa in self.well_allocations),
            gas_volume=sum(wa.allocated_gas_volume for wa in self.well_allocations),
            water_volume=sum(wa.allocated_water_volume for wa in self.well_allocations)
        )

    def conservation_gap(self) -> float:
        """Largest absolute difference between facility and allocated totals."""
        allocated = self.allocated_totals()
        return max(
            abs(self.totals.oil_volume - allocated.oil_volume),
            abs(self.totals.gas_volume - allocated.gas_volume),
            abs(self.totals.water_volume - allocated.water_volume)
        )

    def is_balanced(self, tolerance: float = 0.01) -> bool:
        """Whether allocated volumes add back up to the facility totals."""
        return self.conservation_gap() <= tolerance
