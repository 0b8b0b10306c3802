from datetime import date
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

from ..value_objects.standard_conditions import RANKINE_OFFSET


class ProductionReading(BaseModel):
    """Gross daily production reading for a well (field data capture)"""
    well_id: str = Field(min_length=1, description="Identifier of the producing well")
    production_date: date = Field(description="Production day the reading covers")
    gross_oil_volume: Optional[float] = Field(None, ge=0, description="Gross oil volume (bbl)")
    gross_gas_volume: Optional[float] = Field(None, ge=0, description="Gross gas volume at field conditions (Mcf)")
    gross_water_volume: Optional[float] = Field(None, ge=0, description="Gross water volume (bbl)")
    operating_hours: Optional[float] = Field(None, ge=0, le=24, description="Hours on production during the day")
    sand_water_percentage: Optional[float] = Field(None, ge=0, le=100, description="Basic sediment and water (BSW) %")
    temperature: Optional[float] = Field(None, gt=-RANKINE_OFFSET, description="Flowing temperature (F)")
    flowing_tubing_pressure: Optional[float] = Field(None, ge=0, description="Flowing tubing pressure (psia)")
    flowing_casing_pressure: Optional[float] = Field(None, ge=0, description="Flowing casing pressure (psia)")
    choke_size: Optional[float] = Field(None, ge=0, description="Choke size (1/64 in)")
    comments: Optional[str] = Field(None, description="Free-text operator comments")

    model_config = ConfigDict(
        populate_by_name=True,
        allow_inf_nan=False,
        json_schema_extra={
            "example": {
                "well_id": "WELL-001",
                "production_date": "2024-01-15",
                "gross_oil_volume": 100.0,
                "gross_gas_volume": 250.0,
                "gross_water_volume": 25.0,
                "operating_hours": 20.0,
                "sand_water_percentage": 5.0,
                "temperature": 60.0,
                "flowing_tubing_pressure": 14.7
            }
        }
    )

    def get_primary_key(self) -> tuple:
        """Get the primary key components"""
        return (self.well_id, self.production_date)

    def to_dict(self) -> dict:
        """Convert entity to dictionary"""
        return self.model_dump()

    @classmethod
    def from_dict(cls, data: dict) -> 'ProductionReading':
        """Create entity from dictionary"""
        return cls.model_validate(data)


class StandardizedProduction(BaseModel):
    """Standardized (net) production derived from exactly one reading"""
    well_id: str = Field(description="Identifier of the producing well")
    production_date: date = Field(description="Production day of the parent reading")
    net_oil_volume: float = Field(description="Oil volume after BSW correction (bbl)")
    std_gas_volume: float = Field(description="Gas volume at standard conditions (Mcf)")
    std_water_volume: float = Field(description="Water volume (bbl)")
    gor: float = Field(description="Gas-oil ratio (Mcf/bbl)")
    water_cut: float = Field(description="Water share of total liquid (%)")
    production_efficiency: float = Field(description="Share of the day on production (%)")

    model_config = ConfigDict(frozen=True)

    def get_primary_key(self) -> tuple:
        """Get the primary key components"""
        return (self.well_id, self.production_date)

    def to_dict(self) -> dict:
        """Convert entity to dictionary"""
        return self.model_dump()
