from datetime import date
from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class WellTestType(str, Enum):
    PRODUCTION_TEST = "production_test"
    FLOW_TEST = "flow_test"
    PRESSURE_BUILDUP = "pressure_buildup"
    INTERFERENCE_TEST = "interference_test"
    DRILL_STEM_TEST = "drill_stem_test"


class WellTestRate(BaseModel):
    """Measured well test rates. Superseded by newer tests, never edited."""
    well_id: str = Field(min_length=1, description="Identifier of the tested well")
    test_date: date = Field(description="Date the test was taken")
    oil_rate: Optional[float] = Field(None, ge=0, description="Oil rate (bbl/d)")
    gas_rate: Optional[float] = Field(None, ge=0, description="Gas rate (Mcf/d)")
    water_rate: Optional[float] = Field(None, ge=0, description="Water rate (bbl/d)")
    test_type: Optional[WellTestType] = Field(None, description="Kind of test performed")
    duration: Optional[float] = Field(None, ge=0, description="Test duration (hours)")
    comments: Optional[str] = None

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    def get_primary_key(self) -> tuple:
        """Get the primary key components"""
        return (self.well_id, self.test_date)
