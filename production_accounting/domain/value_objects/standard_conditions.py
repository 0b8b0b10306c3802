from dataclasses import dataclass

RANKINE_OFFSET = 459.67


@dataclass(frozen=True)
class StandardConditions:
    """Reference temperature and pressure volumes are corrected to."""
    temperature_f: float = 60.0
    pressure_psia: float = 14.7

    def __post_init__(self):
        if self.temperature_f <= -RANKINE_OFFSET:
            raise ValueError("Standard temperature must be above absolute zero")
        if self.pressure_psia <= 0:
            raise ValueError("Standard pressure must be positive")

    @property
    def temperature_rankine(self) -> float:
        return self.temperature_f + RANKINE_OFFSET


STANDARD_CONDITIONS = StandardConditions()


@dataclass(frozen=True)
class WellRates:
    """Oil, gas and water rates resolved for one well."""
    oil: float = 0.0
    gas: float = 0.0
    water: float = 0.0

    def __add__(self, other: 'WellRates') -> 'WellRates':
        return WellRates(
            oil=self.oil + other.oil,
            gas=self.gas + other.gas,
            water=self.water + other.water
        )
