"""
Standardization of gross daily production readings.

Converts field-measured volumes into net oil, standard-condition gas and the
derived GOR, water cut and efficiency ratios. Every function is pure; range
validation happens on ``ProductionReading`` before a reading gets here.
"""
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from ..entities.production_reading import ProductionReading, StandardizedProduction
from ..value_objects.standard_conditions import StandardConditions, STANDARD_CONDITIONS, RANKINE_OFFSET

HOURS_PER_DAY = 24.0


def round_half_up(value: float, decimals: int = 2) -> float:
    """
    Round to ``decimals`` places, halves away from zero.

    Goes through the shortest decimal repr so 2.675 rounds to 2.68, not 2.67.
    """
    quantum = Decimal(1).scaleb(-decimals)
    return float(Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def calculate_net_oil_volume(
    gross_oil: Optional[float],
    sand_water_percentage: Optional[float]
) -> float:
    """
    Net oil after removing basic sediment and water.

    Formula: Net Oil = Gross Oil x (1 - BSW / 100)
    """
    oil = gross_oil or 0.0
    bsw = sand_water_percentage or 0.0
    return oil * (1 - bsw / 100)


def standardize_gas_volume(
    field_gas_volume: Optional[float],
    field_temperature: Optional[float],
    field_pressure: Optional[float],
    conditions: StandardConditions = STANDARD_CONDITIONS
) -> float:
    """
    Correct a field gas volume to standard conditions (ideal gas law).

    Missing temperature or pressure default to the standard values, which
    makes the correction factor exactly 1.

    Formula: Std Gas = Gas x (P / P_std) x (T_std_R / T_field_R)
    """
    gas = field_gas_volume or 0.0
    temperature = conditions.temperature_f if field_temperature is None else field_temperature
    pressure = conditions.pressure_psia if field_pressure is None else field_pressure

    field_temperature_r = temperature + RANKINE_OFFSET
    correction_factor = (pressure / conditions.pressure_psia) * (conditions.temperature_rankine / field_temperature_r)
    return gas * correction_factor


def calculate_gor(gas_volume: Optional[float], oil_volume: Optional[float]) -> float:
    """Gas-oil ratio (Mcf/bbl). Zero when there is no oil."""
    gas = gas_volume or 0.0
    oil = oil_volume or 0.0
    if oil <= 0:
        return 0.0
    return gas / oil


def calculate_water_cut(water_volume: Optional[float], oil_volume: Optional[float]) -> float:
    """Water share of total liquid in percent. Zero when there is no liquid."""
    water = water_volume or 0.0
    oil = oil_volume or 0.0
    total_liquid = oil + water
    if total_liquid == 0:
        return 0.0
    return water / total_liquid * 100


def calculate_production_efficiency(operating_hours: Optional[float]) -> float:
    """Share of the production day the well was on line, in percent."""
    hours = operating_hours or 0.0
    return hours / HOURS_PER_DAY * 100


def standardize(
    reading: ProductionReading,
    conditions: Optional[StandardConditions] = None,
    decimals: int = 2
) -> StandardizedProduction:
    """
    Derive the standardized record for a gross production reading.

    Args:
        reading: Validated gross reading
        conditions: Reference conditions, defaults to 60 F / 14.7 psia
        decimals: Decimal places every output is rounded to

    Returns:
        StandardizedProduction keyed like the reading
    """
    conditions = conditions or STANDARD_CONDITIONS

    net_oil_volume = calculate_net_oil_volume(
        reading.gross_oil_volume,
        reading.sand_water_percentage
    )
    std_gas_volume = standardize_gas_volume(
        reading.gross_gas_volume,
        reading.temperature,
        reading.flowing_tubing_pressure,
        conditions
    )
    std_water_volume = reading.gross_water_volume or 0.0
    gor = calculate_gor(std_gas_volume, net_oil_volume)
    water_cut = calculate_water_cut(reading.gross_water_volume, net_oil_volume)
    production_efficiency = calculate_production_efficiency(reading.operating_hours)

    return StandardizedProduction(
        well_id=reading.well_id,
        production_date=reading.production_date,
        net_oil_volume=round_half_up(net_oil_volume, decimals),
        std_gas_volume=round_half_up(std_gas_volume, decimals),
        std_water_volume=round_half_up(std_water_volume, decimals),
        gor=round_half_up(gor, decimals),
        water_cut=round_half_up(water_cut, decimals),
        production_efficiency=round_half_up(production_efficiency, decimals)
    )
