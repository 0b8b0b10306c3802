"""
Multi-step volume correction pipeline for hydrocarbon accounting.

Chains BSW removal, temperature volume correction (VCF), shrinkage and
associated gas estimation. This pipeline is invoked explicitly; the daily
standardization in ``standardization.py`` does not use it.
"""
from dataclasses import dataclass
from typing import List, Optional, Tuple

from ...shared.exceptions import ValidationException
from .standardization import calculate_water_cut as _water_cut

STANDARD_TEMPERATURE_F = 60.0
DEFAULT_SHRINKAGE_FACTOR = 0.98
DEFAULT_THERMAL_EXPANSION = 0.0007
WATER_DENSITY_15C = 999.016  # kg/m3
PSI_TO_KPA = 6.89476


@dataclass
class CorrectionFactors:
    """Correction factors configured per product."""
    shrinkage_factor: float = DEFAULT_SHRINKAGE_FACTOR
    vcf_factor: float = 1.0
    thermal_expansion: float = DEFAULT_THERMAL_EXPANSION
    density_at_15c: Optional[float] = None
    standard_temperature: float = STANDARD_TEMPERATURE_F

    @classmethod
    def from_settings(cls, settings=None) -> 'CorrectionFactors':
        """Create CorrectionFactors from application settings"""
        if settings is None:
            from ...shared.config.settings import get_settings
            settings = get_settings()
        return cls(
            shrinkage_factor=settings.DEFAULT_SHRINKAGE_FACTOR,
            thermal_expansion=settings.DEFAULT_THERMAL_EXPANSION,
            standard_temperature=settings.STANDARD_TEMPERATURE_F
        )


@dataclass
class ProductionVolumes:
    """Gross volumes and conditions fed into the correction pipeline."""
    gross_oil: float
    gross_gas: float
    gross_water: float
    bsw: float = 0.0
    temperature: float = STANDARD_TEMPERATURE_F
    pressure: Optional[float] = None
    gor: float = 0.0


@dataclass
class CorrectedVolumes:
    """Output of ``apply_all_corrections``."""
    net_oil: float
    std_gas: float
    std_water: float
    net_oil_after_shrinkage: float
    corrected_gas: float
    corrected_water: float
    gor: float
    water_cut: float
    applied_shrinkage: float
    applied_vcf: float


def apply_bsw_correction(gross_oil: float, bsw: float) -> float:
    """
    Remove basic sediment and water from gross oil.

    Formula: Net Oil = Gross Oil x (1 - BSW/100)

    Raises:
        ValidationException: When BSW is outside [0, 100]
    """
    if bsw < 0 or bsw > 100:
        raise ValidationException("BSW must be between 0 and 100", field="bsw", value=bsw)
    return gross_oil * (1 - bsw / 100)


def apply_shrinkage(volume: float, shrinkage_factor: float = DEFAULT_SHRINKAGE_FACTOR) -> float:
    """
    Account for volume loss between reservoir and stock-tank conditions.

    Raises:
        ValidationException: When the factor is outside (0, 1]
    """
    if shrinkage_factor <= 0 or shrinkage_factor > 1:
        raise ValidationException(
            "Shrinkage factor must be between 0 and 1",
            field="shrinkage_factor",
            value=shrinkage_factor
        )
    return volume * shrinkage_factor


def apply_vcf(
    volume: float,
    observed_temp: float,
    standard_temp: float = STANDARD_TEMPERATURE_F,
    thermal_expansion: float = DEFAULT_THERMAL_EXPANSION
) -> float:
    """
    Correct an observed volume to standard temperature.

    Formula: VCF = 1 - alpha x (T_obs - T_std)
    """
    vcf = 1 - thermal_expansion * (observed_temp - standard_temp)
    return volume * vcf


def calculate_api_gravity(specific_gravity: float) -> float:
    """API = 141.5 / SG - 131.5"""
    if specific_gravity <= 0:
        raise ValidationException(
            "Specific gravity must be positive",
            field="specific_gravity",
            value=specific_gravity
        )
    return 141.5 / specific_gravity - 131.5


def calculate_specific_gravity(api_gravity: float) -> float:
    """SG = 141.5 / (API + 131.5)"""
    if api_gravity < 0:
        raise ValidationException(
            "API gravity must be non-negative",
            field="api_gravity",
            value=api_gravity
        )
    return 141.5 / (api_gravity + 131.5)


def calculate_density_at_15c(api_gravity: float) -> float:
    """Oil density in kg/m3 at 15 C from API gravity."""
    return calculate_specific_gravity(api_gravity) * WATER_DENSITY_15C


def calculate_associated_gas(oil_volume: float, gor: float) -> float:
    """Associated gas = oil volume x GOR."""
    if gor < 0:
        raise ValidationException("GOR must be non-negative", field="gor", value=gor)
    return oil_volume * gor


def calculate_water_cut(oil_volume: float, water_volume: float) -> float:
    """Water cut in percent, oil first to match the pipeline's argument order."""
    return _water_cut(water_volume, oil_volume)


def apply_all_corrections(
    volumes: ProductionVolumes,
    factors: Optional[CorrectionFactors] = None
) -> CorrectedVolumes:
    """
    Run the full correction chain over one set of gross volumes.

    Steps:
        1. BSW correction of oil
        2. VCF temperature correction of net oil
        3. Shrinkage
        4. VCF on gas
        5. Associated gas from GOR when a GOR is given
        6. VCF on water
        7. Water cut and effective GOR from corrected volumes

    Args:
        volumes: Gross volumes and conditions
        factors: Correction factors, defaults when omitted

    Returns:
        CorrectedVolumes with every intermediate result
    """
    factors = factors or CorrectionFactors()
    alpha = factors.thermal_expansion
    standard_temp = factors.standard_temperature

    net_oil = apply_bsw_correction(volumes.gross_oil, volumes.bsw)
    temp_corrected_oil = apply_vcf(net_oil, volumes.temperature, standard_temp, alpha)
    net_oil_after_shrinkage = apply_shrinkage(temp_corrected_oil, factors.shrinkage_factor)

    corrected_gas = apply_vcf(volumes.gross_gas, volumes.temperature, standard_temp, alpha)
    if volumes.gor > 0:
        total_gas = calculate_associated_gas(net_oil_after_shrinkage, volumes.gor)
    else:
        total_gas = corrected_gas

    corrected_water = apply_vcf(volumes.gross_water, volumes.temperature, standard_temp, alpha)
    water_cut = calculate_water_cut(net_oil_after_shrinkage, corrected_water)
    effective_gor = total_gas / net_oil_after_shrinkage if net_oil_after_shrinkage > 0 else 0.0

    return CorrectedVolumes(
        net_oil=net_oil,
        std_gas=corrected_gas,
        std_water=corrected_water,
        net_oil_after_shrinkage=net_oil_after_shrinkage,
        corrected_gas=total_gas,
        corrected_water=corrected_water,
        gor=effective_gor,
        water_cut=water_cut,
        applied_shrinkage=factors.shrinkage_factor,
        applied_vcf=factors.vcf_factor
    )


def validate_production_volumes(volumes: ProductionVolumes) -> Tuple[bool, List[str]]:
    """
    Check pipeline inputs without raising.

    Returns:
        Tuple of (is_valid, list_of_errors)
    """
    errors = []

    if volumes.gross_oil < 0:
        errors.append("Gross oil volume cannot be negative")
    if volumes.gross_gas < 0:
        errors.append("Gross gas volume cannot be negative")
    if volumes.gross_water < 0:
        errors.append("Gross water volume cannot be negative")
    if not 0 <= volumes.bsw <= 100:
        errors.append("BSW must be between 0 and 100")
    if volumes.temperature < -100:
        errors.append("Temperature seems invalid")
    if volumes.pressure is not None and volumes.pressure < 0:
        errors.append("Pressure cannot be negative")
    if volumes.gor < 0:
        errors.append("GOR cannot be negative")

    return len(errors) == 0, errors


def convert_temperature(value: float, from_unit: str, to_unit: str) -> float:
    """Convert between Fahrenheit ('F') and Celsius ('C')."""
    units = {"F", "C"}
    if from_unit not in units or to_unit not in units:
        raise ValidationException("Temperature unit must be 'F' or 'C'", field="unit", value=f"{from_unit}->{to_unit}")
    if from_unit == to_unit:
        return value
    if from_unit == "F":
        return (value - 32) * 5 / 9
    return value * 9 / 5 + 32


def convert_pressure(value: float, from_unit: str, to_unit: str) -> float:
    """Convert between 'PSI' and 'kPa'."""
    units = {"PSI", "kPa"}
    if from_unit not in units or to_unit not in units:
        raise ValidationException("Pressure unit must be 'PSI' or 'kPa'", field="unit", value=f"{from_unit}->{to_unit}")
    if from_unit == to_unit:
        return value
    if from_unit == "PSI":
        return value * PSI_TO_KPA
    return value / PSI_TO_KPA
