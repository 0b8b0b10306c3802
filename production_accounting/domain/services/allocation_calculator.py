"""
Distribution of facility totals back to individual wells.

Pure functions; the asynchronous well test lookups for test-based
allocation live in ``AllocationService``.
"""
from typing import List, Optional, Sequence, Tuple

from ..entities.allocation import AllocationTotals, WellAllocation, WellAllocationInput
from ..entities.well_test import WellTestRate
from ..value_objects.standard_conditions import WellRates
from ...shared.exceptions import BusinessRuleViolationException


def pass_through(well_inputs: Sequence[WellAllocationInput]) -> List[WellAllocation]:
    """Manual and potential-based allocations keep the caller's volumes."""
    return [
        WellAllocation(
            well_id=wi.well_id,
            allocated_oil_volume=wi.allocated_oil_volume or 0.0,
            allocated_gas_volume=wi.allocated_gas_volume or 0.0,
            allocated_water_volume=wi.allocated_water_volume or 0.0,
            allocation_factor=wi.allocation_factor or 0.0,
            test_oil_rate=wi.test_oil_rate or 0.0,
            test_gas_rate=wi.test_gas_rate or 0.0,
            test_water_rate=wi.test_water_rate or 0.0,
            comments=wi.comments
        )
        for wi in well_inputs
    ]


def allocate_pro_rata(
    well_inputs: Sequence[WellAllocationInput],
    totals: AllocationTotals
) -> List[WellAllocation]:
    """
    Split totals in proportion to the manually assigned factors.

    share_i = factor_i / sum(factors); allocated_i = share_i x total

    Raises:
        BusinessRuleViolationException: When the factors sum to zero
    """
    total_factor = sum(wi.allocation_factor or 0.0 for wi in well_inputs)
    if total_factor <= 0:
        raise BusinessRuleViolationException(
            message="Pro-rata allocation needs at least one well with a positive allocation factor",
            rule="pro_rata_factor_sum",
            context={"well_count": len(well_inputs), "total_factor": total_factor}
        )

    allocations = []
    for wi in well_inputs:
        factor = wi.allocation_factor or 0.0
        share = factor / total_factor
        allocations.append(WellAllocation(
            well_id=wi.well_id,
            allocated_oil_volume=share * totals.oil_volume,
            allocated_gas_volume=share * totals.gas_volume,
            allocated_water_volume=share * totals.water_volume,
            allocation_factor=factor,
            test_oil_rate=wi.test_oil_rate or 0.0,
            test_gas_rate=wi.test_gas_rate or 0.0,
            test_water_rate=wi.test_water_rate or 0.0,
            comments=wi.comments
        ))
    return allocations


def _pick_rate(measured: Optional[float], fallback: Optional[float]) -> float:
    if measured is not None:
        return measured
    if fallback is not None:
        return fallback
    return 0.0


def resolve_well_rates(
    well_input: WellAllocationInput,
    latest_test: Optional[WellTestRate]
) -> WellRates:
    """
    Effective rates for one well: latest test, else caller fallback, else 0.

    Resolution is per stream, so a test that measured only oil still takes
    gas and water from the fallback rates.
    """
    if latest_test is None:
        return WellRates(
            oil=well_input.test_oil_rate or 0.0,
            gas=well_input.test_gas_rate or 0.0,
            water=well_input.test_water_rate or 0.0
        )
    return WellRates(
        oil=_pick_rate(latest_test.oil_rate, well_input.test_oil_rate),
        gas=_pick_rate(latest_test.gas_rate, well_input.test_gas_rate),
        water=_pick_rate(latest_test.water_rate, well_input.test_water_rate)
    )


def _percent_share(rate: float, total_rate: float) -> float:
    return rate / total_rate * 100 if total_rate > 0 else 0.0


def allocate_test_based(
    resolved: Sequence[Tuple[WellAllocationInput, WellRates]],
    totals: AllocationTotals
) -> List[WellAllocation]:
    """
    Split totals in proportion to each well's resolved test rates.

    factor_i = rate_i / sum(rates) x 100 per stream; the stored
    allocation_factor is the oil factor.
    """
    total_rates = WellRates()
    for _, rates in resolved:
        total_rates = total_rates + rates

    allocations = []
    for wi, rates in resolved:
        oil_factor = _percent_share(rates.oil, total_rates.oil)
        gas_factor = _percent_share(rates.gas, total_rates.gas)
        water_factor = _percent_share(rates.water, total_rates.water)

        allocations.append(WellAllocation(
            well_id=wi.well_id,
            allocated_oil_volume=oil_factor / 100 * totals.oil_volume,
            allocated_gas_volume=gas_factor / 100 * totals.gas_volume,
            allocated_water_volume=water_factor / 100 * totals.water_volume,
            allocation_factor=oil_factor,
            test_oil_rate=rates.oil,
            test_gas_rate=rates.gas,
            test_water_rate=rates.water,
            comments=wi.comments
        ))
    return allocations
