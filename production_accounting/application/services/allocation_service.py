"""
Allocation service distributing facility totals to wells.
Resolves well test rates through the repository port before delegating
the arithmetic to the pure allocation calculator.
"""
import asyncio
import logging
from datetime import date
from typing import List, Optional, Sequence

from ...domain.entities.allocation import (
    Allocation,
    AllocationMethod,
    AllocationTotals,
    WellAllocation,
    WellAllocationInput
)
from ...domain.entities.well_test import WellTestRate
from ...domain.repositories.well_test_repository import WellTestRepository
from ...domain.services.allocation_calculator import (
    allocate_pro_rata,
    allocate_test_based,
    pass_through,
    resolve_well_rates
)
from ...shared.config.settings import get_settings
from ...shared.exceptions import ApplicationException, InfrastructureException
from ...shared.utils.timing_decorator import async_timed

logger = logging.getLogger(__name__)


class AllocationService:
    """
    Service for allocation business operations.
    Uses dependency injection for the well test lookup.
    """

    def __init__(
        self,
        well_test_repository: WellTestRepository,
        max_concurrent_lookups: Optional[int] = None,
        balance_tolerance: Optional[float] = None
    ):
        settings = get_settings()
        self.well_test_repository = well_test_repository
        self.max_concurrent_lookups = max_concurrent_lookups or settings.WELL_TEST_LOOKUP_CONCURRENCY
        self.balance_tolerance = (
            balance_tolerance if balance_tolerance is not None else settings.ALLOCATION_BALANCE_TOLERANCE
        )

    @async_timed
    async def allocate(
        self,
        method: AllocationMethod,
        totals: AllocationTotals,
        well_inputs: Sequence[WellAllocationInput],
        allocation_date: Optional[date] = None,
        facility_id: Optional[str] = None,
        comments: Optional[str] = None
    ) -> Allocation:
        """
        Build an allocation batch for a facility total.

        Args:
            method: Allocation method
            totals: Facility meter totals
            well_inputs: One input line per well
            allocation_date: Day being allocated; test lookups use tests on or before it
            facility_id: Optional facility identifier
            comments: Optional batch comments

        Returns:
            Allocation with one WellAllocation per input

        Raises:
            BusinessRuleViolationException: When pro-rata factors sum to zero
            InfrastructureException: When the well test lookup fails
        """
        method = AllocationMethod(method)
        allocation_date = allocation_date or date.today()
        logger.info(
            f"Allocating {method.value} for facility {facility_id or '-'} on "
            f"{allocation_date.isoformat()} across {len(well_inputs)} wells"
        )

        well_allocations = await self._compute_well_allocations(method, totals, well_inputs, allocation_date)

        allocation = Allocation(
            allocation_date=allocation_date,
            facility_id=facility_id,
            method=method,
            totals=totals,
            well_allocations=well_allocations,
            comments=comments
        )

        if method.computes_from_totals:
            gap = allocation.conservation_gap()
            if gap > self.balance_tolerance:
                logger.warning(
                    f"Allocation {allocation.get_primary_key()} does not balance: gap {gap:.4f} "
                    f"exceeds tolerance {self.balance_tolerance}"
                )
            else:
                logger.debug(f"Allocation {allocation.get_primary_key()} balanced within {gap:.6f}")

        return allocation

    async def _compute_well_allocations(
        self,
        method: AllocationMethod,
        totals: AllocationTotals,
        well_inputs: Sequence[WellAllocationInput],
        allocation_date: date
    ) -> List[WellAllocation]:
        if method == AllocationMethod.PRO_RATA:
            return allocate_pro_rata(well_inputs, totals)

        if method == AllocationMethod.TEST_BASED:
            latest_tests = await self._fetch_latest_tests(well_inputs, allocation_date)
            resolved = [
                (wi, resolve_well_rates(wi, latest_test))
                for wi, latest_test in zip(well_inputs, latest_tests)
            ]
            return allocate_test_based(resolved, totals)

        return pass_through(well_inputs)

    async def _fetch_latest_tests(
        self,
        well_inputs: Sequence[WellAllocationInput],
        allocation_date: date
    ) -> List[Optional[WellTestRate]]:
        """Look up each well's latest test concurrently, preserving input order."""
        semaphore = asyncio.Semaphore(self.max_concurrent_lookups)

        async def _lookup(well_id: str) -> Optional[WellTestRate]:
            async with semaphore:
                try:
                    latest_test = await self.well_test_repository.find_latest(well_id, allocation_date)
                except ApplicationException:
                    raise
                except Exception as e:
                    logger.error(f"Error looking up well test for {well_id}: {str(e)}")
                    raise InfrastructureException(
                        message=f"Well test lookup failed for {well_id}: {str(e)}",
                        context={"well_id": well_id, "on_or_before": allocation_date.isoformat()},
                        cause=e
                    )
            if latest_test is None:
                logger.debug(f"No well test on or before {allocation_date} for {well_id}, using fallback rates")
            return latest_test

        return await asyncio.gather(*(_lookup(wi.well_id) for wi in well_inputs))
