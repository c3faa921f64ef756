#  Copyright (c) 2024 Astramind. Licensed under Apache License, Version 2.0.
from typing import Dict, Iterable, List, Sequence

from prefill.common.definitions.prefill.plan import AllocationPlanEntry
from prefill.common.definitions.prefill.shapes import ShapeDescriptor
from prefill.common.logging.logger import setup_logger

logger = setup_logger(__name__)


def compute_counts(requests: Sequence[ShapeDescriptor], budget_bytes: int) -> Dict[ShapeDescriptor, int]:
    """
    Split a byte budget between shapes proportionally to their weights.

    Each shape receives ``budget_bytes * weight // total_weight`` bytes and
    gets as many whole blocks as fit in that share. Both divisions truncate,
    so a shape never exceeds its share and the total never exceeds the
    budget. Bytes left over by one shape are not handed to the others.

    Parameters
    ----------
    requests : Sequence[ShapeDescriptor]
        Shapes to plan for, in priority order. Equal descriptors given more
        than once each take their own share and their counts add up.
    budget_bytes : int
        Capacity to fill. Negative budgets are treated as zero.

    Returns
    -------
    Dict[ShapeDescriptor, int]
        Block count per shape, keyed in first-appearance order.
    """
    counts: Dict[ShapeDescriptor, int] = {shape: 0 for shape in requests}
    if not requests or budget_bytes <= 0:
        return counts

    total_weight = sum(shape.weight for shape in requests)
    for shape in requests:
        share_bytes = budget_bytes * shape.weight // total_weight
        counts[shape] += share_bytes // shape.byte_size

    return counts


def plan_allocations(requests: Sequence[ShapeDescriptor], budgets: Iterable[int]) -> List[AllocationPlanEntry]:
    """
    Run compute_counts once per budget and sum the counts per shape.

    Every budget models an independent fixed-capacity consumer (a block pool,
    a memory cache) filled by the same proportional rule.
    """
    requests = list(requests)
    totals: Dict[ShapeDescriptor, int] = {shape: 0 for shape in requests}

    for budget in budgets:
        for shape, count in compute_counts(requests, budget).items():
            totals[shape] += count
        logger.debug(f"Budget of {budget} bytes split into {len(totals)} shapes")

    entries = [AllocationPlanEntry(shape=shape, count=count) for shape, count in totals.items()]
    for entry in entries:
        logger.debug(f"Planned {entry.count} blocks of {entry.shape.dims} {entry.shape.dtype} "
                     f"({entry.byte_size} bytes)")
    return entries
