#  Copyright (c) 2024 Astramind. Licensed under Apache License, Version 2.0.
from typing import Dict, Sequence

from prefill.common.definitions.prefill.plan import AllocationPlanEntry
from prefill.common.definitions.prefill.shapes import ShapeDescriptor
from prefill.common.scheduling.queues import AllocationQueue


def build_queue(entries: Sequence[AllocationPlanEntry]) -> AllocationQueue:
    """
    Merge per-shape counts into a single round robin allocation order.

    Entries with a zero count are dropped. For two shapes with the same count
    the resulting order strictly alternates, starting with the shape given
    first.

    The plan is expected to hold one entry per shape, as plan_allocations
    produces it. Repeated entries for an equal shape are merged into a single
    stream at the position of the first one, so ``(a, 2), (b, 2), (a, 2)``
    is emitted as ``a, b, a, b, a, a`` rather than as three separate streams.

    Args:
        entries: the finalized plan, in priority order, one entry per shape.

    Returns:
        AllocationQueue: a fresh queue owned by the caller. Empty when no
        entry has a positive count.
    """
    counts: Dict[ShapeDescriptor, int] = {}
    for entry in entries:
        counts[entry.shape] = counts.get(entry.shape, 0) + entry.count

    return AllocationQueue((shape, count) for shape, count in counts.items() if count > 0)
