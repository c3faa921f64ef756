#  Copyright (c) 2024 Astramind. Licensed under Apache License, Version 2.0.
from typing import List, Optional, Sequence

from prefill.common.definitions.prefill.config import PreFillConfig
from prefill.common.definitions.prefill.plan import AllocationPlanEntry
from prefill.common.definitions.prefill.shapes import ShapeConfig, ShapeDescriptor
from prefill.common.definitions.types.capacity import CapacitySource
from prefill.common.logging.logger import setup_logger, set_prefill_logging_level
from prefill.common.scheduling.distribution import plan_allocations
from prefill.common.scheduling.queues import AllocationQueue
from prefill.common.scheduling.sequencer import build_queue


class BlockPreFiller:
    """Plans which blocks to preallocate so a block pool and a memory cache start warm.

    The pre-filler only produces the order: the returned queue is handed to the
    caller, which performs the real allocations at its own pace and deals with
    allocation failures itself.
    """

    def __init__(
            self,
            memory_cache: CapacitySource,
            block_pool: CapacitySource,
            config: Optional[PreFillConfig] = None,
    ):
        """Initialize the pre-filler.

        Args:
            memory_cache (CapacitySource): Cache whose max_size bounds one budget.
            block_pool (CapacitySource): Reuse pool whose max_size bounds the other.
            config (Optional[PreFillConfig]): Defaults for shapes and logging.
        """
        self.memory_cache = memory_cache
        self.block_pool = block_pool
        self.config = config or PreFillConfig()
        self.logger = setup_logger(__file__)
        set_prefill_logging_level(self.config.logging_level)

    def budgets(self) -> List[int]:
        """Capacities to fill, read fresh on every planning pass."""
        return [self.block_pool.max_size, self.memory_cache.max_size]

    def plan(self, shapes: Sequence[ShapeDescriptor]) -> List[AllocationPlanEntry]:
        """Compute the per-shape block counts for the pool and the cache combined."""
        budgets = self.budgets()
        entries = plan_allocations(shapes, budgets)
        planned_bytes = sum(entry.byte_size for entry in entries)
        self.logger.info(
            f"Planned {sum(entry.count for entry in entries)} blocks over {len(entries)} shapes, "
            f"{planned_bytes} of {sum(max(budget, 0) for budget in budgets)} bytes"
        )
        return entries

    def generate_allocation_order(self, shapes: Sequence[ShapeDescriptor]) -> AllocationQueue:
        """Plan the given shapes and interleave them into a single allocation order.

        Args:
            shapes (Sequence[ShapeDescriptor]): Shapes to preallocate, in priority order.

        Returns:
            AllocationQueue: Round robin order of the blocks to allocate.
        """
        return build_queue(self.plan(shapes))

    def prefill(self, *configs: ShapeConfig) -> AllocationQueue:
        """Build shapes from configs, filling in the default format, and plan them.

        Args:
            *configs (ShapeConfig): Shapes to preallocate. Configs without a dtype
                get ``config.default_dtype``.

        Returns:
            AllocationQueue: Round robin order of the blocks to allocate.
        """
        shapes = [shape_config.build(self.config.default_dtype) for shape_config in configs]
        return self.generate_allocation_order(shapes)
