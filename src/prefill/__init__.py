#  Copyright (c) 2024 Astramind. Licensed under Apache License, Version 2.0.

from .common.definitions.errors import EmptyQueue, InvalidShape, PreFillError
from .common.definitions.prefill.config import PreFillConfig
from .common.definitions.prefill.plan import AllocationPlanEntry
from .common.definitions.prefill.shapes import ShapeConfig, ShapeDescriptor
from .common.logging.logger import setup_logger, set_prefill_logging_level
from .common.scheduling.distribution import compute_counts, plan_allocations
from .common.scheduling.queues import AllocationQueue
from .common.scheduling.sequencer import build_queue
from .core.prefiller import BlockPreFiller
