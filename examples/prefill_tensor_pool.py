import torch

from prefill import BlockPreFiller, PreFillConfig, ShapeConfig, setup_logger

logger = setup_logger(__file__)


class TensorPool:
    """Toy recycling pool keyed by (dims, dtype), bounded in bytes."""

    def __init__(self, max_size: int, device: str = 'cpu'):
        self.max_size = max_size
        self.device = torch.device(device)
        self.current_size = 0
        self.blocks = {}

    def put(self, tensor: torch.Tensor) -> bool:
        size = tensor.numel() * tensor.element_size()
        if self.current_size + size > self.max_size:
            return False
        self.blocks.setdefault((tuple(tensor.shape), tensor.dtype), []).append(tensor)
        self.current_size += size
        return True


def prefill_pools(device: str = 'cpu'):
    """
    Warm a block pool and a cache with the shapes a model is expected to need.

    Args:
        device (str): Device the blocks are allocated on.
    """
    block_pool = TensorPool(64 * 1024 * 1024, device)
    memory_cache = TensorPool(32 * 1024 * 1024, device)

    prefiller = BlockPreFiller(memory_cache, block_pool, PreFillConfig(default_dtype=torch.float16))
    queue = prefiller.prefill(
        ShapeConfig((1, 1024, 512), weight=3),
        ShapeConfig((1, 256, 512)),
        ShapeConfig((1, 80, 1024), dtype=torch.float32),
    )

    for shape in queue.drain():
        try:
            block = torch.empty(shape.dims, dtype=shape.dtype, device=block_pool.device)
        except torch.cuda.OutOfMemoryError:
            logger.warning(f"Out of memory after {block_pool.current_size + memory_cache.current_size} bytes")
            break
        # fill the pool first, the cache takes the rest
        if not block_pool.put(block):
            memory_cache.put(block)

    logger.info(f"Pool holds {block_pool.current_size} bytes, cache holds {memory_cache.current_size} bytes")
    return block_pool, memory_cache


if __name__ == "__main__":
    prefill_pools('cuda' if torch.cuda.is_available() else 'cpu')
