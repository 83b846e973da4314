# ==============================================================================
# batch_processor.py — Fixed-size concurrent batches with pacing
# ==============================================================================
# Purpose: Run an async processor over items in sequential, concurrent batches
# Sections: Imports, Helper Functions, Main Functions
# ==============================================================================

# ==============================================================================
# Imports
# ==============================================================================

# Standard Library -----
import asyncio
from typing import Any, Awaitable, Callable, List, Optional, Sequence, TypeVar

T = TypeVar("T")
R = TypeVar("R")

Sleep = Callable[[float], Awaitable[Any]]

# ==============================================================================
# Public exports
# ==============================================================================
__all__ = ["chunked", "batch_count", "process_in_batches"]

# ==============================================================================
# Helper Functions
# ==============================================================================

def chunked(items: Sequence[T], size: int) -> List[List[T]]:
    """Split items into consecutive chunks of ``size`` (the last may be shorter)."""
    if size < 1:
        raise ValueError("batch size must be at least 1")
    return [list(items[i:i + size]) for i in range(0, len(items), size)]

def batch_count(total: int, size: int) -> int:
    return (total + size - 1) // size

# ==============================================================================
# Main Functions
# ==============================================================================

async def process_in_batches(
    items: Sequence[T],
    processor: Callable[[int, T], Awaitable[R]],
    batch_size: int,
    batch_delay: float = 0.0,
    sleep: Sleep = asyncio.sleep,
    on_batch_start: Optional[Callable[[int, int, List[T]], None]] = None,
    on_batch_settled: Optional[Callable[[List[R]], None]] = None,
) -> List[R]:
    """
    Process items in batches of ``batch_size``.

    Items within a batch run concurrently; the next batch starts only after
    every item of the current batch has settled and ``batch_delay`` seconds
    have passed. No delay follows the last batch.

    Args:
        items: Items to process, in order
        processor: Async callable receiving the item's global index and the item
        batch_size: Number of items per batch
        batch_delay: Seconds to wait between batches
        sleep: Awaitable sleep used for the pause between batches
        on_batch_start: Called with (batch_number, total_batches, batch) before a batch starts
        on_batch_settled: Called with the batch's results once all of them are in

    Returns:
        Results in the same order as ``items``
    """
    results: List[R] = []
    batches = chunked(items, batch_size)
    total_batches = len(batches)

    for number, batch in enumerate(batches, start=1):
        if on_batch_start:
            on_batch_start(number, total_batches, batch)

        offset = (number - 1) * batch_size
        batch_results = await asyncio.gather(
            *(processor(offset + index, item) for index, item in enumerate(batch))
        )
        batch_results = list(batch_results)
        results.extend(batch_results)

        if on_batch_settled:
            on_batch_settled(batch_results)

        # Pace the origin server between batches
        if number < total_batches:
            await sleep(batch_delay)

    return results
