"""Bounded-concurrency worker pool that keeps results in chunk order."""

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence

from text_to_speech.errors import SynthesisError
from text_to_speech.models import Chunk, SynthesisResult

logger = logging.getLogger(__name__)

ChunkTask = Callable[[Chunk], Awaitable[SynthesisResult]]


async def run_tasks(
    chunks: Sequence[Chunk],
    concurrency: int,
    task: ChunkTask,
) -> list[SynthesisResult]:
    """Run task over every chunk with at most `concurrency` in flight.

    Workers pull chunks from one FIFO queue filled in index order, so a
    concurrency of 1 processes chunks strictly sequentially. Each result is
    stored in the slot of its chunk index, so the returned list is ordered
    by index whatever order the tasks finish in.

    The first failure stops further dispatch. Tasks already running are
    awaited, then that failure is raised as a SynthesisError naming the
    chunk index.
    """
    if concurrency < 1:
        raise ValueError(f"concurrency must be at least 1, got {concurrency}")
    if not chunks:
        return []

    total = len(chunks)
    if sorted(chunk.index for chunk in chunks) != list(range(total)):
        raise ValueError("chunk indices must be contiguous from 0 without duplicates")

    worker_count = min(concurrency, total)
    queue: asyncio.Queue[Chunk | None] = asyncio.Queue()
    for chunk in sorted(chunks, key=lambda c: c.index):
        queue.put_nowait(chunk)
    for _ in range(worker_count):
        queue.put_nowait(None)  # one stop marker per worker

    results: list[SynthesisResult | None] = [None] * total
    stop = asyncio.Event()
    failures: list[SynthesisError] = []

    async def worker(worker_id: int) -> None:
        while not stop.is_set():
            chunk = await queue.get()
            if chunk is None or stop.is_set():
                return
            try:
                result = await task(chunk)
            except SynthesisError as e:
                error = e
            except Exception as e:
                error = SynthesisError(chunk.index, e)
                error.__cause__ = e
            else:
                if results[chunk.index] is not None:
                    raise RuntimeError(f"result slot {chunk.index} written twice")
                results[chunk.index] = result
                continue

            logger.error("[Worker %d] Chunk %d error: %s", worker_id, chunk.index, error.cause)
            if not failures:
                failures.append(error)
                stop.set()
            return

    logger.debug("Starting %d workers for %d chunks", worker_count, total)
    await asyncio.gather(*(worker(i) for i in range(worker_count)))

    if failures:
        raise failures[0]
    return [result for result in results if result is not None]
