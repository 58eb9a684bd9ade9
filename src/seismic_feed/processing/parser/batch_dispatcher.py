"""Batching of parsed records and their hand-off to the consumer's context."""
import asyncio
import logging
from concurrent.futures import Executor, Future
from functools import partial
from typing import Any, Callable, List, Optional

from seismic_feed.domain.models import Earthquake

BatchHandler = Callable[[List[Earthquake]], Any]


class InlineDelivery:
    """Runs callbacks immediately on the parsing thread."""

    def post(self, callback: Callable[..., Any], *args: Any) -> None:
        callback(*args)


class ExecutorDelivery:
    """
    Submits callbacks to an executor without waiting for them.

    Ordering is only guaranteed when the executor runs one task at a time,
    e.g. ``ThreadPoolExecutor(max_workers=1)``. Exceptions raised by a callback
    are logged, since nothing else waits on the submitted future.
    """

    def __init__(self, executor: Executor, logger: Optional[logging.Logger] = None):
        self.executor = executor
        self.logger = logger or logging.getLogger(__name__)

    def post(self, callback: Callable[..., Any], *args: Any) -> None:
        future = self.executor.submit(callback, *args)
        future.add_done_callback(partial(self._log_failure, callback))

    def _log_failure(self, callback: Callable[..., Any], future: Future) -> None:
        name = getattr(callback, '__qualname__', repr(callback))
        if future.cancelled():
            self.logger.warning(f"Delivery to {name} was cancelled")
            return
        error = future.exception()
        if error is not None:
            self.logger.error(
                f"Consumer callback {name} raised {type(error).__name__}: {error}",
                exc_info=(type(error), error, error.__traceback__)
            )


class AsyncioDelivery:
    """Schedules callbacks on an event loop, safe to call from any thread."""

    def __init__(self, loop: asyncio.AbstractEventLoop):
        self.loop = loop

    def post(self, callback: Callable[..., Any], *args: Any) -> None:
        self.loop.call_soon_threadsafe(callback, *args)


class BatchDispatcher:
    """Collects records and flushes them to ``on_batch`` in fixed-size batches."""

    def __init__(
        self,
        on_batch: BatchHandler,
        batch_size: int,
        delivery=None,
        logger: Optional[logging.Logger] = None
    ):
        if batch_size < 1:
            raise ValueError(f"batch_size must be positive, got {batch_size}")
        self.on_batch = on_batch
        self.batch_size = batch_size
        self.delivery = delivery or InlineDelivery()
        self.logger = logger or logging.getLogger(__name__)
        self.batches_flushed = 0
        self._batch: List[Earthquake] = []

    def add(self, record: Earthquake) -> None:
        self._batch.append(record)
        if len(self._batch) >= self.batch_size:
            self.flush()

    def flush(self) -> None:
        if not self._batch:
            return
        batch, self._batch = self._batch, []
        self.batches_flushed += 1
        self.logger.debug(f"Flushing batch {self.batches_flushed} with {len(batch)} records")
        self.delivery.post(self.on_batch, batch)

    def discard(self) -> None:
        self._batch = []

    @property
    def pending(self) -> int:
        return len(self._batch)
