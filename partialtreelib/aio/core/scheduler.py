"""Bounded-concurrency scheduler for folder crawls.

Crawl jobs discover new folders while they run and submit more jobs to
the same scheduler. The scheduler therefore keeps an explicit frontier
of waiting jobs and a set of in-flight tasks, and is idle only when both
are empty at the moment a job finishes.
"""

import asyncio
import logging
from collections import deque
from typing import Any, Awaitable, Callable, Deque, Dict, Optional, Set

from ...config import DEFAULT_CONCURRENCY

logger = logging.getLogger(__name__)

Job = Callable[[], Awaitable[Any]]


class CrawlScheduler:
    """Run submitted jobs with at most ``concurrency`` in flight.

    Jobs may be submitted before ``await_idle()`` is called and from
    inside running jobs. Excess jobs wait in the frontier; nothing is
    ever rejected for lack of capacity.

    The first job failure aborts the run: in-flight jobs are cancelled,
    the frontier is dropped, and ``await_idle()`` re-raises the failure
    once the cancelled jobs have unwound.
    """

    def __init__(self, concurrency: int = DEFAULT_CONCURRENCY):
        if concurrency < 1:
            raise ValueError(f"concurrency must be at least 1, got {concurrency}")
        self.concurrency = concurrency
        self._frontier: Deque[Job] = deque()
        self._in_flight: Set[asyncio.Future] = set()
        self._idle: Optional[asyncio.Event] = None
        self._failure: Optional[BaseException] = None
        self._running = False
        self._submitted = 0
        self._completed = 0
        self._max_in_flight = 0

    def submit(self, job: Job) -> None:
        """Enqueue a zero-argument coroutine function.

        Ignored once the run has failed, since its result could not be
        trusted anyway.
        """
        if self._failure is not None:
            logger.debug("Dropping job submitted after failure")
            return
        self._frontier.append(job)
        self._submitted += 1
        if self._running:
            self._dispatch()

    async def await_idle(self) -> None:
        """Run jobs until no job is waiting or in flight.

        Raises:
            RuntimeError: If called while another await_idle is running
            Exception: The first exception raised by any job
        """
        if self._running:
            raise RuntimeError("await_idle() is already running")

        self._idle = asyncio.Event()
        self._running = True
        try:
            self._dispatch()
            self._check_idle()
            await self._idle.wait()
        except asyncio.CancelledError:
            self._abort()
            raise
        finally:
            self._running = False

        if self._failure is not None:
            raise self._failure

    @property
    def pending(self) -> int:
        """Number of jobs waiting in the frontier."""
        return len(self._frontier)

    @property
    def in_flight(self) -> int:
        return len(self._in_flight)

    def stats(self) -> Dict[str, int]:
        return {
            'concurrency': self.concurrency,
            'submitted': self._submitted,
            'completed': self._completed,
            'max_in_flight': self._max_in_flight,
        }

    def _dispatch(self) -> None:
        while self._frontier and len(self._in_flight) < self.concurrency:
            job = self._frontier.popleft()
            task = asyncio.ensure_future(job())
            self._in_flight.add(task)
            self._max_in_flight = max(self._max_in_flight, len(self._in_flight))
            task.add_done_callback(self._on_done)

    def _on_done(self, task: asyncio.Future) -> None:
        self._in_flight.discard(task)

        if not task.cancelled():
            error = task.exception()
            if error is None:
                self._completed += 1
            elif self._failure is None:
                logger.debug("Job failed, aborting run: %r", error)
                self._failure = error
                self._abort()
            else:
                logger.debug("Additional job failure after abort: %r", error)

        if self._failure is None:
            self._dispatch()
        self._check_idle()

    def _abort(self) -> None:
        self._frontier.clear()
        for task in list(self._in_flight):
            task.cancel()

    def _check_idle(self) -> None:
        if self._idle is not None and not self._frontier and not self._in_flight:
            self._idle.set()
