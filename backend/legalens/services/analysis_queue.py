"""
Analysis Queue
Tracks detached analysis tasks so callers can return immediately while
tests and shutdown can still await completion.
"""

import asyncio
import logging
from typing import Awaitable, Callable, Dict


logger = logging.getLogger(__name__)


class AnalysisQueue:
    """In-process handoff for fire-and-forget document analysis."""

    def __init__(self):
        self._tasks: Dict[str, asyncio.Task] = {}

    @property
    def pending(self) -> int:
        return len(self._tasks)

    def submit(self, document_id: str, job: Callable[[], Awaitable]) -> asyncio.Task:
        """
        Start job() as a background task for this document.

        While a task for the same document is still running it is returned
        instead of starting a second one.
        """
        running = self._tasks.get(document_id)
        if running is not None and not running.done():
            logger.info(f"Analysis for document {document_id} already running")
            return running

        task = asyncio.get_running_loop().create_task(job(), name=f"analyze-{document_id}")
        self._tasks[document_id] = task
        task.add_done_callback(lambda t: self._finished(document_id, t))
        return task

    def _finished(self, document_id: str, task: asyncio.Task):
        if self._tasks.get(document_id) is task:
            del self._tasks[document_id]
        if task.cancelled():
            logger.warning(f"Analysis for document {document_id} was cancelled")
            return
        error = task.exception()
        if error is not None:
            logger.error(
                f"Analysis for document {document_id} failed: {error}",
                exc_info=(type(error), error, error.__traceback__),
            )

    async def wait_idle(self):
        """Wait for every pending task, including ones started meanwhile."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks.values()), return_exceptions=True)
            # Let done callbacks run before checking again
            await asyncio.sleep(0)

    async def cancel_all(self):
        tasks = list(self._tasks.values())
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)

    async def shutdown(self, timeout: float):
        """Give pending tasks up to timeout seconds to finish, then cancel the rest."""
        idle = asyncio.ensure_future(self.wait_idle())
        try:
            await asyncio.wait_for(asyncio.shield(idle), timeout=timeout)
        except asyncio.TimeoutError:
            logger.warning(f"Cancelling {self.pending} analyses still running after {timeout:g}s")
            await self.cancel_all()
            await idle
