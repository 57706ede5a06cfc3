"""
Periodic re-quiz scheduler for embedded games
"""

import asyncio
import contextlib
import inspect
import logging
from collections.abc import Callable
from typing import Any

logger = logging.getLogger(__name__)

QUIZ_INTERVAL_SECONDS = 5 * 60
WARNING_SECONDS = 15


class QuizCycleScheduler:
    """Runs one warning + quiz cycle per game container until cleared"""

    def __init__(
        self,
        on_warning: Callable[[str], Any],
        on_quiz: Callable[[str], Any],
        interval_seconds: float = QUIZ_INTERVAL_SECONDS,
        warning_seconds: float = WARNING_SECONDS,
    ):
        if warning_seconds >= interval_seconds:
            raise ValueError("warning_seconds must be shorter than interval_seconds")
        self.on_warning = on_warning
        self.on_quiz = on_quiz
        self.interval_seconds = interval_seconds
        self.warning_seconds = warning_seconds
        self.tasks: dict[str, asyncio.Task] = {}
        logger.info(
            f"Quiz cycle scheduler configured: every {interval_seconds}s, "
            f"warning {warning_seconds}s before"
        )

    def is_active(self, container_id: str) -> bool:
        task = self.tasks.get(container_id)
        return task is not None and not task.done()

    async def start(self, container_id: str) -> None:
        """Start (or restart) the cycle for a container"""
        await self.clear(container_id)
        self.tasks[container_id] = asyncio.create_task(self._cycle_loop(container_id))
        logger.info(f"Quiz cycle started for {container_id}")

    async def clear(self, container_id: str) -> None:
        """Cancel the cycle for a container, if running"""
        task = self.tasks.pop(container_id, None)
        if task is None:
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task
        logger.info(f"Quiz cycle cleared for {container_id}")

    async def stop(self) -> None:
        """Cancel every running cycle"""
        for container_id in list(self.tasks):
            await self.clear(container_id)

    async def _cycle_loop(self, container_id: str) -> None:
        """Main scheduling loop"""
        while True:
            try:
                await asyncio.sleep(self.interval_seconds - self.warning_seconds)
                await self._fire(self.on_warning, container_id)

                await asyncio.sleep(self.warning_seconds)
                await self._fire(self.on_quiz, container_id)
            except asyncio.CancelledError:
                break

    async def _fire(self, callback: Callable[[str], Any], container_id: str) -> None:
        try:
            result = callback(container_id)
            if inspect.isawaitable(result):
                await result
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.error(f"Error in quiz cycle callback for {container_id}: {e}", exc_info=True)
