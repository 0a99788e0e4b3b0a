from __future__ import annotations

import asyncio
from typing import List

from .errors import TranslationCancelled


class CancellationToken:
    """Scoped to one page-level invocation and passed down to every suspension point."""

    def __init__(self) -> None:
        self._cancelled = False
        self._tasks: List[asyncio.Future] = []

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def pending(self) -> bool:
        """True while a bound task is still running."""
        return any(not task.done() for task in self._tasks)

    def bind(self, task: asyncio.Future) -> None:
        if self._cancelled:
            task.cancel()
            return
        self._tasks.append(task)
        task.add_done_callback(self._forget)

    def cancel(self) -> None:
        if self._cancelled:
            return
        self._cancelled = True
        for task in list(self._tasks):
            if not task.done():
                task.cancel()

    def raise_if_cancelled(self) -> None:
        if self._cancelled:
            raise TranslationCancelled("Translation was cancelled")

    async def sleep(self, delay: float) -> None:
        self.raise_if_cancelled()
        if delay > 0:
            await asyncio.sleep(delay)
        self.raise_if_cancelled()

    def _forget(self, task: asyncio.Future) -> None:
        if task in self._tasks:
            self._tasks.remove(task)
