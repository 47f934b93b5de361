"""
Anyio Tick Scheduler

Runs each recurring callback as a task in the caller's task group, wrapped in its own
CancelScope so a handle can stop exactly one timer.
"""

from typing import Callable

import anyio
from anyio.abc import TaskGroup

from src.platform.logging.loguru_io import Logger
from src.service.seat_selection.app.interface import ITickHandle, ITickScheduler


class AnyioTickHandle(ITickHandle):
    def __init__(self) -> None:
        self.scope = anyio.CancelScope()

    def cancel(self) -> None:
        self.scope.cancel()

    @property
    def cancelled(self) -> bool:
        return self.scope.cancel_called


class AnyioTickScheduler(ITickScheduler):
    def __init__(self, task_group: TaskGroup):
        self.task_group = task_group

    def schedule_every(self, interval: float, callback: Callable[[], None]) -> ITickHandle:
        handle = AnyioTickHandle()
        self.task_group.start_soon(self._run, interval, callback, handle)
        return handle

    @staticmethod
    async def _run(interval: float, callback: Callable[[], None], handle: AnyioTickHandle) -> None:
        with handle.scope:
            while True:
                await anyio.sleep(interval)
                callback()
        Logger.base.debug('🛑 [TICK] Timer stopped')
