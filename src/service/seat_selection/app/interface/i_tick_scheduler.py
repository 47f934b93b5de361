"""
Tick Scheduler Interface

A cancellable recurring callback. ReservationSession owns exactly one live handle.
"""

from abc import ABC, abstractmethod
from typing import Callable


class ITickHandle(ABC):
    @abstractmethod
    def cancel(self) -> None:
        """Stop future ticks, safe to call more than once"""
        pass

    @property
    @abstractmethod
    def cancelled(self) -> bool:
        pass


class ITickScheduler(ABC):
    @abstractmethod
    def schedule_every(self, interval: float, callback: Callable[[], None]) -> ITickHandle:
        pass
