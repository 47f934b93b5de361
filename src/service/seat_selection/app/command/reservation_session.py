"""
Reservation Session

Owns the active hold: a fixed expiry and exactly one live tick handle.
"""

import math
import time
from typing import Callable

from src.platform.config.core_setting import settings
from src.platform.logging.loguru_io import Logger
from src.service.seat_selection.app.interface import ITickHandle, ITickScheduler
from src.service.seat_selection.domain.selection_error import HoldAlreadyActiveError


class ReservationSession:
    """
    Time-boxed hold with a recurring countdown

    The expiry is set once in start(). Each tick computes the whole seconds left; the
    first tick that reaches 0 cancels the timer and fires on_expire exactly once.
    """

    def __init__(
        self,
        *,
        scheduler: ITickScheduler,
        on_expire: Callable[[], None],
        clock: Callable[[], float] = time.time,
        hold_duration_seconds: int | None = None,
        tick_interval_seconds: float | None = None,
        on_tick: Callable[[int], None] | None = None,
    ):
        self.scheduler = scheduler
        self.on_expire = on_expire
        self.on_tick = on_tick
        self.clock = clock
        self.hold_duration_seconds = (
            settings.SEAT_HOLD_DURATION_SECONDS
            if hold_duration_seconds is None
            else hold_duration_seconds
        )
        self.tick_interval_seconds = (
            settings.COUNTDOWN_TICK_SECONDS
            if tick_interval_seconds is None
            else tick_interval_seconds
        )
        self._expiry: float | None = None
        self._handle: ITickHandle | None = None

    @property
    def expiry(self) -> float | None:
        return self._expiry

    @property
    def is_active(self) -> bool:
        return self._expiry is not None

    def start(self) -> float:
        if self.is_active:
            raise HoldAlreadyActiveError()

        self._expiry = self.clock() + self.hold_duration_seconds
        self._handle = self.scheduler.schedule_every(self.tick_interval_seconds, self.tick)
        Logger.base.info(f'⏳ [HOLD] Started, {self.hold_duration_seconds}s to checkout')
        return self._expiry

    def remaining_seconds(self) -> int:
        if self._expiry is None:
            return 0
        return max(0, math.floor(self._expiry - self.clock()))

    def tick(self) -> int:
        if self._expiry is None:
            return 0

        remaining = self.remaining_seconds()
        if self.on_tick is not None:
            self.on_tick(remaining)

        if remaining == 0:
            self._release()
            Logger.base.info('⌛ [HOLD] Expired')
            self.on_expire()
        return remaining

    def cancel(self) -> None:
        if self._expiry is not None:
            Logger.base.debug('🛑 [HOLD] Cancelled')
        self._release()

    def _release(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
        self._expiry = None
