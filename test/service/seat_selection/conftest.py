"""
Pytest configuration for seat selection tests.

Shared fixtures:
- make_seat: AuthoritativeSeat factory (VIP / AVAILABLE / area 1 by default)
- vip_row: row "A" with seats A1..A10, all AVAILABLE VIP
- fake_clock: manually advanced time source
- tick_scheduler: ITickScheduler whose ticks are fired by hand
"""

from typing import Callable

import pytest

from src.service.seat_selection.app.interface import ITickHandle, ITickScheduler
from src.service.seat_selection.domain.enum import SeatStatus
from src.service.seat_selection.domain.value_object import AuthoritativeSeat, TicketCategory


class FakeClock:
    def __init__(self, now: float = 1_700_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class ManualTickHandle(ITickHandle):
    def __init__(self, callback: Callable[[], None]):
        self.callback = callback
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled


class ManualTickScheduler(ITickScheduler):
    def __init__(self) -> None:
        self.handles: list[ManualTickHandle] = []
        self.intervals: list[float] = []

    def schedule_every(self, interval: float, callback: Callable[[], None]) -> ITickHandle:
        handle = ManualTickHandle(callback)
        self.handles.append(handle)
        self.intervals.append(interval)
        return handle

    @property
    def live_handles(self) -> list[ManualTickHandle]:
        return [handle for handle in self.handles if not handle.cancelled]

    def fire(self) -> None:
        """One tick on every live timer"""
        for handle in self.live_handles:
            handle.callback()


def build_seat(
    seat_id: int,
    *,
    row: str = 'A',
    column: int | None = None,
    status: SeatStatus = SeatStatus.AVAILABLE,
    seat_type: str | None = 'VIP',
    area_id: int = 1,
) -> AuthoritativeSeat:
    column = seat_id if column is None else column
    return AuthoritativeSeat(
        seat_id=seat_id,
        code=f'{row}{column}',
        row=row,
        column=column,
        status=status,
        seat_type=seat_type,
        area_id=area_id,
    )


@pytest.fixture
def make_seat():
    return build_seat


@pytest.fixture
def vip_row() -> list[AuthoritativeSeat]:
    return [build_seat(column) for column in range(1, 11)]


@pytest.fixture
def vip_category() -> TicketCategory:
    return TicketCategory(category_id=7, name='VIP Ticket', unit_price=2500, max_quantity=4)


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def tick_scheduler() -> ManualTickScheduler:
    return ManualTickScheduler()
