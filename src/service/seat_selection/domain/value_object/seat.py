"""
Seat Value Objects

AuthoritativeSeat is a snapshot of server truth at fetch time.
TentativeSelection is the client's optimistic pick. The two are never mixed:
ConflictReconciler is the only place that compares them.
"""

from typing import Iterable, Iterator

import attrs

from src.service.seat_selection.domain.enum import SeatStatus


def seat_type_matches(seat_type: str | None, category_name: str) -> bool:
    """Case-insensitive containment, e.g. seat type 'VIP' matches category 'VIP Ticket'"""
    if not seat_type or not category_name:
        return False
    return seat_type.strip().casefold() in category_name.casefold()


@attrs.define(frozen=True)
class AuthoritativeSeat:
    """Seat as last reported by the seat API (Value Object)"""

    seat_id: int
    code: str
    row: str
    column: int
    status: SeatStatus
    seat_type: str | None
    area_id: int

    @property
    def is_available(self) -> bool:
        return self.status == SeatStatus.AVAILABLE

    def matches_category(self, category_name: str) -> bool:
        return seat_type_matches(self.seat_type, category_name)

    def is_selectable_for(self, category_name: str) -> bool:
        return self.is_available and self.matches_category(category_name)


@attrs.define(frozen=True)
class TentativeSelection:
    """Ordered set of picked seats, unique by seat_id (Value Object)"""

    seats: tuple[AuthoritativeSeat, ...] = ()

    @classmethod
    def of(cls, seats: Iterable[AuthoritativeSeat]) -> 'TentativeSelection':
        unique: dict[int, AuthoritativeSeat] = {}
        for seat in seats:
            unique.setdefault(seat.seat_id, seat)
        return cls(seats=tuple(unique.values()))

    def __len__(self) -> int:
        return len(self.seats)

    def __iter__(self) -> Iterator[AuthoritativeSeat]:
        return iter(self.seats)

    def __bool__(self) -> bool:
        return bool(self.seats)

    @property
    def seat_ids(self) -> tuple[int, ...]:
        return tuple(seat.seat_id for seat in self.seats)

    def contains(self, seat_id: int) -> bool:
        return any(seat.seat_id == seat_id for seat in self.seats)

    def add(self, seat: AuthoritativeSeat) -> 'TentativeSelection':
        if self.contains(seat.seat_id):
            return self
        return TentativeSelection(seats=self.seats + (seat,))

    def remove(self, seat_id: int) -> 'TentativeSelection':
        return self.without([seat_id])

    def without(self, seat_ids: Iterable[int]) -> 'TentativeSelection':
        dropped = set(seat_ids)
        return TentativeSelection(
            seats=tuple(seat for seat in self.seats if seat.seat_id not in dropped)
        )
