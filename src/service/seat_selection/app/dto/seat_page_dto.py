"""Seat page returned by the seat API"""

import attrs

from src.service.seat_selection.domain.value_object import AuthoritativeSeat


@attrs.define(frozen=True)
class SeatPage:
    seats: tuple[AuthoritativeSeat, ...] = ()
    total: int = 0
