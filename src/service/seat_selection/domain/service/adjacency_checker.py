"""
Adjacency Checker

Pure predicate: are these seats one contiguous run in a single row?
"""

from typing import Sequence

from src.service.seat_selection.domain.value_object import AuthoritativeSeat


def is_adjacent(seats: Sequence[AuthoritativeSeat]) -> bool:
    """
    Check that seats form a contiguous block

    Empty and single-seat inputs are trivially adjacent. Otherwise every seat must share
    one row and the sorted columns must step by exactly 1.
    """
    if len(seats) <= 1:
        return True

    first_row = seats[0].row
    if any(seat.row != first_row for seat in seats):
        return False

    columns = sorted(seat.column for seat in seats)
    return all(curr - prev == 1 for prev, curr in zip(columns, columns[1:]))
