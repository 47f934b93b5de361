"""
Block Finder

Picks seats for fast mode: contiguous block first, nearest-to-front-center fallback.
"""

from collections import defaultdict
from typing import Iterable, Sequence

import attrs

from src.platform.config.core_setting import settings
from src.platform.logging.loguru_io import Logger
from src.service.seat_selection.domain.service.seat_ranking import (
    front_center_key,
    selectable_seats,
)
from src.service.seat_selection.domain.value_object import AuthoritativeSeat


@attrs.define(frozen=True)
class BlockResult:
    """Seats picked by find_block"""

    seats: tuple[AuthoritativeSeat, ...]
    scattered: bool

    def underfilled(self, count: int) -> bool:
        """Caller must refuse to confirm an under-filled pick"""
        return len(self.seats) < count


def _is_consecutive(window: Sequence[AuthoritativeSeat]) -> bool:
    return all(curr.column == prev.column + 1 for prev, curr in zip(window, window[1:]))


def _group_by_row(seats: Iterable[AuthoritativeSeat]) -> dict[str, list[AuthoritativeSeat]]:
    rows: dict[str, list[AuthoritativeSeat]] = defaultdict(list)
    for seat in seats:
        rows[seat.row].append(seat)
    for row_seats in rows.values():
        row_seats.sort(key=lambda seat: seat.column)
    return rows


def find_contiguous_window(
    rows: dict[str, list[AuthoritativeSeat]], count: int
) -> tuple[AuthoritativeSeat, ...] | None:
    """Leftmost consecutive window in the lowest row label, or None"""
    for row in sorted(rows):
        row_seats = rows[row]
        for start in range(len(row_seats) - count + 1):
            window = row_seats[start : start + count]
            if _is_consecutive(window):
                return tuple(window)
    return None


@Logger.io(truncate_content=True)
def find_block(
    catalog: Iterable[AuthoritativeSeat],
    ticket_category_name: str,
    count: int,
    *,
    center_column: int | None = None,
) -> BlockResult:
    """
    Find the best block of `count` seats for a ticket category

    Args:
        catalog: Current seat snapshot
        ticket_category_name: Active category, seats must match its type
        count: Requested number of seats
        center_column: Reference column for the fallback ranking (venue specific)

    Returns:
        BlockResult, scattered=False only for a contiguous block in one row
    """
    if count < 1:
        return BlockResult(seats=(), scattered=False)

    center = settings.SEAT_CENTER_COLUMN if center_column is None else center_column
    candidates = selectable_seats(catalog, ticket_category_name)

    window = find_contiguous_window(_group_by_row(candidates), count)
    if window is not None:
        Logger.base.info(
            f'🎯 [BLOCK-FINDER] Contiguous block found: {[seat.code for seat in window]}'
        )
        return BlockResult(seats=window, scattered=False)

    fallback = tuple(sorted(candidates, key=front_center_key(center))[:count])
    if len(fallback) < count:
        Logger.base.warning(
            f'⚠️ [BLOCK-FINDER] Only {len(fallback)}/{count} seats available for {ticket_category_name}'
        )
    else:
        Logger.base.info(
            f'🔀 [BLOCK-FINDER] No {count} contiguous seats, nearest pick: '
            f'{[seat.code for seat in fallback]}'
        )
    return BlockResult(seats=fallback, scattered=True)
