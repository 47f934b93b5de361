"""Filtering and ordering shared by BlockFinder and SuggestionRanker"""

from typing import Iterable

from src.service.seat_selection.domain.value_object import AuthoritativeSeat


def selectable_seats(
    catalog: Iterable[AuthoritativeSeat], ticket_category_name: str
) -> list[AuthoritativeSeat]:
    return [seat for seat in catalog if seat.is_selectable_for(ticket_category_name)]


def front_center_key(center_column: int):
    """Front rows first, then closest to the center column"""

    def _key(seat: AuthoritativeSeat) -> tuple[str, int]:
        return seat.row, abs(seat.column - center_column)

    return _key
