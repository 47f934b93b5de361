"""Suggestion Ranker - advisory best seats (front rows, center first), never auto-applied"""

from typing import Iterable

from src.platform.config.core_setting import settings
from src.service.seat_selection.domain.service.seat_ranking import (
    front_center_key,
    selectable_seats,
)
from src.service.seat_selection.domain.value_object import AuthoritativeSeat


def suggest(
    catalog: Iterable[AuthoritativeSeat],
    ticket_category_name: str,
    exclude: Iterable[AuthoritativeSeat] = (),
    *,
    center_column: int | None = None,
    limit: int | None = None,
) -> list[AuthoritativeSeat]:
    center = settings.SEAT_CENTER_COLUMN if center_column is None else center_column
    limit = settings.SEAT_SUGGESTION_LIMIT if limit is None else limit
    excluded_ids = {seat.seat_id for seat in exclude}

    candidates = [
        seat
        for seat in selectable_seats(catalog, ticket_category_name)
        if seat.seat_id not in excluded_ids
    ]
    return sorted(candidates, key=front_center_key(center))[:limit]
