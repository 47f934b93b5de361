"""Seat Selection Value Objects"""

from src.service.seat_selection.domain.value_object.event_context import EventContext
from src.service.seat_selection.domain.value_object.seat import (
    AuthoritativeSeat,
    TentativeSelection,
    seat_type_matches,
)
from src.service.seat_selection.domain.value_object.ticket_category import TicketCategory

__all__ = [
    'AuthoritativeSeat',
    'EventContext',
    'TentativeSelection',
    'TicketCategory',
    'seat_type_matches',
]
