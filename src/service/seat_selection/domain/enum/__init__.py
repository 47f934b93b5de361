"""Seat Selection Enums"""

from src.service.seat_selection.domain.enum.seat_status import SeatStatus
from src.service.seat_selection.domain.enum.seat_type import SeatType
from src.service.seat_selection.domain.enum.selection_mode import SelectionMode
from src.service.seat_selection.domain.enum.selection_phase import SelectionPhase

__all__ = ['SeatStatus', 'SeatType', 'SelectionMode', 'SelectionPhase']
