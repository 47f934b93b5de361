"""Seat Selection Application DTOs"""

from src.service.seat_selection.app.dto.reconciliation_dto import ReconciliationResult
from src.service.seat_selection.app.dto.seat_page_dto import SeatPage
from src.service.seat_selection.app.dto.selection_result_dto import (
    CheckoutHandoff,
    Notice,
    NoticeKind,
    SelectionOutcome,
    SelectionResult,
)

__all__ = [
    'CheckoutHandoff',
    'Notice',
    'NoticeKind',
    'ReconciliationResult',
    'SeatPage',
    'SelectionOutcome',
    'SelectionResult',
]
