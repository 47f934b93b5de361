"""Seat allocation algorithms (pure, no I/O)"""

from src.service.seat_selection.domain.service.adjacency_checker import is_adjacent
from src.service.seat_selection.domain.service.block_finder import BlockResult, find_block
from src.service.seat_selection.domain.service.suggestion_ranker import suggest

__all__ = ['BlockResult', 'find_block', 'is_adjacent', 'suggest']
