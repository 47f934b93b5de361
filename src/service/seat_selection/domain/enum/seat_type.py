"""Seat Type Enum"""

from enum import StrEnum


class SeatType(StrEnum):
    """Known seat types, the API may send others"""

    VIP = 'VIP'
    STANDARD = 'STANDARD'
