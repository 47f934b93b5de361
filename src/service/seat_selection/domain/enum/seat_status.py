"""Seat Status Enum"""

from enum import StrEnum


class SeatStatus(StrEnum):
    """Seat status as reported by the seat API"""

    AVAILABLE = 'AVAILABLE'
    HOLD = 'HOLD'
    BOOKED = 'BOOKED'
    RESERVED = 'RESERVED'
    OCCUPIED = 'OCCUPIED'
    CHECKED_IN = 'CHECKED_IN'
    PENDING = 'PENDING'
    UNKNOWN = 'UNKNOWN'

    @classmethod
    def parse(cls, value: str | None) -> 'SeatStatus':
        """Map a wire value onto the enum, anything unrecognised is UNKNOWN (never selectable)"""
        if not value:
            return cls.UNKNOWN
        try:
            return cls(value.strip().upper())
        except ValueError:
            return cls.UNKNOWN
