"""Selection State (immutable snapshot owned by SelectionController)"""

import math

import attrs

from src.service.seat_selection.domain.enum import SelectionMode, SelectionPhase
from src.service.seat_selection.domain.value_object import (
    AuthoritativeSeat,
    TentativeSelection,
    TicketCategory,
)


MIN_QUANTITY = 1


@attrs.define(frozen=True)
class SelectionState:
    phase: SelectionPhase = SelectionPhase.IDLE
    mode: SelectionMode = SelectionMode.NONE
    category: TicketCategory | None = None
    requested_count: int = MIN_QUANTITY
    selection: TentativeSelection = attrs.field(factory=TentativeSelection)
    suggested_seats: tuple[AuthoritativeSeat, ...] = ()
    scattered: bool = False
    show_scattered_notice: bool = False
    reservation_expiry: float | None = None

    @classmethod
    def empty(cls, category: TicketCategory | None = None) -> 'SelectionState':
        return cls(category=category)

    @property
    def selected_seats(self) -> tuple[AuthoritativeSeat, ...]:
        return self.selection.seats

    @property
    def is_full(self) -> bool:
        return len(self.selection) >= self.requested_count

    @property
    def has_active_hold(self) -> bool:
        return self.reservation_expiry is not None


def clamp_quantity(raw: int | float | str | None, upper: int) -> int:
    """Clamp user input into [1, upper]; unparsable input and NaN become 1"""
    if isinstance(raw, int):
        value = raw
    else:
        try:
            parsed = float(raw)  # type: ignore[arg-type]
        except (TypeError, ValueError, OverflowError):
            return MIN_QUANTITY
        if math.isnan(parsed):
            return MIN_QUANTITY
        if math.isinf(parsed):
            return upper if parsed > 0 else MIN_QUANTITY
        value = math.floor(parsed)
    return max(MIN_QUANTITY, min(upper, value))
