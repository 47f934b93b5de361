"""Selection results surfaced to the UI layer"""

from enum import StrEnum

import attrs

from src.service.seat_selection.domain.selection_state import SelectionState
from src.service.seat_selection.domain.value_object import AuthoritativeSeat


class SelectionOutcome(StrEnum):
    OK = 'ok'
    VALIDATION_ERROR = 'validation_error'
    CATALOG_FETCH_ERROR = 'catalog_fetch_error'
    CONFLICT = 'conflict'
    EXPIRED = 'expired'
    HANDED_OFF = 'handed_off'
    STALE = 'stale'


class NoticeKind(StrEnum):
    SCATTERED_SELECTION = 'scattered_selection'
    HOLD_EXPIRED = 'hold_expired'
    SEAT_PENDING = 'seat_pending'
    SEATS_LOST = 'seats_lost'


@attrs.define(frozen=True)
class Notice:
    """User-facing, non-blocking message"""

    kind: NoticeKind
    message: str
    seats: tuple[AuthoritativeSeat, ...] = ()


@attrs.define(frozen=True)
class CheckoutHandoff:
    """Everything the external payment flow needs"""

    event_id: int
    category_ticket_id: int
    seat_ids: tuple[int, ...]
    quantity: int
    total_amount: int
    reservation_expiry: float | None = None
    scattered: bool = False


@attrs.define(frozen=True)
class SelectionResult:
    outcome: SelectionOutcome
    state: SelectionState
    message: str | None = None
    notices: tuple[Notice, ...] = ()
    conflicts: tuple[AuthoritativeSeat, ...] = ()
    handoff: CheckoutHandoff | None = None

    @property
    def success(self) -> bool:
        return self.outcome in (SelectionOutcome.OK, SelectionOutcome.HANDED_OFF)
