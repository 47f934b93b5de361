"""Selection Phase Enum"""

from enum import StrEnum


class SelectionPhase(StrEnum):
    IDLE = 'idle'
    MODE_CHOSEN = 'mode_chosen'
    QUANTITY_CHOSEN = 'quantity_chosen'
    SELECTING = 'selecting'
    RESERVED_PENDING_CHECKOUT = 'reserved_pending_checkout'
    EXPIRED = 'expired'
    HANDED_OFF = 'handed_off'
