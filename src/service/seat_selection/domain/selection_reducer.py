"""
Selection Reducer

Pure state machine for seat selection:

    IDLE -> MODE_CHOSEN -> QUANTITY_CHOSEN -> SELECTING -> RESERVED_PENDING_CHECKOUT
                                                              |-> EXPIRED -> IDLE
                                                              |-> HANDED_OFF

Every action returns a new SelectionState or raises SelectionValidationError. The
reducer never touches timers or the network, SelectionController does that around it.
"""

from typing import Any, Callable, Iterable

import attrs

from src.service.seat_selection.domain.enum import SelectionMode, SelectionPhase
from src.service.seat_selection.domain.selection_error import SelectionValidationError
from src.service.seat_selection.domain.selection_state import MIN_QUANTITY, SelectionState
from src.service.seat_selection.domain.service.adjacency_checker import is_adjacent
from src.service.seat_selection.domain.value_object import (
    AuthoritativeSeat,
    TentativeSelection,
    TicketCategory,
)


# ==================== Actions ====================


@attrs.define(frozen=True)
class CategorySelected:
    category: TicketCategory | None


@attrs.define(frozen=True)
class SelectionReset:
    pass


@attrs.define(frozen=True)
class ModeChosen:
    mode: SelectionMode


@attrs.define(frozen=True)
class QuantityChosen:
    count: int


@attrs.define(frozen=True)
class ManualSelectingStarted:
    suggested: tuple[AuthoritativeSeat, ...] = ()


@attrs.define(frozen=True)
class SeatsPicked:
    seats: tuple[AuthoritativeSeat, ...]
    scattered: bool
    suggested: tuple[AuthoritativeSeat, ...] = ()


@attrs.define(frozen=True)
class SeatAdded:
    seat: AuthoritativeSeat
    suggested: tuple[AuthoritativeSeat, ...] = ()


@attrs.define(frozen=True)
class SeatRemoved:
    seat_id: int
    suggested: tuple[AuthoritativeSeat, ...] = ()


@attrs.define(frozen=True)
class HoldStarted:
    expiry: float


@attrs.define(frozen=True)
class HoldExpired:
    pass


@attrs.define(frozen=True)
class ExpiryAcknowledged:
    pass


@attrs.define(frozen=True)
class ConflictsDropped:
    seat_ids: tuple[int, ...]
    suggested: tuple[AuthoritativeSeat, ...] = ()


@attrs.define(frozen=True)
class HandedOff:
    pass


@attrs.define(frozen=True)
class ScatteredNoticeDismissed:
    pass


SelectionAction = (
    CategorySelected
    | SelectionReset
    | ModeChosen
    | QuantityChosen
    | ManualSelectingStarted
    | SeatsPicked
    | SeatAdded
    | SeatRemoved
    | HoldStarted
    | HoldExpired
    | ExpiryAcknowledged
    | ConflictsDropped
    | HandedOff
    | ScatteredNoticeDismissed
)


# ==================== Guards ====================


def _require_phase(state: SelectionState, action: object, *allowed: SelectionPhase) -> None:
    if state.phase not in allowed:
        raise SelectionValidationError(
            f'{type(action).__name__} is not allowed while {state.phase.value}'
        )


def _require_category(state: SelectionState) -> TicketCategory:
    if state.category is None:
        raise SelectionValidationError('Please choose a ticket category first')
    return state.category


def _validate_seats(category: TicketCategory, seats: Iterable[AuthoritativeSeat]) -> None:
    for seat in seats:
        if not category.admits(seat):
            raise SelectionValidationError(
                f'Seat {seat.code} is {seat.seat_type}, please choose a {category.name} seat'
            )
        if not seat.is_available:
            raise SelectionValidationError(f'Seat {seat.code} is not available ({seat.status})')


# ==================== Handlers ====================


def _on_category_selected(state: SelectionState, action: CategorySelected) -> SelectionState:
    return SelectionState.empty(category=action.category)


def _on_reset(state: SelectionState, action: SelectionReset) -> SelectionState:
    return SelectionState.empty(category=state.category)


def _on_mode_chosen(state: SelectionState, action: ModeChosen) -> SelectionState:
    _require_phase(
        state, action, SelectionPhase.IDLE, SelectionPhase.MODE_CHOSEN, SelectionPhase.EXPIRED
    )
    _require_category(state)
    if action.mode == SelectionMode.NONE:
        raise SelectionValidationError('Please choose fast or manual seat selection')
    return SelectionState(
        phase=SelectionPhase.MODE_CHOSEN, mode=action.mode, category=state.category
    )


def _on_quantity_chosen(state: SelectionState, action: QuantityChosen) -> SelectionState:
    _require_phase(state, action, SelectionPhase.MODE_CHOSEN, SelectionPhase.QUANTITY_CHOSEN)
    if action.count < MIN_QUANTITY:
        raise SelectionValidationError('Quantity must be at least 1')
    return attrs.evolve(state, phase=SelectionPhase.QUANTITY_CHOSEN, requested_count=action.count)


def _on_manual_selecting_started(
    state: SelectionState, action: ManualSelectingStarted
) -> SelectionState:
    _require_phase(state, action, SelectionPhase.QUANTITY_CHOSEN)
    return attrs.evolve(
        state,
        phase=SelectionPhase.SELECTING,
        selection=TentativeSelection(),
        suggested_seats=action.suggested,
        scattered=False,
    )


def _on_seats_picked(state: SelectionState, action: SeatsPicked) -> SelectionState:
    _require_phase(state, action, SelectionPhase.QUANTITY_CHOSEN)
    category = _require_category(state)
    selection = TentativeSelection.of(action.seats)
    if len(selection) > state.requested_count:
        raise SelectionValidationError(
            f'Picked {len(selection)} seats but only {state.requested_count} were requested'
        )
    _validate_seats(category, selection)
    return attrs.evolve(
        state,
        phase=SelectionPhase.SELECTING,
        selection=selection,
        suggested_seats=action.suggested,
        scattered=action.scattered,
    )


def _on_seat_added(state: SelectionState, action: SeatAdded) -> SelectionState:
    _require_phase(state, action, SelectionPhase.SELECTING)
    category = _require_category(state)
    if state.selection.contains(action.seat.seat_id):
        return state
    if state.is_full:
        raise SelectionValidationError(
            f'You already picked {state.requested_count} seats, remove one before adding another'
        )
    _validate_seats(category, [action.seat])
    selection = state.selection.add(action.seat)
    return attrs.evolve(
        state,
        selection=selection,
        suggested_seats=action.suggested,
        scattered=not is_adjacent(selection.seats),
    )


def _on_seat_removed(state: SelectionState, action: SeatRemoved) -> SelectionState:
    _require_phase(
        state, action, SelectionPhase.SELECTING, SelectionPhase.RESERVED_PENDING_CHECKOUT
    )
    selection = state.selection.remove(action.seat_id)
    # Dropping below the requested count always releases the hold
    return attrs.evolve(
        state,
        phase=SelectionPhase.SELECTING,
        selection=selection,
        suggested_seats=action.suggested,
        scattered=not is_adjacent(selection.seats),
        show_scattered_notice=False,
        reservation_expiry=None,
    )


def _on_hold_started(state: SelectionState, action: HoldStarted) -> SelectionState:
    _require_phase(state, action, SelectionPhase.SELECTING)
    if len(state.selection) != state.requested_count:
        raise SelectionValidationError(
            f'Only {len(state.selection)} of {state.requested_count} seats are selected'
        )
    scattered = not is_adjacent(state.selection.seats)
    return attrs.evolve(
        state,
        phase=SelectionPhase.RESERVED_PENDING_CHECKOUT,
        scattered=scattered,
        show_scattered_notice=scattered,
        reservation_expiry=action.expiry,
    )


def _on_hold_expired(state: SelectionState, action: HoldExpired) -> SelectionState:
    _require_phase(state, action, SelectionPhase.RESERVED_PENDING_CHECKOUT)
    return attrs.evolve(
        state,
        phase=SelectionPhase.EXPIRED,
        selection=TentativeSelection(),
        suggested_seats=(),
        scattered=False,
        show_scattered_notice=False,
        reservation_expiry=None,
    )


def _on_expiry_acknowledged(state: SelectionState, action: ExpiryAcknowledged) -> SelectionState:
    _require_phase(state, action, SelectionPhase.EXPIRED)
    return SelectionState.empty(category=state.category)


def _on_conflicts_dropped(state: SelectionState, action: ConflictsDropped) -> SelectionState:
    _require_phase(state, action, SelectionPhase.RESERVED_PENDING_CHECKOUT)
    selection = state.selection.without(action.seat_ids)
    return attrs.evolve(
        state,
        phase=SelectionPhase.SELECTING,
        selection=selection,
        suggested_seats=action.suggested,
        scattered=not is_adjacent(selection.seats),
        show_scattered_notice=False,
        reservation_expiry=None,
    )


def _on_handed_off(state: SelectionState, action: HandedOff) -> SelectionState:
    _require_phase(state, action, SelectionPhase.RESERVED_PENDING_CHECKOUT)
    # Ownership of the seats passes to the payment flow
    return SelectionState(phase=SelectionPhase.HANDED_OFF, category=state.category)


def _on_scattered_notice_dismissed(
    state: SelectionState, action: ScatteredNoticeDismissed
) -> SelectionState:
    return attrs.evolve(state, show_scattered_notice=False)


_HANDLERS: dict[type, Callable[[SelectionState, Any], SelectionState]] = {
    CategorySelected: _on_category_selected,
    SelectionReset: _on_reset,
    ModeChosen: _on_mode_chosen,
    QuantityChosen: _on_quantity_chosen,
    ManualSelectingStarted: _on_manual_selecting_started,
    SeatsPicked: _on_seats_picked,
    SeatAdded: _on_seat_added,
    SeatRemoved: _on_seat_removed,
    HoldStarted: _on_hold_started,
    HoldExpired: _on_hold_expired,
    ExpiryAcknowledged: _on_expiry_acknowledged,
    ConflictsDropped: _on_conflicts_dropped,
    HandedOff: _on_handed_off,
    ScatteredNoticeDismissed: _on_scattered_notice_dismissed,
}


def reduce_selection(state: SelectionState, action: SelectionAction) -> SelectionState:
    handler = _HANDLERS.get(type(action))
    if handler is None:
        raise SelectionValidationError(f'Unknown selection action: {type(action).__name__}')
    return handler(state, action)
