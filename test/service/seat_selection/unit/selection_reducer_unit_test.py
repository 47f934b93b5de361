"""
Unit tests for reduce_selection

Test Coverage:
1. Happy path transitions (Idle -> ... -> ReservedPendingCheckout -> HandedOff / Expired)
2. Guards (illegal transitions, category mismatch, over-selection)
3. Reset idempotency
"""

import pytest

from src.service.seat_selection.domain.enum import SeatStatus, SelectionMode, SelectionPhase
from src.service.seat_selection.domain.selection_error import SelectionValidationError
from src.service.seat_selection.domain.selection_reducer import (
    CategorySelected,
    ConflictsDropped,
    ExpiryAcknowledged,
    HandedOff,
    HoldExpired,
    HoldStarted,
    ManualSelectingStarted,
    ModeChosen,
    QuantityChosen,
    SeatAdded,
    SeatRemoved,
    SeatsPicked,
    SelectionReset,
    reduce_selection,
)
from src.service.seat_selection.domain.selection_state import SelectionState, clamp_quantity


pytestmark = pytest.mark.unit


def _apply(state, *actions):
    for action in actions:
        state = reduce_selection(state, action)
    return state


class TestSelectionFlow:
    @pytest.fixture(autouse=True)
    def setup(self, vip_category, vip_row):
        self.category = vip_category
        self.a1, self.a2, self.a3 = vip_row[0], vip_row[1], vip_row[2]
        self.manual = _apply(
            SelectionState.empty(),
            CategorySelected(self.category),
            ModeChosen(SelectionMode.MANUAL),
            QuantityChosen(2),
            ManualSelectingStarted(),
        )

    def test_manual_flow_reaches_selecting(self):
        assert self.manual.phase == SelectionPhase.SELECTING
        assert self.manual.mode == SelectionMode.MANUAL
        assert self.manual.requested_count == 2
        assert len(self.manual.selection) == 0

    def test_mode_requires_a_category(self):
        with pytest.raises(SelectionValidationError, match='ticket category'):
            reduce_selection(SelectionState.empty(), ModeChosen(SelectionMode.FAST))

    def test_mode_none_is_rejected(self):
        state = reduce_selection(SelectionState.empty(), CategorySelected(self.category))

        with pytest.raises(SelectionValidationError):
            reduce_selection(state, ModeChosen(SelectionMode.NONE))

    def test_quantity_below_one_is_rejected(self):
        state = _apply(
            SelectionState.empty(), CategorySelected(self.category), ModeChosen(SelectionMode.FAST)
        )

        with pytest.raises(SelectionValidationError):
            reduce_selection(state, QuantityChosen(0))

    def test_hold_started_when_selection_is_full(self):
        # Given
        state = _apply(self.manual, SeatAdded(self.a1), SeatAdded(self.a2))

        # When
        state = reduce_selection(state, HoldStarted(expiry=1000.0))

        # Then
        assert state.phase == SelectionPhase.RESERVED_PENDING_CHECKOUT
        assert state.reservation_expiry == 1000.0
        assert state.has_active_hold is True
        assert state.scattered is False
        assert state.show_scattered_notice is False

    def test_hold_on_scattered_seats_raises_the_notice(self):
        state = _apply(self.manual, SeatAdded(self.a1), SeatAdded(self.a3), HoldStarted(1000.0))

        assert state.scattered is True
        assert state.show_scattered_notice is True

    def test_hold_requires_full_selection(self):
        state = reduce_selection(self.manual, SeatAdded(self.a1))

        with pytest.raises(SelectionValidationError, match='Only 1 of 2'):
            reduce_selection(state, HoldStarted(expiry=1000.0))

    def test_hand_off_clears_the_selection(self):
        state = _apply(
            self.manual, SeatAdded(self.a1), SeatAdded(self.a2), HoldStarted(1000.0), HandedOff()
        )

        assert state.phase == SelectionPhase.HANDED_OFF
        assert state.selected_seats == ()
        assert state.reservation_expiry is None

    def test_expiry_clears_the_selection_then_returns_to_idle(self):
        state = _apply(
            self.manual, SeatAdded(self.a1), SeatAdded(self.a2), HoldStarted(1000.0), HoldExpired()
        )

        assert state.phase == SelectionPhase.EXPIRED
        assert state.selected_seats == ()
        assert state.reservation_expiry is None

        state = reduce_selection(state, ExpiryAcknowledged())
        assert state.phase == SelectionPhase.IDLE
        assert state.category == self.category

    def test_conflicts_dropped_returns_to_selecting(self):
        state = _apply(self.manual, SeatAdded(self.a1), SeatAdded(self.a2), HoldStarted(1000.0))

        state = reduce_selection(state, ConflictsDropped(seat_ids=(self.a2.seat_id,)))

        assert state.phase == SelectionPhase.SELECTING
        assert state.selection.seat_ids == (self.a1.seat_id,)
        assert state.reservation_expiry is None

    def test_removing_a_seat_releases_the_hold(self):
        state = _apply(self.manual, SeatAdded(self.a1), SeatAdded(self.a2), HoldStarted(1000.0))

        state = reduce_selection(state, SeatRemoved(seat_id=self.a1.seat_id))

        assert state.phase == SelectionPhase.SELECTING
        assert state.selection.seat_ids == (self.a2.seat_id,)
        assert state.has_active_hold is False


class TestSelectionGuards:
    @pytest.fixture(autouse=True)
    def setup(self, vip_category, make_seat):
        self.make_seat = make_seat
        self.selecting = _apply(
            SelectionState.empty(),
            CategorySelected(vip_category),
            ModeChosen(SelectionMode.MANUAL),
            QuantityChosen(1),
            ManualSelectingStarted(),
        )

    def test_mismatched_seat_type_is_rejected(self):
        with pytest.raises(SelectionValidationError, match='VIP Ticket'):
            reduce_selection(self.selecting, SeatAdded(self.make_seat(1, seat_type='STANDARD')))

    def test_unavailable_seat_is_rejected(self):
        seat = self.make_seat(1, status=SeatStatus.BOOKED)

        with pytest.raises(SelectionValidationError, match='not available'):
            reduce_selection(self.selecting, SeatAdded(seat))

    def test_selection_never_exceeds_requested_count(self):
        state = reduce_selection(self.selecting, SeatAdded(self.make_seat(1)))

        with pytest.raises(SelectionValidationError, match='already picked'):
            reduce_selection(state, SeatAdded(self.make_seat(2)))
        assert len(state.selection) == 1

    def test_adding_the_same_seat_twice_is_a_no_op(self):
        seat = self.make_seat(1)
        state = reduce_selection(self.selecting, SeatAdded(seat))

        assert reduce_selection(state, SeatAdded(seat)) is state

    def test_fast_pick_larger_than_requested_is_rejected(self, vip_category):
        state = _apply(
            SelectionState.empty(),
            CategorySelected(vip_category),
            ModeChosen(SelectionMode.FAST),
            QuantityChosen(1),
        )

        with pytest.raises(SelectionValidationError):
            reduce_selection(
                state,
                SeatsPicked(seats=(self.make_seat(1), self.make_seat(2)), scattered=False),
            )

    def test_illegal_transition_is_rejected(self):
        with pytest.raises(SelectionValidationError, match='HoldExpired'):
            reduce_selection(self.selecting, HoldExpired())

    def test_unknown_action_is_rejected(self):
        with pytest.raises(SelectionValidationError, match='Unknown selection action'):
            reduce_selection(self.selecting, object())  # type: ignore[arg-type]


class TestReset:
    def test_reset_is_idempotent(self, vip_category, vip_row):
        # Given: A partially filled selection
        state = _apply(
            SelectionState.empty(),
            CategorySelected(vip_category),
            ModeChosen(SelectionMode.MANUAL),
            QuantityChosen(3),
            ManualSelectingStarted(suggested=tuple(vip_row[:2])),
            SeatAdded(vip_row[4]),
        )

        # When
        once = reduce_selection(state, SelectionReset())
        twice = reduce_selection(once, SelectionReset())

        # Then
        assert once == twice == SelectionState.empty(category=vip_category)
        assert once.phase == SelectionPhase.IDLE

    def test_category_change_starts_over(self, vip_category, make_seat):
        state = _apply(
            SelectionState.empty(),
            CategorySelected(vip_category),
            ModeChosen(SelectionMode.MANUAL),
            QuantityChosen(2),
            ManualSelectingStarted(),
            SeatAdded(make_seat(1)),
        )

        state = reduce_selection(state, CategorySelected(None))

        assert state == SelectionState.empty()


class TestClampQuantity:
    @pytest.mark.parametrize(
        ('raw', 'expected'),
        [
            (0, 1),
            (-5, 1),
            (3, 3),
            (10, 10),
            (42, 10),
            ('4', 4),
            ('abc', 1),
            (None, 1),
            ('15.0', 10),
            ('1e3', 10),
            ('2.7', 2),
            (2.9, 2),
            (float('inf'), 10),
            (float('-inf'), 1),
            ('inf', 10),
            (float('nan'), 1),
            (10**400, 10),
            (-(10**400), 1),
        ],
    )
    def test_out_of_range_input_is_clamped(self, raw, expected):
        assert clamp_quantity(raw, 10) == expected
