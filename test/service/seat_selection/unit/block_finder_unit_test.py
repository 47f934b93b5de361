"""
Unit tests for find_block

Test Coverage:
1. Contiguous block first (leftmost window, lowest row)
2. Nearest-to-front-center fallback when no run exists
3. Under-fill and filtering (status, seat type)
"""

import pytest

from src.service.seat_selection.domain.enum import SeatStatus
from src.service.seat_selection.domain.service import find_block, is_adjacent


pytestmark = pytest.mark.unit


class TestContiguousBlock:
    def test_full_row_returns_leftmost_block(self, vip_row):
        # Given: A1..A10 all AVAILABLE VIP
        # When: Request 3 seats
        result = find_block(vip_row, 'VIP', 3)

        # Then: A1, A2, A3 together
        assert [seat.code for seat in result.seats] == ['A1', 'A2', 'A3']
        assert result.scattered is False

    def test_run_in_later_row_beats_scattered_seats_in_front(self, make_seat):
        # Given: Row A only has scattered seats, row B has a run of 3
        catalog = [
            make_seat(1, row='A', column=1),
            make_seat(2, row='A', column=5),
            make_seat(3, row='B', column=8),
            make_seat(4, row='B', column=9),
            make_seat(5, row='B', column=10),
        ]

        # When
        result = find_block(catalog, 'VIP', 3)

        # Then
        assert [seat.code for seat in result.seats] == ['B8', 'B9', 'B10']
        assert result.scattered is False

    @pytest.mark.parametrize('count', [1, 2, 4])
    def test_any_existing_run_is_found_and_adjacent(self, make_seat, count):
        # Given: Row C has a run of exactly 4 starting at column 6, row B is full of gaps
        catalog = [make_seat(column, row='B', column=column * 2) for column in range(1, 6)]
        catalog += [make_seat(100 + column, row='C', column=column) for column in range(6, 10)]

        # When
        result = find_block(catalog, 'VIP', count)

        # Then
        assert len(result.seats) == count
        assert result.scattered is False
        assert is_adjacent(result.seats) is True

    def test_catalog_order_does_not_change_the_pick(self, vip_row):
        result = find_block(list(reversed(vip_row)), 'VIP', 2)

        assert [seat.code for seat in result.seats] == ['A1', 'A2']


class TestFallback:
    def test_no_run_returns_nearest_seats_scattered(self, make_seat):
        # Given: Only A1, A3, A5 available (A2, A4 booked)
        catalog = [
            make_seat(1),
            make_seat(2, status=SeatStatus.BOOKED),
            make_seat(3),
            make_seat(4, status=SeatStatus.BOOKED),
            make_seat(5),
        ]

        # When: Request 2
        result = find_block(catalog, 'VIP', 2, center_column=10)

        # Then: Two seats closest to the center column, flagged scattered
        assert [seat.code for seat in result.seats] == ['A5', 'A3']
        assert result.scattered is True
        assert result.underfilled(2) is False

    def test_fallback_prefers_front_rows(self, make_seat):
        catalog = [
            make_seat(1, row='B', column=10),
            make_seat(2, row='A', column=1),
            make_seat(3, row='A', column=19),
        ]

        result = find_block(catalog, 'VIP', 2, center_column=10)

        assert [seat.code for seat in result.seats] == ['A1', 'A19']
        assert result.scattered is True

    def test_center_column_is_a_parameter(self, make_seat):
        catalog = [make_seat(1, column=2), make_seat(2, column=6), make_seat(3, column=10)]

        result = find_block(catalog, 'VIP', 2, center_column=5)

        assert [seat.code for seat in result.seats] == ['A6', 'A2']

    def test_underfill_returns_what_exists(self, make_seat):
        # Given: Only 2 VIP seats available
        catalog = [make_seat(1), make_seat(3)]

        # When: Request 4
        result = find_block(catalog, 'VIP', 4)

        # Then: Caller has to detect under-fill
        assert len(result.seats) == 2
        assert result.scattered is True
        assert result.underfilled(4) is True


class TestFiltering:
    def test_unavailable_seats_are_never_picked(self, make_seat):
        catalog = [
            make_seat(1, status=SeatStatus.HOLD),
            make_seat(2, status=SeatStatus.PENDING),
            make_seat(3, status=SeatStatus.UNKNOWN),
            make_seat(4),
        ]

        result = find_block(catalog, 'VIP', 2)

        assert [seat.seat_id for seat in result.seats] == [4]

    def test_seat_type_must_match_category_name(self, make_seat):
        # Given: Standard seats in front, VIP seats behind
        catalog = [make_seat(column, seat_type='STANDARD') for column in range(1, 4)]
        catalog += [make_seat(10 + column, row='B', column=column) for column in range(1, 4)]

        # When: Category name contains "vip" in a different case
        result = find_block(catalog, 'Vip Ticket', 2)

        # Then
        assert [seat.code for seat in result.seats] == ['B1', 'B2']

    def test_non_positive_count_returns_nothing(self, vip_row):
        result = find_block(vip_row, 'VIP', 0)

        assert result.seats == ()
        assert result.scattered is False
