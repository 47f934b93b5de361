"""
Unit tests for ConflictReconciler

conflicts = selected seats whose latest status is not AVAILABLE; available <=> no conflicts
"""

from unittest.mock import AsyncMock

import pytest

from src.service.seat_selection.app.dto import SeatPage
from src.service.seat_selection.app.query.conflict_reconciler import (
    ConflictReconciler,
    find_conflicts,
)
from src.service.seat_selection.domain.enum import SeatStatus
from src.service.seat_selection.domain.selection_error import CatalogFetchError
from src.service.seat_selection.domain.value_object import TentativeSelection


pytestmark = pytest.mark.unit


class TestFindConflicts:
    def test_only_selected_seats_that_changed_are_conflicts(self, make_seat):
        selection = TentativeSelection.of([make_seat(1), make_seat(2)])
        latest = [
            make_seat(1),
            make_seat(2, status=SeatStatus.BOOKED),
            make_seat(3, status=SeatStatus.BOOKED),  # Not ours
        ]

        assert [seat.seat_id for seat in find_conflicts(selection, latest)] == [2]

    def test_seat_missing_from_latest_list_is_not_a_conflict(self, make_seat):
        selection = TentativeSelection.of([make_seat(1), make_seat(2)])

        assert find_conflicts(selection, [make_seat(1)]) == ()

    @pytest.mark.parametrize(
        'status',
        [
            SeatStatus.HOLD,
            SeatStatus.BOOKED,
            SeatStatus.RESERVED,
            SeatStatus.OCCUPIED,
            SeatStatus.CHECKED_IN,
            SeatStatus.PENDING,
            SeatStatus.UNKNOWN,
        ],
    )
    def test_any_non_available_status_conflicts(self, make_seat, status):
        selection = TentativeSelection.of([make_seat(1)])

        assert len(find_conflicts(selection, [make_seat(1, status=status)])) == 1


class TestConflictReconciler:
    @pytest.fixture(autouse=True)
    def setup(self, make_seat):
        self.make_seat = make_seat
        self.gateway = AsyncMock()
        self.reconciler = ConflictReconciler(gateway=self.gateway)
        self.selection = TentativeSelection.of([make_seat(1), make_seat(2)])

    @pytest.mark.asyncio
    async def test_seat_booked_concurrently(self):
        # Given: A2 was booked by another buyer after we picked it
        latest = (self.make_seat(1), self.make_seat(2, status=SeatStatus.BOOKED))
        self.gateway.fetch_seats.return_value = SeatPage(seats=latest, total=2)

        # When
        result = await self.reconciler.reconcile(
            self.selection, event_id=5, area_id=1, ticket_category_name='VIP Ticket'
        )

        # Then
        assert result.available is False
        assert [seat.code for seat in result.conflicts] == ['A2']
        assert result.latest_seats == latest

    @pytest.mark.asyncio
    async def test_all_still_available(self):
        latest = (self.make_seat(1), self.make_seat(2), self.make_seat(3))
        self.gateway.fetch_seats.return_value = SeatPage(seats=latest, total=3)

        result = await self.reconciler.reconcile(
            self.selection, event_id=5, area_id=1, ticket_category_name='VIP Ticket'
        )

        assert result.available is True
        assert result.conflicts == ()

    @pytest.mark.asyncio
    async def test_refetches_with_the_selected_seat_type(self):
        self.gateway.fetch_seats.return_value = SeatPage()

        await self.reconciler.reconcile(
            self.selection, event_id=5, area_id=1, ticket_category_name='VIP Ticket'
        )

        self.gateway.fetch_seats.assert_awaited_once_with(event_id=5, area_id=1, seat_type='VIP')

    @pytest.mark.asyncio
    async def test_fetch_failure_propagates(self):
        self.gateway.fetch_seats.side_effect = CatalogFetchError('Seat API unreachable')

        with pytest.raises(CatalogFetchError):
            await self.reconciler.reconcile(
                self.selection, event_id=5, area_id=1, ticket_category_name='VIP Ticket'
            )
