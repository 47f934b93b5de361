"""
Seat Catalog

Holds the last fetched seat snapshot for one (event, area) scope.
"""

from typing import Iterable, Sequence

import anyio

from src.platform.logging.loguru_io import Logger
from src.service.seat_selection.app.interface import ISeatCatalogGateway
from src.service.seat_selection.domain.enum import SeatType
from src.service.seat_selection.domain.selection_error import CatalogFetchError
from src.service.seat_selection.domain.value_object import AuthoritativeSeat


class SeatCatalog:
    """
    Current seat snapshot, as last fetched from the seat API

    A failed load raises CatalogFetchError and leaves the previous snapshot untouched so
    the caller can retry.
    """

    def __init__(
        self,
        *,
        gateway: ISeatCatalogGateway,
        event_id: int,
        area_id: int,
        seat_type: str | None = None,
    ):
        self.gateway = gateway
        self.event_id = event_id
        self.area_id = area_id
        self.seat_type = seat_type
        self._seats: tuple[AuthoritativeSeat, ...] = ()
        self._total = 0
        self._stale = True
        # Bumped by invalidate(); a load that raced an invalidation stays stale
        self._epoch = 0

    @property
    def seats(self) -> tuple[AuthoritativeSeat, ...]:
        return self._seats

    @property
    def total(self) -> int:
        return self._total

    @property
    def is_stale(self) -> bool:
        return self._stale

    def invalidate(self) -> None:
        self._stale = True
        self._epoch += 1

    def find(self, seat_id: int) -> AuthoritativeSeat | None:
        for seat in self._seats:
            if seat.seat_id == seat_id:
                return seat
        return None

    @Logger.io(truncate_content=True)
    async def load(self) -> tuple[AuthoritativeSeat, ...]:
        epoch = self._epoch
        try:
            page = await self.gateway.fetch_seats(
                event_id=self.event_id, area_id=self.area_id, seat_type=self.seat_type
            )
        except CatalogFetchError as e:
            Logger.base.warning(
                f'⚠️ [SEAT-CATALOG] Load failed for event {self.event_id} area {self.area_id}: {e}'
            )
            raise

        self._seats = page.seats
        self._total = page.total
        self._stale = epoch != self._epoch
        Logger.base.info(
            f'🪑 [SEAT-CATALOG] Loaded {len(page.seats)} seats for event {self.event_id} '
            f'area {self.area_id}'
        )
        return self._seats

    async def ensure_fresh(self) -> tuple[AuthoritativeSeat, ...]:
        if self._stale:
            return await self.load()
        return self._seats

    def merge(self, latest: Iterable[AuthoritativeSeat]) -> None:
        """Overwrite known seats with fresher records (e.g. from reconciliation)"""
        latest_by_id = {seat.seat_id: seat for seat in latest}
        merged = [latest_by_id.pop(seat.seat_id, seat) for seat in self._seats]
        merged.extend(latest_by_id.values())
        self._seats = tuple(merged)

    async def load_type_totals(
        self, seat_types: Sequence[str] = tuple(SeatType)
    ) -> dict[str, int]:
        """Seat counts per type, fetched concurrently"""
        totals: dict[str, int] = {}

        async def _fetch_total(seat_type: str) -> None:
            page = await self.gateway.fetch_seats(
                event_id=self.event_id, area_id=self.area_id, seat_type=seat_type
            )
            totals[seat_type] = page.total

        async with anyio.create_task_group() as tg:
            for seat_type in seat_types:
                tg.start_soon(_fetch_total, seat_type)

        return totals
