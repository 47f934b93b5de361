"""
Seat Catalog Gateway Interface

Defines the abstraction over the seat API used for catalog loads, reconciliation and
best-effort temporary holds.
"""

from abc import ABC, abstractmethod
from typing import Sequence

from src.service.seat_selection.app.dto.seat_page_dto import SeatPage


class ISeatCatalogGateway(ABC):
    """Seat API gateway interface"""

    @abstractmethod
    async def fetch_seats(
        self, *, event_id: int, area_id: int, seat_type: str | None = None
    ) -> SeatPage:
        """Fetch the authoritative seat list, raises CatalogFetchError on failure"""
        pass

    @abstractmethod
    async def temporarily_reserve(
        self, *, event_id: int, seat_ids: Sequence[int], reservation_duration: int
    ) -> bool:
        """Best-effort server-side hold, returns False instead of raising"""
        pass
