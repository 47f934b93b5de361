"""
Seat API Client

httpx implementation of ISeatCatalogGateway against the ticketing backend.
"""

from typing import Any, Sequence

import httpx
import orjson
from pydantic import ValidationError

from src.platform.config.core_setting import settings
from src.platform.logging.loguru_io import Logger
from src.service.seat_selection.app.dto import SeatPage
from src.service.seat_selection.app.interface import IAuthSession, ISeatCatalogGateway
from src.service.seat_selection.domain.selection_error import CatalogFetchError
from src.service.seat_selection.driven_adapter.schema.seat_schema import (
    ListSeatsResponse,
    TemporaryReserveRequest,
)


SEATS_PATH = '/api/seats'
TEMPORARY_RESERVE_PATH = '/api/seats/temporary-reserve'


class SeatApiClient(ISeatCatalogGateway):
    def __init__(
        self,
        *,
        auth_session: IAuthSession,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.auth_session = auth_session
        self._client = httpx.AsyncClient(
            base_url=base_url or settings.SEAT_API_BASE_URL,
            timeout=settings.SEAT_API_TIMEOUT_SECONDS if timeout is None else timeout,
            transport=transport,
        )

    async def __aenter__(self) -> 'SeatApiClient':
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    def _headers(self) -> dict[str, str]:
        headers = {'Content-Type': 'application/json'}
        if token := self.auth_session.get_access_token():
            headers['Authorization'] = f'Bearer {token}'
        return headers

    @Logger.io(truncate_content=True)
    async def fetch_seats(
        self, *, event_id: int, area_id: int, seat_type: str | None = None
    ) -> SeatPage:
        params: dict[str, Any] = {'areaId': area_id, 'eventId': event_id}
        if seat_type:
            params['seatType'] = seat_type

        try:
            response = await self._client.get(SEATS_PATH, params=params, headers=self._headers())
            response.raise_for_status()
            payload = ListSeatsResponse.model_validate(orjson.loads(response.content))
        except httpx.HTTPStatusError as e:
            raise CatalogFetchError(
                f'Seat API returned {e.response.status_code} for event {event_id}'
            ) from e
        except httpx.HTTPError as e:
            raise CatalogFetchError(f'Seat API unreachable: {e}') from e
        except (orjson.JSONDecodeError, ValidationError) as e:
            raise CatalogFetchError(f'Seat API returned an unreadable seat list: {e}') from e

        seats = tuple(seat.to_domain() for seat in payload.seats)
        return SeatPage(seats=seats, total=payload.total)

    async def temporarily_reserve(
        self, *, event_id: int, seat_ids: Sequence[int], reservation_duration: int
    ) -> bool:
        body = TemporaryReserveRequest(
            event_id=event_id, seat_ids=list(seat_ids), reservation_duration=reservation_duration
        )
        try:
            response = await self._client.post(
                TEMPORARY_RESERVE_PATH,
                content=orjson.dumps(body.model_dump(by_alias=True)),
                headers=self._headers(),
            )
        except httpx.HTTPError as e:
            # Endpoint is optional on the backend
            Logger.base.warning(f'⚠️ [SEAT-API] Temporary reserve not available: {e}')
            return False

        if response.is_success:
            Logger.base.info(f'🔒 [SEAT-API] Server hold placed on seats {list(seat_ids)}')
            return True
        Logger.base.warning(f'⚠️ [SEAT-API] Temporary reserve rejected: {response.status_code}')
        return False
