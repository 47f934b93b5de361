from typing import List

from pydantic import BaseModel, ConfigDict, Field

from src.service.seat_selection.domain.enum import SeatStatus
from src.service.seat_selection.domain.value_object import AuthoritativeSeat


class SeatResponse(BaseModel):
    """
    Seat Response Schema (as returned by GET /api/seats)
    """

    model_config = ConfigDict(populate_by_name=True, extra='ignore')

    seat_id: int = Field(alias='seatId')
    seat_code: str = Field(alias='seatCode')
    row_no: str = Field(alias='rowNo')
    col_no: int = Field(alias='colNo')  # Sent as a string, e.g. "7"
    status: str
    seat_type: str | None = Field(default=None, alias='seatType')
    area_id: int = Field(alias='areaId')

    def to_domain(self) -> AuthoritativeSeat:
        return AuthoritativeSeat(
            seat_id=self.seat_id,
            code=self.seat_code,
            row=self.row_no,
            column=self.col_no,
            status=SeatStatus.parse(self.status),
            seat_type=self.seat_type,
            area_id=self.area_id,
        )


class ListSeatsResponse(BaseModel):
    seats: List[SeatResponse] = []
    total: int = 0


class TemporaryReserveRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    event_id: int = Field(serialization_alias='eventId')
    seat_ids: List[int] = Field(serialization_alias='seatIds')
    reservation_duration: int = Field(serialization_alias='reservationDuration')
