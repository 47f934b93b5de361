"""
Conflict Reconciler

Re-fetches the authoritative seat list right before checkout and diffs it against the
tentative selection. It never substitutes seats, it only reports which ones were lost.
"""

from typing import Iterable

from opentelemetry import trace

from src.platform.logging.loguru_io import Logger
from src.service.seat_selection.app.dto import ReconciliationResult
from src.service.seat_selection.app.interface import ISeatCatalogGateway
from src.service.seat_selection.domain.value_object import AuthoritativeSeat, TentativeSelection


def find_conflicts(
    selection: TentativeSelection, latest_seats: Iterable[AuthoritativeSeat]
) -> tuple[AuthoritativeSeat, ...]:
    """Latest records of selected seats that are no longer AVAILABLE"""
    selected_ids = set(selection.seat_ids)
    return tuple(
        seat for seat in latest_seats if seat.seat_id in selected_ids and not seat.is_available
    )


class ConflictReconciler:
    def __init__(self, gateway: ISeatCatalogGateway):
        self.gateway = gateway
        self.tracer = trace.get_tracer(__name__)

    @Logger.io(truncate_content=True)
    async def reconcile(
        self,
        selection: TentativeSelection,
        *,
        event_id: int,
        area_id: int,
        ticket_category_name: str,
    ) -> ReconciliationResult:
        """
        Check the selection against the latest seat statuses

        Args:
            selection: Client-side tentative selection
            event_id: Event scope
            area_id: Venue area scope
            ticket_category_name: Active ticket category

        Returns:
            ReconciliationResult, available is True only when nothing conflicts

        Raises:
            CatalogFetchError: the seat API could not be reached
        """
        with self.tracer.start_as_current_span(
            'seat_selection.reconcile',
            attributes={
                'event.id': event_id,
                'area.id': area_id,
                'ticket.category': ticket_category_name,
                'seat.quantity': len(selection),
            },
        ) as span:
            # Filter by the exact seat type the API knows, not the category display name
            seat_type = selection.seats[0].seat_type if selection else None
            page = await self.gateway.fetch_seats(
                event_id=event_id, area_id=area_id, seat_type=seat_type
            )

            conflicts = find_conflicts(selection, page.seats)
            if conflicts:
                Logger.base.warning(
                    f'⚠️ [RECONCILE] {len(conflicts)} seat(s) taken concurrently: '
                    f'{[seat.code for seat in conflicts]}'
                )
                span.set_status(trace.Status(trace.StatusCode.ERROR, 'seat conflict'))
                span.set_attribute('seat.conflicts', len(conflicts))
            else:
                Logger.base.info(
                    f'✅ [RECONCILE] All {len(selection)} selected seats still available'
                )

            return ReconciliationResult(
                available=not conflicts, conflicts=conflicts, latest_seats=page.seats
            )
