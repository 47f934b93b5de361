"""Reconciliation DTOs"""

import attrs

from src.service.seat_selection.domain.value_object import AuthoritativeSeat


@attrs.define(frozen=True)
class ReconciliationResult:
    """Outcome of re-validating a tentative selection against the latest seat statuses"""

    available: bool
    conflicts: tuple[AuthoritativeSeat, ...] = ()
    latest_seats: tuple[AuthoritativeSeat, ...] = ()
