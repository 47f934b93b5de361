"""Seat selection errors, all surfaced as typed results by the controller"""

from typing import TYPE_CHECKING, Sequence

from src.platform.exception.exceptions import ConflictError, DomainError, ServiceUnavailableError


if TYPE_CHECKING:
    from src.service.seat_selection.domain.value_object.seat import AuthoritativeSeat


class SelectionValidationError(DomainError):
    """Bad quantity, mismatched category, illegal transition. Local and non-fatal"""


class HoldAlreadyActiveError(DomainError):
    def __init__(self, message: str = 'A reservation hold is already active') -> None:
        super().__init__(message, 409)


class CatalogFetchError(ServiceUnavailableError):
    """Seat list could not be loaded. Retryable, never mutates existing state"""


class SeatConflictError(ConflictError):
    def __init__(self, conflicts: Sequence['AuthoritativeSeat']) -> None:
        self.conflicts = tuple(conflicts)
        codes = ', '.join(seat.code for seat in self.conflicts)
        super().__init__(f'Seats already taken by another buyer: {codes}')
