"""Ticket Category Value Object"""

import attrs

from src.service.seat_selection.domain.selection_error import SelectionValidationError
from src.service.seat_selection.domain.value_object.seat import AuthoritativeSeat


def validate_name(instance, attribute, value):
    if not value or not value.strip():
        raise SelectionValidationError('Ticket category name is required')


def validate_non_negative(instance, attribute, value):
    if value < 0:
        raise SelectionValidationError(f'{attribute.name} must not be negative')


@attrs.define(frozen=True)
class TicketCategory:
    """Priced class of admission, constrains which seats can be picked together"""

    category_id: int = attrs.field(validator=attrs.validators.instance_of(int))
    name: str = attrs.field(validator=[attrs.validators.instance_of(str), validate_name])
    unit_price: int = attrs.field(validator=[attrs.validators.instance_of(int), validate_non_negative])
    max_quantity: int = attrs.field(
        default=0, validator=[attrs.validators.instance_of(int), validate_non_negative]
    )
    status: str = 'ACTIVE'

    def admits(self, seat: AuthoritativeSeat) -> bool:
        return seat.matches_category(self.name)

    def total_for(self, quantity: int) -> int:
        return self.unit_price * quantity
