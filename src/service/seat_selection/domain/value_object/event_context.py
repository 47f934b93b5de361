"""Event Context Value Object"""

import attrs


@attrs.define(frozen=True)
class EventContext:
    """Scope of a seat picker: which event, which venue area"""

    event_id: int
    area_id: int
    status: str = 'OPEN'

    @property
    def is_open(self) -> bool:
        return self.status.upper() == 'OPEN'
