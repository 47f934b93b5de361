"""
Selection Controller

The only component the UI talks to. It drives the selection reducer and wraps it with
the side effects: catalog loads, the hold countdown, and reconciliation before checkout.

Every public operation returns a SelectionResult. Validation failures, fetch failures
and conflicts come back as typed outcomes, never as exceptions.
"""

import time
from typing import Callable, Iterable

from opentelemetry import trace

from src.platform.config.core_setting import settings
from src.platform.exception.exceptions import CustomBaseError
from src.platform.logging.loguru_io import Logger
from src.service.seat_selection.app.command.reservation_session import ReservationSession
from src.service.seat_selection.app.dto import (
    CheckoutHandoff,
    Notice,
    NoticeKind,
    SelectionOutcome,
    SelectionResult,
)
from src.service.seat_selection.app.interface import ISeatCatalogGateway, ITickScheduler
from src.service.seat_selection.app.query.conflict_reconciler import ConflictReconciler
from src.service.seat_selection.app.query.seat_catalog import SeatCatalog
from src.service.seat_selection.domain.enum import SeatStatus, SelectionMode, SelectionPhase
from src.service.seat_selection.domain.selection_error import (
    CatalogFetchError,
    SeatConflictError,
    SelectionValidationError,
)
from src.service.seat_selection.domain.selection_reducer import (
    CategorySelected,
    ConflictsDropped,
    ExpiryAcknowledged,
    HandedOff,
    HoldExpired,
    HoldStarted,
    ManualSelectingStarted,
    ModeChosen,
    QuantityChosen,
    ScatteredNoticeDismissed,
    SeatAdded,
    SeatRemoved,
    SeatsPicked,
    SelectionAction,
    SelectionReset,
    reduce_selection,
)
from src.service.seat_selection.domain.selection_state import SelectionState, clamp_quantity
from src.service.seat_selection.domain.service import find_block, suggest
from src.service.seat_selection.domain.value_object import (
    AuthoritativeSeat,
    EventContext,
    TentativeSelection,
    TicketCategory,
)


SCATTERED_MESSAGE = 'The selected seats are not next to each other. Pick again for seats together.'
EXPIRED_MESSAGE = 'Your seat hold has expired. Please choose your seats again.'


class SelectionController:
    def __init__(
        self,
        *,
        event: EventContext,
        catalog: SeatCatalog,
        reconciler: ConflictReconciler,
        gateway: ISeatCatalogGateway,
        tick_scheduler: ITickScheduler,
        clock: Callable[[], float] = time.time,
        notice_listener: Callable[[Notice], None] | None = None,
        hold_duration_seconds: int | None = None,
        tick_interval_seconds: float | None = None,
        center_column: int | None = None,
        max_quantity: int | None = None,
    ):
        self.event = event
        self.catalog = catalog
        self.reconciler = reconciler
        self.gateway = gateway
        self.clock = clock
        self.notice_listener = notice_listener
        self.center_column = center_column
        self.max_quantity = settings.SEAT_MAX_QUANTITY if max_quantity is None else max_quantity
        self.session = ReservationSession(
            scheduler=tick_scheduler,
            on_expire=self._on_hold_expired,
            clock=clock,
            hold_duration_seconds=hold_duration_seconds,
            tick_interval_seconds=tick_interval_seconds,
        )
        self.tracer = trace.get_tracer(__name__)
        self._state = SelectionState.empty()
        # Bumped whenever a new selection is opened; in-flight results from an older
        # generation are discarded
        self._generation = 0

    # ==================== Read-only views ====================

    @property
    def state(self) -> SelectionState:
        return self._state

    @property
    def phase(self) -> SelectionPhase:
        return self._state.phase

    def remaining_seconds(self) -> int:
        return self.session.remaining_seconds()

    def total_amount(self) -> int:
        if self._state.category is None:
            return 0
        return self._state.category.total_for(len(self._state.selection))

    # ==================== Lifecycle ====================

    def select_category(self, category: TicketCategory) -> SelectionResult:
        """Changing the ticket category always starts over"""
        self._abandon_current_selection()
        self._dispatch(CategorySelected(category))
        Logger.base.info(f'🎫 [SELECTION] Ticket category set to {category.name}')
        return self._ok()

    def reset(self) -> SelectionResult:
        self._abandon_current_selection()
        self._dispatch(SelectionReset())
        return self._ok()

    def close(self) -> SelectionResult:
        self._abandon_current_selection()
        self._dispatch(CategorySelected(None))
        return self._ok()

    def acknowledge_expiry(self) -> SelectionResult:
        try:
            self._dispatch(ExpiryAcknowledged())
        except CustomBaseError as e:
            return self._failure(e)
        return self._ok()

    def dismiss_scattered_notice(self) -> SelectionResult:
        self._dispatch(ScatteredNoticeDismissed())
        return self._ok()

    # ==================== Mode & quantity ====================

    def choose_mode(self, mode: SelectionMode | str) -> SelectionResult:
        try:
            selection_mode = self._parse_mode(mode)
            self._abandon_current_selection()
            self._dispatch(SelectionReset())
            self._dispatch(ModeChosen(selection_mode))
        except CustomBaseError as e:
            return self._failure(e)

        Logger.base.info(f'🧭 [SELECTION] Mode: {selection_mode}')
        return self._ok()

    def set_quantity(self, raw_count: int | float | str | None) -> SelectionResult:
        upper = self.max_quantity
        category = self._state.category
        if category is not None and category.max_quantity > 0:
            upper = min(upper, category.max_quantity)

        try:
            self._dispatch(QuantityChosen(clamp_quantity(raw_count, upper)))
        except CustomBaseError as e:
            return self._failure(e)
        return self._ok()

    # ==================== Selecting ====================

    @Logger.io
    async def start_selecting(self) -> SelectionResult:
        """QuantityChosen -> Selecting, loading a fresh catalog first"""
        if self._state.phase != SelectionPhase.QUANTITY_CHOSEN:
            return self._failure(
                SelectionValidationError('Choose how many seats you want before picking seats')
            )

        generation = self._generation
        try:
            await self.catalog.ensure_fresh()
        except CatalogFetchError as e:
            return self._failure(e)
        except Exception as e:
            Logger.base.exception(f'❌ [SELECTION] Unexpected catalog error: {e}')
            return self._failure(CatalogFetchError('Could not load seats, please try again'))

        if generation != self._generation or self._state.phase != SelectionPhase.QUANTITY_CHOSEN:
            Logger.base.info('🗑️ [SELECTION] Discarding stale catalog load')
            return self._result(SelectionOutcome.STALE)

        try:
            if self._state.mode == SelectionMode.FAST:
                return self._fast_pick()
            self._dispatch(ManualSelectingStarted(suggested=self._suggestions(())))
        except CustomBaseError as e:
            return self._failure(e)
        return self._ok()

    def _fast_pick(self) -> SelectionResult:
        category = self._require_category()
        requested = self._state.requested_count
        block = find_block(
            self.catalog.seats, category.name, requested, center_column=self.center_column
        )
        self._dispatch(
            SeatsPicked(
                seats=block.seats,
                scattered=block.scattered,
                suggested=self._suggestions(block.seats),
            )
        )

        if block.underfilled(requested):
            return self._failure(
                SelectionValidationError(
                    f'Only {len(block.seats)} of {requested} {category.name} seats are available'
                )
            )
        return self._ok(notices=self._confirm())

    def toggle_seat(self, seat_id: int) -> SelectionResult:
        """Manual click on a seat: select it, or deselect it if already selected"""
        try:
            return self._toggle_seat(seat_id)
        except CustomBaseError as e:
            return self._failure(e)

    def _toggle_seat(self, seat_id: int) -> SelectionResult:
        if self._state.phase not in (
            SelectionPhase.SELECTING,
            SelectionPhase.RESERVED_PENDING_CHECKOUT,
        ):
            raise SelectionValidationError('Seats can only be picked while selecting')

        if self._state.selection.contains(seat_id):
            # Deselecting from an active hold drops below the requested count
            self.session.cancel()
            remaining = self._state.selection.remove(seat_id)
            self._dispatch(SeatRemoved(seat_id=seat_id, suggested=self._suggestions(remaining)))
            return self._ok()

        seat = self.catalog.find(seat_id)
        if seat is None:
            raise SelectionValidationError(f'Seat {seat_id} is not part of this seat map')

        category = self._require_category()
        if seat.status == SeatStatus.PENDING:
            notice = self._notify(
                Notice(
                    kind=NoticeKind.SEAT_PENDING,
                    message=f'Seat {seat.code} is being processed by another buyer',
                    seats=(seat,),
                )
            )
            return self._failure(
                SelectionValidationError(f'Seat {seat.code} is not available'), notices=(notice,)
            )
        if not seat.is_available:
            raise SelectionValidationError(f'Seat {seat.code} is not available')
        if not category.admits(seat):
            raise SelectionValidationError(
                f'Please choose a {category.name} seat. Seat {seat.code} is {seat.seat_type}'
            )
        if self._state.is_full:
            raise SelectionValidationError(
                f'You already picked {self._state.requested_count} seats, '
                'remove one before adding another'
            )

        picked = self._state.selection.add(seat)
        self._dispatch(SeatAdded(seat=seat, suggested=self._suggestions(picked)))

        if self._state.is_full:
            return self._ok(notices=self._confirm())
        return self._ok()

    def _confirm(self) -> tuple[Notice, ...]:
        """Selecting -> ReservedPendingCheckout, starting the hold"""
        expiry = self.session.start()
        try:
            self._dispatch(HoldStarted(expiry=expiry))
        except CustomBaseError:
            self.session.cancel()
            raise

        Logger.base.info(
            f'🔒 [SELECTION] Holding {[seat.code for seat in self._state.selected_seats]}'
        )
        if self._state.show_scattered_notice:
            return (
                self._notify(
                    Notice(
                        kind=NoticeKind.SCATTERED_SELECTION,
                        message=SCATTERED_MESSAGE,
                        seats=self._state.selected_seats,
                    )
                ),
            )
        return ()

    # ==================== Checkout ====================

    @Logger.io
    async def checkout(self) -> SelectionResult:
        """
        Re-validate the held seats and hand them to the payment flow

        Flow:
        1. Local checks (selection complete, hold not expired, event open)
        2. Reconcile against the latest seat statuses
        3. Conflict: drop lost seats, release the hold, back to Selecting
        4. Otherwise: best-effort server hold, build the handoff, clear local state
        """
        state = self._state
        category = state.category
        if state.phase != SelectionPhase.RESERVED_PENDING_CHECKOUT or category is None:
            if not state.selection:
                message = 'Please select at least 1 seat to continue'
            else:
                message = f'Please select {state.requested_count} seats before checkout'
            return self._failure(SelectionValidationError(message))

        if self.session.remaining_seconds() == 0:
            self._expire()
            return self._result(SelectionOutcome.EXPIRED, message=EXPIRED_MESSAGE)

        if not self.event.is_open:
            return self._failure(SelectionValidationError('This event is not open for registration'))

        generation = self._generation
        selection = state.selection

        with self.tracer.start_as_current_span(
            'seat_selection.checkout',
            attributes={
                'event.id': self.event.event_id,
                'area.id': self.event.area_id,
                'seat.quantity': len(selection),
            },
        ) as span:
            try:
                reconciliation = await self.reconciler.reconcile(
                    selection,
                    event_id=self.event.event_id,
                    area_id=self.event.area_id,
                    ticket_category_name=category.name,
                )
            except CatalogFetchError as e:
                return self._failure(e)
            except Exception as e:
                Logger.base.exception(f'❌ [CHECKOUT] Unexpected reconciliation error: {e}')
                return self._failure(CatalogFetchError('Could not verify seats, please try again'))

            if stale := self._stale_outcome(generation, selection):
                return stale

            self.catalog.merge(reconciliation.latest_seats)

            if not reconciliation.available:
                conflict = SeatConflictError(reconciliation.conflicts)
                span.set_status(trace.Status(trace.StatusCode.ERROR, conflict.message))
                return self._roll_back_conflicts(conflict)

            await self._try_temporary_reserve(selection.seat_ids)
            if stale := self._stale_outcome(generation, selection):
                return stale

            handoff = CheckoutHandoff(
                event_id=self.event.event_id,
                category_ticket_id=category.category_id,
                seat_ids=selection.seat_ids,
                quantity=len(selection),
                total_amount=category.total_for(len(selection)),
                reservation_expiry=state.reservation_expiry,
                scattered=state.scattered,
            )
            self.session.cancel()
            self._dispatch(HandedOff())
            Logger.base.info(
                f'💳 [CHECKOUT] Handing off {len(selection)} seats, total {handoff.total_amount}'
            )
            return self._result(SelectionOutcome.HANDED_OFF, handoff=handoff)

    def _roll_back_conflicts(self, error: SeatConflictError) -> SelectionResult:
        conflict_ids = tuple(seat.seat_id for seat in error.conflicts)
        remaining = self._state.selection.without(conflict_ids)
        self.session.cancel()
        self._dispatch(
            ConflictsDropped(seat_ids=conflict_ids, suggested=self._suggestions(remaining))
        )
        notice = self._notify(
            Notice(kind=NoticeKind.SEATS_LOST, message=error.message, seats=error.conflicts)
        )
        return self._result(
            SelectionOutcome.CONFLICT,
            message=error.message,
            notices=(notice,),
            conflicts=error.conflicts,
        )

    async def _try_temporary_reserve(self, seat_ids: tuple[int, ...]) -> None:
        try:
            reserved = await self.gateway.temporarily_reserve(
                event_id=self.event.event_id,
                seat_ids=seat_ids,
                reservation_duration=self.session.hold_duration_seconds,
            )
        except Exception as e:
            Logger.base.warning(f'⚠️ [CHECKOUT] Temporary reserve unavailable: {e}')
            return
        if not reserved:
            Logger.base.warning('⚠️ [CHECKOUT] Temporary reserve not confirmed by server')

    def _stale_outcome(
        self, generation: int, selection: TentativeSelection
    ) -> SelectionResult | None:
        if self._state.phase == SelectionPhase.EXPIRED:
            return self._result(SelectionOutcome.EXPIRED, message=EXPIRED_MESSAGE)
        if (
            generation != self._generation
            or self._state.phase != SelectionPhase.RESERVED_PENDING_CHECKOUT
            or self._state.selection is not selection
        ):
            Logger.base.info('🗑️ [CHECKOUT] Selection changed while verifying, discarding result')
            return self._result(SelectionOutcome.STALE)
        return None

    # ==================== Expiry ====================

    def _on_hold_expired(self) -> None:
        if self._state.phase != SelectionPhase.RESERVED_PENDING_CHECKOUT:
            return
        self._dispatch(HoldExpired())
        self._notify(Notice(kind=NoticeKind.HOLD_EXPIRED, message=EXPIRED_MESSAGE))

    def _expire(self) -> None:
        self.session.cancel()
        self._on_hold_expired()

    # ==================== Helpers ====================

    def _abandon_current_selection(self) -> None:
        self.session.cancel()
        self._generation += 1
        self.catalog.invalidate()

    def _dispatch(self, action: SelectionAction) -> SelectionState:
        self._state = reduce_selection(self._state, action)
        return self._state

    def _require_category(self) -> TicketCategory:
        if self._state.category is None:
            raise SelectionValidationError('Please choose a ticket category first')
        return self._state.category

    def _suggestions(self, exclude: Iterable[AuthoritativeSeat]) -> tuple[AuthoritativeSeat, ...]:
        category = self._state.category
        if category is None:
            return ()
        return tuple(
            suggest(self.catalog.seats, category.name, exclude, center_column=self.center_column)
        )

    @staticmethod
    def _parse_mode(mode: SelectionMode | str) -> SelectionMode:
        try:
            return SelectionMode(mode)
        except ValueError:
            raise SelectionValidationError(f'Invalid selection mode: {mode}')

    def _notify(self, notice: Notice) -> Notice:
        Logger.base.info(f'📣 [NOTICE] {notice.kind}: {notice.message}')
        if self.notice_listener is not None:
            self.notice_listener(notice)
        return notice

    def _result(self, outcome: SelectionOutcome, **kwargs) -> SelectionResult:
        return SelectionResult(outcome=outcome, state=self._state, **kwargs)

    def _ok(self, notices: tuple[Notice, ...] = ()) -> SelectionResult:
        return self._result(SelectionOutcome.OK, notices=notices)

    def _failure(self, error: CustomBaseError, notices: tuple[Notice, ...] = ()) -> SelectionResult:
        if isinstance(error, CatalogFetchError):
            outcome = SelectionOutcome.CATALOG_FETCH_ERROR
        else:
            outcome = SelectionOutcome.VALIDATION_ERROR
        Logger.base.warning(f'⚠️ [SELECTION] {outcome}: {error.message}')
        return self._result(outcome, message=error.message, notices=notices)
