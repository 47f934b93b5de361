"""Unit tests for the dependency container wiring"""

from unittest.mock import AsyncMock

import anyio
from dependency_injector import providers
import pytest

from src.platform.config.core_setting import settings
from src.platform.config.di import Container
from src.service.seat_selection.app.command.selection_controller import SelectionController
from src.service.seat_selection.domain.value_object import EventContext
from src.service.seat_selection.driven_adapter.anyio_tick_scheduler import AnyioTickScheduler
from src.service.seat_selection.driven_adapter.seat_api_client import SeatApiClient


pytestmark = pytest.mark.unit


class TestContainer:
    def setup_method(self):
        self.container = Container()

    def test_controller_factory_shares_the_gateway(self, tick_scheduler):
        # Given: Seat API replaced by a mock
        gateway = AsyncMock()
        self.container.seat_api_client.override(providers.Object(gateway))

        # When
        catalog = self.container.seat_catalog(event_id=5, area_id=1)
        controller = self.container.selection_controller(
            event=EventContext(event_id=5, area_id=1),
            catalog=catalog,
            tick_scheduler=tick_scheduler,
        )

        # Then
        assert isinstance(controller, SelectionController)
        assert controller.gateway is gateway
        assert controller.reconciler.gateway is gateway
        assert catalog.gateway is gateway
        assert controller.session.hold_duration_seconds == settings.SEAT_HOLD_DURATION_SECONDS
        assert controller.max_quantity == settings.SEAT_MAX_QUANTITY

    def test_each_picker_gets_its_own_controller(self, tick_scheduler):
        self.container.seat_api_client.override(providers.Object(AsyncMock()))
        event = EventContext(event_id=5, area_id=1)

        first, second = (
            self.container.selection_controller(
                event=event,
                catalog=self.container.seat_catalog(event_id=5, area_id=1),
                tick_scheduler=tick_scheduler,
            )
            for _ in range(2)
        )

        assert first is not second
        assert first.catalog is not second.catalog

    @pytest.mark.asyncio
    async def test_controller_gets_an_anyio_scheduler_on_the_callers_task_group(self):
        self.container.seat_api_client.override(providers.Object(AsyncMock()))

        async with anyio.create_task_group() as tg:
            controller = self.container.selection_controller(
                event=EventContext(event_id=5, area_id=1),
                catalog=self.container.seat_catalog(event_id=5, area_id=1),
                tick_scheduler__task_group=tg,
            )

        scheduler = controller.session.scheduler
        assert isinstance(scheduler, AnyioTickScheduler)
        assert scheduler.task_group is tg
        assert controller.session.tick_interval_seconds == settings.COUNTDOWN_TICK_SECONDS

    @pytest.mark.asyncio
    async def test_seat_api_client_is_a_singleton(self):
        client = self.container.seat_api_client()

        assert isinstance(client, SeatApiClient)
        assert self.container.seat_api_client() is client
        await client.aclose()
