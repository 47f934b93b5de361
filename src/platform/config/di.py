"""
https://python-dependency-injector.ets-labs.org/index.html
"""

from dependency_injector import containers, providers

from src.platform.config.core_setting import Settings, settings
from src.service.seat_selection.app.command.selection_controller import SelectionController
from src.service.seat_selection.app.query.conflict_reconciler import ConflictReconciler
from src.service.seat_selection.app.query.seat_catalog import SeatCatalog
from src.service.seat_selection.driven_adapter.anyio_tick_scheduler import AnyioTickScheduler
from src.service.seat_selection.driven_adapter.seat_api_client import SeatApiClient
from src.service.seat_selection.driven_adapter.static_auth_session import StaticAuthSession


class Container(containers.DeclarativeContainer):
    # Configuration
    config_service = providers.Singleton(Settings)

    # Auth (token handed over by the login flow, or SEAT_API_TOKEN)
    auth_session = providers.Singleton(StaticAuthSession, token=settings.SEAT_API_TOKEN)

    # Seat API client (one httpx connection pool per process)
    seat_api_client = providers.Singleton(
        SeatApiClient,
        auth_session=auth_session,
        base_url=settings.SEAT_API_BASE_URL,
        timeout=settings.SEAT_API_TIMEOUT_SECONDS,
    )

    # Per-picker objects: event_id, area_id and event are supplied at call time. The timer
    # task group goes through the nested provider: tick_scheduler__task_group=tg
    seat_catalog = providers.Factory(SeatCatalog, gateway=seat_api_client)
    conflict_reconciler = providers.Factory(ConflictReconciler, gateway=seat_api_client)
    tick_scheduler = providers.Factory(AnyioTickScheduler)

    selection_controller = providers.Factory(
        SelectionController,
        reconciler=conflict_reconciler,
        gateway=seat_api_client,
        tick_scheduler=tick_scheduler,
        hold_duration_seconds=settings.SEAT_HOLD_DURATION_SECONDS,
        tick_interval_seconds=settings.COUNTDOWN_TICK_SECONDS,
        center_column=settings.SEAT_CENTER_COLUMN,
        max_quantity=settings.SEAT_MAX_QUANTITY,
    )


container = Container()


def setup() -> None:
    container.config_service()


async def cleanup() -> None:
    await container.seat_api_client().aclose()
    container.reset_singletons()
