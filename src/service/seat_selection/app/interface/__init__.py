"""Seat Selection Interfaces"""

from src.service.seat_selection.app.interface.i_auth_session import IAuthSession
from src.service.seat_selection.app.interface.i_seat_catalog_gateway import ISeatCatalogGateway
from src.service.seat_selection.app.interface.i_tick_scheduler import ITickHandle, ITickScheduler

__all__ = ['IAuthSession', 'ISeatCatalogGateway', 'ITickHandle', 'ITickScheduler']
