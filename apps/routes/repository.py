"""Routes module repository implementation."""

from typing import List
from sqlmodel import select, func
from framework.repository.base import BaseRepository
from framework.repository.update_builder import UpdateField
from apps.tickets.models import Ticket
from .models import Route

ROUTE_UPDATE_FIELDS = (
    UpdateField("origin"),
    UpdateField("destination"),
    UpdateField("distance"),
    UpdateField("estimated_duration"),
)


class RouteRepository(BaseRepository[Route]):
    """Route repository."""

    def __init__(self, session):
        super().__init__(session, Route)

    async def count_dependent_records(self, route_id: int) -> int:
        statement = select(func.count(Ticket.ticket_id)).where(Ticket.route_id == route_id)
        result = await self.session.exec(statement)
        return result.one()

    async def list_page(self, limit: int, offset: int) -> List[Route]:
        return await self.get_all(limit=limit, offset=offset)
