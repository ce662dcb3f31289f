from typing import List, Tuple
from framework.exceptions.handler import ConflictError, NotFoundError
from framework.logging.logger import get_logger
from framework.pagination import page_window
from framework.repository.unit_of_work import UnitOfWork
from .models import Route, RouteCreate, RouteUpdate
from .repository import RouteRepository, ROUTE_UPDATE_FIELDS

logger = get_logger("route_service")


class RouteService:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    @property
    def repo(self) -> RouteRepository:
        return self.uow.get_repository(RouteRepository)

    async def _get_or_404(self, route_id: int) -> Route:
        route = await self.repo.get_by_id(route_id)
        if not route:
            raise NotFoundError(f"Route with id {route_id} not found")
        return route

    async def list_routes(self, page: int, limit: int) -> Tuple[List[Route], int]:
        limit, offset = page_window(page, limit)
        async with self.uow:
            routes = await self.repo.list_page(limit, offset)
            total = await self.repo.count()
        return routes, total

    async def get_route(self, route_id: int) -> Route:
        async with self.uow:
            return await self._get_or_404(route_id)

    async def create_route(self, data: RouteCreate) -> Route:
        async with self.uow:
            route = await self.repo.create(Route.model_validate(data))
        logger.info(f"Route {route.route_id} created: {route.origin} -> {route.destination}")
        return route

    async def update_route(self, route_id: int, data: RouteUpdate) -> Route:
        async with self.uow:
            await self._get_or_404(route_id)
            command = self.repo.new_update(route_id, ROUTE_UPDATE_FIELDS, data)
            rows = await self.repo.apply_update(command)
            route = await self._get_or_404(route_id)
        logger.info(f"Route {route_id} update: {command!r}, rows affected: {rows}")
        return route

    async def delete_route(self, route_id: int) -> None:
        async with self.uow:
            await self._get_or_404(route_id)
            if await self.repo.count_dependent_records(route_id) > 0:
                raise ConflictError("Cannot delete route with existing tickets")
            await self.repo.delete(route_id)
        logger.info(f"Route {route_id} deleted")
