from fastapi import APIRouter, Depends
from framework.auth import authenticated, staff_only
from framework.config import settings
from framework.repository.unit_of_work import UnitOfWork, get_uow
from framework.response import ResponseModel
from ..models import RouteCreate, RouteRead, RouteUpdate
from ..service import RouteService

router = APIRouter()

def get_route_service(uow: UnitOfWork = Depends(get_uow)) -> RouteService:
    """Dependency: create RouteService."""
    return RouteService(uow)

@router.get("", dependencies=[Depends(authenticated)])
async def list_routes(
    page: int = 1,
    limit: int = settings.DEFAULT_PAGE_SIZE,
    service: RouteService = Depends(get_route_service)
):
    """List routes (paginated)."""
    routes, total = await service.list_routes(page, limit)
    return ResponseModel.paginated(
        [RouteRead.model_validate(route) for route in routes], page, limit, total
    )

@router.get("/{route_id}", dependencies=[Depends(authenticated)])
async def get_route(route_id: int, service: RouteService = Depends(get_route_service)):
    route = await service.get_route(route_id)
    return ResponseModel.success(data=RouteRead.model_validate(route))

@router.post("", dependencies=[Depends(staff_only)])
async def create_route(data: RouteCreate, service: RouteService = Depends(get_route_service)):
    route = await service.create_route(data)
    return ResponseModel.success(data=RouteRead.model_validate(route))

@router.put("/{route_id}", dependencies=[Depends(staff_only)])
async def update_route(
    route_id: int,
    data: RouteUpdate,
    service: RouteService = Depends(get_route_service)
):
    """Partial update; only fields present in the body are changed."""
    route = await service.update_route(route_id, data)
    return ResponseModel.success(data=RouteRead.model_validate(route))

@router.delete("/{route_id}", dependencies=[Depends(staff_only)])
async def delete_route(route_id: int, service: RouteService = Depends(get_route_service)):
    """Delete a route; refused while tickets reference it."""
    await service.delete_route(route_id)
    return ResponseModel.success(data={})
