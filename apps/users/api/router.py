from fastapi import APIRouter, Depends
from framework.auth import admin_only
from framework.config import settings
from framework.repository.unit_of_work import UnitOfWork, get_uow
from framework.response import ResponseModel
from ..models import UserCreate, UserRead, UserUpdate
from ..service import UserService

# Every user-management endpoint is admin only
router = APIRouter(dependencies=[Depends(admin_only)])

def get_user_service(uow: UnitOfWork = Depends(get_uow)) -> UserService:
    """Dependency: create UserService."""
    return UserService(uow)

@router.get("")
async def list_users(
    page: int = 1,
    limit: int = settings.DEFAULT_PAGE_SIZE,
    service: UserService = Depends(get_user_service)
):
    """List users ordered by name (paginated)."""
    users, total = await service.list_users(page, limit)
    return ResponseModel.paginated(
        [UserRead.model_validate(user) for user in users], page, limit, total
    )

@router.post("")
async def create_user(data: UserCreate, service: UserService = Depends(get_user_service)):
    """Create a user; admins may set the role."""
    user = await service.create_user(data, role=data.role)
    return ResponseModel.success(data=UserRead.model_validate(user))

@router.get("/{user_id}")
async def get_user(user_id: int, service: UserService = Depends(get_user_service)):
    user = await service.get_user(user_id)
    return ResponseModel.success(data=UserRead.model_validate(user))

@router.put("/{user_id}")
async def update_user(
    user_id: int,
    data: UserUpdate,
    service: UserService = Depends(get_user_service)
):
    """Partial update; only fields present in the body are changed."""
    user = await service.update_user(user_id, data)
    return ResponseModel.success(data=UserRead.model_validate(user))

@router.delete("/{user_id}")
async def delete_user(user_id: int, service: UserService = Depends(get_user_service)):
    """Delete a user; refused while tickets reference them."""
    await service.delete_user(user_id)
    return ResponseModel.success(data={})
