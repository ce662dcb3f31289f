from typing import List, Optional, Tuple
from framework.exceptions.handler import ConflictError, NotFoundError, ValidationError
from framework.logging.logger import get_logger
from framework.pagination import page_window
from framework.repository.unit_of_work import UnitOfWork
from framework.security import Role, get_password_hash
from .models import User, UserCreate, UserUpdate
from .repository import UserRepository, USER_UPDATE_FIELDS

logger = get_logger("user_service")


class UserService:
    """User management (admin CRUD). Registration reuses create_user."""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    @property
    def repo(self) -> UserRepository:
        return self.uow.get_repository(UserRepository)

    async def _get_or_404(self, user_id: int) -> User:
        user = await self.repo.get_by_id(user_id)
        if not user:
            raise NotFoundError(f"User with id {user_id} not found")
        return user

    async def list_users(self, page: int, limit: int) -> Tuple[List[User], int]:
        limit, offset = page_window(page, limit)
        async with self.uow:
            users = await self.repo.list_page(limit, offset)
            total = await self.repo.count()
        return users, total

    async def get_user(self, user_id: int) -> User:
        async with self.uow:
            return await self._get_or_404(user_id)

    async def create_user(self, data: UserCreate, role: Optional[Role] = None) -> User:
        """
        Create a user from a registration payload.

        first_name, email and password are required. The role defaults to
        Role.USER; callers decide whether data.role may be honoured.
        """
        if not data.first_name or not data.email or not data.password:
            raise ValidationError("Please provide name, email and password")

        async with self.uow:
            if await self.repo.email_exists(data.email):
                raise ConflictError("Email already in use")
            if data.passport_number and await self.repo.passport_exists(data.passport_number):
                raise ConflictError("Passport number already in use")

            user = User(
                email=data.email,
                password=get_password_hash(data.password),
                role=role or Role.USER,
                first_name=data.first_name,
                last_name=data.last_name or "",
                passport_number=data.passport_number,
                nationality=data.nationality,
                date_of_birth=data.date_of_birth,
                contact_number=data.contact_number,
                gender=data.gender,
            )
            await self.repo.create(user)

        logger.info(f"User {user.user_id} created with role {user.role.value}")
        return user

    async def apply_changes(self, user_id: int, data: UserUpdate) -> bool:
        """
        Apply the present fields of data to the user.

        Returns False when nothing was changed (no fields given or no row
        matched); the caller must not assume an update happened.
        """
        async with self.uow:
            await self._get_or_404(user_id)
            if data.email and await self.repo.email_exists(data.email, exclude_id=user_id):
                raise ConflictError("Email already in use")
            if data.passport_number and await self.repo.passport_exists(data.passport_number, exclude_id=user_id):
                raise ConflictError("Passport number already in use")

            command = self.repo.new_update(user_id, USER_UPDATE_FIELDS, data)
            rows = await self.repo.apply_update(command)

        logger.info(f"User {user_id} update: {command!r}, rows affected: {rows}")
        return rows > 0

    async def update_user(self, user_id: int, data: UserUpdate) -> User:
        await self.apply_changes(user_id, data)
        return await self.get_user(user_id)

    async def delete_user(self, user_id: int) -> None:
        async with self.uow:
            await self._get_or_404(user_id)
            if await self.repo.count_dependent_records(user_id) > 0:
                raise ConflictError("Cannot delete user with existing tickets")
            await self.repo.delete(user_id)
        logger.info(f"User {user_id} deleted")
