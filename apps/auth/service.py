from typing import Optional, Tuple
from loguru import logger
from framework.exceptions.handler import AuthError, NotFoundError, ValidationError
from framework.repository.unit_of_work import UnitOfWork
from framework.security import Identity, Role, TokenCodec, verify_password
from apps.users.models import User, UserCreate
from apps.users.repository import UserRepository
from apps.users.service import UserService

class AuthService:
    def __init__(self, uow: UnitOfWork, codec: TokenCodec):
        """Initialize Auth Service with UnitOfWork and the token codec."""
        self.uow = uow
        self.codec = codec

    async def register(self, data: UserCreate) -> Tuple[User, str]:
        """Register a new user by email. Self-registration always gets the user role."""
        user = await UserService(self.uow).create_user(data, role=Role.USER)
        token = self.codec.issue(user.user_id, user.role)
        logger.info(f"User {user.user_id} registered")
        return user, token

    def _check_credentials(self, user: Optional[User], password: str) -> User:
        # Unknown account, missing password and wrong password look the same to the caller
        if user is None or not user.password:
            raise AuthError("Invalid credentials")
        if not verify_password(password, user.password):
            raise AuthError("Invalid credentials")
        return user

    async def login(self, email: str, password: str) -> Tuple[User, str]:
        """Authenticate by email and password; return the user and a fresh token."""
        if not email or not password:
            raise ValidationError("Please provide email and password")
        async with self.uow:
            user = await self.uow.get_repository(UserRepository).get_by_email(email)
        user = self._check_credentials(user, password)
        logger.info(f"User {user.user_id} logged in by email")
        return user, self.codec.issue(user.user_id, user.role)

    async def login_phone(self, phone: str, password: str) -> Tuple[User, str]:
        """Authenticate by phone (the user's contact_number) and password."""
        if not phone or not password:
            raise ValidationError("Please provide phone and password")
        async with self.uow:
            user = await self.uow.get_repository(UserRepository).get_by_phone(phone)
        user = self._check_credentials(user, password)
        logger.info(f"User {user.user_id} logged in by phone")
        return user, self.codec.issue(user.user_id, user.role)

    async def current_user(self, identity: Identity) -> User:
        async with self.uow:
            user = await self.uow.get_repository(UserRepository).get_by_id(identity.subject_id)
        if not user:
            raise NotFoundError("User not found")
        return user
