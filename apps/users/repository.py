"""Users module repository implementation."""

from typing import Optional, List
from sqlmodel import select, func
from framework.repository.base import BaseRepository
from framework.repository.update_builder import UpdateField
from framework.security import get_password_hash
from apps.tickets.models import Ticket
from .models import User

# Fixed SET-clause order for partial user updates
USER_UPDATE_FIELDS = (
    UpdateField("email"),
    UpdateField("password", transform=get_password_hash),
    UpdateField("first_name"),
    UpdateField("last_name"),
    UpdateField("passport_number"),
    UpdateField("nationality"),
    UpdateField("date_of_birth"),
    UpdateField("contact_number"),
    UpdateField("gender"),
    UpdateField("role"),
)


class UserRepository(BaseRepository[User]):
    """User repository."""

    def __init__(self, session):
        super().__init__(session, User)

    async def get_by_email(self, email: str) -> Optional[User]:
        """Find credential record by email."""
        return await self.find_one(email=email)

    async def get_by_phone(self, phone: str) -> Optional[User]:
        """Find credential record by phone; phones live in contact_number."""
        return await self.find_one(contact_number=phone)

    async def _exists(self, column, value: str, exclude_id: Optional[int]) -> bool:
        statement = select(func.count(User.user_id)).where(column == value)
        if exclude_id is not None:
            statement = statement.where(User.user_id != exclude_id)
        result = await self.session.exec(statement)
        return result.one() > 0

    async def email_exists(self, email: str, exclude_id: Optional[int] = None) -> bool:
        return await self._exists(User.email, email, exclude_id)

    async def passport_exists(self, passport: str, exclude_id: Optional[int] = None) -> bool:
        return await self._exists(User.passport_number, passport, exclude_id)

    async def count_dependent_records(self, user_id: int) -> int:
        """Tickets referencing the user; a user with tickets cannot be deleted."""
        statement = select(func.count(Ticket.ticket_id)).where(Ticket.user_id == user_id)
        result = await self.session.exec(statement)
        return result.one()

    async def list_page(self, limit: int, offset: int) -> List[User]:
        """Users ordered by last name, then first name."""
        return await self.get_all(
            limit=limit,
            offset=offset,
            order_by=(User.last_name, User.first_name),
        )
