from datetime import datetime, timezone
from typing import Optional
from sqlmodel import SQLModel, Field


class Ticket(SQLModel, table=True):
    """Booked ticket. Its existence blocks deletion of the user and route it references."""
    __tablename__ = "tickets"

    ticket_id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.user_id", index=True)
    route_id: Optional[int] = Field(default=None, foreign_key="routes.route_id", index=True)
    seat_number: Optional[str] = Field(default=None, max_length=10)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
