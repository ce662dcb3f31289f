from datetime import datetime, timezone
from typing import Optional
from sqlalchemy import Column, Enum as SAEnum
from sqlmodel import SQLModel, Field
from framework.security import Role


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# Stored as the lowercase role value ("admin"), not the member name
RoleType = SAEnum(
    Role,
    name="user_role",
    values_callable=lambda enum: [member.value for member in enum],
)


class UserBase(SQLModel):
    email: Optional[str] = Field(default=None, max_length=255, unique=True, index=True)
    first_name: str = Field(max_length=100)
    last_name: str = Field(default="", max_length=100)
    passport_number: Optional[str] = Field(default=None, max_length=50, unique=True, index=True)
    nationality: Optional[str] = Field(default=None, max_length=100)
    date_of_birth: Optional[datetime] = None
    contact_number: Optional[str] = Field(default=None, max_length=50, index=True)
    gender: Optional[str] = Field(default=None, max_length=20)


class User(UserBase, table=True):
    __tablename__ = "users"
    user_id: Optional[int] = Field(default=None, primary_key=True)
    # bcrypt hash; never returned by the API (see UserRead)
    password: Optional[str] = Field(default=None, max_length=255)
    role: Role = Field(
        default=Role.USER,
        sa_column=Column(RoleType, nullable=False, default=Role.USER),
    )
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)


class UserRead(UserBase):
    """Outward representation of a user (no password)."""
    user_id: int
    role: Role
    created_at: datetime
    updated_at: datetime


class UserCreate(SQLModel):
    """
    Registration / admin create payload.

    Required fields are checked by the service so a missing one is reported
    as a 400 with a readable message.
    """
    email: Optional[str] = None
    password: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    role: Optional[Role] = None
    passport_number: Optional[str] = None
    nationality: Optional[str] = None
    date_of_birth: Optional[datetime] = None
    contact_number: Optional[str] = None
    gender: Optional[str] = None


class UserUpdate(SQLModel):
    email: Optional[str] = None
    password: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    passport_number: Optional[str] = None
    nationality: Optional[str] = None
    date_of_birth: Optional[datetime] = None
    contact_number: Optional[str] = None
    gender: Optional[str] = None
    role: Optional[Role] = None
