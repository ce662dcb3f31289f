import re
from typing import Optional
from pydantic import field_validator
from sqlmodel import SQLModel, Field

# Flight time as HH:MM
DURATION_PATTERN = re.compile(r"^\d{1,3}:[0-5]\d$")


def _check_duration(value: Optional[str]) -> Optional[str]:
    if value is not None and not DURATION_PATTERN.match(value):
        raise ValueError("estimated_duration must be in HH:MM format")
    return value


class RouteBase(SQLModel):
    origin: str = Field(max_length=100)
    destination: str = Field(max_length=100)
    distance: float = Field(gt=0)
    estimated_duration: str = Field(max_length=10)


class Route(RouteBase, table=True):
    __tablename__ = "routes"
    route_id: Optional[int] = Field(default=None, primary_key=True)


class RouteRead(RouteBase):
    route_id: int


class RouteCreate(RouteBase):
    @field_validator("estimated_duration")
    @classmethod
    def check_duration(cls, value):
        return _check_duration(value)


class RouteUpdate(SQLModel):
    origin: Optional[str] = Field(default=None, max_length=100)
    destination: Optional[str] = Field(default=None, max_length=100)
    distance: Optional[float] = Field(default=None, gt=0)
    estimated_duration: Optional[str] = Field(default=None, max_length=10)

    @field_validator("estimated_duration")
    @classmethod
    def check_duration(cls, value):
        return _check_duration(value)
