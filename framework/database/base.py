from abc import ABC, abstractmethod
from typing import AsyncIterator
from sqlmodel.ext.asyncio.session import AsyncSession


class BaseDatabaseDriver(ABC):
    """Storage driver contract: lifecycle plus a per-request session."""

    @abstractmethod
    async def connect(self):
        """Open the pool and prove the server answers."""

    @abstractmethod
    async def disconnect(self):
        """Release every pooled connection."""

    @abstractmethod
    def get_session(self) -> AsyncIterator[AsyncSession]:
        """Yield one session, closed when the request is done."""
