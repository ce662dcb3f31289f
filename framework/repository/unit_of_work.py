"""
Unit of Work: manages repositories and transaction boundaries.
"""

from typing import Optional
from fastapi import Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel.ext.asyncio.session import AsyncSession
from framework.database.errors import translate_db_error
from framework.database.manager import get_db


class UnitOfWork:
    """
    Manages related repositories with a shared session and transaction commit/rollback.

    Used as `async with uow:`; the block commits on success and rolls back on
    any exception. Storage errors leave the block already translated into the
    application's exception types.
    """

    def __init__(self, session: Optional[AsyncSession] = None):
        """Initialize UnitOfWork around the request's session."""
        if session is None:
            raise ValueError("Session must be provided (see get_uow)")

        self.session = session
        self._repositories = {}

    def get_repository(self, repo_class):
        """Get or create a repository instance (cached)."""
        cache_key = repo_class.__name__
        if cache_key not in self._repositories:
            self._repositories[cache_key] = repo_class(self.session)
        return self._repositories[cache_key]

    async def commit(self) -> None:
        """Commit all changes."""
        await self.session.commit()

    async def rollback(self) -> None:
        """Rollback all changes."""
        await self.session.rollback()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if exc_type is not None:
            await self.rollback()
            if isinstance(exc_val, SQLAlchemyError):
                raise translate_db_error(exc_val) from exc_val
            return False
        try:
            await self.commit()
        except SQLAlchemyError as e:
            await self.rollback()
            raise translate_db_error(e) from e
        return False


def get_uow(session: AsyncSession = Depends(get_db)) -> UnitOfWork:
    """Dependency: create UnitOfWork."""
    return UnitOfWork(session=session)
