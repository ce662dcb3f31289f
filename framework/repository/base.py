"""
Repository abstract base class and generic implementation.
"""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar, Optional, List, Type, Any
from sqlmodel import SQLModel, select, func
from sqlmodel.ext.asyncio.session import AsyncSession
from framework.exceptions.handler import InternalError
from .update_builder import UpdateCommand, build_update

T = TypeVar("T", bound=SQLModel)

# DBAPI paramstyle -> positional placeholder
_POSITIONAL_PLACEHOLDERS = {
    "qmark": "?",
    "format": "%s",
    "pyformat": "%s",
}


class IRepository(ABC, Generic[T]):
    """Repository interface; defines standard data access API."""

    @abstractmethod
    async def get_by_id(self, id: int) -> Optional[T]:
        """Get entity by ID."""
        pass

    @abstractmethod
    async def get_all(self, limit: int = 100, offset: int = 0) -> List[T]:
        """Get all entities (paginated)."""
        pass

    @abstractmethod
    async def create(self, entity: T) -> T:
        """Create entity."""
        pass

    @abstractmethod
    async def apply_update(self, command: UpdateCommand) -> int:
        """Run a partial update; return rows affected."""
        pass

    @abstractmethod
    async def delete(self, id: int) -> bool:
        """Delete entity."""
        pass


class BaseRepository(IRepository[T]):
    """Generic repository implementation with SQLModel CRUD; subclasses can add custom queries."""

    def __init__(self, session: AsyncSession, model: Type[T]):
        """Initialize repository with session and model."""
        self.session = session
        self.model = model
        self.table_name = model.__tablename__
        self.pk = list(model.__table__.primary_key.columns)[0]

    async def get_by_id(self, id: int) -> Optional[T]:
        """Get entity by ID."""
        statement = select(self.model).where(self.pk == id)
        result = await self.session.exec(statement)
        return result.first()

    async def get_all(self, limit: int = 100, offset: int = 0, order_by: Any = None) -> List[T]:
        """Get all entities (paginated)."""
        statement = select(self.model)
        if order_by is not None:
            statement = statement.order_by(*order_by)
        else:
            statement = statement.order_by(self.pk)
        statement = statement.limit(limit).offset(offset)
        result = await self.session.exec(statement)
        return list(result.all())

    async def create(self, entity: T) -> T:
        """Create entity; flushes so the generated primary key is available."""
        self.session.add(entity)
        await self.session.flush()
        return entity

    def new_update(self, id: int, fields, data) -> UpdateCommand:
        """Build an UpdateCommand for this table keyed by its primary key."""
        return build_update(self.table_name, self.pk.name, id, fields, data)

    async def apply_update(self, command: UpdateCommand) -> int:
        """
        Execute a partial update with positional binds.

        An empty command is a no-op and reports 0 rows without touching the
        database. Loaded instances are expired afterwards so the next query
        sees the new values.
        """
        if command.is_empty:
            return 0
        conn = await self.session.connection()
        placeholder = _POSITIONAL_PLACEHOLDERS.get(conn.dialect.paramstyle)
        if placeholder is None:
            raise InternalError(f"Unsupported paramstyle: {conn.dialect.paramstyle}")
        result = await conn.exec_driver_sql(command.render(placeholder), command.params)
        self.session.expire_all()
        return result.rowcount

    async def delete(self, id: int) -> bool:
        """Delete entity."""
        entity = await self.get_by_id(id)
        if entity:
            await self.session.delete(entity)
            await self.session.flush()
            return True
        return False

    async def find_one(self, **filters) -> Optional[T]:
        """Find one entity by filters (e.g. email='jo@x.com')."""
        statement = select(self.model)
        for key, value in filters.items():
            if hasattr(self.model, key):
                statement = statement.where(getattr(self.model, key) == value)

        result = await self.session.exec(statement)
        return result.first()

    async def count(self, **filters) -> int:
        """Count entities matching filters."""
        statement = select(func.count(self.pk))
        for key, value in filters.items():
            if hasattr(self.model, key):
                statement = statement.where(getattr(self.model, key) == value)

        result = await self.session.exec(statement)
        return result.one()
