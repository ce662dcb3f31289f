"""Storage error translation and unit of work transaction tests."""
import pytest
from sqlalchemy.exc import IntegrityError, NoResultFound, OperationalError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from framework.database.errors import translate_db_error
from framework.exceptions.handler import ConflictError, InternalError, NotFoundError, ValidationError
from framework.repository.unit_of_work import UnitOfWork
from apps.users.models import User
from apps.users.repository import UserRepository


class DriverError(Exception):
    """Stands in for a DBAPI error carrying (code, message) args."""


def integrity_error(code, message) -> IntegrityError:
    return IntegrityError("INSERT ...", {}, DriverError(code, message))


class TestTranslateDbError:

    def test_duplicate_entry_code(self):
        exc = translate_db_error(integrity_error(1062, "Duplicate entry 'a@b.c' for key 'email'"))
        assert isinstance(exc, ConflictError)
        assert exc.status_code == 409

    def test_sqlite_unique_message(self):
        exc = translate_db_error(IntegrityError("INSERT ...", {}, DriverError("UNIQUE constraint failed: users.email")))
        assert isinstance(exc, ConflictError)

    @pytest.mark.parametrize("code", [1451, 1452])
    def test_foreign_key_codes(self, code):
        exc = translate_db_error(integrity_error(code, "a foreign key constraint fails"))
        assert isinstance(exc, ValidationError)

    def test_no_result(self):
        assert isinstance(translate_db_error(NoResultFound()), NotFoundError)

    def test_other_errors_are_internal(self):
        exc = translate_db_error(OperationalError("SELECT 1", {}, DriverError(2003, "Can't connect")))
        assert isinstance(exc, InternalError)
        assert exc.message == "Internal server error"
        assert "connect" in str(exc.detail)


class TestUnitOfWork:

    @pytest.mark.asyncio
    async def test_commit_on_success(self, async_session: AsyncSession):
        uow = UnitOfWork(async_session)
        async with uow:
            user = await uow.get_repository(UserRepository).create(User(first_name="Kim", email="kim@example.com"))
        user_id = user.user_id

        result = await async_session.exec(select(User).where(User.user_id == user_id))
        assert result.first() is not None

    @pytest.mark.asyncio
    async def test_repository_is_cached(self, async_session: AsyncSession):
        uow = UnitOfWork(async_session)
        assert uow.get_repository(UserRepository) is uow.get_repository(UserRepository)

    @pytest.mark.asyncio
    async def test_duplicate_is_translated_and_rolled_back(self, async_session: AsyncSession, regular_user: User):
        uow = UnitOfWork(async_session)

        with pytest.raises(ConflictError):
            async with uow:
                repo = uow.get_repository(UserRepository)
                await repo.create(User(first_name="Kim", email="kim@example.com"))
                await repo.create(User(first_name="Dup", email="user@example.com"))

        result = await async_session.exec(select(User).where(User.email == "kim@example.com"))
        assert result.first() is None

    @pytest.mark.asyncio
    async def test_business_errors_pass_through(self, async_session: AsyncSession):
        uow = UnitOfWork(async_session)

        with pytest.raises(NotFoundError):
            async with uow:
                raise NotFoundError("gone")

    def test_session_is_required(self):
        with pytest.raises(ValueError):
            UnitOfWork()
