"""Partial update builder and repository execution tests."""
import pytest
from unittest.mock import MagicMock
from sqlmodel.ext.asyncio.session import AsyncSession

from framework.repository.update_builder import UpdateCommand, UpdateField, build_update
from framework.security import Role, verify_password
from apps.users.models import User, UserUpdate
from apps.users.repository import UserRepository, USER_UPDATE_FIELDS


def user_update(**fields) -> UpdateCommand:
    return build_update("users", "user_id", 7, USER_UPDATE_FIELDS, UserUpdate(**fields))


class TestBuildUpdate:

    def test_no_fields_gives_empty_command(self):
        command = user_update()
        assert command.is_empty
        assert command.clauses == []
        assert command.params == (7,)

    def test_single_field(self):
        command = user_update(first_name="A")
        assert command.clauses == ["first_name = ?"]
        assert command.params == ("A", 7)
        assert command.render() == "UPDATE users SET first_name = ? WHERE user_id = ?"

    def test_declared_order_wins_over_caller_order(self):
        command = user_update(gender="f", nationality="NZ", email="a@b.c", first_name="A")
        assert command.clauses == [
            "email = ?",
            "first_name = ?",
            "nationality = ?",
            "gender = ?",
        ]
        assert command.params == ("a@b.c", "A", "NZ", "f", 7)

    def test_key_is_bound_once_and_last(self):
        command = user_update(last_name="B", contact_number="123")
        assert command.params[-1] == 7
        assert command.params.count(7) == 1
        assert len(command.params) == len(command.clauses) + 1

    def test_password_is_hashed_before_binding(self):
        command = user_update(password="plain-pw")
        assert command.clauses == ["password = ?"]
        stored = command.params[0]
        assert stored != "plain-pw"
        assert verify_password("plain-pw", stored)

    def test_enum_is_bound_by_value(self):
        command = user_update(role=Role.WORKER)
        assert command.params == ("worker", 7)

    def test_render_with_driver_placeholder(self):
        command = user_update(first_name="A", last_name="B")
        assert command.render("%s") == "UPDATE users SET first_name = %s, last_name = %s WHERE user_id = %s"

    def test_render_empty_command_raises(self):
        with pytest.raises(ValueError):
            user_update().render()

    def test_column_can_differ_from_attribute(self):
        data = MagicMock(spec=["phone"])
        data.phone = "555"
        command = build_update("users", "user_id", 1, (UpdateField("phone", column="contact_number"),), data)
        assert command.clauses == ["contact_number = ?"]


class TestApplyUpdate:

    @pytest.mark.asyncio
    async def test_empty_command_issues_nothing(self):
        session = MagicMock()
        repo = UserRepository(session)
        rows = await repo.apply_update(user_update())
        assert rows == 0
        session.connection.assert_not_called()

    @pytest.mark.asyncio
    async def test_updates_only_present_fields(self, async_session: AsyncSession, regular_user: User):
        user_id = regular_user.user_id
        repo = UserRepository(async_session)

        rows = await repo.apply_update(repo.new_update(user_id, USER_UPDATE_FIELDS, UserUpdate(first_name="A")))
        await async_session.commit()

        assert rows == 1
        user = await repo.get_by_id(user_id)
        assert user.first_name == "A"
        assert user.last_name == "User"
        assert user.email == "user@example.com"

    @pytest.mark.asyncio
    async def test_no_matching_row(self, async_session: AsyncSession):
        repo = UserRepository(async_session)
        rows = await repo.apply_update(repo.new_update(999, USER_UPDATE_FIELDS, UserUpdate(first_name="A")))
        assert rows == 0
