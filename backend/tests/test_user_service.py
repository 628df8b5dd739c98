"""
Snippetbox — User Service Unit Tests
=====================================

What we test:
    ✅ insert stores an argon2 hash, never the password
    ✅ A unique-email violation becomes DuplicateEmailError (after rollback)
    ✅ authenticate accepts the right password only
    ✅ exists reports the query result
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from snippetbox.exceptions import DatabaseError, DuplicateEmailError, InvalidCredentialsError
from snippetbox.services.user_service import UserService, password_hasher


class TestUserServiceInsert:

    @pytest.mark.asyncio
    async def test_insert_hashes_password(self, mock_db_session):
        added = []

        def add(obj):
            obj.id = 2
            added.append(obj)

        mock_db_session.add.side_effect = add

        user_id = await UserService(mock_db_session).insert("Bob", "bob@example.com", "validPa$$word")

        assert user_id == 2
        mock_db_session.commit.assert_awaited_once()
        user = added[0]
        assert user.hashed_password != "validPa$$word"
        assert user.hashed_password.startswith("$argon2id$")
        assert password_hasher.verify(user.hashed_password, "validPa$$word")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("driver_message", [
        'duplicate key value violates unique constraint "users_uc_email"',
        "UNIQUE constraint failed: users.email",
    ])
    async def test_duplicate_email(self, mock_db_session, driver_message):
        mock_db_session.flush = AsyncMock(
            side_effect=IntegrityError("INSERT", {}, Exception(driver_message))
        )

        with pytest.raises(DuplicateEmailError) as exc_info:
            await UserService(mock_db_session).insert("Bob", "dupe@example.com", "validPa$$word")

        assert exc_info.value.message == "Email address is already in use"
        mock_db_session.rollback.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_duplicate_email_found_at_commit(self, mock_db_session):
        mock_db_session.commit = AsyncMock(
            side_effect=IntegrityError("COMMIT", {}, Exception("UNIQUE constraint failed: users.email"))
        )

        with pytest.raises(DuplicateEmailError):
            await UserService(mock_db_session).insert("Bob", "dupe@example.com", "validPa$$word")
        mock_db_session.rollback.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_commit_failure(self, mock_db_session):
        mock_db_session.commit = AsyncMock(
            side_effect=OperationalError("COMMIT", {}, Exception("disk I/O error"))
        )

        with pytest.raises(DatabaseError):
            await UserService(mock_db_session).insert("Bob", "bob@example.com", "validPa$$word")

    @pytest.mark.asyncio
    async def test_other_integrity_error(self, mock_db_session):
        mock_db_session.flush = AsyncMock(
            side_effect=IntegrityError("INSERT", {}, Exception("NOT NULL constraint failed: users.name"))
        )

        with pytest.raises(DatabaseError):
            await UserService(mock_db_session).insert("Bob", "bob@example.com", "validPa$$word")


class TestUserServiceAuthenticate:

    def setup_method(self):
        self.hashed = password_hasher.hash("pa$$word")

    def _row(self, mock_db_session, row):
        result = MagicMock()
        result.one_or_none.return_value = row
        mock_db_session.execute.return_value = result

    @pytest.mark.asyncio
    async def test_correct_password(self, mock_db_session):
        self._row(mock_db_session, (1, self.hashed))
        assert await UserService(mock_db_session).authenticate("alice@example.com", "pa$$word") == 1

    @pytest.mark.asyncio
    async def test_wrong_password(self, mock_db_session):
        self._row(mock_db_session, (1, self.hashed))
        with pytest.raises(InvalidCredentialsError):
            await UserService(mock_db_session).authenticate("alice@example.com", "wrong")

    @pytest.mark.asyncio
    async def test_unknown_email(self, mock_db_session):
        self._row(mock_db_session, None)
        with patch(
            "snippetbox.services.user_service.password_hasher", wraps=password_hasher
        ) as hasher:
            with pytest.raises(InvalidCredentialsError):
                await UserService(mock_db_session).authenticate("nobody@example.com", "pa$$word")

        # Same argon2 work as a wrong password
        hasher.verify.assert_called_once()
        assert hasher.verify.call_args.args[1] == "pa$$word"

    @pytest.mark.asyncio
    async def test_corrupt_hash(self, mock_db_session):
        self._row(mock_db_session, (1, "not-a-hash"))
        with pytest.raises(InvalidCredentialsError):
            await UserService(mock_db_session).authenticate("alice@example.com", "pa$$word")


class TestUserServiceExists:

    @pytest.mark.asyncio
    @pytest.mark.parametrize("found", [True, False])
    async def test_exists(self, mock_db_session, found):
        result = MagicMock()
        result.scalar.return_value = found
        mock_db_session.execute.return_value = result

        assert await UserService(mock_db_session).exists(1) is found
