"""
Snippetbox — User Service
==========================

What:  Account persistence: signup (insert), login (authenticate) and the
       per-request "does this user still exist" check.
How:   Passwords are hashed with argon2id (argon2-cffi). Hashing and
       verification are CPU-bound, so they run in Starlette's threadpool
       instead of on the event loop.
Who:   Injected into the user routes and the authentication dependency via
       `get_user_service`.

Error translation:
    unique email violated        → DuplicateEmailError (signup re-renders)
    unknown email / bad password → InvalidCredentialsError (login re-renders)
    anything else from SQLAlchemy → DatabaseError (500)
"""

import logging
import secrets

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError
from fastapi import Depends
from sqlalchemy import exists as sql_exists
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from snippetbox.database import get_db_session
from snippetbox.exceptions import DatabaseError, DuplicateEmailError, InvalidCredentialsError
from snippetbox.models.user import User

logger = logging.getLogger(__name__)

password_hasher = PasswordHasher()

# Verified against when the email is unknown, so that path costs one argon2
# verify like a wrong password does. Nobody knows its password.
_UNKNOWN_USER_HASH = password_hasher.hash(secrets.token_urlsafe(32))

# Substrings identifying the unique email constraint in driver messages
# (PostgreSQL names the constraint, SQLite names the column).
_EMAIL_CONSTRAINT_MARKERS = ("users_uc_email", "users.email")


class UserService:
    """User persistence bound to one database session."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def insert(self, name: str, email: str, password: str) -> int:
        """
        Create an account.

        Raises:
            DuplicateEmailError: The email is already registered.
            DatabaseError: Any other database failure.
        """
        hashed_password = await run_in_threadpool(password_hasher.hash, password)
        user = User(name=name, email=email, hashed_password=hashed_password)

        try:
            self.db.add(user)
            await self.db.flush()
            await self.db.commit()
        except IntegrityError as e:
            # The failed write leaves the transaction unusable; reset it so
            # the request can still finish normally with a 422.
            await self.db.rollback()
            if any(marker in str(e.orig) for marker in _EMAIL_CONSTRAINT_MARKERS):
                raise DuplicateEmailError(email=email)
            logger.error("Integrity error inserting user: %s", str(e))
            raise DatabaseError(context={"error_type": type(e).__name__})
        except SQLAlchemyError as e:
            logger.error("Database error inserting user: %s", str(e), exc_info=True)
            raise DatabaseError(context={"error_type": type(e).__name__})

        logger.info("User %s signed up", user.id)
        return user.id

    async def authenticate(self, email: str, password: str) -> int:
        """
        Check credentials and return the user's id.

        Raises:
            InvalidCredentialsError: Unknown email or wrong password.
            DatabaseError: Query execution failed.
        """
        try:
            result = await self.db.execute(
                select(User.id, User.hashed_password).where(User.email == email)
            )
            row = result.one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error authenticating user: %s", str(e))
            raise DatabaseError(context={"error_type": type(e).__name__})

        if row is None:
            user_id, hashed_password = None, _UNKNOWN_USER_HASH
        else:
            user_id, hashed_password = row

        try:
            await run_in_threadpool(password_hasher.verify, hashed_password, password)
        except (VerificationError, InvalidHashError):
            raise InvalidCredentialsError(context={"user_id": user_id})

        if user_id is None:
            raise InvalidCredentialsError()

        return user_id

    async def exists(self, user_id: int) -> bool:
        try:
            result = await self.db.execute(select(sql_exists().where(User.id == user_id)))
            return bool(result.scalar())
        except SQLAlchemyError as e:
            logger.error("Database error checking user %s: %s", user_id, str(e))
            raise DatabaseError(context={"user_id": user_id})


def get_user_service(db: AsyncSession = Depends(get_db_session)) -> UserService:
    """FastAPI dependency; tests replace it through `app.dependency_overrides`."""
    return UserService(db)
