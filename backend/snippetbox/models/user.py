"""
Snippetbox — User SQLAlchemy Model
===================================

What:  ORM model representing the `users` table.
Who:   Used by UserService for signup, login and the authentication check.

The unique constraint on `email` is what turns a duplicate signup into an
IntegrityError, which UserService translates into DuplicateEmailError.
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from snippetbox.database import Base


class User(Base):
    """A registered account. Only the argon2 hash of the password is stored."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    name: Mapped[str] = mapped_column(String(255), nullable=False)

    email: Mapped[str] = mapped_column(String(255), nullable=False)

    # PHC-format argon2id string, e.g. "$argon2id$v=19$m=65536,t=3,p=4$..."
    hashed_password: Mapped[str] = mapped_column(String(255), nullable=False)

    created: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    __table_args__ = (
        UniqueConstraint("email", name="users_uc_email"),
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}')>"
