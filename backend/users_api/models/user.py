"""User ORM — the single persisted entity.

Invariants:
    - id is an autoincrement integer primary key assigned by storage
    - name and email are non-nullable text; no uniqueness, no format checks
"""

from sqlalchemy import Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from users_api.db.base import Base


class User(Base):
    """A user row in the `users` table."""
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    name: Mapped[str] = mapped_column(Text, nullable=False)
    email: Mapped[str] = mapped_column(Text, nullable=False)

    def __repr__(self) -> str:
        return f"<User id={self.id} name={self.name!r}>"
