"""Boundary Protocols — contract between the HTTP handlers and the data adapter.

Invariants:
    - Handlers depend on UserRepository, never on a concrete SQL implementation
    - get/update/delete raise UserNotFoundError when no row matches
    - Any other storage failure is raised as-is (SQLAlchemyError), never wrapped

Design Decisions:
    - Protocol over ABC: structural subtyping, test fakes need no inheritance
"""

from typing import Protocol

from users_api.core.domain_types import UserId


class UserLike(Protocol):
    """Structural contract for User rows returned by the adapter."""
    id: int
    name: str
    email: str


class UserRepository(Protocol):
    """Contract for user persistence, implemented by the infrastructure layer."""
    async def create(self, name: str, email: str) -> UserId: ...
    async def get(self, user_id: UserId) -> UserLike: ...
    async def update(self, user_id: UserId, name: str, email: str) -> None: ...
    async def delete(self, user_id: UserId) -> None: ...
