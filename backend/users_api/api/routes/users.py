"""User Routes — create/read/update/delete on the single User entity.

Invariants:
    - The path id is parsed before a database connection is acquired
    - The body is decoded after the connection is acquired, from raw bytes
    - Create rejects empty Name/Email; update accepts them unchanged
    - Read/update/delete collapse "no such row" and statement errors into 404
    - Create statement errors become 500 with the driver message echoed

Design Decisions:
    - Repository injected via Depends(get_user_repository) so tests can swap in fakes
    - Plain-text confirmations, JSON only for the read response
"""

import logging

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import PlainTextResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from users_api.core.domain_types import UserId
from users_api.core.enforce_input import check_required_fields, parse_user_id
from users_api.core.errors import (
    ErrorContext, InvalidInputError, NotFoundError, StorageError,
    UserNotFoundError,
)
from users_api.core.repository_protocols import UserRepository
from users_api.infrastructure.database import describe_db_error, get_db
from users_api.infrastructure.user_repository import SqlUserRepository
from users_api.schemas.user import UserPayload, UserResponse

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/user", tags=["users"])


def get_user_id(user_id: str) -> UserId:
    """Path dependency: 400 on anything that is not a base-10 integer."""
    return parse_user_id(user_id)


async def get_user_repository(
    db: AsyncSession = Depends(get_db),
) -> UserRepository:
    return SqlUserRepository(db)


async def get_user_payload(request: Request) -> UserPayload:
    """Body dependency: JSON is decoded whatever the Content-Type header says."""
    raw = await request.body()
    try:
        return UserPayload.from_body(raw)
    except ValueError as e:
        raise InvalidInputError("invalid JSON body", "body") from e


@router.post(
    "", response_class=PlainTextResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_user(
    users: UserRepository = Depends(get_user_repository),
    body: UserPayload = Depends(get_user_payload),
):
    """Create a user and report the id storage assigned."""
    check_required_fields(body.name, body.email)
    try:
        new_id = await users.create(body.name, body.email)
    except SQLAlchemyError as e:
        raise StorageError(
            f"Failed to create user: {describe_db_error(e)}", "insert",
        ) from e
    logger.info("User created", extra={"user_id": new_id})
    return PlainTextResponse(
        f"User created successfully (id={new_id})\n",
        status_code=status.HTTP_201_CREATED,
    )


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: UserId = Depends(get_user_id),
    users: UserRepository = Depends(get_user_repository),
):
    try:
        user = await users.get(user_id)
    except SQLAlchemyError as e:
        raise NotFoundError(
            "User not found", ErrorContext(user_id=user_id),
        ) from e
    return UserResponse(id=user.id, name=user.name, email=user.email)


@router.put("/{user_id}", response_class=PlainTextResponse)
async def update_user(
    user_id: UserId = Depends(get_user_id),
    users: UserRepository = Depends(get_user_repository),
    body: UserPayload = Depends(get_user_payload),
):
    """Overwrite name and email. Empty values are stored as given."""
    try:
        await users.update(user_id, body.name, body.email)
    except (UserNotFoundError, SQLAlchemyError) as e:
        raise NotFoundError(
            "User not found or update failed", ErrorContext(user_id=user_id),
        ) from e
    logger.info("User updated", extra={"user_id": user_id})
    return PlainTextResponse("User updated successfully\n")


@router.delete("/{user_id}", response_class=PlainTextResponse)
async def delete_user(
    user_id: UserId = Depends(get_user_id),
    users: UserRepository = Depends(get_user_repository),
):
    try:
        await users.delete(user_id)
    except (UserNotFoundError, SQLAlchemyError) as e:
        raise NotFoundError(
            "User not found or delete failed", ErrorContext(user_id=user_id),
        ) from e
    logger.info("User deleted", extra={"user_id": user_id})
    return PlainTextResponse("User deleted successfully\n")
