"""Input Enforcement — pure checks applied at the HTTP boundary before storage is touched.

Invariants:
    - parse_user_id accepts an optional sign followed by ASCII digits, nothing else
    - Values outside the signed 64-bit range are rejected like malformed ones
    - check_required_fields is applied on create only (update accepts empty fields)
"""

import re

from users_api.core.domain_types import MAX_USER_ID, MIN_USER_ID, UserId
from users_api.core.errors import ErrorContext, InvalidInputError

_USER_ID_PATTERN = re.compile(r"[+-]?[0-9]+")


def parse_user_id(raw: str) -> UserId:
    """Parse a path segment as a base-10 integer id or raise InvalidInputError."""
    # int() alone would also accept whitespace, underscores and non-ASCII digits
    if not _USER_ID_PATTERN.fullmatch(raw):
        raise InvalidInputError(
            "invalid id", "id", ErrorContext(debug_info={"raw": raw}),
        )
    value = int(raw)
    if not MIN_USER_ID <= value <= MAX_USER_ID:
        raise InvalidInputError(
            "invalid id", "id", ErrorContext(debug_info={"raw": raw}),
        )
    return UserId(value)


def check_required_fields(name: str, email: str) -> None:
    """Both fields must be non-empty strings."""
    if name == "" or email == "":
        missing = "name" if name == "" else "email"
        raise InvalidInputError("Name and Email are required", missing)
