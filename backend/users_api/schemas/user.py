"""User Schemas — Pydantic models for the request body and the read response.

Invariants:
    - UserPayload matches "Name"/"Email" keys case-insensitively
    - Missing or null fields become "" (emptiness is judged by the handler, not here)
    - Non-string values and non-object bodies fail validation
    - An "ID" key is ignored, but must be an integer (or null) when present
    - from_body() decodes the first JSON value and ignores trailing bytes;
      the Content-Type header plays no part
    - UserResponse serializes as {"ID", "Name", "Email"}

Design Decisions:
    - No min_length on UserPayload: update accepts empty fields, create checks them
      explicitly via check_required_fields()
"""

import json
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from users_api.core.domain_types import MAX_USER_ID, MIN_USER_ID

_decoder = json.JSONDecoder()


class UserPayload(BaseModel):
    """Body of POST /user and PUT /user/{id}."""
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field("", alias="Name")
    email: str = Field("", alias="Email")

    @classmethod
    def from_body(cls, raw: bytes) -> "UserPayload":
        """Decode a raw request body. Raises ValueError on anything unparsable."""
        text = raw.decode("utf-8").lstrip(" \t\r\n")
        data, _ = _decoder.raw_decode(text)
        return cls.model_validate(data)

    @model_validator(mode="before")
    @classmethod
    def normalize_keys(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        normalized = {}
        for key, value in data.items():
            lowered = str(key).lower()
            if lowered == "id":
                # bool is an int subclass but not a JSON number
                if value is not None and (
                    not isinstance(value, int) or isinstance(value, bool)
                    or not MIN_USER_ID <= value <= MAX_USER_ID
                ):
                    raise ValueError("ID must be an integer")
                continue
            canonical = {"name": "Name", "email": "Email"}.get(lowered)
            if canonical is None:
                continue
            if value is None:
                continue
            normalized[canonical] = value
        return normalized


class UserResponse(BaseModel):
    """Body of GET /user/{id}."""
    model_config = ConfigDict(populate_by_name=True)

    id: int = Field(alias="ID")
    name: str = Field(alias="Name")
    email: str = Field(alias="Email")
