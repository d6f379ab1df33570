"""User Schemas — body parsing and read response serialization.

Invariants:
    - Keys match case-insensitively; unknown keys are ignored
    - Missing or null fields parse as ""
    - Non-string values and non-object bodies are rejected
"""

import pytest
from pydantic import ValidationError

from users_api.schemas.user import UserPayload, UserResponse


def test_payload_reads_canonical_keys():
    payload = UserPayload.model_validate({"Name": "Ada", "Email": "ada@example.com"})
    assert payload.name == "Ada"
    assert payload.email == "ada@example.com"


def test_payload_keys_are_case_insensitive():
    payload = UserPayload.model_validate({"NAME": "Ada", "email": "a@b"})
    assert (payload.name, payload.email) == ("Ada", "a@b")


def test_payload_ignores_unknown_keys():
    payload = UserPayload.model_validate({"ID": 5, "Name": "Ada", "Email": "a@b", "x": 1})
    assert payload.name == "Ada"


def test_payload_missing_and_null_fields_default_to_empty():
    payload = UserPayload.model_validate({"Name": None})
    assert payload.name == ""
    assert payload.email == ""


@pytest.mark.parametrize("data", [
    {"Name": 1, "Email": "a@b"},
    {"Name": "Ada", "Email": ["a@b"]},
    ["Ada", "a@b"],
    "Ada",
])
def test_payload_rejects_wrong_shapes(data):
    with pytest.raises(ValidationError):
        UserPayload.model_validate(data)


def test_response_serializes_with_capitalized_keys():
    resp = UserResponse(id=3, name="Ada", email="a@b")
    assert resp.model_dump(by_alias=True) == {"ID": 3, "Name": "Ada", "Email": "a@b"}


# --- Raw body decoding --------------------------------------------------------

def test_from_body_decodes_first_json_value():
    payload = UserPayload.from_body(b'\n {"Name": "Ada", "Email": "a@b"}{"Name": "x"}')
    assert (payload.name, payload.email) == ("Ada", "a@b")


@pytest.mark.parametrize("raw", [b"", b"   ", b"{oops", b"\xff\xfe", b"null"])
def test_from_body_rejects_unparsable_bytes(raw):
    with pytest.raises(ValueError):
        UserPayload.from_body(raw)


@pytest.mark.parametrize("id_value", [7, None, -1])
def test_payload_accepts_integer_or_null_id(id_value):
    payload = UserPayload.model_validate({"id": id_value, "Name": "Ada"})
    assert payload.name == "Ada"


@pytest.mark.parametrize("id_value", ["7", 7.5, False, 2**63])
def test_payload_rejects_non_integer_id(id_value):
    with pytest.raises(ValidationError):
        UserPayload.model_validate({"ID": id_value, "Name": "Ada"})
