from typing import Any, Iterable, Optional, Type, TypeVar

from pydantic import BaseModel, EmailStr, TypeAdapter, ValidationError

from nulltask.core.exceptions import InvalidUserDataException
from nulltask.schemas.user_schema import UserCandidate

ModelT = TypeVar("ModelT", bound=BaseModel)

_email_adapter = TypeAdapter(EmailStr)


def describe_errors(errors: Iterable[dict[str, Any]]) -> str:
    """Collapse pydantic/FastAPI error entries into one readable message,
    e.g. ``"name: String should have at least 1 character; age: ..."``."""
    parts = []
    for err in errors:
        if err.get("type") == "json_invalid":
            parts.append("request body: invalid JSON")
            continue
        loc = [str(p) for p in err.get("loc", ()) if p != "body"]
        field = ".".join(loc) or "request body"
        parts.append(f"{field}: {err.get('msg', 'invalid value')}")
    return "; ".join(parts) or "Invalid request."


def validate_user(data: dict[str, Any], schema: Type[ModelT] = UserCandidate) -> ModelT:
    try:
        return schema.model_validate(data)
    except ValidationError as e:
        raise InvalidUserDataException(describe_errors(e.errors()))


def normalize_email(email: str) -> Optional[str]:
    """Same normalization ``EmailStr`` applies on the way in; None if malformed."""
    try:
        return _email_adapter.validate_python(email)
    except ValidationError:
        return None
