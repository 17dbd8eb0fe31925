"""
Result-style parsing of request payloads against pydantic schemas.

`parse_payload` never raises on bad input: it returns `Valid` or `Invalid`
and leaves the mapping to an HTTP status to the caller.
"""

from dataclasses import dataclass, field
from typing import Any, Generic, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError

M = TypeVar("M", bound=BaseModel)


@dataclass
class Valid(Generic[M]):
    value: M


@dataclass
class Invalid:
    message: str
    errors: list[dict[str, Any]] = field(default_factory=list)


ParseResult = Union[Valid[M], Invalid]


def _describe(error: dict[str, Any]) -> str:
    location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
    message = error.get("msg", "invalid value")
    return f"{location}: {message}" if location else message


def parse_payload(schema: Type[M], data: Any) -> ParseResult:
    if not isinstance(data, dict):
        return Invalid(message="Request body must be a JSON object")
    try:
        return Valid(schema.model_validate(data))
    except ValidationError as exc:
        errors = exc.errors(include_url=False, include_context=False)
        return Invalid(message="; ".join(_describe(err) for err in errors), errors=errors)
