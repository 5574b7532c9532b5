from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator
from pydantic.alias_generators import to_camel

from .exceptions import InvalidPayloadError
from .models import Priority

# Shared type for incoming dueDate which can be a date, datetime, or ISO8601 string
DueDateInput = Union[date, datetime, str]

INVALID_DESCRIPTION = "Invalid description provided."
INVALID_PRIORITY = "Invalid priority provided."
INVALID_DUE_DATE = "Invalid dueDate provided."


def _normalize_datetime(value: datetime) -> datetime:
    # Stored as UTC at millisecond precision, which is what MongoDB keeps.
    # Naive input is read as UTC.
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    else:
        try:
            value = value.astimezone(timezone.utc)
        except OverflowError as e:
            raise ValueError("dueDate is out of range once converted to UTC.") from e
    return value.replace(microsecond=value.microsecond // 1000 * 1000)


def _midnight_utc(value: date) -> datetime:
    return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)


def format_due_date(value: datetime) -> str:
    """Render a dueDate the way JavaScript's Date.toISOString() does: UTC, milliseconds, 'Z'."""
    return _normalize_datetime(value).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_due_date(value: Optional[DueDateInput]) -> Optional[datetime]:
    """
    Normalize dueDate input into a UTC-aware datetime.
    - If value is a string, parse it via datetime.fromisoformat ('Z' suffix allowed);
      a bare date is set to 00:00 UTC; a datetime without offset is taken as UTC.
    - If value is a date (not datetime), convert to datetime at 00:00 UTC.
    - If value is a datetime, return it normalized.
    """
    if value is None:
        return None

    if isinstance(value, datetime):
        return _normalize_datetime(value)

    if isinstance(value, date):
        return _midnight_utc(value)

    if isinstance(value, str):
        s = value.strip()
        if s.endswith(("Z", "z")):
            s = s[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(s)
        except ValueError:
            try:
                return _midnight_utc(date.fromisoformat(s))
            except ValueError as e:
                raise ValueError(
                    "Invalid dueDate format. Use ISO8601 date or datetime string (e.g., '2025-01-31' or '2025-01-31T13:45:00')."
                ) from e
        return _normalize_datetime(parsed)

    raise ValueError("Invalid type for dueDate; expected date, datetime, or ISO8601 string.")


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
    )


# PUBLIC_INTERFACE
class TodoCreate(_CamelModel):
    """
    Validated payload for creating a new Todo item.

    Built by :func:`parse_create_payload` rather than by FastAPI body parsing,
    so that validation failures come back as ``{"error": ...}`` in a fixed order.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "description": "Buy groceries",
                "priority": "High",
                "dueDate": "2025-02-01T09:00:00",
            }
        }
    )

    description: str = Field(..., description="What needs to be done", min_length=1)
    priority: Priority = Field(..., description="One of High, Medium, Low")
    due_date: datetime = Field(..., description="Due date/time of the todo item")


# PUBLIC_INTERFACE
def parse_create_payload(payload: Any) -> TodoCreate:
    """
    Validate a raw create body and return a TodoCreate.

    Checks run in order and stop at the first failure:
    1. description present, a string and non-empty
    2. priority present
    3. priority is one of High, Medium, Low
    4. dueDate present and parseable as a date/time

    Any ``id`` or ``isComplete`` keys are ignored. A body that is not a JSON
    object is treated as an empty one.

    Raises:
        InvalidPayloadError: with the message of the first failed check.
    """
    body = payload if isinstance(payload, dict) else {}

    description = body.get("description")
    if not description or not isinstance(description, str):
        raise InvalidPayloadError(INVALID_DESCRIPTION)

    raw_priority = body.get("priority")
    if not raw_priority:
        raise InvalidPayloadError(INVALID_PRIORITY)
    try:
        priority = Priority.parse(raw_priority)
    except ValueError:
        raise InvalidPayloadError(INVALID_PRIORITY) from None

    raw_due_date = body.get("dueDate")
    if not raw_due_date:
        raise InvalidPayloadError(INVALID_DUE_DATE)
    try:
        due_date = parse_due_date(raw_due_date)
    except ValueError:
        raise InvalidPayloadError(INVALID_DUE_DATE) from None

    return TodoCreate(description=description, priority=priority, due_date=due_date)


# PUBLIC_INTERFACE
class TodoUpdate(_CamelModel):
    """
    Schema for editing an existing Todo item.
    All fields are optional; only provided, non-null fields are merged.
    Unknown keys (including ``id``) are dropped.
    """

    model_config = ConfigDict(
        extra="ignore",
        json_schema_extra={
            "example": {
                "description": "Buy groceries and supplies",
                "isComplete": True,
                "priority": "Low",
                "dueDate": "2025-02-02T09:30:00",
            }
        },
    )

    description: Optional[str] = Field(default=None, description="What needs to be done")
    is_complete: Optional[bool] = Field(default=None, description="Completion status flag")
    priority: Optional[Priority] = Field(default=None, description="One of High, Medium, Low")
    due_date: Optional[datetime] = Field(
        default=None,
        description="Due date/time of the todo item. Accepts ISO8601 date or datetime; dates are set to 00:00 UTC",
    )

    @field_validator("due_date", mode="before")
    @classmethod
    def validate_due_date(cls, v: Optional[DueDateInput]) -> Optional[datetime]:
        """
        Normalize dueDate from str/date/datetime to datetime.
        """
        return parse_due_date(v)


# PUBLIC_INTERFACE
class TodoOut(_CamelModel):
    """
    Schema returned by the API for a Todo item.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "0f8fad5b-d9cb-469f-a165-70867728950e",
                "description": "Buy groceries",
                "isComplete": False,
                "priority": "High",
                "dueDate": "2025-02-01T09:00:00.000Z",
            }
        }
    )

    id: str = Field(..., description="Unique identifier of the todo item")
    description: str = Field(..., description="What needs to be done")
    is_complete: bool = Field(..., description="Completion status flag")
    priority: Priority = Field(..., description="One of High, Medium, Low")
    due_date: datetime = Field(..., description="Due date/time of the todo item as an ISO8601 UTC datetime")

    @field_serializer("due_date", when_used="json")
    def serialize_due_date(self, value: datetime) -> str:
        return format_due_date(value)


# PUBLIC_INTERFACE
class ErrorResponse(BaseModel):
    """Body returned with every 400 response."""

    error: str = Field(..., description="Human-readable reason the request was rejected")


# PUBLIC_INTERFACE
class MessageResponse(BaseModel):
    """Body returned by the delete endpoint."""

    message: str = Field(..., description="Confirmation message")
