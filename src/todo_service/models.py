from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, TypedDict


# PUBLIC_INTERFACE
class Priority(str, Enum):
    """Closed set of priorities a todo item can carry."""

    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"

    @classmethod
    def parse(cls, value: Any) -> "Priority":
        """
        Return the member whose value equals ``value``.

        Raises:
            ValueError: if ``value`` is not one of 'High', 'Medium', 'Low'.
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            raise ValueError(f"{value!r} is not a valid {cls.__name__}")
        return cls(value)


# PUBLIC_INTERFACE
class TodoEntity(TypedDict):
    """
    A todo item exactly as it is stored in the ``todos`` collection.

    Keys are camelCase because the documents are shared with clients as-is.

    Fields:
    - id: UUID4 string generated by the service, never changes
    - description: Non-empty description text
    - isComplete: Completion flag, False at creation
    - priority: One of the Priority values
    - dueDate: Due datetime (UTC-aware, millisecond precision)
    """

    id: str
    description: str
    isComplete: bool
    priority: str
    dueDate: datetime
