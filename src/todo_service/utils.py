from __future__ import annotations

import uuid
from typing import Any, Dict, Mapping, Optional, Tuple

from .models import TodoEntity
from .schemas import TodoCreate, TodoUpdate

# The only keys an edit may write back; ``id`` is deliberately absent.
EDITABLE_FIELDS: Tuple[str, ...] = ("description", "isComplete", "priority", "dueDate")


# PUBLIC_INTERFACE
def new_todo_entity(data: TodoCreate) -> TodoEntity:
    """
    Build the document stored for a newly created todo.

    Args:
        data: The validated create payload.

    Returns:
        A TodoEntity with a fresh UUID4 id and isComplete set to False.
    """
    return {
        "id": str(uuid.uuid4()),
        "description": data.description,
        "isComplete": False,
        "priority": data.priority,
        "dueDate": data.due_date,
    }


# PUBLIC_INTERFACE
def merge_todo_update(existing: Optional[Mapping[str, Any]], changes: TodoUpdate) -> Dict[str, Any]:
    """
    Shallow-merge an edit payload over the stored document and keep only the
    editable fields.

    Args:
        existing: The stored document, or None when no todo has the id.
        changes: The parsed edit payload. Only fields the client actually sent
            (and did not send as null) take part in the merge.

    Returns:
        The ``$set`` document: every key of EDITABLE_FIELDS present in the
        merged draft, and nothing else.
    """
    draft: Dict[str, Any] = dict(existing or {})
    draft.update(changes.model_dump(by_alias=True, exclude_unset=True, exclude_none=True))
    return {key: draft[key] for key in EDITABLE_FIELDS if key in draft}
