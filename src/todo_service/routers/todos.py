from __future__ import annotations

import logging
from typing import Any, List, Optional

from fastapi import APIRouter, Body, Depends

from ..exceptions import InvalidPayloadError
from ..repositories import Repository, get_repository
from ..schemas import ErrorResponse, MessageResponse, TodoOut, TodoUpdate, parse_create_payload
from ..utils import merge_todo_update, new_todo_entity

logger = logging.getLogger(__name__)

INVALID_ID = "Invalid id provided."
DELETED_MESSAGE = "Todo Item successfully deleted"

router = APIRouter(
    prefix="/todos",
    tags=["todos"],
)


def _require_id(todo_id: Optional[str]) -> str:
    if not todo_id or not isinstance(todo_id, str):
        raise InvalidPayloadError(INVALID_ID)
    return todo_id


# PUBLIC_INTERFACE
@router.get(
    "",
    response_model=List[TodoOut],
    summary="List Todos",
    description="Return every stored Todo item. No filtering, no pagination; order is the store's natural order.",
)
async def list_todos(repo: Repository = Depends(get_repository)) -> List[TodoOut]:
    """
    List all todos.
    """
    items = await repo.list()
    return [TodoOut.model_validate(it) for it in items]


# PUBLIC_INTERFACE
@router.get(
    "/{todo_id}",
    response_model=Optional[TodoOut],
    summary="Get Todo",
    description="Get a single Todo item by ID. Returns null when no Todo has that ID.",
)
async def get_todo(todo_id: str, repo: Repository = Depends(get_repository)) -> Optional[TodoOut]:
    """
    Retrieve a single Todo item by its ID.
    """
    item = await repo.get(todo_id)
    return None if item is None else TodoOut.model_validate(item)


# PUBLIC_INTERFACE
@router.post(
    "",
    response_model=Optional[TodoOut],
    summary="Create Todo",
    description=(
        "Create a new Todo item from description, priority and dueDate. "
        "The service assigns the id and sets isComplete to false."
    ),
    responses={
        400: {"model": ErrorResponse, "description": "Missing or invalid field"},
    },
)
async def create_todo(
    payload: Any = Body(
        default=None,
        examples=[{"description": "Buy groceries", "priority": "High", "dueDate": "2025-02-01T09:00:00"}],
    ),
    repo: Repository = Depends(get_repository),
) -> Optional[TodoOut]:
    """
    Validate the payload, store a new Todo and return it as read back from the store.
    """
    data = parse_create_payload(payload)
    entity = new_todo_entity(data)
    await repo.insert(entity)
    logger.info("Created todo %s", entity["id"])

    created = await repo.get(entity["id"])
    return None if created is None else TodoOut.model_validate(created)


# PUBLIC_INTERFACE
@router.patch(
    "/{todo_id}",
    response_model=Optional[TodoOut],
    summary="Edit Todo",
    description=(
        "Partially update description, isComplete, priority or dueDate. "
        "Other keys, including id, are ignored. Returns null when no Todo has that ID."
    ),
    responses={
        400: {"model": ErrorResponse, "description": "Invalid id or malformed payload"},
    },
)
async def edit_todo(
    todo_id: str,
    payload: Optional[TodoUpdate] = None,
    repo: Repository = Depends(get_repository),
) -> Optional[TodoOut]:
    """
    Merge the payload over the stored Todo and write back the editable fields.
    """
    todo_id = _require_id(todo_id)
    changes = payload or TodoUpdate()

    existing = await repo.get(todo_id)
    fields = merge_todo_update(existing, changes)
    await repo.update(todo_id, fields)
    logger.debug("Edited todo %s fields=%s", todo_id, sorted(fields))

    updated = await repo.get(todo_id)
    return None if updated is None else TodoOut.model_validate(updated)


# PUBLIC_INTERFACE
@router.delete(
    "/{todo_id}",
    response_model=MessageResponse,
    summary="Delete Todo",
    description="Delete a Todo item by ID. Deleting an unknown ID succeeds as well.",
    responses={
        400: {"model": ErrorResponse, "description": "Invalid id"},
    },
)
async def delete_todo(todo_id: str, repo: Repository = Depends(get_repository)) -> MessageResponse:
    """
    Delete a Todo. Always answers with the same confirmation message.
    """
    todo_id = _require_id(todo_id)
    await repo.delete(todo_id)
    logger.info("Deleted todo %s", todo_id)
    return MessageResponse(message=DELETED_MESSAGE)


# PUBLIC_INTERFACE
@router.patch(
    "",
    include_in_schema=False,
    responses={400: {"model": ErrorResponse}},
)
@router.delete(
    "",
    include_in_schema=False,
    responses={400: {"model": ErrorResponse}},
)
async def missing_todo_id() -> None:
    """
    Edit and delete addressed at the collection itself carry no id.
    """
    _require_id(None)
