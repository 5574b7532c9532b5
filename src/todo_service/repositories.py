from __future__ import annotations

import copy
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Mapping, Optional

from fastapi import Request

from .models import TodoEntity


# PUBLIC_INTERFACE
class Repository(ABC):
    """Abstract repository contract for todo storage backends."""

    @abstractmethod
    async def list(self) -> List[TodoEntity]:
        """Return every stored TodoEntity in the store's natural order."""

    @abstractmethod
    async def get(self, todo_id: str) -> Optional[TodoEntity]:
        """Return a TodoEntity by id, or None if not found."""

    @abstractmethod
    async def insert(self, entity: TodoEntity) -> None:
        """Persist a new TodoEntity."""

    @abstractmethod
    async def update(self, todo_id: str, fields: Mapping[str, Any]) -> None:
        """Set the given fields on the TodoEntity with this id. No-op if it does not exist."""

    @abstractmethod
    async def delete(self, todo_id: str) -> None:
        """Remove the TodoEntity with this id. No-op if it does not exist."""

    async def close(self) -> None:
        """Release any resources held by the backend."""


class InMemoryRepository(Repository):
    """
    In-memory repository with the same semantics as the MongoDB backend.

    Used by the test-suite and handy for local experiments without a database.
    Insertion order is kept, mirroring MongoDB's natural order.
    """

    def __init__(self) -> None:
        self._items: Dict[str, TodoEntity] = {}

    async def list(self) -> List[TodoEntity]:
        # Return copies to avoid external mutation
        return [copy.deepcopy(t) for t in self._items.values()]

    async def get(self, todo_id: str) -> Optional[TodoEntity]:
        item = self._items.get(todo_id)
        return None if item is None else copy.deepcopy(item)

    async def insert(self, entity: TodoEntity) -> None:
        if entity["id"] in self._items:
            raise KeyError(f"duplicate todo id {entity['id']!r}")
        self._items[entity["id"]] = copy.deepcopy(entity)

    async def update(self, todo_id: str, fields: Mapping[str, Any]) -> None:
        existing = self._items.get(todo_id)
        if existing is None:
            return
        existing.update(copy.deepcopy(dict(fields)))  # type: ignore[typeddict-item]

    async def delete(self, todo_id: str) -> None:
        self._items.pop(todo_id, None)


# PUBLIC_INTERFACE
def get_repository(request: Request) -> Repository:
    """
    FastAPI dependency returning the repository opened for this process.

    The repository is placed on ``app.state`` by the application lifespan (or
    injected directly through ``create_app(repository=...)``).
    """
    return request.app.state.repository
