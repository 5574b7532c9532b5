import uuid
from datetime import datetime

from todo_service.schemas import TodoCreate, TodoUpdate
from todo_service.utils import EDITABLE_FIELDS, merge_todo_update, new_todo_entity

STORED = {
    "id": "6f1c2d3e-0000-4000-8000-000000000001",
    "description": "Buy groceries",
    "isComplete": False,
    "priority": "High",
    "dueDate": datetime(2099, 2, 1, 9, 0),
}


class TestNewTodoEntity:
    def test_builds_incomplete_entity_with_uuid(self):
        data = TodoCreate(description="Call mom", priority="Medium", due_date=datetime(2099, 5, 1))
        entity = new_todo_entity(data)
        assert uuid.UUID(entity["id"]).version == 4
        assert entity == {
            "id": entity["id"],
            "description": "Call mom",
            "isComplete": False,
            "priority": "Medium",
            "dueDate": datetime(2099, 5, 1),
        }


class TestMergeTodoUpdate:
    def test_payload_overrides_existing(self):
        fields = merge_todo_update(STORED, TodoUpdate(is_complete=True))
        assert fields == {
            "description": "Buy groceries",
            "isComplete": True,
            "priority": "High",
            "dueDate": datetime(2099, 2, 1, 9, 0),
        }

    def test_id_never_written_back(self):
        fields = merge_todo_update(STORED, TodoUpdate.model_validate({"id": "other", "priority": "Low"}))
        assert "id" not in fields
        assert fields["priority"] == "Low"

    def test_stray_stored_keys_are_dropped(self):
        existing = {**STORED, "_id": "abc", "legacy": 1}
        assert set(merge_todo_update(existing, TodoUpdate())) == set(EDITABLE_FIELDS)

    def test_missing_record_merges_against_empty_base(self):
        assert merge_todo_update(None, TodoUpdate(description="Ghost")) == {"description": "Ghost"}
        assert merge_todo_update(None, TodoUpdate()) == {}

    def test_existing_is_not_mutated(self):
        existing = dict(STORED)
        merge_todo_update(existing, TodoUpdate(description="Changed"))
        assert existing == STORED
