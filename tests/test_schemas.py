from datetime import date, datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from todo_service.exceptions import InvalidPayloadError
from todo_service.models import Priority
from todo_service.schemas import TodoOut, TodoUpdate, format_due_date, parse_create_payload, parse_due_date


class TestParseCreatePayload:
    def test_valid_payload(self):
        data = parse_create_payload(
            {"description": "Water plants", "priority": "Low", "dueDate": "2099-03-01T07:00:00"}
        )
        assert data.description == "Water plants"
        assert data.priority == "Low"
        assert data.due_date == datetime(2099, 3, 1, 7, 0, 0, tzinfo=timezone.utc)

    @pytest.mark.parametrize(
        "payload, message",
        [
            ({}, "Invalid description provided."),
            ({"description": True, "priority": "High", "dueDate": "2099-01-01"}, "Invalid description provided."),
            ({"description": "x"}, "Invalid priority provided."),
            ({"description": "x", "priority": ""}, "Invalid priority provided."),
            ({"description": "x", "priority": ["High"]}, "Invalid priority provided."),
            ({"description": "x", "priority": "Medium"}, "Invalid dueDate provided."),
            ({"description": "x", "priority": "Medium", "dueDate": 1700000000}, "Invalid dueDate provided."),
        ],
    )
    def test_invalid_payloads(self, payload, message):
        with pytest.raises(InvalidPayloadError) as excinfo:
            parse_create_payload(payload)
        assert excinfo.value.message == message

    def test_none_is_treated_as_empty_object(self):
        with pytest.raises(InvalidPayloadError) as excinfo:
            parse_create_payload(None)
        assert excinfo.value.message == "Invalid description provided."


class TestPriority:
    def test_parse_members(self):
        assert Priority.parse("High") is Priority.HIGH
        assert Priority.parse("Medium") is Priority.MEDIUM
        assert Priority.parse(Priority.LOW) is Priority.LOW

    @pytest.mark.parametrize("value", ["Urgent", "low", 1, None])
    def test_parse_rejects_other_values(self, value):
        with pytest.raises(ValueError):
            Priority.parse(value)


class TestParseDueDate:
    def test_date_string_is_midnight(self):
        assert parse_due_date("2099-12-25") == datetime(2099, 12, 25, tzinfo=timezone.utc)

    def test_date_object_is_midnight(self):
        assert parse_due_date(date(2099, 12, 25)) == datetime(2099, 12, 25, tzinfo=timezone.utc)

    def test_aware_datetime_is_converted_to_utc(self):
        value = datetime(2099, 1, 1, 12, 0, tzinfo=timezone(timedelta(hours=2)))
        assert parse_due_date(value) == datetime(2099, 1, 1, 10, 0, tzinfo=timezone.utc)

    def test_offset_string(self):
        assert parse_due_date("2099-01-01T12:00:00+02:00") == datetime(2099, 1, 1, 10, 0, tzinfo=timezone.utc)

    def test_microseconds_truncated_to_milliseconds(self):
        assert parse_due_date("2099-01-01T12:00:00.123456") == datetime(2099, 1, 1, 12, 0, 0, 123000, tzinfo=timezone.utc)

    def test_naive_datetime_is_read_as_utc(self):
        assert parse_due_date(datetime(2099, 1, 1, 12, 0)) == datetime(2099, 1, 1, 12, 0, tzinfo=timezone.utc)

    @pytest.mark.parametrize("value", ["0001-01-01T00:00:00+01:00", "9999-12-31T23:59:59-01:00"])
    def test_out_of_range_after_utc_conversion(self, value):
        with pytest.raises(ValueError):
            parse_due_date(value)

    def test_none(self):
        assert parse_due_date(None) is None

    def test_garbage(self):
        with pytest.raises(ValueError):
            parse_due_date("tomorrow")


class TestTodoUpdate:
    def test_accepts_camel_case_keys_and_drops_unknown(self):
        update = TodoUpdate.model_validate({"isComplete": True, "id": "x", "dueDate": "2099-01-01"})
        assert update.model_dump(by_alias=True, exclude_unset=True) == {
            "isComplete": True,
            "dueDate": datetime(2099, 1, 1, tzinfo=timezone.utc),
        }

    def test_out_of_range_due_date_is_a_validation_error(self):
        with pytest.raises(ValidationError):
            TodoUpdate.model_validate({"dueDate": "9999-12-31T23:59:59-01:00"})


class TestFormatDueDate:
    def test_utc_with_milliseconds_and_z(self):
        assert format_due_date(datetime(2099, 1, 31, 13, 45, tzinfo=timezone.utc)) == "2099-01-31T13:45:00.000Z"

    def test_offset_is_converted(self):
        value = datetime(2099, 1, 31, 9, 0, 0, 250000, tzinfo=timezone(timedelta(hours=2)))
        assert format_due_date(value) == "2099-01-31T07:00:00.250Z"

    def test_todo_out_json_uses_utc_z(self):
        todo = TodoOut.model_validate(
            {
                "id": "a1",
                "description": "x",
                "isComplete": False,
                "priority": "High",
                "dueDate": datetime(2099, 1, 31, 13, 45, tzinfo=timezone.utc),
            }
        )
        assert todo.model_dump(mode="json", by_alias=True)["dueDate"] == "2099-01-31T13:45:00.000Z"
