"""
Unit tests for Pydantic models.

This module tests the validation and serialization of the todo models.
"""

import pytest
from pydantic import ValidationError

from todo_service.models.input import CreateTodoRequest, UpdateTodoRequest
from todo_service.models.output import CreateTodoOutput
from todo_service.models.todo import TodoItem


class TestTodoItem:
    """Test cases for the TodoItem domain model."""

    def test_create_generates_id_and_timestamps(self):
        todo = TodoItem.create(item="Buy milk")

        assert len(todo.id) == 36
        assert todo.item == "Buy milk"
        assert todo.completed is False
        assert todo.created_at == todo.updated_at

    def test_create_generates_unique_ids(self):
        assert TodoItem.create(item="a").id != TodoItem.create(item="a").id

    def test_apply_update_changes_only_given_fields(self):
        todo = TodoItem.create(item="Buy milk")
        todo.updated_at = "2020-01-01T00:00:00+00:00"

        todo.apply_update(completed=True)

        assert todo.item == "Buy milk"
        assert todo.completed is True
        assert todo.updated_at != "2020-01-01T00:00:00+00:00"

    def test_empty_item_rejected(self):
        with pytest.raises(ValidationError):
            TodoItem(id="1", item="", created_at="x", updated_at="x")


class TestCreateTodoRequest:
    """Test cases for CreateTodoRequest model."""

    def test_minimal_request(self):
        request = CreateTodoRequest.model_validate({"item": "Buy milk"})

        assert request.item == "Buy milk"
        assert request.completed is False

    def test_missing_item(self):
        with pytest.raises(ValidationError) as exc_info:
            CreateTodoRequest.model_validate({"completed": True})

        assert exc_info.value.errors()[0]["loc"] == ("item",)

    def test_completed_must_be_boolean(self):
        with pytest.raises(ValidationError):
            CreateTodoRequest.model_validate({"item": "Buy milk", "completed": "yes"})

    def test_item_too_long(self):
        with pytest.raises(ValidationError):
            CreateTodoRequest.model_validate({"item": "x" * 1001})


class TestUpdateTodoRequest:
    """Test cases for UpdateTodoRequest model."""

    def test_partial_update(self):
        request = UpdateTodoRequest.model_validate({"completed": True})

        assert request.item is None
        assert request.completed is True

    def test_empty_update_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            UpdateTodoRequest.model_validate({})

        assert "at least one of item or completed" in str(exc_info.value)


class TestOutputModels:

    def test_create_output_envelope(self):
        todo = TodoItem.create(item="Buy milk")

        dumped = CreateTodoOutput(created=todo).model_dump()

        assert dumped == {"created": todo.model_dump()}
