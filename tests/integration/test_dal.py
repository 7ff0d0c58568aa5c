"""
Integration tests for the Data Access Layer (DAL).

This module tests the DynamoDB implementation of the DAL against a moto table.
"""

from unittest.mock import patch

import pytest
from botocore.exceptions import ClientError, EndpointConnectionError

from todo_service.dal import TodoDalHandler
from todo_service.dal.dynamodb_handler import DynamoDbHandler
from todo_service.models.todo import TodoItem

TABLE_NAME = "test-todos-table"


@pytest.mark.integration
class TestDynamoDbHandler:
    """Integration tests for DynamoDB handler."""

    def test_implements_protocol(self, dynamodb_table):
        assert isinstance(DynamoDbHandler(TABLE_NAME), TodoDalHandler)

    def test_put_and_get(self, dynamodb_table):
        dal = DynamoDbHandler(TABLE_NAME)
        todo = TodoItem.create(item="Buy milk")

        dal.put_todo(todo)
        retrieved = dal.get_todo_by_id(todo.id)

        assert retrieved == todo

    def test_get_missing(self, dynamodb_table):
        dal = DynamoDbHandler(TABLE_NAME)

        assert dal.get_todo_by_id("does-not-exist") is None

    def test_put_duplicate_id_fails(self, dynamodb_table):
        dal = DynamoDbHandler(TABLE_NAME)
        todo = TodoItem.create(item="Buy milk")
        dal.put_todo(todo)

        with pytest.raises(ClientError) as exc_info:
            dal.put_todo(todo)

        assert exc_info.value.response["Error"]["Code"] == "ConditionalCheckFailedException"

    def test_list_todos(self, dynamodb_table):
        dal = DynamoDbHandler(TABLE_NAME)
        created = [dal.put_todo(TodoItem.create(item=f"todo {i}")) for i in range(3)]

        listed = dal.list_todos()

        assert sorted(t.id for t in listed) == sorted(t.id for t in created)

    def test_list_todos_follows_pagination(self, dynamodb_table):
        dal = DynamoDbHandler(TABLE_NAME)
        first, second = TodoItem.create(item="first"), TodoItem.create(item="second")
        pages = [
            {"Items": [first.model_dump()], "LastEvaluatedKey": {"id": first.id}},
            {"Items": [second.model_dump()]},
        ]

        with patch.object(dal.table, "scan", side_effect=pages) as mock_scan:
            listed = dal.list_todos()

        assert [t.id for t in listed] == [first.id, second.id]
        assert mock_scan.call_args_list[1].kwargs == {"ExclusiveStartKey": {"id": first.id}}

    def test_update_todo(self, dynamodb_table):
        dal = DynamoDbHandler(TABLE_NAME)
        todo = dal.put_todo(TodoItem.create(item="Buy milk"))

        todo.apply_update(item="Buy oat milk", completed=True)
        dal.update_todo(todo)
        retrieved = dal.get_todo_by_id(todo.id)

        assert retrieved.item == "Buy oat milk"
        assert retrieved.completed is True
        assert retrieved.created_at == todo.created_at

    def test_update_missing(self, dynamodb_table):
        dal = DynamoDbHandler(TABLE_NAME)

        assert dal.update_todo(TodoItem.create(item="ghost")) is None
        assert dal.list_todos() == []

    def test_delete_todo(self, dynamodb_table):
        dal = DynamoDbHandler(TABLE_NAME)
        todo = dal.put_todo(TodoItem.create(item="Buy milk"))

        assert dal.delete_todo_by_id(todo.id) is True
        assert dal.get_todo_by_id(todo.id) is None

    def test_delete_missing(self, dynamodb_table):
        dal = DynamoDbHandler(TABLE_NAME)

        assert dal.delete_todo_by_id("does-not-exist") is False

    def test_health_check(self, dynamodb_table):
        assert DynamoDbHandler(TABLE_NAME).health_check() == {"status": "healthy", "table": TABLE_NAME}

    def test_health_check_missing_table(self, dynamodb_table):
        result = DynamoDbHandler("missing-table").health_check()

        assert result["status"] == "unhealthy"
        assert result["error"] == "ResourceNotFoundException"

    def test_health_check_unreachable_endpoint(self, dynamodb_table):
        dal = DynamoDbHandler(TABLE_NAME)

        with patch.object(dal.table, "load", side_effect=EndpointConnectionError(endpoint_url="http://127.0.0.1:1")):
            result = dal.health_check()

        assert result == {"status": "unhealthy", "table": TABLE_NAME, "error": "EndpointConnectionError"}

    def test_invalid_stored_item_keeps_cause(self, dynamodb_table):
        dynamodb_table.put_item(Item={"id": "broken", "item": "no timestamps"})
        dal = DynamoDbHandler(TABLE_NAME)

        with pytest.raises(ValueError) as exc_info:
            dal.get_todo_by_id("broken")

        assert isinstance(exc_info.value.__cause__, KeyError)
