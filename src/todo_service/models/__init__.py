"""
Data models for the todo service.

- todo: the persisted TodoItem entity
- input: request bodies accepted by the API
- output: response envelopes returned by the API
"""

from todo_service.models.input import CreateTodoRequest, UpdateTodoRequest
from todo_service.models.output import CreateTodoOutput, UpdateTodoOutput
from todo_service.models.todo import TodoItem

__all__ = [
    "TodoItem",
    "CreateTodoRequest",
    "UpdateTodoRequest",
    "CreateTodoOutput",
    "UpdateTodoOutput",
]
