"""
Business Logic Layer Module.

Sits between the API handlers and the data access layer: request
validation beyond the schema, fault-injection directives and not-found
semantics live here.
"""

from todo_service.logic.todo_service import InjectedErrorResult, TodoNotFoundError, TodoService

__all__ = [
    "TodoService",
    "TodoNotFoundError",
    "InjectedErrorResult",
]
