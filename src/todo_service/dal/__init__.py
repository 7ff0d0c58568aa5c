"""
Data Access Layer (DAL) for the todo service.

This module provides the data access layer interfaces for todo persistence.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Protocol, runtime_checkable

from todo_service.models.todo import TodoItem


@runtime_checkable
class TodoDalHandler(Protocol):
    """Protocol defining the data access layer interface."""

    def put_todo(self, todo: TodoItem) -> TodoItem:
        """Create a todo item."""
        ...

    def get_todo_by_id(self, todo_id: str) -> Optional[TodoItem]:
        """Retrieve a todo item by its ID."""
        ...

    def list_todos(self) -> List[TodoItem]:
        """List every todo item."""
        ...

    def update_todo(self, todo: TodoItem) -> Optional[TodoItem]:
        """Replace an existing todo item, returning None if it does not exist."""
        ...

    def delete_todo_by_id(self, todo_id: str) -> bool:
        """Delete a todo item by its ID."""
        ...


class BaseDalHandler(ABC):
    """Abstract base class for data access layer implementations."""

    def __init__(self, table_name: str) -> None:
        """
        Initialize the DAL handler.

        Args:
            table_name: Name of the database table
        """
        self.table_name = table_name

    @abstractmethod
    def put_todo(self, todo: TodoItem) -> TodoItem:
        pass

    @abstractmethod
    def get_todo_by_id(self, todo_id: str) -> Optional[TodoItem]:
        pass

    @abstractmethod
    def list_todos(self) -> List[TodoItem]:
        pass

    @abstractmethod
    def update_todo(self, todo: TodoItem) -> Optional[TodoItem]:
        pass

    @abstractmethod
    def delete_todo_by_id(self, todo_id: str) -> bool:
        pass


__all__ = [
    "TodoDalHandler",
    "BaseDalHandler",
]
