"""
TodoItem domain model.

This module defines the single entity persisted by the todo service.
"""

from datetime import datetime, timezone
from typing import Annotated, Optional
from uuid import uuid4

from pydantic import BaseModel, Field


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


class TodoItem(BaseModel):
    """Core todo item model."""

    id: Annotated[str, Field(
        description='Unique identifier for the todo item',
        examples=['3f1c2a52-8a3b-4d59-9a51-2f4c6f1f6b0e']
    )]

    item: Annotated[str, Field(
        min_length=1,
        max_length=1000,
        description='Text of the todo item',
        examples=['Buy milk']
    )]

    completed: Annotated[bool, Field(
        default=False,
        description='Whether the todo item is done'
    )] = False

    created_at: Annotated[str, Field(
        description='ISO timestamp when the todo item was created'
    )]

    updated_at: Annotated[str, Field(
        description='ISO timestamp when the todo item was last updated'
    )]

    @classmethod
    def create(cls, item: str, completed: bool = False) -> 'TodoItem':
        """
        Create a new todo item with generated ID and timestamps.

        Args:
            item: Text of the todo item
            completed: Initial completion state

        Returns:
            New TodoItem instance
        """
        now = _utc_now()
        return cls(
            id=str(uuid4()),
            item=item,
            completed=completed,
            created_at=now,
            updated_at=now,
        )

    def apply_update(self, item: Optional[str] = None, completed: Optional[bool] = None) -> None:
        """Overwrite the provided fields and bump ``updated_at``."""
        if item is not None:
            self.item = item
        if completed is not None:
            self.completed = completed
        self.updated_at = _utc_now()
