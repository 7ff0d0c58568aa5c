"""
Input models for request validation using Pydantic.

This module defines the request bodies accepted by the todo API.
"""

from typing import Annotated

from pydantic import BaseModel, Field, model_validator


class CreateTodoRequest(BaseModel):
    """Request model for creating a todo item."""

    item: Annotated[str, Field(
        min_length=1,
        max_length=1000,
        description='Text of the todo item',
        examples=['Buy milk', '!slow 500']
    )]

    completed: Annotated[bool, Field(
        default=False,
        strict=True,
        description='Whether the todo item is already done'
    )] = False


class UpdateTodoRequest(BaseModel):
    """Request model for updating an existing todo item."""

    item: Annotated[str | None, Field(
        default=None,
        min_length=1,
        max_length=1000,
        description='Updated text of the todo item'
    )] = None

    completed: Annotated[bool | None, Field(
        default=None,
        strict=True,
        description='Updated completion state'
    )] = None

    @model_validator(mode='after')
    def validate_not_empty(self) -> 'UpdateTodoRequest':
        """Reject updates that change nothing."""
        if self.item is None and self.completed is None:
            raise ValueError('at least one of item or completed must be provided')
        return self
