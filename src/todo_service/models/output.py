"""
Output models for API responses using Pydantic.
"""

from typing import Annotated

from pydantic import BaseModel, Field

from todo_service.models.todo import TodoItem


class CreateTodoOutput(BaseModel):
    """Response model for a created todo item."""

    created: Annotated[TodoItem, Field(description='The stored todo item')]


class UpdateTodoOutput(BaseModel):
    """Response model for an updated todo item."""

    updated: Annotated[TodoItem, Field(description='The todo item after the update')]
