"""
Business logic for todo management.

Each operation validates its input, applies the fault-injection directives
and performs one table operation through the DAL.
"""

from dataclasses import dataclass
from typing import List, Optional

from aws_lambda_powertools.metrics import MetricUnit

from todo_service.dal import TodoDalHandler
from todo_service.handlers.utils.errors import ErrorContext, ResourceNotFoundError
from todo_service.handlers.utils.observability import logger, metrics, tracer
from todo_service.logic import directives
from todo_service.models.input import CreateTodoRequest, UpdateTodoRequest
from todo_service.models.todo import TodoItem


class TodoNotFoundError(ResourceNotFoundError):
    """Raised when a todo item is not found."""

    def __init__(self, todo_id: str, context: Optional[ErrorContext] = None):
        super().__init__(
            resource_type="Todo",
            resource_id=todo_id,
            context=context,
        )


@dataclass
class InjectedErrorResult:
    """Outcome of an ``!error`` directive: the status the API must answer with."""

    status_code: int
    message: str = 'Got an error'


class TodoService:
    """Todo operations on top of a DAL handler."""

    def __init__(self, dal: TodoDalHandler, max_delay_ms: int = 10000) -> None:
        self.dal = dal
        self.max_delay_ms = max_delay_ms

    def _apply_directives(self, item: str, context: Optional[ErrorContext]) -> Optional[InjectedErrorResult]:
        directives.raise_if_exception_requested(item, context=context)

        delay_ms = directives.requested_delay_ms(item)
        if delay_ms is not None:
            directives.delay(delay_ms, self.max_delay_ms)

        status = directives.requested_error_status(item)
        if status is not None:
            metrics.add_metric(name="InjectedError", unit=MetricUnit.Count, value=1)
            return InjectedErrorResult(status_code=status)
        return None

    @tracer.capture_method
    def create_todo(
        self,
        request: CreateTodoRequest,
        context: Optional[ErrorContext] = None,
    ) -> TodoItem | InjectedErrorResult:
        injected = self._apply_directives(request.item, context)
        if injected:
            return injected

        todo = self.dal.put_todo(TodoItem.create(item=request.item, completed=request.completed))
        metrics.add_metric(name="TodoCreated", unit=MetricUnit.Count, value=1)
        return todo

    @tracer.capture_method
    def get_todo(self, todo_id: str, context: Optional[ErrorContext] = None) -> TodoItem:
        todo = self.dal.get_todo_by_id(todo_id)
        if todo is None:
            raise TodoNotFoundError(todo_id, context=context)
        return todo

    @tracer.capture_method
    def list_todos(self, delay_ms: Optional[int] = None) -> List[TodoItem]:
        if delay_ms is not None:
            directives.delay(delay_ms, self.max_delay_ms)
        return self.dal.list_todos()

    @tracer.capture_method
    def update_todo(
        self,
        todo_id: str,
        request: UpdateTodoRequest,
        context: Optional[ErrorContext] = None,
    ) -> TodoItem | InjectedErrorResult:
        if request.item is not None:
            injected = self._apply_directives(request.item, context)
            if injected:
                return injected

        todo = self.get_todo(todo_id, context=context)
        todo.apply_update(item=request.item, completed=request.completed)

        updated = self.dal.update_todo(todo)
        if updated is None:
            raise TodoNotFoundError(todo_id, context=context)

        logger.info("Todo updated", extra={"todo_id": todo_id, "completed": updated.completed})
        metrics.add_metric(name="TodoUpdated", unit=MetricUnit.Count, value=1)
        return updated

    @tracer.capture_method
    def delete_todo(self, todo_id: str, context: Optional[ErrorContext] = None) -> None:
        if not self.dal.delete_todo_by_id(todo_id):
            raise TodoNotFoundError(todo_id, context=context)
        metrics.add_metric(name="TodoDeleted", unit=MetricUnit.Count, value=1)
