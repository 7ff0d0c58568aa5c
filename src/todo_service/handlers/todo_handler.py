"""
Todo Handler - Lambda function for the todo list API.

This module implements the handler layer for todo operations: it parses and
validates API Gateway requests, delegates to the business logic layer and
turns service errors into JSON responses.
"""

import json
from functools import lru_cache
from typing import Any, Dict, Optional

from aws_lambda_powertools.event_handler import APIGatewayRestResolver, Response
from aws_lambda_powertools.logging import correlation_paths
from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.typing import LambdaContext
from botocore.exceptions import ClientError
from pydantic import ValidationError

from todo_service.dal.dynamodb_handler import DynamoDbHandler
from todo_service.handlers.models.env_vars import get_handler_env_vars
from todo_service.handlers.utils.errors import (
    CORS_HEADERS,
    BaseServiceError,
    ExternalServiceError,
    ValidationError as ServiceValidationError,
    create_api_response,
    create_error_context,
    format_error_response,
    get_http_status_code,
    log_error_metrics,
)
from todo_service.handlers.utils.observability import logger, metrics, tracer
from todo_service.logic.todo_service import InjectedErrorResult, TodoService
from todo_service.models.input import CreateTodoRequest, UpdateTodoRequest
from todo_service.models.output import CreateTodoOutput, UpdateTodoOutput

TODOS_PATH = '/todos'
HEALTH_PATH = '/health'

app = APIGatewayRestResolver()


@lru_cache(maxsize=1)
def get_todo_dal() -> DynamoDbHandler:
    """Create the DynamoDB handler once per container."""
    env_vars = get_handler_env_vars()
    return DynamoDbHandler(table_name=env_vars.TABLE_NAME, endpoint_url=env_vars.DYNAMODB_ENDPOINT)


def get_todo_service() -> TodoService:
    return TodoService(dal=get_todo_dal(), max_delay_ms=get_handler_env_vars().MAX_INJECTED_DELAY_MS)


def _request_id() -> str:
    request_context = app.current_event.request_context
    return request_context.request_id if request_context and request_context.request_id else "unknown"


def _parse_body(model, context):
    try:
        request_body = json.loads(app.current_event.body or "{}")
    except json.JSONDecodeError:
        raise ServiceValidationError(message="Invalid JSON in request body", context=context)
    return model.model_validate(request_body)


def _injected_error_response(result: InjectedErrorResult) -> Response:
    return create_api_response(status_code=result.status_code, body=json.dumps(result.message))


@app.exception_handler(BaseServiceError)
def handle_service_error(error: BaseServiceError) -> Response:
    log_error_metrics(error)
    return create_api_response(
        status_code=get_http_status_code(error),
        body=format_error_response(error),
    )


@app.exception_handler(ValidationError)
def handle_request_validation_error(error: ValidationError) -> Response:
    logger.error("Request validation failed", extra={
        "validation_errors": str(error),
        "error_count": error.error_count(),
    })
    metrics.add_metric(name="ValidationError", unit=MetricUnit.Count, value=1)

    field_errors = [
        {"field": str(err["loc"][-1]) if err["loc"] else "body", "message": err["msg"]}
        for err in error.errors()
    ]
    return create_api_response(
        status_code=400,
        body=format_error_response(
            ServiceValidationError(message="Request validation failed", field_errors=field_errors)
        ),
    )


@app.exception_handler(ClientError)
def handle_dynamodb_error(error: ClientError) -> Response:
    service_error = ExternalServiceError(
        message=f"DynamoDB request failed: {error.response['Error']['Code']}",
        service_name="dynamodb",
    )
    return handle_service_error(service_error)


@app.not_found
def handle_not_found(_: Exception) -> Response:
    return create_api_response(
        status_code=404,
        body={"error": {"code": "ROUTE_NOT_FOUND", "message": "The requested route does not exist."}},
    )


@app.get(HEALTH_PATH)
@tracer.capture_method
def health_check() -> Response:
    db_health = get_todo_dal().health_check()
    healthy = db_health.get("status") == "healthy"
    metrics.add_metric(
        name="HealthCheckSuccess" if healthy else "HealthCheckFailure",
        unit=MetricUnit.Count,
        value=1,
    )
    return create_api_response(
        status_code=200 if healthy else 503,
        body={"status": "healthy" if healthy else "unhealthy", "checks": {"database": db_health}},
    )


@app.post(TODOS_PATH)
@tracer.capture_method
def create_todo() -> Response:
    """
    Create a todo item.

    Returns:
        201 with ``{"created": item}``
    """
    context = create_error_context(request_id=_request_id(), operation="create_todo")
    create_request = _parse_body(CreateTodoRequest, context)

    result = get_todo_service().create_todo(request=create_request, context=context)
    if isinstance(result, InjectedErrorResult):
        return _injected_error_response(result)

    logger.info("Todo created successfully", extra={"todo_id": result.id})
    return create_api_response(
        status_code=201,
        body=CreateTodoOutput(created=result).model_dump_json(),
        headers={"Location": f"{TODOS_PATH}/{result.id}"},
    )


@app.get(TODOS_PATH)
@tracer.capture_method
def list_todos() -> Response:
    context = create_error_context(request_id=_request_id(), operation="list_todos")

    query_params = app.current_event.query_string_parameters or {}
    delay_ms: Optional[int] = None
    if query_params.get('delay') is not None:
        try:
            delay_ms = int(query_params['delay'])
        except ValueError:
            raise ServiceValidationError(message=f"Invalid delay value: {query_params['delay']}", context=context)

    todos = get_todo_service().list_todos(delay_ms=delay_ms)
    return create_api_response(status_code=200, body=[todo.model_dump() for todo in todos])


@app.get(f"{TODOS_PATH}/<todo_id>")
@tracer.capture_method
def get_todo(todo_id: str) -> Response:
    context = create_error_context(request_id=_request_id(), operation="get_todo", resource_id=todo_id)
    tracer.put_annotation("todo_id", todo_id)

    todo = get_todo_service().get_todo(todo_id=todo_id, context=context)
    return create_api_response(status_code=200, body=todo.model_dump_json())


@app.put(f"{TODOS_PATH}/<todo_id>")
@tracer.capture_method
def update_todo(todo_id: str) -> Response:
    """
    Update the text and/or completion state of a todo item.

    Args:
        todo_id: Todo identifier

    Returns:
        200 with ``{"updated": item}``
    """
    context = create_error_context(request_id=_request_id(), operation="update_todo", resource_id=todo_id)
    tracer.put_annotation("todo_id", todo_id)
    update_request = _parse_body(UpdateTodoRequest, context)

    result = get_todo_service().update_todo(todo_id=todo_id, request=update_request, context=context)
    if isinstance(result, InjectedErrorResult):
        return _injected_error_response(result)

    return create_api_response(status_code=200, body=UpdateTodoOutput(updated=result).model_dump_json())


@app.delete(f"{TODOS_PATH}/<todo_id>")
@tracer.capture_method
def delete_todo(todo_id: str) -> Response:
    context = create_error_context(request_id=_request_id(), operation="delete_todo", resource_id=todo_id)
    tracer.put_annotation("todo_id", todo_id)

    get_todo_service().delete_todo(todo_id=todo_id, context=context)
    logger.info("Todo deleted successfully", extra={"todo_id": todo_id})
    return create_api_response(status_code=204)


@tracer.capture_lambda_handler
@logger.inject_lambda_context(correlation_id_path=correlation_paths.API_GATEWAY_REST)
@metrics.log_metrics(capture_cold_start_metric=True)
def lambda_handler(event: Dict[str, Any], context: LambdaContext) -> Dict[str, Any]:
    """
    Main Lambda handler function.

    Args:
        event: API Gateway REST proxy event
        context: Lambda context object

    Returns:
        API Gateway response
    """
    metrics.add_metric(name="RequestCount", unit=MetricUnit.Count, value=1)

    try:
        return app.resolve(event, context)
    except Exception as e:
        metrics.add_metric(name="RequestError", unit=MetricUnit.Count, value=1)
        logger.exception("Unhandled error in lambda handler", extra={"error": str(e)})

        error_response = {
            "error": {
                "code": "INTERNAL_SERVER_ERROR",
                "message": "An unexpected error occurred",
                "error_id": context.aws_request_id,
            }
        }
        return {
            "statusCode": 500,
            "headers": {"Content-Type": "application/json", **CORS_HEADERS},
            "body": json.dumps(error_response),
            "isBase64Encoded": False,
        }
