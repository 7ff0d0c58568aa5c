"""
Service errors and API response helpers for the todo handlers.

The error hierarchy classifies failures by severity and category so that the
handler layer can log, count and map them to HTTP responses in one place.
"""

import json
import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional

from aws_lambda_powertools.event_handler import Response, content_types
from aws_lambda_powertools.metrics import MetricUnit
from pydantic import BaseModel, Field

from todo_service.handlers.utils.observability import logger, metrics, tracer

CORS_HEADERS = {
    'Access-Control-Allow-Origin': '*',
    'Access-Control-Allow-Credentials': 'true',
}


class ErrorSeverity(str, Enum):
    """Error severity levels for classification."""
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


class ErrorCategory(str, Enum):
    """Error categories for classification."""
    VALIDATION = "VALIDATION"
    BUSINESS_LOGIC = "BUSINESS_LOGIC"
    EXTERNAL_SERVICE = "EXTERNAL_SERVICE"
    FAULT_INJECTION = "FAULT_INJECTION"


class ErrorContext(BaseModel):
    """Context information for errors."""

    request_id: str = Field(description="Unique request identifier")
    operation: str = Field(description="Operation being performed")
    resource_id: Optional[str] = Field(default=None, description="Resource identifier")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class BaseServiceError(Exception):
    """Base exception class for service errors."""

    def __init__(
        self,
        message: str,
        error_code: str,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        category: ErrorCategory = ErrorCategory.BUSINESS_LOGIC,
        context: Optional[ErrorContext] = None,
        user_message: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.severity = severity
        self.category = category
        self.context = context
        self.user_message = user_message or "An error occurred while processing your request."
        self.error_id = str(uuid.uuid4())


class ValidationError(BaseServiceError):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str,
        field_errors: Optional[List[Dict[str, str]]] = None,
        context: Optional[ErrorContext] = None,
    ):
        super().__init__(
            message=message,
            error_code="VALIDATION_ERROR",
            severity=ErrorSeverity.LOW,
            category=ErrorCategory.VALIDATION,
            context=context,
            user_message="Invalid input provided. Please check your request and try again.",
        )
        self.field_errors = field_errors or []


class ExternalServiceError(BaseServiceError):
    """Raised when a call to a backing AWS service fails."""

    def __init__(
        self,
        message: str,
        service_name: str,
        context: Optional[ErrorContext] = None,
    ):
        super().__init__(
            message=message,
            error_code="EXTERNAL_SERVICE_ERROR",
            severity=ErrorSeverity.HIGH,
            category=ErrorCategory.EXTERNAL_SERVICE,
            context=context,
            user_message="A required service is temporarily unavailable. Please try again later.",
        )
        self.service_name = service_name


class ResourceNotFoundError(BaseServiceError):
    """Raised when a requested resource is not found."""

    def __init__(
        self,
        resource_type: str,
        resource_id: str,
        context: Optional[ErrorContext] = None,
    ):
        message = f"{resource_type} with ID '{resource_id}' not found"
        super().__init__(
            message=message,
            error_code="RESOURCE_NOT_FOUND",
            severity=ErrorSeverity.LOW,
            category=ErrorCategory.BUSINESS_LOGIC,
            context=context,
            user_message=f"The requested {resource_type.lower()} was not found.",
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class InjectedFaultError(BaseServiceError):
    """Raised when a request asks for an exception through an ``!exception`` directive."""

    def __init__(self, message: str, context: Optional[ErrorContext] = None):
        super().__init__(
            message=message,
            error_code="INJECTED_FAULT",
            severity=ErrorSeverity.LOW,
            category=ErrorCategory.FAULT_INJECTION,
            context=context,
            user_message=message,
        )


def create_error_context(
    request_id: str,
    operation: str,
    resource_id: Optional[str] = None,
) -> ErrorContext:
    """Create error context for tracking."""
    return ErrorContext(
        request_id=request_id,
        operation=operation,
        resource_id=resource_id,
    )


@tracer.capture_method
def log_error_metrics(error: BaseServiceError) -> None:
    """Log error metrics for monitoring and alerting."""
    metrics.add_metric(name="ErrorCount", unit=MetricUnit.Count, value=1)
    metrics.add_metric(name=f"Error{error.category.value}Count", unit=MetricUnit.Count, value=1)

    tracer.put_annotation("error_code", error.error_code)
    tracer.put_annotation("error_category", error.category.value)

    logger.error(
        "Service error occurred",
        extra={
            "error_id": error.error_id,
            "error_code": error.error_code,
            "error_severity": error.severity.value,
            "error_category": error.category.value,
            "error_message": error.message,
            "context": error.context.model_dump(mode="json") if error.context else None,
        }
    )


def format_error_response(error: BaseServiceError) -> Dict[str, Any]:
    """Format error for API response."""

    response: Dict[str, Any] = {
        "error": {
            "code": error.error_code,
            "message": error.user_message,
            "error_id": error.error_id,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
    }

    if isinstance(error, ValidationError) and error.field_errors:
        response["error"]["field_errors"] = error.field_errors

    return response


def get_http_status_code(error: BaseServiceError) -> int:
    """Get appropriate HTTP status code for error."""

    status_mapping = {
        "VALIDATION_ERROR": 400,
        "RESOURCE_NOT_FOUND": 404,
        "EXTERNAL_SERVICE_ERROR": 502,
        "INJECTED_FAULT": 500,
    }

    return status_mapping.get(error.error_code, 500)


def create_api_response(
    status_code: int,
    body: Any = None,
    headers: Optional[Dict[str, str]] = None,
) -> Response:
    """Create a JSON API Gateway response with the CORS headers every route returns."""

    response_headers = dict(CORS_HEADERS)
    if headers:
        response_headers.update(headers)

    if body is not None and not isinstance(body, str):
        body = json.dumps(body)

    return Response(
        status_code=status_code,
        content_type=content_types.APPLICATION_JSON,
        body=body,
        headers=response_headers,
    )
