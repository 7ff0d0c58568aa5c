"""
Pytest configuration and shared fixtures for the todo service.

This module provides common test fixtures and configuration used across
unit and integration tests.
"""

import json
import os
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

import boto3
import pytest
from aws_lambda_env_modeler import get_environment_variables
from moto import mock_aws

# Handler modules read these at import time, before any fixture runs
os.environ.update({
    "AWS_DEFAULT_REGION": "us-east-1",
    "AWS_ACCESS_KEY_ID": "test",
    "AWS_SECRET_ACCESS_KEY": "test",
    "TABLE_NAME": "test-todos-table",
    "POWERTOOLS_SERVICE_NAME": "test-todo-service",
    "POWERTOOLS_METRICS_NAMESPACE": "TestTodoService",
    "POWERTOOLS_TRACE_DISABLED": "true",
    "LOG_LEVEL": "DEBUG",
    "LAMBDA_ENV_MODELER_DISABLE_CACHE": "true",
})

TABLE_NAME = "test-todos-table"


def _clear_env_model_cache():
    # older aws-lambda-env-modeler releases cache with a plain lru_cache
    cache_clear = getattr(get_environment_variables, "cache_clear", None)
    if cache_clear is not None:
        cache_clear()


@pytest.fixture(autouse=True)
def reset_cached_configuration():
    """Clear cached environment models and DAL instances between tests."""
    from todo_service.handlers.todo_handler import get_todo_dal

    _clear_env_model_cache()
    get_todo_dal.cache_clear()
    yield
    _clear_env_model_cache()
    get_todo_dal.cache_clear()


@pytest.fixture
def dynamodb_table():
    """Create a mock DynamoDB table for testing."""
    with mock_aws():
        dynamodb = boto3.resource("dynamodb", region_name="us-east-1")
        table = dynamodb.create_table(
            TableName=TABLE_NAME,
            KeySchema=[{"AttributeName": "id", "KeyType": "HASH"}],
            AttributeDefinitions=[{"AttributeName": "id", "AttributeType": "S"}],
            BillingMode="PAY_PER_REQUEST",
        )
        table.wait_until_exists()
        yield table


@dataclass
class FakeLambdaContext:
    function_name: str = "test-todo-function"
    memory_limit_in_mb: int = 256
    invoked_function_arn: str = "arn:aws:lambda:us-east-1:123456789012:function:test-todo-function"
    aws_request_id: str = "test-request-id-123"

    def get_remaining_time_in_millis(self) -> int:
        return 30000


@pytest.fixture
def lambda_context() -> FakeLambdaContext:
    """Create a Lambda context for testing."""
    return FakeLambdaContext()


@pytest.fixture
def api_gateway_event() -> Callable[..., Dict[str, Any]]:
    """Factory for API Gateway REST proxy events."""

    def make_event(
        method: str,
        path: str,
        body: Optional[Any] = None,
        query: Optional[Dict[str, str]] = None,
    ) -> Dict[str, Any]:
        if body is not None and not isinstance(body, str):
            body = json.dumps(body)
        return {
            "resource": path,
            "path": path,
            "httpMethod": method,
            "headers": {"Content-Type": "application/json"},
            "multiValueHeaders": {"Content-Type": ["application/json"]},
            "queryStringParameters": query,
            "multiValueQueryStringParameters": {k: [v] for k, v in query.items()} if query else None,
            "pathParameters": None,
            "stageVariables": None,
            "body": body,
            "isBase64Encoded": False,
            "requestContext": {
                "requestId": "test-request-id-123",
                "accountId": "123456789012",
                "stage": "test",
                "httpMethod": method,
                "path": path,
                "resourcePath": path,
                "protocol": "HTTP/1.1",
                "identity": {"sourceIp": "127.0.0.1"},
            },
        }

    return make_event


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)
