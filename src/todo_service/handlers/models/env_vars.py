"""
Environment variable models for type-safe configuration.

This module defines Pydantic models for the environment variables read by the
todo Lambda handlers and by the layer resolver command line.
"""

from typing import Annotated, Optional

from aws_lambda_env_modeler import BaseModel as BaseEnvModel, get_environment_variables
from pydantic import Field


class TodoHandlerEnvVars(BaseEnvModel):
    """Environment variables for the todo API handler."""

    # DynamoDB table holding the todo items
    TABLE_NAME: Annotated[str, Field(
        description='DynamoDB table name for todo storage',
        min_length=1
    )]

    # Alternate endpoint, e.g. DynamoDB Local
    DYNAMODB_ENDPOINT: Annotated[Optional[str], Field(
        default=None,
        description='Optional DynamoDB endpoint URL override'
    )] = None

    MAX_INJECTED_DELAY_MS: Annotated[int, Field(
        default=10000,
        description='Upper bound for delays requested with !slow or ?delay',
        ge=0,
        le=60000
    )] = 10000

    POWERTOOLS_SERVICE_NAME: Annotated[str, Field(
        default='todo-service',
        description='Service name for AWS Powertools'
    )] = 'todo-service'

    LOG_LEVEL: Annotated[str, Field(
        default='INFO',
        description='Log level for application logging',
        pattern=r'^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$'
    )] = 'INFO'


class LayerResolverEnvVars(BaseEnvModel):
    """Environment variables for resolving OneAgent layer ARNs at deployment time."""

    # PaaS token, used when the deployment configuration does not carry one
    DT_PAAS_TOKEN: Annotated[Optional[str], Field(
        default=None,
        description='Dynatrace PaaS token for the deployment API'
    )] = None

    LAYER_REGISTRY_TIMEOUT_SECONDS: Annotated[float, Field(
        default=10.0,
        description='Timeout for the deployment API request in seconds',
        gt=0,
        le=300
    )] = 10.0


def get_handler_env_vars() -> TodoHandlerEnvVars:
    """
    Get typed environment variables for the todo handler.

    Returns:
        Validated environment variables model instance
    """
    return get_environment_variables(model=TodoHandlerEnvVars)


def get_layer_resolver_env_vars() -> LayerResolverEnvVars:
    """Get typed environment variables for the layer resolver."""
    return get_environment_variables(model=LayerResolverEnvVars)
