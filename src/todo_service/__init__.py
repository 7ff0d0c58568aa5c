"""
Todo Service.

A todo list CRUD backend running as AWS Lambda functions behind API Gateway
and DynamoDB, plus a deployment-time resolver for Dynatrace OneAgent layer ARNs.

- handlers: API handlers and entry points
- logic: business logic and fault-injection directives
- dal: data access layer for persistence
- models: data models and schemas
- layers: OneAgent layer ARN resolution for deployments
"""

__version__ = "1.0.0"

__all__ = [
    "__version__",
]
