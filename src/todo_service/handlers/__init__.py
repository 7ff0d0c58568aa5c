"""
AWS Lambda Handlers Module.

Entry point: ``todo_service.handlers.todo_handler.lambda_handler`` serves the
todo API through an API Gateway REST resolver.
"""
