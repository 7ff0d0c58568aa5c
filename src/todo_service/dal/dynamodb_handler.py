"""
DynamoDB implementation of the Data Access Layer (DAL).

Todo items live in a single table keyed by ``id``. Every method maps to one
table operation.
"""

from typing import Any, Dict, List, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from todo_service.dal import BaseDalHandler
from todo_service.handlers.utils.observability import logger, tracer
from todo_service.models.todo import TodoItem


class DynamoDbHandler(BaseDalHandler):
    """DynamoDB implementation of the data access layer."""

    def __init__(self, table_name: str, endpoint_url: Optional[str] = None) -> None:
        """
        Initialize the DynamoDB handler.

        Args:
            table_name: Name of the DynamoDB table
            endpoint_url: Optional endpoint override for local testing
        """
        super().__init__(table_name)
        self.dynamodb = boto3.resource('dynamodb', endpoint_url=endpoint_url)
        self.table = self.dynamodb.Table(table_name)
        logger.debug(f'DynamoDB handler initialized for table: {table_name}')

    @tracer.capture_method
    def put_todo(self, todo: TodoItem) -> TodoItem:
        """
        Write a new todo item.

        Raises:
            ClientError: If the DynamoDB operation fails, including an id collision
        """
        try:
            self.table.put_item(
                Item=self._todo_to_dynamodb_item(todo),
                ConditionExpression='attribute_not_exists(id)'
            )
        except ClientError as e:
            error_code = e.response['Error']['Code']
            logger.error(f'DynamoDB error creating todo: {error_code}', extra={'todo_id': todo.id})
            raise

        logger.info(f'Successfully created todo in database: {todo.id}')
        tracer.put_annotation('todo_created', todo.id)
        return todo

    @tracer.capture_method
    def get_todo_by_id(self, todo_id: str) -> Optional[TodoItem]:
        """Retrieve a todo item, or None if there is no item with that id."""
        try:
            response = self.table.get_item(Key={'id': todo_id})
        except ClientError as e:
            error_code = e.response['Error']['Code']
            logger.error(f'DynamoDB error retrieving todo {todo_id}: {error_code}')
            raise

        item = response.get('Item')
        if not item:
            logger.info(f'Todo not found: {todo_id}')
            return None

        return self._dynamodb_item_to_todo(item)

    @tracer.capture_method
    def list_todos(self) -> List[TodoItem]:
        """Scan the whole table, following pagination."""
        scan_kwargs: Dict[str, Any] = {}
        todos: List[TodoItem] = []
        try:
            while True:
                response = self.table.scan(**scan_kwargs)
                todos.extend(self._dynamodb_item_to_todo(item) for item in response.get('Items', []))
                last_key = response.get('LastEvaluatedKey')
                if not last_key:
                    break
                scan_kwargs['ExclusiveStartKey'] = last_key
        except ClientError as e:
            error_code = e.response['Error']['Code']
            logger.error(f'DynamoDB error listing todos: {error_code}')
            raise

        logger.info(f'Retrieved {len(todos)} todos')
        tracer.put_annotation('todos_listed', len(todos))
        return todos

    @tracer.capture_method
    def update_todo(self, todo: TodoItem) -> Optional[TodoItem]:
        """
        Overwrite the stored fields of an existing todo item.

        Returns:
            The updated item, or None if no item with that id exists
        """
        try:
            self.table.update_item(
                Key={'id': todo.id},
                UpdateExpression='SET #item = :item, completed = :completed, updated_at = :updated_at',
                ConditionExpression='attribute_exists(id)',
                ExpressionAttributeNames={'#item': 'item'},
                ExpressionAttributeValues={
                    ':item': todo.item,
                    ':completed': todo.completed,
                    ':updated_at': todo.updated_at,
                },
            )
        except ClientError as e:
            error_code = e.response['Error']['Code']
            if error_code == 'ConditionalCheckFailedException':
                logger.info(f'Todo not found for update: {todo.id}')
                return None
            logger.error(f'DynamoDB error updating todo {todo.id}: {error_code}')
            raise

        logger.info(f'Successfully updated todo: {todo.id}')
        tracer.put_annotation('todo_updated', todo.id)
        return todo

    @tracer.capture_method
    def delete_todo_by_id(self, todo_id: str) -> bool:
        """
        Delete a todo item.

        Returns:
            True if the item was deleted, False if it did not exist
        """
        try:
            self.table.delete_item(
                Key={'id': todo_id},
                ConditionExpression='attribute_exists(id)',
            )
        except ClientError as e:
            error_code = e.response['Error']['Code']
            if error_code == 'ConditionalCheckFailedException':
                logger.info(f'Todo not found for deletion: {todo_id}')
                return False
            logger.error(f'DynamoDB error deleting todo {todo_id}: {error_code}')
            raise

        logger.info(f'Successfully deleted todo: {todo_id}')
        tracer.put_annotation('todo_deleted', todo_id)
        return True

    @tracer.capture_method
    def health_check(self) -> Dict[str, str]:
        """Describe the table to check connectivity."""
        try:
            self.table.load()
        except ClientError as e:
            error_code = e.response['Error']['Code']
            logger.error(f'DynamoDB health check failed: {error_code}')
            return {'status': 'unhealthy', 'table': self.table_name, 'error': error_code}
        except BotoCoreError as e:
            logger.error(f'DynamoDB health check failed: {e}')
            return {'status': 'unhealthy', 'table': self.table_name, 'error': type(e).__name__}

        return {'status': 'healthy', 'table': self.table_name}

    def _todo_to_dynamodb_item(self, todo: TodoItem) -> Dict[str, Any]:
        return todo.model_dump()

    def _dynamodb_item_to_todo(self, item: Dict[str, Any]) -> TodoItem:
        try:
            return TodoItem(
                id=item['id'],
                item=item['item'],
                completed=bool(item.get('completed', False)),
                created_at=item['created_at'],
                updated_at=item['updated_at'],
            )
        except (KeyError, ValueError, TypeError) as e:
            logger.error(f'Failed to convert DynamoDB item to TodoItem: {e}', extra={'item': item})
            raise ValueError(f"Invalid todo data in database: {e}") from e
