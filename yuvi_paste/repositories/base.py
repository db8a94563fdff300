"""Base repository class with common DynamoDB operations."""

import asyncio
import random
from typing import Any

import aioboto3
from boto3.dynamodb.types import TypeSerializer
from botocore.exceptions import ClientError

from yuvi_paste.config import settings
from yuvi_paste.exceptions import ServiceUnavailableError
from yuvi_paste.logging.config import get_logger

logger = get_logger(__name__)

_serializer = TypeSerializer()


def get_dynamodb_config() -> dict[str, Any]:
    """
    Build DynamoDB client configuration based on environment.

    For AWS Lambda with IAM roles, returns minimal config (region only).
    For LocalStack or moto, includes endpoint_url and explicit credentials.

    Returns:
        Dictionary of boto3 client parameters
    """
    config: dict[str, Any] = {"region_name": settings.aws_region}

    if settings.dynamodb_endpoint_url:
        config["endpoint_url"] = settings.dynamodb_endpoint_url

    # In Lambda all three values are needed for temporary credentials
    if settings.aws_access_key_id:
        config["aws_access_key_id"] = settings.aws_access_key_id
    if settings.aws_secret_access_key:
        config["aws_secret_access_key"] = settings.aws_secret_access_key
    if settings.aws_session_token and settings.aws_session_token.strip():
        config["aws_session_token"] = settings.aws_session_token

    logger.debug(
        "DynamoDB config built",
        extra={
            "context": {
                "config_keys": sorted(config.keys()),
                "endpoint_url": settings.dynamodb_endpoint_url,
            }
        },
    )
    return config


def serialize(values: dict[str, Any]) -> dict[str, Any]:
    """Convert plain Python values to low-level DynamoDB attribute values."""
    return {name: _serializer.serialize(value) for name, value in values.items()}


class ConditionalWriteError(Exception):
    """
    Raised when a conditional transaction is cancelled.

    Attributes:
        failed_items: Indexes of transaction items whose condition failed
    """

    def __init__(self, failed_items: list[int]) -> None:
        super().__init__(f"Conditional write failed for items {failed_items}")
        self.failed_items = failed_items


class BaseRepository:
    """
    Base repository providing common DynamoDB operations.

    All repository methods are async and use aioboto3 for
    non-blocking database operations.
    """

    def __init__(self, table_name: str) -> None:
        """
        Initialize repository with table name.

        Args:
            table_name: Name of the DynamoDB table
        """
        self.table_name = table_name
        self.session = aioboto3.Session()

    async def put_item(
        self, item: dict[str, Any], condition_expression: str | None = None
    ) -> None:
        """
        Put item into DynamoDB table.

        Args:
            item: Dictionary representing the item to store
            condition_expression: Optional condition for the write

        Raises:
            ConditionalWriteError: If the condition is not met
        """
        async with self.session.resource("dynamodb", **get_dynamodb_config()) as dynamodb:
            table = await dynamodb.Table(self.table_name)
            params: dict[str, Any] = {"Item": item}
            if condition_expression:
                params["ConditionExpression"] = condition_expression
            try:
                await table.put_item(**params)
            except ClientError as e:
                if e.response["Error"]["Code"] == "ConditionalCheckFailedException":
                    raise ConditionalWriteError([0]) from e
                raise

    async def get_item(self, key: dict[str, Any]) -> dict[str, Any] | None:
        """
        Get item from DynamoDB table by key.

        Args:
            key: Dictionary with partition key and optionally sort key

        Returns:
            Item dictionary or None if not found
        """
        async with self.session.resource("dynamodb", **get_dynamodb_config()) as dynamodb:
            table = await dynamodb.Table(self.table_name)
            response = await table.get_item(Key=key, ConsistentRead=True)
            return response.get("Item")

    async def delete_item(self, key: dict[str, Any]) -> None:
        """
        Delete item from DynamoDB table.

        Args:
            key: Dictionary with partition key and optionally sort key
        """
        async with self.session.resource("dynamodb", **get_dynamodb_config()) as dynamodb:
            table = await dynamodb.Table(self.table_name)
            await table.delete_item(Key=key)

    async def update_item(
        self,
        key: dict[str, Any],
        update_expression: str,
        expression_values: dict[str, Any],
        expression_names: dict[str, str] | None = None,
        condition_expression: str | None = None,
    ) -> dict[str, Any]:
        """
        Update item in DynamoDB table.

        Args:
            key: Dictionary with partition key and optionally sort key
            update_expression: DynamoDB update expression
            expression_values: Values for the update expression
            expression_names: Optional attribute name mappings for reserved keywords
            condition_expression: Optional condition for the update

        Returns:
            Updated item attributes

        Raises:
            ConditionalWriteError: If the condition is not met
        """
        async with self.session.resource("dynamodb", **get_dynamodb_config()) as dynamodb:
            table = await dynamodb.Table(self.table_name)
            update_params: dict[str, Any] = {
                "Key": key,
                "UpdateExpression": update_expression,
                "ExpressionAttributeValues": expression_values,
                "ReturnValues": "ALL_NEW",
            }
            if expression_names:
                update_params["ExpressionAttributeNames"] = expression_names
            if condition_expression:
                update_params["ConditionExpression"] = condition_expression

            try:
                response = await table.update_item(**update_params)
            except ClientError as e:
                if e.response["Error"]["Code"] == "ConditionalCheckFailedException":
                    raise ConditionalWriteError([0]) from e
                raise
            return response.get("Attributes", {})

    async def query_all(
        self,
        index_name: str,
        key_condition: str,
        expression_values: dict[str, Any],
        scan_forward: bool = True,
    ) -> list[dict[str, Any]]:
        """
        Query a secondary index, following pagination to the end.

        Args:
            index_name: Name of the GSI to query
            key_condition: Key condition expression
            expression_values: Values for the key condition
            scan_forward: Ascending range-key order when True

        Returns:
            All matching items
        """
        items: list[dict[str, Any]] = []
        async with self.session.resource("dynamodb", **get_dynamodb_config()) as dynamodb:
            table = await dynamodb.Table(self.table_name)
            query_params: dict[str, Any] = {
                "IndexName": index_name,
                "KeyConditionExpression": key_condition,
                "ExpressionAttributeValues": expression_values,
                "ScanIndexForward": scan_forward,
            }
            while True:
                response = await table.query(**query_params)
                items.extend(response.get("Items", []))
                last_key = response.get("LastEvaluatedKey")
                if not last_key:
                    break
                query_params["ExclusiveStartKey"] = last_key
        return items

    async def transact_write(self, transact_items: list[dict[str, Any]]) -> None:
        """
        Apply several writes atomically.

        Each entry is a single-key dict (``Put``, ``Update`` or
        ``ConditionCheck``) using plain Python values; ``Item``, ``Key`` and
        ``ExpressionAttributeValues`` are serialized here.

        A cancellation with no failed condition (a conflicting transaction
        on the same item, or throttling) is retried with jittered backoff.

        Args:
            transact_items: Transaction items in DynamoDB request shape

        Raises:
            ConditionalWriteError: If any item's condition failed
            ServiceUnavailableError: If the transaction kept being cancelled
                without a failed condition
        """
        request_items = []
        for entry in transact_items:
            action, params = next(iter(entry.items()))
            params = dict(params)
            for field in ("Item", "Key", "ExpressionAttributeValues"):
                if field in params:
                    params[field] = serialize(params[field])
            request_items.append({action: params})

        attempts = settings.write_retry_attempts
        async with self.session.client("dynamodb", **get_dynamodb_config()) as client:
            for attempt in range(1, attempts + 1):
                try:
                    await client.transact_write_items(TransactItems=request_items)
                    return
                except ClientError as e:
                    if e.response["Error"]["Code"] != "TransactionCanceledException":
                        raise
                    reasons = e.response.get("CancellationReasons", [])
                    failed = [
                        index
                        for index, reason in enumerate(reasons)
                        if reason.get("Code") == "ConditionalCheckFailed"
                    ]
                    if failed:
                        raise ConditionalWriteError(failed) from e

                    logger.info(
                        "Transaction cancelled without a failed condition",
                        extra={
                            "context": {
                                "attempt": attempt,
                                "reasons": [r.get("Code") for r in reasons],
                            }
                        },
                    )
                    if attempt < attempts:
                        ceiling = settings.write_retry_base_delay_seconds * 2 ** (attempt - 1)
                        await asyncio.sleep(random.uniform(0, ceiling))

        raise ServiceUnavailableError(
            message="Could not complete write due to concurrent updates",
            service="dynamodb",
            retry_after=1,
        )
