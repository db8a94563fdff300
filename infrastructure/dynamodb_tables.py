"""Script to create DynamoDB tables for LocalStack, moto or AWS."""

import asyncio
from typing import Any, Dict, List, Optional

import aioboto3
from botocore.exceptions import ClientError

THROUGHPUT = {"ReadCapacityUnits": 5, "WriteCapacityUnits": 5}


def _string_attributes(*names: str) -> List[Dict[str, str]]:
    return [{"AttributeName": name, "AttributeType": "S"} for name in names]


def _account_index() -> Dict[str, Any]:
    """GSI listing an account's items in creation order."""
    return {
        "IndexName": "AccountIndex",
        "KeySchema": [
            {"AttributeName": "account_id", "KeyType": "HASH"},
            {"AttributeName": "created_at", "KeyType": "RANGE"},
        ],
        "Projection": {"ProjectionType": "ALL"},
        "ProvisionedThroughput": THROUGHPUT,
    }


async def _create_table(
    dynamodb: Any,
    table_name: str,
    partition_key: str,
    attributes: List[Dict[str, str]],
    indexes: Optional[List[Dict[str, Any]]] = None,
) -> bool:
    """
    Create a table keyed by a single string partition key.

    Returns:
        True if the table was created, False if it already existed
    """
    params: Dict[str, Any] = {
        "TableName": table_name,
        "KeySchema": [{"AttributeName": partition_key, "KeyType": "HASH"}],
        "AttributeDefinitions": attributes,
        "BillingMode": "PROVISIONED",
        "ProvisionedThroughput": THROUGHPUT,
    }
    if indexes:
        params["GlobalSecondaryIndexes"] = indexes

    try:
        table = await dynamodb.create_table(**params)
        await table.wait_until_exists()
    except ClientError as e:
        if e.response["Error"]["Code"] == "ResourceInUseException":
            print(f"→ Table already exists: {table_name}")
            return False
        raise

    print(f"✓ Created table: {table_name}")
    return True


async def create_accounts_table(dynamodb: Any, table_name: str) -> bool:
    """
    Create Accounts table.

    Holds account items and ``EMAIL#<address>`` claim items side by side,
    both keyed by ``account_id``.
    """
    return await _create_table(
        dynamodb, table_name, "account_id", _string_attributes("account_id")
    )


async def create_sessions_table(dynamodb: Any, table_name: str) -> bool:
    """Create Sessions table with TTL expiry on the ``ttl`` attribute."""
    created = await _create_table(
        dynamodb, table_name, "session_id", _string_attributes("session_id")
    )
    if created:
        await dynamodb.meta.client.update_time_to_live(
            TableName=table_name,
            TimeToLiveSpecification={"Enabled": True, "AttributeName": "ttl"},
        )
    return created


async def create_api_keys_table(dynamodb: Any, table_name: str) -> bool:
    """Create API Keys table indexed by owner and by token digest."""
    token_hash_index = {
        "IndexName": "TokenHashIndex",
        "KeySchema": [{"AttributeName": "token_hash", "KeyType": "HASH"}],
        "Projection": {"ProjectionType": "ALL"},
        "ProvisionedThroughput": THROUGHPUT,
    }
    return await _create_table(
        dynamodb,
        table_name,
        "key_id",
        _string_attributes("key_id", "account_id", "created_at", "token_hash"),
        indexes=[_account_index(), token_hash_index],
    )


async def create_pastes_table(dynamodb: Any, table_name: str) -> bool:
    """Create Pastes table indexed by owner."""
    return await _create_table(
        dynamodb,
        table_name,
        "paste_id",
        _string_attributes("paste_id", "account_id", "created_at"),
        indexes=[_account_index()],
    )


async def create_all_tables(dynamodb: Any, settings: Any) -> None:
    """
    Create every table the application uses.

    Args:
        dynamodb: aioboto3 DynamoDB resource
        settings: Application settings holding the table names
    """
    await create_accounts_table(dynamodb, settings.dynamodb_table_accounts)
    await create_sessions_table(dynamodb, settings.dynamodb_table_sessions)
    await create_api_keys_table(dynamodb, settings.dynamodb_table_api_keys)
    await create_pastes_table(dynamodb, settings.dynamodb_table_pastes)


async def main() -> None:
    """Create all required DynamoDB tables."""
    from yuvi_paste.config import settings
    from yuvi_paste.repositories.base import get_dynamodb_config

    print("Creating DynamoDB tables...")
    print(f"Region: {settings.aws_region}")
    print(f"Endpoint: {settings.dynamodb_endpoint_url or 'AWS'}")
    print()

    session = aioboto3.Session()
    async with session.resource("dynamodb", **get_dynamodb_config()) as dynamodb:
        await create_all_tables(dynamodb, settings)

    print()
    print("✓ All tables ready")


if __name__ == "__main__":
    asyncio.run(main())
