"""
DynamoDB utility functions for data access.
"""
import os
from typing import Dict, List, Optional, Any
import boto3
from boto3.dynamodb.conditions import Key
from boto3.dynamodb.types import TypeSerializer

# Singleton instance
_dynamo_instance = None

def get_dynamo() -> 'DynamoDBClient':
    """
    Get or create singleton DynamoDB client instance.

    Example:
        dynamo = get_dynamo()
        item = dynamo.get_item({"PK": "USER#123", "SK": "SETTINGS#cycleConfig"})

    Returns:
        DynamoDBClient: Singleton instance of DynamoDB client

    Raises:
        EnvironmentError: If LUNARIUM_TABLE_NAME environment variable is not set
    """
    global _dynamo_instance
    if _dynamo_instance is None:
        try:
            table_name = os.environ['LUNARIUM_TABLE_NAME']
        except KeyError:
            raise EnvironmentError(
                "LUNARIUM_TABLE_NAME environment variable not set. "
                "This variable must be set to the DynamoDB table name."
            )
        _dynamo_instance = DynamoDBClient(table_name)
    return _dynamo_instance

class DynamoDBClient:
    """Client for interacting with DynamoDB table."""

    def __init__(self, table_name: str):
        self.dynamodb = boto3.resource('dynamodb')
        self.table = self.dynamodb.Table(table_name)

    def put_items_atomically(self, items: List[Dict[str, Any]]) -> Dict[str, Any]:
        """
        Put several items in one transaction, all of them or none.

        Args:
            items: Items to write, each containing its full key

        Returns:
            Response from DynamoDB
        """
        serializer = TypeSerializer()
        return self.dynamodb.meta.client.transact_write_items(
            TransactItems=[
                {
                    'Put': {
                        'TableName': self.table.name,
                        'Item': {k: serializer.serialize(v) for k, v in item.items()}
                    }
                }
                for item in items
            ]
        )

    def get_item(self, key: Dict[str, str]) -> Optional[Dict[str, Any]]:
        """
        Get a single item from the table.

        Args:
            key: Dictionary containing partition key and sort key

        Returns:
            Item if found, None otherwise
        """
        response = self.table.get_item(Key=key)
        return response.get('Item')

    def query_items(
        self,
        partition_key: str,
        partition_value: str,
        sort_key_prefix: Optional[str] = None
    ) -> List[Dict[str, Any]]:
        """
        Query items of one partition, optionally restricted to a sort key prefix.

        Args:
            partition_key: Name of partition key
            partition_value: Value of partition key
            sort_key_prefix: Optional prefix the sort key must start with

        Returns:
            List of matching items
        """
        key_condition = Key(partition_key).eq(partition_value)
        if sort_key_prefix:
            key_condition = key_condition & Key('SK').begins_with(sort_key_prefix)

        response = self.table.query(KeyConditionExpression=key_condition)
        return response.get('Items', [])

    def delete_item(self, key: Dict[str, str]) -> Dict[str, Any]:
        """
        Delete an item from the table.

        Args:
            key: Dictionary containing partition key and sort key

        Returns:
            Response from DynamoDB
        """
        return self.table.delete_item(Key=key)

def create_pk(user_id: str) -> str:
    """Create partition key from user ID."""
    return f"USER#{user_id}"

def create_settings_sk(name: str) -> str:
    """
    Create sort key for a settings document.

    Args:
        name: Settings document name, ``cycleConfig`` or ``cycleHistory``

    Returns:
        Sort key in format "SETTINGS#{name}"
    """
    return f"SETTINGS#{name}"
