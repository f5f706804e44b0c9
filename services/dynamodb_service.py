"""
DynamoDB service for table operations.
"""
from typing import Any, Callable, Dict, List, Optional, TYPE_CHECKING, TypeVar

from boto3.dynamodb.types import TypeDeserializer

from config import AwsConfig, DEFAULT_RETRY_COUNT, get_config
from logger_config import get_logger
from utils.decorators import wrap_remote_errors
from utils.exceptions import DeserializationError

if TYPE_CHECKING:
    from mypy_boto3_dynamodb import DynamoDBClient
else:
    DynamoDBClient = Any

logger = get_logger(__name__)

T = TypeVar("T")

_deserializer = TypeDeserializer()


def from_items(
    items: List[Dict[str, Any]],
    record_type: Callable[..., T] = dict
) -> List[T]:
    """
    Convert raw DynamoDB items into records.

    Each item is first turned into plain Python values, then passed as
    keyword arguments to ``record_type`` (a dataclass, a NamedTuple, ...).

    Raises:
        Exception: Whatever ``record_type`` raises for an item it cannot build
    """
    records = []
    for item in items:
        values = {key: _deserializer.deserialize(value) for key, value in item.items()}
        records.append(record_type(**values))
    return records


class DynamoDBService:
    """Service for DynamoDB operations."""

    def __init__(
        self,
        config: Optional[AwsConfig] = None,
        max_attempts: int = DEFAULT_RETRY_COUNT
    ) -> None:
        """
        Initialize DynamoDB service.

        Args:
            config: Shared AWS configuration (defaults to the global one)
            max_attempts: Total attempts per request, first call included
        """
        self.config = config or get_config()
        self.max_attempts = max_attempts
        self._client: Optional[DynamoDBClient] = None

    @property
    def client(self) -> DynamoDBClient:
        """Lazy initialization of DynamoDB client."""
        if self._client is None:
            self._client = self.config.create_client('dynamodb', self.max_attempts)
        return self._client

    @wrap_remote_errors(
        service='dynamodb',
        operation='Scan',
        message='Unable to get items error during scan operation'
    )
    def scan(
        self,
        table_name: str,
        record_type: Callable[..., T] = dict,
        page_size: Optional[int] = None
    ) -> List[T]:
        """
        Scan a whole table and deserialize every item.

        The first request is always sent; the scan then follows
        LastEvaluatedKey until a page comes back without one.

        Args:
            table_name: Name of the DynamoDB table
            record_type: Callable building one record from an item's attributes
            page_size: Optional Limit for each scan request

        Returns:
            Records of all pages, in page order then item order

        Raises:
            RemoteCallError: If a scan request fails
            DeserializationError: If an item cannot be converted to record_type
        """
        records: List[T] = []
        token: Optional[Dict[str, Any]] = None
        pages = 0

        while pages == 0 or token is not None:
            request: Dict[str, Any] = {'TableName': table_name}
            if token is not None:
                request['ExclusiveStartKey'] = token
            if page_size is not None:
                request['Limit'] = page_size

            response = self.client.scan(**request)
            pages += 1
            token = response.get('LastEvaluatedKey')

            items = response.get('Items')
            if items:
                try:
                    records.extend(from_items(items, record_type))
                except Exception as e:
                    raise DeserializationError(
                        f'Unable to parse items, error during serialization operation: {e}',
                        table_name=table_name
                    ) from e

        logger.debug(f'Scanned {len(records)} items from table {table_name} in {pages} pages')
        return records
