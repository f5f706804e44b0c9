"""
Lambda service for function invocations.
"""
import base64
import binascii
from dataclasses import dataclass
from typing import Any, Dict, Optional, TYPE_CHECKING

from config import AwsConfig, get_config
from logger_config import get_logger
from utils.exceptions import DecodeError

if TYPE_CHECKING:
    from mypy_boto3_lambda import LambdaClient
else:
    LambdaClient = Any

logger = get_logger(__name__)

# Maximum number of attempts for each Lambda request
LAMBDA_MAX_ATTEMPTS = 2


@dataclass(frozen=True)
class LambdaResult:
    """Raw outcome of a synchronous invocation; decoded on access."""

    base64_logs: str
    payload: bytes
    status_code: Optional[int] = None
    function_error: Optional[str] = None

    def get_logs(self) -> str:
        """
        Decode the tail of the execution log.

        Raises:
            DecodeError: If the logs are not valid base64 or not UTF-8 text
        """
        try:
            raw = base64.b64decode(self.base64_logs, validate=True)
        except (binascii.Error, ValueError) as e:
            raise DecodeError(f'Invalid base64 log result: {e}', encoding='base64') from e
        try:
            return raw.decode('utf-8')
        except UnicodeDecodeError as e:
            raise DecodeError(f'Log result is not valid UTF-8: {e}', encoding='utf-8') from e

    def get_payload(self) -> str:
        """
        Decode the response payload.

        Raises:
            DecodeError: If the payload is not UTF-8 text
        """
        try:
            return self.payload.decode('utf-8')
        except UnicodeDecodeError as e:
            raise DecodeError(f'Payload is not valid UTF-8: {e}', encoding='utf-8') from e


class LambdaService:
    """Service for Lambda operations."""

    def __init__(self, config: Optional[AwsConfig] = None) -> None:
        """
        Initialize Lambda service.

        Args:
            config: Shared AWS configuration (defaults to the global one)
        """
        self.config = config or get_config()
        self._client: Optional[LambdaClient] = None

    @property
    def client(self) -> LambdaClient:
        """Lazy initialization of Lambda client."""
        if self._client is None:
            self._client = self.config.create_client('lambda', LAMBDA_MAX_ATTEMPTS)
        return self._client

    def invoke(self, function_name: str, payload: str) -> LambdaResult:
        """
        Invoke a function and wait for its response.

        SDK failures are not wrapped: a botocore exception (or a KeyError
        for a response without payload) propagates to the caller as is.

        Args:
            function_name: Function name, ARN or partial ARN
            payload: JSON document sent as the event

        Returns:
            LambdaResult holding base64 logs and raw payload bytes
        """
        response = self.client.invoke(
            FunctionName=function_name,
            InvocationType='RequestResponse',
            LogType='Tail',
            Payload=payload.encode('utf-8')
        )

        function_error = response.get('FunctionError')
        if function_error:
            logger.warning(f'Function {function_name} returned an error: {function_error}')

        return LambdaResult(
            base64_logs=response.get('LogResult') or '',
            payload=response['Payload'].read(),
            status_code=response.get('StatusCode'),
            function_error=function_error
        )

    def invoke_async(self, function_name: str, payload: str) -> Dict[str, Any]:
        """
        Fire and forget invocation.

        Args:
            function_name: Function name, ARN or partial ARN
            payload: JSON document sent as the event

        Returns:
            Raw InvokeAsync response, left to the caller to interpret
        """
        return self.client.invoke_async(
            FunctionName=function_name,
            InvokeArgs=payload.encode('utf-8')
        )
