"""
Custom exception classes for the AWS service helpers.

Every failure a service surfaces to its caller is an ``AwsError``; the
subclass tells which kind of failure it was.
"""
from typing import Optional


class AwsError(Exception):
    """Base exception for all AWS service helper errors."""

    def __init__(self, message: str):
        """
        Initialize AWS error.

        Args:
            message: Error message
        """
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class RemoteCallError(AwsError):
    """Exception raised when an SDK call fails (network or service side)."""

    def __init__(
        self,
        message: str,
        service: Optional[str] = None,
        operation: Optional[str] = None
    ):
        """
        Initialize remote call error.

        Args:
            message: Error message
            service: AWS service name if available
            operation: SDK operation name if available
        """
        super().__init__(message)
        self.service = service
        self.operation = operation


class DeserializationError(AwsError):
    """Exception raised when returned items cannot be converted to records."""

    def __init__(self, message: str, table_name: Optional[str] = None):
        """
        Initialize deserialization error.

        Args:
            message: Error message
            table_name: DynamoDB table name if available
        """
        super().__init__(message)
        self.table_name = table_name


class MissingDataError(AwsError):
    """Exception raised when an expected response field is absent."""

    def __init__(self, message: str, resource: Optional[str] = None):
        """
        Initialize missing data error.

        Args:
            message: Error message
            resource: Identifier of the resource that was described
        """
        super().__init__(message)
        self.resource = resource


class NoTasksFoundError(MissingDataError):
    """Exception raised when describe_tasks returns no task."""


class OverrideExtractionError(MissingDataError):
    """Exception raised when a task carries no container override environment."""


class DecodeError(AwsError):
    """Exception raised when log or payload bytes cannot be decoded."""

    def __init__(self, message: str, encoding: Optional[str] = None):
        """
        Initialize decode error.

        Args:
            message: Error message
            encoding: Encoding that failed ('base64' or 'utf-8')
        """
        super().__init__(message)
        self.encoding = encoding
