"""
Configuration module for the shared AWS provider configuration.

This module reads region, endpoint and profile settings from the
environment and provides a type-safe configuration object that every
service client is built from.
"""
import os
from dataclasses import dataclass
from typing import Any, Optional

import boto3
from botocore.config import Config as BotoConfig

# Default retry count used in the clients
DEFAULT_RETRY_COUNT = 5


@dataclass(frozen=True)
class AwsConfig:
    """Type-safe, immutable AWS provider configuration."""

    aws_region: str = "us-east-1"
    endpoint_url: Optional[str] = None
    profile_name: Optional[str] = None

    @classmethod
    def from_env(cls) -> "AwsConfig":
        """
        Create AwsConfig instance from environment variables.

        Nothing is validated here: credentials are resolved by boto3's
        provider chain, so a bad environment surfaces at the first call.
        """
        aws_region = (
            os.environ.get("AWS_REGION")
            or os.environ.get("AWS_DEFAULT_REGION")
            or "us-east-1"
        )
        endpoint_url = os.environ.get("AWS_ENDPOINT_URL") or None
        profile_name = os.environ.get("AWS_PROFILE") or None

        return cls(
            aws_region=aws_region,
            endpoint_url=endpoint_url,
            profile_name=profile_name,
        )

    def session(self) -> boto3.session.Session:
        """Build a boto3 session bound to this configuration."""
        return boto3.session.Session(
            profile_name=self.profile_name,
            region_name=self.aws_region,
        )

    def create_client(self, service_name: str, max_attempts: int = DEFAULT_RETRY_COUNT) -> Any:
        """
        Create a boto3 client for ``service_name``.

        Args:
            service_name: boto3 service name (e.g. 'dynamodb', 'ecs')
            max_attempts: Total attempts per request, first call included

        Returns:
            Low-level boto3 client
        """
        boto_config = BotoConfig(
            retries={"total_max_attempts": max_attempts, "mode": "standard"},
        )
        return self.session().client(
            service_name,
            endpoint_url=self.endpoint_url,
            config=boto_config,
        )


def load_default_configuration() -> AwsConfig:
    """Load the provider configuration from the ambient environment."""
    return AwsConfig.from_env()


# Global config instance - loaded on first use and held for the process lifetime
_config: Optional[AwsConfig] = None


def get_config() -> AwsConfig:
    """
    Get the global configuration instance.

    Returns:
        AwsConfig: The shared configuration object
    """
    global _config
    if _config is None:
        _config = load_default_configuration()
    return _config
