"""
Service decorators for SDK error wrapping and logging.
"""
import functools
from typing import Any, Callable, TypeVar

from botocore.exceptions import BotoCoreError, ClientError

from logger_config import get_logger
from utils.exceptions import RemoteCallError

logger = get_logger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


def wrap_remote_errors(
    service: str,
    operation: str,
    message: str,
    log_errors: bool = False
) -> Callable[[F], F]:
    """
    Decorator converting botocore failures into RemoteCallError.

    Any other exception (including other AwsError subclasses raised by the
    decorated function) passes through untouched.

    Args:
        service: AWS service name, recorded on the error
        operation: SDK operation name, recorded on the error
        message: Message prefix; the SDK error text is appended
        log_errors: Emit the failure to the logger before raising

    Returns:
        Decorator
    """
    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return func(*args, **kwargs)
            except (ClientError, BotoCoreError) as e:
                error_message = f"{message}: {e}"
                if log_errors:
                    logger.error(
                        error_message,
                        extra={
                            "service": service,
                            "operation": operation,
                            "error": str(e)
                        }
                    )
                raise RemoteCallError(
                    error_message,
                    service=service,
                    operation=operation
                ) from e

        return wrapper  # type: ignore[return-value]

    return decorator
