"""
Handler decorators for correlation ids and invocation logging.
"""
import functools
import uuid
import traceback
from typing import Callable, Any, Dict
from logger_config import get_logger, set_correlation_id

logger = get_logger(__name__)


def lambda_handler(
    func: Callable[[Any, Any], Dict[str, Any]]
) -> Callable[[Any, Any], Dict[str, Any]]:
    """
    Decorator for Lambda handler functions.

    Provides:
    - Request correlation IDs for logging
    - Invocation and completion logging
    - Error logging

    Errors are logged and re-raised so Lambda marks the invocation as
    failed; they are never turned into a response body.

    Args:
        func: The handler function to decorate

    Returns:
        Decorated handler function
    """
    @functools.wraps(func)
    def wrapper(event: Any, context: Any) -> Dict[str, Any]:
        correlation_id = str(uuid.uuid4())
        set_correlation_id(correlation_id)

        logger.info(
            f"Handler {func.__name__} invoked",
            extra={
                "correlation_id": correlation_id,
                "handler": func.__name__,
                "request_id": getattr(context, "aws_request_id", None) if context else None
            }
        )

        try:
            result = func(event, context)
        except ValueError as e:
            logger.warning(
                f"Handler {func.__name__} validation error: {str(e)}",
                extra={"correlation_id": correlation_id}
            )
            raise
        except Exception as e:
            logger.error(
                f"Handler {func.__name__} failed: {str(e)}",
                extra={
                    "correlation_id": correlation_id,
                    "traceback": traceback.format_exc()
                },
                exc_info=True
            )
            raise
        finally:
            set_correlation_id(None)

        logger.info(
            f"Handler {func.__name__} completed successfully",
            extra={"correlation_id": correlation_id}
        )
        return result

    return wrapper
