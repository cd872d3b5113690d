"""
Handler decorators for logging and response formatting.
"""
import functools
import uuid
from typing import Callable, Any, Dict
from logger_config import get_logger, reset_correlation_id, set_correlation_id

logger = get_logger(__name__)


def block_handler(
    func: Callable[[Any, Any], Any]
) -> Callable[[Any, Any], Dict[str, Any]]:
    """
    Decorator for host-facing handler functions.

    Provides:
    - A correlation id stamped on every log record of the invocation
    - Empty results replaced by an empty dict
    - Error logging; the exception itself reaches the host unchanged

    Args:
        func: The handler function to decorate

    Returns:
        Decorated handler function
    """
    @functools.wraps(func)
    def wrapper(event: Any, context: Any) -> Dict[str, Any]:
        token = set_correlation_id(str(uuid.uuid4()))
        try:
            logger.info(
                f"Handler {func.__name__} invoked",
                extra={
                    "handler": func.__name__,
                    "request_id": getattr(context, "aws_request_id", None) if context else None
                }
            )

            try:
                result = func(event, context)
            except Exception as e:
                logger.error(
                    f"Handler {func.__name__} failed: {type(e).__name__}: {str(e)}",
                    exc_info=True
                )
                raise

            if not result:
                result = {}

            logger.info(f"Handler {func.__name__} completed successfully")
            return result
        finally:
            reset_correlation_id(token)

    return wrapper
