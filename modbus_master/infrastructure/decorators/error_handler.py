"""Error handling decorator for transport I/O."""

import logging
from functools import wraps
from typing import Callable, Optional

from ...domain.exceptions import TransportError, TransportTimeoutError


def handle_transport_errors(
    operation_name: str,
    logger: Optional[logging.Logger] = None,
):
    """Decorator for standardized transport error logging.

    Errors are logged and re-raised unchanged; retry policy belongs to
    the caller.

    Args:
        operation_name: Human-readable operation name for logging
        logger: Logger to use (defaults to function's module logger)

    Example:
        @handle_transport_errors("TCP read")
        def read(self, size: int) -> bytes:
            return self._sock.recv(size)
    """

    def decorator(func: Callable):
        @wraps(func)
        def wrapper(*args, **kwargs):
            log = logger or logging.getLogger(func.__module__)
            try:
                return func(*args, **kwargs)
            except TransportTimeoutError as err:
                log.warning("%s timed out: %s", operation_name, err)
                raise
            except TransportError as err:
                # Expected I/O failure - log without stack trace
                log.error("%s transport error: %s", operation_name, err)
                raise
            except Exception as err:
                log.error(
                    "%s unexpected error: %s",
                    operation_name,
                    err,
                    exc_info=True,
                )
                raise

        return wrapper

    return decorator
