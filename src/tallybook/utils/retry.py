"""Retry with exponential backoff for Google API calls."""

import socket
import ssl
import time
from typing import Callable, TypeVar

from googleapiclient.errors import HttpError

from tallybook.logging_setup import get_logger

logger = get_logger("tallybook.utils.retry")

T = TypeVar("T")

# Exceptions that are safe to retry
RETRYABLE_ERRORS = (
    ConnectionError,
    TimeoutError,
    socket.timeout,
    ssl.SSLError,
    HttpError,
)


def is_retryable(error: BaseException) -> bool:
    """Whether an error is transient. 4xx HttpErrors other than 429 are not."""
    if isinstance(error, HttpError):
        status = int(error.resp.status)
        return status >= 500 or status == 429
    return isinstance(error, RETRYABLE_ERRORS)


def call_with_retry(
    func: Callable[[], T],
    *,
    max_retries: int = 3,
    initial_delay: float = 1.0,
    backoff_factor: float = 2.0,
    sleep: Callable[[float], None] = time.sleep,
) -> T:
    """Call ``func`` and retry transient failures with exponential backoff.

    The last exception is re-raised once retries are exhausted; non-retryable
    exceptions are raised immediately.
    """
    name = getattr(func, "__name__", repr(func))
    attempt = 0
    while True:
        try:
            return func()
        except RETRYABLE_ERRORS as e:
            if not is_retryable(e):
                raise
            if attempt >= max_retries:
                logger.error("Permanently failed %s after %d attempts", name, attempt + 1)
                raise

            wait_time = initial_delay * (backoff_factor ** attempt)
            logger.warning(
                "Transient error in %s (attempt %d): %s. Retrying in %ss",
                name,
                attempt + 1,
                e,
                wait_time,
            )
            sleep(wait_time)
            attempt += 1
