"""Retry decorator for calls to the Gemini API."""
import time
import functools
import socket

from .logger import get_logger
from .exceptions import RetryableError

logger = get_logger()

# Define exceptions that are safe to retry
RETRYABLE_ERRORS = (
    ConnectionError,
    TimeoutError,
    socket.timeout,
    RetryableError,
)


def retry_with_backoff(max_retries=3, initial_delay=1, backoff_factor=2, retryable_exceptions=RETRYABLE_ERRORS):
    """Decorator for exponential backoff retries."""
    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            last_exception = None
            
            for attempt in range(max_retries + 1):
                try:
                    return func(*args, **kwargs)
                except retryable_exceptions as e:
                    last_exception = e
                    
                    if attempt == max_retries:
                        break
                    
                    wait_time = initial_delay * (backoff_factor ** attempt)
                    logger.warning(
                        f"Transient failure in {func.__name__} (Attempt {attempt+1}): {e}. "
                        f"Retrying in {wait_time}s..."
                    )
                    time.sleep(wait_time)
            
            logger.error(f"Permanently failed {func.__name__} after {max_retries + 1} attempts.")
            raise last_exception
        return wrapper
    return decorator
