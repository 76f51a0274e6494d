import asyncio
import functools
import logging
from typing import Any, Callable, Coroutine, TypeVar

from playwright.async_api import Error as PlaywrightError

from semijobs.core.errors import FetchError, ScraperError

logger = logging.getLogger(__name__)

T = TypeVar("T")

RETRYABLE_ERRORS = (PlaywrightError, asyncio.TimeoutError, FetchError)

# Anything a fetch can end with once retries are exhausted
FETCH_FAILURES = (PlaywrightError, asyncio.TimeoutError, ScraperError)


async def polite_delay(seconds: float) -> None:
    """
    Fixed pause between sequential requests to the same site.
    """
    if seconds > 0:
        await asyncio.sleep(seconds)


def with_retry(max_retries: int = 3, delay: float = 6.0):
    """
    Decorator for async functions to retry on fetch failures with a fixed
    delay between attempts. Re-raises the last error once attempts run out.
    """

    def decorator(
        func: Callable[..., Coroutine[Any, Any, T]],
    ) -> Callable[..., Coroutine[Any, Any, T]]:
        @functools.wraps(func)
        async def wrapper(*args, **kwargs) -> T:
            attempt = 1
            while True:
                try:
                    return await func(*args, **kwargs)
                except RETRYABLE_ERRORS as e:
                    if attempt >= max_retries:
                        logger.error(
                            f"Failed after {max_retries} attempts in {func.__name__}: {e}"
                        )
                        raise

                    logger.warning(
                        f"Attempt {attempt}/{max_retries} failed for {func.__name__}. "
                        f"Retrying in {delay:.1f}s. Error: {e}"
                    )
                    await polite_delay(delay)
                    attempt += 1

        return wrapper

    return decorator
