"""
Bounded retry helper used by the storage layer.
"""

import logging
import time
from typing import Callable, Tuple, Type, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


def retry_call(
    fn: Callable[[], T],
    attempts: int = 3,
    delay: float = 0.1,
    retry_on: Tuple[Type[BaseException], ...] = (Exception,),
    on_retry: Callable[[BaseException], None] | None = None,
) -> T:
    """
    Calls `fn` up to `attempts` times, sleeping `delay` seconds between tries.

    Only exceptions listed in `retry_on` trigger another attempt; anything else
    propagates immediately. The last exception is re-raised once the attempts
    are exhausted.

    Args:
        fn (Callable[[], T]): Zero-argument callable to run.
        attempts (int): Maximum number of calls (at least 1).
        delay (float): Fixed pause between calls, in seconds.
        retry_on (Tuple[Type[BaseException], ...]): Exception types that are retried.
        on_retry (Callable | None): Invoked with the exception before each new attempt,
            e.g. to roll back a session.

    Returns:
        T: Whatever `fn` returns on its first successful call.
    """
    attempts = max(1, attempts)
    for attempt in range(1, attempts + 1):
        try:
            return fn()
        except retry_on as exc:
            if attempt >= attempts:
                logger.error(f"Giving up after {attempts} attempts: {exc}")
                raise
            logger.warning(f"Attempt {attempt}/{attempts} failed ({exc}); retrying in {delay}s")
            if on_retry is not None:
                on_retry(exc)
            if delay > 0:
                time.sleep(delay)
    raise RuntimeError("unreachable")
