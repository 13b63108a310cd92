import asyncio
import inspect
from collections.abc import Sized
from typing import Any, Awaitable, Callable, Optional, TypeVar, Union

from .logging import FolderIndexLogger
from .types import ResolutionTimeoutError

T = TypeVar("T")

Locate = Callable[[], Union[Optional[T], Awaitable[Optional[T]]]]


def is_present(value: Any) -> bool:
    """None, empty strings and empty collections are absent. Anything else is present."""
    if value is None:
        return False
    if isinstance(value, Sized):
        return len(value) > 0
    return True


async def resolve(
    locate: Locate,
    max_attempts: int = 20,
    delay_ms: int = 500,
    logger: Optional[FolderIndexLogger] = None,
    description: Optional[str] = None,
) -> T:
    """
    Poll ``locate`` until it returns a present value.

    The first lookup runs immediately. Every absent result waits ``delay_ms``
    on the event loop before the next lookup. The coroutine can be cancelled
    at any sleep, and composes with ``asyncio.wait_for``.

    Args:
        locate: Zero-argument callable returning the value, None, or an awaitable of either.
        max_attempts: Number of lookups before giving up.
        delay_ms: Fixed delay between two lookups, in milliseconds.
        logger: Optional logger receiving one diagnostic line per attempt.
        description: Human readable name of what is being located.

    Returns:
        The first present value returned by ``locate``.

    Raises:
        ResolutionTimeoutError: After ``max_attempts`` consecutive absent results.
        ValueError: If the attempt budget or delay is invalid.
    """
    if max_attempts < 1:
        raise ValueError(f"max_attempts must be at least 1, got {max_attempts}")
    if delay_ms < 0:
        raise ValueError(f"delay_ms must not be negative, got {delay_ms}")

    attempts = 0
    while True:
        result = locate()
        if inspect.isawaitable(result):
            result = await result
        attempts += 1

        present = is_present(result)
        if logger:
            logger.debug(
                f"Lookup attempt {attempts}/{max_attempts}",
                category="resolver",
                auxiliary={"target": description or "", "present": present},
            )
        if present:
            return result

        if attempts >= max_attempts:
            if logger:
                logger.error(
                    "Gave up waiting for element",
                    category="resolver",
                    auxiliary={"target": description or "", "attempts": attempts},
                )
            raise ResolutionTimeoutError(attempts, description)

        await asyncio.sleep(delay_ms / 1000)
