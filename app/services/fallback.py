"""
Degraded-mode substitution for external calls.

``attempt`` wraps an awaitable factory with a timeout and a bounded number of
attempts and returns an ``Outcome`` instead of raising, so callers can swap in
a conservative result while keeping the failure reason for the report.
"""

import asyncio
from dataclasses import dataclass
from typing import Awaitable, Callable, Generic, Optional, TypeVar

from app.core.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """Either a primary value or a degraded marker with its reason."""

    value: Optional[T] = None
    degraded: bool = False
    reason: Optional[str] = None

    @classmethod
    def primary(cls, value: T) -> "Outcome[T]":
        return cls(value=value)

    @classmethod
    def fallback(cls, reason: str) -> "Outcome[T]":
        return cls(degraded=True, reason=reason)


async def attempt(
    call: Callable[[], Awaitable[T]],
    *,
    label: str,
    timeout: float,
    attempts: int = 1,
    validate: Optional[Callable[[T], T]] = None,
) -> Outcome[T]:
    """
    Run ``call`` up to ``attempts`` times, each bounded by ``timeout`` seconds.

    ``validate`` may transform the raw value or raise to reject it. Any
    exception, timeout or rejection counts as a failed attempt. Cancellation
    is not intercepted.

    Returns:
        Outcome.primary on the first success, otherwise Outcome.fallback with
        the last failure reason.
    """
    attempts = max(1, attempts)
    reason = "no attempt made"

    for number in range(1, attempts + 1):
        try:
            value = await asyncio.wait_for(call(), timeout=timeout)
            if validate is not None:
                value = validate(value)
            if number > 1:
                logger.info("%s succeeded on attempt %d", label, number)
            return Outcome.primary(value)
        except asyncio.TimeoutError:
            reason = f"{label} timed out after {timeout:g}s"
            logger.warning("%s (attempt %d/%d)", reason, number, attempts)
        except Exception as e:
            reason = f"{label} failed: {type(e).__name__}: {e}"
            logger.warning(
                "%s (attempt %d/%d)", reason, number, attempts, exc_info=True
            )

    logger.warning("Falling back after %d attempt(s): %s", attempts, reason)
    return Outcome.fallback(reason)
