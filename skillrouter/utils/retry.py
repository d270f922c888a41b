"""Retry helpers for async network calls."""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Optional, Type

logger = logging.getLogger(__name__)


@dataclass
class RetryConfig:
    """Configuration for retry behavior."""

    max_retries: int = 2
    delay: float = 0.5
    backoff_factor: float = 2.0
    max_delay: float = 10.0
    exceptions: tuple[Type[BaseException], ...] = field(default_factory=lambda: (Exception,))

    def get_delay(self, attempt: int) -> float:
        """Calculate delay after the given failed attempt (0-indexed)."""
        delay = self.delay * (self.backoff_factor**attempt)
        return min(delay, self.max_delay)

    @property
    def total_attempts(self) -> int:
        return self.max_retries + 1


@dataclass
class RetryResult:
    """Outcome of a retried call."""

    success: bool
    value: Any = None
    error: Optional[BaseException] = None
    attempts: int = 0
    errors: list[BaseException] = field(default_factory=list)


async def retry_with_result(
    func: Callable[..., Awaitable[Any]],
    *args,
    config: Optional[RetryConfig] = None,
    **kwargs,
) -> RetryResult:
    """Await ``func`` with retries and report the outcome instead of raising.

    Only exceptions listed in ``config.exceptions`` are retried; anything
    else propagates to the caller immediately.

    Usage:
        result = await retry_with_result(fetch_text, url, config=RetryConfig(max_retries=3))
        if not result.success:
            raise GuidelineFetchError(url, str(result.error), result.attempts)
    """
    if config is None:
        config = RetryConfig()

    errors: list[BaseException] = []

    for attempt in range(config.total_attempts):
        try:
            value = await func(*args, **kwargs)
            return RetryResult(success=True, value=value, attempts=attempt + 1, errors=errors)
        except config.exceptions as e:
            errors.append(e)
            if attempt < config.max_retries:
                wait = config.get_delay(attempt)
                logger.warning(
                    "Attempt %d/%d of %s failed: %s: %s. Waiting %.1fs...",
                    attempt + 1,
                    config.total_attempts,
                    getattr(func, "__name__", repr(func)),
                    type(e).__name__,
                    e,
                    wait,
                )
                await asyncio.sleep(wait)

    return RetryResult(
        success=False,
        error=errors[-1] if errors else None,
        attempts=config.total_attempts,
        errors=errors,
    )
