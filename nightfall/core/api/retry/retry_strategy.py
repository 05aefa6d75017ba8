"""Retry strategies using Strategy Pattern."""
import asyncio
from abc import ABC, abstractmethod

from ..outcome import RequestOutcome


class RetryStrategy(ABC):
    """Abstract retry strategy."""

    @abstractmethod
    def should_retry(self, outcome: RequestOutcome, attempt: int, max_attempts: int) -> bool:
        """Determines if request should be retried after ``attempt`` (1-based)."""
        pass

    @abstractmethod
    async def wait_async(self, attempt: int):
        """Waits before retry."""
        pass


class FixedBackoffStrategy(RetryStrategy):
    """Retries rate-limited requests after a constant delay."""

    def __init__(self, delay: float = 1.0):
        self.delay = delay

    def should_retry(self, outcome: RequestOutcome, attempt: int, max_attempts: int) -> bool:
        """Retries on RATE_LIMITED while attempts remain."""
        return outcome is RequestOutcome.RATE_LIMITED and attempt < max_attempts

    async def wait_async(self, attempt: int):
        await asyncio.sleep(self.delay)
