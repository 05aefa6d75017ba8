"""Retry strategies using Strategy Pattern."""
from .retry_strategy import RetryStrategy, FixedBackoffStrategy

__all__ = [
    'RetryStrategy',
    'FixedBackoffStrategy',
]
