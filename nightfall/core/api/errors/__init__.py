"""Nightfall API errors and exceptions."""
from .api_errors import NightfallAPIError, RATE_LIMIT_STATUS

__all__ = [
    'NightfallAPIError',
    'RATE_LIMIT_STATUS',
]
