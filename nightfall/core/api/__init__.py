"""Nightfall API layer: configuration, transport and resilient request execution."""
from .config import (
    APIConfig,
    SSLConfig,
    TimeoutConfig,
    RetryConfig,
    API_URL,
    USER_AGENT,
)
from .errors import NightfallAPIError
from .outcome import RequestOutcome
from .transport import Transport, TransportResponse, AiohttpTransport
from .request import RequestHandler, RequestBuilder, RequestSpec, ResponseHandler
from .retry import RetryStrategy, FixedBackoffStrategy

__all__ = [
    # Configuration
    'APIConfig',
    'SSLConfig',
    'TimeoutConfig',
    'RetryConfig',
    'API_URL',
    'USER_AGENT',

    # Transport
    'Transport',
    'TransportResponse',
    'AiohttpTransport',

    # Requests
    'RequestHandler',
    'RequestBuilder',
    'RequestSpec',
    'ResponseHandler',
    'RequestOutcome',

    # Retry
    'RetryStrategy',
    'FixedBackoffStrategy',

    # Errors
    'NightfallAPIError',
]
