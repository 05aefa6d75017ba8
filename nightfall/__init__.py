"""
nightfall - Async Python client for the Nightfall scanning API.

Usage:
    >>> from nightfall import NightfallClient
    >>>
    >>> async with NightfallClient() as nightfall:
    ...     response = await nightfall.scan_file_path("report.pdf", policy_uuid="...")
    ...     print(response.id)
"""
import logging

from .client import NightfallClient

# Configuration
from .core.api import (
    APIConfig,
    SSLConfig,
    TimeoutConfig,
    RetryConfig,
    AiohttpTransport,
    Transport,
    TransportResponse,
    NightfallAPIError,
)

# Scanning
from .core.scan import ScanTextRequest, ScanTextResponse
from .core.upload import (
    ScanFileRequest,
    ScanFileResponse,
    ScanRun,
    UploadProgress,
    UploadState,
    AsyncFileContentSource,
    BytesContentSource,
    StreamContentSource,
)

# Errors
from .core.exceptions import (
    NightfallException,
    NightfallConfigError,
    NightfallTransportError,
    NightfallCancelledError,
    NightfallTimeoutError,
)
from .core.logging import set_level

__version__ = '0.1.0'


def setup_logging(level=logging.INFO):
    """
    Configure logging for nightfall modules.

    Sets the level on all nightfall loggers and keeps them propagating to the
    root logger.

    Args:
        level: Logging level (default: logging.INFO)
    """
    set_level(level)


__all__ = [
    'NightfallClient',
    'APIConfig',
    'SSLConfig',
    'TimeoutConfig',
    'RetryConfig',
    'AiohttpTransport',
    'Transport',
    'TransportResponse',
    'ScanTextRequest',
    'ScanTextResponse',
    'ScanFileRequest',
    'ScanFileResponse',
    'ScanRun',
    'UploadProgress',
    'UploadState',
    'AsyncFileContentSource',
    'BytesContentSource',
    'StreamContentSource',
    'NightfallException',
    'NightfallAPIError',
    'NightfallConfigError',
    'NightfallTransportError',
    'NightfallCancelledError',
    'NightfallTimeoutError',
    'setup_logging',
]
