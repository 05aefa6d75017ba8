"""
API configuration module.

Provides comprehensive configuration for the Nightfall API client.
Open for extension through custom configurations.
"""
from dataclasses import dataclass, field
from importlib import metadata
from typing import Optional, Dict, Any
import os
import ssl

import aiohttp

from ..exceptions import NightfallConfigError

API_URL = 'https://api.nightfall.ai/'
API_KEY_ENV = 'NIGHTFALL_API_KEY'

DEFAULT_FILE_UPLOAD_CONCURRENCY = 1
MAX_FILE_UPLOAD_CONCURRENCY = 100
DEFAULT_RETRY_COUNT = 5

DISTRIBUTION_NAME = 'nightfall-async'
USER_AGENT_PREFIX = 'nightfall-python-sdk'


def _load_user_agent() -> str:
    """Build the client identifier from the installed distribution version."""
    try:
        version = metadata.version(DISTRIBUTION_NAME)
    except metadata.PackageNotFoundError:
        return USER_AGENT_PREFIX
    return f"{USER_AGENT_PREFIX}/{version}"


# Computed once at import time and shared by every client.
USER_AGENT = _load_user_agent()


@dataclass
class SSLConfig:
    """
    SSL/TLS configuration.

    Allows customization of SSL behavior for security requirements.
    """
    verify: bool = True
    ca_file: Optional[str] = None
    check_hostname: bool = True

    def create_ssl_context(self):
        """Create SSL context from configuration (False disables verification)."""
        if not self.verify:
            return False

        context = ssl.create_default_context()

        if self.ca_file:
            context.load_verify_locations(self.ca_file)

        context.check_hostname = self.check_hostname

        return context


@dataclass
class TimeoutConfig:
    """
    Per-request timeout configuration.

    A ``None`` value means no limit for that phase. Chunk uploads can be slow,
    so the total limit is off by default; bound a whole scan with
    ``ScanFileRequest.timeout`` instead.
    """
    total: Optional[float] = None
    connect: Optional[float] = 30.0
    sock_read: Optional[float] = None

    def to_aiohttp_timeout(self) -> aiohttp.ClientTimeout:
        """Convert to aiohttp ClientTimeout."""
        return aiohttp.ClientTimeout(
            total=self.total,
            connect=self.connect,
            sock_read=self.sock_read
        )


@dataclass
class RetryConfig:
    """
    Retry configuration.

    Only rate-limited (429) responses are retried; every other failure is
    terminal. ``max_retries`` retries means ``max_retries + 1`` attempts.
    """
    max_retries: int = DEFAULT_RETRY_COUNT
    backoff_delay: float = 1.0

    @property
    def max_attempts(self) -> int:
        return self.max_retries + 1


@dataclass
class APIConfig:
    """
    Complete API configuration.

    Centralizes all configuration options for the Nightfall API client.
    """
    api_key: Optional[str] = None
    base_url: str = API_URL

    user_agent: str = USER_AGENT

    # Number of chunk uploads allowed in flight at once
    file_upload_concurrency: int = DEFAULT_FILE_UPLOAD_CONCURRENCY

    # Sub-configurations
    ssl: SSLConfig = field(default_factory=SSLConfig)
    timeout: TimeoutConfig = field(default_factory=TimeoutConfig)
    retry: RetryConfig = field(default_factory=RetryConfig)

    # Additional headers
    extra_headers: Dict[str, str] = field(default_factory=dict)

    # Connection pool settings
    limit_per_host: int = 0
    limit: int = 100

    def __post_init__(self):
        if self.base_url and not self.base_url.endswith('/'):
            self.base_url += '/'

    @classmethod
    def default(cls) -> 'APIConfig':
        """Create default configuration."""
        return cls()

    @classmethod
    def from_env(cls, **kwargs) -> 'APIConfig':
        """Create configuration reading the API key from NIGHTFALL_API_KEY."""
        kwargs.setdefault('api_key', os.environ.get(API_KEY_ENV))
        return cls(**kwargs)

    @classmethod
    def insecure(cls, **kwargs) -> 'APIConfig':
        """Create configuration with SSL verification disabled."""
        return cls(
            ssl=SSLConfig(verify=False, check_hostname=False),
            **kwargs
        )

    def validate(self) -> 'APIConfig':
        """
        Check the configuration before any network activity.

        Raises:
            NightfallConfigError: If the key is missing or a limit is out of range
        """
        if not self.api_key:
            raise NightfallConfigError("missing api key")

        if not (1 <= self.file_upload_concurrency <= MAX_FILE_UPLOAD_CONCURRENCY):
            raise NightfallConfigError(
                f"file_upload_concurrency must be in range [1,{MAX_FILE_UPLOAD_CONCURRENCY}]"
            )

        if self.retry.max_retries < 0:
            raise NightfallConfigError("max_retries must not be negative")

        if self.retry.backoff_delay < 0:
            raise NightfallConfigError("backoff_delay must not be negative")

        return self

    def url(self, path: str) -> str:
        """Join an API path onto the base URL."""
        return f"{self.base_url}{path.lstrip('/')}"

    def get_default_headers(self) -> Dict[str, str]:
        """Headers carried by every request."""
        return {
            'Authorization': f"Bearer {self.api_key}",
            'User-Agent': self.user_agent,
            **self.extra_headers
        }

    def get_connector_kwargs(self) -> Dict[str, Any]:
        """Get kwargs for aiohttp TCPConnector."""
        return {
            'limit': self.limit,
            'limit_per_host': self.limit_per_host,
            'ssl': self.ssl.create_ssl_context(),
        }

    def get_session_kwargs(self) -> Dict[str, Any]:
        """Get kwargs for aiohttp ClientSession."""
        return {
            'timeout': self.timeout.to_aiohttp_timeout(),
        }
