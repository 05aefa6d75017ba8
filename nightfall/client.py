"""
NightfallClient - High-level async client for the Nightfall API.

Example:
    >>> async with NightfallClient() as nightfall:
    ...     response = await nightfall.scan_file_path(
    ...         "report.pdf",
    ...         policy_uuid="c3a7a1f4-..."
    ...     )
    ...     print(response.id, response.message)
"""
from dataclasses import replace
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Union

from .core.api import (
    AiohttpTransport,
    APIConfig,
    RequestBuilder,
    RequestHandler,
    RetryConfig,
    SSLConfig,
    TimeoutConfig,
    Transport,
)
from .core.api.config import (
    API_URL,
    DEFAULT_FILE_UPLOAD_CONCURRENCY,
    DEFAULT_RETRY_COUNT,
)
from .core.logging import get_logger
from .core.scan import ScanTextRequest, ScanTextResponse, TextScanService
from .core.upload import (
    AsyncFileContentSource,
    ChunkUploader,
    FileValidator,
    ScanFileFacade,
    ScanFileRequest,
    ScanFileResponse,
    ScanRun,
    UploadCoordinator,
    UploadProgress,
)


class NightfallClient:
    """
    High-level async client for Nightfall.

    The configuration is validated on construction, so a missing API key or an
    out-of-range concurrency fails before any request is made.

    With custom configuration:
        >>> config = NightfallClient.create_config(api_key="...", file_upload_concurrency=4)
        >>> async with NightfallClient(config=config) as nightfall:
        ...     await nightfall.scan_text(ScanTextRequest(payload=["4242 4242 4242 4242"]))
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        *,
        config: Optional[APIConfig] = None,
        transport: Optional[Transport] = None
    ):
        """
        Initialize Nightfall client.

        Args:
            api_key: API key; overrides ``config.api_key`` without changing ``config``.
                Without a config the key comes from NIGHTFALL_API_KEY.
            config: Optional API configuration
            transport: Optional transport (an aiohttp one is created otherwise)

        Raises:
            NightfallConfigError: If the configuration is invalid
        """
        config = config or APIConfig.from_env()
        if api_key:
            config = replace(config, api_key=api_key)
        self._config = config
        self._config.validate()

        self._logger = get_logger('nightfall.client')
        self._owns_transport = transport is None
        self._transport = transport or AiohttpTransport(self._config)

        self._builder = RequestBuilder(self._config)
        self._handler = RequestHandler(self._transport, self._config.retry)
        self._text_service = TextScanService(self._handler, self._builder)

    # =========================================================================
    # Configuration helpers
    # =========================================================================

    @staticmethod
    def create_config(
        api_key: Optional[str] = None,
        base_url: str = API_URL,
        file_upload_concurrency: int = DEFAULT_FILE_UPLOAD_CONCURRENCY,
        max_retries: int = DEFAULT_RETRY_COUNT,
        request_timeout: Optional[float] = None,
        verify_ssl: bool = True,
        user_agent: Optional[str] = None
    ) -> APIConfig:
        """
        Create API configuration with common options.

        Args:
            api_key: API key (NIGHTFALL_API_KEY if omitted)
            base_url: API base URL, for non-production environments
            file_upload_concurrency: Parallel chunk uploads, 1 to 100
            max_retries: Retries on rate limiting
            request_timeout: Per-request total timeout in seconds
            verify_ssl: Whether to verify SSL certificates
            user_agent: Custom user agent string

        Returns:
            APIConfig instance
        """
        config = APIConfig.from_env(
            base_url=base_url,
            file_upload_concurrency=file_upload_concurrency,
            retry=RetryConfig(max_retries=max_retries),
            timeout=TimeoutConfig(total=request_timeout),
            ssl=SSLConfig(verify=verify_ssl, check_hostname=verify_ssl)
        )
        if api_key:
            config.api_key = api_key
        if user_agent:
            config.user_agent = user_agent
        return config

    @property
    def config(self) -> APIConfig:
        """Get current configuration."""
        return self._config

    # =========================================================================
    # Lifecycle
    # =========================================================================

    async def __aenter__(self) -> 'NightfallClient':
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def close(self) -> None:
        """Close the transport if this client created it."""
        if self._owns_transport:
            await self._transport.close()

    # =========================================================================
    # Scanning
    # =========================================================================

    async def scan_text(self, request: ScanTextRequest) -> ScanTextResponse:
        """
        Scan inline plaintext.

        Each index of ``findings`` in the response matches the same index of
        the request payload.
        """
        return await self._text_service.scan_text(request)

    async def scan_file(
        self,
        request: ScanFileRequest,
        progress_callback: Optional[Callable[[UploadProgress], None]] = None,
        run: Optional[ScanRun] = None
    ) -> ScanFileResponse:
        """
        Upload content in chunks and trigger an asynchronous scan.

        Equivalent to initiating an upload session, uploading every chunk,
        completing the upload and requesting a scan. Results are delivered
        by the service to the alert destinations of the policy.

        The request content is consumed but not closed.
        """
        facade = self._create_facade(progress_callback)
        return await facade.scan_file(request, run=run)

    async def scan_file_path(
        self,
        file_path: Union[str, Path],
        *,
        policy_uuid: Optional[str] = None,
        policy: Optional[Dict[str, Any]] = None,
        request_metadata: str = '',
        timeout: Optional[float] = None,
        progress_callback: Optional[Callable[[UploadProgress], None]] = None
    ) -> ScanFileResponse:
        """
        Scan a file from disk.

        Raises:
            FileNotFoundError: If file doesn't exist
            ValueError: If path is not a regular file
        """
        path, file_size = FileValidator().validate(file_path)
        file_size_mb = file_size / (1024 * 1024)
        self._logger.info(f"Scanning file: {path.name} ({file_size_mb:.2f} MB)")

        async with AsyncFileContentSource(path) as source:
            return await self.scan_file(
                ScanFileRequest(
                    content=source,
                    content_size_bytes=file_size,
                    policy_uuid=policy_uuid,
                    policy=policy,
                    request_metadata=request_metadata,
                    timeout=timeout
                ),
                progress_callback=progress_callback
            )

    def _create_facade(
        self,
        progress_callback: Optional[Callable[[UploadProgress], None]] = None
    ) -> ScanFileFacade:
        coordinator = UploadCoordinator(
            ChunkUploader(self._handler, self._builder),
            concurrency=self._config.file_upload_concurrency,
            progress_callback=progress_callback
        )
        return ScanFileFacade(self._handler, self._builder, coordinator)
