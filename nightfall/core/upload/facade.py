"""
File scan facade.

Provides a simplified interface for scanning files: one call drives the
whole initiate, upload, finalize and scan sequence.
"""
import asyncio
from typing import Callable, Optional

from .coordinator import UploadCoordinator
from .models import (
    ScanFileRequest,
    ScanFileResponse,
    ScanRun,
    UploadProgress,
    UploadSession,
    UploadState,
)
from .services import as_content_source
from ..api.request import RequestBuilder, RequestHandler
from ..exceptions import NightfallTimeoutError
from ..logging import get_logger


class ScanFileFacade:
    """
    Simplified interface for Nightfall file scans.

    Runs the upload session state machine::

        INITIATED -> UPLOADING -> FINALIZED -> PROCESSING_TRIGGERED
                  \\-----------\\-----------\\--> FAILED

    Each step waits for the previous one; the first failure aborts the rest.
    Nothing is rolled back server-side on failure.

    Example:
        >>> facade = ScanFileFacade(handler, builder, coordinator)
        >>> response = await facade.scan_file(ScanFileRequest(
        ...     content=b"4242 4242 4242 4242",
        ...     content_size_bytes=19,
        ...     policy_uuid="..."
        ... ))
        >>> print(response.id)
    """

    def __init__(
        self,
        handler: RequestHandler,
        builder: RequestBuilder,
        coordinator: UploadCoordinator
    ):
        """
        Initialize scan facade.

        Args:
            handler: Retrying request handler
            builder: Request builder
            coordinator: Chunk upload coordinator
        """
        self._handler = handler
        self._builder = builder
        self._coordinator = coordinator
        self._logger = get_logger('nightfall.upload')

    async def scan_file(
        self,
        request: ScanFileRequest,
        run: Optional[ScanRun] = None,
        progress_callback: Optional[Callable[[UploadProgress], None]] = None
    ) -> ScanFileResponse:
        """
        Upload the request content and trigger a scan of it.

        ``request.timeout`` bounds the entire sequence, not each step.

        Args:
            request: Scan request
            run: Optional state holder, updated as the sequence progresses
            progress_callback: Optional callback for chunk progress

        Returns:
            The scan trigger response

        Raises:
            NightfallTimeoutError: If ``request.timeout`` expired
            NightfallAPIError: If any step was rejected
            NightfallTransportError: If a request never got a response
        """
        run = run if run is not None else ScanRun()

        if request.timeout is None or request.timeout <= 0:
            return await self._run(request, run, progress_callback)

        try:
            return await asyncio.wait_for(
                self._run(request, run, progress_callback),
                timeout=request.timeout
            )
        except asyncio.TimeoutError as e:
            raise NightfallTimeoutError(
                f"File scan did not complete within {request.timeout}s",
                timeout=request.timeout
            ) from e

    async def _run(
        self,
        request: ScanFileRequest,
        run: ScanRun,
        progress_callback: Optional[Callable[[UploadProgress], None]]
    ) -> ScanFileResponse:
        try:
            session = await self.initiate(request.content_size_bytes)
            run.session = session
            self._transition(run, UploadState.INITIATED)

            self._transition(run, UploadState.UPLOADING)
            run.progress = await self._coordinator.upload(
                session,
                as_content_source(request.content),
                progress_callback=progress_callback
            )

            await self.finalize(session.id)
            self._transition(run, UploadState.FINALIZED)

            response = await self.trigger_scan(session.id, request)
            self._transition(run, UploadState.PROCESSING_TRIGGERED)
            return response
        except BaseException as e:
            run.error = e
            self._transition(run, UploadState.FAILED)
            raise

    async def initiate(self, file_size_bytes: int) -> UploadSession:
        """Create an upload session for content of the given size."""
        spec = self._builder.json_request('POST', 'v3/upload', {'fileSizeBytes': file_size_bytes})
        session = await self._handler.execute(spec, UploadSession)
        if session is None:
            raise ValueError("Upload session response had no body")
        return session

    async def finalize(self, session_id: str) -> None:
        """Mark all chunks of a session as uploaded."""
        spec = self._builder.json_request('POST', f'v3/upload/{session_id}/finish')
        await self._handler.execute(spec)

    async def trigger_scan(self, session_id: str, request: ScanFileRequest) -> ScanFileResponse:
        """Start scanning a finalized upload."""
        spec = self._builder.json_request(
            'POST',
            f'v3/upload/{session_id}/scan',
            request.to_scan_payload()
        )
        response = await self._handler.execute(spec, ScanFileResponse)
        return response if response is not None else ScanFileResponse(id=session_id)

    def _transition(self, run: ScanRun, state: UploadState) -> None:
        session_id = run.session.id if run.session else '-'
        if state is UploadState.FAILED:
            self._logger.error(f"Scan of upload {session_id} failed in state {run.state.value}: {run.error!r}")
        else:
            self._logger.info(f"Upload {session_id}: {run.state.value} -> {state.value}")
        run.state = state
