"""
Upload coordinator.

Streams content into an upload session chunk by chunk, with parallel chunk
uploads bounded by a concurrency budget.
"""
import asyncio
import time
from typing import Callable, Optional, Set

from .models import ChunkInfo, UploadProgress, UploadSession
from .protocols import ChunkUploaderProtocol, ContentSource
from .strategies import FixedSizeChunkingStrategy
from ..api.config import DEFAULT_FILE_UPLOAD_CONCURRENCY
from ..logging import get_logger

logger = get_logger('nightfall.upload')


class _ChunkRun:
    """Mutable state shared by the dispatch loop and chunk tasks of one upload."""

    def __init__(self, progress: UploadProgress):
        self.tasks: Set[asyncio.Task] = set()
        self.error: Optional[BaseException] = None
        self.progress = progress

    @property
    def failed(self) -> bool:
        return self.error is not None

    def fail(self, error: BaseException, current: Optional[asyncio.Task]) -> bool:
        """Record ``error`` if it is the first one and cancel sibling tasks."""
        if self.error is not None:
            return False
        self.error = error
        for task in self.tasks:
            if task is not current and not task.done():
                task.cancel()
        return True

    async def cancel_all(self) -> None:
        for task in self.tasks:
            task.cancel()
        if self.tasks:
            await asyncio.gather(*self.tasks, return_exceptions=True)


class UploadCoordinator:
    """
    Coordinates the chunk upload phase of a file scan.

    Reading is sequential (the content source is single-pass) while uploads
    run as parallel tasks, at most ``concurrency`` at a time. The first chunk
    failure stops further dispatch, cancels the in-flight siblings and is
    the error reported to the caller; later failures are dropped.
    """

    def __init__(
        self,
        chunk_uploader: ChunkUploaderProtocol,
        concurrency: int = DEFAULT_FILE_UPLOAD_CONCURRENCY,
        progress_callback: Optional[Callable[[UploadProgress], None]] = None
    ):
        """
        Initialize upload coordinator.

        Args:
            chunk_uploader: Uploads one chunk to a session
            concurrency: Maximum number of chunk uploads in flight
            progress_callback: Optional callback for progress updates
        """
        if concurrency < 1:
            raise ValueError("Concurrency must be at least 1")
        self._uploader = chunk_uploader
        self._concurrency = concurrency
        self._progress_callback = progress_callback

    @property
    def concurrency(self) -> int:
        return self._concurrency

    async def upload(
        self,
        session: UploadSession,
        source: ContentSource,
        progress_callback: Optional[Callable[[UploadProgress], None]] = None
    ) -> UploadProgress:
        """
        Upload all chunks of ``source`` into ``session``.

        The source is consumed but not closed. If it ends before the planned
        size, dispatch stops without error.

        Args:
            session: Upload session from the initiate step
            source: Content source positioned at offset 0
            progress_callback: Overrides the coordinator-wide callback

        Returns:
            Final upload progress

        Raises:
            The first chunk upload error, or whatever reading the source raised
        """
        callback = progress_callback or self._progress_callback
        chunking = FixedSizeChunkingStrategy(session.chunk_size)
        total_chunks = -(-session.file_size_bytes // session.chunk_size)
        budget = asyncio.Semaphore(self._concurrency)
        run = _ChunkRun(UploadProgress(total_chunks=total_chunks, total_bytes=session.file_size_bytes))

        total_mb = session.file_size_bytes / (1024 * 1024)
        logger.info(
            f"Uploading {total_chunks} chunks to session {session.id} "
            f"({total_mb:.2f} MB total, max {self._concurrency} parallel uploads)"
        )

        try:
            for index, (start, length) in enumerate(chunking.plan(session.file_size_bytes)):
                await budget.acquire()

                if run.failed:
                    budget.release()
                    logger.debug(f"Stopping dispatch before chunk {index}: a previous chunk failed")
                    break

                try:
                    data = await self._read_chunk(source, length)
                except BaseException:
                    budget.release()
                    raise

                if not data:
                    budget.release()
                    logger.debug(f"Content ended at offset {start}, before the planned {session.file_size_bytes} bytes")
                    break

                # A chunk may have failed while the read was suspended
                if run.failed:
                    budget.release()
                    logger.debug(f"Dropping chunk {index}: a previous chunk failed during the read")
                    break

                chunk = ChunkInfo(index=index, start=start, end=start + len(data))
                task = asyncio.create_task(self._upload_chunk_task(session.id, chunk, data, run, callback))
                # Released from a done callback so cancelled-before-start tasks also free their slot
                task.add_done_callback(lambda _task: budget.release())
                run.tasks.add(task)

            if run.tasks:
                await asyncio.wait(run.tasks)
        except BaseException:
            await run.cancel_all()
            raise

        if run.error is not None:
            raise run.error

        uploaded_mb = run.progress.uploaded_bytes / (1024 * 1024)
        logger.info(f"All chunks uploaded: {run.progress.uploaded_chunks} chunks, {uploaded_mb:.2f} MB")
        return run.progress

    @staticmethod
    async def _read_chunk(source: ContentSource, size: int) -> bytes:
        """Read until ``size`` bytes are collected or the source is exhausted."""
        parts = []
        remaining = size
        while remaining > 0:
            data = await source.read(remaining)
            if not data:
                break
            parts.append(data)
            remaining -= len(data)
        return b''.join(parts)

    async def _upload_chunk_task(
        self,
        session_id: str,
        chunk: ChunkInfo,
        data: bytes,
        run: _ChunkRun,
        callback: Optional[Callable[[UploadProgress], None]]
    ) -> None:
        """Upload one chunk, recording rather than raising its failure."""
        if run.failed:
            return

        start_time = time.time()
        try:
            await self._uploader.upload_chunk(session_id, chunk.index, chunk.start, data)
        except asyncio.CancelledError:
            logger.debug(f"Chunk {chunk.index} cancelled")
            raise
        except Exception as e:
            elapsed = time.time() - start_time
            if run.fail(e, asyncio.current_task()):
                logger.error(f"Chunk {chunk.index} failed after {elapsed:.2f}s: {e}")
            else:
                logger.debug(f"Chunk {chunk.index} failed after another chunk already had: {e}")
            return

        run.progress.uploaded_chunks += 1
        run.progress.uploaded_bytes += chunk.size
        if callback:
            callback(run.progress)
