"""
Chunk upload service.

Handles uploading individual chunks to an upload session.
"""
import time

from ...api.request import RequestBuilder, RequestHandler
from ...logging import get_logger


class ChunkUploader:
    """
    Uploads raw chunks to an upload session.

    Responsibilities:
    - Address each chunk by its byte offset
    - Send it through the retrying request handler
    """

    def __init__(self, handler: RequestHandler, builder: RequestBuilder):
        """
        Initialize chunk uploader.

        Args:
            handler: Request handler (owns retry policy and transport)
            builder: Request builder (owns base URL and credentials)
        """
        self._handler = handler
        self._builder = builder
        self._logger = get_logger('nightfall.upload.chunk')

    async def upload_chunk(
        self,
        session_id: str,
        chunk_index: int,
        offset: int,
        data: bytes
    ) -> None:
        """
        Upload a single chunk.

        Args:
            session_id: Upload session identifier
            chunk_index: Index of the chunk
            offset: Byte offset of the chunk in the content
            data: Chunk bytes

        Raises:
            ValueError: If chunk is empty
            NightfallAPIError: If the server rejects the chunk
            NightfallTransportError: If a network error occurs
        """
        if not data:
            raise ValueError(f"Cannot upload empty chunk {chunk_index}")

        chunk_size_kb = len(data) / 1024
        spec = self._builder.upload_request(f"v3/upload/{session_id}", offset, data)

        upload_start = time.time()
        self._logger.debug(f"Uploading chunk {chunk_index} at offset {offset} ({chunk_size_kb:.1f} KB)")

        await self._handler.execute(spec)

        upload_time = time.time() - upload_start
        speed_kbps = (chunk_size_kb / upload_time) if upload_time > 0 else 0
        self._logger.debug(f"Chunk {chunk_index} uploaded in {upload_time:.2f}s ({speed_kbps:.1f} KB/s)")
