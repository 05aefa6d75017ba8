"""
Protocol definitions for upload module.

Defines interfaces (protocols) for dependency injection and strategy pattern.
"""
from typing import Protocol


class ContentSource(Protocol):
    """
    Sequential, single-pass byte stream.

    The upload machinery reads it but never closes it.
    """

    async def read(self, size: int) -> bytes:
        """
        Read up to ``size`` bytes.

        Returns:
            The bytes read; ``b''`` once the stream is exhausted
        """
        ...


class ChunkUploaderProtocol(Protocol):
    """Protocol for chunk upload operations."""

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
            chunk_index: Index of the chunk (logging only)
            offset: Byte offset of the chunk in the content
            data: Chunk bytes
        """
        ...

