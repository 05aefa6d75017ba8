"""
File validation and content source services.

Single Responsibility: Each class handles one specific task.
"""
import asyncio
import inspect
from pathlib import Path
from typing import Any, BinaryIO, Optional, Tuple, Union

import aiofiles

from ...logging import get_logger


class FileValidator:
    """
    Validates files before upload.

    Responsibilities:
    - Check file existence
    - Verify file is not a directory
    - Get file size
    """

    def validate(self, file_path: Union[str, Path]) -> Tuple[Path, int]:
        """
        Validate a file for upload.

        Args:
            file_path: Path to the file

        Returns:
            Tuple of (validated Path, file size in bytes)

        Raises:
            FileNotFoundError: If file doesn't exist
            ValueError: If path is not a regular file
        """
        path = Path(file_path) if isinstance(file_path, str) else file_path

        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")

        if not path.is_file():
            raise ValueError(f"Path is not a file: {path}")

        return path, path.stat().st_size


class BytesContentSource:
    """In-memory content source."""

    def __init__(self, data: Union[bytes, bytearray, memoryview]):
        self._data = bytes(data)
        self._position = 0

    def __len__(self) -> int:
        return len(self._data)

    async def read(self, size: int) -> bytes:
        chunk = self._data[self._position:self._position + size]
        self._position += len(chunk)
        return chunk


class StreamContentSource:
    """
    Adapts a synchronous binary file object.

    Blocking reads run in a worker thread so the event loop stays free.
    """

    def __init__(self, stream: BinaryIO):
        self._stream = stream

    async def read(self, size: int) -> bytes:
        data = await asyncio.to_thread(self._stream.read, size)
        return data or b''


class AsyncFileContentSource:
    """
    Content source reading a file through aiofiles.

    Opens the file on first read (or on ``open``) and keeps the handle for
    sequential reads. Closing stays with the owner, usually through
    ``async with``.
    """

    def __init__(self, file_path: Union[str, Path]):
        """
        Initialize file source.

        Args:
            file_path: Path to the file to read
        """
        self._file_path = Path(file_path)
        self._file_handle: Optional[Any] = None
        self._logger = get_logger('nightfall.upload.file')

    @property
    def file_path(self) -> Path:
        return self._file_path

    async def open(self) -> 'AsyncFileContentSource':
        """Open file for reading. Does nothing if already open."""
        if self._file_handle is None:
            self._file_handle = await aiofiles.open(self._file_path, 'rb')
            self._logger.debug(f"Opened {self._file_path}")
        return self

    async def close(self) -> None:
        """Close the currently open file."""
        if self._file_handle is not None:
            await self._file_handle.close()
            self._file_handle = None

    async def __aenter__(self) -> 'AsyncFileContentSource':
        return await self.open()

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def read(self, size: int) -> bytes:
        """
        Read the next ``size`` bytes.

        Raises:
            OSError: If the file cannot be read
        """
        if self._file_handle is None:
            await self.open()
        data = await self._file_handle.read(size)
        return data or b''


def as_content_source(content: Any):
    """
    Wrap ``content`` in a content source.

    Accepts bytes-like objects, objects with an async ``read`` (returned
    as-is) and synchronous binary file objects.

    Raises:
        TypeError: If the object cannot be read from
    """
    if isinstance(content, (bytes, bytearray, memoryview)):
        return BytesContentSource(content)

    read = getattr(content, 'read', None)
    if read is None:
        raise TypeError(f"Unsupported content type: {type(content).__name__}")

    if inspect.iscoroutinefunction(read):
        return content

    return StreamContentSource(content)
