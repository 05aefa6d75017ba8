"""Tests for upload services."""
import io

import pytest

from nightfall.core.upload.services import (
    AsyncFileContentSource,
    BytesContentSource,
    ChunkUploader,
    FileValidator,
    StreamContentSource,
    as_content_source,
)
from nightfall.core.api import NightfallAPIError

from conftest import SESSION_ID


class TestFileValidator:
    """Test suite for FileValidator."""

    def test_validate_existing_file(self, tmp_path):
        """Test validating existing file returns path and size."""
        test_file = tmp_path / "test.txt"
        test_file.write_bytes(b"test content")

        path, size = FileValidator().validate(str(test_file))

        assert path == test_file
        assert size == 12

    def test_validate_nonexistent_file(self, tmp_path):
        """Test validating non-existent file raises error."""
        with pytest.raises(FileNotFoundError):
            FileValidator().validate(tmp_path / "missing.txt")

    def test_validate_directory(self, tmp_path):
        """Test validating directory raises error."""
        with pytest.raises(ValueError):
            FileValidator().validate(tmp_path)

    def test_validate_empty_file(self, tmp_path):
        """Test empty files are accepted with size zero."""
        test_file = tmp_path / "empty.txt"
        test_file.write_bytes(b"")

        _, size = FileValidator().validate(test_file)
        assert size == 0


class TestContentSources:
    """Test suite for content sources."""

    @pytest.mark.asyncio
    async def test_bytes_source_reads_sequentially(self):
        source = BytesContentSource(b"hello world")

        assert len(source) == 11
        assert await source.read(5) == b"hello"
        assert await source.read(100) == b" world"
        assert await source.read(5) == b""

    @pytest.mark.asyncio
    async def test_stream_source(self):
        source = StreamContentSource(io.BytesIO(b"abcdef"))

        assert await source.read(4) == b"abcd"
        assert await source.read(4) == b"ef"
        assert await source.read(4) == b""

    @pytest.mark.asyncio
    async def test_async_file_source(self, tmp_path):
        test_file = tmp_path / "data.bin"
        test_file.write_bytes(b"0123456789")

        async with AsyncFileContentSource(test_file) as source:
            assert source.file_path == test_file
            assert await source.read(6) == b"012345"
            assert await source.read(6) == b"6789"
            assert await source.read(6) == b""

    @pytest.mark.asyncio
    async def test_async_file_source_opens_lazily(self, tmp_path):
        test_file = tmp_path / "data.bin"
        test_file.write_bytes(b"xyz")

        source = AsyncFileContentSource(test_file)
        try:
            assert await source.read(10) == b"xyz"
        finally:
            await source.close()

    @pytest.mark.asyncio
    async def test_close_is_idempotent(self, tmp_path):
        test_file = tmp_path / "data.bin"
        test_file.write_bytes(b"xyz")

        source = await AsyncFileContentSource(test_file).open()
        await source.close()
        await source.close()

    @pytest.mark.asyncio
    async def test_as_content_source_wraps_bytes(self):
        source = as_content_source(bytearray(b"abc"))

        assert isinstance(source, BytesContentSource)
        assert await source.read(10) == b"abc"

    def test_as_content_source_keeps_async_reader(self):
        source = BytesContentSource(b"abc")
        assert as_content_source(source) is source

    def test_as_content_source_wraps_sync_stream(self):
        assert isinstance(as_content_source(io.BytesIO(b"abc")), StreamContentSource)

    def test_as_content_source_rejects_unreadable(self):
        with pytest.raises(TypeError):
            as_content_source(12345)


class TestChunkUploader:
    """Test suite for ChunkUploader."""

    @pytest.fixture
    def uploader(self, handler, builder):
        return ChunkUploader(handler, builder)

    @pytest.mark.asyncio
    async def test_upload_chunk_request(self, uploader, transport):
        """Test a chunk is sent as PATCH with its offset."""
        transport.route('PATCH', f'/v3/upload/{SESSION_ID}', lambda call: 204)

        await uploader.upload_chunk(SESSION_ID, 1, 5, b"hello")

        (call,) = transport.calls
        assert call.method == 'PATCH'
        assert call.path == f'/v3/upload/{SESSION_ID}'
        assert call.body == b"hello"
        assert call.headers['X-Upload-Offset'] == '5'
        assert call.headers['Content-Type'] == 'application/octet-stream'
        assert call.headers['Authorization'] == 'Bearer test-key'

    @pytest.mark.asyncio
    async def test_upload_chunk_retries_rate_limit(self, uploader, transport):
        """Test a rate-limited chunk is resent."""
        statuses = [429, 200]
        transport.route('PATCH', f'/v3/upload/{SESSION_ID}', lambda call: statuses.pop(0))

        await uploader.upload_chunk(SESSION_ID, 0, 0, b"data")

        assert transport.count('PATCH', f'/v3/upload/{SESSION_ID}') == 2

    @pytest.mark.asyncio
    async def test_upload_chunk_rejected(self, uploader, transport):
        """Test a rejected chunk raises the API error."""
        transport.route('PATCH', f'/v3/upload/{SESSION_ID}', lambda call: 400)

        with pytest.raises(NightfallAPIError) as exc_info:
            await uploader.upload_chunk(SESSION_ID, 0, 0, b"data")

        assert exc_info.value.status == 400

    @pytest.mark.asyncio
    async def test_upload_empty_chunk(self, uploader, transport):
        """Test empty chunks are refused before any request."""
        with pytest.raises(ValueError):
            await uploader.upload_chunk(SESSION_ID, 0, 0, b"")

        assert transport.calls == []
