"""Upload services module."""
from .file_service import (
    FileValidator,
    BytesContentSource,
    StreamContentSource,
    AsyncFileContentSource,
    as_content_source,
)
from .chunk_service import ChunkUploader

__all__ = [
    'FileValidator',
    'BytesContentSource',
    'StreamContentSource',
    'AsyncFileContentSource',
    'as_content_source',
    'ChunkUploader',
]
