"""
Upload module for Nightfall file scans.

Chunked uploads with pluggable chunking strategies and content sources.
"""
from .facade import ScanFileFacade
from .coordinator import UploadCoordinator
from .models import (
    UploadState,
    UploadSession,
    ChunkInfo,
    ScanFileRequest,
    ScanFileResponse,
    UploadProgress,
    ScanRun,
)
from .protocols import (
    ContentSource,
    ChunkUploaderProtocol,
)
from .services import (
    ChunkUploader,
    FileValidator,
    BytesContentSource,
    StreamContentSource,
    AsyncFileContentSource,
    as_content_source,
)
from .strategies import FixedSizeChunkingStrategy

__all__ = [
    # Main classes
    'ScanFileFacade',
    'UploadCoordinator',
    'ChunkUploader',

    # Models
    'UploadState',
    'UploadSession',
    'ChunkInfo',
    'ScanFileRequest',
    'ScanFileResponse',
    'UploadProgress',
    'ScanRun',

    # Protocols
    'ContentSource',
    'ChunkUploaderProtocol',

    # Content sources
    'FileValidator',
    'BytesContentSource',
    'StreamContentSource',
    'AsyncFileContentSource',
    'as_content_source',

    # Strategies
    'FixedSizeChunkingStrategy',
]
