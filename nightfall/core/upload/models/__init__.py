"""Upload data models."""
from .upload_models import (
    UploadState,
    UploadSession,
    ChunkInfo,
    ScanFileRequest,
    ScanFileResponse,
    UploadProgress,
    ScanRun,
)

__all__ = [
    'UploadState',
    'UploadSession',
    'ChunkInfo',
    'ScanFileRequest',
    'ScanFileResponse',
    'UploadProgress',
    'ScanRun',
]
