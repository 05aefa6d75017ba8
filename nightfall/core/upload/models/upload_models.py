"""
Data models for upload module.

Uses dataclasses for immutable, type-safe data structures.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Any, Optional


class UploadState(Enum):
    """Lifecycle of a file upload session."""
    PENDING = 'pending'
    INITIATED = 'initiated'
    UPLOADING = 'uploading'
    FINALIZED = 'finalized'
    PROCESSING_TRIGGERED = 'processing_triggered'
    FAILED = 'failed'


@dataclass(frozen=True)
class UploadSession:
    """
    Server-assigned handle for an in-progress chunked upload.

    Attributes:
        id: Opaque session identifier
        file_size_bytes: Total content size
        chunk_size: Negotiated chunk size
        mime_type: Media type detected by the server, if any
    """
    id: str
    file_size_bytes: int
    chunk_size: int
    mime_type: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'UploadSession':
        """Create from the initiate response body."""
        return cls(
            id=str(data['id']),
            file_size_bytes=int(data['fileSizeBytes']),
            chunk_size=int(data['chunkSize']),
            mime_type=data.get('mimeType') or None
        )


@dataclass(frozen=True)
class ChunkInfo:
    """
    Information about a content chunk.

    Attributes:
        index: Chunk index
        start: Start position in bytes
        end: End position in bytes
        size: Chunk size in bytes
    """
    index: int
    start: int
    end: int

    @property
    def size(self) -> int:
        """Returns chunk size."""
        return self.end - self.start


@dataclass
class ScanFileRequest:
    """
    Request to upload content and scan it.

    Exactly one of ``policy_uuid`` or ``policy`` should be provided. The
    content is consumed but never closed.

    Attributes:
        content: Content source (see ``core.upload.services``) or bytes
        content_size_bytes: Total size of the content
        policy_uuid: UUID of a policy stored server-side
        policy: Inline policy mapping, sent as-is
        request_metadata: Free-form string echoed back with the results
        timeout: Seconds bounding the whole upload-and-scan sequence
    """
    content: Any
    content_size_bytes: int
    policy_uuid: Optional[str] = None
    policy: Optional[Dict[str, Any]] = None
    request_metadata: str = ''
    timeout: Optional[float] = None

    def to_scan_payload(self) -> Dict[str, Any]:
        """Body of the scan trigger request."""
        return {
            'policyUUID': self.policy_uuid,
            'policy': self.policy,
            'requestMetadata': self.request_metadata,
        }


@dataclass(frozen=True)
class ScanFileResponse:
    """Returned once an (asynchronous) file scan was triggered."""
    id: str
    message: str = ''

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ScanFileResponse':
        return cls(id=str(data.get('id', '')), message=data.get('message') or '')


@dataclass
class UploadProgress:
    """
    Upload progress information.

    Attributes:
        total_chunks: Total number of chunks
        uploaded_chunks: Number of uploaded chunks
        total_bytes: Total content size
        uploaded_bytes: Bytes uploaded so far
    """
    total_chunks: int
    uploaded_chunks: int = 0
    total_bytes: int = 0
    uploaded_bytes: int = 0

    @property
    def percentage(self) -> float:
        """Returns upload progress as percentage."""
        if self.total_chunks == 0:
            return 0.0
        return (self.uploaded_chunks / self.total_chunks) * 100

    @property
    def is_complete(self) -> bool:
        """Returns True if upload is complete."""
        return self.uploaded_chunks >= self.total_chunks


@dataclass
class ScanRun:
    """Observable state of one upload-and-scan sequence."""
    state: UploadState = UploadState.PENDING
    session: Optional[UploadSession] = None
    progress: Optional[UploadProgress] = None
    error: Optional[BaseException] = field(default=None, repr=False)
