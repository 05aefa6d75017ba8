"""Tests for upload models."""
import pytest

from nightfall.core.scan import ScanTextRequest, ScanTextResponse
from nightfall.core.upload.models import (
    ChunkInfo,
    ScanFileRequest,
    ScanFileResponse,
    ScanRun,
    UploadProgress,
    UploadSession,
    UploadState,
)


class TestUploadSession:
    """Test suite for UploadSession."""

    def test_from_dict(self):
        session = UploadSession.from_dict({
            'id': 'abc',
            'fileSizeBytes': 1024,
            'chunkSize': 256,
            'mimeType': 'application/pdf',
        })

        assert session.id == 'abc'
        assert session.file_size_bytes == 1024
        assert session.chunk_size == 256
        assert session.mime_type == 'application/pdf'

    def test_from_dict_without_mime_type(self):
        session = UploadSession.from_dict({'id': 'abc', 'fileSizeBytes': 1, 'chunkSize': 1, 'mimeType': ''})
        assert session.mime_type is None

    def test_from_dict_missing_field(self):
        with pytest.raises(KeyError):
            UploadSession.from_dict({'id': 'abc'})

    def test_is_immutable(self):
        session = UploadSession(id='abc', file_size_bytes=1, chunk_size=1)
        with pytest.raises(AttributeError):
            session.chunk_size = 2


class TestChunkInfo:
    """Test suite for ChunkInfo."""

    def test_size(self):
        assert ChunkInfo(index=2, start=10, end=15).size == 5


class TestUploadProgress:
    """Test suite for UploadProgress."""

    def test_percentage(self):
        progress = UploadProgress(total_chunks=4, uploaded_chunks=1)

        assert progress.percentage == 25.0
        assert not progress.is_complete

    def test_empty_upload(self):
        progress = UploadProgress(total_chunks=0)

        assert progress.percentage == 0.0
        assert progress.is_complete


class TestScanModels:
    """Test suite for scan request and response models."""

    def test_scan_payload(self):
        request = ScanFileRequest(content=b'x', content_size_bytes=1, policy_uuid='p', request_metadata='m')

        assert request.to_scan_payload() == {'policyUUID': 'p', 'policy': None, 'requestMetadata': 'm'}

    def test_policy_passed_through(self):
        policy = {'detectionRules': [{'anything': ['goes']}], 'alertConfig': {'slack': {}}}
        request = ScanFileRequest(content=b'x', content_size_bytes=1, policy=policy)

        assert request.to_scan_payload()['policy'] is policy

    def test_scan_file_response(self):
        assert ScanFileResponse.from_dict({'id': 'abc', 'message': 'ok'}) == ScanFileResponse('abc', 'ok')
        assert ScanFileResponse.from_dict({}) == ScanFileResponse('')
        assert ScanFileResponse.from_dict({'id': 'abc', 'message': None}).message == ''

    def test_scan_run_defaults(self):
        run = ScanRun()

        assert run.state is UploadState.PENDING
        assert run.session is None
        assert run.error is None

    def test_scan_text_request(self):
        request = ScanTextRequest(payload=['a'], policy_uuids=['p1', 'p2'])
        assert request.to_dict() == {'payload': ['a'], 'policy': None, 'policyUUIDs': ['p1', 'p2']}

    def test_scan_text_response(self):
        response = ScanTextResponse.from_dict({
            'findings': [[{'finding': 'x'}, {'finding': 'y'}], None],
            'redactedPayload': None,
        })

        assert response.findings == [[{'finding': 'x'}, {'finding': 'y'}], []]
        assert response.redacted_payload == []
        assert response.finding_count == 2
