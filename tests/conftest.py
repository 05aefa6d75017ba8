"""Pytest fixtures for nightfall tests."""
import inspect
import json
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Tuple
from urllib.parse import urlsplit

import pytest

from nightfall.core.api import APIConfig, RetryConfig, TransportResponse, RequestBuilder, RequestHandler

BASE_URL = 'https://api.nightfall.test/'
SESSION_ID = '430d42aa-1e1f-405d-8799-7f5f26486a0d'


def json_response(data, status: int = 200) -> TransportResponse:
    """Build a JSON transport response."""
    return TransportResponse(status=status, body=json.dumps(data).encode())


@dataclass
class RecordedCall:
    method: str
    path: str
    headers: Dict[str, str]
    body: Optional[bytes]


@dataclass
class FakeTransport:
    """
    Scripted transport routing (method, path) to handlers.

    A handler receives the recorded call and returns a TransportResponse, a
    bare status code, or raises. Async handlers are awaited. Unrouted
    requests get a 404.
    """
    routes: Dict[Tuple[str, str], Callable] = field(default_factory=dict)
    calls: List[RecordedCall] = field(default_factory=list)
    closed: bool = False

    def route(self, method: str, path: str, handler: Callable) -> 'FakeTransport':
        self.routes[(method, path)] = handler
        return self

    def count(self, method: str, path: str) -> int:
        return sum(1 for call in self.calls if call.method == method and call.path == path)

    async def send(self, method, url, headers, body=None) -> TransportResponse:
        call = RecordedCall(method, urlsplit(url).path, dict(headers), body)
        self.calls.append(call)

        handler = self.routes.get((method, call.path))
        if handler is None:
            return TransportResponse(status=404)

        result = handler(call)
        if inspect.isawaitable(result):
            result = await result
        if isinstance(result, int):
            return TransportResponse(status=result)
        return result

    async def close(self) -> None:
        self.closed = True


def session_handler(file_size: int = 15, chunk_size: int = 5, session_id: str = SESSION_ID):
    """Handler answering the initiate step."""
    return lambda call: json_response({
        'id': session_id,
        'fileSizeBytes': file_size,
        'chunkSize': chunk_size,
    })


@pytest.fixture
def api_config():
    """Configuration with a key and no retry delay."""
    return APIConfig(
        api_key='test-key',
        base_url=BASE_URL,
        retry=RetryConfig(backoff_delay=0)
    )


@pytest.fixture
def transport():
    """Empty fake transport."""
    return FakeTransport()


@pytest.fixture
def builder(api_config):
    return RequestBuilder(api_config)


@pytest.fixture
def handler(transport, api_config):
    return RequestHandler(transport, api_config.retry)


@pytest.fixture
def happy_transport(transport):
    """Fake transport serving a 15-byte, 3-chunk upload that succeeds."""
    upload_path = f'/v3/upload/{SESSION_ID}'
    transport.route('POST', '/v3/upload', session_handler())
    transport.route('PATCH', upload_path, lambda call: 200)
    transport.route('POST', f'{upload_path}/finish', lambda call: 200)
    transport.route('POST', f'{upload_path}/scan', lambda call: json_response({
        'id': SESSION_ID,
        'message': 'scan initiated',
    }))
    return transport
