"""Request builder for API requests."""
import json
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from ..config import APIConfig


@dataclass(frozen=True)
class RequestSpec:
    """Everything needed to (re)issue one request."""
    method: str
    url: str
    headers: Dict[str, str] = field(default_factory=dict)
    body: Optional[bytes] = None


class RequestBuilder:
    """Builds API requests."""

    def __init__(self, config: APIConfig):
        """Initializes request builder."""
        self.config = config

    def build_headers(self, content_type: str = 'application/json') -> Dict[str, str]:
        """Builds request headers."""
        headers = self.config.get_default_headers()
        headers['Content-Type'] = content_type
        return headers

    def build_data(self, payload: Any) -> Optional[bytes]:
        """Builds request data; ``None`` payloads produce an empty body."""
        if payload is None:
            return None
        return json.dumps(payload, ensure_ascii=False).encode('utf-8')

    def json_request(self, method: str, path: str, payload: Any = None) -> RequestSpec:
        """Builds a JSON request against an API path."""
        return RequestSpec(
            method=method,
            url=self.config.url(path),
            headers=self.build_headers(),
            body=self.build_data(payload)
        )

    def upload_request(self, path: str, offset: int, data: bytes) -> RequestSpec:
        """Builds a raw chunk upload addressed by its byte offset."""
        headers = self.build_headers('application/octet-stream')
        headers['X-Upload-Offset'] = str(offset)
        return RequestSpec(
            method='PATCH',
            url=self.config.url(path),
            headers=headers,
            body=data
        )
