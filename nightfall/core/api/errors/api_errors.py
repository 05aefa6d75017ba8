"""Nightfall API error responses."""
import json
from typing import Any, Dict, Optional

from ...exceptions import NightfallException

RATE_LIMIT_STATUS = 429


class NightfallAPIError(NightfallException):
    """
    Exception raised for non-2xx API responses.

    Carries the remote ``{code, message, description, additionalData}`` body
    when the server provided one, otherwise just the HTTP status as the code.
    """

    def __init__(
        self,
        status: int,
        code: Optional[int] = None,
        message: str = '',
        description: str = '',
        additional_data: Optional[Dict[str, str]] = None
    ):
        self.status = status
        self.code = code if code is not None else status
        self.message = message
        self.description = description
        self.additional_data = additional_data or {}
        super().__init__(message or f"HTTP {status}", error_code=self.code)

    @property
    def is_rate_limited(self) -> bool:
        return self.status == RATE_LIMIT_STATUS

    @classmethod
    def from_response(cls, status: int, body: Optional[bytes]) -> 'NightfallAPIError':
        """
        Build the error from a raw response body.

        Falls back to a bare status-code error if the body is empty or is not a
        JSON object.
        """
        if not body:
            return cls(status)

        try:
            data: Any = json.loads(body)
        except ValueError:
            return cls(status)

        if not isinstance(data, dict):
            return cls(status)

        code = data.get('code')
        return cls(
            status,
            code=code if isinstance(code, int) else None,
            message=data.get('message') or '',
            description=data.get('description') or '',
            additional_data=data.get('additionalData') or {}
        )

    def __repr__(self) -> str:
        return f"NightfallAPIError(status={self.status}, code={self.code}, message={self.message!r})"
