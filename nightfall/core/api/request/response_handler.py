"""Response handler for API responses."""
import json
from dataclasses import dataclass
from typing import Any, Optional

from ..errors import NightfallAPIError, RATE_LIMIT_STATUS
from ..outcome import RequestOutcome
from ..transport import TransportResponse


@dataclass(frozen=True)
class ClassifiedResponse:
    """An outcome plus the raw body, or the error built from it."""
    outcome: RequestOutcome
    body: bytes = b''
    error: Optional[NightfallAPIError] = None


class ResponseHandler:
    """Handles API responses."""

    @staticmethod
    def classify_status(status: int) -> RequestOutcome:
        """Maps an HTTP status to an outcome."""
        if 200 <= status <= 299:
            return RequestOutcome.SUCCESS
        if status == RATE_LIMIT_STATUS:
            return RequestOutcome.RATE_LIMITED
        if 400 <= status <= 499:
            return RequestOutcome.CLIENT_ERROR
        return RequestOutcome.SERVER_ERROR

    @staticmethod
    def parse_body(body: bytes) -> Any:
        """Parses a JSON success body; an empty body means no payload."""
        if not body or not body.strip():
            return None
        try:
            return json.loads(body)
        except ValueError as e:
            raise ValueError(f"Invalid JSON response body: {e}") from e

    @classmethod
    def classify(cls, response: TransportResponse) -> ClassifiedResponse:
        """Classifies a response, keeping a success body undecoded."""
        outcome = cls.classify_status(response.status)
        if outcome is RequestOutcome.SUCCESS:
            return ClassifiedResponse(outcome, body=response.body)
        return ClassifiedResponse(
            outcome,
            error=NightfallAPIError.from_response(response.status, response.body)
        )
