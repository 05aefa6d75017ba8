"""Inline text scanning."""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..api.request import RequestBuilder, RequestHandler
from ..logging import get_logger


@dataclass
class ScanTextRequest:
    """
    Request to scan inline plaintext.

    Attributes:
        payload: Strings to scan
        policy: Inline policy mapping, sent as-is
        policy_uuids: UUIDs of policies stored server-side
    """
    payload: List[str]
    policy: Optional[Dict[str, Any]] = None
    policy_uuids: Optional[List[str]] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'payload': self.payload,
            'policy': self.policy,
            'policyUUIDs': self.policy_uuids,
        }


@dataclass(frozen=True)
class ScanTextResponse:
    """
    Findings for a text scan.

    ``findings[i]`` holds the findings for ``payload[i]`` of the request.
    """
    findings: List[List[Dict[str, Any]]] = field(default_factory=list)
    redacted_payload: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ScanTextResponse':
        return cls(
            findings=[list(items or []) for items in data.get('findings') or []],
            redacted_payload=list(data.get('redactedPayload') or [])
        )

    @property
    def finding_count(self) -> int:
        return sum(len(items) for items in self.findings)


class TextScanService:
    """Scans plaintext against detectors in a single request."""

    def __init__(self, handler: RequestHandler, builder: RequestBuilder):
        self._handler = handler
        self._builder = builder
        self._logger = get_logger('nightfall.scan')

    async def scan_text(self, request: ScanTextRequest) -> ScanTextResponse:
        """
        Scan the request payload.

        Raises:
            NightfallAPIError: If the request was rejected
            NightfallTransportError: If no response was obtained
        """
        spec = self._builder.json_request('POST', 'v3/scan', request.to_dict())
        response = await self._handler.execute(spec, ScanTextResponse)
        if response is None:
            response = ScanTextResponse()
        self._logger.debug(f"Text scan of {len(request.payload)} item(s) returned {response.finding_count} finding(s)")
        return response
