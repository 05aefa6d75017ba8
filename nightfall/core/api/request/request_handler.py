"""Request handler with bounded retry on rate limiting."""
from typing import Any, Optional, Type

from .request_builder import RequestSpec
from .response_handler import ResponseHandler, RequestOutcome
from ..config import RetryConfig
from ..retry import RetryStrategy, FixedBackoffStrategy
from ..transport import Transport
from ...logging import get_logger


class RequestHandler:
    """
    Executes requests through a transport with retry logic.

    Only rate-limited responses are retried; client and server errors as well
    as transport failures are returned to the caller at once. Holds no state
    between calls.
    """

    def __init__(
        self,
        transport: Transport,
        retry_config: Optional[RetryConfig] = None,
        retry_strategy: Optional[RetryStrategy] = None
    ):
        """Initializes request handler."""
        self.transport = transport
        self.retry_config = retry_config or RetryConfig()
        self.retry_strategy = retry_strategy or FixedBackoffStrategy(self.retry_config.backoff_delay)
        self.logger = get_logger('nightfall.api')

    async def execute(self, spec: RequestSpec, response_type: Optional[Type] = None) -> Any:
        """
        Executes request with retry logic.

        Args:
            spec: Request to issue (reissued unchanged on every attempt)
            response_type: Optional class with ``from_dict`` to decode into

        Returns:
            Decoded body; ``None`` without a ``response_type`` or for an empty body

        Raises:
            NightfallAPIError: For non-2xx responses, including exhausted rate limiting
            NightfallTransportError: If no response was obtained
            asyncio.CancelledError: If the calling task is cancelled
        """
        max_attempts = self.retry_config.max_attempts
        attempt = 0

        while True:
            attempt += 1
            # Transport errors propagate unchanged; cancellation surfaces as CancelledError.
            response = await self.transport.send(spec.method, spec.url, spec.headers, spec.body)
            result = ResponseHandler.classify(response)

            if result.outcome is RequestOutcome.SUCCESS:
                return self._decode(result.body, response_type)

            if self.retry_strategy.should_retry(result.outcome, attempt, max_attempts):
                self.logger.warning(
                    f"{spec.method} {spec.url} rate limited "
                    f"(attempt {attempt}/{max_attempts}), retrying"
                )
                await self.retry_strategy.wait_async(attempt)
                continue

            self.logger.debug(
                f"{spec.method} {spec.url} failed with {result.outcome.value} "
                f"after {attempt} attempt(s): {result.error!r}"
            )
            raise result.error

    @staticmethod
    def _decode(body: bytes, response_type: Optional[Type]) -> Any:
        # Bodies are only parsed when the caller wants a decoded value
        if response_type is None:
            return None
        payload = ResponseHandler.parse_body(body)
        if payload is None:
            return None
        return response_type.from_dict(payload)
