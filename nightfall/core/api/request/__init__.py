"""Request handling: building, classifying and retrying API requests."""
from .response_handler import ResponseHandler, RequestOutcome, ClassifiedResponse
from .request_builder import RequestBuilder, RequestSpec
from .request_handler import RequestHandler

__all__ = [
    'RequestHandler',
    'RequestBuilder',
    'RequestSpec',
    'ResponseHandler',
    'RequestOutcome',
    'ClassifiedResponse',
]
