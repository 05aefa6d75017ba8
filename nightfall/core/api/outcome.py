"""Request outcome classification shared by the request and retry layers."""
from enum import Enum


class RequestOutcome(Enum):
    """Classification of a completed HTTP exchange."""
    SUCCESS = 'success'
    CLIENT_ERROR = 'client_error'
    SERVER_ERROR = 'server_error'
    RATE_LIMITED = 'rate_limited'
