"""Inline text scanning."""
from .text_service import ScanTextRequest, ScanTextResponse, TextScanService

__all__ = [
    'ScanTextRequest',
    'ScanTextResponse',
    'TextScanService',
]
