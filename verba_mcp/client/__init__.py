"""HTTP client for the Verba backend."""

from .verba_client import API_PREFIX, BackendResult, BackendTransportError, VerbaClient

__all__ = [
    'API_PREFIX',
    'BackendResult',
    'BackendTransportError',
    'VerbaClient',
]
