"""
Domain Errors

Every failure a caller is expected to recover from is a DomainError with a
stable machine-readable code and the HTTP status the API layer renders it
with. Business "absence" (no booking yet, unknown email) is returned as None
and never raised.
"""

from typing import Any, Mapping


class DomainError(Exception):
    """Base class for recoverable, user-facing failures"""

    code = 'domain_error'
    status_code = 400
    default_message = 'Request could not be processed'

    def __init__(self, message: str | None = None, details: Mapping[str, Any] | None = None):
        self.message = message or self.default_message
        self.details = dict(details) if details else {}
        super().__init__(self.message)

    def to_dict(self) -> dict:
        payload = {
            'status': 'error',
            'code': self.code,
            'message': self.message,
        }
        if self.details:
            payload['details'] = self.details
        return payload


class StorageUnavailableError(DomainError):
    """The record store failed; the request itself may be fine, try again later"""

    code = 'storage_unavailable'
    status_code = 503
    default_message = 'Storage is temporarily unavailable. Please try again later.'
