"""
Civic API error kinds.

ValidationError — caller input failed a precondition (400).
UpstreamError   — the civic data collaborator failed (500). The original
                  exception is kept as ``__cause__`` for the logs only.
"""


class CivicAPIError(Exception):
    """Base error rendered as ``{"error": message}`` with ``status_code``."""

    status_code = 500

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self):
        return {'error': self.message}


class ValidationError(CivicAPIError):
    status_code = 400


class UpstreamError(CivicAPIError):
    status_code = 500
