"""
Exceptions raised by the voice session services.

The controller turns every one of them into the ``error`` status; the token
issuance endpoint turns them into JSON error responses.
"""

from typing import Optional


class VoiceSessionError(Exception):
    """Base class for errors raised by this package."""


class ConfigurationError(VoiceSessionError):
    """Required server-side credentials are missing."""


class TokenIssuanceError(VoiceSessionError):
    """The token issuance endpoint could not be reached or rejected the request."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ProviderError(VoiceSessionError):
    """The voice-call provider rejected a create-web-call request."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code
