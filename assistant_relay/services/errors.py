"""Errors raised while relaying a message to the remote assistant.

Every error carries a ``message`` meant for logs and the ``error`` field of a
relay result, never for the end user.
"""
from typing import Optional


class RelayError(Exception):
    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ConfigurationError(RelayError):
    """API key or assistant id is missing."""


class RemoteServiceError(RelayError):
    """The remote API answered with a non-success status or could not be reached."""

    def __init__(self, message: str, http_status: Optional[int] = None):
        self.http_status = http_status
        super().__init__(message)


class RunFailedError(RelayError):
    def __init__(self, status: str):
        self.status = status
        super().__init__(f"Run failed with status: {status}")


class RunTimeoutError(RelayError):
    def __init__(self, attempts: int):
        self.attempts = attempts
        super().__init__("Run timed out")


class ReplyExtractionError(RelayError):
    """No assistant reply, or the reply is not text."""
