"""Exceptions raised by the transcription client and the HTTP layer."""

from __future__ import annotations


class AppBaseException(Exception):
    """Domain-level base exception so we can map to JSON responses easily."""

    def __init__(self, status_code: int, detail: str) -> None:
        super().__init__(detail)
        self.status_code = status_code
        self.detail = detail


class ConfigurationError(AppBaseException):
    """Raised when a required setting (e.g. the API key) is missing."""

    def __init__(self, detail: str) -> None:
        super().__init__(503, detail)


class TranscriptionServiceError(Exception):
    """Base class for everything the transcription client raises."""


class ExternalServiceError(TranscriptionServiceError):
    """The remote service answered with an ``{"error": ...}`` body.

    ``str(exc)`` is the server's message, verbatim.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class TransportError(TranscriptionServiceError):
    """The HTTP exchange itself failed or returned something unusable."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class TranscriptFailedError(TranscriptionServiceError):
    """A transcript reached the ``error`` status without an error message."""

    def __init__(self, transcript_id: str, message: str | None = None) -> None:
        self.transcript_id = transcript_id
        super().__init__(message or f"Transcript '{transcript_id}' failed")


class UnexpectedTranscriptStatusError(TranscriptionServiceError):
    """Polling saw a status that is neither pending, completed nor error."""

    def __init__(self, transcript_id: str, status: str) -> None:
        self.transcript_id = transcript_id
        self.status = status
        super().__init__(f"Transcript '{transcript_id}' has unexpected status '{status}'")


class TranscriptWaitTimeoutError(TranscriptionServiceError):
    """The transcript did not complete within the polling time budget."""

    def __init__(self, transcript_id: str, timeout: float) -> None:
        self.transcript_id = transcript_id
        self.timeout = timeout
        super().__init__(f"Transcript '{transcript_id}' did not complete within {timeout:g} seconds")


class TranscriptWaitCancelledError(TranscriptionServiceError):
    """Polling was stopped through the caller's cancel event."""

    def __init__(self, transcript_id: str) -> None:
        self.transcript_id = transcript_id
        super().__init__(f"Waiting for transcript '{transcript_id}' was cancelled")
