"""Pydantic models for the transcription service's request/response bodies.

Every JSON body the service returns is either the expected success shape or an
``{"error": "..."}`` object.  :func:`decode_response` is the single place that
tells the two apart, so callers always hold a typed value.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional, Type, TypeVar, Union

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from scribe_relay.exceptions import TransportError


class TranscriptStatus(str, Enum):
    """Lifecycle of a transcript on the remote service."""

    QUEUED = "queued"
    PROCESSING = "processing"
    COMPLETED = "completed"
    ERROR = "error"


PENDING_STATUSES = frozenset({TranscriptStatus.QUEUED.value, TranscriptStatus.PROCESSING.value})


class SubtitleFormat(str, Enum):
    """Subtitle formats the service can export a transcript to."""

    SRT = "srt"
    VTT = "vtt"


class Transcript(BaseModel):
    """Snapshot of a transcript as returned by the service.

    Only the fields this service relies on are declared; anything else the
    service sends (words, confidence, language, ...) is kept as extra data.
    """

    model_config = ConfigDict(extra="allow")

    id: str
    # Kept as a plain string so unknown statuses can be reported, not rejected.
    status: str
    text: str = ""
    audio_url: Optional[str] = None
    error: Optional[str] = None

    @field_validator("text", mode="before")
    @classmethod
    def _null_text_is_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @property
    def is_completed(self) -> bool:
        return self.status == TranscriptStatus.COMPLETED.value

    @property
    def is_pending(self) -> bool:
        return self.status in PENDING_STATUSES


class CreateTranscriptParams(BaseModel):
    """Body of ``POST /transcript``."""

    audio_url: str
    webhook_url: Optional[str] = None


class UploadResponse(BaseModel):
    """Body returned by ``POST /upload``."""

    upload_url: str


class ErrorBody(BaseModel):
    """The error arm of every JSON response."""

    error: str


ModelT = TypeVar("ModelT", bound=BaseModel)


def decode_response(payload: Any, model: Type[ModelT]) -> Union[ModelT, ErrorBody]:
    """Turn a parsed JSON payload into either ``model`` or :class:`ErrorBody`.

    A mapping with a truthy ``error`` field is always the error arm, even if
    it also looks like a success body (a failed transcript carries both).

    Raises:
        TransportError: If the payload matches neither shape.
    """
    if isinstance(payload, dict) and payload.get("error"):
        return ErrorBody(error=str(payload["error"]))
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        raise TransportError(
            f"Unexpected response body for {model.__name__}: {exc.error_count()} validation error(s)"
        ) from exc
