# Namespace for the Pydantic models exchanged with the transcription service.
from .transcript import (
    CreateTranscriptParams,
    ErrorBody,
    SubtitleFormat,
    Transcript,
    TranscriptStatus,
    UploadResponse,
    decode_response,
)

__all__ = [
    "CreateTranscriptParams",
    "ErrorBody",
    "SubtitleFormat",
    "Transcript",
    "TranscriptStatus",
    "UploadResponse",
    "decode_response",
]
