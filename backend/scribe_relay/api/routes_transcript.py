"""Transcript status and subtitle endpoints.

The status page is polled by the browser itself: while the transcript is not
done the response carries a ``Refresh`` header, so no JavaScript is needed.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import PlainTextResponse

from ..config import Settings
from ..models.transcript import SubtitleFormat
from ..services.assemblyai import AssemblyAIClient
from .dependencies import get_settings, get_transcription_client

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/transcript/{transcript_id}", response_class=PlainTextResponse, name="get_transcript_status")
async def get_transcript_status(
    transcript_id: str,
    client: AssemblyAIClient = Depends(get_transcription_client),
    settings: Settings = Depends(get_settings),
) -> PlainTextResponse:
    """Return the transcript text once completed, its status otherwise."""
    transcript = await client.get_transcript(transcript_id)
    if transcript.is_completed:
        return PlainTextResponse(transcript.text)
    if not transcript.is_pending:
        # error or unknown status: refreshing would never end
        logger.warning(f"Transcript {transcript_id} stopped with status '{transcript.status}'.")
        return PlainTextResponse(transcript.status)

    logger.debug(f"Transcript {transcript_id} is '{transcript.status}', asking browser to refresh.")
    return PlainTextResponse(
        transcript.status,
        headers={"Refresh": str(settings.TRANSCRIPT_REFRESH_SECONDS)},
    )


@router.get("/transcript/{transcript_id}/{subtitle_format}", response_class=PlainTextResponse)
async def get_transcript_subtitles(
    transcript_id: str,
    subtitle_format: SubtitleFormat,
    chars_per_caption: Optional[int] = Query(None, ge=1),
    client: AssemblyAIClient = Depends(get_transcription_client),
) -> PlainTextResponse:
    """Return the transcript's subtitles as SRT or WebVTT text."""
    subtitles = await client.get_subtitles(transcript_id, subtitle_format, chars_per_caption)
    return PlainTextResponse(subtitles)
