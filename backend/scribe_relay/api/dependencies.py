"""FastAPI dependencies shared by the route modules."""

from __future__ import annotations

import logging
from typing import AsyncIterator

from scribe_relay import config
from scribe_relay.exceptions import ConfigurationError
from scribe_relay.services.assemblyai import AssemblyAIClient

logger = logging.getLogger(__name__)


def get_settings() -> config.Settings:
    """Return the current settings (looked up per call so reloads are seen)."""
    return config.settings


async def get_transcription_client() -> AsyncIterator[AssemblyAIClient]:
    """Yield a transcription client for one request and close it afterwards."""
    settings = get_settings()
    if not settings.ASSEMBLYAI_API_KEY:
        logger.error("ASSEMBLYAI_API_KEY is not configured. Cannot reach the transcription service.")
        raise ConfigurationError("Transcription service API key is not configured.")

    async with AssemblyAIClient(
        settings.ASSEMBLYAI_API_KEY,
        settings.ASSEMBLYAI_BASE_URL,
        timeout=settings.HTTP_TIMEOUT_SECONDS,
        poll_interval=settings.POLL_INTERVAL_SECONDS,
        poll_timeout=settings.poll_timeout,
    ) as client:
        yield client
