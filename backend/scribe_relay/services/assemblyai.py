"""Async client for the AssemblyAI REST API.

Only the handful of endpoints this service needs are wrapped: staging a file
upload, creating a transcript, fetching it (once or until it completes) and
exporting subtitles.  Every JSON response is decoded through
:func:`scribe_relay.models.decode_response`; an ``{"error": ...}`` body is
raised as :class:`ExternalServiceError` with the server's message unchanged.
Nothing is retried.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
import time
from typing import Any, AsyncIterable, AsyncIterator, Awaitable, Callable, Optional, Type, Union
from urllib.parse import quote

import httpx

from scribe_relay.exceptions import (
    ExternalServiceError,
    TranscriptFailedError,
    TranscriptWaitCancelledError,
    TranscriptWaitTimeoutError,
    TransportError,
    UnexpectedTranscriptStatusError,
)
from scribe_relay.models.transcript import (
    CreateTranscriptParams,
    ErrorBody,
    ModelT,
    SubtitleFormat,
    Transcript,
    TranscriptStatus,
    UploadResponse,
    decode_response,
)

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.assemblyai.com/v2"
DEFAULT_TIMEOUT_SECONDS = 60.0
DEFAULT_POLL_INTERVAL_SECONDS = 3.0
DEFAULT_POLL_TIMEOUT_SECONDS = 1800.0
UPLOAD_CHUNK_SIZE = 8192

UploadContent = Union[bytes, AsyncIterable[bytes]]


async def iter_file_chunks(file: Any, chunk_size: int = UPLOAD_CHUNK_SIZE) -> AsyncIterator[bytes]:
    """Yield ``file`` in chunks so an upload never holds the whole file in memory.

    ``file`` may expose a synchronous ``read(n)`` (an open binary file) or an
    asynchronous one (FastAPI's ``UploadFile``).  The file is read once from
    its current position; the resulting iterator cannot be replayed.
    """
    while True:
        chunk = file.read(chunk_size)
        if inspect.isawaitable(chunk):
            chunk = await chunk
        if not chunk:
            break
        yield chunk


class AssemblyAIClient:
    """A client for the AssemblyAI API.

    The client owns one :class:`httpx.AsyncClient`; use it as an async context
    manager or call :meth:`aclose` when done.

    Args:
        api_key: The API key, sent as the ``authorization`` header.
        base_url: Root of the API, e.g. a mock server in tests.
        timeout: Timeout in seconds applied to every HTTP call.
        poll_interval: Default delay between polls in :meth:`wait_for_transcript`.
        poll_timeout: Default time budget of :meth:`wait_for_transcript`;
            ``None`` or ``0`` waits forever.
        transport: Optional httpx transport (``httpx.MockTransport`` in tests).
        sleep: Awaitable sleep used between polls.
        clock: Monotonic clock used to enforce ``poll_timeout``.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        *,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        poll_interval: float = DEFAULT_POLL_INTERVAL_SECONDS,
        poll_timeout: Optional[float] = DEFAULT_POLL_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.poll_interval = poll_interval
        self.poll_timeout = poll_timeout
        self._sleep = sleep
        self._clock = clock
        self._http = httpx.AsyncClient(
            base_url=self.base_url,
            headers={"authorization": api_key},
            timeout=timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "AssemblyAIClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    @property
    def is_closed(self) -> bool:
        return self._http.is_closed

    # ------------------------------------------------------------------
    # Endpoints
    # ------------------------------------------------------------------

    async def upload_file(self, content: UploadContent) -> str:
        """
        Uploads a file to the AssemblyAI CDN.

        The file is only accessible to AssemblyAI and is removed after a
        period of time.  No size validation happens here; the service rejects
        what it cannot take.

        Args:
            content: The raw file, either as bytes or as an async iterable of
                chunks (see :func:`iter_file_chunks`).  Streams are consumed
                once.

        Returns:
            The URL of the uploaded file, to be passed to :meth:`create_transcript`.

        Raises:
            ExternalServiceError: If the service answers with an error body.
            TransportError: If the request fails or the body is unusable.
        """
        logger.info("Uploading file to %s/upload", self.base_url)
        response = await self._send(
            "POST",
            "/upload",
            content=content,
            headers={"content-type": "application/octet-stream"},
        )
        upload = self._decode(response, UploadResponse)
        logger.info(f"File uploaded, staged at {upload.upload_url}")
        return upload.upload_url

    async def create_transcript(self, params: CreateTranscriptParams) -> Transcript:
        """
        Creates a transcript.  The transcript is queued for processing and the
        (still empty) transcript object is returned immediately.
        """
        response = await self._send(
            "POST",
            "/transcript",
            json=params.model_dump(exclude_none=True),
        )
        transcript = self._decode(response, Transcript)
        logger.info(f"Transcript {transcript.id} created with status '{transcript.status}'")
        return transcript

    async def submit(self, content: UploadContent, webhook_url: Optional[str] = None) -> Transcript:
        """Upload ``content`` and queue it for transcription in one go."""
        upload_url = await self.upload_file(content)
        return await self.create_transcript(
            CreateTranscriptParams(audio_url=upload_url, webhook_url=webhook_url)
        )

    async def get_transcript(self, transcript_id: str) -> Transcript:
        """Gets the current state of a transcript by its ID."""
        response = await self._send("GET", self._transcript_path(transcript_id))
        transcript = self._decode(response, Transcript)
        logger.debug(f"Transcript {transcript.id} is '{transcript.status}'")
        return transcript

    async def wait_for_transcript(
        self,
        transcript_id: str,
        *,
        poll_interval: Optional[float] = None,
        timeout: Optional[float] = None,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> Transcript:
        """
        Polls a transcript until it is completed and returns it.

        Args:
            transcript_id: The ID of the transcript to wait for.
            poll_interval: Seconds between polls; defaults to the client's value.
            timeout: Time budget in seconds; defaults to the client's value.
                ``0`` waits forever, whatever the client default.
            cancel_event: Set it from elsewhere to stop waiting before the
                next poll.

        Returns:
            The transcript, always with status ``completed``.

        Raises:
            ExternalServiceError: As soon as any poll returns an error body.
            TranscriptFailedError: If the status is ``error`` without a message.
            UnexpectedTranscriptStatusError: On any status this client does not know.
            TranscriptWaitTimeoutError: If the time budget runs out.
            TranscriptWaitCancelledError: If ``cancel_event`` gets set.
        """
        interval = self.poll_interval if poll_interval is None else poll_interval
        budget = self.poll_timeout if timeout is None else timeout
        # 0 means no limit, same as POLL_TIMEOUT_SECONDS=0
        budget = budget or None
        deadline = None if budget is None else self._clock() + budget
        polls = 0

        while True:
            if cancel_event is not None and cancel_event.is_set():
                logger.info(f"Stopped waiting for transcript {transcript_id} after {polls} poll(s)")
                raise TranscriptWaitCancelledError(transcript_id)

            transcript = await self.get_transcript(transcript_id)
            polls += 1

            if transcript.is_completed:
                logger.info(f"Transcript {transcript_id} completed after {polls} poll(s)")
                return transcript

            if transcript.is_pending:
                if deadline is not None and self._clock() + interval > deadline:
                    logger.warning(f"Gave up on transcript {transcript_id} after {polls} poll(s)")
                    raise TranscriptWaitTimeoutError(transcript_id, budget)
                await self._sleep(interval)
                continue

            if transcript.status == TranscriptStatus.ERROR.value:
                raise TranscriptFailedError(transcript_id, transcript.error)

            raise UnexpectedTranscriptStatusError(transcript_id, transcript.status)

    async def get_subtitles(
        self,
        transcript_id: str,
        subtitle_format: Union[SubtitleFormat, str],
        chars_per_caption: Optional[int] = None,
    ) -> str:
        """
        Gets the subtitles of a transcript in the given format.

        Returns:
            The subtitles exactly as the service sent them.

        Raises:
            ExternalServiceError: On a non-200 JSON response carrying an error.
            TransportError: On any other non-200 response.
        """
        subtitle_format = SubtitleFormat(subtitle_format)
        params = {"chars_per_caption": chars_per_caption} if chars_per_caption else None
        response = await self._send(
            "GET",
            f"{self._transcript_path(transcript_id)}/{subtitle_format.value}",
            params=params,
        )

        if response.status_code != 200:
            content_type = response.headers.get("content-type", "")
            if content_type.startswith("application/json"):
                body = self._json(response)
                if isinstance(body, dict) and body.get("error"):
                    raise ExternalServiceError(str(body["error"]))
            raise TransportError(
                f"Get subtitles request returned status {response.status_code} {response.reason_phrase}",
                status_code=response.status_code,
            )

        return response.text

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _transcript_path(transcript_id: str) -> str:
        return f"/transcript/{quote(transcript_id, safe='')}"

    async def _send(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        try:
            return await self._http.request(method, path, **kwargs)
        except httpx.RequestError as exc:
            logger.error(f"{method} {path} failed: {exc}", exc_info=True)
            raise TransportError(f"{method} {path} failed: {exc}") from exc

    @staticmethod
    def _json(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            raise TransportError(
                f"Expected a JSON body from {response.request.url}, got status {response.status_code}",
                status_code=response.status_code,
            ) from exc

    def _decode(self, response: httpx.Response, model: Type[ModelT]) -> ModelT:
        result = decode_response(self._json(response), model)
        if isinstance(result, ErrorBody):
            logger.error(f"{response.request.method} {response.request.url.path} returned error: {result.error}")
            raise ExternalServiceError(result.error)
        return result
