"""Transcribe a local file from the command line.

Unlike the web flow, which lets the browser re-poll, this waits in-process with
:meth:`AssemblyAIClient.wait_for_transcript` and prints the result::

    scribe-relay-transcribe interview.mp3 --format srt
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from scribe_relay.config import Settings, settings as default_settings
from scribe_relay.exceptions import TranscriptionServiceError
from scribe_relay.logging_config import setup_logging
from scribe_relay.models.transcript import SubtitleFormat
from scribe_relay.services.assemblyai import AssemblyAIClient, iter_file_chunks

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_TRANSCRIPTION_ERROR = 1
EXIT_USAGE_ERROR = 2


async def transcribe_file(
    path: Path,
    client: AssemblyAIClient,
    output_format: str = "text",
    webhook_url: Optional[str] = None,
    poll_interval: Optional[float] = None,
    timeout: Optional[float] = None,
) -> str:
    """Upload ``path``, wait for its transcript and return text or subtitles."""
    with path.open("rb") as audio_file:
        transcript = await client.submit(iter_file_chunks(audio_file), webhook_url=webhook_url)
    logger.info(f"Waiting for transcript {transcript.id} of {path}")

    transcript = await client.wait_for_transcript(transcript.id, poll_interval=poll_interval, timeout=timeout)
    if output_format == "text":
        return transcript.text
    return await client.get_subtitles(transcript.id, SubtitleFormat(output_format))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="scribe-relay-transcribe",
        description="Transcribe an audio or video file with AssemblyAI.",
    )
    parser.add_argument("path", type=Path, help="audio or video file to transcribe")
    parser.add_argument(
        "--format",
        dest="output_format",
        choices=["text", *(f.value for f in SubtitleFormat)],
        default="text",
        help="print plain text (default) or subtitles",
    )
    parser.add_argument("--poll-interval", type=float, default=None, help="seconds between status checks")
    parser.add_argument("--timeout", type=float, default=None, help="give up after this many seconds (0 waits forever)")
    return parser


def main(argv: Optional[Sequence[str]] = None, settings: Settings = default_settings) -> int:
    args = build_parser().parse_args(argv)
    # stdout carries the transcript itself
    setup_logging(log_dir="", level=settings.LOG_LEVEL, stream=sys.stderr)

    if not settings.ASSEMBLYAI_API_KEY:
        print("ASSEMBLYAI_API_KEY is not set.", file=sys.stderr)
        return EXIT_USAGE_ERROR
    if not args.path.is_file():
        print(f"No such file: {args.path}", file=sys.stderr)
        return EXIT_USAGE_ERROR

    async def _run() -> str:
        async with AssemblyAIClient(
            settings.ASSEMBLYAI_API_KEY,
            settings.ASSEMBLYAI_BASE_URL,
            timeout=settings.HTTP_TIMEOUT_SECONDS,
            poll_interval=settings.POLL_INTERVAL_SECONDS,
            poll_timeout=settings.poll_timeout,
        ) as client:
            return await transcribe_file(
                args.path,
                client,
                output_format=args.output_format,
                webhook_url=settings.ASSEMBLYAI_WEBHOOK_URL,
                poll_interval=args.poll_interval,
                timeout=args.timeout,
            )

    try:
        output = asyncio.run(_run())
    except TranscriptionServiceError as exc:
        logger.error(f"Transcription of {args.path} failed: {exc}")
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_TRANSCRIPTION_ERROR

    print(output)
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
