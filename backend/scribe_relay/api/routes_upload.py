"""Upload form and upload endpoint.

1. `GET  /`            – Static HTML form posting a file to `/upload-file`.
2. `POST /upload-file` – Stream the file to the transcription service, queue a
   transcript and redirect (303) the browser to its status page.
"""

import logging

from fastapi import APIRouter, Depends, File, HTTPException, Request, UploadFile, status
from fastapi.responses import HTMLResponse, RedirectResponse

from ..config import Settings
from ..services.assemblyai import AssemblyAIClient, iter_file_chunks
from .dependencies import get_settings, get_transcription_client

router = APIRouter()
logger = logging.getLogger(__name__)

UPLOAD_FORM_HTML = """<!DOCTYPE html>
<body>
  <form action="/upload-file" method="post" enctype="multipart/form-data">
    <label for="file">Upload an audio or video file:</label> <br>
    <input type="file" name="file" id="file" /><br>
    <button type="submit">Submit</button>
  </form>
</body>"""


@router.get("/", response_class=HTMLResponse)
async def upload_form() -> HTMLResponse:
    return HTMLResponse(UPLOAD_FORM_HTML)


@router.post("/upload-file")
async def upload_file(
    request: Request,
    file: UploadFile = File(...),
    client: AssemblyAIClient = Depends(get_transcription_client),
    settings: Settings = Depends(get_settings),
) -> RedirectResponse:
    """Submit the uploaded file for transcription.

    Every call uploads and transcribes again; there is no de-duplication.
    """
    if not file.filename:
        logger.warning("Upload rejected: file part has no filename.")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No file was selected for upload.",
        )

    logger.info(f"Received upload '{file.filename}' ({file.content_type}), forwarding to transcription service.")
    transcript = await client.submit(
        iter_file_chunks(file),
        webhook_url=settings.ASSEMBLYAI_WEBHOOK_URL,
    )

    status_url = request.url_for("get_transcript_status", transcript_id=transcript.id)
    logger.info(f"Upload '{file.filename}' queued as transcript {transcript.id}, redirecting to {status_url}")
    return RedirectResponse(str(status_url), status_code=status.HTTP_303_SEE_OTHER)
