# Router aggregator – import each route module here and expose ``api_router``
# for convenient inclusion in the FastAPI app.

from fastapi import APIRouter

from . import routes_transcript, routes_upload


api_router = APIRouter()
api_router.include_router(routes_upload.router, tags=["upload"])
api_router.include_router(routes_transcript.router, tags=["transcript"])
