"""CSV bulk import endpoint for graph nodes and relationships."""
import logging
from typing import Annotated

from fastapi import APIRouter, Depends, File, Request, UploadFile, status
from fastapi.responses import JSONResponse

from app.core.config import settings
from app.core.limiter import limiter
from app.db.graph import GraphStore
from app.db.session import get_graph_store
from app.ingestion.errors import MalformedInputError, StoreConnectivityError
from app.ingestion.orchestrator import import_csv
from app.schemas.imports import ErrorResponse, UploadResponse

logger = logging.getLogger(__name__)

router = APIRouter()


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=message).model_dump())


# ─── POST /Info/upload-csv ───

@router.post(
    "/upload-csv",
    response_model=UploadResponse,
    responses={400: {"model": ErrorResponse}, 413: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    summary="Bulk import nodes, or relationships when the file name contains 'relations'",
)
@limiter.limit(settings.UPLOAD_RATE_LIMIT)
async def upload_csv(
    request: Request,
    store: Annotated[GraphStore, Depends(get_graph_store)],
    file: UploadFile | None = File(default=None),
):
    if file is None or not file.filename:
        logger.warning("upload-csv called without a file")
        return _error(status.HTTP_400_BAD_REQUEST, "No file uploaded")

    content = await file.read()
    if len(content) > settings.UPLOAD_MAX_BYTES:
        return _error(
            status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            f"File exceeds {settings.UPLOAD_MAX_BYTES} bytes",
        )

    logger.info("Received %s (%d bytes)", file.filename, len(content))
    try:
        outcome = await import_csv(store, file.filename, content)
    except MalformedInputError as exc:
        logger.error("Could not read %s: %s", file.filename, exc.message)
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, f"Error reading CSV file: {exc.message}")
    except StoreConnectivityError as exc:
        logger.error("Import of %s aborted: %s", file.filename, exc.message)
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Error processing CSV file: graph store unavailable")

    return UploadResponse.from_outcome(outcome)
