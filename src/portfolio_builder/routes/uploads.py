"""Image upload route."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, File, Request, UploadFile, status
from fastapi.responses import JSONResponse

from portfolio_builder.errors import UploadError
from portfolio_builder.routes.session import CurrentSession, session_state, set_session_cookie

router = APIRouter(prefix="/api", tags=["uploads"])
logger = logging.getLogger(__name__)


@router.post("/upload-image", response_model=None)
async def upload_image(
    request: Request,
    session: CurrentSession,
    image: UploadFile = File(...),
) -> dict[str, Any] | JSONResponse:
    """Store an uploaded image and point the document's ``image`` field at it."""
    uploader = request.app.state.uploader
    # One byte past the limit is enough to reject an oversized file.
    data = await image.read(uploader.max_bytes + 1)
    try:
        url = await uploader.upload(data, image.content_type, image.filename or "")
    except UploadError as exc:
        logger.info("Image upload rejected - %s", exc)
        response = JSONResponse(
            {"success": False, "error": str(exc)},
            status_code=status.HTTP_400_BAD_REQUEST,
        )
        set_session_cookie(response, session.session_id)
        return response
    finally:
        await image.close()

    session.set_field("image", url)
    return {"success": True, "imageUrl": url, **session_state(session)}
