"""API endpoints for parsing free text and screenshots into subscription drafts."""

from fastapi import APIRouter, HTTPException
from fastapi.responses import JSONResponse

from app.schemas.subscription import SubscriptionDraft, ParseTextRequest, ParseScreenshotRequest
from app.services import parsing_service
from app.services.errors import NormalizationError, ParseError

router = APIRouter(prefix="/parse", tags=["parse"])


def _normalization_failed(e: NormalizationError) -> JSONResponse:
    return JSONResponse(status_code=422, content={"detail": e.to_dict()})


@router.post("/text", response_model=SubscriptionDraft)
async def parse_text(request: ParseTextRequest):
    """
    Extract a subscription from a sentence like "Netflix 15.99 monthly, renews June 15".
    Returns a draft for the user to confirm; nothing is saved.
    """
    try:
        return await parsing_service.draft_from_text(request.text, api_key=request.api_key)
    except NormalizationError as e:
        return _normalization_failed(e)
    except ParseError as e:
        raise HTTPException(status_code=502, detail=str(e))


@router.post("/screenshot", response_model=SubscriptionDraft)
async def parse_screenshot(request: ParseScreenshotRequest):
    """Extract a subscription from a receipt or email screenshot."""
    try:
        image_bytes, mime_type = parsing_service.decode_image_data_url(request.image_data_url)
    except ParseError as e:
        raise HTTPException(status_code=400, detail=str(e))

    try:
        return await parsing_service.draft_from_image(image_bytes, mime_type=mime_type, api_key=request.api_key)
    except NormalizationError as e:
        return _normalization_failed(e)
    except ParseError as e:
        raise HTTPException(status_code=502, detail=str(e))
