"""FastAPI endpoints for the Catalogue domain."""

import structlog
from fastapi import APIRouter
from fastapi.responses import JSONResponse

from catalogue.api.schemas import MerchListResponse
from catalogue.merch.listing import list_active_merch

logger = structlog.get_logger(__name__)

merch_router = APIRouter(prefix="/merch", tags=["merch"])


@merch_router.get("", response_model=MerchListResponse)
async def list_merch():
    """Active collection, in display order."""
    try:
        items = list_active_merch()
    except Exception:
        logger.exception("Failed to load merchandise collection")
        return JSONResponse(status_code=500, content={"error": "Unable to load collection."})
    return MerchListResponse(items=[item.to_card() for item in items])
