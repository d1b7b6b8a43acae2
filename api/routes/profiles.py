"""
HSR Tools - Player profile proxy.

Forwards public profile lookups to the Mihomo API and passes its status
and body through unchanged.
"""

import logging

import httpx
from fastapi import APIRouter, Depends, HTTPException, Path
from fastapi.responses import Response

from api.middleware.rate_limit import rate_limit
from shared.mihomo_client import MihomoClient

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")


@router.get(
    "/mihomo/{uid}",
    dependencies=[Depends(rate_limit("mihomo", "RATE_LIMIT_MIHOMO_PER_MINUTE"))],
)
async def get_mihomo_profile(
    uid: str = Path(..., pattern=r"^\d{1,20}$", description="In-game player UID"),
) -> Response:
    """Proxy ``sr_info_parsed/{uid}`` from the Mihomo API."""
    try:
        status_code, body = await MihomoClient().fetch_profile(uid)
    except httpx.HTTPError:
        raise HTTPException(status_code=502, detail="Failed to fetch from Mihomo API")

    return Response(content=body, status_code=status_code, media_type="application/json")
