"""
API Endpoints for the Skin API.

This module defines the single public endpoint of the service.

Endpoints Provided:
- `/api/skin?player=<name-or-uuid>`: Resolves a Minecraft username or UUID to
  the player's current skin and streams the image bytes back with the
  upstream content type.

Error Handling:
- The endpoint never raises for expected failures. `SkinService.get_skin`
  returns a `StageResult`, and a failed result is converted with
  `to_error_response` into a plain-text body and the status code of its
  error class.
"""

import logging
from typing import Optional
from fastapi import APIRouter, Depends, Query, Response

from core.exceptions import to_error_response
from core.logging_config import log_function_call
from services.skin_service import SkinService
from .dependencies import get_skin_service

logger = logging.getLogger(__name__)


router = APIRouter(prefix="/api", tags=["Player Skins"])


@router.get("/skin")
@log_function_call(logger)
async def get_player_skin(
    player: Optional[str] = Query(None, description="Minecraft username or UUID"),
    skin_service: SkinService = Depends(get_skin_service),
):
    """Return the skin image of a player"""
    result = await skin_service.get_skin(player)

    if not result.ok:
        logger.info(
            f"Skin request for {player!r} failed: {result.error.error_code}",
            extra={
                "player": player,
                "error_code": result.error.error_code,
                "details": result.error.details,
            },
        )
        return to_error_response(result.error)

    image = result.value
    return Response(content=image.content, headers={"Content-Type": image.content_type})
