from fastapi import Depends

from core.config import Settings, get_settings
from services.skin_service import SkinService


def get_skin_service(settings: Settings = Depends(get_settings)) -> SkinService:
    return SkinService.from_settings(settings)
