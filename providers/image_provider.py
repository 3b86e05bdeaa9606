"""
Skin Image Provider

Fetches the bytes of a resolved `SkinReference`. Custom skins are downloaded
from their texture URL; default skins are read from the assets directory.
"""

import asyncio
import logging
import mimetypes
from pathlib import Path, PurePosixPath
from typing import Iterable, List
import aiohttp
from core.config import Settings
from core.exceptions import ImageFetchError
from core.models import SkinImage, SkinReference, StageResult

logger = logging.getLogger(__name__)

FALLBACK_CONTENT_TYPE = "application/octet-stream"


class SkinImageProvider:
    """Download skin images and load default skin assets"""

    def __init__(self, settings: Settings):
        self.settings = settings

    async def fetch(self, reference: SkinReference) -> StageResult[SkinImage]:
        if reference.is_default:
            return await self._load_asset(reference)
        return await self._download(reference.url)

    async def _download(self, url: str) -> StageResult[SkinImage]:
        """GET the image and mirror the upstream Content-Type"""
        try:
            timeout = aiohttp.ClientTimeout(total=self.settings.http_timeout_seconds)
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.get(url) as response:
                    if not 200 <= response.status < 300:
                        return StageResult.failure(
                            ImageFetchError(url, f"unexpected status {response.status}")
                        )
                    content = await response.read()
                    content_type = response.headers.get(
                        "Content-Type", FALLBACK_CONTENT_TYPE
                    )

            return StageResult.success(
                SkinImage(content=content, content_type=content_type)
            )

        except Exception as e:
            logger.error(f"Error fetching image {url}: {e}")
            return StageResult.failure(ImageFetchError(url, str(e)))

    def asset_path(self, reference: SkinReference) -> Path:
        return self.settings.assets_dir / PurePosixPath(reference.url).name

    def missing_assets(self, references: Iterable[SkinReference]) -> List[Path]:
        """Asset files that are absent from the assets directory"""
        paths = (self.asset_path(reference) for reference in references)
        return [path for path in paths if not path.is_file()]

    async def _load_asset(self, reference: SkinReference) -> StageResult[SkinImage]:
        """Read a default skin from the assets directory"""
        path = self.asset_path(reference)
        try:
            content = await asyncio.to_thread(path.read_bytes)
        except OSError as e:
            logger.error(f"Error reading default skin asset {path}: {e}")
            return StageResult.failure(ImageFetchError(reference.url, str(e)))

        content_type = mimetypes.guess_type(path.name)[0] or "image/png"
        return StageResult.success(SkinImage(content=content, content_type=content_type))
