"""
Skin Service and Pipeline Orchestration.

This module defines the `SkinService`, which turns a raw `player` query into
skin image bytes. It wires the pipeline stages together and owns the decision
of when to stop.

Pipeline:
1. Missing check: an empty query fails with `InputMissingError`.
2. Classification: usernames and UUIDs continue, anything else fails with
   `InputInvalidError` before any network call.
3. Identity resolution (usernames only): `MojangIdentityProvider` resolves
   the username; not-found and lookup failures stop the pipeline.
4. Profile fetch: `MojangProfileProvider` fetches the profile. This stage
   cannot stop the pipeline; its failure is handed to the selector.
5. Skin selection: `select_skin` picks the custom texture or a default skin.
6. Image fetch: `SkinImageProvider` loads the bytes; failure stops the
   pipeline with `ImageFetchError`.

Architectural Design:
- Results, not Exceptions: Each stage returns a `StageResult`. The service
  checks `ok` after every fail-fast stage and returns the failed result as-is,
  so the fail-fast and fail-soft paths are visible in the code.
- Isolation: The service holds only its providers; nothing about a request
  outlives the call, so one instance safely serves concurrent requests.
- Catch-all: Any unexpected exception inside the pipeline is logged and
  reported as `ProcessingError`.
"""

import logging
from typing import Optional

from core.config import Settings
from core.exceptions import InputInvalidError, InputMissingError, ProcessingError
from core.models import PlayerQueryKind, SkinImage, StageResult
from core.validation import classify_player_query
from providers.image_provider import SkinImageProvider
from providers.mojang_provider import MojangIdentityProvider, MojangProfileProvider
from services.skin_selector import select_skin

logger = logging.getLogger(__name__)


class SkinService:
    """Service that resolves a player query to a skin image"""

    def __init__(
        self,
        identity_provider: MojangIdentityProvider,
        profile_provider: MojangProfileProvider,
        image_provider: SkinImageProvider,
    ):
        self.identity_provider = identity_provider
        self.profile_provider = profile_provider
        self.image_provider = image_provider

    @classmethod
    def from_settings(cls, settings: Settings) -> "SkinService":
        return cls(
            identity_provider=MojangIdentityProvider(settings),
            profile_provider=MojangProfileProvider(settings),
            image_provider=SkinImageProvider(settings),
        )

    async def get_skin(self, query: Optional[str]) -> StageResult[SkinImage]:
        try:
            return await self._run_pipeline(query)
        except Exception as e:
            logger.error(
                f"Error processing request for {query!r}: {e}",
                extra={"player": query},
                exc_info=True,
            )
            return StageResult.failure(ProcessingError(type(e).__name__))

    async def resolve_identity(self, query: Optional[str]) -> StageResult[str]:
        """Validate the query and return the UUID it refers to"""
        if not query:
            return StageResult.failure(InputMissingError())

        kind = classify_player_query(query)
        if kind is PlayerQueryKind.UUID:
            # Passed through as given, hyphens included
            return StageResult.success(query)
        if kind is PlayerQueryKind.USERNAME:
            return await self.identity_provider.resolve_uuid(query)
        return StageResult.failure(InputInvalidError(query))

    async def _run_pipeline(self, query: Optional[str]) -> StageResult[SkinImage]:
        identity = await self.resolve_identity(query)
        if not identity.ok:
            logger.warning(
                f"Identity not established for {query!r}: {identity.error.error_code}",
                extra={"player": query, "error_code": identity.error.error_code},
            )
            return StageResult.failure(identity.error)

        uuid = identity.value
        profile = await self.profile_provider.fetch_profile(uuid)
        reference = select_skin(uuid, profile)
        logger.debug(
            f"Selected {reference.source} skin for {uuid}",
            extra={"player": query, "uuid": uuid, "skin_url": reference.url},
        )

        image = await self.image_provider.fetch(reference)
        if not image.ok:
            logger.warning(
                f"Skin image unavailable for {uuid}",
                extra={"player": query, "uuid": uuid, "skin_url": reference.url},
            )
        return image
