"""
Mojang Provider Classes

Thin aiohttp clients for the two Mojang web services the skin pipeline needs.
Each provider method makes exactly one outbound call, never retries, and
returns a `StageResult` instead of raising.
"""

import logging
from typing import Any
import aiohttp
from core.config import Settings
from core.exceptions import (
    IdentityLookupError,
    IdentityNotFoundError,
    ProfileUnavailableError,
)
from core.models import NameLookupRecord, PlayerProfile, StageResult

logger = logging.getLogger(__name__)


class MojangProvider:
    """Shared settings and timeout handling for Mojang clients"""

    def __init__(self, settings: Settings):
        self.settings = settings

    @property
    def timeout(self) -> aiohttp.ClientTimeout:
        return aiohttp.ClientTimeout(total=self.settings.http_timeout_seconds)


class MojangIdentityProvider(MojangProvider):
    """Resolve usernames to UUIDs via the bulk lookup endpoint"""

    async def resolve_uuid(self, username: str) -> StageResult[str]:
        """
        Look up a single username.

        An empty lookup result means the account does not exist. Transport
        errors, non-200 answers and unreadable bodies are lookup failures.
        """
        try:
            async with aiohttp.ClientSession(timeout=self.timeout) as session:
                async with session.post(
                    self.settings.bulk_lookup_url, json=[username]
                ) as response:
                    if response.status != 200:
                        return StageResult.failure(
                            IdentityLookupError(
                                username, f"unexpected status {response.status}"
                            )
                        )
                    data: Any = await response.json(content_type=None)

            if not _has_first_record_id(data):
                logger.info(f"No account found for {username}")
                return StageResult.failure(IdentityNotFoundError(username))

            record = NameLookupRecord.model_validate(data[0])
            logger.debug(f"Resolved {username} to {record.id}")
            return StageResult.success(record.id)

        except Exception as e:
            logger.error(f"Error fetching UUID for {username}: {e}")
            return StageResult.failure(IdentityLookupError(username, str(e)))


class MojangProfileProvider(MojangProvider):
    """Fetch profile records from the session server"""

    async def fetch_profile(self, uuid: str) -> StageResult[PlayerProfile]:
        """
        Fetch the profile of a UUID.

        Every failure is reported as `ProfileUnavailableError`, which the
        skin selector turns into the default skin.
        """
        url = self.settings.profile_url(uuid)
        try:
            async with aiohttp.ClientSession(timeout=self.timeout) as session:
                async with session.get(url) as response:
                    # 204 is how the session server answers unknown UUIDs
                    if response.status != 200:
                        return StageResult.failure(
                            ProfileUnavailableError(
                                uuid, f"unexpected status {response.status}"
                            )
                        )
                    data = await response.json(content_type=None)

            return StageResult.success(PlayerProfile.model_validate(data))

        except Exception as e:
            logger.error(f"Error fetching Minecraft profile for {uuid}: {e}")
            return StageResult.failure(ProfileUnavailableError(uuid, str(e)))


def _has_first_record_id(data: Any) -> bool:
    return (
        isinstance(data, list)
        and len(data) > 0
        and isinstance(data[0], dict)
        and bool(data[0].get("id"))
    )
