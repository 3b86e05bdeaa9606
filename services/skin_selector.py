"""
Skin Selection.

Decides which image to serve for an established player identity. This module
is pure: it performs no I/O and every function returns the same result for the
same input.

Key Components:
- `determine_default_skin`: Picks the `steve` or `alex` default skin from the
  UUID, using the same digit-parity rule as the official client.
- `decode_texture_manifest`: Decodes the base64, JSON-wrapped "textures"
  profile property.
- `select_skin`: Combines the two. A usable `SKIN` texture wins; anything else
  (failed profile fetch, missing property, undecodable manifest, no `SKIN`
  entry) falls back to the default skin.

Fail-soft Policy:
A missing or broken profile is an expected condition, not an error. Every
profile-side failure is logged here and absorbed into the default skin; none
of them ever produces an error response.
"""

import base64
import binascii
import json
import logging
from typing import Optional

from pydantic import ValidationError as PydanticValidationError

from core.models import (
    PlayerProfile,
    SkinReference,
    StageResult,
    TextureManifest,
)

logger = logging.getLogger(__name__)

STEVE_ASSET = "/assets/steve.png"
ALEX_ASSET = "/assets/alex.png"

DEFAULT_SKINS = {
    "steve": SkinReference(url=STEVE_ASSET, source="default", model="steve"),
    "alex": SkinReference(url=ALEX_ASSET, source="default", model="alex"),
}

# Last hex digit of each 32-bit word of the UUID
PARITY_POSITIONS = (7, 15, 23, 31)
LEGACY_IDENTITY_MAX_LENGTH = 16


def _hex_digit(identity: str, position: int) -> int:
    # Positions past the end or non-hex characters contribute nothing to the XOR
    try:
        return int(identity[position], 16)
    except (IndexError, ValueError):
        return 0


def determine_default_skin(identity: str) -> SkinReference:
    """
    Return the default skin for a player without a custom skin.

    Identities of up to 16 characters are legacy/offline names and always get
    `steve`. Otherwise the hex digits at positions 7, 15, 23 and 31 are XORed
    together: a nonzero result selects `alex`, zero selects `steve`.
    """
    if len(identity) <= LEGACY_IDENTITY_MAX_LENGTH:
        return DEFAULT_SKINS["steve"]

    parity = 0
    for position in PARITY_POSITIONS:
        parity ^= _hex_digit(identity, position)

    return DEFAULT_SKINS["alex"] if parity else DEFAULT_SKINS["steve"]


def decode_texture_manifest(value: str) -> TextureManifest:
    """Decode a base64-encoded texture manifest. Raises ValueError on bad input."""
    try:
        raw = base64.b64decode(value, validate=True)
        return TextureManifest.model_validate(json.loads(raw))
    except (
        binascii.Error,
        UnicodeDecodeError,
        json.JSONDecodeError,
        PydanticValidationError,
    ) as e:
        raise ValueError(f"Malformed texture manifest: {e}") from e


def extract_skin_url(profile: PlayerProfile) -> Optional[str]:
    """
    Return the SKIN texture URL of a profile, or None when it has none.
    Raises ValueError when the textures property cannot be decoded.
    """
    textures = profile.get_property("textures")
    if textures is None or textures.value is None:
        return None

    manifest = decode_texture_manifest(textures.value)
    if manifest.textures.SKIN is None:
        return None
    return manifest.textures.SKIN.url


def select_skin(
    identity: str, profile_result: StageResult[PlayerProfile]
) -> SkinReference:
    """Resolve the skin to serve, falling back to the default skin"""
    if not profile_result.ok:
        logger.warning(
            f"Profile unavailable for {identity}, using default skin",
            extra={"uuid": identity, "reason": profile_result.error.details.get("reason")},
        )
        return determine_default_skin(identity)

    try:
        skin_url = extract_skin_url(profile_result.value)
    except ValueError as e:
        logger.warning(f"Could not decode textures for {identity}: {e}")
        return determine_default_skin(identity)

    if not skin_url:
        logger.debug(f"No custom skin for {identity}, using default skin")
        return determine_default_skin(identity)

    return SkinReference(url=skin_url, source="custom")
