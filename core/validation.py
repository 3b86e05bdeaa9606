"""
Player Query Validation.

This module classifies the raw `player` query parameter before any network
call is made. A query is either a Minecraft username, a Minecraft UUID (with
or without hyphens), or invalid.

Key Components:
- `InputValidator`: Holds the compiled patterns and the classification logic.
- `classify_player_query`: Module-level shortcut used by the skin service.

The three categories are disjoint: a username is at most 16 characters and a
UUID is at least 32, so no string matches both patterns.
"""

import re
from typing import Optional

from core.logging_config import get_logger
from core.models import PlayerQueryKind

logger = get_logger(__name__)


class InputValidator:
    """Classification of player names and UUIDs"""

    USERNAME_PATTERN = re.compile(r"[a-zA-Z0-9_]{3,16}")
    UUID_HYPHENATED_PATTERN = re.compile(
        r"[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}"
    )
    UUID_BARE_PATTERN = re.compile(r"[0-9a-fA-F]{32}")

    @staticmethod
    def is_username(value: str) -> bool:
        return bool(InputValidator.USERNAME_PATTERN.fullmatch(value))

    @staticmethod
    def is_uuid(value: str) -> bool:
        return bool(
            InputValidator.UUID_HYPHENATED_PATTERN.fullmatch(value)
            or InputValidator.UUID_BARE_PATTERN.fullmatch(value)
        )

    @staticmethod
    def classify(value: Optional[str]) -> PlayerQueryKind:
        """Decide whether a query is a username, a UUID or neither"""
        if not value:
            return PlayerQueryKind.INVALID
        if InputValidator.is_username(value):
            return PlayerQueryKind.USERNAME
        if InputValidator.is_uuid(value):
            return PlayerQueryKind.UUID

        logger.debug(f"Rejected player query: {value!r}")
        return PlayerQueryKind.INVALID


def classify_player_query(value: Optional[str]) -> PlayerQueryKind:
    return InputValidator.classify(value)
