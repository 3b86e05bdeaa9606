"""
Runtime configuration for the Skin API.

All settings come from environment variables so the service can be pointed at
mock upstreams or a different assets directory without code changes. The
`get_settings` function is used as a FastAPI dependency, which lets tests swap
in their own `Settings` through `app.dependency_overrides`.
"""

import os
from dataclasses import dataclass
from pathlib import Path

DEFAULT_ASSETS_DIR = Path(__file__).resolve().parent.parent / "assets"


@dataclass(frozen=True)
class Settings:
    """Upstream endpoints, assets location and outbound timeout"""

    services_base_url: str = "https://api.minecraftservices.com"
    session_base_url: str = "https://sessionserver.mojang.com"
    assets_dir: Path = DEFAULT_ASSETS_DIR
    http_timeout_seconds: float = 10.0

    @property
    def bulk_lookup_url(self) -> str:
        return f"{self.services_base_url.rstrip('/')}/minecraft/profile/lookup/bulk/byname"

    def profile_url(self, uuid: str) -> str:
        return f"{self.session_base_url.rstrip('/')}/session/minecraft/profile/{uuid}"


def get_settings() -> Settings:
    """Build settings from the current environment"""
    return Settings(
        services_base_url=os.getenv(
            "MOJANG_SERVICES_URL", "https://api.minecraftservices.com"
        ),
        session_base_url=os.getenv(
            "MOJANG_SESSION_URL", "https://sessionserver.mojang.com"
        ),
        assets_dir=Path(os.getenv("SKIN_ASSETS_DIR", str(DEFAULT_ASSETS_DIR))),
        http_timeout_seconds=float(os.getenv("HTTP_TIMEOUT_SECONDS", "10")),
    )
