"""
Core data models for the Skin API

Pydantic models for the Mojang payloads the pipeline consumes, plus the small
dataclasses that carry values between pipeline stages. Nothing here is
persisted; every instance lives for a single request.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, List, Optional, TypeVar
from pydantic import BaseModel, ConfigDict, Field

from core.exceptions import SkinAPIException

T = TypeVar("T")


class PlayerQueryKind(str, Enum):
    USERNAME = "username"
    UUID = "uuid"
    INVALID = "invalid"


class NameLookupRecord(BaseModel):
    """One entry of the bulk username lookup response"""

    id: str
    name: Optional[str] = None


class ProfileProperty(BaseModel):
    name: Optional[str] = None
    value: Optional[str] = None
    signature: Optional[str] = None


class PlayerProfile(BaseModel):
    """
    Profile record returned by the session server.
    The "textures" property holds a base64-encoded texture manifest.
    """

    id: Optional[str] = None
    name: Optional[str] = None
    properties: List[ProfileProperty] = Field(default_factory=list)

    def get_property(self, name: str) -> Optional[ProfileProperty]:
        return next((prop for prop in self.properties if prop.name == name), None)


class TextureEntry(BaseModel):
    url: str
    metadata: Optional[dict] = None


class TextureSet(BaseModel):
    SKIN: Optional[TextureEntry] = None
    CAPE: Optional[TextureEntry] = None


class TextureManifest(BaseModel):
    """Decoded value of the "textures" profile property"""

    model_config = ConfigDict(extra="ignore")

    textures: TextureSet


@dataclass(frozen=True)
class SkinReference:
    """Where the skin image for a player lives"""

    url: str
    source: str  # custom, default
    model: Optional[str] = None  # steve, alex for default skins

    @property
    def is_default(self) -> bool:
        return self.source == "default"


@dataclass(frozen=True)
class SkinImage:
    content: bytes
    content_type: str


@dataclass(frozen=True)
class StageResult(Generic[T]):
    """
    Outcome of one pipeline stage: a success value or a tagged error.

    Stages return this instead of raising so the orchestrator can stop at the
    first failure with an early return.
    """

    value: Optional[T] = None
    error: Optional[SkinAPIException] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "StageResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: SkinAPIException) -> "StageResult[T]":
        return cls(error=error)
