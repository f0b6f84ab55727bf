"""Generation model - one numbered, immutable build of the system profile."""

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, Field, field_serializer, field_validator

from timemach.config import GENERATION_LINK_TEMPLATE, PROFILES_ROOT


def profile_link(generation_id: str, profiles_root: str = PROFILES_ROOT) -> str:
    """Path of the link the toolchain keeps for a generation."""
    return GENERATION_LINK_TEMPLATE.format(root=profiles_root.rstrip("/"), id=generation_id)


class Generation(BaseModel):
    """A single entry of the system profile's generation list.

    `profiles` is never read from toolchain output; it is derived from the id
    by the link naming convention. `current` is filled in by a separate
    resolution step and defaults to False.
    """
    id: str = Field(description="Ordinal generation number, as a string")
    timestamp: datetime = Field(description="Creation time, UTC")
    description: Optional[str] = None
    profiles: list[str] = Field(default_factory=list)
    current: bool = False

    model_config = {"frozen": True}

    @field_validator("id")
    @classmethod
    def _check_id(cls, v: str) -> str:
        if not (v.isascii() and v.isdigit()):
            raise ValueError(f"generation id must be a non-negative integer, got {v!r}")
        return v

    @field_validator("timestamp")
    @classmethod
    def _to_utc(cls, v: datetime) -> datetime:
        # Listing times carry no zone; they are taken as UTC.
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v.astimezone(timezone.utc)

    @field_serializer("timestamp", when_used="json")
    def _rfc3339(self, v: datetime) -> str:
        return v.isoformat().replace("+00:00", "Z")

    @classmethod
    def from_listing(
        cls,
        generation_id: str,
        timestamp: datetime,
        description: Optional[str] = None,
        profiles_root: str = PROFILES_ROOT,
        current: bool = False,
    ) -> "Generation":
        """Build a Generation, deriving `profiles` from the id."""
        return cls(
            id=generation_id,
            timestamp=timestamp,
            description=description,
            profiles=[profile_link(generation_id, profiles_root)],
            current=current,
        )
