"""nix-timemach data models."""

from timemach.models.diff import GenerationDiff
from timemach.models.generation import Generation, profile_link

__all__ = [
    "Generation",
    "GenerationDiff",
    "profile_link",
]
