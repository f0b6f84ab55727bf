"""GenerationDiff model - what changed between two generations."""

from pydantic import BaseModel, Field


class GenerationDiff(BaseModel):
    """Three-way classification of the delta between two dependency sets.

    `removed` and `modified` are computed independently, so a dependency
    that vanished may also be reported as modified when a differently
    hashed entry with the same package name exists in the target.
    """
    added: list[str] = Field(default_factory=list)
    removed: list[str] = Field(default_factory=list)
    modified: list[str] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not (self.added or self.removed or self.modified)

    def summary(self) -> dict[str, int]:
        return {
            "added": len(self.added),
            "removed": len(self.removed),
            "modified": len(self.modified),
        }
