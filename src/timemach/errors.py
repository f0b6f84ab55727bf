"""Error taxonomy for nix-timemach."""

from typing import Optional, Sequence


class TimeMachError(Exception):
    """Base class for every failure surfaced to the caller."""


class CommandFailed(TimeMachError):
    """An external command could not be spawned or exited non-zero."""

    def __init__(
        self,
        command: Sequence[str],
        stderr: str,
        returncode: Optional[int] = None,
    ):
        self.command = list(command)
        self.stderr = stderr
        self.returncode = returncode
        super().__init__(f"Failed to execute {' '.join(self.command)}: {stderr.strip()}")


class ParseFailure(TimeMachError):
    """Toolchain output did not match its expected textual contract."""

    def __init__(self, what: str, detail: str):
        self.what = what
        self.detail = detail
        super().__init__(f"Failed to parse {what}: {detail}")


class GenerationNotFound(TimeMachError):
    """A generation id has no resolvable profile or store path."""

    def __init__(self, generation_id: str, reason: Optional[str] = None):
        self.generation_id = generation_id
        self.reason = reason
        message = f"Generation not found: {generation_id}"
        if reason:
            message += f" ({reason.strip()})"
        super().__init__(message)
