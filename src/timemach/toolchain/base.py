"""Collaborator protocols: running external commands and resolving links."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Sequence

from timemach.errors import CommandFailed


@dataclass
class CommandResult:
    """Captured outcome of one external command."""
    command: list[str]
    returncode: int
    stdout: str = ""
    stderr: str = field(default="", repr=False)

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    def check(self) -> "CommandResult":
        """Raise CommandFailed unless the command exited 0."""
        if not self.ok:
            raise CommandFailed(self.command, self.stderr, self.returncode)
        return self

    def lines(self) -> list[str]:
        return self.stdout.splitlines()


class CommandRunner(ABC):
    """Protocol for running an external command to completion."""

    @abstractmethod
    def run(self, command: str, args: Sequence[str] = ()) -> CommandResult: ...


class PathResolver(ABC):
    """Protocol for following a profile indirection to its target."""

    @abstractmethod
    def resolve(self, path: str) -> str: ...

    @abstractmethod
    def exists(self, path: str) -> bool: ...
