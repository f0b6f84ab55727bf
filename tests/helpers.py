"""Test doubles and canned toolchain output for nix-timemach tests."""

from typing import Iterable, Optional, Sequence

from timemach.errors import CommandFailed
from timemach.toolchain.base import CommandResult, CommandRunner, PathResolver

PROFILES_ROOT = "/nix/var/nix/profiles"

CLEAN_LISTING = """\
   1   2024-02-09 10:00:00   nixos-22.11.20240209.123
   2   2024-02-09 11:00:00   nixos-22.11.20240209.456
"""

SUFFIX_LISTING = """\
Generation  Build-date           NixOS Version                Kernel  Configuration Revision  Specialisation
2 current   2024-02-09 11:00:00  22.11.20240209.456 (Raccoon)  6.1.77                                  *
1           2024-02-09 10:00:00  22.11.20240209.123 (Raccoon)  6.1.77                                  *
"""


class FakeRunner(CommandRunner):
    """CommandRunner returning canned results keyed by the full argv.

    Unregistered commands succeed with empty output. Every call is recorded.
    """

    def __init__(self):
        self.responses: dict[tuple[str, ...], CommandResult] = {}
        self.calls: list[list[str]] = []

    def add(self, argv: Sequence[str], stdout: str = "", returncode: int = 0, stderr: str = ""):
        self.responses[tuple(argv)] = CommandResult(
            command=list(argv), returncode=returncode, stdout=stdout, stderr=stderr,
        )

    def run(self, command: str, args: Sequence[str] = ()) -> CommandResult:
        argv = [command, *args]
        self.calls.append(argv)
        return self.responses.get(tuple(argv), CommandResult(command=argv, returncode=0))


class StaticPathResolver(PathResolver):
    """Resolves every path to one canned target, or fails.

    Every path exists unless listed in `missing`.
    """

    def __init__(
        self,
        target: Optional[str] = None,
        error: Optional[str] = None,
        missing: Iterable[str] = (),
    ):
        self.target = target
        self.error = error
        self.missing = set(missing)
        self.resolved: list[str] = []

    def resolve(self, path: str) -> str:
        self.resolved.append(path)
        if self.error is not None:
            raise CommandFailed(["readlink", path], self.error)
        return self.target

    def exists(self, path: str) -> bool:
        return path not in self.missing


def references_argv(path: str) -> list[str]:
    return ["nix-store", "-q", "--references", path]


def link(generation_id: str) -> str:
    return f"{PROFILES_ROOT}/system-{generation_id}-link"
