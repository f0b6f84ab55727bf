"""External collaborators: process runner, link resolver, Nix commands."""

from timemach.toolchain.base import CommandResult, CommandRunner, PathResolver
from timemach.toolchain.nix import NixToolchain
from timemach.toolchain.paths import FilesystemPathResolver, ReadlinkPathResolver
from timemach.toolchain.process import SubprocessRunner

__all__ = [
    "CommandResult",
    "CommandRunner",
    "PathResolver",
    "NixToolchain",
    "FilesystemPathResolver",
    "ReadlinkPathResolver",
    "SubprocessRunner",
]
