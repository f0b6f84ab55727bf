"""PathResolver implementations for the profile indirection."""

import os

from timemach.config import READLINK
from timemach.errors import CommandFailed
from timemach.toolchain.base import CommandRunner, PathResolver


class FilesystemPathResolver(PathResolver):
    """Reads the symlink directly with os.readlink."""

    def resolve(self, path: str) -> str:
        try:
            return os.readlink(path)
        except OSError as e:
            raise CommandFailed([READLINK, path], str(e))

    def exists(self, path: str) -> bool:
        # Dangling generation links still name a generation.
        return os.path.lexists(path)


class ReadlinkPathResolver(PathResolver):
    """Shells out to readlink(1) through a CommandRunner."""

    def __init__(self, runner: CommandRunner):
        self._runner = runner

    def resolve(self, path: str) -> str:
        result = self._runner.run(READLINK, [path]).check()
        return result.stdout.strip()

    def exists(self, path: str) -> bool:
        # Generation links are symlinks; readlink fails on anything else.
        return self._runner.run(READLINK, [path]).ok
