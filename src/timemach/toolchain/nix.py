"""NixToolchain - the handful of Nix commands the engines consume.

Every method returns raw stdout; interpreting it is the engines' job.
Non-zero exits surface as CommandFailed carrying the command's stderr.
"""

from timemach.config import (
    NIX_DIFF,
    NIX_ENV,
    NIX_STORE,
    NIXOS_REBUILD,
    PROFILES_ROOT,
    SYSTEM_PROFILE_NAME,
)
from timemach.toolchain.base import CommandResult, CommandRunner
from timemach.types import ListingFormat


class NixToolchain:
    """Thin wrapper that knows command lines, not output formats."""

    def __init__(self, runner: CommandRunner, profiles_root: str = PROFILES_ROOT):
        self.runner = runner
        self.profiles_root = profiles_root.rstrip("/")

    @property
    def system_profile(self) -> str:
        return f"{self.profiles_root}/{SYSTEM_PROFILE_NAME}"

    def list_generations(self, listing_format: ListingFormat = ListingFormat.CLEAN) -> str:
        if listing_format == ListingFormat.CURRENT_SUFFIX:
            result = self.runner.run(NIXOS_REBUILD, ["list-generations"])
        else:
            result = self.runner.run(NIX_ENV, ["--list-generations", "-p", self.system_profile])
        return result.check().stdout

    def query_out_path(self, link: str) -> CommandResult:
        """Unchecked: callers map a non-zero exit to GenerationNotFound."""
        return self.runner.run(NIX_ENV, ["-p", link, "--query", "--out-path"])

    def query_references(self, path: str) -> str:
        return self.runner.run(NIX_STORE, ["-q", "--references", path]).check().stdout

    def nix_diff(self, from_path: str, to_path: str) -> str:
        return self.runner.run(NIX_DIFF, [from_path, to_path]).check().stdout
