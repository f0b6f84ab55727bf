"""TimeMachine - wires the toolchain into the lister and the differ.

One TimeMachineOptions describes a run: where the profiles live, how long
commands may take, how profile symlinks are read, and which strategy each
engine uses. Both engines share one NixToolchain, one CommandRunner and one
PathResolver.
"""

from typing import Optional

from pydantic import BaseModel, Field

from timemach.config import (
    COMMAND_TIMEOUT,
    DEFAULT_DIFF_STRATEGY,
    DEFAULT_LINK_RESOLVER,
    DEFAULT_LISTING_FORMAT,
    DEFAULT_PARSE_MODE,
    DEFAULT_PATH_STRATEGY,
    PROFILES_ROOT,
)
from timemach.engines.differ import GenerationDiffer
from timemach.engines.lister import GenerationLister
from timemach.models.diff import GenerationDiff
from timemach.models.generation import Generation
from timemach.toolchain.base import CommandRunner, PathResolver
from timemach.toolchain.nix import NixToolchain
from timemach.toolchain.paths import FilesystemPathResolver, ReadlinkPathResolver
from timemach.toolchain.process import SubprocessRunner
from timemach.types import DiffStrategy, LinkResolver, ListingFormat, ParseMode, PathStrategy


class TimeMachineOptions(BaseModel):
    """Per-run configuration, built by the CLI or by library callers."""
    profiles_root: str = PROFILES_ROOT
    timeout: Optional[float] = Field(default=COMMAND_TIMEOUT, gt=0)
    listing_format: ListingFormat = DEFAULT_LISTING_FORMAT
    parse_mode: ParseMode = DEFAULT_PARSE_MODE
    path_strategy: PathStrategy = DEFAULT_PATH_STRATEGY
    diff_strategy: DiffStrategy = DEFAULT_DIFF_STRATEGY
    parallel: bool = False
    link_resolver: LinkResolver = DEFAULT_LINK_RESOLVER


class TimeMachine:
    """Read-only view over the system profile's generations."""

    def __init__(
        self,
        options: Optional[TimeMachineOptions] = None,
        runner: Optional[CommandRunner] = None,
        path_resolver: Optional[PathResolver] = None,
    ):
        self.options = options or TimeMachineOptions()
        self.runner = runner or SubprocessRunner(timeout=self.options.timeout)
        self.toolchain = NixToolchain(self.runner, profiles_root=self.options.profiles_root)
        self.path_resolver = path_resolver or self._make_resolver()

        self.lister = GenerationLister(
            self.toolchain,
            path_resolver=self.path_resolver,
            listing_format=self.options.listing_format,
            parse_mode=self.options.parse_mode,
        )
        self.differ = GenerationDiffer(
            self.toolchain,
            path_strategy=self.options.path_strategy,
            diff_strategy=self.options.diff_strategy,
            parallel=self.options.parallel,
            path_resolver=self.path_resolver,
        )

    def _make_resolver(self) -> PathResolver:
        if self.options.link_resolver == LinkResolver.READLINK:
            return ReadlinkPathResolver(self.runner)
        return FilesystemPathResolver()

    def list_generations(self) -> list[Generation]:
        return self.lister.list_generations()

    def diff(self, from_id: str, to_id: str) -> GenerationDiff:
        return self.differ.diff(from_id, to_id)
