"""GenerationLister - turns the toolchain's generation list into records.

Two listing shapes are understood:

    CLEAN (nix-env --list-generations -p /nix/var/nix/profiles/system)
          1   2024-02-09 10:00:00   nixos-22.11.20240209.123
          2   2024-02-09 11:00:00   (current)

    CURRENT_SUFFIX (nixos-rebuild list-generations)
        Generation  Build-date           NixOS Version ...
        2 current   2024-02-09 11:00:00  22.11.20240209.456 ...
        1           2024-02-09 10:00:00  22.11.20240209.123 ...

Lines that do not look like a generation (headers, blanks, junk) are always
skipped. A line that looks right but carries an unparseable timestamp is
skipped in PERMISSIVE mode and aborts the listing in STRICT mode. The same
goes for a second `current` marker in CURRENT_SUFFIX output: PERMISSIVE keeps
the first one, STRICT fails.

In CLEAN format the current generation is found separately, by following
the system profile symlink to its `system-<id>-link` target.
"""

import logging
import re
from datetime import datetime, timezone
from typing import Optional

from timemach.config import (
    CURRENT_MARKER,
    CURRENT_SENTINEL,
    DEFAULT_LISTING_FORMAT,
    DEFAULT_PARSE_MODE,
    GENERATION_LINK_PATTERN,
    TIMESTAMP_FORMAT,
)
from timemach.errors import CommandFailed, ParseFailure
from timemach.models.generation import Generation
from timemach.toolchain.base import PathResolver
from timemach.toolchain.nix import NixToolchain
from timemach.toolchain.paths import FilesystemPathResolver
from timemach.types import ListingFormat, ParseMode

logger = logging.getLogger("timemach-lister")

_CLEAN_LINE = re.compile(
    r"^\s*(?P<id>\d+)\s+(?P<date>\d{4}-\d{2}-\d{2})\s+(?P<time>\d{2}:\d{2}:\d{2})(?:\s+(?P<rest>.*))?$",
    re.ASCII,
)
_SUFFIX_LINE = re.compile(
    rf"^\s*(?P<id>\d+)\s*(?P<marker>{CURRENT_MARKER})?\s+(?P<date>\S+)\s+(?P<time>\S+)(?:\s+(?P<rest>.*))?$",
    re.ASCII,
)
_LINK_ID = re.compile(GENERATION_LINK_PATTERN, re.ASCII)


def parse_timestamp(date: str, time: str) -> datetime:
    """Parse a listing's date and time tokens as a UTC timestamp.

    Raises ValueError if the tokens do not follow TIMESTAMP_FORMAT.
    """
    naive = datetime.strptime(f"{date} {time}", TIMESTAMP_FORMAT)
    return naive.replace(tzinfo=timezone.utc)


class GenerationLister:
    """Lists the system profile's generations and flags the current one."""

    def __init__(
        self,
        toolchain: NixToolchain,
        path_resolver: Optional[PathResolver] = None,
        listing_format: ListingFormat = DEFAULT_LISTING_FORMAT,
        parse_mode: ParseMode = DEFAULT_PARSE_MODE,
    ):
        self._toolchain = toolchain
        self._resolver = path_resolver or FilesystemPathResolver()
        self.listing_format = listing_format
        self.parse_mode = parse_mode

    @property
    def strict(self) -> bool:
        return self.parse_mode == ParseMode.STRICT

    # =========================================================================
    # Parsing
    # =========================================================================

    def parse_listing(self, output: str) -> list[Generation]:
        """Parse raw listing output into Generations, in input order."""
        generations: list[Generation] = []
        seen: set[str] = set()
        current_id: Optional[str] = None

        for lineno, line in enumerate(output.splitlines(), 1):
            gen = self._parse_line(line, lineno)
            if gen is None:
                continue
            if gen.id in seen:
                if self.strict:
                    raise ParseFailure("generation list", f"duplicate id {gen.id} on line {lineno}")
                logger.debug(f"Skipping duplicate generation {gen.id} on line {lineno}")
                continue
            if gen.current:
                if current_id is None:
                    current_id = gen.id
                elif self.strict:
                    raise ParseFailure(
                        "generation list",
                        f"second current marker on line {lineno} (already {current_id})",
                    )
                else:
                    # At most one current generation; the first marker wins.
                    logger.warning(f"Ignoring extra current marker on generation {gen.id}")
                    gen = gen.model_copy(update={"current": False, "description": None})
            seen.add(gen.id)
            generations.append(gen)

        logger.debug(f"Parsed {len(generations)} generations")
        return generations

    def _parse_line(self, line: str, lineno: int) -> Optional[Generation]:
        if self.listing_format == ListingFormat.CURRENT_SUFFIX:
            match = _SUFFIX_LINE.match(line)
        else:
            match = _CLEAN_LINE.match(line)
        if match is None:
            return None

        try:
            timestamp = parse_timestamp(match["date"], match["time"])
        except ValueError as e:
            if self.strict:
                raise ParseFailure("generation list", f"line {lineno}: {e}")
            logger.debug(f"Skipping line {lineno}, bad timestamp: {e}")
            return None

        if self.listing_format == ListingFormat.CURRENT_SUFFIX:
            is_current = match["marker"] is not None
            description = CURRENT_SENTINEL if is_current else None
        else:
            is_current = False
            description = (match["rest"] or "").strip() or None

        return Generation.from_listing(
            generation_id=match["id"],
            timestamp=timestamp,
            description=description,
            profiles_root=self._toolchain.profiles_root,
            current=is_current,
        )

    # =========================================================================
    # Current generation
    # =========================================================================

    def resolve_current(self) -> str:
        """Id of the generation the system profile currently points at."""
        target = self._resolver.resolve(self._toolchain.system_profile)
        match = _LINK_ID.search(target)
        if match is None:
            raise ParseFailure("current generation link", f"unexpected target {target!r}")
        return match.group(1)

    @staticmethod
    def mark_current(generations: list[Generation], current_id: Optional[str]) -> list[Generation]:
        """Return copies with `current` set on the matching id only."""
        return [g.model_copy(update={"current": g.id == current_id}) for g in generations]

    # =========================================================================
    # Entry point
    # =========================================================================

    def list_generations(self) -> list[Generation]:
        output = self._toolchain.list_generations(self.listing_format)
        generations = self.parse_listing(output)

        if self.listing_format == ListingFormat.CURRENT_SUFFIX:
            return generations

        try:
            current_id: Optional[str] = self.resolve_current()
        except (CommandFailed, ParseFailure) as e:
            if self.strict:
                raise
            logger.warning(f"Could not resolve current generation: {e}")
            current_id = None

        return self.mark_current(generations, current_id)
