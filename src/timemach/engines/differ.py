"""GenerationDiffer - what changed between two generations.

Path resolution:
- PROFILE_LINK: diff <root>/system-<id>-link directly, once the link exists.
- STORE_PATH: ask nix-env for the profile's recorded /nix/store output first.

Classification:
- REFERENCES: compare the two direct-dependency sets from
  `nix-store -q --references`. Added and removed are plain set differences;
  modified is a package-name heuristic (see package_name()).
- NIX_DIFF: let nix-diff do the work and sort its +/-/~ lines into buckets.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, Optional

from timemach.config import (
    DEFAULT_DIFF_STRATEGY,
    DEFAULT_PATH_STRATEGY,
    DIFF_MARKER_ADDED,
    DIFF_MARKER_MODIFIED,
    DIFF_MARKER_REMOVED,
)
from timemach.errors import GenerationNotFound, ParseFailure
from timemach.models.diff import GenerationDiff
from timemach.models.generation import profile_link
from timemach.toolchain.base import PathResolver
from timemach.toolchain.nix import NixToolchain
from timemach.toolchain.paths import FilesystemPathResolver
from timemach.types import DiffStrategy, PathStrategy

logger = logging.getLogger("timemach-differ")


def package_name(identifier: str) -> str:
    """Second hyphen-delimited segment of a store identifier.

    "abc-foo-1.0" -> "foo". Identifiers without a hyphen yield "" and so all
    share one name; names that contain a hyphen are cut at the first one.
    """
    parts = identifier.split("-")
    return parts[1] if len(parts) > 1 else ""


def _unique(items: Iterable[str]) -> list[str]:
    """Drop duplicates, keeping first-seen order."""
    return list(dict.fromkeys(items))


def classify(source: Iterable[str], target: Iterable[str]) -> GenerationDiff:
    """Sort two dependency sets into added / removed / modified."""
    src = _unique(source)
    tgt = _unique(target)
    src_set = set(src)
    tgt_set = set(tgt)

    added = [t for t in tgt if t not in src_set]
    removed = [s for s in src if s not in tgt_set]

    names_in_target: dict[str, set[str]] = {}
    for t in tgt:
        names_in_target.setdefault(package_name(t), set()).add(t)

    # A source entry is modified when its name appears in the target under
    # some other identifier. Independent of `removed`.
    modified = [
        s for s in src
        if names_in_target.get(package_name(s), set()) - {s}
    ]

    return GenerationDiff(added=added, removed=removed, modified=modified)


def parse_nix_diff(output: str) -> GenerationDiff:
    """Bucket nix-diff's marker-prefixed lines; unmarked lines are ignored."""
    buckets: dict[str, list[str]] = {
        DIFF_MARKER_ADDED: [],
        DIFF_MARKER_REMOVED: [],
        DIFF_MARKER_MODIFIED: [],
    }
    for lineno, raw in enumerate(output.splitlines(), 1):
        line = raw.strip()
        if not line or line[0] not in buckets:
            continue
        entry = line[1:].strip()
        if not entry:
            raise ParseFailure("nix-diff output", f"empty entry on line {lineno}")
        buckets[line[0]].append(entry)

    return GenerationDiff(
        added=buckets[DIFF_MARKER_ADDED],
        removed=buckets[DIFF_MARKER_REMOVED],
        modified=buckets[DIFF_MARKER_MODIFIED],
    )


class GenerationDiffer:
    """Computes a GenerationDiff for two generation ids."""

    def __init__(
        self,
        toolchain: NixToolchain,
        path_strategy: PathStrategy = DEFAULT_PATH_STRATEGY,
        diff_strategy: DiffStrategy = DEFAULT_DIFF_STRATEGY,
        parallel: bool = False,
        path_resolver: Optional[PathResolver] = None,
    ):
        self._toolchain = toolchain
        self._resolver = path_resolver or FilesystemPathResolver()
        self.path_strategy = path_strategy
        self.diff_strategy = diff_strategy
        self.parallel = parallel

    # =========================================================================
    # Path resolution
    # =========================================================================

    def profile_link(self, generation_id: str) -> str:
        if not (generation_id.isascii() and generation_id.isdigit()):
            raise GenerationNotFound(generation_id, "not a generation number")
        return profile_link(generation_id, self._toolchain.profiles_root)

    def resolve_path(self, generation_id: str) -> str:
        link = self.profile_link(generation_id)
        if self.path_strategy == PathStrategy.PROFILE_LINK:
            if not self._resolver.exists(link):
                raise GenerationNotFound(generation_id, f"no profile link {link}")
            return link

        result = self._toolchain.query_out_path(link)
        if not result.ok:
            raise GenerationNotFound(generation_id, result.stderr)

        lines = [ln.strip() for ln in result.lines() if ln.strip()]
        if not lines:
            raise ParseFailure("out-path query", f"no output for {link}")
        # nix-env prints "<name>  <path>"; some versions print the path alone.
        path = lines[0].split()[-1]
        if not path.startswith("/"):
            raise ParseFailure("out-path query", f"not a store path: {path!r}")
        logger.debug(f"Generation {generation_id} -> {path}")
        return path

    # =========================================================================
    # Dependency queries
    # =========================================================================

    def query_references(self, path: str) -> list[str]:
        refs = []
        for line in self._toolchain.query_references(path).splitlines():
            line = line.strip()
            if not line:
                continue
            if not line.startswith("/"):
                raise ParseFailure("reference list", f"not a store path: {line!r}")
            refs.append(line)
        return _unique(refs)

    def _reference_sets(self, from_path: str, to_path: str) -> tuple[list[str], list[str]]:
        if not self.parallel:
            return self.query_references(from_path), self.query_references(to_path)
        with ThreadPoolExecutor(max_workers=2) as pool:
            from_refs = pool.submit(self.query_references, from_path)
            to_refs = pool.submit(self.query_references, to_path)
            return from_refs.result(), to_refs.result()

    # =========================================================================
    # Entry point
    # =========================================================================

    def diff(self, from_id: str, to_id: str) -> GenerationDiff:
        from_path = self.resolve_path(from_id)
        to_path = self.resolve_path(to_id)

        if self.diff_strategy == DiffStrategy.NIX_DIFF:
            result = parse_nix_diff(self._toolchain.nix_diff(from_path, to_path))
        else:
            from_refs, to_refs = self._reference_sets(from_path, to_path)
            result = classify(from_refs, to_refs)

        logger.info(f"Diff {from_id} -> {to_id}: {result.summary()}")
        return result
