"""Analysis engines: generation listing and generation diffing."""

from timemach.engines.differ import GenerationDiffer, classify, package_name, parse_nix_diff
from timemach.engines.lister import GenerationLister, parse_timestamp

__all__ = [
    "GenerationDiffer",
    "GenerationLister",
    "classify",
    "package_name",
    "parse_nix_diff",
    "parse_timestamp",
]
