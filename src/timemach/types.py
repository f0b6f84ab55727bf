"""Strategy enums for nix-timemach."""

from enum import Enum


class ListingFormat(str, Enum):
    """Shape of the generation listing the toolchain prints."""
    CLEAN = "clean"                    # nix-env --list-generations
    CURRENT_SUFFIX = "current-suffix"  # nixos-rebuild list-generations, "12current"


class ParseMode(str, Enum):
    """What to do with a listing line that matches but does not parse."""
    PERMISSIVE = "permissive"  # skip the line
    STRICT = "strict"          # abort the whole listing


class PathStrategy(str, Enum):
    """How a generation id becomes the path handed to the diff backend."""
    PROFILE_LINK = "profile-link"  # <root>/system-<id>-link as-is
    STORE_PATH = "store-path"      # the profile's recorded /nix/store output


class DiffStrategy(str, Enum):
    """Who classifies the delta between two generations."""
    REFERENCES = "references"  # set heuristic over nix-store --references
    NIX_DIFF = "nix-diff"      # delegate to the nix-diff tool


class LinkResolver(str, Enum):
    """How profile symlinks are read."""
    FILESYSTEM = "filesystem"  # os.readlink in-process
    READLINK = "readlink"      # readlink(1) through the command runner
