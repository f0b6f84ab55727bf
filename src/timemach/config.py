"""Configuration constants for nix-timemach."""

from timemach.types import DiffStrategy, LinkResolver, ListingFormat, ParseMode, PathStrategy


# =============================================================================
# Profiles
# =============================================================================
PROFILES_ROOT = "/nix/var/nix/profiles"
SYSTEM_PROFILE_NAME = "system"
GENERATION_LINK_TEMPLATE = "{root}/system-{id}-link"
GENERATION_LINK_PATTERN = r"system-(\d+)-link"

# =============================================================================
# Listing format
# =============================================================================
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
CURRENT_MARKER = "current"      # suffix glued to the id by nixos-rebuild
CURRENT_SENTINEL = "(current)"  # description used when the marker is present

# =============================================================================
# Toolchain commands
# =============================================================================
NIX_ENV = "nix-env"
NIXOS_REBUILD = "nixos-rebuild"
NIX_STORE = "nix-store"
NIX_DIFF = "nix-diff"
READLINK = "readlink"
COMMAND_TIMEOUT = None  # seconds; None waits forever

# =============================================================================
# Default strategies
# =============================================================================
DEFAULT_LISTING_FORMAT = ListingFormat.CLEAN
DEFAULT_PARSE_MODE = ParseMode.PERMISSIVE
DEFAULT_PATH_STRATEGY = PathStrategy.PROFILE_LINK
DEFAULT_DIFF_STRATEGY = DiffStrategy.REFERENCES
DEFAULT_LINK_RESOLVER = LinkResolver.FILESYSTEM

# =============================================================================
# Diff markers (nix-diff line prefixes)
# =============================================================================
DIFF_MARKER_ADDED = "+"
DIFF_MARKER_REMOVED = "-"
DIFF_MARKER_MODIFIED = "~"

# =============================================================================
# Version
# =============================================================================
try:
    from timemach import __version__ as VERSION
except ImportError:
    VERSION = "0.1.0"
