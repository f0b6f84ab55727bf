"""nix-timemach - read-only inspection of NixOS system generations."""

__version__ = "0.1.0"
