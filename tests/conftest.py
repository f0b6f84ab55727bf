"""Shared test fixtures for nix-timemach."""

import pytest

from helpers import PROFILES_ROOT, FakeRunner, StaticPathResolver
from timemach.toolchain.nix import NixToolchain


@pytest.fixture
def runner():
    return FakeRunner()


@pytest.fixture
def toolchain(runner):
    return NixToolchain(runner, profiles_root=PROFILES_ROOT)


@pytest.fixture
def current_is_2():
    """Resolver whose system profile points at generation 2."""
    return StaticPathResolver(target="system-2-link")


@pytest.fixture
def links():
    """Resolver for which every generation link exists."""
    return StaticPathResolver()
