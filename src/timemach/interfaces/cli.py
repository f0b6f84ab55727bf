"""nix-timemach CLI.

Click-based command line interface. Every command prints JSON on stdout;
diagnostics and logs go to stderr.

Usage:
    nix-timemach list-generations
    nix-timemach list-generations --format current-suffix --strict
    nix-timemach diff 41 42
    nix-timemach diff 41 42 --resolve store-path --strategy nix-diff
    nix-timemach --resolver readlink list-generations
"""

import json
import logging
import sys
from typing import Optional

import click

from timemach.config import PROFILES_ROOT, VERSION
from timemach.errors import TimeMachError
from timemach.timemachine import TimeMachine, TimeMachineOptions
from timemach.toolchain.base import CommandRunner, PathResolver
from timemach.types import DiffStrategy, LinkResolver, ListingFormat, ParseMode, PathStrategy

logger = logging.getLogger("timemach-cli")

# Injected by tests; None means real subprocesses and the real filesystem.
_runner: Optional[CommandRunner] = None
_resolver: Optional[PathResolver] = None


def get_machine(options: TimeMachineOptions) -> TimeMachine:
    return TimeMachine(options, runner=_runner, path_resolver=_resolver)


def _json_out(data, pretty: bool = False):
    """Print data as JSON."""
    click.echo(json.dumps(data, indent=2 if pretty else None))


def _fail(error: TimeMachError):
    logger.debug("Command failed", exc_info=True)
    click.echo(f"Error: {error}", err=True)
    sys.exit(1)


def _choices(enum_cls) -> click.Choice:
    return click.Choice([member.value for member in enum_cls])


# =============================================================================
# Root group
# =============================================================================

@click.group()
@click.option("--profiles-root", default=PROFILES_ROOT, show_default=True,
              help="Directory holding the system profile links")
@click.option("--timeout", type=click.FloatRange(min=0, min_open=True), default=None,
              help="Seconds before an external command is abandoned")
@click.option("--resolver", "link_resolver", type=_choices(LinkResolver),
              default=LinkResolver.FILESYSTEM.value, show_default=True,
              help="Read profile symlinks in-process or with readlink(1)")
@click.option("--pretty", is_flag=True, help="Indent JSON output")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging on stderr")
@click.version_option(VERSION, prog_name="nix-timemach")
@click.pass_context
def cli(ctx, profiles_root, timeout, link_resolver, pretty, verbose):
    """nix-timemach - inspect and compare NixOS generations."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )
    ctx.ensure_object(dict)
    ctx.obj["profiles_root"] = profiles_root
    ctx.obj["timeout"] = timeout
    ctx.obj["link_resolver"] = LinkResolver(link_resolver)
    ctx.obj["pretty"] = pretty


# =============================================================================
# List generations
# =============================================================================

@cli.command("list-generations")
@click.option("--format", "listing_format", type=_choices(ListingFormat),
              default=ListingFormat.CLEAN.value, show_default=True,
              help="Listing shape: nix-env (clean) or nixos-rebuild (current-suffix)")
@click.option("--strict", is_flag=True, help="Fail on the first unparseable generation line")
@click.pass_context
def list_generations(ctx, listing_format, strict):
    """List all generations of the system profile."""
    options = TimeMachineOptions(
        profiles_root=ctx.obj["profiles_root"],
        timeout=ctx.obj["timeout"],
        link_resolver=ctx.obj["link_resolver"],
        listing_format=ListingFormat(listing_format),
        parse_mode=ParseMode.STRICT if strict else ParseMode.PERMISSIVE,
    )
    try:
        generations = get_machine(options).list_generations()
    except TimeMachError as e:
        _fail(e)

    _json_out([g.model_dump(mode="json") for g in generations], ctx.obj["pretty"])


# =============================================================================
# Diff
# =============================================================================

@cli.command()
@click.argument("from_id", metavar="FROM")
@click.argument("to_id", metavar="TO")
@click.option("--resolve", "path_strategy", type=_choices(PathStrategy),
              default=PathStrategy.PROFILE_LINK.value, show_default=True,
              help="Diff profile links directly or their resolved store paths")
@click.option("--strategy", "diff_strategy", type=_choices(DiffStrategy),
              default=DiffStrategy.REFERENCES.value, show_default=True,
              help="Classify with the reference-set heuristic or with nix-diff")
@click.option("--parallel", is_flag=True, help="Query both reference sets concurrently")
@click.pass_context
def diff(ctx, from_id, to_id, path_strategy, diff_strategy, parallel):
    """Show what changed between two generations."""
    options = TimeMachineOptions(
        profiles_root=ctx.obj["profiles_root"],
        timeout=ctx.obj["timeout"],
        link_resolver=ctx.obj["link_resolver"],
        path_strategy=PathStrategy(path_strategy),
        diff_strategy=DiffStrategy(diff_strategy),
        parallel=parallel,
    )
    try:
        result = get_machine(options).diff(from_id, to_id)
    except TimeMachError as e:
        _fail(e)

    _json_out(result.model_dump(mode="json"), ctx.obj["pretty"])


# =============================================================================
# Main entry point
# =============================================================================

def main():
    cli()


if __name__ == "__main__":
    main()
