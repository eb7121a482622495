"""Shared helpers, option decorators, and the main CLI group."""

from __future__ import annotations

import logging
import os

import click

from .. import __version__
from ..config import WorkspaceConfig, read_workspace_config


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _status(ctx, msg):
    """Emit a status message to stderr when verbose mode (-v) is on."""
    if ctx.obj.get("verbose"):
        click.echo(msg, err=True)


def _store_workspace(ctx, param, value):
    """Click callback: store --workspace value in the context."""
    ctx.ensure_object(dict)
    if value is not None:
        ctx.obj["workspace"] = value
    return value


def _workspace_option(f):
    """Shared --workspace/-w option decorator for all commands."""
    return click.option(
        "--workspace", "-w", type=click.Path(file_okay=False), envvar="DUNELIN_WORKSPACE",
        help="Workspace directory (or set DUNELIN_WORKSPACE; default: current directory).",
        expose_value=False, callback=_store_workspace, is_eager=True,
    )(f)


def _workspace_path(ctx) -> str:
    """Return the workspace from --workspace / DUNELIN_WORKSPACE, else cwd."""
    return os.path.abspath(ctx.obj.get("workspace") or os.getcwd())


def _require_workspace(ctx) -> tuple[str, WorkspaceConfig]:
    """Return the workspace path and its config, or fail with a clear error."""
    path = _workspace_path(ctx)
    config = read_workspace_config(path)
    if config is None:
        raise click.ClickException("Not a Dunelin workspace. Run `dunelin init` first.")
    return path, config


def _plural(n: int, word: str) -> str:
    return f"{n} {word}" if n == 1 else f"{n} {word}s"


# ---------------------------------------------------------------------------
# Main group
# ---------------------------------------------------------------------------

@click.group()
@click.option("--workspace", "-w", type=click.Path(file_okay=False), envvar="DUNELIN_WORKSPACE",
              help="Workspace directory (or set DUNELIN_WORKSPACE; default: current directory).",
              expose_value=False, callback=_store_workspace, is_eager=True)
@click.option("-v", "--verbose", is_flag=True, help="Verbose output on stderr.")
@click.version_option(__version__, prog_name="dunelin")
@click.pass_context
def main(ctx, verbose):
    """dunelin: scaffold and manage agentic workspaces.

    \b
    Quick start:
      dunelin init my-workspace
      dunelin update
      dunelin mcp

    \b
    A workspace holds per-project context files for AI coding tools.
    Workspaces created from a git template keep a shadow copy in
    .dunelin/shadow; `dunelin update` pulls it and applies changes.
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(levelname)s %(name)s: %(message)s",
        )
