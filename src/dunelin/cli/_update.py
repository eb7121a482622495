"""The update command."""

from __future__ import annotations

import click

from .. import remote
from ..copy import FileChange
from ..exceptions import WorkspaceNotFoundError
from ..sync import Selection, SyncStatus, plan_sync, shadow_enabled, sync_workspace
from ._helpers import main, _plural, _require_workspace, _status, _workspace_option


def _print_changes(changes: list[FileChange]) -> None:
    click.echo(f"Found {_plural(len(changes), 'change')}:")
    for c in changes:
        click.echo(f"  {c.kind.symbol} {c.path} ({c.kind})")


def _prompt_selection(changes: list[FileChange]) -> Selection:
    """Ask which changes to apply: all, a picked subset, or none."""
    _print_changes(changes)
    try:
        choice = click.prompt(
            "Apply changes?", type=click.Choice(["all", "pick", "skip"]), default="all",
        )
        if choice == "all":
            return Selection.all()
        if choice == "skip":
            return Selection.skip()
        picked = [
            c.path for c in changes
            if click.confirm(f"  Apply {c.path} ({c.kind})?", default=True)
        ]
    except click.Abort:
        return Selection.skip()
    return Selection.paths(picked)


def _apply_all(changes: list[FileChange]) -> Selection:
    _print_changes(changes)
    return Selection.all()


@main.command()
@_workspace_option
@click.option("--yes", "-y", is_flag=True, default=False,
              help="Apply every change without prompting.")
@click.option("--dry-run", "-n", "dry_run", is_flag=True, default=False,
              help="Show what would change without copying anything.")
@click.option("--no-pull", "no_pull", is_flag=True, default=False,
              help="Diff against the shadow as it is, without pulling.")
@click.pass_context
def update(ctx, yes, dry_run, no_pull):
    """Pull the latest context from the shadow repo and apply it.

    Compares .dunelin/shadow against the workspace and copies files that
    are new or changed upstream.  Files that exist only in the workspace
    are never touched, and paths matching `updateIgnore` (default
    **/repos) are skipped.

    \b
    Examples:
        dunelin update
        dunelin update --yes
        dunelin update --dry-run --no-pull
    """
    workspace, config = _require_workspace(ctx)

    if not shadow_enabled(workspace, config):
        click.echo("No shadow repo. This workspace was created from a built-in template.")
        click.echo("To use `dunelin update`, create your workspace from a git template.")
        click.echo("Nothing to update.")
        return

    if dry_run and no_pull:
        changes = plan_sync(workspace)
        if not changes:
            click.echo("Workspace is up to date.")
        else:
            _print_changes(changes)
        return

    def _select(changes):
        if dry_run:
            _print_changes(changes)
            return Selection.skip()
        return _apply_all(changes) if yes else _prompt_selection(changes)

    _status(ctx, "Pulling latest context..." if not no_pull else "Skipping pull.")
    try:
        outcome = sync_workspace(
            workspace, select=_select, pull=None if no_pull else remote.pull_repo,
        )
    except WorkspaceNotFoundError as exc:
        raise click.ClickException(str(exc))
    except OSError as exc:
        raise click.ClickException(f"Failed to apply changes: {exc}")

    if outcome.status == SyncStatus.PULL_FAILED:
        raise click.ClickException(f"Git pull failed: {outcome.error}")
    if outcome.status == SyncStatus.UP_TO_DATE:
        click.echo("Workspace is up to date.")
    elif outcome.status == SyncStatus.SKIPPED:
        if not dry_run:
            click.echo("Update skipped.")
    elif outcome.status == SyncStatus.APPLIED:
        copied = outcome.report.copied
        for path in copied:
            _status(ctx, f"  wrote {path}")
        click.echo(f"Applied {_plural(len(copied), 'file')}.")
        click.echo("Workspace updated.")
