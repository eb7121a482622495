"""The init command."""

from __future__ import annotations

import os

import click

from .. import remote
from ..config import DEFAULT_CONTEXT_FILE
from ..exceptions import RemoteError
from ..scaffold import (
    clone_project_repos,
    init_from_builtin,
    init_from_git,
    projects_with_repos,
)
from ._helpers import main, _plural, _status, _workspace_option, _workspace_path

_CONTEXT_CHOICES = {
    "claude": "CLAUDE.md",
    "cursor": ".cursorrules",
}


def _validate_url(ctx, param, value):
    """Click callback: require something that looks like a git URL."""
    if value is None:
        return value
    value = value.strip()
    if not value:
        raise click.BadParameter("URL is required")
    if "git" not in value and not value.startswith(("http://", "https://", "file://", "/")):
        raise click.BadParameter("Must be a git URL")
    return value


def _prompt_required(label: str) -> str:
    while True:
        value = click.prompt(label).strip()
        if value:
            return value
        click.echo(f"{label} is required.", err=True)


def _offer_repo_cloning(ctx, workspace: str, mode: str | None) -> None:
    """Clone repos listed in project metadata, as chosen by *mode* or prompt."""
    found = projects_with_repos(workspace)
    if not found:
        return

    click.echo("Found repos in project metadata:")
    for pr in found:
        names = ", ".join(r.name for r in pr.repos)
        click.echo(f"  {pr.project_name}: {_plural(len(pr.repos), 'repo')} ({names})")

    if mode is None:
        mode = click.prompt(
            "Clone project repos?", type=click.Choice(["all", "pick", "skip"]), default="skip",
        )
    if mode == "skip":
        return
    if mode == "pick":
        found = [
            pr for pr in found
            if click.confirm(f"  Clone repos for {pr.project_name}?", default=True)
        ]

    for pr in found:
        _status(ctx, f"Cloning repos for {pr.project_name}...")
        for result in clone_project_repos(pr.project_path, pr.repos, clone=remote.clone_repo):
            if result.success:
                click.echo(f"  cloned {pr.project_name}/{result.name}")
            else:
                click.echo(f"  failed {pr.project_name}/{result.name}: {result.error}", err=True)


def _print_next_steps(name: str | None) -> None:
    click.echo("")
    click.echo("  Next steps:")
    if name:
        click.echo(f"    cd {name}")
    click.echo("    Open in your editor; your AI tool will read the context automatically.")
    click.echo("    To add projects, create folders under projects/ or use a git template.")


@main.command()
@_workspace_option
@click.argument("name", required=False)
@click.option("--template-url", "template_url", default=None, callback=_validate_url,
              help="Create the workspace from this git template.")
@click.option("--builtin", is_flag=True, default=False,
              help="Use the built-in base template.")
@click.option("--shadow/--no-shadow", default=True,
              help="Keep a shadow clone of the git template for `dunelin update` (default: on).")
@click.option("--name", "user_name", default=None, help="Your name (built-in template).")
@click.option("--role", "user_role", default=None, help="Your role (built-in template).")
@click.option("--context-file", "context_file", default=None,
              help="Context filename, e.g. CLAUDE.md, .cursorrules, AGENTS.md.")
@click.option("--clone-repos", "clone_repos", type=click.Choice(["all", "pick", "skip"]),
              default=None, help="Clone repos listed in project metadata (git template).")
@click.pass_context
def init(ctx, name, template_url, builtin, shadow, user_name, user_role, context_file, clone_repos):
    """Set up a new workspace.

    With NAME, the workspace is created in a new directory of that name;
    otherwise in the current directory (or --workspace).

    \b
    Examples:
        dunelin init my-workspace --template-url git@github.com:acme/ws-template.git
        dunelin init --builtin --name "Ada" --role "CTO"
    """
    if template_url and builtin:
        raise click.ClickException("--template-url and --builtin are mutually exclusive")

    base = _workspace_path(ctx)
    target = os.path.join(base, name) if name else base

    if not template_url and not builtin:
        setup = click.prompt(
            "How do you want to set up your workspace?",
            type=click.Choice(["git", "builtin"]), default="git",
        )
        builtin = setup == "builtin"

    if builtin:
        user_name = user_name or _prompt_required("Your name")
        user_role = user_role or _prompt_required("Your role")
        if context_file is None:
            choice = click.prompt(
                "Which AI tool do you primarily use?",
                type=click.Choice(["claude", "cursor", "other"]), default="claude",
            )
            context_file = _CONTEXT_CHOICES.get(choice) or _prompt_required("Context filename")
        _status(ctx, "Scaffolding workspace...")
        written = init_from_builtin(
            target,
            workspace_name=name or os.path.basename(os.path.abspath(target)),
            user_name=user_name,
            user_role=user_role,
            context_file=context_file or DEFAULT_CONTEXT_FILE,
        )
        _status(ctx, f"Wrote {_plural(len(written), 'file')}.")
    else:
        if template_url is None:
            template_url = _validate_url(ctx, None, click.prompt("Template URL"))
        _status(ctx, f"Cloning template into {target}...")
        try:
            report = init_from_git(template_url, target, shadow=shadow, clone=remote.clone_repo)
        except RemoteError as exc:
            raise click.ClickException(f"Git clone failed: {exc}")
        _status(ctx, f"Template cloned; {_plural(len(report.copied), 'file')} copied.")
        _offer_repo_cloning(ctx, target, clone_repos)

    click.echo(f"Workspace ready at ./{name}" if name else "Workspace ready.")
    _print_next_steps(name)
