"""Click-based CLI for gitpush - push repository state to a remote."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

import click
import yaml
from pydantic import ValidationError
from rich.markup import escape
from rich.prompt import Confirm

from gitpush import __version__
from gitpush.config import (
    ensure_config_exists,
    get_config_path,
    load_config_or_default,
    validate_config_file,
)
from gitpush.config.schema import GitpushConfig
from gitpush.credentials import ConsolePrompt
from gitpush.git import get_current_branch, get_repo_root, list_remotes
from gitpush.output import Console, create_console
from gitpush.push import PushError
from gitpush.task import PushTask

console = create_console()


def _load(config_path: Optional[Path]) -> GitpushConfig:
    """Load configuration or exit with an error message."""
    try:
        return load_config_or_default(config_path)
    except (FileNotFoundError, ValidationError, ValueError, yaml.YAMLError) as e:
        console.print_error(str(e))
        sys.exit(1)


@click.group()
@click.version_option(version=__version__, prog_name="gitpush")
def cli() -> None:
    """gitpush - push commits, branches and tags to a remote.

    Meant to run as a step of a build or release pipeline.

    \b
    Settings come from ~/.config/gitpush/config.yaml (or $GITPUSH_CONFIG)
    and can be overridden with command line options.
    """
    pass


@cli.command()
@click.option("--repo", "repo_path", type=click.Path(exists=True, file_okay=False, path_type=Path), help="Repository to push from")
@click.option("--remote", default=None, help="Remote to push to (default: origin)")
@click.option("--username", envvar="GITPUSH_USERNAME", default=None, help="Username for the remote")
@click.option("--password", envvar="GITPUSH_PASSWORD", default=None, help="Password or access token for the remote")
@click.option("--tags/--no-tags", "push_tags", default=None, help="Include all tags")
@click.option("--all/--no-all", "push_all", default=None, help="Push all local branches")
@click.option("--force/--no-force", default=None, help="Allow non-fast-forward updates")
@click.option("--prompt/--no-prompt", default=False, help="Ask for credentials on the terminal when none are set")
@click.option("--timeout", type=click.FloatRange(min=0, min_open=True), default=None, help="Seconds before the push is abandoned")
@click.option("--dry-run", "-n", is_flag=True, help="Show the resolved push without running it")
@click.option("--yes", "-y", is_flag=True, help="Do not ask before a forced push")
@click.option("--verbose", "-v", is_flag=True, help="Show detailed output")
@click.option("--config", "config_path", type=click.Path(path_type=Path), default=None, help="Configuration file")
def push(
    repo_path: Optional[Path],
    remote: Optional[str],
    username: Optional[str],
    password: Optional[str],
    push_tags: Optional[bool],
    push_all: Optional[bool],
    force: Optional[bool],
    prompt: bool,
    timeout: Optional[float],
    dry_run: bool,
    yes: bool,
    verbose: bool,
    config_path: Optional[Path],
) -> None:
    """Push the current branch (and optionally tags) to a remote."""
    config = _load(config_path)
    out = create_console(verbose=verbose or config.output.verbose, colored=config.output.colored)

    repo = repo_path or Path(config.repository.path)
    repo_root = get_repo_root(repo)
    if repo_root is None:
        out.print_error(f"Not a git repository: {repo}")
        sys.exit(1)

    push_settings = config.push
    task = PushTask(
        repo_root,
        remote=remote if remote is not None else push_settings.remote,
        credentials=push_settings.credentials.to_credentials(),
        push_tags=push_settings.push_tags if push_tags is None else push_tags,
        push_all=push_settings.push_all if push_all is None else push_all,
        force=push_settings.force if force is None else force,
        prompt=ConsolePrompt(out.rich) if prompt else None,
        timeout=timeout if timeout is not None else config.repository.timeout,
        console=out,
    )

    overrides = {name: value for name, value in (("username", username), ("password", password)) if value is not None}
    if overrides:
        task.credentials(overrides)

    if dry_run or out.verbose:
        branch = get_current_branch(repo_root)
        out.print_push_plan({**task.inputs(), "branch": branch}, dry_run=dry_run)
        if branch is None and not task.push_all:
            out.print_warning(f"HEAD is detached in {repo_root}; there is no current branch to push")
        remotes = list_remotes(repo_root)
        if task.remote not in remotes:
            out.print_warning(f"Remote '{task.remote}' is not configured in {repo_root}")

    if dry_run:
        out.print_info("Dry run - nothing pushed")
        return

    if task.force and not yes and sys.stdin.isatty():
        if not Confirm.ask(f"Force push to {task.remote}?", default=False, console=out.rich):
            out.print_warning("Push cancelled")
            return

    try:
        task.push()
    except PushError as e:
        out.print_failure(e)
        sys.exit(1)


@cli.group()
def config() -> None:
    """Configuration file commands."""
    pass


@config.command("init")
@click.option("--config", "config_path", type=click.Path(path_type=Path), default=None, help="Configuration file")
def config_init(config_path: Optional[Path]) -> None:
    """Create a default configuration file."""
    path, created = ensure_config_exists(config_path)
    if created:
        console.print_success(f"Created configuration: {path}")
    else:
        console.print_info(f"Configuration already exists: {path}")


@config.command("show")
@click.option("--config", "config_path", type=click.Path(path_type=Path), default=None, help="Configuration file")
def config_show(config_path: Optional[Path]) -> None:
    """Show the effective configuration."""
    config_data = _load(config_path)
    _show_config(config_data, config_path or get_config_path(), console)


@config.command("validate")
@click.argument("file", required=False, type=click.Path(path_type=Path))
def config_validate(file: Optional[Path]) -> None:
    """Validate a configuration file."""
    path = file or get_config_path()
    valid, errors = validate_config_file(path)
    if valid:
        console.print_success(f"Configuration is valid: {path}")
        return

    console.print_error(f"Invalid configuration: {path}")
    for error in errors:
        console.print(f"  • {escape(error)}")
    sys.exit(1)


def _show_config(config_data: GitpushConfig, path: Path, console_obj: Console) -> None:
    """Display configuration values in a table, password masked."""
    from rich.table import Table

    creds = config_data.push.credentials
    rows = [
        ("repository.path", config_data.repository.path),
        ("repository.timeout", config_data.repository.timeout),
        ("push.remote", config_data.push.remote),
        ("push.push_tags", config_data.push.push_tags),
        ("push.push_all", config_data.push.push_all),
        ("push.force", config_data.push.force),
        ("push.credentials.username", creds.username),
        ("push.credentials.password", "********" if creds.password else None),
        ("output.verbose", config_data.output.verbose),
        ("output.colored", config_data.output.colored),
    ]

    table = Table(title=str(path), show_header=True)
    table.add_column("Key", style="cyan")
    table.add_column("Value", style="green")
    for key, value in rows:
        table.add_row(key, "[dim]-[/dim]" if value is None else escape(str(value)))

    console_obj.print()
    console_obj.print(table)
    console_obj.print()


if __name__ == "__main__":
    cli()
