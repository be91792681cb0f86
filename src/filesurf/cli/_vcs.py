"""git subcommands: status, stage, unstage, commit, push, pull, branch."""

from __future__ import annotations

import os

import click

from ..vcs import MISSING_REPO_MESSAGE, StatusTracker, VcsStatus
from ._helpers import _check, _dir_option, _status, main


def _open_tracker(ctx, directory: str) -> StatusTracker:
    """Bind a tracker to the repository containing *directory* (closed with the context)."""
    tracker = StatusTracker()
    ctx.call_on_close(tracker.close)
    if not tracker.init_if_version_controlled(os.path.abspath(directory)):
        raise click.ClickException(f"{MISSING_REPO_MESSAGE} at {directory}")
    _status(ctx, f"Repository: {tracker.root}")
    return tracker


@main.group()
def git():
    """Inspect and drive the git repository containing a directory."""


@git.command("status")
@_dir_option
@click.option("--all", "show_all", is_flag=True, default=False,
              help="Include directories marked through propagation.")
@click.pass_context
def status_cmd(ctx, directory, show_all):
    """List changed paths as STAGED or UNSTAGED."""
    tracker = _open_tracker(ctx, directory)
    branch = tracker.current_branch()
    if branch:
        click.echo(f"On branch {branch}")
    for key, state in sorted(tracker.statuses().items()):
        if state is VcsStatus.NOT_VERSION_CONTROLLED:
            continue
        if not show_all and os.path.isdir(key):
            continue
        click.echo(f"{state.value:<9} {os.path.relpath(key, tracker.root)}")


@git.command()
@_dir_option
@click.argument("paths", nargs=-1, required=True, type=click.Path())
@click.pass_context
def stage(ctx, directory, paths):
    """Stage PATHS (missing paths are staged as deletions)."""
    tracker = _open_tracker(ctx, directory)
    _check(tracker.stage(*paths), ctx, f"Staged {len(paths)} paths")


@git.command()
@_dir_option
@click.argument("paths", nargs=-1, required=True, type=click.Path())
@click.pass_context
def unstage(ctx, directory, paths):
    """Unstage PATHS."""
    tracker = _open_tracker(ctx, directory)
    _check(tracker.unstage(*paths), ctx, f"Unstaged {len(paths)} paths")


@git.command()
@_dir_option
@click.option("-m", "--message", required=True, help="Commit message.")
@click.option("--author", envvar="FILESURF_AUTHOR", default=None,
              help='Author as "Name <email>" (or set FILESURF_AUTHOR).')
@click.pass_context
def commit(ctx, directory, message, author):
    """Commit the staged changes."""
    tracker = _open_tracker(ctx, directory)
    result = _check(tracker.commit(message, author))
    click.echo(result.value or "")


@git.command()
@_dir_option
@click.option("--remote", default=None, help="Remote name or URL (default: origin).")
@click.pass_context
def push(ctx, directory, remote):
    """Push the current branch."""
    tracker = _open_tracker(ctx, directory)
    _check(tracker.push(remote), ctx, "Pushed")


@git.command()
@_dir_option
@click.option("--remote", default=None, help="Remote name or URL (default: origin).")
@click.pass_context
def pull(ctx, directory, remote):
    """Pull into the current branch."""
    tracker = _open_tracker(ctx, directory)
    _check(tracker.pull(remote), ctx, "Pulled")


@git.command()
@_dir_option
@click.argument("name", required=False)
@click.pass_context
def branch(ctx, directory, name):
    """List branches, or switch to branch NAME."""
    tracker = _open_tracker(ctx, directory)
    if name is None:
        current = tracker.current_branch()
        for b in tracker.branches():
            click.echo(f"{'*' if b == current else ' '} {b}")
        return
    _check(tracker.switch_branch(name), ctx, f"Switched to {name}")
