"""Shared helpers, option decorators, and the main CLI group."""

from __future__ import annotations

import logging
import os

import click

from ..entries import FileSystemEntry
from ..fileio import LocalFileIO
from ..listing import LocalLister
from ..result import Result
from ..trash import SystemTrash


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _status(ctx, msg):
    """Emit a status message to stderr when verbose mode (-v) is on."""
    if ctx.obj.get("verbose"):
        click.echo(msg, err=True)


def _check(result: Result, ctx=None, done: str | None = None) -> Result:
    """Raise a ClickException carrying every error of a failed *result*."""
    if not result.is_ok:
        raise click.ClickException(result.message)
    if ctx is not None and done:
        _status(ctx, done)
    return result


def _entries(paths) -> list[FileSystemEntry]:
    """Build entries for existing *paths*, failing on the first missing one."""
    entries = []
    for path in paths:
        if not os.path.lexists(path):
            raise click.ClickException(f"No such file or directory: {path}")
        entries.append(FileSystemEntry.from_path(path))
    return entries


def _io(ctx) -> LocalFileIO:
    return ctx.obj.setdefault("io", LocalFileIO())


def _lister(ctx) -> LocalLister:
    return ctx.obj.setdefault("lister", LocalLister())


def _trash(ctx) -> SystemTrash:
    return ctx.obj.setdefault("trash", SystemTrash())


def _configure_logging(verbose: int) -> None:
    if not verbose:
        return
    level = logging.DEBUG if verbose > 1 else logging.INFO
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def _dir_option(f):
    """Shared --dir/-C option for git commands."""
    return click.option(
        "--dir", "-C", "directory", type=click.Path(file_okay=False),
        default=".", envvar="FILESURF_DIR", show_default=True,
        help="Directory inside the repository (or set FILESURF_DIR).",
    )(f)


# ---------------------------------------------------------------------------
# Main group
# ---------------------------------------------------------------------------

@click.group()
@click.option("-v", "--verbose", count=True,
              help="Verbose output on stderr (-vv for debug logging).")
@click.pass_context
def main(ctx, verbose):
    """filesurf: file operations, change watching, and git status.

    \b
    Quick start:
      filesurf mkdir . notes
      filesurf cp a.txt b.txt notes
      filesurf flatten notes
      filesurf watch . --detect-moves
      filesurf git status

    File commands keep going past failing entries and report all of them.
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    _configure_logging(verbose)
