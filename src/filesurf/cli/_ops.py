"""File commands: touch, mkdir, rename, rename-all, cp, mv, dup, trash, flatten."""

from __future__ import annotations

import click

from .._paths import paths_equal
from ..naming import can_be_renamed_collectively, get_available_names, get_copy_names
from ..ops import (
    CopyTo,
    DuplicateFiles,
    FlattenFolder,
    MoveTo,
    MoveToTrash,
    NewDirAt,
    NewFileAt,
    RenameMultiple,
    RenameOne,
)
from ._helpers import _check, _entries, _io, _lister, _trash, main

_existing_dir = click.Path(exists=True, file_okay=False)


# ---------------------------------------------------------------------------
# touch / mkdir
# ---------------------------------------------------------------------------

@main.command()
@click.argument("directory", type=_existing_dir)
@click.argument("name")
@click.pass_context
def touch(ctx, directory, name):
    """Create an empty file NAME in DIRECTORY."""
    op = NewFileAt(_io(ctx), directory, name)
    _check(op.invoke(), ctx, f"Created {op.path}")


@main.command()
@click.argument("directory", type=_existing_dir)
@click.argument("name")
@click.pass_context
def mkdir(ctx, directory, name):
    """Create an empty directory NAME in DIRECTORY."""
    op = NewDirAt(_io(ctx), directory, name)
    _check(op.invoke(), ctx, f"Created {op.path}")


# ---------------------------------------------------------------------------
# rename / rename-all
# ---------------------------------------------------------------------------

@main.command()
@click.argument("path", type=click.Path(exists=True))
@click.argument("new_name")
@click.pass_context
def rename(ctx, path, new_name):
    """Rename PATH in place to NEW_NAME."""
    [entry] = _entries([path])
    op = RenameOne(_io(ctx), entry, new_name)
    _check(op.invoke(), ctx, f"Renamed {entry.path} -> {op.new_path}")


@main.command("rename-all")
@click.argument("pattern")
@click.argument("paths", nargs=-1, required=True, type=click.Path(exists=True))
@click.pass_context
def rename_all(ctx, pattern, paths):
    """Rename PATHS to numbered names built from PATTERN.

    \b
    Example:
      filesurf rename-all "holiday.jpg" a.jpg b.jpg
      # -> "holiday (1).jpg", "holiday (2).jpg"
    """
    entries = _entries(paths)
    if not can_be_renamed_collectively(entries):
        raise click.ClickException(
            "Entries must all be directories, or files sharing one extension")
    parent = entries[0].parent
    if any(not paths_equal(e.parent, parent) for e in entries):
        raise click.ClickException("Entries must share one parent directory")
    names = get_available_names(parent, entries, pattern)
    _check(RenameMultiple(_io(ctx), entries, names).invoke(), ctx,
           f"Renamed {len(entries)} entries")
    for entry, name in zip(entries, names):
        click.echo(f"{entry.name} -> {name}")


# ---------------------------------------------------------------------------
# cp / mv / dup
# ---------------------------------------------------------------------------

@main.command()
@click.argument("paths", nargs=-1, required=True, type=click.Path(exists=True))
@click.argument("dest", type=_existing_dir)
@click.pass_context
def cp(ctx, paths, dest):
    """Copy PATHS into the directory DEST."""
    entries = _entries(paths)
    _check(CopyTo(_io(ctx), entries, dest).invoke(), ctx,
           f"Copied {len(entries)} entries to {dest}")


@main.command()
@click.argument("paths", nargs=-1, required=True, type=click.Path(exists=True))
@click.argument("dest", type=_existing_dir)
@click.pass_context
def mv(ctx, paths, dest):
    """Move PATHS into the directory DEST."""
    entries = _entries(paths)
    _check(MoveTo(_io(ctx), entries, dest).invoke(), ctx,
           f"Moved {len(entries)} entries to {dest}")


@main.command()
@click.argument("paths", nargs=-1, required=True, type=click.Path(exists=True))
@click.pass_context
def dup(ctx, paths):
    """Duplicate PATHS beside themselves as "NAME - Copy"."""
    entries = _entries(paths)
    names = get_copy_names(entries)
    _check(DuplicateFiles(_io(ctx), entries, names).invoke(), ctx,
           f"Duplicated {len(entries)} entries")
    for entry, name in zip(entries, names):
        click.echo(f"{entry.name} -> {name}")


# ---------------------------------------------------------------------------
# trash / flatten
# ---------------------------------------------------------------------------

@main.command()
@click.argument("paths", nargs=-1, required=True, type=click.Path(exists=True))
@click.pass_context
def trash(ctx, paths):
    """Move PATHS to the desktop trash."""
    entries = _entries(paths)
    _check(MoveToTrash(_trash(ctx), entries).invoke(), ctx,
           f"Trashed {len(entries)} entries")


@main.command()
@click.argument("directory", type=_existing_dir)
@click.pass_context
def flatten(ctx, directory):
    """Move the contents of DIRECTORY into its parent and remove it."""
    op = FlattenFolder(_io(ctx), _lister(ctx), directory)
    _check(op.invoke(), ctx,
           f"Flattened {op.dir_path} ({len(op.contained)} entries moved up)")
