"""The watch command: print change events under a directory."""

from __future__ import annotations

import datetime
import json
import threading

import click

from ..watcher import ChangeEvent, ChangeKind, DirectoryWatcher
from ._helpers import _check, _lister, _status, main

_SYMBOLS = {
    ChangeKind.CREATED: "+",
    ChangeKind.DELETED: "-",
    ChangeKind.UPDATED: "~",
    ChangeKind.MOVED: ">",
}


def _format_event(event: ChangeEvent, fmt: str) -> str:
    if fmt == "json":
        return json.dumps(event.to_dict())
    now = datetime.datetime.now().strftime("%H:%M:%S")
    suffix = "/" if event.is_dir else ""
    line = f"[{now}] {_SYMBOLS[event.kind]} {event.path}{suffix}"
    if event.new_path:
        line += f" -> {event.new_path}"
    return line


@main.command()
@click.argument("root", type=click.Path(exists=True, file_okay=False))
@click.option("--interval", type=click.FloatRange(min=0), default=1.0,
              show_default=True, envvar="FILESURF_WATCH_INTERVAL",
              help="Seconds between samples (or set FILESURF_WATCH_INTERVAL).")
@click.option("--hidden/--no-hidden", default=True, show_default=True,
              envvar="FILESURF_WATCH_HIDDEN",
              help="Include hidden files (or set FILESURF_WATCH_HIDDEN).")
@click.option("--detect-moves", is_flag=True, default=False,
              help="Report unambiguous file moves as a single event.")
@click.option("--format", "fmt", type=click.Choice(["text", "json"]),
              default="text", show_default=True, help="Output format.")
@click.pass_context
def watch(ctx, root, interval, hidden, detect_moves, fmt):
    """Print changes under ROOT until interrupted (Ctrl-C)."""
    watcher = DirectoryWatcher(root, interval, lister=_lister(ctx),
                               include_hidden=hidden, detect_moves=detect_moves)
    watcher.subscribe(lambda event: click.echo(_format_event(event, fmt)))
    cancel = ctx.obj.get("watch_cancel") or threading.Event()

    _status(ctx, f"Watching {watcher.root} every {interval}s")
    try:
        result = watcher.run(cancel)
    except KeyboardInterrupt:
        _status(ctx, "Stopped")
        return
    _check(result)
