"""Console-script entry point for ``filesurf``.

click ships in the optional ``cli`` extra; without it the script prints an
install hint and exits with status 1 rather than a traceback.
"""

import sys

_MISSING_CLICK = (
    "filesurf: the command-line tools need click.\n"
    "Install them with:  pip install 'filesurf[cli]'\n"
)


def main(argv=None):
    try:
        from .cli import main as cli
    except ModuleNotFoundError as exc:
        if exc.name != "click":
            raise
        sys.stderr.write(_MISSING_CLICK)
        return 1
    return cli.main(args=argv, prog_name="filesurf")
