#!/usr/bin/env python3
# shellkit/__main__.py
from __future__ import annotations

"""Entry point: `python -m shellkit [command line ...]`."""

import sys

from shellkit.boot import boot_sequence
from shellkit.errors import PromptAborted, ShellError


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    state = boot_sequence(quiet=bool(args))
    try:
        if args:
            # one-shot mode: run the given line and exit
            try:
                state.shell.dispatch(" ".join(args))
            finally:
                state.shell.end()
        else:
            state.shell.start()
    except PromptAborted:
        return 130
    except ShellError as exc:
        state.logger.error("%s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
