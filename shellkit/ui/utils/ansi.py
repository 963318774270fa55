#!/usr/bin/env python3
# shellkit/ui/utils/ansi.py
from __future__ import annotations

"""
SGR colour codes for help text, prompts and log records.

colorize() always emits codes; writers that target a file or pipe decide
with ansi_supported() whether to keep them or strip_ansi() them.
"""

import os
import re
import sys
from functools import lru_cache
from typing import IO

ANSI = {
    "reset": "\x1b[0m",
    "bold": "\x1b[1m",
    "dim": "\x1b[2m",
    "red": "\x1b[31m",
    "green": "\x1b[32m",
    "yellow": "\x1b[33m",
    "blue": "\x1b[34m",
    "magenta": "\x1b[35m",
    "cyan": "\x1b[36m",
    "bright_black": "\x1b[90m",
}

ANSI_REGEX = re.compile(r"\x1b\[[0-9;]*[A-Za-z]")


def strip_ansi(text: str) -> str:
    return ANSI_REGEX.sub("", text)


def colorize(text: str, *styles: str) -> str:
    """Wrap `text` in the named styles; unknown names are ignored."""
    codes = "".join(ANSI[style] for style in styles if style in ANSI)
    return f"{codes}{text}{ANSI['reset']}" if codes else text


@lru_cache(maxsize=1)
def _windows_console_vt() -> bool:
    """Switch the attached Windows console to VT processing, once."""
    try:
        import ctypes

        kernel32 = ctypes.windll.kernel32  # type: ignore[attr-defined]
        handle = kernel32.GetStdHandle(-11)  # STD_OUTPUT_HANDLE
        mode = ctypes.c_uint()
        if not kernel32.GetConsoleMode(handle, ctypes.byref(mode)):
            return False
        return bool(kernel32.SetConsoleMode(handle, mode.value | 0x0004))
    except (AttributeError, OSError):
        return False


def ansi_supported(stream: IO[str] | None = None) -> bool:
    """
    Whether colour codes should reach `stream` (stdout when omitted).

    NO_COLOR disables colour, FORCE_COLOR enables it; otherwise only
    terminals get colour.
    """
    if os.environ.get("NO_COLOR"):
        return False
    if os.environ.get("FORCE_COLOR"):
        return True
    stream = stream if stream is not None else sys.stdout
    isatty = getattr(stream, "isatty", None)
    if isatty is None or not isatty():
        return False
    if os.name == "nt":
        return bool(os.environ.get("WT_SESSION")) or _windows_console_vt()
    return True
