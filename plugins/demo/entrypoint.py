# plugins/demo/entrypoint.py
from __future__ import annotations

import logging
import threading
import time

from shellkit.commands import Command, CommandResult, Float64, Int8, Int64, Uint8, command
from shellkit.errors import ArgumentError
from shellkit.interface import build_usage
from shellkit.ui import OutputWriter, colorize

# child of "shellkit": picks up init_logger handlers
logger = logging.getLogger("shellkit.plugins.demo")

_state = {"mode": "basic", "level": 0}


def _words(*candidates: str):
    def _complete(search: str) -> list[str]:
        return [c for c in candidates if c.startswith(search)]
    return _complete


def _usage_on_error(cmd: Command, args: list[str], err: ArgumentError) -> ArgumentError | None:
    """Report bad input with the usage line instead of aborting the line."""
    logger.warning("%s. Usage: %s", err, build_usage(cmd))
    return None


@command(name="echo", description="Print the arguments.", example="echo hello world")
def echo(*words: str, out: OutputWriter) -> None:
    out.print_line(*words)


@command(
    name="mode",
    description="Show the current mode.",
    completer=_words("advanced", "basic"),
)
def mode(*, out: OutputWriter) -> None:
    out.print_line(f"mode: {_state['mode']} (level {_state['level']})")


@command(name="mode basic", description="Switch to basic mode.")
def mode_basic() -> str:
    _state.update(mode="basic", level=0)
    return "mode: basic"


@command(
    name="mode advanced",
    description="Switch to advanced mode at a signed 8-bit level.",
    example="mode advanced 3",
    err_handler=_usage_on_error,
)
def mode_advanced(level: Int8) -> str:
    _state.update(mode="advanced", level=level)
    return f"mode: advanced (level {level})"


@command(name="calc", description="Arithmetic helpers.", completer=_words("add", "div"))
def calc(*, out: OutputWriter) -> None:
    out.print_line("usage: calc add <a> <b> | calc div <a> <b>")


@command(name="calc add", description="Add two 64-bit integers.", example="calc add 0x10 2")
def calc_add(a: Int64, b: Int64) -> int:
    return a + b


@command(name="calc div", description="Divide two numbers.", example="calc div 1 3")
def calc_div(a: Float64, b: Float64) -> CommandResult:
    if b == 0:
        return CommandResult(ok=False, message="division by zero")
    return CommandResult(message=f"{a / b:g}", data=a / b)


@command(
    name="countdown",
    description="Count down in the background; the prompt returns immediately.",
    example="countdown 5",
)
def countdown(seconds: Uint8 = 3, *, out: OutputWriter) -> None:
    def _run() -> None:
        for remaining in range(seconds, 0, -1):
            out.print_line(f"[countdown] {remaining}")
            time.sleep(1)
        out.print_line(colorize("[countdown] done", "green"))

    threading.Thread(target=_run, name="countdown", daemon=True).start()
