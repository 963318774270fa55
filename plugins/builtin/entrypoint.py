# plugins/builtin/entrypoint.py
from __future__ import annotations

from shellkit.commands import Command, CommandRegistry
from shellkit.interface import format_help
from shellkit.ui import OutputWriter


def show_help(*name: str, registry: CommandRegistry, out: OutputWriter) -> None:
    out.print_line(format_help(registry, " ".join(name) or None))


def exit_shell() -> None:
    raise SystemExit(0)


COMMANDS = [
    Command(
        name="help",
        callback=show_help,
        description="List commands, or describe one command or category.",
        example="help mode advanced",
        category="builtin",
    ),
    Command(
        name="exit",
        callback=exit_shell,
        description="Leave the shell.",
        category="builtin",
    ),
]
