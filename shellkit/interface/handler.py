#!/usr/bin/env python3
# shellkit/interface/handler.py
from __future__ import annotations

"""
Command dispatch and help formatting.

One raw line is split on ';' into invocations which run strictly left to
right. The first error stops the line:

    split -> tokenize -> longest-name resolve -> bind -> invoke

Binding failures go to the command's err_handler, unknown commands to the
dispatcher's not_found_handler. A handler returning None recovers; a handler
returning (or raising) an exception aborts the dispatch with it.
"""

import difflib
import logging
from typing import Any, Optional, Sequence

from shellkit.commands import (
    Command,
    CommandRegistry,
    CommandResult,
    NotFoundHandler,
    REGISTRY,
)
from shellkit.errors import ArgumentError, CommandFailed, InvalidCommandError
from shellkit.interface.binder import bind_args
from shellkit.interface.parser import (
    build_usage,
    resolve_command,
    split_inline_commands,
    tokenize,
)
from shellkit.ui import OutputWriter, colorize, format_table

logger = logging.getLogger(__name__)

HELP_TEXT = "Type 'help <command>' for more information on a specific command."


class Dispatcher:
    """Resolves and runs input lines against a registry."""

    def __init__(
        self,
        registry: CommandRegistry | None = None,
        writer: OutputWriter | None = None,
        not_found_handler: NotFoundHandler | None = None,
    ) -> None:
        self.registry = registry if registry is not None else REGISTRY
        self.writer = writer or OutputWriter()
        self.not_found_handler = not_found_handler

    def dispatch(self, raw_line: str) -> None:
        """Split `raw_line` and run every invocation; raise the first error."""
        for line in split_inline_commands(raw_line):
            self.process_line(line)

    def process_line(self, line: str) -> Any:
        """Run a single invocation (no ';' separators)."""
        tokens = tokenize(line)
        if not tokens:
            return None

        resolution = resolve_command(tokens, self.registry)
        if resolution is None:
            logger.debug("Command not found: %r", line)
            if self.not_found_handler is not None:
                err = self.not_found_handler(tokens[0])
                if err is not None:
                    raise err
            return None

        command_obj, residual = resolution
        return self.execute(command_obj, residual)

    def execute(self, command_obj: Command, args: Sequence[str]) -> Any:
        """Bind `args` to the command's parameters and invoke it."""
        if command_obj.callback is None or not callable(command_obj.callback):
            raise InvalidCommandError(
                f"Command '{command_obj.name}' requires a callable operation.")

        try:
            values = bind_args(
                command_obj.kinds or (),
                args,
                required=command_obj.required_count,
                varargs_kind=command_obj.varargs_kind,
            )
        except ArgumentError as exc:
            propagated = command_obj.handle_err(exc, list(args))
            if propagated is exc:
                raise
            if propagated is not None:
                raise propagated from exc
            logger.debug("Handled %s for '%s'", type(exc).__name__, command_obj.name)
            return None

        keyword_args = {}
        if command_obj.writer_param:
            keyword_args[command_obj.writer_param] = self.writer
        if command_obj.registry_param:
            keyword_args[command_obj.registry_param] = self.registry

        result = command_obj.invoke(*values, **keyword_args)
        self._emit(command_obj, result)
        return result

    def _emit(self, command_obj: Command, result: Any) -> None:
        """Print a command's return value; failed results become errors."""
        if result is None:
            return
        if isinstance(result, BaseException):
            raise result
        if isinstance(result, CommandResult):
            if not result.ok:
                raise CommandFailed(command_obj.name, result.message)
            if result.message:
                self.writer.print_line(result.message)
            return
        self.writer.print_line(result)


# ---------------------------------------------------------------------------
# Help / unknown-command helpers
# ---------------------------------------------------------------------------


def suggest_similar_names(registry: CommandRegistry, name: str) -> list[str]:
    """Return close matches for a misspelled command name."""
    return difflib.get_close_matches(name, registry.names(), n=3, cutoff=0.6)


def make_not_found_reporter(registry: CommandRegistry, writer: OutputWriter) -> NotFoundHandler:
    """Build a not-found handler that prints a hint and recovers."""

    def _report(name: str) -> Optional[BaseException]:
        matches = suggest_similar_names(registry, name)
        hint = f" Did you mean: {', '.join(matches)}?" if matches else ""
        writer.print_line(colorize(f"Unknown command: {name}.{hint} {HELP_TEXT}", "yellow"))
        return None

    return _report


def format_command_help(registry: CommandRegistry, name: str) -> str:
    """Render help for one command, or for a category when `name` is one."""
    command_obj = registry.get(name)
    if command_obj is None:
        commands_in_category = registry.categories().get(name)
        if commands_in_category:
            return format_command_list(commands_in_category)
        return f"No such command or category: {name}"

    lines = [
        f"Name:        {command_obj.name}",
        f"Category:    {command_obj.category}",
        f"Description: {command_obj.description or '(none)'}",
        f"Example:     {command_obj.example or '(none)'}",
        f"Usage:       {build_usage(command_obj)}",
    ]
    return "\n".join(lines)


def format_command_list(commands: Sequence[Command]) -> str:
    rows = [
        [command_obj.name, command_obj.category, command_obj.description]
        for command_obj in sorted(commands, key=lambda c: c.name)
    ]
    return format_table(rows, headers=["Command", "Category", "Description"])


def format_help(registry: CommandRegistry, name: str | None = None) -> str:
    """Overview of all commands, or details for `name`."""
    if name:
        return format_command_help(registry, name)
    if not len(registry):
        return "No commands loaded."
    return format_command_list(registry.all()) + "\n" + HELP_TEXT
