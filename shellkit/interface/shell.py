#!/usr/bin/env python3
# shellkit/interface/shell.py
from __future__ import annotations

"""
Interactive shell session.

A Shell owns a command registry, a dispatcher, a synchronized output
writer and a line-editor frontend. The prompt loop is single threaded:
each line is split, resolved, bound and executed before the next prompt.
"""

import logging
from pathlib import Path
from typing import Any, Callable, Iterable

from shellkit.commands import (
    Command,
    CommandRegistry,
    Completer,
    ErrHandler,
    NotFoundHandler,
)
from shellkit.errors import PromptAborted
from shellkit.interface.cli import (
    DEFAULT_HISTORY_LIMIT,
    BaseCLI,
    make_cli,
    read_history_lines,
    write_history_lines,
)
from shellkit.interface.completion import CompletionResult, complete
from shellkit.interface.handler import Dispatcher
from shellkit.ui import OutputWriter

logger = logging.getLogger(__name__)

DEFAULT_PROMPT = "shellkit > "


class Shell:
    """Prompt loop plus the public command-management API."""

    def __init__(
        self,
        *,
        prompt: str = DEFAULT_PROMPT,
        banner: str = "",
        registry: CommandRegistry | None = None,
        writer: OutputWriter | None = None,
        frontend: BaseCLI | None = None,
        ctrl_c_aborts: bool = False,
        enable_completion: bool = True,
        history_limit: int = DEFAULT_HISTORY_LIMIT,
        not_found_handler: NotFoundHandler | None = None,
    ) -> None:
        self.prompt = prompt
        self.banner = banner
        self.registry = registry if registry is not None else CommandRegistry()
        self.writer = writer or OutputWriter()
        self.dispatcher = Dispatcher(self.registry, self.writer, not_found_handler)
        self.ctrl_c_aborts = ctrl_c_aborts
        self.enable_completion = enable_completion
        self.history_limit = history_limit
        self.history_file: Path | None = None
        self._frontend = frontend
        self._frontend_ready = False
        self._ended = False

    # ---------------- Configuration ----------------

    @property
    def frontend(self) -> BaseCLI:
        if self._frontend is None:
            self._frontend = make_cli(self.registry if self.enable_completion else None)
        if not self._frontend_ready:
            self._frontend.setup()
            self._frontend_ready = True
        return self._frontend

    def set_prompt(self, prompt: str) -> None:
        self.prompt = prompt

    def set_ctrl_c_aborts(self, aborts: bool) -> None:
        self.ctrl_c_aborts = aborts

    def set_not_found_handler(self, handler: NotFoundHandler | None) -> None:
        self.dispatcher.not_found_handler = handler

    def set_history_file(self, path: str | Path) -> None:
        """Use `path` for history and load any entries it already holds."""
        self.history_file = Path(path).expanduser()
        lines = read_history_lines(self.history_file)
        self.frontend.load_history(lines[-self.history_limit:] if self.history_limit > 0 else [])
        logger.debug("Loaded %d history entries from %s", len(lines), self.history_file)

    # ---------------- Commands ----------------

    def add_command(self, command_obj: Command) -> Command:
        return self.registry.add(command_obj)

    def register(
        self,
        name: str,
        operation: Callable[..., Any],
        completer: Completer | None = None,
        err_handler: ErrHandler | None = None,
        **metadata: Any,
    ) -> Command:
        """Register `operation` under `name`; kinds come from its signature."""
        return self.registry.add(Command(
            name=name,
            callback=operation,
            completer=completer,
            err_handler=err_handler,
            **metadata,
        ))

    def set_commands(self, commands: Iterable[Command]) -> None:
        for command_obj in commands:
            self.registry.add(command_obj)

    def remove_command(self, name: str) -> None:
        self.registry.remove(name)

    def commands(self) -> dict[str, Command]:
        return self.registry.as_dict()

    # ---------------- Dispatch ----------------

    def dispatch(self, raw_line: str) -> None:
        self.dispatcher.dispatch(raw_line)

    def completions_for(self, line: str, cursor: int | None = None) -> CompletionResult:
        return complete(self.registry, line, cursor)

    def process(self) -> None:
        """Read one line from the frontend, record it and run it."""
        user_input = self.frontend.get_line(self.prompt)
        self.frontend.append_history(user_input)
        self.dispatch(user_input)

    def start(self) -> None:
        """
        Run the prompt loop until end of input.

        Ctrl-C clears the line, or raises PromptAborted when ctrl_c_aborts
        is set. Errors from dispatch end the loop and propagate. History is
        written and the frontend closed in every case.
        """
        self._ended = False
        try:
            if self.banner:
                self.writer.print_line(self.banner)
            while True:
                try:
                    self.process()
                except KeyboardInterrupt:
                    if self.ctrl_c_aborts:
                        raise PromptAborted() from None
                except EOFError:
                    return
        finally:
            self.end()

    def start_with_input(self, user_input: str) -> None:
        """Run `user_input` first, then enter the prompt loop."""
        try:
            self.dispatch(user_input)
        except BaseException:
            self.end()
            raise
        self.start()

    def end(self) -> None:
        """Write history and close the frontend; safe to call twice."""
        if self._ended:
            return
        self._ended = True
        if self._frontend is None:
            return
        try:
            if self.history_file is not None:
                write_history_lines(
                    self.history_file, self._frontend.history_lines(), self.history_limit)
        finally:
            self._frontend.teardown()
            self._frontend_ready = False

    def __enter__(self) -> "Shell":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.end()
