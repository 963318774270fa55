#!/usr/bin/env python3
# shellkit/interface/cli.py
from __future__ import annotations

"""
Interactive input frontends.

Selection order:
    1) prompt_toolkit (rich completion + history)
    2) readline / pyreadline3 (basic completion + history)
    3) plain input (last resort)

Frontends raise KeyboardInterrupt on Ctrl-C and EOFError on end of input;
the shell decides what those mean. History is kept in memory, loaded from
and saved to a plain one-line-per-entry file by the shell session.
"""

import logging
from pathlib import Path
from typing import Callable, Optional

from shellkit.commands import CommandRegistry
from shellkit.interface.completion import CommandCompleter, complete

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_LIMIT = 1000


def read_history_lines(path: Path) -> list[str]:
    """Return history entries stored at `path`; a missing file is empty."""
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return []
    return [line for line in text.splitlines() if line.strip()]


def write_history_lines(path: Path, lines: list[str], limit: int = DEFAULT_HISTORY_LIMIT) -> None:
    """Persist the newest `limit` entries, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    kept = lines[-limit:] if limit > 0 else []
    path.write_text("".join(f"{line}\n" for line in kept), encoding="utf-8")


class BaseCLI:
    """
    Base interface for CLI frontends. Plain `input()` with in-memory history.

    Subclasses override:
        - get_line()
        - load_history() / history_lines() / append_history()
        - teardown()

    This base also provides context manager support to guarantee teardown.
    """

    def __init__(self) -> None:
        self._history: list[str] = []

    def setup(self) -> None:
        ...

    def get_line(self, prompt: str) -> str:
        return input(prompt)

    def load_history(self, lines: list[str]) -> None:
        self._history = list(lines)

    def history_lines(self) -> list[str]:
        return list(self._history)

    def append_history(self, line: str) -> None:
        """Record an accepted line, skipping blanks and immediate repeats."""
        if not line.strip():
            return
        if self._history and self._history[-1] == line:
            return
        self._history.append(line)

    def teardown(self) -> None:
        ...

    # Context manager helpers
    def __enter__(self) -> "BaseCLI":
        self.setup()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.teardown()


# ===== Preferred: prompt_toolkit =====
class PromptToolkitCLI(BaseCLI):
    """Rich line editor with history and live completion."""

    def __init__(self, registry: CommandRegistry | None = None) -> None:
        super().__init__()
        from prompt_toolkit import PromptSession
        from prompt_toolkit.history import InMemoryHistory
        from prompt_toolkit.key_binding import KeyBindings

        self._memory = InMemoryHistory()
        completer = CommandCompleter(registry) if registry is not None else None

        # Key bindings to refresh completion when deleting characters.
        kb = KeyBindings()

        @kb.add("backspace")
        def _(event):
            b = event.app.current_buffer
            if b.selection_state:
                b.cut_selection()
            else:
                b.delete_before_cursor(1)
            if b.completer is not None:
                b.start_completion(select_first=False)

        self._session = PromptSession(
            history=self._memory,
            completer=completer,
            complete_while_typing=completer is not None,
            key_bindings=kb,
        )

    def get_line(self, prompt: str) -> str:
        # prompt_toolkit appends the accepted line to its history itself
        return self._session.prompt(prompt)

    def load_history(self, lines: list[str]) -> None:
        for line in lines:
            self._memory.append_string(line)

    def history_lines(self) -> list[str]:
        return list(self._memory.get_strings())

    def append_history(self, line: str) -> None:
        if not line.strip():
            return
        strings = self._memory.get_strings()
        if strings and strings[-1] == line:
            return
        self._memory.append_string(line)


# ===== Fallback: readline / pyreadline3 =====
class ReadlineCLI(BaseCLI):
    """Fallback editor with basic completion and history."""

    def __init__(self, registry: CommandRegistry | None = None) -> None:
        super().__init__()
        import readline  # type: ignore[attr-defined]

        self.readline = readline
        self.registry = registry

    def setup(self) -> None:
        if self.registry is None:
            return
        registry = self.registry
        self.readline.set_completer_delims(" \t\n;")

        def _complete(text_fragment: str, state_index: int) -> Optional[str]:
            buffer_text = self.readline.get_line_buffer()
            cursor = self.readline.get_endidx()
            begin = self.readline.get_begidx()
            result = complete(registry, buffer_text, cursor)
            prefix = buffer_text[:begin]
            matches = []
            for word in result.candidates:
                full = result.head + word
                # readline only replaces the fragment under the cursor
                matches.append(full[len(prefix):] if full.startswith(prefix) else word)
            return matches[state_index] if state_index < len(matches) else None

        self.readline.set_completer(_complete)
        self.readline.parse_and_bind("tab: complete")

    def load_history(self, lines: list[str]) -> None:
        self.readline.clear_history()
        for line in lines:
            self.readline.add_history(line)

    def history_lines(self) -> list[str]:
        count = self.readline.get_current_history_length()
        return [self.readline.get_history_item(i) for i in range(1, count + 1)]

    def append_history(self, line: str) -> None:
        # input() already recorded the line when readline is active
        lines = self.history_lines()
        if line.strip() and (not lines or lines[-1] != line):
            self.readline.add_history(line)


def make_cli(registry: CommandRegistry | None = None) -> BaseCLI:
    """
    Factory to select the best available CLI frontend at runtime.

    `registry` enables tab completion; pass None to disable it.
    """
    factories: list[Callable[[], BaseCLI]] = [
        lambda: PromptToolkitCLI(registry),
        lambda: ReadlineCLI(registry),
    ]
    for factory in factories:
        try:
            return factory()
        except Exception as exc:  # noqa: BLE001 - no terminal / module missing
            logger.debug("Frontend unavailable: %s", exc)
    return BaseCLI()
