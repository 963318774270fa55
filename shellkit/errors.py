#!/usr/bin/env python3
# shellkit/errors.py
from __future__ import annotations

"""
Exception taxonomy for the dispatch core.

ShellError is the root of everything the dispatcher raises on user input.
Argument binding failures share ArgumentError so that error handlers can
inspect the offending command, the position and the raw token.

Programmer errors (a misconfigured registration) derive from TypeError
instead and are never offered to error handlers.
"""

from typing import Any


class ShellError(Exception):
    """Base class for recoverable shell errors."""


class CannotParseLine(ShellError):
    """The raw input line could not be split into commands."""

    def __init__(self, message: str = "cannot parse line") -> None:
        super().__init__(message)


class CommandNotFound(ShellError):
    """No registered command matches the input."""

    def __init__(self, name: str) -> None:
        super().__init__(f"command not found: {name}")
        self.name = name


class PromptAborted(ShellError):
    """Raised from the prompt loop when Ctrl-C is configured to abort."""

    def __init__(self) -> None:
        super().__init__("prompt aborted")


class CommandFailed(ShellError):
    """A command reported a failed CommandResult."""

    def __init__(self, command_name: str, message: str = "") -> None:
        super().__init__(f"{command_name}: {message or 'error'}")
        self.command_name = command_name
        self.message = message


class ArgumentError(ShellError):
    """
    Base for argument binding failures.

    Attributes:
        index: Position of the offending token, or None when not tied to one.
        token: The raw token text, when available.
        kind: The declared parameter kind at `index`, when available.
    """

    default_message = "invalid arguments"

    def __init__(
        self,
        message: str | None = None,
        *,
        index: int | None = None,
        token: str | None = None,
        kind: Any = None,
    ) -> None:
        super().__init__(message or self.default_message)
        self.index = index
        self.token = token
        self.kind = kind


class MissingArguments(ArgumentError):
    default_message = "missing arguments"


class InvalidArgument(ArgumentError):
    default_message = "invalid arguments"


class IntegerOverflow(ArgumentError):
    default_message = "value too big"


class UnsignedOverflow(ArgumentError):
    default_message = "unsigned value too big"


class UnsupportedParameterKind(ArgumentError):
    default_message = "unsupported kind"


class InvalidCommandError(TypeError):
    """A command was registered without a callable operation."""


class ConfigError(ValueError):
    """A configuration value failed validation."""

    def __init__(self, key: str, message: str) -> None:
        super().__init__(f"{key}: {message}")
        self.key = key
