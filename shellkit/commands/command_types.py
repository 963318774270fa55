#!/usr/bin/env python3
# shellkit/commands/command_types.py
from __future__ import annotations

"""
Command data structures and protocols.

This module defines:
- ParamKind: the tag describing how a token is converted for one parameter.
- Int8 ... Float64: Annotated aliases selecting a kind from a plain signature.
- Completer / ErrHandler / NotFoundHandler: callback protocols.
- CommandResult: a normalized result container for command outputs.
- Command: a registered command with metadata and a callable.
"""

import enum
from dataclasses import dataclass, field
from typing import Annotated, Any, Callable, Optional, Protocol, Sequence

from shellkit.errors import ArgumentError


class ParamKind(enum.Enum):
    """Supported parameter kinds; `family` and `bits` drive conversion."""

    INT = "int"
    INT8 = "int8"
    INT16 = "int16"
    INT32 = "int32"
    INT64 = "int64"
    UINT = "uint"
    UINT8 = "uint8"
    UINT16 = "uint16"
    UINT32 = "uint32"
    UINT64 = "uint64"
    FLOAT32 = "float32"
    FLOAT64 = "float64"
    STRING = "string"
    BOOL = "bool"

    @property
    def family(self) -> str:
        return _LAYOUT[self][0]

    @property
    def bits(self) -> int:
        return _LAYOUT[self][1]


# kind -> (family, bit width); INT and UINT are 64-bit
_LAYOUT: dict[ParamKind, tuple[str, int]] = {
    ParamKind.INT: ("int", 64),
    ParamKind.INT8: ("int", 8),
    ParamKind.INT16: ("int", 16),
    ParamKind.INT32: ("int", 32),
    ParamKind.INT64: ("int", 64),
    ParamKind.UINT: ("uint", 64),
    ParamKind.UINT8: ("uint", 8),
    ParamKind.UINT16: ("uint", 16),
    ParamKind.UINT32: ("uint", 32),
    ParamKind.UINT64: ("uint", 64),
    ParamKind.FLOAT32: ("float", 32),
    ParamKind.FLOAT64: ("float", 64),
    ParamKind.STRING: ("str", 0),
    ParamKind.BOOL: ("bool", 0),
}


# Annotated aliases: `def cmd(level: Int8)` binds `level` as a signed 8-bit value.
Int8 = Annotated[int, ParamKind.INT8]
Int16 = Annotated[int, ParamKind.INT16]
Int32 = Annotated[int, ParamKind.INT32]
Int64 = Annotated[int, ParamKind.INT64]
Uint = Annotated[int, ParamKind.UINT]
Uint8 = Annotated[int, ParamKind.UINT8]
Uint16 = Annotated[int, ParamKind.UINT16]
Uint32 = Annotated[int, ParamKind.UINT32]
Uint64 = Annotated[int, ParamKind.UINT64]
Float32 = Annotated[float, ParamKind.FLOAT32]
Float64 = Annotated[float, ParamKind.FLOAT64]


class CommandCallback(Protocol):
    """Protocol for any command function."""

    def __call__(self, *args: Any, **kwargs: Any) -> Any:  # pragma: no cover - signature only
        ...


# search text -> candidates
Completer = Callable[[str], Sequence[str]]
# (command, raw args, error) -> None when handled, else the error to propagate
ErrHandler = Callable[["Command", list[str], ArgumentError], Optional[BaseException]]
# first token of the unmatched input -> None when handled, else the error to propagate
NotFoundHandler = Callable[[str], Optional[BaseException]]


@dataclass(slots=True)
class CommandResult:
    """
    Normalized result container from command execution.

    Attributes:
        ok: True if the command completed successfully.
        message: Human-readable summary or primary output.
        data: Optional machine-readable payload (dict/list/primitive).
    """
    ok: bool = True
    message: str = ""
    data: Any = None

    def __str__(self) -> str:
        # Keep CLI printing predictable
        return self.message if self.message else ("ok" if self.ok else "error")


@dataclass(slots=True)
class Command:
    """
    A registered command with metadata and a callable to execute.

    Important fields:
        name: Unique command name; may hold several words ("mode advanced").
        callback: Function implementing the command.
        kinds: Ordered parameter kinds. Derived from the callback signature
            when the command is registered without explicit kinds.
        required: How many leading kinds must be supplied (defaults to all).
        varargs_kind: Kind applied to surplus tokens when the callback
            takes *args; surplus tokens are ignored otherwise.
        writer_param: Keyword-only parameter receiving the session writer.
        registry_param: Keyword-only parameter receiving the session registry.
        completer: Candidate provider for subcommands/arguments.
        err_handler: Recovery hook for argument binding failures.
    """

    name: str
    callback: CommandCallback | None
    kinds: tuple[Any, ...] | None = None
    completer: Completer | None = None
    err_handler: ErrHandler | None = None
    description: str = ""
    example: str = ""
    category: str = "general"
    module: str = field(default="", repr=False)
    required: int | None = None
    varargs_kind: Any = None
    writer_param: str | None = None
    registry_param: str | None = None

    @property
    def arity(self) -> int:
        return len(self.kinds or ())

    @property
    def required_count(self) -> int:
        return self.arity if self.required is None else self.required

    def complete(self, search: str) -> list[str]:
        """Return completion candidates, or an empty list without a completer."""
        if self.completer is None:
            return []
        return list(self.completer(search))

    def handle_err(self, err: ArgumentError, args: list[str]) -> BaseException | None:
        """Offer `err` to the error handler; return what must propagate, if anything."""
        if self.err_handler is None:
            return err
        return self.err_handler(self, args, err)

    def invoke(self, *args: Any, **kwargs: Any) -> Any:
        """Execute the underlying command callback with provided arguments."""
        return self.callback(*args, **kwargs)  # type: ignore[misc]
