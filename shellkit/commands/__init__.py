#!/usr/bin/env python3
# shellkit/commands/__init__.py
from __future__ import annotations

"""
Package for command management and registration.

Provides:
- Data structures and protocols (`Command`, `CommandResult`, `ParamKind`, ...).
- In-memory registry and decorators (`CommandRegistry`, `REGISTRY`, `command`).

This package re-exports public APIs from:
- command_types.py
- commands.py
"""


# Re-export from submodules
from .command_types import (
    Command,
    CommandResult,
    CommandCallback,
    Completer,
    ErrHandler,
    NotFoundHandler,
    ParamKind,
    Int8,
    Int16,
    Int32,
    Int64,
    Uint,
    Uint8,
    Uint16,
    Uint32,
    Uint64,
    Float32,
    Float64,
)
from .commands import (
    CommandRegistry,
    REGISTRY,
    command,
    register_command,
    describe_signature,
    kind_for_annotation,
)

__all__ = [
    "Command",
    "CommandResult",
    "CommandCallback",
    "Completer",
    "ErrHandler",
    "NotFoundHandler",
    "ParamKind",
    "Int8",
    "Int16",
    "Int32",
    "Int64",
    "Uint",
    "Uint8",
    "Uint16",
    "Uint32",
    "Uint64",
    "Float32",
    "Float64",
    "CommandRegistry",
    "REGISTRY",
    "command",
    "register_command",
    "describe_signature",
    "kind_for_annotation",
]
