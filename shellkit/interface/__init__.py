#!/usr/bin/env python3
# shellkit/interface/__init__.py
from __future__ import annotations

"""
Package for interactive console interface and command dispatch.

Provides:
- Line splitting, tokenizing and longest-name command resolution.
- Argument binding from string tokens to typed parameter values.
- Completion shared by every frontend.
- The Dispatcher and help formatting.
- CLI frontends with history (prompt_toolkit / readline / plain).
- The Shell session and the plugin loader.
"""


# Parser utilities first (everything else depends on them)
from .parser import (
    tokenize,
    split_inline_commands,
    current_word_start,
    resolve_command,
    longest_match,
    build_usage,
)
from .binder import convert_value, bind_args

# Completion (cli depends on it)
from .completion import complete, CompletionResult, CommandCompleter

# Command dispatcher / help
from .handler import (
    Dispatcher,
    HELP_TEXT,
    format_help,
    format_command_help,
    make_not_found_reporter,
    suggest_similar_names,
)

# CLI frontends
from .cli import BaseCLI, PromptToolkitCLI, ReadlineCLI, make_cli

from .shell import Shell, DEFAULT_PROMPT
from .loader import load_commands

__all__ = [
    # parser
    "tokenize",
    "split_inline_commands",
    "current_word_start",
    "resolve_command",
    "longest_match",
    "build_usage",
    # binder
    "convert_value",
    "bind_args",
    # completion
    "complete",
    "CompletionResult",
    "CommandCompleter",
    # handler
    "Dispatcher",
    "HELP_TEXT",
    "format_help",
    "format_command_help",
    "make_not_found_reporter",
    "suggest_similar_names",
    # cli
    "BaseCLI",
    "PromptToolkitCLI",
    "ReadlineCLI",
    "make_cli",
    # shell
    "Shell",
    "DEFAULT_PROMPT",
    "load_commands",
]
