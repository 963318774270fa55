#!/usr/bin/env python3
# shellkit/interface/parser.py
from __future__ import annotations

"""
Line parsing helpers.

Responsibilities:
- Tokenize a command line into shell-like tokens.
- Split one raw input line into ';'-separated command invocations.
- Resolve a token list to the longest registered command name.
- Render compact Usage strings from a command's parameter kinds.
"""

import shlex
from typing import Optional, Sequence

from shellkit.commands import Command, CommandRegistry, ParamKind
from shellkit.errors import CannotParseLine

SEPARATOR = ";"


def tokenize(command_line: str) -> list[str]:
    """Split a command line into tokens using POSIX rules."""
    try:
        return shlex.split(command_line, posix=True)
    except ValueError as exc:
        # unbalanced quotes / trailing escape
        raise CannotParseLine(f"cannot parse line: {exc}") from exc


def split_inline_commands(user_input: str) -> list[str]:
    """
    Split one input line into invocation strings.

    Words keep their quotes and backslashes verbatim so that each statement
    can be tokenized again with POSIX rules. Outside quotes:
      - '\\;'  is literal text; the escape marker stays in the statement
      - ';;'   raises CannotParseLine (empty statement)
      - ';'    closes the current statement; empty statements are dropped
    Words of a statement are joined with single spaces.
    """
    lines: list[str] = []
    statement: list[str] = []
    word: list[str] = []
    quote: str | None = None

    def flush_word() -> None:
        if word:
            statement.append("".join(word))
            word.clear()

    def close_statement() -> None:
        flush_word()
        if statement:
            lines.append(" ".join(statement))
            statement.clear()

    position = 0
    length = len(user_input)
    while position < length:
        char = user_input[position]
        following = user_input[position + 1] if position + 1 < length else ""

        if quote is not None:
            word.append(char)
            if char == "\\" and quote == '"' and following:
                word.append(following)
                position += 1
            elif char == quote:
                quote = None
        elif char == "\\":
            word.append(char)
            if following:
                word.append(following)
                position += 1
        elif char in "'\"":
            quote = char
            word.append(char)
        elif char.isspace():
            flush_word()
        elif char == SEPARATOR:
            if following == SEPARATOR:
                raise CannotParseLine(
                    f"cannot parse line: empty statement at column {position + 1}")
            close_statement()
        else:
            word.append(char)
        position += 1

    if quote is not None:
        raise CannotParseLine("cannot parse line: no closing quotation")
    close_statement()
    return lines


def current_word_start(text: str) -> int:
    """
    Offset where the last word of `text` begins, honouring quotes and
    backslashes. Returns len(text) when `text` ends between words.
    """
    start = len(text)
    in_word = False
    quote: str | None = None

    position = 0
    while position < len(text):
        char = text[position]
        if quote is not None:
            if char == "\\" and quote == '"':
                position += 1
            elif char == quote:
                quote = None
        elif char.isspace():
            in_word = False
        else:
            if not in_word:
                start = position
                in_word = True
            if char == "\\":
                position += 1
            elif char in "'\"":
                quote = char
        position += 1

    return start if in_word else len(text)


def longest_match(tokens: Sequence[str], registry: CommandRegistry) -> Optional[tuple[Command, int]]:
    """
    Return (command, consumed) for the longest registered name that is a
    prefix of `tokens`, trying len(tokens) down to 1. None if nothing matches.
    """
    for length in range(len(tokens), 0, -1):
        command_obj = registry.get(" ".join(tokens[:length]))
        if command_obj is not None:
            return command_obj, length
    return None


def resolve_command(tokens: Sequence[str], registry: CommandRegistry) -> Optional[tuple[Command, list[str]]]:
    """Resolve tokens to (command, residual tokens), or None when no name matches."""
    match = longest_match(tokens, registry)
    if match is None:
        return None
    command_obj, consumed = match
    return command_obj, list(tokens[consumed:])


def _kind_label(kind: object) -> str:
    if isinstance(kind, ParamKind):
        return kind.name.lower()
    return getattr(kind, "__name__", str(kind))


def build_usage(command_obj: Command) -> str:
    """
    Render a compact usage string from the command's kinds.

    Example:
        'mode advanced <int8> [string] [args...]'
    """
    usage_parts: list[str] = []
    required = command_obj.required_count
    for index, kind in enumerate(command_obj.kinds or ()):
        label = _kind_label(kind)
        usage_parts.append(f"<{label}>" if index < required else f"[{label}]")
    if command_obj.varargs_kind is not None:
        usage_parts.append("[args...]")

    return f"{command_obj.name} " + " ".join(usage_parts) if usage_parts else command_obj.name
