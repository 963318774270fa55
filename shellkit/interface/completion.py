#!/usr/bin/env python3
# shellkit/interface/completion.py
from __future__ import annotations

"""
Command line completion.

complete() answers "what can be typed next" for the text before the cursor,
walking registered names longest-first exactly like dispatch does:
  1) the whole prefix names a command -> its completer with "" as search
  2) a shorter prefix names a command -> its completer with the last token
     (empty after trailing whitespace); the typed text before that token is
     kept verbatim
  3) otherwise -> registered names starting with the first token

The result is (head, candidates, tail): the edited line becomes
head + candidate + tail.
"""

import logging
from typing import Iterable, NamedTuple, Optional

from prompt_toolkit.completion import CompleteEvent, Completer, Completion
from prompt_toolkit.document import Document

from shellkit.commands import CommandRegistry
from shellkit.errors import CannotParseLine
from shellkit.interface.parser import current_word_start, longest_match, tokenize

logger = logging.getLogger(__name__)


class CompletionResult(NamedTuple):
    head: str
    candidates: list[str]
    tail: str


def complete(registry: CommandRegistry, line: str, pos: Optional[int] = None) -> CompletionResult:
    """Return completion candidates for `line` with the cursor at `pos`."""
    if pos is None:
        pos = len(line)
    before, tail = line[:pos], line[pos:]

    try:
        tokens = tokenize(before)
    except CannotParseLine:
        # partial input such as an open quote: offer nothing
        logger.debug("No completions for unparsable input %r", before)
        return CompletionResult(before, [], tail)

    word_start = current_word_start(before)
    if tokens and word_start == len(before):
        # cursor past a separator: the next word starts out empty
        tokens.append("")

    match = longest_match(tokens, registry)
    if match is not None:
        command_obj, consumed = match
        if consumed == len(tokens):
            return CompletionResult(before + " ", command_obj.complete(""), tail)
        # keep what the user typed (quotes, escapes) up to the current word
        head = before[:word_start]
        return CompletionResult(head, command_obj.complete(tokens[-1]), tail)

    search = tokens[0] if tokens else ""
    names = sorted(name for name in registry.names() if name.startswith(search))
    return CompletionResult("", names, tail)


class CommandCompleter(Completer):
    """prompt_toolkit adapter around complete()."""

    def __init__(self, registry: CommandRegistry) -> None:
        self.registry = registry

    def get_completions(self, document: Document, complete_event: CompleteEvent) -> Iterable[Completion]:
        result = complete(self.registry, document.text, document.cursor_position)
        replace_len = len(document.text_before_cursor)
        for word in result.candidates:
            # replace everything before the cursor with head + candidate
            yield Completion(result.head + word, start_position=-replace_len, display=word)
