#!/usr/bin/env python3
# shellkit/ui/utils/console.py
from __future__ import annotations

"""
Synchronized output sink.

Commands may spawn threads that keep printing after the prompt has returned.
Every write goes through one lock per writer so lines never interleave.
"""

import sys
import threading
from contextlib import contextmanager
from typing import IO, Any, Iterator


class OutputWriter:
    """Thread-safe text sink shared by a shell session and its commands."""

    def __init__(self, stream: IO[str] | None = None) -> None:
        self._stream = stream
        self.lock = threading.Lock()

    @property
    def stream(self) -> IO[str]:
        # Resolve sys.stdout lazily so redirection after construction is honoured.
        return self._stream if self._stream is not None else sys.stdout

    @contextmanager
    def locked(self) -> Iterator[IO[str]]:
        """Hold the lock for a multi-part write and yield the raw stream."""
        with self.lock:
            yield self.stream
            self.stream.flush()

    def write(self, text: str) -> int:
        with self.lock:
            written = self.stream.write(text)
            self.stream.flush()
        return written

    def print(self, *values: Any, sep: str = " ", end: str = "") -> int:
        """Write the values without a trailing newline (like fmt.Print)."""
        return self.write(sep.join(str(v) for v in values) + end)

    def print_line(self, *values: Any, sep: str = " ") -> int:
        return self.print(*values, sep=sep, end="\n")

    def printf(self, fmt: str, *args: Any) -> int:
        """printf-style formatting using %-interpolation."""
        return self.write(fmt % args if args else fmt)
