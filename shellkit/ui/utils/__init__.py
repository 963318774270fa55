#!/usr/bin/env python3
# shellkit/ui/utils/__init__.py
from __future__ import annotations
from .ansi import (
    ANSI,
    strip_ansi,
    ansi_supported,
    colorize,
)
from .console import OutputWriter

__all__ = [
    "ANSI",
    "strip_ansi",
    "ansi_supported",
    "colorize",
    "OutputWriter",
]
