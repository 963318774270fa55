#!/usr/bin/env python3
# shellkit/__init__.py
from __future__ import annotations
"""
shellkit: dispatch core for interactive command-line shells.

Keep this module light: only re-export the most used names.
"""

from shellkit.commands import Command, CommandRegistry, CommandResult, ParamKind, command  # noqa: F401
from shellkit.errors import ShellError  # noqa: F401
from shellkit.interface import Shell  # noqa: F401
from shellkit.ui import OutputWriter  # noqa: F401

__version__ = "0.1.0"
