#!/usr/bin/env python3
# shellkit/boot.py
from __future__ import annotations
"""
Boot sequence for the interactive shell.

Steps print Linux-style [  OK  ] / [FAILED] lines through the session
writer: load configuration, initialize logging, load command modules,
build the Shell and attach history.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable

from shellkit.config import AppConfig, load_config
from shellkit.commands import CommandRegistry
from shellkit.interface import Shell, load_commands, make_not_found_reporter
from shellkit.ui import OutputWriter, colorize, init_logger


@dataclass(slots=True)
class BootState:
    shell: Shell
    logger: logging.Logger
    config: AppConfig
    loaded_count: int


def _step(writer: OutputWriter, label: str, fn: Callable[[], Any], *, quiet: bool = False) -> Any:
    """Run a boot step with status output."""
    try:
        out = fn()
    except Exception as exc:
        writer.print_line(
            colorize(f"[FAILED] {label} ({type(exc).__name__}: {exc})", "red"))
        raise
    if not quiet:
        writer.print_line(colorize(f"[  OK  ] {label}", "green"))
    return out


def boot_sequence(
    config: AppConfig | None = None,
    *,
    writer: OutputWriter | None = None,
    registry: CommandRegistry | None = None,
    quiet: bool = False,
) -> BootState:
    writer = writer or OutputWriter()
    registry = registry if registry is not None else CommandRegistry()

    if config is None:
        config = _step(writer, "Load configuration", load_config, quiet=quiet)

    logger = _step(
        writer,
        "Initialize logger",
        lambda: init_logger(
            "shellkit",
            level=config.log_level or logging.WARNING,
            logfile=str(config.log_file) if config.log_file else None,
            writer=writer,
        ),
        quiet=quiet,
    )

    loaded_count = _step(
        writer,
        f"Load commands from '{config.plugin_package}'",
        lambda: load_commands(config.plugin_package, registry),
        quiet=quiet,
    )

    shell = Shell(
        prompt=config.prompt,
        banner=config.banner,
        registry=registry,
        writer=writer,
        ctrl_c_aborts=config.ctrl_c_aborts,
        enable_completion=config.enable_completion,
        history_limit=config.history_limit,
    )
    shell.set_not_found_handler(make_not_found_reporter(registry, writer))

    if config.history_file is not None:
        _step(writer, "Load history", lambda: shell.set_history_file(config.history_file), quiet=quiet)

    _step(writer, f"Boot complete ({len(registry)} commands)", lambda: None, quiet=quiet)
    return BootState(shell=shell, logger=logger, config=config, loaded_count=loaded_count)
