#!/usr/bin/env python3
# shellkit/commands/commands.py
from __future__ import annotations

"""
Command registry and decorator utilities.

This module provides:
- describe_signature: derive parameter kinds from a callable, once.
- CommandRegistry: in-memory mapping of command name -> Command.
- command: decorator to register functions as commands with metadata.
- register_command: explicit API to register pre-built Command objects.
"""

import inspect
import logging
import typing
from typing import Any, Callable, Dict, Optional

from shellkit.commands.command_types import (
    Command,
    Completer,
    ErrHandler,
    ParamKind,
)
from shellkit.ui import OutputWriter

logger = logging.getLogger(__name__)

_PLAIN_KINDS: dict[Any, ParamKind] = {
    int: ParamKind.INT,
    float: ParamKind.FLOAT64,
    str: ParamKind.STRING,
    bool: ParamKind.BOOL,
    inspect.Parameter.empty: ParamKind.STRING,
    Any: ParamKind.STRING,
}


def kind_for_annotation(annotation: Any) -> Any:
    """
    Map a resolved annotation to a ParamKind.

    Unknown annotations are returned unchanged; the binder reports them as
    unsupported when the command runs.
    """
    if typing.get_origin(annotation) is typing.Annotated:
        for meta in annotation.__metadata__:
            if isinstance(meta, ParamKind):
                return meta
        annotation = typing.get_args(annotation)[0]
    if isinstance(annotation, ParamKind):
        return annotation
    try:
        return _PLAIN_KINDS.get(annotation, annotation)
    except TypeError:
        # unhashable annotation objects
        return annotation


def _resolved_hints(func: Callable[..., Any]) -> dict[str, Any]:
    """
    Resolve string annotations against the callback's module.

    get_type_hints() fails as a whole when any single name is unresolvable
    (e.g. imported under TYPE_CHECKING); in that case each annotation is
    evaluated on its own and the unresolvable ones are left out.
    """
    try:
        return typing.get_type_hints(func, include_extras=True)
    except Exception:  # noqa: BLE001 - unresolvable forward references
        pass

    namespace = getattr(inspect.unwrap(func), "__globals__", {})
    hints: dict[str, Any] = {}
    for name, annotation in getattr(func, "__annotations__", {}).items():
        if isinstance(annotation, str):
            try:
                annotation = eval(annotation, namespace)  # noqa: S307
            except Exception:  # noqa: BLE001
                continue
        hints[name] = annotation
    return hints


def describe_signature(func: Callable[..., Any]) -> dict[str, Any]:
    """
    Inspect `func` and return the binding metadata stored on a Command:
    kinds, required, varargs_kind, writer_param and registry_param.
    Keyword-only parameters annotated OutputWriter or CommandRegistry are
    filled in by the dispatcher; other keyword-only parameters keep defaults.
    """
    signature = inspect.signature(func)
    hints = _resolved_hints(func)

    kinds: list[Any] = []
    required = 0
    varargs_kind = None
    writer_param = None
    registry_param = None

    for parameter in signature.parameters.values():
        annotation = hints.get(parameter.name, parameter.annotation)
        if parameter.kind in (parameter.POSITIONAL_ONLY, parameter.POSITIONAL_OR_KEYWORD):
            kinds.append(kind_for_annotation(annotation))
            if parameter.default is inspect.Parameter.empty:
                required = len(kinds)
        elif parameter.kind is parameter.VAR_POSITIONAL:
            varargs_kind = kind_for_annotation(annotation)
        elif parameter.kind is parameter.KEYWORD_ONLY:
            if annotation is OutputWriter or annotation == "OutputWriter":
                writer_param = parameter.name
            elif annotation is CommandRegistry or annotation == "CommandRegistry":
                registry_param = parameter.name

    return {
        "kinds": tuple(kinds),
        "required": required,
        "varargs_kind": varargs_kind,
        "writer_param": writer_param,
        "registry_param": registry_param,
    }


class CommandRegistry:
    """Holds all command definitions and provides lookup utilities."""

    def __init__(self) -> None:
        self._commands_by_name: Dict[str, Command] = {}
        # Category -> description text
        self._category_descriptions: Dict[str, str] = {}

    # ---------------- Registration ----------------

    def add(self, command_obj: Command) -> Command:
        """
        Register a command, replacing any command with the same name.

        Parameter kinds are derived from the callback here, never on the
        dispatch path.
        """
        if not isinstance(command_obj.name, str) or not command_obj.name.strip():
            raise ValueError("Command name must be a non-empty string.")
        # Resolution joins tokens with single spaces.
        command_obj.name = " ".join(command_obj.name.split())

        if command_obj.kinds is None and callable(command_obj.callback):
            meta = describe_signature(command_obj.callback)
            command_obj.kinds = meta["kinds"]
            if command_obj.required is None:
                command_obj.required = meta["required"]
            if command_obj.varargs_kind is None:
                command_obj.varargs_kind = meta["varargs_kind"]
            if command_obj.writer_param is None:
                command_obj.writer_param = meta["writer_param"]
            if command_obj.registry_param is None:
                command_obj.registry_param = meta["registry_param"]
        elif command_obj.kinds is not None:
            command_obj.kinds = tuple(command_obj.kinds)

        unsupported = [k for k in command_obj.kinds or () if not isinstance(k, ParamKind)]
        if unsupported:
            logger.warning("Command '%s' declares unsupported parameter kinds: %s",
                           command_obj.name, ", ".join(map(repr, unsupported)))

        if command_obj.name in self._commands_by_name:
            logger.debug("Replacing command '%s'", command_obj.name)
        self._commands_by_name[command_obj.name] = command_obj
        return command_obj

    register = add

    def remove(self, name: str) -> None:
        """Remove a command by name; unknown names are ignored."""
        if self._commands_by_name.pop(name, None) is not None:
            logger.debug("Removed command '%s'", name)

    def clear(self) -> None:
        self._commands_by_name.clear()

    # ---------------- Lookup ----------------

    def get(self, name: str) -> Optional[Command]:
        """Return the command registered under exactly `name`, or None."""
        return self._commands_by_name.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._commands_by_name

    def __len__(self) -> int:
        return len(self._commands_by_name)

    def all(self) -> list[Command]:
        return list(self._commands_by_name.values())

    def names(self) -> list[str]:
        """Return all registered names for completion."""
        return list(self._commands_by_name.keys())

    def as_dict(self) -> dict[str, Command]:
        return dict(self._commands_by_name)

    # ---------------- Categories ----------------

    def categories(self) -> dict[str, list[Command]]:
        """Group commands by category for help output."""
        grouped: dict[str, list[Command]] = {}
        for cmd in self._commands_by_name.values():
            grouped.setdefault(cmd.category, []).append(cmd)
        return grouped

    def set_category_description(self, category: str, description: str) -> None:
        self._category_descriptions[category] = description.strip()

    def get_category_description(self, category: str) -> str:
        return self._category_descriptions.get(category, "")


# Global registry populated by the `command` decorator and the plugin loader
REGISTRY = CommandRegistry()


def command(
    *,
    name: str | None = None,
    description: str | None = None,
    example: str | None = None,
    category: str | None = None,
    completer: Completer | None = None,
    err_handler: ErrHandler | None = None,
    kinds: tuple[Any, ...] | None = None,
    registry: CommandRegistry | None = None,
) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """
    Decorator to register a function as a CLI command with metadata.

    - Function name is transformed from snake_case to kebab-case for `name` if not provided.
    - Parameter kinds come from the signature unless `kinds` is given.
    """

    def wrapper(func: Callable[..., Any]) -> Callable[..., Any]:
        command_obj = Command(
            name=name or func.__name__.replace("_", "-"),
            callback=func,
            kinds=kinds,
            completer=completer,
            err_handler=err_handler,
            description=(description or (func.__doc__ or "")).strip(),
            example=example or "",
            category=category or "general",
        )
        command_obj.module = func.__module__
        (registry if registry is not None else REGISTRY).add(command_obj)
        return func

    return wrapper


def register_command(command_obj: Command, registry: CommandRegistry | None = None) -> None:
    """Explicit API for modules that construct Command objects directly."""
    (registry if registry is not None else REGISTRY).add(command_obj)
