#!/usr/bin/env python3
# shellkit/interface/loader.py
from __future__ import annotations

"""
Dynamic command loader.

Features:
- Imports all modules under a given package (default: 'plugins').
- Supports 'entrypoint.py' inside a subpackage exporting COMMAND/COMMANDS.
- Copies decorator-registered commands into the target registry.
- Derives categories from module paths if not explicitly set.
- Collects category descriptions from either CATEGORY_DESCRIPTION or module docstring.
"""

import importlib
import logging
import pkgutil
from pathlib import Path
from types import ModuleType
from typing import Iterable

from shellkit.commands import REGISTRY, Command, CommandRegistry

logger = logging.getLogger(__name__)


def _register_from_entry_module(module: ModuleType, registry: CommandRegistry) -> int:
    """Register COMMAND/COMMANDS exported by an entry module, if present."""
    registered_count = 0
    obj = getattr(module, "COMMAND", None)
    if isinstance(obj, Command):
        registry.add(obj)
        registered_count += 1
    objs = getattr(module, "COMMANDS", None)
    if isinstance(objs, Iterable):
        for item in objs:
            if isinstance(item, Command):
                registry.add(item)
                registered_count += 1
    return registered_count


def load_commands(commands_package: str = "plugins", registry: CommandRegistry | None = None) -> int:
    """
    Import all modules under the given package (e.g., 'plugins').

    Supported layouts:
      1) Plain modules: plugins/foo.py  -> import plugins.foo
      2) Packages with an entrypoint: plugins/bar/entrypoint.py
         -> import plugins.bar.entrypoint
            and register COMMAND/COMMANDS if present.

    Returns the number of modules imported.
    """
    target = registry if registry is not None else REGISTRY
    package = importlib.import_module(commands_package)
    package_paths = [str(p) for p in getattr(package, "__path__", [])]

    if not package_paths:
        raise RuntimeError(
            f"'{commands_package}' must be a package (folder) with modules.")

    loaded_count = 0
    discovered_subpackages: set[str] = set()

    for base_path in package_paths:
        for modinfo in pkgutil.iter_modules([base_path]):
            module_name = modinfo.name
            if module_name.startswith("_"):
                # Ignore private modules
                continue

            if modinfo.ispkg:
                discovered_subpackages.add(module_name)
                entrypoint_path = Path(base_path) / module_name / "entrypoint.py"
                if entrypoint_path.exists():
                    module = importlib.import_module(
                        f"{commands_package}.{module_name}.entrypoint")
                    _register_from_entry_module(module, target)
                else:
                    importlib.import_module(f"{commands_package}.{module_name}")
            else:
                importlib.import_module(f"{commands_package}.{module_name}")
            loaded_count += 1

    if target is not REGISTRY:
        _copy_decorated_commands(commands_package, target)
    _assign_categories_from_modules(commands_package, target)
    _collect_category_descriptions(commands_package, discovered_subpackages, target)

    logger.debug("Imported %d module(s) from '%s'", loaded_count, commands_package)
    return loaded_count


def _copy_decorated_commands(commands_package: str, registry: CommandRegistry) -> None:
    """`@command` registers into the global REGISTRY; mirror this package's share."""
    prefix = f"{commands_package}."
    for command_obj in REGISTRY.all():
        if command_obj.module.startswith(prefix):
            registry.add(command_obj)


def _assign_categories_from_modules(commands_package: str, registry: CommandRegistry) -> None:
    """
    Derive category from first subpackage segment (e.g. 'demo.entrypoint')
    if not explicitly set (default 'general').
    """
    prefix = f"{commands_package}."
    for command_obj in registry.all():
        if command_obj.category != "general" or not command_obj.module.startswith(prefix):
            continue
        segments = command_obj.module[len(prefix):].split(".")
        if len(segments) >= 2:
            command_obj.category = segments[0]


def _collect_category_descriptions(
    commands_package: str, subpackages: set[str], registry: CommandRegistry
) -> None:
    """
    Category description is taken from:
      1) plugins.<category>.CATEGORY_DESCRIPTION (string), or
      2) plugins.<category> module docstring (__doc__), else "".
    """
    for category in subpackages:
        module = importlib.import_module(f"{commands_package}.{category}")

        description_text = ""
        value = getattr(module, "CATEGORY_DESCRIPTION", None)
        if isinstance(value, str):
            description_text = value.strip()
        elif isinstance(module.__doc__, str):
            description_text = module.__doc__.strip()

        registry.set_category_description(category, description_text)
