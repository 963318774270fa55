#!/usr/bin/env python3
# shellkit/config.py
from __future__ import annotations

"""
Configuration loader (stdlib-only).

Precedence (low -> high):
  1) Built-in defaults
  2) Files in CWD: .env, config.ini, config.json, config.toml
  3) Environment variables prefixed with SHELLKIT_

Validation:
  - PROMPT / BANNER: str
  - HISTORY_FILE / LOG_FILE: None or normalized path
  - HISTORY_LIMIT: int >= 0
  - CTRL_C_ABORTS / ENABLE_COMPLETION: bool
  - LOG_LEVEL: None or one of {'DEBUG','INFO','WARNING','ERROR','CRITICAL'}
  - PLUGIN_PACKAGE: dotted module name
"""

import configparser
import json
import logging
import os
import re
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

from shellkit.errors import ConfigError

logger = logging.getLogger(__name__)

ENV_PREFIX = "SHELLKIT_"

DEFAULTS: dict[str, Any] = {
    "PROMPT": "shellkit > ",
    "BANNER": "",
    "HISTORY_FILE": str(Path.home() / ".shellkit_history"),
    "HISTORY_LIMIT": 1000,
    "CTRL_C_ABORTS": False,
    "ENABLE_COMPLETION": True,
    "LOG_LEVEL": None,              # 'DEBUG'/'INFO'/'WARNING'/'ERROR'/'CRITICAL'
    "LOG_FILE": None,
    "PLUGIN_PACKAGE": "plugins",
}


# ---------- data model ----------

@dataclass(frozen=True)
class AppConfig:
    prompt: str
    banner: str
    history_file: Path | None
    history_limit: int
    ctrl_c_aborts: bool
    enable_completion: bool
    log_level: str | None
    log_file: Path | None
    plugin_package: str

    # Unrecognized keys preserved for debugging/forward-compat
    extra: dict[str, Any] = field(default_factory=dict)


# ---------- file loaders (stdlib) ----------

def _load_env_file(path: Path) -> dict[str, str]:
    """Very small .env parser: KEY=VALUE, supports quotes; ignores comments/blank lines."""
    out: dict[str, str] = {}
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return out

    line_re = re.compile(r"""^\s*([A-Za-z_][A-Za-z0-9_]*)\s*=\s*(.*?)\s*$""")
    for raw in text.splitlines():
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        m = line_re.match(line)
        if not m:
            continue
        k, v = m.group(1), m.group(2)
        if (v.startswith("'") and v.endswith("'")) or (v.startswith('"') and v.endswith('"')):
            v = v[1:-1]
        out[k] = v
    return out


def _load_ini_file(path: Path) -> dict[str, str]:
    cfg = configparser.ConfigParser(interpolation=None)
    if not cfg.read(path, encoding="utf-8"):
        return {}
    flat: dict[str, str] = {}
    for sec in cfg.sections():
        for k, v in cfg.items(sec):
            flat[k.upper()] = v
    return flat


def _load_json_file(path: Path) -> dict[str, Any]:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except json.JSONDecodeError as exc:
        logger.warning("Ignoring malformed %s: %s", path, exc)
        return {}


def _load_toml_file(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except FileNotFoundError:
        return {}
    except tomllib.TOMLDecodeError as exc:
        logger.warning("Ignoring malformed %s: %s", path, exc)
        return {}


def _flatten_mapping(obj: Any, prefix: str = "") -> dict[str, Any]:
    """
    Flatten nested dicts to UPPER_SNAKE keys.
    Example: {'history': {'limit': 50}} -> {'HISTORY_LIMIT': 50}
    """
    flat: dict[str, Any] = {}
    if isinstance(obj, Mapping):
        for k, v in obj.items():
            key = f"{prefix}_{k}" if prefix else str(k)
            if isinstance(v, Mapping):
                flat.update(_flatten_mapping(v, key))
            else:
                flat[str(key).upper()] = v
    return flat


def _find_config_files(base: Path) -> list[Path]:
    return [
        base / ".env",
        base / "config.ini",
        base / "config.json",
        base / "config.toml",
    ]


# ---------- normalization & coercion ----------

_BOOL_TRUE = {"1", "true", "yes", "y", "on"}
_BOOL_FALSE = {"0", "false", "no", "n", "off"}


def _as_bool(key: str, val: Any) -> bool:
    if isinstance(val, bool):
        return val
    s = str(val).strip().lower()
    if s in _BOOL_TRUE:
        return True
    if s in _BOOL_FALSE:
        return False
    raise ConfigError(key, f"expected boolean, got {val!r}")


def _as_int(key: str, val: Any) -> int:
    if isinstance(val, int) and not isinstance(val, bool):
        return val
    try:
        return int(str(val).strip())
    except ValueError as exc:
        raise ConfigError(key, f"expected integer, got {val!r}") from exc


def _as_opt_str(val: Any) -> str | None:
    return None if val is None or str(val).strip().lower() in {"", "none"} else str(val)


def _as_log_level(key: str, val: Any) -> str | None:
    lv = _as_opt_str(val)
    if lv is None:
        return None
    up = lv.upper()
    allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
    if up not in allowed:
        raise ConfigError(key, f"must be one of {sorted(allowed)}, got {lv!r}")
    return up


def _as_opt_path(val: Any) -> Path | None:
    v = _as_opt_str(val)
    if v is None:
        return None
    # expand both ~ and env vars
    return Path(os.path.expandvars(os.path.expanduser(v))).resolve()


# ---------- merge & load ----------

def _normalize_keys(d: Mapping[str, Any]) -> dict[str, Any]:
    return {str(k).upper(): v for k, v in d.items()}


def _merge_sources(base: Path, environ: Mapping[str, str]) -> dict[str, Any]:
    merged: dict[str, Any] = dict(DEFAULTS)

    for file in _find_config_files(base):
        if file.suffix == ".env" or file.name == ".env":
            merged.update(_normalize_keys(_load_env_file(file)))
        elif file.suffix == ".ini":
            merged.update(_normalize_keys(_load_ini_file(file)))
        elif file.suffix == ".json":
            merged.update(_normalize_keys(_flatten_mapping(_load_json_file(file))))
        elif file.suffix == ".toml":
            merged.update(_normalize_keys(_flatten_mapping(_load_toml_file(file))))

    # Environment variables override all
    merged.update({
        k[len(ENV_PREFIX):]: v for k, v in environ.items()
        if k.startswith(ENV_PREFIX) and len(k) > len(ENV_PREFIX)
    })
    return merged


def _validate_and_build(config: dict[str, Any]) -> AppConfig:
    prompt = config.get("PROMPT", DEFAULTS["PROMPT"])
    prompt = DEFAULTS["PROMPT"] if prompt is None else str(prompt)
    banner = str(config.get("BANNER") or "")
    history_limit = _as_int("HISTORY_LIMIT", config.get("HISTORY_LIMIT", DEFAULTS["HISTORY_LIMIT"]))
    if history_limit < 0:
        raise ConfigError("HISTORY_LIMIT", "must be >= 0")

    plugin_package = _as_opt_str(config.get("PLUGIN_PACKAGE")) or DEFAULTS["PLUGIN_PACKAGE"]
    if not re.fullmatch(r"[A-Za-z_]\w*(\.[A-Za-z_]\w*)*", plugin_package):
        raise ConfigError("PLUGIN_PACKAGE", f"not a module name: {plugin_package!r}")

    recognized = set(DEFAULTS.keys())
    extra = {k: v for k, v in config.items() if k not in recognized}

    return AppConfig(
        prompt=prompt,
        banner=banner,
        history_file=_as_opt_path(config.get("HISTORY_FILE")),
        history_limit=history_limit,
        ctrl_c_aborts=_as_bool("CTRL_C_ABORTS", config.get("CTRL_C_ABORTS", False)),
        enable_completion=_as_bool("ENABLE_COMPLETION", config.get("ENABLE_COMPLETION", True)),
        log_level=_as_log_level("LOG_LEVEL", config.get("LOG_LEVEL")),
        log_file=_as_opt_path(config.get("LOG_FILE")),
        plugin_package=plugin_package,
        extra=extra,
    )


# ---------- public API ----------

def load_config(base: Path | None = None, environ: Mapping[str, str] | None = None) -> AppConfig:
    """
    Load, merge, normalize, and validate configuration.
    No filesystem side-effects. Raises ConfigError on invalid values.
    """
    raw = _merge_sources(base or Path.cwd(), os.environ if environ is None else environ)
    return _validate_and_build(raw)
