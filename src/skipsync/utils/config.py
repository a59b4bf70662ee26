"""Config utility for persistent skipsync settings.

Reads and writes ~/.config/skipsync/config.toml (or $XDG_CONFIG_HOME/skipsync)
using tomli/tomli-w, and resolves individual settings with the precedence
CLI value > environment variable > config file > default.
"""

import contextlib
import os
from pathlib import Path
from typing import Any, TypeVar, cast

import tomli
import tomli_w

_xdg_config_home = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))
CONFIG_DIR = _xdg_config_home / "skipsync"
CONFIG_FILE = CONFIG_DIR / "config.toml"

DEFAULT_STORAGE_FILE = CONFIG_DIR / "storage.json"

_TRUTHY = {"1", "true", "yes", "on"}

T = TypeVar("T")


def _read_config_file() -> dict[str, Any]:
    """Read the TOML config file if it exists, returning a (nested) dict."""

    if not CONFIG_FILE.exists():
        return {}
    with CONFIG_FILE.open("rb") as f:
        return tomli.load(f)


def _lookup_nested(data: dict[str, Any], dotted_key: str) -> Any | None:
    """Retrieve a nested value from *data* given a dotted key path.

    Example: dotted_key="storage.path" will attempt
    ``data["storage"]["path"]`` returning None if any level is missing.
    """

    current: Any = data
    for part in dotted_key.split("."):
        if not isinstance(current, dict):
            return None
        current = current.get(part)
        if current is None:
            return None
    return current


def _make_env_var_name(dotted_key: str, prefix: str = "SKIPSYNC_") -> str:
    """Convert a dotted key path to an uppercase ENV var name.

    Example: "storage.path" -> "SKIPSYNC_STORAGE_PATH".
    """

    return prefix + dotted_key.replace(".", "_").upper()


def _coerce(raw: Any, default: T) -> T:
    """Best-effort coercion of *raw* to the type of *default*."""
    if isinstance(default, bool):
        if isinstance(raw, bool):
            return cast(T, raw)
        if isinstance(raw, str):
            return cast(T, raw.lower() in _TRUTHY)
        return default
    if isinstance(default, int):
        if isinstance(raw, int) and not isinstance(raw, bool):
            return cast(T, raw)
        with contextlib.suppress(ValueError, TypeError):
            return cast(T, int(raw))
        return default
    if isinstance(default, float):
        with contextlib.suppress(ValueError, TypeError):
            return cast(T, float(raw))
        return default
    return cast(T, raw)


def resolve_setting(
    key: str,
    *,
    default: T,
    cli_value: T | None = None,
) -> T:
    """Resolve a configuration *key* using precedence CLI > env > config > default.

    Args:
        key: Dotted key path, e.g. ``"storage.path"``.
        default: Value to fall back to when no overrides found.
        cli_value: Value passed from CLI option (``None`` when not provided).

    Returns:
        The resolved value, coerced to the type of *default* where possible.
    """

    if cli_value is not None:
        return cli_value

    env_var = _make_env_var_name(key)
    if env_var in os.environ:
        return _coerce(os.environ[env_var], default)

    file_val = _lookup_nested(_read_config_file(), key)
    if file_val is not None:
        return _coerce(file_val, default)

    return default


def set_setting(key: str, value: Any) -> None:
    """Persist *value* under the dotted *key* in config.toml.

    Args:
        key: Dotted key path, e.g. ``"storage.path"``.
        value: TOML-serialisable value to store.
    """
    CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    data = _read_config_file()
    *parents, leaf = key.split(".")
    node = data
    for part in parents:
        child = node.get(part)
        if not isinstance(child, dict):
            child = {}
            node[part] = child
        node = child
    node[leaf] = value
    with CONFIG_FILE.open("wb") as f:
        tomli_w.dump(data, f)


def storage_path(cli_value: str | None = None) -> Path:
    """Return the key-value storage file, honouring CLI/env/config overrides."""
    return Path(
        resolve_setting(
            "storage.path", default=str(DEFAULT_STORAGE_FILE), cli_value=cli_value
        )
    ).expanduser()
