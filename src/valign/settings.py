"""Hierarchical settings with JSON files.

Three-level precedence: overrides > project settings > global settings.
Global settings live in ``$VALIGN_CONFIG_DIR/settings.json`` (default
``~/.valign``), project settings in ``<cwd>/.valign/settings.json``.
"""

from __future__ import annotations

import json
import logging
import os
from copy import deepcopy
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal

from valign.dialects import DIALECTS, DialectSetting

logger = logging.getLogger(__name__)

CONFIG_DIR_NAME = ".valign"

DEFAULT_NOT_ALIGN_AFTER: tuple[str, ...] = (
    "insertChar",
    "deleteCharBackward",
    "deleteCharForward",
    "deleteWordBackward",
    "deleteWordForward",
)

SeparatorStyle = Literal["single", "segmented"]

_DIALECT_VALUES = (*DIALECTS, "auto")
_SEPARATOR_STYLE_VALUES = ("single", "segmented")


# --- Settings schema ---


@dataclass
class Settings:
    """Resolved options the engine and the invocation policy read."""

    dialect: DialectSetting = "auto"
    separator_style: SeparatorStyle = "segmented"
    fancy_bar: bool = False
    # Tables longer than this many characters are left unaligned.
    max_table_size: int = 4000
    # Re-raise parse errors instead of skipping the table (for debugging).
    signal_parse_error: bool = False
    not_align_after: list[str] = field(default_factory=lambda: list(DEFAULT_NOT_ALIGN_AFTER))


def _settings_defaults() -> dict[str, Any]:
    return {
        "dialect": None,
        "separatorStyle": None,
        "fancyBar": None,
        "maxTableSize": None,
        "signalParseError": None,
        "notAlignAfter": None,
    }


# --- Deep merge ---


def deep_merge_settings(base: dict[str, Any], overrides: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge overrides into base settings.

    Nested dicts merge key by key; everything else is replaced. ``None``
    values never override.
    """
    result = dict(base)
    for key, value in overrides.items():
        if value is None:
            continue
        if isinstance(result.get(key), dict) and isinstance(value, dict):
            result[key] = deep_merge_settings(result[key], value)
        else:
            result[key] = value
    return result


def _choice(raw: dict[str, Any], key: str, allowed: tuple[str, ...], default: str) -> Any:
    value = raw.get(key)
    if value is None:
        return default
    if value not in allowed:
        logger.warning("Ignoring invalid %s %r, expected one of %s", key, value, ", ".join(allowed))
        return default
    return value


def _flag(raw: dict[str, Any], key: str, default: bool) -> bool:
    value = raw.get(key)
    if value is None:
        return default
    if not isinstance(value, bool):
        logger.warning("Ignoring invalid %s %r, expected true or false", key, value)
        return default
    return value


def settings_from_dict(raw: dict[str, Any]) -> Settings:
    """Build a ``Settings`` from camelCase JSON keys, falling back to defaults."""
    defaults = Settings()
    max_size = raw.get("maxTableSize")
    if max_size is not None and (not isinstance(max_size, int) or isinstance(max_size, bool) or max_size < 0):
        logger.warning("Ignoring invalid maxTableSize %r", max_size)
        max_size = None
    not_align_after = raw.get("notAlignAfter")
    if not_align_after is not None and not (
        isinstance(not_align_after, list) and all(isinstance(c, str) for c in not_align_after)
    ):
        logger.warning("Ignoring invalid notAlignAfter %r", not_align_after)
        not_align_after = None

    return Settings(
        dialect=_choice(raw, "dialect", _DIALECT_VALUES, defaults.dialect),
        separator_style=_choice(raw, "separatorStyle", _SEPARATOR_STYLE_VALUES, defaults.separator_style),
        fancy_bar=_flag(raw, "fancyBar", defaults.fancy_bar),
        max_table_size=max_size if max_size is not None else defaults.max_table_size,
        signal_parse_error=_flag(raw, "signalParseError", defaults.signal_parse_error),
        not_align_after=list(not_align_after) if not_align_after is not None else defaults.not_align_after,
    )


# --- SettingsManager ---


class SettingsManager:
    """Loads and merges settings from the global and project files.

    Use the factory methods (``create``, ``in_memory``) rather than the
    constructor.
    """

    def __init__(
        self,
        *,
        settings_path: str | None,
        project_settings_path: str | None,
        initial_settings: dict[str, Any],
        load_error: Exception | None = None,
    ) -> None:
        self._settings_path = settings_path
        self._project_settings_path = project_settings_path
        self._global_settings = dict(initial_settings)
        self._load_error = load_error
        self._overrides: dict[str, Any] = {}

        project = self._load_project_settings()
        self._settings = deep_merge_settings(self._global_settings, project)

    # --- Factory methods ---

    @classmethod
    def create(cls, cwd: str, config_dir: str | None = None) -> SettingsManager:
        """Create a manager reading the global and project settings files."""
        cdir = config_dir or _default_config_dir()
        settings_path = os.path.join(cdir, "settings.json")
        project_settings_path = os.path.join(cwd, CONFIG_DIR_NAME, "settings.json")

        settings, error = _load_from_file(settings_path)
        return cls(
            settings_path=settings_path,
            project_settings_path=project_settings_path,
            initial_settings=settings,
            load_error=error,
        )

    @classmethod
    def in_memory(cls, settings: dict[str, Any] | None = None) -> SettingsManager:
        """Create a manager with no backing files, for tests."""
        return cls(
            settings_path=None,
            project_settings_path=None,
            initial_settings=settings or {},
        )

    # --- Core operations ---

    def reload(self) -> None:
        """Re-read both files and re-apply any overrides."""
        if self._settings_path:
            self._global_settings, self._load_error = _load_from_file(self._settings_path)
        project = self._load_project_settings()
        merged = deep_merge_settings(self._global_settings, project)
        self._settings = deep_merge_settings(merged, self._overrides)

    def apply_overrides(self, overrides: dict[str, Any]) -> None:
        """Apply caller-level overrides on top of the merged settings."""
        self._overrides = deep_merge_settings(self._overrides, overrides)
        self._settings = deep_merge_settings(self._settings, overrides)

    def get_global_settings(self) -> dict[str, Any]:
        return deepcopy(self._global_settings)

    @property
    def load_error(self) -> Exception | None:
        return self._load_error

    @property
    def settings(self) -> dict[str, Any]:
        """Current merged settings, with unset keys present as ``None``."""
        return deep_merge_settings(_settings_defaults(), self._settings)

    def resolve(self) -> Settings:
        """Return the merged settings as a ``Settings`` value."""
        return settings_from_dict(self._settings)

    def _load_project_settings(self) -> dict[str, Any]:
        if not self._project_settings_path:
            return {}
        settings, _ = _load_from_file(self._project_settings_path)
        return settings


def _load_from_file(path: str) -> tuple[dict[str, Any], Exception | None]:
    """Load settings from a JSON file. Returns (settings, error)."""
    if not os.path.exists(path):
        return {}, None
    try:
        settings = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        logger.warning("Could not read settings from %s: %s", path, e)
        return {}, e
    if not isinstance(settings, dict):
        error = ValueError(f"{path}: expected a JSON object")
        logger.warning("Could not read settings from %s: %s", path, error)
        return {}, error
    return settings, None


def _default_config_dir() -> str:
    """Global config directory: ``$VALIGN_CONFIG_DIR`` or ``~/.valign``."""
    return os.environ.get("VALIGN_CONFIG_DIR") or os.path.join(os.path.expanduser("~"), CONFIG_DIR_NAME)
