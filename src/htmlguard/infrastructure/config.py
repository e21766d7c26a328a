# htmlguard:domain=infrastructure
"""Configuration: optional YAML overrides for traversal, gate and report settings."""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields, replace
from typing import TYPE_CHECKING, Any

import yaml

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_REQUIRED_FILES: tuple[str, ...] = (
    "index.html",
    "admin.html",
    "category-posts.html",
    "profile.html",
    "messages.html",
)


class ConfigError(Exception):
    """Raised when a configuration file is present but invalid."""


@dataclass(frozen=True)
class GuardConfig:
    """Settings shared by ``analyze`` and ``predeploy``.

    Every field has a default; a config file only needs the keys it overrides.
    """

    extension: str = ".html"
    skip_dirs: tuple[str, ...] = ("node_modules",)
    required_files: tuple[str, ...] = DEFAULT_REQUIRED_FILES
    entry_document: str = "index.html"
    report_path: str = "code-analysis-report.json"
    deployment_report_path: str = "deployment-report.json"
    error_handling_window: int = 5


_TUPLE_FIELDS = frozenset({"skip_dirs", "required_files"})
_STR_FIELDS = frozenset({"extension", "entry_document", "report_path", "deployment_report_path"})
_INT_FIELDS = frozenset({"error_handling_window"})


def find_config(project_root: Path) -> Path | None:
    """Return the first existing config file under *project_root*, if any.

    Checks ``.htmlguard/config.yml`` then ``htmlguard.yml``.
    """
    for candidate in (
        project_root / ".htmlguard" / "config.yml",
        project_root / "htmlguard.yml",
    ):
        if candidate.is_file():
            return candidate
    return None


def _coerce(key: str, value: Any, source: Path) -> object:
    if key in _TUPLE_FIELDS:
        if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
            msg = f"{source}: '{key}' must be a list of strings"
            raise ConfigError(msg)
        return tuple(value)
    if key in _STR_FIELDS:
        if not isinstance(value, str) or not value:
            msg = f"{source}: '{key}' must be a non-empty string"
            raise ConfigError(msg)
        return value
    # bool is an int subclass; reject it explicitly.
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        msg = f"{source}: '{key}' must be a positive integer"
        raise ConfigError(msg)
    return value


def load_config(project_root: Path, config_path: Path | None = None) -> GuardConfig:
    """Load settings from *config_path* or the default locations.

    Falls back to :class:`GuardConfig` defaults when no file exists or the
    file is empty.  Unknown keys are ignored with a warning.

    Raises
    ------
    ConfigError
        When the file cannot be parsed or a value has the wrong type.
    """
    path = config_path if config_path is not None else find_config(project_root)
    if path is None:
        return GuardConfig()

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as exc:
        msg = f"Cannot read config {path}: {exc}"
        raise ConfigError(msg) from exc

    if data is None:
        return GuardConfig()
    if not isinstance(data, dict):
        msg = f"{path}: top level must be a mapping"
        raise ConfigError(msg)

    known = {f.name for f in fields(GuardConfig)}
    overrides: dict[str, object] = {}
    for key, value in data.items():
        if key not in known:
            logger.warning("Ignoring unknown config key '%s' in %s", key, path)
            continue
        overrides[key] = _coerce(key, value, path)

    logger.debug("Loaded config from %s (%d overrides)", path, len(overrides))
    return replace(GuardConfig(), **overrides)
