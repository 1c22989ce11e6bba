"""Configuration loading for gowalker (.gowalker.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

import yaml

CONFIG_FILENAME = ".gowalker.yml"

DEFAULT_ENVIRONMENTS: Tuple[Tuple[str, str], ...] = (
    ("linux", "amd64"),
    ("darwin", "amd64"),
    ("windows", "amd64"),
)

DEFAULT_RELEASE_TAGS: Tuple[str, ...] = tuple(f"go1.{minor}" for minor in range(1, 23))


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class WalkerConfig:
    """Settings shared by every build a walker performs."""

    environments: List[Tuple[str, str]] = field(
        default_factory=lambda: list(DEFAULT_ENVIRONMENTS)
    )
    line_format: str = "#L%d"
    builtin_import_path: str = "builtin"
    release_tags: List[str] = field(default_factory=lambda: list(DEFAULT_RELEASE_TAGS))
    build_tags: List[str] = field(default_factory=list)
    root: Optional[Path] = None


def load_config(config_path: Path) -> WalkerConfig:
    """Load configuration from disk, falling back to defaults when absent."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return WalkerConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    config = WalkerConfig(root=root)

    if "environments" in data:
        config.environments = _as_environments(data.get("environments"))

    line_format = _as_str(data.get("line_format"))
    if line_format is not None:
        if "%d" not in line_format:
            raise ConfigError("line_format must contain a %d placeholder")
        config.line_format = line_format

    builtin = _as_str(data.get("builtin_import_path"))
    if builtin:
        config.builtin_import_path = builtin

    if "release_tags" in data:
        config.release_tags = _as_str_list(data.get("release_tags"))
    config.build_tags = _as_str_list(data.get("build_tags"))

    return config


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_environments(value: Any) -> List[Tuple[str, str]]:
    if not isinstance(value, list) or not value:
        raise ConfigError("environments must be a non-empty list")
    environments: List[Tuple[str, str]] = []
    for item in value:
        if isinstance(item, str) and item.count("/") == 1:
            goos, goarch = item.split("/")
        elif isinstance(item, Sequence) and not isinstance(item, str) and len(item) == 2:
            goos, goarch = str(item[0]), str(item[1])
        else:
            raise ConfigError(f"Invalid environment entry: {item!r}")
        if not goos or not goarch:
            raise ConfigError(f"Invalid environment entry: {item!r}")
        environments.append((goos, goarch))
    return environments


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []


__all__ = ["CONFIG_FILENAME", "ConfigError", "WalkerConfig", "load_config"]
