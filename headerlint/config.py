"""Configuration loading for headerlint (.headerlint.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .constants import CONFIG_FILENAME, DEFAULT_MAX_FIXER_PASSES, DEFAULT_SKIP_FILES


class ConfigError(RuntimeError):
    """Raised when .headerlint.yml cannot be parsed or holds invalid values."""


@dataclass
class FixerConfig:
    """Fix loop settings."""

    max_passes: int = DEFAULT_MAX_FIXER_PASSES


@dataclass
class LicensingConfig:
    """Regeneration of COPYRIGHT.md and LICENSE.md after copyright fixes."""

    regenerate: bool = True
    holder: Optional[str] = None
    templates_dir: Optional[Path] = None


@dataclass
class ReportConfig:
    """Which findings are reported."""

    show_warnings: bool = True


@dataclass
class HeaderLintConfig:
    """Represents the settings defined in .headerlint.yml."""

    root: Path
    repository: Optional[str] = None
    rules: Optional[List[str]] = None
    skip_files: List[str] = field(default_factory=lambda: list(DEFAULT_SKIP_FILES))
    fixer: FixerConfig = field(default_factory=FixerConfig)
    licensing: LicensingConfig = field(default_factory=LicensingConfig)
    report: ReportConfig = field(default_factory=ReportConfig)


def load_config(config_path: Path) -> HeaderLintConfig:
    """Load ``.headerlint.yml`` from a project directory (or next to a file).

    A missing file yields the defaults. Keys with a value of the wrong type
    raise ``ConfigError`` naming the offending key.
    """
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return HeaderLintConfig(root=root)

    data = _read_config(config_file)
    config = HeaderLintConfig(root=root, repository=_as_str(data, "repository"))

    if "rules" in data:
        config.rules = _as_str_list(data, "rules")
    if "skip_files" in data:
        config.skip_files = _as_str_list(data, "skip_files")

    fixer_data = _section(data, "fixer")
    max_passes = _as_int(fixer_data, "fixer.max_passes")
    if max_passes is not None:
        if max_passes < 1:
            raise ConfigError("fixer.max_passes must be at least 1")
        config.fixer.max_passes = max_passes

    licensing_data = _section(data, "licensing")
    regenerate = _as_bool(licensing_data, "licensing.regenerate")
    if regenerate is not None:
        config.licensing.regenerate = regenerate
    config.licensing.holder = _as_str(licensing_data, "licensing.holder")
    templates_dir = _as_str(licensing_data, "licensing.templates_dir")
    if templates_dir:
        config.licensing.templates_dir = root / templates_dir

    report_data = _section(data, "report")
    show_warnings = _as_bool(report_data, "report.show_warnings")
    if show_warnings is not None:
        config.report.show_warnings = show_warnings

    return config


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")
    return loaded


# Helpers receive the enclosing mapping and the dotted key reported in errors;
# only the last segment is looked up.


def _lookup(data: Dict[str, Any], key: str) -> Any:
    return data.get(key.rsplit(".", 1)[-1])


def _section(data: Dict[str, Any], key: str) -> Dict[str, Any]:
    value = _lookup(data, key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigError(f"{key} must be a mapping")
    return value


def _as_str(data: Dict[str, Any], key: str) -> Optional[str]:
    value = _lookup(data, key)
    if value is None:
        return None
    if isinstance(value, (dict, list)):
        raise ConfigError(f"{key} must be a string")
    return str(value)


def _as_int(data: Dict[str, Any], key: str) -> Optional[int]:
    value = _lookup(data, key)
    if value is None:
        return None
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lstrip("-").isdigit():
        return int(value)
    raise ConfigError(f"{key} must be an integer, got {value!r}")


_TRUE_WORDS = frozenset({"true", "yes", "on", "1"})
_FALSE_WORDS = frozenset({"false", "no", "off", "0"})


def _as_bool(data: Dict[str, Any], key: str) -> Optional[bool]:
    value = _lookup(data, key)
    if value is None or isinstance(value, bool):
        return value
    word = str(value).strip().lower()
    if word in _TRUE_WORDS:
        return True
    if word in _FALSE_WORDS:
        return False
    raise ConfigError(f"{key} must be true or false, got {value!r}")


def _as_str_list(data: Dict[str, Any], key: str) -> List[str]:
    value = _lookup(data, key)
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, list) and all(isinstance(item, (str, int)) for item in value):
        return [str(item) for item in value]
    raise ConfigError(f"{key} must be a string or a list of strings")


__all__ = [
    "ConfigError",
    "FixerConfig",
    "HeaderLintConfig",
    "LicensingConfig",
    "ReportConfig",
    "load_config",
]
