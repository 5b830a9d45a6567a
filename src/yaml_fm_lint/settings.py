"""Shared settings and lint configuration loading."""

from __future__ import annotations

import importlib.util
import json
from pathlib import Path
from typing import Any

from pydantic import ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from yaml_fm_lint.models.config import LintConfig

CONFIG_FILE_NAMES = (
    ".yaml-fm-lint.py",
    ".yaml-fm-lint.json",
    ".yaml-fm-lint.yaml",
    ".yaml-fm-lint.yml",
)


class Settings(BaseSettings):
    """Process-level settings for yaml-fm-lint.

    Values are read from ``YAML_FM_LINT_*`` environment variables and from a
    ``.env`` file in the working directory.
    """

    model_config = SettingsConfigDict(
        env_prefix="YAML_FM_LINT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = "INFO"
    max_concurrency: int = 64  # simultaneous file reads/writes
    max_document_size: int = 1_000_000  # characters per front-matter body


class ConfigError(Exception):
    """Raised when a configuration file cannot be read or is invalid."""


def load_config(
    config_path: str | Path | None = None,
    cwd: str | Path | None = None,
    mandatory: bool | None = None,
) -> LintConfig:
    """Resolve the lint configuration for a run.

    Layers, each shallow-merged over the previous one: built-in defaults, the
    first ``.yaml-fm-lint.*`` file found in *cwd*, the explicit *config_path*,
    and finally the *mandatory* override from the command line.
    """
    base = Path(cwd) if cwd is not None else Path.cwd()
    merged: dict[str, Any] = {}

    for name in CONFIG_FILE_NAMES:
        candidate = base / name
        if candidate.is_file():
            merged.update(read_config_file(candidate))
            break

    if config_path is not None:
        explicit = Path(config_path)
        if not explicit.is_absolute():
            explicit = base / explicit
        merged.update(read_config_file(explicit))

    if mandatory is not None:
        merged["mandatory"] = mandatory

    try:
        return LintConfig.model_validate(merged)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc


def read_config_file(path: Path) -> dict[str, Any]:
    """Read one configuration file (``.py``, ``.json``, ``.yaml`` or ``.yml``)."""
    if not path.is_file():
        raise ConfigError(f"Configuration file not found: {path}")

    suffix = path.suffix.lower()
    try:
        if suffix == ".py":
            data = _read_python_config(path)
        elif suffix == ".json":
            with path.open("r", encoding="utf-8") as handle:
                data = json.load(handle)
        elif suffix in (".yaml", ".yml"):
            with path.open("r", encoding="utf-8") as handle:
                data = YAML(typ="safe", pure=True).load(handle)
        else:
            raise ConfigError(f"Unsupported configuration file type: {path}")
    except (OSError, json.JSONDecodeError, YAMLError) as exc:
        raise ConfigError(f"Cannot read configuration file {path}: {exc}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Configuration file {path} must contain a mapping")
    return data


def _read_python_config(path: Path) -> Any:
    """Import a Python config module and return its ``config`` mapping.

    Python configs can carry rule plugins in ``extraLintFns``.
    """
    spec = importlib.util.spec_from_file_location("_yaml_fm_lint_config", path)
    if spec is None or spec.loader is None:
        raise ConfigError(f"Cannot import configuration module {path}")
    module = importlib.util.module_from_spec(spec)
    try:
        spec.loader.exec_module(module)
    except Exception as exc:
        raise ConfigError(f"Error while executing configuration module {path}: {exc}") from exc
    if not hasattr(module, "config"):
        raise ConfigError(f"Configuration module {path} does not define 'config'")
    return module.config
