"""Unified configuration loaded from .contentconv.toml, env vars, and CLI flags.

Loading order: defaults → TOML file → env vars → CLI flags.
"""

from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path

from pydantic import BaseModel, Field

from contentconv.content.models import ParseMode
from contentconv.session import FailurePolicy

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".contentconv.toml"
CONFIG_SEARCH_PATHS = [
    Path("."),
]
GLOBAL_CONFIG_PATH = Path.home() / ".config" / "contentconv" / "config.toml"

_TRUTHY = ("true", "1", "yes")


class ParsingSectionConfig(BaseModel):
    """[parsing] section."""

    mode: ParseMode = ParseMode.TOLERANT
    failure_policy: FailurePolicy = FailurePolicy.RETAIN


class ExportSectionConfig(BaseModel):
    """[export] section."""

    include_header: bool = False
    output_dir: str = "."
    safe_filenames: bool = True


class ConverterConfig(BaseModel):
    """Top-level configuration."""

    parsing: ParsingSectionConfig = Field(default_factory=ParsingSectionConfig)
    export: ExportSectionConfig = Field(default_factory=ExportSectionConfig)


def load_config(path: Path | str | None = None) -> ConverterConfig:
    """Load config from TOML file(s) and environment variables.

    Search order:
    1. Explicit path (if provided)
    2. .contentconv.toml in CWD
    3. ~/.config/contentconv/config.toml

    Then overlay environment variables.

    Args:
        path: Explicit path to a TOML file.

    Returns:
        Merged ConverterConfig.
    """
    data: dict[str, object] = {}

    if path is not None:
        toml_path = Path(path)
        if toml_path.exists():
            data = _load_toml(toml_path)
        else:
            logger.warning("Config file not found: %s", toml_path)
    else:
        for search_dir in CONFIG_SEARCH_PATHS:
            candidate = search_dir / CONFIG_FILENAME
            if candidate.exists():
                data = _load_toml(candidate)
                logger.info("Loaded config from %s", candidate)
                break
        if not data and GLOBAL_CONFIG_PATH.exists():
            data = _load_toml(GLOBAL_CONFIG_PATH)
            logger.info("Loaded config from %s", GLOBAL_CONFIG_PATH)

    config = ConverterConfig.model_validate(data) if data else ConverterConfig()

    return _apply_env_vars(config)


def merge_cli_overrides(config: ConverterConfig, **cli_kwargs: object) -> ConverterConfig:
    """Overlay explicitly-set CLI flags onto the config.

    Only overrides values where the CLI flag was explicitly provided
    (i.e., not None).

    Args:
        config: Base config.
        **cli_kwargs: CLI flag values (``mode``, ``failure_policy``,
            ``include_header``, ``output_dir``, ``safe_filenames``).

    Returns:
        Updated config with CLI overrides applied.
    """
    data = config.model_dump()

    mapping: dict[str, tuple[str, str]] = {
        "mode": ("parsing", "mode"),
        "failure_policy": ("parsing", "failure_policy"),
        "include_header": ("export", "include_header"),
        "output_dir": ("export", "output_dir"),
        "safe_filenames": ("export", "safe_filenames"),
    }

    for key, value in cli_kwargs.items():
        if value is None:
            continue
        if key in mapping:
            section, field = mapping[key]
            data[section][field] = str(value) if isinstance(value, Path) else value
        else:
            logger.debug("Ignoring unknown CLI override: %s", key)

    return ConverterConfig.model_validate(data)


def _load_toml(path: Path) -> dict[str, object]:
    """Load a TOML file and return the data dict."""
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (tomllib.TOMLDecodeError, OSError) as exc:
        logger.warning("Failed to parse %s: %s", path, exc)
        return {}


def _apply_env_vars(config: ConverterConfig) -> ConverterConfig:
    """Apply environment variable overrides to config."""
    data = config.model_dump()

    env_mapping: dict[str, tuple[str, str]] = {
        "CONTENTCONV_MODE": ("parsing", "mode"),
        "CONTENTCONV_FAILURE_POLICY": ("parsing", "failure_policy"),
        "CONTENTCONV_OUTPUT_DIR": ("export", "output_dir"),
    }

    for env_var, (section, field) in env_mapping.items():
        value = os.environ.get(env_var)
        if value is not None:
            data[section][field] = value.strip().lower() if section == "parsing" else value

    for env_var, field in [
        ("CONTENTCONV_INCLUDE_HEADER", "include_header"),
        ("CONTENTCONV_SAFE_FILENAMES", "safe_filenames"),
    ]:
        raw = os.environ.get(env_var)
        if raw is not None:
            data["export"][field] = raw.lower() in _TRUTHY

    return ConverterConfig.model_validate(data)
