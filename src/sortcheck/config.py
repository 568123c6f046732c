"""Tool configuration for sortcheck runs.

The checkers themselves take no options. This configuration only shapes
how the runner walks the file tree and how results are reported.

Loads settings from ``.sortcheck.yaml`` in the project directory:

    exclude:
      - "tests/fixtures/*"
    output_format: json
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from sortcheck.core.exceptions import ConfigError

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".sortcheck.yaml"

DEFAULT_EXCLUDES: tuple[str, ...] = (
    ".git",
    ".venv",
    "venv",
    "__pycache__",
    "build",
    "dist",
)


class SortCheckConfig(BaseModel):
    """Runner and reporting configuration.

    Attributes:
        exclude: fnmatch patterns; a file is skipped when its path relative
            to the scanned root, or any single directory name on that path,
            matches one of them.
        output_format: Report format printed by the CLI.
        encoding: Encoding used to read source files.

    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    exclude: list[str] = Field(
        default_factory=lambda: list(DEFAULT_EXCLUDES),
        description="Glob patterns of paths to skip",
    )
    output_format: Literal["text", "json"] = Field(
        default="text",
        description="Report format: text or json",
    )
    encoding: str = Field(
        default="utf-8",
        description="Encoding used to read source files",
    )

    @field_validator("exclude", mode="after")
    @classmethod
    def validate_exclude(cls, v: list[str]) -> list[str]:
        """Reject empty patterns, which would match nothing useful."""
        empty = [p for p in v if not p.strip()]
        if empty:
            raise ValueError("exclude patterns must not be empty")
        return v


def load_config(
    config_path: Path | None = None,
    project_path: Path | None = None,
) -> SortCheckConfig:
    """Load configuration from YAML.

    Args:
        config_path: Explicit config file. Must exist when given.
        project_path: Directory searched for ``.sortcheck.yaml`` when no
            explicit path is given. Defaults to the current directory.

    Returns:
        SortCheckConfig with loaded or default values.

    Raises:
        ConfigError: If the file cannot be read, is not valid YAML, or
            fails validation.

    """
    if config_path is None:
        path = (project_path or Path.cwd()) / CONFIG_FILENAME
        if not path.exists():
            logger.debug("Config not found at %s, using defaults", path)
            return SortCheckConfig()
    else:
        path = config_path
        if not path.exists():
            raise ConfigError(f"Config file not found: {path}")

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except (yaml.YAMLError, OSError) as e:
        raise ConfigError(f"Failed to load config from {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config root must be a mapping: {path}")

    try:
        config = SortCheckConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config in {path}: {e}") from e

    logger.debug("Loaded config from %s", path)
    return config
