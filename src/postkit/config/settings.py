"""Configuration for postkit.

Settings live in ``.postkit.yml`` at the repository root. Every key is
optional; a missing file means defaults. Values can be overridden from the
environment with ``POSTKIT_SECTION__KEY`` (e.g. ``POSTKIT_LINT__WORDS_PER_MINUTE``).
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from postkit.config.exceptions import ConfigExistsError, ConfigValidationError

logger = logging.getLogger(__name__)

CONFIG_FILENAMES = (".postkit.yml", ".postkit.yaml")

DEFAULT_REQUIRED_FIELDS = [
    "layout",
    "title",
    "date",
    "category",
    "read_time",
    "tags",
    "excerpt",
]
DEFAULT_WORDS_PER_MINUTE = 200


class PathsSettings(BaseModel):
    """Content directories, relative to the repository root."""

    model_config = ConfigDict(extra="forbid")

    posts_dir: Path = Field(default=Path("_posts"), description="Published posts")
    drafts_dir: Path = Field(default=Path("_drafts"), description="Undated drafts")


class LintSettings(BaseModel):
    """Front matter lint configuration."""

    model_config = ConfigDict(extra="forbid")

    required_fields: list[str] = Field(
        default_factory=lambda: list(DEFAULT_REQUIRED_FIELDS),
        description="Keys every post must declare",
    )
    layouts: list[str] = Field(
        default_factory=lambda: ["post"],
        description="Layouts the site generator knows about",
    )
    categories: list[str] = Field(
        default_factory=list,
        description="Allowed categories; empty allows any",
    )
    extra_keys: list[str] = Field(
        default_factory=list,
        description="Keys outside the schema that should not be reported",
    )
    words_per_minute: int = Field(default=DEFAULT_WORDS_PER_MINUTE, ge=50, le=1000)
    read_time_tolerance: int = Field(
        default=2,
        ge=0,
        description="Minutes a declared read_time may differ from the estimate",
    )
    max_excerpt_length: int = Field(default=300, ge=1)
    include_code_in_read_time: bool = False
    disabled_rules: list[str] = Field(default_factory=list)

    @field_validator("required_fields", "layouts", "categories", "extra_keys", "disabled_rules")
    @classmethod
    def _strip_entries(cls, value: list[str]) -> list[str]:
        return [item.strip() for item in value if item and item.strip()]


class PostkitConfig(BaseSettings):
    """Root configuration.

    Supports environment variable overrides with the pattern
    POSTKIT_SECTION__KEY (e.g., POSTKIT_PATHS__POSTS_DIR).
    """

    paths: PathsSettings = Field(default_factory=PathsSettings)
    lint: LintSettings = Field(default_factory=LintSettings)

    model_config = SettingsConfigDict(
        extra="forbid",
        validate_assignment=True,
        env_prefix="POSTKIT_",
        env_nested_delimiter="__",
    )

    def resolve(self, root: Path) -> PostkitConfig:
        """Return a copy with relative content paths anchored at ``root``."""
        paths = self.paths.model_copy(
            update={
                "posts_dir": _anchor(root, self.paths.posts_dir),
                "drafts_dir": _anchor(root, self.paths.drafts_dir),
            }
        )
        return self.model_copy(update={"paths": paths})


def _anchor(root: Path, path: Path) -> Path:
    return path if path.is_absolute() else root / path


def find_config(start_dir: Path) -> Path | None:
    """Search upward for ``.postkit.yml`` (or ``.postkit.yaml``).

    Args:
        start_dir: Starting directory for upward search

    Returns:
        Path to the config file if found, else None

    """
    current = start_dir.expanduser().resolve()
    for candidate in (current, *current.parents):
        for name in CONFIG_FILENAMES:
            config_path = candidate / name
            if config_path.is_file():
                return config_path
    return None


def load_config(config_path: Path | None = None) -> PostkitConfig:
    """Load configuration from a YAML file.

    Args:
        config_path: File to load. ``None`` yields the defaults (plus any
            environment overrides).

    Returns:
        Validated PostkitConfig. Content paths are anchored at the directory
        holding the config file.

    Raises:
        ConfigValidationError: If the file is not valid YAML, is not a
            mapping, or fails validation.

    """
    if config_path is None:
        logger.debug("No config file given, using defaults")
        return PostkitConfig()

    logger.debug("Loading config from %s", config_path)
    try:
        data: Any = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigValidationError(config_path, reason=f"invalid YAML: {e}") from e

    if not isinstance(data, dict):
        raise ConfigValidationError(config_path, reason="top level must be a mapping")

    try:
        config = PostkitConfig(**data)
    except ValidationError as e:
        raise ConfigValidationError(config_path, errors=e.errors(include_url=False)) from e

    return config.resolve(config_path.parent)


def save_config(config: PostkitConfig, root: Path, *, overwrite: bool = False) -> Path:
    """Write ``config`` to ``root/.postkit.yml``.

    Raises:
        ConfigExistsError: If the file exists and ``overwrite`` is False.

    """
    config_path = root / CONFIG_FILENAMES[0]
    if config_path.exists() and not overwrite:
        raise ConfigExistsError(config_path)

    root.mkdir(parents=True, exist_ok=True)
    data = config.model_dump(mode="json")
    yaml_str = yaml.dump(
        data,
        default_flow_style=False,
        sort_keys=False,
        allow_unicode=True,
    )
    config_path.write_text(yaml_str, encoding="utf-8")
    logger.debug("Saved config to %s", config_path)
    return config_path


__all__ = [
    "CONFIG_FILENAMES",
    "LintSettings",
    "PathsSettings",
    "PostkitConfig",
    "find_config",
    "load_config",
    "save_config",
]
