"""Scripta configuration settings."""

from __future__ import annotations

import json
import os
import tomllib
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from scripta.exceptions import ConfigurationError, check_config_keys


class ScriptaSettings(BaseSettings):
    """Scripta configuration settings.

    Settings are loaded with the following precedence (highest to lowest):
    1. CLI arguments (when provided via command flags)
       Example: scripta list --storage-path /custom/scripts

    2. Config file values (YAML, TOML, or JSON)
       Example: scripta --config myconfig.yaml
       Multiple files: Later files override earlier ones

    3. Environment variables (prefixed with SCRIPTA_)
       Example: export SCRIPTA_STORAGE_PATH=/data/scripts

    4. .env file (in current directory or specified path)

    5. Default values (defined in field declarations below)
    """

    model_config = SettingsConfigDict(
        env_prefix="SCRIPTA_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Storage settings
    storage_path: Path = Field(
        default_factory=lambda: Path.home() / ".scripta" / "scripts",
        description="Directory holding one JSON record per saved script",
    )
    key_prefix: str = Field(
        default="scripta-script-",
        description="Storage key prefix for persisted scripts",
        min_length=1,
    )
    autosave_delay: float = Field(
        default=2.0,
        description="Quiet period in seconds before a pending autosave is written",
        ge=0.0,
    )

    # Formatting settings
    lines_per_page: int = Field(
        default=55,
        description="Printed lines per screenplay page",
        ge=1,
    )
    chars_per_line: int = Field(
        default=60,
        description="Characters per printed line used for page estimates",
        ge=1,
    )
    include_title_page: bool = Field(
        default=True,
        description="Render a title page in print exports",
    )

    # Debug settings
    debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )

    # Logging settings
    log_level: str = Field(
        default="WARNING",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
        pattern="^(?i)(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
    )
    log_format: str = Field(
        default="console",
        description="Log output format (console, json, structured)",
        pattern="^(?i)(console|json|structured)$",
    )
    log_file: Path | None = Field(
        default=None,
        description="Optional log file path",
    )

    @field_validator("storage_path", "log_file", mode="before")
    @classmethod
    def expand_path(cls, v: Any) -> Path | None:
        """Expand environment variables and resolve path.

        Accepts None (for optional fields), str (supports env vars and ~) and
        Path. Collections are rejected.
        """
        if v is None:
            return None
        if isinstance(v, str):
            expanded = os.path.expandvars(v)
            return Path(expanded).expanduser().resolve()
        if isinstance(v, Path):
            return v.expanduser().resolve()
        if isinstance(v, (dict, list, set, tuple)):  # noqa: UP038
            raise ValueError(
                f"Path fields cannot accept {type(v).__name__} types. "
                f"Expected str or Path, got: {v!r}"
            )
        return Path(str(v)).resolve()

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: Any) -> str:
        """Normalize log level to uppercase for case-insensitive handling."""
        if isinstance(v, str):
            return v.upper()
        raise ValueError(f"log_level must be a string, got {type(v).__name__}")

    @field_validator("log_format", mode="before")
    @classmethod
    def normalize_log_format(cls, v: Any) -> str:
        """Normalize log format to lowercase for case-insensitive handling."""
        if isinstance(v, str):
            return v.lower()
        raise ValueError(f"log_format must be a string, got {type(v).__name__}")

    @classmethod
    def from_env(cls) -> ScriptaSettings:
        """Create settings from environment variables."""
        return cls()

    @classmethod
    def from_file(cls, config_path: Path | str) -> ScriptaSettings:
        """Load settings from a configuration file.

        Args:
            config_path: Path to configuration file (YAML, TOML, or JSON).

        Returns:
            Settings loaded from the file.

        Raises:
            ConfigurationError: If file format is not supported.
            FileNotFoundError: If config file doesn't exist.
        """
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        suffix = config_path.suffix.lower()

        if suffix in {".yml", ".yaml"}:
            with config_path.open(encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        elif suffix == ".toml":
            with config_path.open("rb") as f:
                data = tomllib.load(f)
        elif suffix == ".json":
            with config_path.open(encoding="utf-8") as f:
                data = json.load(f)
        else:
            raise ConfigurationError(
                message=f"Unsupported configuration file format: {suffix}",
                hint="Use one of the supported formats: .yml, .yaml, .toml, or .json",
                details={
                    "file": str(config_path),
                    "detected_format": suffix,
                    "supported_formats": [".yml", ".yaml", ".toml", ".json"],
                },
            )

        check_config_keys(data)

        return cls(**data)

    @classmethod
    def from_multiple_sources(
        cls,
        config_files: list[Path | str] | None = None,
        cli_args: dict[str, Any] | None = None,
    ) -> ScriptaSettings:
        """Load settings with proper precedence from multiple sources.

        Args:
            config_files: List of config files to load (later files override earlier).
            cli_args: Dictionary of CLI arguments; None values are ignored.

        Returns:
            Merged settings from all sources.
        """
        data: dict[str, Any] = {}

        if config_files:
            for config_file in config_files:
                try:
                    file_settings = cls.from_file(config_file)
                except FileNotFoundError:
                    from scripta.config.logging import get_logger as _get_logger

                    _get_logger("scripta.config.settings").warning(
                        "Configuration file not found, using defaults",
                        config_file=str(config_file),
                    )
                    continue
                data.update(file_settings.model_dump(exclude_unset=True))

        settings = cls(**data)

        if cli_args:
            cli_data = {k: v for k, v in cli_args.items() if v is not None}
            if cli_data:
                updated_data = settings.model_dump()
                updated_data.update(cli_data)
                settings = cls(**updated_data)

        return settings


# Global settings instance
_settings: ScriptaSettings | None = None


def _get_config_paths() -> list[Path]:
    """Get the existing config files, in priority order (later overrides earlier)."""
    potential_paths = [
        Path.home() / ".scripta" / "config.yaml",
        Path.home() / ".scripta" / "config.toml",
        Path.home() / ".scripta" / "config.json",
        Path.home() / ".config" / "scripta" / "config.yaml",
        Path.home() / ".config" / "scripta" / "config.toml",
        Path.cwd() / "scripta.yaml",
        Path.cwd() / "scripta.toml",
        Path.cwd() / "scripta.json",
    ]

    existing_paths: list[Path] = []
    for path in potential_paths:
        try:
            if path.is_file():
                existing_paths.append(path)
        except OSError:
            continue
    return existing_paths


def get_settings() -> ScriptaSettings:
    """Get the global settings instance.

    Returns:
        Global ScriptaSettings instance.
    """
    global _settings
    if _settings is None:
        config_paths = _get_config_paths()
        if config_paths:
            _settings = ScriptaSettings.from_multiple_sources(
                config_files=list(config_paths)
            )
        else:
            _settings = ScriptaSettings.from_env()
    return _settings


def set_settings(settings: ScriptaSettings) -> None:
    """Set the global settings instance.

    Args:
        settings: Settings instance to use globally.
    """
    global _settings
    _settings = settings


def reset_settings() -> None:
    """Reset the global settings instance.

    Forces recreation of settings on next call to get_settings(),
    useful for tests that modify environment variables.
    """
    global _settings
    _settings = None


def get_settings_for_cli(
    config_file: Path | None = None,
    cli_overrides: dict[str, Any] | None = None,
) -> ScriptaSettings:
    """Get settings for CLI commands with consistent precedence.

    Args:
        config_file: Optional specific config file to load. If not provided,
                    uses standard config locations.
        cli_overrides: Dictionary of CLI argument overrides (e.g. storage_path).
                      Only non-None values are applied.

    Returns:
        ScriptaSettings instance with all sources merged.

    Raises:
        FileNotFoundError: If config_file is specified but doesn't exist.
    """
    if config_file:
        if not config_file.exists():
            raise FileNotFoundError(f"Config file not found: {config_file}")
        return ScriptaSettings.from_multiple_sources(
            config_files=[config_file],
            cli_args=cli_overrides,
        )

    settings = get_settings()
    if cli_overrides:
        filtered = {k: v for k, v in cli_overrides.items() if v is not None}
        if filtered:
            data = settings.model_dump()
            data.update(filtered)
            settings = ScriptaSettings(**data)
    return settings
