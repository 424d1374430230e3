"""
System configuration for tradeperf.

One YAML file configures the whole tool:

    analytics:
      starting_capital: 10000
      output_format: console

    logging:
      level: INFO
      enable_file: false

Resolution order for SystemConfig.load():
    1. Explicit path argument
    2. $TRADEPERF_CONFIG
    3. config/system.yaml in the current working directory
    4. Built-in defaults

Partial files are merged over the defaults, and ${VAR} placeholders are
replaced with environment variables before the sections are built.
"""

import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from tradeperf.system.log_system import LoggingConfig as LoggerConfig

CONFIG_ENV_VAR = "TRADEPERF_CONFIG"
DEFAULT_CONFIG_PATH = Path("config/system.yaml")

_ENV_VAR_PATTERN = re.compile(r"\$\{([^}]+)\}")


@dataclass
class AnalyticsConfig:
    """Defaults applied when analyzing a trade snapshot."""

    starting_capital: str = "10000"  # Kept as text so it converts to Decimal exactly
    output_format: str = "console"  # console | json


@dataclass
class LoggingConfig:
    """Logging section of the system configuration."""

    level: str = "INFO"
    format: str = "console"
    timestamp_format: str = "compact"
    enable_file: bool = False
    file_path: str = "logs/tradeperf.log"
    file_level: str = "WARNING"
    file_rotation: bool = True
    max_file_size_mb: int = 10
    backup_count: int = 3

    def to_logger_config(self) -> LoggerConfig:
        """Convert to the pydantic model consumed by LoggerFactory.configure()."""
        return LoggerConfig(
            level=self.level,  # type: ignore[arg-type]
            format=self.format,  # type: ignore[arg-type]
            timestamp_format=self.timestamp_format,  # type: ignore[arg-type]
            enable_file=self.enable_file,
            file_path=Path(self.file_path),
            file_level=self.file_level,  # type: ignore[arg-type]
            file_rotation=self.file_rotation,
            max_file_size_mb=self.max_file_size_mb,
            backup_count=self.backup_count,
        )


@dataclass
class SystemConfig:
    """Complete system configuration."""

    analytics: AnalyticsConfig = field(default_factory=AnalyticsConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def load(cls, path: Path | str | None = None) -> "SystemConfig":
        """
        Load configuration from YAML, falling back to built-in defaults.

        Args:
            path: Explicit config file. A missing explicit file yields defaults.

        Returns:
            SystemConfig with file values merged over defaults

        Raises:
            ValueError: If the file is not valid YAML or not a mapping
        """
        config_path = _resolve_config_path(path)
        if config_path is None or not config_path.exists():
            return cls()

        try:
            with open(config_path) as f:
                raw = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in config file {config_path}: {e}") from e

        if raw is None:
            return cls()
        if not isinstance(raw, dict):
            raise ValueError(f"Config file {config_path} must contain a mapping, got {type(raw).__name__}")

        merged = _deep_merge(_default_dict(), _substitute_env_vars(raw))
        return cls._from_dict(merged)

    @classmethod
    def _from_dict(cls, data: dict[str, Any]) -> "SystemConfig":
        """Build config from a (possibly partial) dictionary."""
        analytics = data.get("analytics") or {}
        logging_section = data.get("logging") or {}

        return cls(
            analytics=AnalyticsConfig(
                starting_capital=str(analytics.get("starting_capital", AnalyticsConfig.starting_capital)),
                output_format=analytics.get("output_format", AnalyticsConfig.output_format),
            ),
            logging=LoggingConfig(
                level=str(logging_section.get("level", LoggingConfig.level)).upper(),
                format=logging_section.get("format", LoggingConfig.format),
                timestamp_format=logging_section.get("timestamp_format", LoggingConfig.timestamp_format),
                enable_file=logging_section.get("enable_file", LoggingConfig.enable_file),
                file_path=logging_section.get("file_path", LoggingConfig.file_path),
                file_level=str(logging_section.get("file_level", LoggingConfig.file_level)).upper(),
                file_rotation=logging_section.get("file_rotation", LoggingConfig.file_rotation),
                max_file_size_mb=logging_section.get("max_file_size_mb", LoggingConfig.max_file_size_mb),
                backup_count=logging_section.get("backup_count", LoggingConfig.backup_count),
            ),
        )


def _resolve_config_path(path: Path | str | None) -> Path | None:
    if path is not None:
        return Path(path)
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path)
    if DEFAULT_CONFIG_PATH.exists():
        return DEFAULT_CONFIG_PATH
    return None


def _default_dict() -> dict[str, Any]:
    defaults = SystemConfig()
    return {
        "analytics": dict(vars(defaults.analytics)),
        "logging": dict(vars(defaults.logging)),
    }


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge override into a copy of base; override wins on conflicts."""
    result = dict(base)
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _substitute_env_vars(value: Any) -> Any:
    """Replace ${VAR} in strings (recursively); undefined variables are left as-is."""
    if isinstance(value, dict):
        return {k: _substitute_env_vars(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_substitute_env_vars(v) for v in value]
    if isinstance(value, str):
        return _ENV_VAR_PATTERN.sub(lambda m: os.environ.get(m.group(1), m.group(0)), value)
    return value


_system_config: SystemConfig | None = None


def get_system_config(path: Path | str | None = None) -> SystemConfig:
    """
    Get the system config singleton.

    An explicit path always reloads and replaces the cached instance.
    """
    global _system_config
    if path is not None or _system_config is None:
        _system_config = SystemConfig.load(path)
    return _system_config


def reload_system_config(path: Path | str | None = None) -> SystemConfig:
    """Force a reload of the system config singleton."""
    global _system_config
    _system_config = SystemConfig.load(path)
    return _system_config
