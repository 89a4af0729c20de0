"""Configuration management for gitnova."""

from __future__ import annotations

import tomllib
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, ClassVar

from gitnova.config.paths import default_config_path
from gitnova.platform.logging import logger

DEFAULT_CACHE_TTL_SECONDS: float = 60.0
STATUS_VIEW_TTL_SECONDS_DEFAULT: float = 0.5
REFRESH_DEBOUNCE_SECONDS_DEFAULT: float = 0.15
GIT_TIMEOUT_SECONDS_DEFAULT: float = 10.0


class ConfigError(Exception):
    """Base error for configuration problems."""


class ConfigParseError(ConfigError):
    """Raised when the TOML file cannot be parsed."""


class ConfigValidationError(ConfigError):
    """Raised when a configuration value has the wrong type."""


def _path_field(default: Path | None = None) -> Any:
    """Create a field for Path objects with proper conversion.

    Args:
        default: Default value for the field.

    Returns:
        Field with proper metadata for path handling.
    """
    return field(default=default, metadata={"path": True})


_NUMERIC_FIELDS: tuple[str, ...] = (
    "default_cache_ttl_seconds",
    "status_view_ttl_seconds",
    "refresh_debounce_seconds",
    "git_timeout_seconds",
)


@dataclass
class Config:
    """Application configuration."""

    # Cache lifetimes
    default_cache_ttl_seconds: float = DEFAULT_CACHE_TTL_SECONDS
    status_view_ttl_seconds: float = STATUS_VIEW_TTL_SECONDS_DEFAULT
    refresh_debounce_seconds: float = REFRESH_DEBOUNCE_SECONDS_DEFAULT

    # Refresh the changes view when other components report repository events
    auto_refresh: bool = True

    # Backend invocation
    git_executable: str = "git"
    git_timeout_seconds: float = GIT_TIMEOUT_SECONDS_DEFAULT

    # Log file path
    log_file: Path | None = _path_field()

    _instance: ClassVar["Config | None"] = None
    _loaded_from: ClassVar[Path | None] = None

    def __post_init__(self) -> None:
        """Normalise path fields and reject wrongly typed numeric values."""

        for f in fields(self):
            if not f.metadata.get("path", False):
                continue
            value = getattr(self, f.name)
            if isinstance(value, str):
                setattr(self, f.name, Path(value).expanduser() if value.strip() else None)

        for name in _NUMERIC_FIELDS:
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ConfigValidationError(f"'{name}' must be a number, got {value!r}")
            setattr(self, name, float(value))

        if not isinstance(self.auto_refresh, bool):
            raise ConfigValidationError(f"'auto_refresh' must be a boolean, got {self.auto_refresh!r}")
        if not isinstance(self.git_executable, str) or not self.git_executable.strip():
            raise ConfigValidationError("'git_executable' must be a non-empty string")

    def save(self, target: Path | None = None) -> Path:
        """Save configuration to file and return the written path."""

        config_dict = asdict(self)
        for key, value in config_dict.items():
            if isinstance(value, Path):
                config_dict[key] = str(value)

        destination = target or default_config_path()
        try:
            destination.parent.mkdir(parents=True, exist_ok=True)
            _ = destination.write_text(self._render_toml(config_dict), encoding="utf-8")
            logger.info("Configuration saved to %s", destination)
        except OSError as e:
            logger.error("Failed to save configuration: %s", e)
            raise
        return destination

    def _render_toml(self, config: dict[str, Any]) -> str:
        """Render configuration as TOML with inline guidance."""

        lines: list[str] = []

        lines.append("# gitnova configuration file")
        lines.append("")

        lines.append("# Lifetime of cached branches, remotes and status (seconds)")
        lines.append(
            f"default_cache_ttl_seconds = {self._format_toml_value(config['default_cache_ttl_seconds'])}"
        )
        lines.append("# Lifetime of the changes view snapshot (seconds)")
        lines.append(
            f"status_view_ttl_seconds = {self._format_toml_value(config['status_view_ttl_seconds'])}"
        )
        lines.append("# Window collapsing bursts of change signals (seconds)")
        lines.append(
            f"refresh_debounce_seconds = {self._format_toml_value(config['refresh_debounce_seconds'])}"
        )
        lines.append("")

        lines.append("# Refresh the changes view on commit, stash and branch events")
        lines.append(f"auto_refresh = {self._format_toml_value(config['auto_refresh'])}")
        lines.append("")

        lines.append("# git executable and per-call timeout (seconds)")
        lines.append(f"git_executable = {self._format_toml_value(config['git_executable'])}")
        lines.append(
            f"git_timeout_seconds = {self._format_toml_value(config['git_timeout_seconds'])}"
        )
        lines.append("")

        lines.append("# Log file path (optional)")
        lines.append('# Example: log_file = "/path/to/logs/gitnova.log"')
        if config["log_file"] is not None:
            lines.append(f"log_file = {self._format_toml_value(config['log_file'])}")
        lines.append("")

        return "\n".join(lines)

    def _format_toml_value(self, value: Any) -> str:
        """Format a value for TOML serialization."""

        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, (str, Path)):
            return f'"{str(value)}"'
        return str(value)

    @classmethod
    def load(cls, source: Path | None = None) -> "Config":
        """Load configuration from file, falling back to defaults when absent.

        Args:
            source: Explicit file to read. Defaults to ``default_config_path()``.

        Returns:
            Config: Loaded configuration object.

        Raises:
            ConfigParseError: If the file is not valid TOML.
            ConfigValidationError: If a value has the wrong type.
        """
        config_file = source or default_config_path()
        if cls._instance is not None and cls._loaded_from == config_file:
            return cls._instance

        if not config_file.exists():
            instance = cls()
        else:
            try:
                with open(config_file, "rb") as f:
                    config_dict = tomllib.load(f)
            except tomllib.TOMLDecodeError as e:
                logger.error("Failed to parse configuration %s: %s", config_file, e)
                raise ConfigParseError(f"Invalid TOML in {config_file}: {e}") from e

            known = {f.name for f in fields(cls)}
            unknown = sorted(set(config_dict) - known)
            if unknown:
                logger.warning("Ignoring unknown configuration keys: %s", ", ".join(unknown))
            instance = cls(**{k: v for k, v in config_dict.items() if k in known})
            logger.debug("Configuration loaded from %s", config_file)

        cls._instance = instance
        cls._loaded_from = config_file
        return instance


# Global configuration instance
config = Config.load()


__all__ = [
    "Config",
    "ConfigError",
    "ConfigParseError",
    "ConfigValidationError",
    "DEFAULT_CACHE_TTL_SECONDS",
    "GIT_TIMEOUT_SECONDS_DEFAULT",
    "REFRESH_DEBOUNCE_SECONDS_DEFAULT",
    "STATUS_VIEW_TTL_SECONDS_DEFAULT",
    "config",
]
