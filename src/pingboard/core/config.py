"""Configuration types with environment variable support.

All settings can be configured via environment variables with the PINGBOARD_ prefix.
Example: PINGBOARD_MAX_SAMPLES=600 keeps 600 ping samples per target.
"""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field, PrivateAttr
from pydantic_settings import BaseSettings, SettingsConfigDict


def load_config_from_file(path: str | Path) -> dict[str, Any]:
    """Read a Pingboard settings file.

    ``.yaml``/``.yml`` files go through pyyaml and ``.toml`` files through
    tomllib. An empty YAML file reads as no settings.

    Raises:
        FileNotFoundError: If there is no file at path.
        ValueError: If the file is not UTF-8, does not parse, has an unknown
            suffix, or its top level is not a mapping.
    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"Settings file not found: {path}")

    suffix = path.suffix.lower()
    if suffix not in (".yaml", ".yml", ".toml"):
        raise ValueError(f"Settings file must be .yaml, .yml or .toml, got {path.suffix!r}")

    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise ValueError(f"{path} is not valid UTF-8: {e}") from e

    try:
        data = tomllib.loads(text) if suffix == ".toml" else yaml.safe_load(text)
    except (yaml.YAMLError, tomllib.TOMLDecodeError) as e:
        raise ValueError(f"Cannot parse {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"{path} must contain a mapping of settings")
    return data


class ChannelConfig(BaseSettings):
    """Push channel connection settings."""

    model_config = SettingsConfigDict(
        env_prefix="PINGBOARD_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    server_url: str = Field(
        default="http://localhost:3001",
        description="URL of the probing service's Socket.IO endpoint.",
    )
    connect_timeout: float = Field(
        default=10.0,
        gt=0,
        description="Seconds to wait for the channel to connect.",
    )
    transports: str = Field(
        default="websocket,polling",
        description="Comma-separated Socket.IO transports, in order of preference.",
    )
    namespace: str = Field(
        default="/",
        description="Socket.IO namespace carrying the telemetry events.",
    )

    def get_transports(self) -> list[str]:
        """Parse transports string into a list."""
        return [t.strip() for t in self.transports.split(",") if t.strip()]


class ReconnectConfig(BaseSettings):
    """Reconnection behavior passed to the channel client."""

    model_config = SettingsConfigDict(
        env_prefix="PINGBOARD_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    auto_reconnect: bool = Field(
        default=True,
        description="Enable automatic reconnection on disconnect.",
    )
    max_attempts: int = Field(
        default=0,
        ge=0,
        description="Maximum reconnection attempts. 0 for infinite.",
    )
    base_delay: float = Field(
        default=1.0,
        description="Initial reconnection delay (seconds).",
    )
    max_delay: float = Field(
        default=5.0,
        description="Maximum reconnection delay (seconds).",
    )
    jitter: float = Field(
        default=0.5,
        ge=0.0,
        le=1.0,
        description="Reconnection jitter factor (0-1).",
    )


class HistoryConfig(BaseSettings):
    """Retention of per-target latency history."""

    model_config = SettingsConfigDict(
        env_prefix="PINGBOARD_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    max_samples: int = Field(
        default=300,
        ge=1,
        description="Maximum ping samples kept per target (oldest dropped first).",
    )
    max_age_seconds: float | None = Field(
        default=None,
        gt=0,
        description="Drop samples older than this relative to the newest sample. None keeps all.",
    )


SECTIONS: dict[str, type[BaseSettings]] = {
    "channel": ChannelConfig,
    "reconnect": ReconnectConfig,
    "history": HistoryConfig,
}


def split_sections(settings: dict[str, Any]) -> dict[str, dict[str, Any]]:
    """Group file settings by the config section that owns them.

    Settings may sit under a section table (``history: {max_samples: 60}``)
    or at the top level by field name (``max_samples: 60``).

    Raises:
        ValueError: For a key no section declares, or a section that is not
            a table.
    """
    result: dict[str, dict[str, Any]] = {name: {} for name in SECTIONS}
    owners = {field: name for name, cls in SECTIONS.items() for field in cls.model_fields}

    for key, value in settings.items():
        if key in SECTIONS:
            if not isinstance(value, dict):
                raise ValueError(f"Section {key!r} must be a table of settings")
            for field, field_value in value.items():
                if field not in SECTIONS[key].model_fields:
                    raise ValueError(f"Unknown setting: {key}.{field}")
                result[key][field] = field_value
        elif key in owners:
            result[owners[key]][key] = value
        else:
            raise ValueError(f"Unknown setting: {key}")

    return result


class PingboardConfig(BaseSettings):
    """Master configuration combining all settings.

    Use get_config() to get a cached instance, or load_config() to read a
    settings file first. Environment variables take precedence over file
    settings, which take precedence over defaults.

    Example:
        config = get_config()
        print(config.channel.server_url)
        print(config.history.max_samples)
    """

    model_config = SettingsConfigDict(
        env_prefix="PINGBOARD_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    _file_settings: dict[str, dict[str, Any]] = PrivateAttr(default_factory=dict)

    @classmethod
    def from_file(cls, path: str | Path) -> PingboardConfig:
        """Build a configuration with the settings of a YAML or TOML file.

        Raises:
            FileNotFoundError: If the file does not exist.
            ValueError: If the file cannot be read, names an unknown setting,
                or holds a value that fails validation.
        """
        config = cls()
        config._file_settings = split_sections(load_config_from_file(path))
        config.to_display_dict()
        return config

    def _section(self, name: str) -> BaseSettings:
        settings_cls = SECTIONS[name]
        from_env = settings_cls()
        overrides = {
            key: value
            for key, value in self._file_settings.get(name, {}).items()
            if key not in from_env.model_fields_set
        }
        return settings_cls(**overrides) if overrides else from_env

    @property
    def channel(self) -> ChannelConfig:
        """Get channel configuration."""
        return self._section("channel")

    @property
    def reconnect(self) -> ReconnectConfig:
        """Get reconnection configuration."""
        return self._section("reconnect")

    @property
    def history(self) -> HistoryConfig:
        """Get history retention configuration."""
        return self._section("history")

    def to_env_dict(self) -> dict[str, str]:
        """Export current configuration as environment variable dictionary."""
        result = {}

        channel = self.channel
        result["PINGBOARD_SERVER_URL"] = channel.server_url
        result["PINGBOARD_CONNECT_TIMEOUT"] = str(channel.connect_timeout)
        result["PINGBOARD_TRANSPORTS"] = channel.transports
        result["PINGBOARD_NAMESPACE"] = channel.namespace

        reconn = self.reconnect
        result["PINGBOARD_AUTO_RECONNECT"] = str(reconn.auto_reconnect).lower()
        result["PINGBOARD_MAX_ATTEMPTS"] = str(reconn.max_attempts)
        result["PINGBOARD_BASE_DELAY"] = str(reconn.base_delay)
        result["PINGBOARD_MAX_DELAY"] = str(reconn.max_delay)
        result["PINGBOARD_JITTER"] = str(reconn.jitter)

        history = self.history
        result["PINGBOARD_MAX_SAMPLES"] = str(history.max_samples)
        result["PINGBOARD_MAX_AGE_SECONDS"] = (
            str(history.max_age_seconds) if history.max_age_seconds else ""
        )

        return result

    def to_display_dict(self) -> dict[str, Any]:
        """Export current configuration as a nested dictionary for display."""
        return {
            "channel": self.channel.model_dump(),
            "reconnect": self.reconnect.model_dump(),
            "history": self.history.model_dump(),
        }


_config: PingboardConfig | None = None


def get_config() -> PingboardConfig:
    """Get the global configuration instance.

    The instance is created once and cached for the lifetime of the process.
    To reload config (e.g., in tests), call clear_config() first.
    """
    global _config
    if _config is None:
        _config = PingboardConfig()
    return _config


def load_config(path: str | Path) -> PingboardConfig:
    """Read a settings file and cache the result as the global configuration."""
    global _config
    _config = PingboardConfig.from_file(path)
    return _config


def clear_config() -> None:
    """Clear the cached configuration.

    Call this to drop loaded file settings and re-read environment variables
    on the next get_config() call.
    """
    global _config
    _config = None
