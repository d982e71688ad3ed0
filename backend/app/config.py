"""Application configuration using Pydantic Settings.

Sources, highest priority first: environment variables (ECOWITT_ prefix,
"__" between nested names), a .env file, then the TOML config file.

The TOML file uses the ecowitt2db.toml layout:

    listen_port = 8080

    [influxdb]
    host = "http://localhost:8086"
    org = "home"
    token = "..."
    bucket = "weather"
"""

import os
from functools import lru_cache
from typing import Optional

from pydantic import BaseModel, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    TomlConfigSettingsSource,
)

APP_VERSION = "0.1.0"

DEFAULT_CONFIG_FILE = "ecowitt2db.toml"
CONFIG_ENV_VAR = "ECOWITT_CONFIG"


# Set by load_settings() from --config; wins over $ECOWITT_CONFIG
_config_path: Optional[str] = None


def config_file_path() -> str:
    """TOML config location: --config, $ECOWITT_CONFIG, else ./ecowitt2db.toml."""
    return _config_path or os.environ.get(CONFIG_ENV_VAR) or DEFAULT_CONFIG_FILE


class InfluxDBSettings(BaseModel):
    host: str
    org: str
    token: str
    bucket: str
    timeout: float = 10.0

    @field_validator("host", "org", "token", "bucket")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be empty")
        return v


class Settings(BaseSettings):
    """Bridge settings loaded from environment, .env and TOML file."""

    influxdb: InfluxDBSettings

    # Server
    host: str = "0.0.0.0"
    listen_port: int = 8080

    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="ECOWITT_",
        env_nested_delimiter="__",
        env_file=".env",
        extra="ignore",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            TomlConfigSettingsSource(settings_cls, toml_file=config_file_path()),
        )


def load_settings(config_path: Optional[str] = None) -> Settings:
    """Build Settings, optionally pointing at a specific TOML file."""
    global _config_path
    if config_path is not None:
        _config_path = config_path
        get_settings.cache_clear()
    return get_settings()


@lru_cache
def get_settings() -> Settings:
    return Settings()
