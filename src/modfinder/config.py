"""Configuration loading.

Settings are loaded in priority order (highest first):
  1. Environment variables  (MODFINDER__REGISTRY__REFRESH_INTERVAL_MINUTES=10)
  2. modfinder.yaml         (searched in cwd, then ~/.config/modfinder/)
  3. Hardcoded defaults

The config file is optional; every field has a default.
"""

from __future__ import annotations

from datetime import timedelta
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

from modfinder.models.replies import DEFAULT_COLOR

DEFAULT_INDEX_URL = (
    "https://thunderstore.io/c/hollow-knight-silksong/api/v1/package-listing-index/"
)


def _find_config_file() -> str | None:
    """Return the path of the first modfinder.yaml found, or None."""
    candidates = [
        Path("modfinder.yaml"),
        Path.home() / ".config" / "modfinder" / "modfinder.yaml",
    ]
    for path in candidates:
        if path.exists():
            return str(path)
    return None


class RegistrySettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    index_url: str = DEFAULT_INDEX_URL
    refresh_interval_minutes: float = 30
    timeout_seconds: float = 30.0
    user_agent: str = "modfinder/0.1"

    @field_validator("refresh_interval_minutes", "timeout_seconds")
    @classmethod
    def validate_positive(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("must be > 0")
        return v

    @property
    def refresh_interval(self) -> timedelta:
        return timedelta(minutes=self.refresh_interval_minutes)


class BotSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    reload_command: str = "reloadcache"
    # A near miss this close is answered with the matching package directly.
    autocorrect_distance: int = 2
    # None = one task per trigger with no limit
    max_concurrent_lookups: int | None = None

    @field_validator("max_concurrent_lookups")
    @classmethod
    def validate_max_concurrent_lookups(cls, v: int | None) -> int | None:
        if v is not None and v < 1:
            raise ValueError("max_concurrent_lookups must be >= 1")
        return v


class SummarySettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    embed_color: int = DEFAULT_COLOR
    max_dependencies: int = 3
    ignored_dependency_prefixes: list[str] = ["BepInEx-BepInExPack"]


class LoggingSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    format: Literal["json", "text"] = "json"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        # Double-underscore separates nesting: MODFINDER__BOT__AUTOCORRECT_DISTANCE=1
        env_prefix="MODFINDER__",
        env_nested_delimiter="__",
        yaml_file=_find_config_file(),
        yaml_file_encoding="utf-8",
        extra="forbid",
    )

    registry: RegistrySettings = RegistrySettings()
    bot: BotSettings = BotSettings()
    summary: SummarySettings = SummarySettings()
    logging: LoggingSettings = LoggingSettings()

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
        **kwargs: Any,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,  # Constructor args (highest priority)
            env_settings,  # Environment variables
            YamlConfigSettingsSource(settings_cls),  # YAML file
            # dotenv and file secrets intentionally excluded
        )
