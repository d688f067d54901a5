"""Configuration file loading and validation."""

import logging
import re
from pathlib import Path
from typing import List
from zoneinfo import ZoneInfo, available_timezones

from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    TomlConfigSettingsSource,
)

from .consts import DATABASE_PATH, LOG_FILE_DEFAULT, TOKEN_COOKIE
from .errors import ConfigException

logger = logging.getLogger(__name__)

NAME_PATTERN = r"^[A-Za-z0-9_-]+$"


class WebConfig(BaseModel):
    """Web service configuration."""

    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8080, ge=1, le=65535)
    debug: bool = Field(default=False)
    allow_cors: bool = Field(default=False)
    token_cookie: str = Field(default=TOKEN_COOKIE)


class ProjectConfig(BaseModel):
    """A project and the environments content can live in."""

    name: str
    environments: List[str] = Field(default_factory=lambda: ["live"])

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if not re.match(NAME_PATTERN, v):
            raise ValueError(f"Invalid project name: '{v}'")
        return v

    @field_validator("environments")
    @classmethod
    def validate_environments(cls, v: List[str]) -> List[str]:
        if not v:
            raise ValueError("A project needs at least one environment")
        for env in v:
            if not re.match(NAME_PATTERN, env):
                raise ValueError(f"Invalid environment name: '{env}'")
        return v

    @property
    def default_environment(self) -> str:
        return self.environments[0]


class Config(BaseSettings):
    """Application configuration."""

    language: str = Field(default="en")
    languages: List[str] = Field(default_factory=lambda: ["en"])
    timezone: str = Field(default="UTC")
    log_file: str = Field(default=LOG_FILE_DEFAULT)
    database_path: str = Field(default=DATABASE_PATH)

    web: WebConfig = Field(default_factory=WebConfig)
    projects: List[ProjectConfig] = Field(default_factory=list)

    model_config = SettingsConfigDict(
        env_prefix="QUIRE_",
        env_nested_delimiter="__",
    )

    @field_validator("timezone", mode="before")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        if v not in available_timezones():
            raise ValueError(
                f"Invalid timezone configuration: '{v}'. "
                "Please use a valid IANA timezone identifier"
            )
        return v

    @field_validator("projects", mode="before")
    @classmethod
    def coerce_indexed_dict_to_list(cls, v):
        if v is None:
            return []
        if isinstance(v, dict):
            try:
                items = sorted(v.items(), key=lambda kv: int(kv[0]))
            except ValueError:
                return list(v.values())
            return [value for _key, value in items]
        return v

    @model_validator(mode="after")
    def validate_languages(self) -> "Config":
        if self.language not in self.languages:
            self.languages = [self.language, *self.languages]

        names = [p.name for p in self.projects]
        duplicates = {n for n in names if names.count(n) > 1}
        if duplicates:
            raise ValueError(f"Duplicate project names: {', '.join(sorted(duplicates))}")
        return self

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
            TomlConfigSettingsSource(settings_cls),
        )

    @classmethod
    def load_from_file(cls, config_path: str) -> "Config":
        """Load configuration from specified path."""
        path = Path(config_path)
        if not path.exists():
            raise ConfigException(f"Configuration file not found: {config_path}")

        class _Config(cls):
            model_config = SettingsConfigDict(
                toml_file=str(path),
                env_prefix="QUIRE_",
                env_nested_delimiter="__",
            )

        try:
            return _Config()
        except ValidationError as e:
            error_lines = ["Configuration validation failed:"]
            for error in e.errors():
                loc = " -> ".join(str(item) for item in error["loc"])
                error_lines.append(f"  - {loc}: {error['msg']}")
            raise ConfigException("\n".join(error_lines)) from e

    def get_timezone(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)

    def get_project(self, name: str) -> ProjectConfig | None:
        for project in self.projects:
            if project.name == name:
                return project
        return None
