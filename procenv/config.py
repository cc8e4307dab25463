"""Settings for building the default resolver.

Load order (later overrides earlier):
1. Optional YAML settings file (``ResolverSettings.from_yaml_file``)
2. ``.env`` in the working directory
3. Environment variables prefixed with ``PROCENV_``
"""

from __future__ import annotations

import logging
from contextvars import ContextVar
from pathlib import Path
from typing import Any

from pydantic import Field, field_validator
from pydantic.fields import FieldInfo
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from procenv.resolver import ConfigResolver
from procenv.store import layered_store, load_env_file, load_raw_yaml, process_env

logger = logging.getLogger(__name__)

ENV_PREFIX = "PROCENV_"

# Set only while ResolverSettings.from_yaml_file builds an instance.
_settings_yaml_path: ContextVar[Path | None] = ContextVar("_settings_yaml_path", default=None)


class YamlSettingsSource(PydanticBaseSettingsSource):
    """Settings fields read from a YAML mapping.

    Keys that are not field names (including non-string keys) are ignored.
    """

    def __init__(self, settings_cls: type[BaseSettings], yaml_path: Path) -> None:
        super().__init__(settings_cls)
        self.yaml_path = yaml_path
        raw = load_raw_yaml(yaml_path)
        fields = settings_cls.model_fields
        self.data = {str(k): v for k, v in raw.items() if str(k) in fields}

    def get_field_value(self, field: FieldInfo, field_name: str) -> tuple[Any, str, bool]:
        return self.data.get(field_name), field_name, False

    def __call__(self) -> dict[str, Any]:
        return dict(self.data)


class ResolverSettings(BaseSettings):
    """How the resolver finds and reports configuration values.

    Prefix: PROCENV_ (e.g., PROCENV_ENV_FILES='["deploy.env", "site.yml"]')
    """

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    env_files: list[str] = Field(
        default_factory=list,
        description=(
            "Extra .env or YAML files consulted beneath the process environment. "
            "Earlier files take priority over later ones."
        ),
    )
    case_insensitive_fallback: bool = Field(
        default=True,
        description="Retry candidate keys case-insensitively when no exact key matches.",
    )
    redact_secrets: bool = Field(
        default=True,
        description="Mask values under secret-looking keys in resolution debug logs.",
    )
    log_level: str = Field(default="WARNING")

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, v: str) -> str:
        level = str(v).strip().upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {v}")
        return level

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        yaml_path = _settings_yaml_path.get()
        if yaml_path is None:
            return init_settings, env_settings, dotenv_settings, file_secret_settings
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            YamlSettingsSource(settings_cls, yaml_path),
            file_secret_settings,
        )

    @classmethod
    def from_yaml_file(cls, settings_path: str | Path = "procenv.yml") -> "ResolverSettings":
        """Load settings from YAML beneath ``.env`` and environment variables.

        Args:
            settings_path: Path to a YAML mapping of settings fields.

        Returns:
            Configured ResolverSettings instance.
        """

        token = _settings_yaml_path.set(Path(settings_path))
        try:
            return cls()
        finally:
            _settings_yaml_path.reset(token)


def configure_logging(settings: ResolverSettings) -> None:
    """Apply ``settings.log_level`` to the package logger.

    Safe to call multiple times.
    """

    logging.getLogger("procenv").setLevel(settings.log_level)


def build_resolver(settings: ResolverSettings | None = None) -> ConfigResolver:
    """Build a resolver over the process environment and configured env files."""

    settings = settings or ResolverSettings()
    file_stores = [load_env_file(path) for path in settings.env_files]
    for path, values in zip(settings.env_files, file_stores):
        logger.debug("Loaded %d keys from %s", len(values), path)

    return ConfigResolver(
        layered_store(process_env(), *file_stores),
        case_insensitive_fallback=settings.case_insensitive_fallback,
        redact_secrets=settings.redact_secrets,
    )
