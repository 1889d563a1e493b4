from __future__ import annotations

import logging
from contextvars import ContextVar
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import Field, ValidationError, field_validator
from pydantic.fields import FieldInfo
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from verdict.constants import (
    DEFAULT_MAX_EXPRESSION_DEPTH,
    ENV_PREFIX,
    MAX_EXPRESSION_DEPTH_LIMIT,
    PROJECT_CONFIG_FILENAME,
)
from verdict.context import ContextSchema
from verdict.exceptions import ConfigError
from verdict.expressions.types import Type
from verdict.logging import get_logger

__all__ = [
    "VerdictConfig",
    "load_config",
    "get_user_config_path",
]

logger = get_logger(__name__)

# Project config file used by the settings sources; load_config overrides it
_project_config_path: ContextVar[Path | None] = ContextVar(
    "verdict_project_config_path", default=None
)


class YamlConfigSource(PydanticBaseSettingsSource):
    """Settings source that loads fields from a YAML file."""

    def __init__(
        self,
        settings_cls: type[BaseSettings],
        yaml_file: Path | None = None,
    ):
        super().__init__(settings_cls)
        self.yaml_file = yaml_file
        self._config_data: dict[str, Any] = {}
        if yaml_file and yaml_file.exists():
            try:
                with open(yaml_file) as f:
                    loaded = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ConfigError(
                    message=f"Invalid YAML in {yaml_file}: {e}",
                    field=None,
                    value=None,
                ) from e
            if loaded is None:
                logger.warning("config_file_empty", path=str(yaml_file))
            elif not isinstance(loaded, dict):
                raise ConfigError(
                    message=f"Config file {yaml_file} must contain a mapping",
                    value=loaded,
                )
            else:
                self._config_data = loaded

    def get_field_value(
        self, field: FieldInfo, field_name: str
    ) -> tuple[Any, str, bool]:
        if field_name in self._config_data:
            return self._config_data[field_name], field_name, False
        return None, field_name, False

    def __call__(self) -> dict[str, Any]:
        return self._config_data


class VerdictConfig(BaseSettings):
    """Settings for hosts embedding Verdict.

    Attributes:
        max_expression_depth: Deepest expression tree that will be parsed,
            type-checked or evaluated.
        variables: Declared context schema, variable name to type string
            (``Int``, ``StrArray(3)``).
        verbosity: Log level applied by ``configure_logging(config=...)``.

    Example verdict.yaml:
        max_expression_depth: 64
        variables:
          userId: Int
          roles: StrArray(2)
    """

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_nested_delimiter="__",
        extra="ignore",
    )

    max_expression_depth: int = Field(
        default=DEFAULT_MAX_EXPRESSION_DEPTH,
        ge=1,
        le=MAX_EXPRESSION_DEPTH_LIMIT,
    )
    variables: dict[str, str] = Field(default_factory=dict)
    verbosity: Literal["error", "warning", "info", "debug"] = "warning"

    @field_validator("variables")
    @classmethod
    def check_variable_types(cls, v: dict[str, str]) -> dict[str, str]:
        """Reject type strings that do not name a type."""
        for name, declared in v.items():
            try:
                Type.parse(declared)
            except ValueError as e:
                raise ValueError(f"variable '{name}': {e}") from e
        return v

    @property
    def log_level(self) -> int:
        return getattr(logging, self.verbosity.upper())

    def context_schema(self) -> ContextSchema:
        """Build the declared schema from ``variables``.

        Raises:
            ConfigError: If a type string does not name a type.
        """
        schema = ContextSchema()
        for name, declared in self.variables.items():
            try:
                schema = schema.declare(name, Type.parse(declared))
            except ValueError as e:
                raise ConfigError(
                    message=str(e),
                    field=f"variables.{name}",
                    value=declared,
                ) from e
        return schema

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Customize the order of settings sources.

        Priority (highest to lowest):
        1. Explicit keyword arguments
        2. Environment variables (VERDICT_*)
        3. Project YAML config (./verdict.yaml)
        4. User YAML config (~/.config/verdict/config.yaml)
        """
        project_config_path = (
            _project_config_path.get() or Path.cwd() / PROJECT_CONFIG_FILENAME
        )
        return (
            init_settings,
            env_settings,
            YamlConfigSource(settings_cls, project_config_path),
            YamlConfigSource(settings_cls, get_user_config_path()),
        )


def get_user_config_path() -> Path:
    """Get the path to the user configuration file.

    Returns:
        Path to ~/.config/verdict/config.yaml
    """
    return Path.home() / ".config" / "verdict" / "config.yaml"


def load_config(config_path: Path | None = None) -> VerdictConfig:
    """Load configuration with hierarchy: defaults -> user -> project -> env.

    Args:
        config_path: Project config file. Defaults to ./verdict.yaml

    Returns:
        VerdictConfig instance with merged configuration

    Raises:
        ConfigError: If configuration is invalid
    """
    if config_path is None:
        config_path = Path.cwd() / PROJECT_CONFIG_FILENAME

    if not config_path.exists():
        logger.info("project_config_missing", path=str(config_path))

    token = _project_config_path.set(config_path)
    try:
        return VerdictConfig()
    except ValidationError as e:
        first_error = e.errors()[0]
        field = ".".join(str(loc) for loc in first_error["loc"])
        raise ConfigError(
            message=f"Invalid configuration: {first_error['msg']}",
            field=field,
            value=first_error.get("input"),
        ) from e
    finally:
        _project_config_path.reset(token)
