"""Configuration loading with pydantic-settings.

Supports loading configuration from multiple sources with precedence:
1. Direct kwargs (highest priority)
2. Environment variables (GOPATH / GOROOT for search roots,
   GOSYM__SECTION__KEY for everything else)
3. Global config (~/.config/gosym/config.yaml)
4. Built-in defaults (lowest priority)
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from gosym.config.models import GosymConfig, LoggingConfig, SearchPathConfig
from gosym.core.errors import ConfigError

GLOBAL_CONFIG_PATH = Path("~/.config/gosym/config.yaml").expanduser()


def _load_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    try:
        with path.open() as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError.parse_error(str(path), str(e)) from e
    if not isinstance(data, dict):
        raise ConfigError.parse_error(str(path), "top level must be a mapping")
    return data


class _YamlSource(PydanticBaseSettingsSource):
    """Settings source that reads from pre-loaded YAML config."""

    def __init__(self, settings_cls: type[BaseSettings], yaml_config: dict[str, Any]) -> None:
        super().__init__(settings_cls)
        self._yaml_config = yaml_config

    def get_field_value(
        self,
        field: Any,  # noqa: ARG002
        field_name: str,
    ) -> tuple[Any, str, bool]:
        val = self._yaml_config.get(field_name)
        return val, field_name, val is not None

    def __call__(self) -> dict[str, Any]:
        return self._yaml_config


class GoEnvironment(BaseSettings):
    """The Go toolchain variables, read under their conventional names."""

    model_config = SettingsConfigDict(case_sensitive=True, extra="ignore")

    gopath: str = Field(default="", validation_alias="GOPATH")
    goroot: str = Field(default="", validation_alias="GOROOT")


def _make_settings_class(yaml_config: dict[str, Any]) -> type[BaseSettings]:
    """Create a Settings class with instance-based YAML source (thread-safe)."""

    class GosymSettings(BaseSettings):
        """Root config. Env vars: GOSYM__LOGGING__LEVEL, etc."""

        model_config = SettingsConfigDict(
            env_prefix="GOSYM__",
            env_nested_delimiter="__",
            case_sensitive=False,
        )

        logging: LoggingConfig = LoggingConfig()
        search: SearchPathConfig = SearchPathConfig()

        @classmethod
        def settings_customise_sources(
            cls,
            settings_cls: type[BaseSettings],
            init_settings: PydanticBaseSettingsSource,
            env_settings: PydanticBaseSettingsSource,
            dotenv_settings: PydanticBaseSettingsSource,  # noqa: ARG003
            file_secret_settings: PydanticBaseSettingsSource,  # noqa: ARG003
        ) -> tuple[PydanticBaseSettingsSource, ...]:
            # Precedence (first wins): init kwargs > env vars > yaml files
            return (init_settings, env_settings, _YamlSource(settings_cls, yaml_config))

    return GosymSettings


def load_config(config_path: Path | None = None, **kwargs: Any) -> GosymConfig:
    """Load config: defaults < yaml < env vars < kwargs.

    Args:
        config_path: YAML file to read. Defaults to ``GLOBAL_CONFIG_PATH``.
        **kwargs: Override values (highest precedence).

    Returns:
        Fully resolved configuration object.

    Raises:
        ConfigError: On invalid YAML syntax or validation errors.
    """
    yaml_config = _load_yaml(config_path or GLOBAL_CONFIG_PATH)

    settings_cls = _make_settings_class(yaml_config)
    try:
        settings = settings_cls(**kwargs)
        go_env = GoEnvironment()
    except ValidationError as e:
        err = e.errors()[0]
        field = ".".join(str(loc) for loc in err["loc"])
        raise ConfigError.invalid_value(field, err.get("input"), err["msg"]) from e

    search: SearchPathConfig = settings.search  # type: ignore[attr-defined]
    if "search" not in kwargs:
        search = SearchPathConfig(
            gopath=go_env.gopath or search.gopath,
            goroot=go_env.goroot or search.goroot,
        )

    return GosymConfig(
        logging=settings.logging,  # type: ignore[attr-defined]
        search=search,
    )
