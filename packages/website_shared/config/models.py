"""Typed configuration models for s3website runtime settings."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, ClassVar, Literal, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.fields import FieldInfo
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

DEFAULT_CONFIG_PATH = Path.home() / ".config" / "s3website" / "s3website.yaml"

# Environment names honored for compatibility with the AWS CLI conventions.
AWS_ENVIRONMENT_FALLBACKS: dict[str, str] = {
    "AWS_PROFILE": "profile",
    "AWS_REGION": "region",
    "AWS_BUCKET": "bucket",
}


class LoggingSettings(BaseModel):
    """Structured logging configuration for the process."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    json_output: bool = True
    service: str = "s3website"
    environment: str = "dev"


class ServerSettings(BaseModel):
    """HTTP listener settings."""

    address: str = "127.0.0.1:8080"
    log_level: Literal["critical", "error", "warning", "info", "debug", "trace"] = (
        "info"
    )

    @field_validator("address")
    @classmethod
    def _validate_address(cls, value: str) -> str:
        """Require ``host:port`` with a valid TCP port."""
        normalized = value.strip()
        host, separator, port = normalized.rpartition(":")
        if separator == "" or not port.isdigit():
            raise ValueError("address must be in host:port form")
        if not 0 < int(port) < 65536:
            raise ValueError("address port must be between 1 and 65535")
        if host.startswith("[") and host.endswith("]"):
            host = host[1:-1]
        return f"{host}:{port}" if ":" not in host else f"[{host}]:{port}"

    def host(self) -> str:
        """Return the bind host, defaulting an empty host to all interfaces."""
        host = self.address.rpartition(":")[0].strip("[]")
        return host or "0.0.0.0"

    def port(self) -> int:
        """Return the bind TCP port."""
        return int(self.address.rpartition(":")[2])


class ComponentNamespaceSettings(BaseModel):
    """Namespace map for grouped component settings under ``components.<kind>``."""

    model_config = ConfigDict(extra="allow")


class ComponentsSettings(BaseModel):
    """Typed ``components`` subtree with support for component-local extras."""

    model_config = ConfigDict(extra="allow")

    service: ComponentNamespaceSettings = Field(
        default_factory=ComponentNamespaceSettings
    )
    substrate: ComponentNamespaceSettings = Field(
        default_factory=ComponentNamespaceSettings
    )

    @model_validator(mode="before")
    @classmethod
    def _reject_flat_component_keys(cls, value: object) -> object:
        """Reject flat component keys in favor of grouped namespaces."""
        if not isinstance(value, dict):
            return value
        flat_prefixed_keys = tuple(
            key
            for key in value
            if isinstance(key, str) and key.startswith(("service_", "substrate_"))
        )
        if not flat_prefixed_keys:
            return value

        bad_key = flat_prefixed_keys[0]
        kind, _, name = bad_key.partition("_")
        raise ValueError(
            f"components.{bad_key} is invalid; use components.{kind}.{name} instead"
        )


class AwsEnvironmentSettingsSource(PydanticBaseSettingsSource):
    """Map ``AWS_PROFILE``/``AWS_REGION``/``AWS_BUCKET`` onto the S3 substrate."""

    def get_field_value(
        self, field: FieldInfo, field_name: str
    ) -> tuple[Any, str, bool]:
        del field
        return None, field_name, False

    def __call__(self) -> dict[str, Any]:
        values = {
            target: os.environ[name].strip()
            for name, target in AWS_ENVIRONMENT_FALLBACKS.items()
            if os.environ.get(name, "").strip()
        }
        if not values:
            return {}
        return {"components": {"substrate": {"s3": values}}}


class SiteSettings(BaseSettings):
    """Root runtime settings resolved from init/env/yaml/defaults sources."""

    model_config = SettingsConfigDict(
        env_prefix="S3WEBSITE_",
        env_nested_delimiter="__",
        extra="ignore",
        nested_model_default_partial_update=True,
    )

    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    server: ServerSettings = Field(default_factory=ServerSettings)
    components: ComponentsSettings = Field(default_factory=ComponentsSettings)

    _config_path: ClassVar[Path] = DEFAULT_CONFIG_PATH

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Apply precedence: init > env > AWS env fallbacks > yaml > defaults."""
        return (
            init_settings,
            env_settings,
            AwsEnvironmentSettingsSource(settings_cls),
            YamlConfigSettingsSource(
                settings_cls,
                yaml_file=cls._config_path,
                yaml_file_encoding="utf-8",
            ),
        )


TComponentSettings = TypeVar("TComponentSettings", bound=BaseModel)


def resolve_component_settings(
    *,
    settings: SiteSettings,
    component_id: str,
    model: type[TComponentSettings],
) -> TComponentSettings:
    """Resolve one component settings object from grouped ``components`` keys."""
    raw_components = settings.components.model_dump(mode="python")
    kind, separator, name = component_id.partition("_")
    if not separator or kind not in {"service", "substrate"}:
        raise ValueError(f"unsupported component id: {component_id}")

    namespace = raw_components.get(kind, {})
    namespace_path = f"components.{kind}"
    if not isinstance(namespace, dict):
        raise TypeError(f"{namespace_path} must resolve to an object mapping")
    resolved = namespace.get(name, {})
    if not isinstance(resolved, dict):
        raise TypeError(f"{namespace_path}.{name} must resolve to an object mapping")
    return model.model_validate(resolved)
