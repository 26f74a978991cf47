"""Tests for pydantic-settings-backed shared configuration loading."""

from __future__ import annotations

import os
from pathlib import Path

import pytest
from pydantic import BaseModel, ValidationError

from packages.website_shared.config import (
    ServerSettings,
    SiteSettings,
    load_settings,
    resolve_component_settings,
)
from resources.substrates.s3.config import S3SubstrateSettings
from services.website.config import WebsiteSettings


@pytest.fixture(autouse=True)
def _clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove process environment that would leak into settings sources."""
    for name in list(os.environ):
        if name.startswith("S3WEBSITE_") or name in {
            "AWS_PROFILE",
            "AWS_REGION",
            "AWS_BUCKET",
        }:
            monkeypatch.delenv(name, raising=False)


def _write(path: Path, *lines: str) -> Path:
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


def _s3(settings: SiteSettings) -> S3SubstrateSettings:
    return resolve_component_settings(
        settings=settings, component_id="substrate_s3", model=S3SubstrateSettings
    )


def test_load_settings_uses_precedence_cascade(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """CLI params override env, env overrides AWS fallbacks, which override YAML."""
    config_file = _write(
        tmp_path / "s3website.yaml",
        "logging:",
        "  level: WARNING",
        "server:",
        "  address: 127.0.0.1:7000",
        "components:",
        "  substrate:",
        "    s3:",
        "      bucket: yaml-bucket",
        "      region: ap-south-1",
        "      profile: yaml-profile",
    )
    monkeypatch.setenv("S3WEBSITE_LOGGING__LEVEL", "ERROR")
    monkeypatch.setenv("S3WEBSITE_COMPONENTS__SUBSTRATE__S3__BUCKET", "env-bucket")
    monkeypatch.setenv("AWS_BUCKET", "aws-bucket")
    monkeypatch.setenv("AWS_REGION", "eu-central-1")

    settings = load_settings(
        cli_params={"logging.level": "DEBUG", "components.substrate.s3.profile": None},
        config_path=config_file,
    )

    s3 = _s3(settings)
    assert settings.logging.level == "DEBUG"
    assert settings.server.address == "127.0.0.1:7000"
    assert s3.bucket == "env-bucket"
    assert s3.region == "eu-central-1"
    assert s3.profile == "yaml-profile"


def test_load_settings_uses_defaults_when_sources_empty(tmp_path: Path) -> None:
    """Model defaults apply when env and YAML are silent."""
    settings = load_settings(config_path=_write(tmp_path / "empty.yaml", "{}"))

    website = resolve_component_settings(
        settings=settings,
        component_id="service_website",
        model=WebsiteSettings,
    )
    assert settings.logging.service == "s3website"
    assert settings.logging.level == "INFO"
    assert settings.server.address == "127.0.0.1:8080"
    assert website.index_document == "index.html"


def test_aws_environment_fallbacks_fill_s3_settings(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """AWS_PROFILE, AWS_REGION and AWS_BUCKET map onto the S3 substrate."""
    monkeypatch.setenv("AWS_PROFILE", "site")
    monkeypatch.setenv("AWS_REGION", "us-west-2")
    monkeypatch.setenv("AWS_BUCKET", "www.example.com")

    settings = load_settings(config_path=_write(tmp_path / "empty.yaml", "{}"))

    s3 = _s3(settings)
    assert (s3.profile, s3.region, s3.bucket) == ("site", "us-west-2", "www.example.com")


def test_blank_aws_environment_values_are_ignored(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Whitespace-only fallbacks should not mask YAML values."""
    monkeypatch.setenv("AWS_BUCKET", "   ")
    config_file = _write(
        tmp_path / "s3website.yaml",
        "components:",
        "  substrate:",
        "    s3:",
        "      bucket: yaml-bucket",
    )

    assert _s3(load_settings(config_path=config_file)).bucket == "yaml-bucket"


def test_explicit_missing_config_path_raises(tmp_path: Path) -> None:
    """A named config file that does not exist is an error."""
    with pytest.raises(FileNotFoundError, match="config file not found"):
        load_settings(config_path=tmp_path / "missing.yaml")


def test_flat_component_keys_are_rejected(tmp_path: Path) -> None:
    """``components.substrate_s3`` must be written as ``components.substrate.s3``."""
    config_file = _write(
        tmp_path / "s3website.yaml",
        "components:",
        "  substrate_s3:",
        "    bucket: site",
    )

    with pytest.raises(ValidationError, match="components.substrate.s3"):
        load_settings(config_path=config_file)


def test_resolve_component_settings_rejects_unknown_kind() -> None:
    """Only service and substrate component kinds are addressable."""

    class _Model(BaseModel):
        pass

    with pytest.raises(ValueError, match="unsupported component id"):
        resolve_component_settings(
            settings=SiteSettings.model_validate({}),
            component_id="adapter_http",
            model=_Model,
        )


@pytest.mark.parametrize(
    ("address", "host", "port"),
    [
        ("127.0.0.1:8080", "127.0.0.1", 8080),
        (":9000", "0.0.0.0", 9000),
        ("[::1]:8443", "::1", 8443),
        (" localhost:80 ", "localhost", 80),
    ],
)
def test_server_address_parsing(address: str, host: str, port: int) -> None:
    settings = ServerSettings(address=address)

    assert settings.host() == host
    assert settings.port() == port


@pytest.mark.parametrize("address", ["localhost", "host:http", "host:0", "host:70000"])
def test_server_address_validation(address: str) -> None:
    with pytest.raises(ValidationError):
        ServerSettings(address=address)
