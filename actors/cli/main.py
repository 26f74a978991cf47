"""s3website command-line actor implemented with Typer."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable

import typer
from botocore.exceptions import BotoCoreError
from pydantic import ValidationError

from packages.website_shared.config import SiteSettings, load_settings
from packages.website_shared.http import run_app
from packages.website_shared.logging import configure_logging, get_logger
from services.website.api import create_website_app
from services.website.domain import Failed, NotFound, RedirectTo, ResolvedAction, Serve
from services.website.service import WebsiteService, build_website_service

_LOGGER = get_logger(__name__)

SUCCESS_EXIT_CODE = 0
NOT_READY_EXIT_CODE = 1
CONFIG_ERROR_EXIT_CODE = 2


@dataclass(frozen=True)
class CliConfig:
    """Global CLI options layered over environment and file configuration."""

    config_path: Path | None
    backend: str | None
    bucket: str | None
    region: str | None
    profile: str | None
    endpoint_url: str | None
    root_dir: str | None
    log_level: str | None
    as_json: bool

    def cli_params(self) -> dict[str, Any]:
        """Return dotted settings keys for every option given on the command line."""
        return {
            "logging.level": self.log_level.upper() if self.log_level else None,
            "components.service.website.backend": self.backend,
            "components.substrate.s3.bucket": self.bucket,
            "components.substrate.s3.region": self.region,
            "components.substrate.s3.profile": self.profile,
            "components.substrate.s3.endpoint_url": self.endpoint_url,
            "components.substrate.filesystem.root_dir": self.root_dir,
        }


def _emit_error(message: str, as_json: bool) -> None:
    """Render one error to stderr."""
    if as_json:
        typer.echo(json.dumps({"error": message}), err=True)
        return
    typer.echo(f"error: {message}", err=True)


def _emit(data: dict[str, Any], text: str, as_json: bool) -> None:
    """Render one command result as JSON or human-readable text."""
    if as_json:
        typer.echo(json.dumps(data, sort_keys=True, separators=(",", ":")))
        return
    typer.echo(text)


def _load(cfg: CliConfig, **overrides: Any) -> SiteSettings:
    """Load settings, mapping configuration errors to the config exit code."""
    params = cfg.cli_params()
    params.update(overrides)
    return _guard_config(
        cfg, lambda: load_settings(cli_params=params, config_path=cfg.config_path)
    )


def _build_service(cfg: CliConfig, settings: SiteSettings) -> WebsiteService:
    """Build the website service and its configured object store."""
    return _guard_config(cfg, lambda: build_website_service(settings=settings))


def _guard_config(cfg: CliConfig, factory: Callable[[], Any]) -> Any:
    try:
        return factory()
    except (ValidationError, ValueError, FileNotFoundError, BotoCoreError) as exc:
        _emit_error(str(exc), cfg.as_json)
        raise typer.Exit(code=CONFIG_ERROR_EXIT_CODE) from exc


def _describe_action(action: ResolvedAction) -> tuple[dict[str, Any], str]:
    """Return JSON and text renderings of one resolved action."""
    if isinstance(action, Serve):
        return {"action": "serve", "key": action.key}, f"serve {action.key}"
    if isinstance(action, RedirectTo):
        return (
            {"action": "redirect", "location": action.location, "status": action.status},
            f"redirect {action.status} {action.location}",
        )
    if isinstance(action, NotFound):
        return {"action": "not_found"}, "not found"
    if isinstance(action, Failed):
        return (
            {"action": "error", "code": action.error.code, "message": action.error.message},
            f"error {action.error.code}: {action.error.message}",
        )
    raise TypeError(f"unsupported resolved action: {action!r}")


def _require_config(ctx: typer.Context) -> CliConfig:
    """Return required CLI config from Typer context."""
    config = ctx.obj
    if not isinstance(config, CliConfig):
        raise RuntimeError("CLI configuration not initialized")
    return config


app = typer.Typer(
    no_args_is_help=True,
    help="Serve a static website out of an S3 bucket",
)


@app.callback()
def main(
    ctx: typer.Context,
    config: Path | None = typer.Option(
        None,
        "--config",
        help="YAML settings file (default ~/.config/s3website/s3website.yaml)",
    ),
    backend: str | None = typer.Option(
        None, help="Object store backend: s3 or filesystem"
    ),
    bucket: str | None = typer.Option(None, help="Bucket to serve (env AWS_BUCKET)"),
    region: str | None = typer.Option(None, help="AWS region (env AWS_REGION)"),
    profile: str | None = typer.Option(None, help="AWS profile (env AWS_PROFILE)"),
    endpoint_url: str | None = typer.Option(
        None, help="Custom endpoint for S3-compatible stores"
    ),
    root_dir: str | None = typer.Option(
        None, help="Directory served by the filesystem backend"
    ),
    log_level: str | None = typer.Option(None, help="Log level"),
    as_json: bool = typer.Option(False, "--json", help="Emit JSON output"),
) -> None:
    """Store global options for all commands."""
    ctx.obj = CliConfig(
        config_path=config,
        backend=backend,
        bucket=bucket,
        region=region,
        profile=profile,
        endpoint_url=endpoint_url,
        root_dir=root_dir,
        log_level=log_level,
        as_json=as_json,
    )


@app.command("serve")
def serve_command(
    ctx: typer.Context,
    address: str | None = typer.Option(
        None, "--address", "-a", help="Address to listen on (default 127.0.0.1:8080)"
    ),
) -> None:
    """Run the HTTP server."""
    cfg = _require_config(ctx)
    settings = _load(cfg, **{"server.address": address})
    configure_logging(
        level=settings.logging.level,
        json_output=settings.logging.json_output,
        service=settings.logging.service,
        environment=settings.logging.environment,
    )
    service = _build_service(cfg, settings)
    _LOGGER.info("listening on %s", settings.server.address)
    run_app(
        create_website_app(service=service),
        host=settings.server.host(),
        port=settings.server.port(),
        log_level=settings.server.log_level,
    )


@app.command("check")
def check_command(ctx: typer.Context) -> None:
    """Report object store readiness."""
    cfg = _require_config(ctx)
    service = _build_service(cfg, _load(cfg))
    status = service.health()
    _emit(
        status.model_dump(mode="json"),
        f"{'ready' if status.store_ready else 'not ready'}: {status.detail}",
        cfg.as_json,
    )
    raise typer.Exit(
        code=SUCCESS_EXIT_CODE if status.store_ready else NOT_READY_EXIT_CODE
    )


@app.command("resolve")
def resolve_command(
    ctx: typer.Context,
    path: str = typer.Argument(..., help="Request path, for example /docs"),
) -> None:
    """Show how a request path resolves without fetching content."""
    cfg = _require_config(ctx)
    service = _build_service(cfg, _load(cfg))
    action = service.resolve(path=path if path.startswith("/") else f"/{path}")
    data, text = _describe_action(action)
    _emit(data, text, cfg.as_json)
    raise typer.Exit(
        code=NOT_READY_EXIT_CODE if isinstance(action, Failed) else SUCCESS_EXIT_CODE
    )


if __name__ == "__main__":
    app()
