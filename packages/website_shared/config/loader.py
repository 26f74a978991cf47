"""Settings loading with deterministic precedence.

The cascade is always:
1) CLI params
2) ``S3WEBSITE_`` environment variables (``__`` separates nested keys)
3) ``AWS_PROFILE``, ``AWS_REGION`` and ``AWS_BUCKET``
4) ``~/.config/s3website/s3website.yaml`` (or an explicit path)
5) Built-in defaults

Example: ``S3WEBSITE_COMPONENTS__SUBSTRATE__S3__BUCKET=site`` sets
``components.substrate.s3.bucket``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, ClassVar, Mapping

from .models import SiteSettings


def load_settings(
    *,
    cli_params: Mapping[str, Any] | None = None,
    config_path: str | Path | None = None,
) -> SiteSettings:
    """Build ``SiteSettings`` from CLI params layered over the other sources.

    ``cli_params`` uses dotted keys (``components.substrate.s3.bucket``);
    ``None`` values are dropped so unset flags never mask lower sources.
    """
    settings_cls = _settings_class(config_path)
    return settings_cls(**_nest(cli_params or {}))


def _settings_class(config_path: str | Path | None) -> type[SiteSettings]:
    """Return ``SiteSettings`` bound to an explicit YAML path when given."""
    if config_path is None:
        return SiteSettings

    resolved = Path(config_path).expanduser()
    if not resolved.is_file():
        raise FileNotFoundError(f"config file not found: {resolved}")

    class _FileSiteSettings(SiteSettings):
        _config_path: ClassVar[Path] = resolved

    return _FileSiteSettings


def _nest(params: Mapping[str, Any]) -> dict[str, Any]:
    """Expand dotted keys into nested mappings, skipping ``None`` values."""
    output: dict[str, Any] = {}
    for dotted, value in params.items():
        if value is None:
            continue
        path = [segment for segment in dotted.split(".") if segment]
        cursor = output
        for segment in path[:-1]:
            child = cursor.get(segment)
            if not isinstance(child, dict):
                child = {}
                cursor[segment] = child
            cursor = child
        cursor[path[-1]] = value
    return output
