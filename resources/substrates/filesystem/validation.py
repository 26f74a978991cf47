"""Key-to-path validation for the local directory substrate."""

from __future__ import annotations

from pathlib import Path


def resolve_key_path(*, root: Path, key: str) -> Path | None:
    """Resolve ``key`` beneath ``root`` or return ``None`` when it escapes.

    Empty keys, keys with NUL bytes and keys whose resolved path leaves the
    root (``..`` segments, absolute segments, symlinks) are rejected.
    """
    if key == "" or "\x00" in key:
        return None
    candidate = (root / key.lstrip("/")).resolve()
    if candidate != root and root not in candidate.parents:
        return None
    return candidate
