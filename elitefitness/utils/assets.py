"""Cache-busting URLs for the bundled CSS and reveal script."""

from __future__ import annotations

from functools import lru_cache
from hashlib import sha256
from pathlib import Path

STATIC_ROOT = Path(__file__).resolve().parent.parent / "static"
STATIC_PREFIX = "/static"


@lru_cache(maxsize=128)
def fingerprint(relative_path: str) -> str | None:
    file_path = STATIC_ROOT / relative_path
    if not file_path.is_file():
        return None
    return sha256(file_path.read_bytes()).hexdigest()[:12]


def asset_url(relative_path: str) -> str:
    relative_path = relative_path.lstrip("/")
    url = f"{STATIC_PREFIX}/{relative_path}"
    digest = fingerprint(relative_path)
    return f"{url}?v={digest}" if digest else url
