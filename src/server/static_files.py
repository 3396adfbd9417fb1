"""Static asset lookup for the web UI directory next to `index.html`."""

from __future__ import annotations

import mimetypes
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

SERVABLE_SUFFIXES: frozenset[str] = frozenset(
    {".html", ".js", ".css", ".svg", ".png", ".ico", ".json", ".webmanifest"}
)
_TEXT_TYPES = {"application/javascript", "application/json", "application/manifest+json"}


@dataclass(frozen=True)
class StaticAsset:
    path: Path
    body: bytes
    content_type: str


def resolve_static_file(ui_root: Path, request_path: str) -> Optional[Path]:
    """Resolve a servable asset inside `ui_root`, or None for anything else."""
    root = ui_root.resolve()
    relative = (request_path or "").lstrip("/")
    if not relative:
        return None

    if any(part.startswith(".") for part in Path(relative).parts):
        return None

    candidate = (root / relative).resolve()
    if root not in candidate.parents:
        return None
    if candidate.suffix.lower() not in SERVABLE_SUFFIXES:
        return None
    if not candidate.is_file():
        return None
    return candidate


def guess_content_type(path: Path) -> str:
    """Guess an HTTP content type, adding a UTF-8 charset for text payloads."""
    if path.suffix.lower() == ".webmanifest":
        mime_type: Optional[str] = "application/manifest+json"
    else:
        mime_type, _ = mimetypes.guess_type(str(path))
    if not mime_type:
        return "application/octet-stream"
    if mime_type.startswith("text/") or mime_type in _TEXT_TYPES:
        return f"{mime_type}; charset=utf-8"
    return mime_type


def load_static_asset(ui_root: Path, request_path: str) -> Optional[StaticAsset]:
    path = resolve_static_file(ui_root, request_path)
    if path is None:
        return None
    return StaticAsset(path=path, body=path.read_bytes(), content_type=guess_content_type(path))
