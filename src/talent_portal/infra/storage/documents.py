from __future__ import annotations

import re
import secrets
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Tuple

from src.talent_portal.config import settings

_UNSAFE_CHARS = re.compile(r"[^a-zA-Z0-9.\-_ ]")


def safe_stored_name(original_name: str, *, now: Optional[datetime] = None) -> str:
    """Return a collision-resistant file name derived from ``original_name``.

    Format: ``<ISO timestamp>-<8 hex chars>-<sanitized name>`` where the
    sanitized part keeps at most 80 characters.
    """

    base = _UNSAFE_CHARS.sub("_", original_name)[:80]
    stamp = (now or datetime.now(timezone.utc)).strftime("%Y-%m-%dT%H-%M-%S-%fZ")
    return f"{stamp}-{secrets.token_hex(4)}-{base}"


class DocumentStorageBackend(ABC):
    @abstractmethod
    def save_file(self, content: bytes, *, category: str, original_name: str) -> Tuple[str, str]:
        """Persist bytes and return ``(stored_name, storage_path)``."""

    @abstractmethod
    def resolve(self, storage_path: str) -> Path:
        """Map a stored path reference to a filesystem path."""

    def exists(self, storage_path: str) -> bool:
        return self.resolve(storage_path).is_file()


class LocalDocumentStorageBackend(DocumentStorageBackend):
    """Stores documents below ``<upload_dir>/<category>/``."""

    def __init__(self, base: Optional[Path] = None) -> None:
        self._base: Path = base if base is not None else settings.upload_dir

    @property
    def base(self) -> Path:
        return self._base

    def save_file(self, content: bytes, *, category: str, original_name: str) -> Tuple[str, str]:
        directory = self._base / category
        directory.mkdir(parents=True, exist_ok=True)
        stored_name = safe_stored_name(original_name)
        dest_path = directory / stored_name
        dest_path.write_bytes(content)
        return stored_name, str(dest_path)

    def resolve(self, storage_path: str) -> Path:
        path = Path(storage_path)
        if path.is_absolute():
            return path
        return Path.cwd() / path


_backend: DocumentStorageBackend = LocalDocumentStorageBackend()


def get_document_storage() -> DocumentStorageBackend:
    """FastAPI dependency returning the active storage backend."""

    return _backend


def set_document_storage(backend: DocumentStorageBackend) -> DocumentStorageBackend:
    global _backend
    _backend = backend
    return backend
