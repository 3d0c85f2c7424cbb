"""Key-value backends for small application records: JSON file, memory or Redis."""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Optional, Protocol

import structlog

from pdfdesk.config import Settings

logger = structlog.get_logger(__name__)


class KeyValueBackend(Protocol):
    """String values addressed by string keys."""

    def get_item(self, key: str) -> Optional[str]: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...


class MemoryBackend:
    """Process-local backend, used for tests and throwaway sessions."""

    def __init__(self) -> None:
        self._items: dict[str, str] = {}

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)


class JsonFileBackend:
    """All keys in one JSON object file.

    Every write replaces the whole file via a temp file in the same
    directory, so readers see either the old or the new content.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path)

    def _load(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            logger.warning("kv_file_unreadable", path=str(self.path), error=str(exc))
            return {}
        if not isinstance(data, dict):
            logger.warning("kv_file_unreadable", path=str(self.path), error="not a JSON object")
            return {}
        return {k: v for k, v in data.items() if isinstance(v, str)}

    def _write(self, items: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(items, fh, ensure_ascii=False, indent=2)
            os.replace(tmp, self.path)
        except BaseException:
            Path(tmp).unlink(missing_ok=True)
            raise

    def get_item(self, key: str) -> Optional[str]:
        return self._load().get(key)

    def set_item(self, key: str, value: str) -> None:
        items = self._load()
        items[key] = value
        self._write(items)

    def remove_item(self, key: str) -> None:
        items = self._load()
        if items.pop(key, None) is not None:
            self._write(items)


class RedisBackend:
    """Backend over a Redis server (a local instance, typically)."""

    def __init__(self, url: str, client=None):
        if client is None:
            import redis as redis_lib

            client = redis_lib.from_url(url, decode_responses=True)
        self._client = client
        self.url = url

    def ping(self) -> bool:
        return bool(self._client.ping())

    def get_item(self, key: str) -> Optional[str]:
        return self._client.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._client.set(key, value)

    def remove_item(self, key: str) -> None:
        self._client.delete(key)


def build_backend(settings: Settings) -> KeyValueBackend:
    """Create the backend selected by ``settings.signature_backend``.

    An unreachable Redis falls back to the JSON file backend.
    """
    if settings.signature_backend == "memory":
        return MemoryBackend()

    if settings.signature_backend == "redis":
        try:
            backend = RedisBackend(settings.redis_url)
            backend.ping()
            logger.debug("redis_connected", url=settings.redis_url)
            return backend
        except Exception as exc:
            logger.warning(
                "redis_unavailable",
                error=str(exc),
                msg="Falling back to the JSON file store",
            )

    return JsonFileBackend(settings.signature_file)
