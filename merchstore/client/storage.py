# merchstore/client/storage.py
"""Durable key/value storage for client state.

Values are strings, the same contract a browser's localStorage offers;
callers serialise to JSON themselves. Read or write problems surface as
``OSError`` and the stores built on top decide how to degrade.
"""
from __future__ import annotations

import json
import logging
import os
import tempfile

log = logging.getLogger(__name__)


class MemoryStorage:
    def __init__(self, initial: dict[str, str] | None = None):
        self._data = dict(initial or {})

    def get_item(self, key: str) -> str | None:
        return self._data.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove_item(self, key: str) -> None:
        self._data.pop(key, None)


class JsonFileStorage:
    """All keys live in one JSON object on disk, rewritten atomically on every change."""

    def __init__(self, path: str | os.PathLike):
        self.path = os.fspath(path)

    def _read_all(self) -> dict[str, str]:
        try:
            with open(self.path, encoding="utf-8") as fh:
                data = json.load(fh)
        except FileNotFoundError:
            return {}
        except ValueError as e:
            log.warning("storage file %s is corrupt, starting empty: %s", self.path, e)
            return {}
        if not isinstance(data, dict):
            log.warning("storage file %s holds %s, expected an object", self.path, type(data).__name__)
            return {}
        return {k: v for k, v in data.items() if isinstance(v, str)}

    def _write_all(self, data: dict[str, str]) -> None:
        directory = os.path.dirname(os.path.abspath(self.path))
        os.makedirs(directory, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=directory, prefix=".storage-", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(data, fh, ensure_ascii=False)
            os.replace(tmp, self.path)
        except BaseException:
            if os.path.exists(tmp):
                os.unlink(tmp)
            raise

    def get_item(self, key: str) -> str | None:
        return self._read_all().get(key)

    def set_item(self, key: str, value: str) -> None:
        data = self._read_all()
        data[key] = value
        self._write_all(data)

    def remove_item(self, key: str) -> None:
        data = self._read_all()
        if data.pop(key, None) is not None:
            self._write_all(data)
