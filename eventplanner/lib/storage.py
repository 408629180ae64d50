"""Key-value storage backends used to persist planner state.

Values are opaque strings; callers decide how to serialize them.
"""

from __future__ import annotations

import json
import logging
import os
from datetime import datetime
from typing import Protocol


class KeyValueStorage(Protocol):
    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...


class MemoryStorage:
    """Dict-backed storage. Nothing survives the process."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)


class StorageCorruptError(ValueError):
    """The storage file exists but can't be parsed (strict FileStorage only)."""


class FileStorage:
    """Stores all keys in a single JSON object on disk.

    The whole file is rewritten on every `set`. A file that can't be parsed is
    renamed to `<path>.failed-<timestamp>` and storage starts over empty, unless
    `strict` is set, in which case StorageCorruptError is raised and the file is
    left where it is.
    """

    def __init__(self, file_path: str, strict: bool = False) -> None:
        self.file_path = file_path
        self.strict = strict
        logging.debug(f"Using storage file: {self.file_path}")

    def _read_all(self) -> dict[str, str]:
        if not os.path.exists(self.file_path):
            return {}
        try:
            with open(self.file_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            return self._corrupt(f"Failed to read storage file {self.file_path}: {e}")
        if not isinstance(data, dict):
            return self._corrupt(f"Storage file {self.file_path} does not hold a JSON object")
        return data

    def _corrupt(self, message: str) -> dict[str, str]:
        if self.strict:
            raise StorageCorruptError(message)
        logging.error(message)
        self._quarantine()
        return {}

    def _quarantine(self) -> None:
        timestamp = datetime.now().strftime("%Y-%m-%d-%H%M%S")
        failed_path = f"{self.file_path}.failed-{timestamp}"
        logging.warning(f"Storage file is corrupt, renaming to {failed_path}")
        try:
            os.replace(self.file_path, failed_path)
        except OSError as e:
            logging.error(f"Failed to rename corrupt storage file: {e}")

    def _write_all(self, data: dict[str, str]) -> None:
        directory = os.path.dirname(self.file_path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        try:
            with open(self.file_path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
        except OSError as e:
            logging.error(f"Failed to write storage file {self.file_path}: {e}")
            raise

    def get(self, key: str) -> str | None:
        value = self._read_all().get(key)
        if value is not None and not isinstance(value, str):
            # Hand-edited files may hold raw JSON instead of an encoded string
            return json.dumps(value)
        return value

    def set(self, key: str, value: str) -> None:
        data = self._read_all()
        data[key] = value
        self._write_all(data)

    def remove(self, key: str) -> None:
        data = self._read_all()
        if key in data:
            del data[key]
            self._write_all(data)
