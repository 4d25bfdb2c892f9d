# core/storage.py

"""
Key-value storage port used by the roster and the session gate.

Values are always strings. `InMemoryStorage` lives for the process only and stands
in for session storage; `JsonFileStorage` keeps every key in one JSON file on disk
and stands in for persistent local storage.
"""

from __future__ import annotations

import json
import os
from typing import Protocol


class KeyValueStorage(Protocol):
    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...


class InMemoryStorage:
    def __init__(self, initial: dict[str, str] | None = None):
        self._items: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._items.get(key)

    def set(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove(self, key: str) -> None:
        self._items.pop(key, None)

    def __contains__(self, key: str) -> bool:
        return key in self._items


class JsonFileStorage:
    """
    Stores string values under string keys in a single JSON object file.

    Notes:
        - The file is re-read on every access, so separate instances pointed at the same path agree.
        - A missing file reads as empty; an unreadable or non-object file raises `ValueError` on access.
        - Writes overwrite the whole file. `OSError` from the filesystem propagates to the caller.
    """

    def __init__(self, file_path: str):
        self._file_path = file_path

    @property
    def path(self) -> str:
        return self._file_path

    def _read_all(self) -> dict[str, str]:
        try:
            with open(self._file_path, "r", encoding="utf-8") as f:
                data = json.load(f)

        except FileNotFoundError:
            return {}

        except json.JSONDecodeError as e:
            raise ValueError(f"Storage file is not valid JSON: {self._file_path} - {e}")

        if not isinstance(data, dict):
            raise ValueError(f"Expected {self._file_path} to contain an object.")

        return data

    def _write_all(self, items: dict[str, str]) -> None:
        directory = os.path.dirname(self._file_path)

        if directory:
            os.makedirs(directory, exist_ok=True)

        with open(self._file_path, "w", encoding="utf-8") as f:
            json.dump(items, f, indent=2, sort_keys=True, ensure_ascii=False)

    def get(self, key: str) -> str | None:
        value = self._read_all().get(key)
        return None if value is None else str(value)

    def set(self, key: str, value: str) -> None:
        items = self._read_all()
        items[key] = value
        self._write_all(items)

    def remove(self, key: str) -> None:
        items = self._read_all()

        if items.pop(key, None) is not None:
            self._write_all(items)
