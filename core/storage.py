# core/storage.py

"""
Durable key-value stores used by the persistence gateway.

A store holds text values under string keys, in the manner of browser local storage:
- `get_item()` returns None for a missing key
- `set_item()` overwrites, and raises `StorageQuotaExceededError` when the value would exceed the store's quota
- `remove_item()` is a no-op for a missing key

`MemoryStore` keeps values in a dictionary; `DirectoryStore` keeps one `<key>.json` file per key.
"""

from __future__ import annotations

import logging
import os

logger = logging.getLogger(__name__)


class StorageQuotaExceededError(Exception):
    """
    Raised when a write would push a store past its size limit.
    """

    def __init__(self, key: str, size: int, quota: int):
        super().__init__(
            f"Writing {size} characters to '{key}' exceeds the storage quota of {quota} characters."
        )
        self.key = key
        self.size = size
        self.quota = quota


class KeyValueStore:
    """
    Base class for text key-value stores with an optional quota.

    Args:
        quota (int | None): Maximum total number of characters held across all keys, or None for unlimited.
    """

    def __init__(self, quota: int | None = None):
        self._quota = quota

    @property
    def quota(self) -> int | None:
        return self._quota

    def get_item(self, key: str) -> str | None:
        raise NotImplementedError

    def set_item(self, key: str, value: str) -> None:
        raise NotImplementedError

    def remove_item(self, key: str) -> None:
        raise NotImplementedError

    def keys(self) -> list[str]:
        raise NotImplementedError

    def _check_quota(self, key: str, value: str) -> None:
        if self._quota is None:
            return

        others = sum(
            len(self.get_item(k) or "") for k in self.keys() if k != key
        )
        size = others + len(value)

        if size > self._quota:
            raise StorageQuotaExceededError(key, size, self._quota)


class MemoryStore(KeyValueStore):

    def __init__(self, quota: int | None = None):
        super().__init__(quota)
        self._items: dict[str, str] = {}

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._check_quota(key, value)
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._items)


class DirectoryStore(KeyValueStore):
    """
    Stores each key as `<dir_path>/<key>.json`.

    Notes:
        - The caller is responsible for ensuring that `dir_path` exists and is writable.
        - Write faults other than the quota surface as `OSError`.
    """

    _suffix = ".json"

    def __init__(self, dir_path: str, quota: int | None = None):
        super().__init__(quota)
        self._dir_path = dir_path

    @property
    def dir_path(self) -> str:
        return self._dir_path

    def _path_for(self, key: str) -> str:
        return os.path.join(self._dir_path, f"{key}{self._suffix}")

    def get_item(self, key: str) -> str | None:
        try:
            with open(self._path_for(key), "r", encoding="utf-8") as f:
                return f.read()

        except FileNotFoundError:
            return None

    def set_item(self, key: str, value: str) -> None:
        self._check_quota(key, value)

        with open(self._path_for(key), "w", encoding="utf-8") as f:
            f.write(value)

        logger.debug("Wrote %d characters to %s", len(value), self._path_for(key))

    def remove_item(self, key: str) -> None:
        try:
            os.remove(self._path_for(key))

        except FileNotFoundError:
            pass

    def keys(self) -> list[str]:
        if not os.path.isdir(self._dir_path):
            return []

        return [
            filename[: -len(self._suffix)]
            for filename in os.listdir(self._dir_path)
            if filename.endswith(self._suffix)
        ]
