"""
Key-value persistence used by the session and history stores.
"""
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Raised when a stored value exists but cannot be decoded."""


class KeyValueStore:
    """Interface for reading and writing whole values by key."""

    def get(self, key: str, default: Any = None) -> Any:
        raise NotImplementedError

    def set(self, key: str, value: Any) -> None:
        raise NotImplementedError


class JsonFileStore(KeyValueStore):
    """Stores each key as ``<key>.json`` inside a directory."""

    def __init__(self, directory: Optional[Path] = None):
        if directory is None:
            from merit_fund.config.paths import get_cached_data_dir
            directory = get_cached_data_dir()

        self.directory = Path(directory)
        self.directory.mkdir(parents=True, exist_ok=True)

    def path_for(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def get(self, key: str, default: Any = None) -> Any:
        """Load a value, returning ``default`` when nothing has been stored yet."""
        path = self.path_for(key)
        if not path.exists():
            return default

        try:
            with open(path, 'r', encoding='utf-8') as f:
                return json.load(f)
        except (OSError, ValueError) as e:
            raise StorageError(f"Could not decode {path}: {str(e)}") from e

    def set(self, key: str, value: Any) -> None:
        """Write a value; the file is replaced atomically."""
        path = self.path_for(key)
        fd, tmp_path = tempfile.mkstemp(dir=self.directory, prefix=f".{key}.", suffix='.tmp')
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                json.dump(value, f, indent=2, ensure_ascii=False)
            os.replace(tmp_path, path)
        except Exception:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise
        logger.debug(f"Saved {key} to {path}")


class MemoryStore(KeyValueStore):
    """In-memory store; values round-trip through JSON like the file store."""

    def __init__(self, initial: Optional[Dict[str, Any]] = None):
        self._data: Dict[str, str] = {}
        for key, value in (initial or {}).items():
            self.set(key, value)

    def get(self, key: str, default: Any = None) -> Any:
        if key not in self._data:
            return default
        try:
            return json.loads(self._data[key])
        except ValueError as e:
            raise StorageError(f"Could not decode {key}: {str(e)}") from e

    def set(self, key: str, value: Any) -> None:
        self._data[key] = json.dumps(value, ensure_ascii=False)

    def set_raw(self, key: str, raw: str) -> None:
        """Store undecoded text under a key."""
        self._data[key] = raw
