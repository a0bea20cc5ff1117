"""Key-value storage kept in a local JSON file."""

import json
import logging
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path

from hair_diary.services.entries import KeyValueStorage, StorageCorruptError

_logger = logging.getLogger(__name__)


@dataclass
class JsonFileStorage(KeyValueStorage):
    """Stores every key as a string member of one JSON object on disk.

    An unreadable file is reported as ``StorageCorruptError`` on read. The
    next write moves it aside to ``<name>.corrupt`` before starting afresh.
    """

    path: Path

    def get_item(self, key: str) -> str | None:
        """Return the stored string for a key."""
        value = self._read().get(key)
        if value is None or isinstance(value, str):
            return value
        kind = type(value).__name__
        raise StorageCorruptError(f"{self.path}: {key!r} holds {kind}, not a string")

    def set_item(self, key: str, value: str) -> None:
        """Store a string under a key, replacing the file atomically."""
        try:
            items = self._read()
        except StorageCorruptError as exc:
            items = {}
            self._quarantine(exc)
        items[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(items, handle)
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    @property
    def corrupt_path(self) -> Path:
        return self.path.with_name(f"{self.path.name}.corrupt")

    def _read(self) -> dict[str, object]:
        try:
            content = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        try:
            items = json.loads(content)
        except json.JSONDecodeError as exc:
            raise StorageCorruptError(f"{self.path}: {exc}") from exc
        if not isinstance(items, dict):
            raise StorageCorruptError(
                f"{self.path}: expected an object, got {type(items).__name__}"
            )
        return items

    def _quarantine(self, error: StorageCorruptError) -> None:
        os.replace(self.path, self.corrupt_path)
        _logger.warning(
            "Unreadable storage file moved aside: path=%s moved_to=%s error=%s",
            self.path,
            self.corrupt_path,
            error,
        )
