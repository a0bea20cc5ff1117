"""Entry store backed by a single key of a key-value storage."""

import json
import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from enum import StrEnum
from typing import Protocol

from pydantic import ValidationError

from hair_diary.domain.entries import Entry, Photo, PhotoSlot
from hair_diary.storage_models import SCHEMA_VERSION, StoredDiary, StoredEntry

STORAGE_KEY = "hairDiary"

_logger = logging.getLogger(__name__)


class StorageCorruptError(Exception):
    """Raised by a storage adapter whose backing data cannot be read."""


class KeyValueStorage(Protocol):
    """Synchronous string key-value storage."""

    def get_item(self, key: str) -> str | None:
        """Return the value stored under a key, if any.

        Raises ``StorageCorruptError`` when the backing data is unreadable.
        """

    def set_item(self, key: str, value: str) -> None:
        """Store a value under a key."""


class LoadErrorKind(StrEnum):
    """Reasons the persisted blob could not be read."""

    CORRUPT_JSON = "corrupt_json"
    INVALID_SCHEMA = "invalid_schema"
    UNSUPPORTED_VERSION = "unsupported_version"


@dataclass(frozen=True)
class LoadError:
    """Describes why the persisted blob was discarded."""

    kind: LoadErrorKind
    detail: str


@dataclass(frozen=True)
class LoadResult:
    """Entries read from storage plus the error that emptied them, if any."""

    entries: list[Entry]
    error: LoadError | None = None

    @property
    def ok(self) -> bool:
        """Whether the blob was read without error."""
        return self.error is None


@dataclass
class EntryStore:
    """Oldest-first entry collection persisted as one blob.

    Every mutation reads the whole collection, changes it in memory and
    writes it back. Photos are kept in memory for the lifetime of the store
    and are re-attached to entries on every read.
    """

    storage: KeyValueStorage
    key: str = STORAGE_KEY
    wall_clock: Callable[[], float] = time.time
    _photos: dict[str, dict[PhotoSlot, Photo]] = field(
        default_factory=dict, init=False, repr=False
    )

    def load_result(self) -> LoadResult:
        """Read the collection, reporting why it was discarded if unreadable."""
        try:
            raw = self.storage.get_item(self.key)
        except StorageCorruptError as exc:
            return _failed(LoadErrorKind.CORRUPT_JSON, str(exc))
        if raw is None:
            return LoadResult(entries=[])
        try:
            payload = json.loads(raw)
        except json.JSONDecodeError as exc:
            return _failed(LoadErrorKind.CORRUPT_JSON, str(exc))

        if isinstance(payload, list):
            payload = {"version": SCHEMA_VERSION, "entries": payload}
        if not isinstance(payload, dict):
            return _failed(
                LoadErrorKind.INVALID_SCHEMA,
                f"expected an object or array, got {type(payload).__name__}",
            )
        version = payload.get("version", SCHEMA_VERSION)
        if version != SCHEMA_VERSION:
            return _failed(
                LoadErrorKind.UNSUPPORTED_VERSION, f"schema version {version!r}"
            )
        try:
            diary = StoredDiary.model_validate(payload)
        except ValidationError as exc:
            return _failed(LoadErrorKind.INVALID_SCHEMA, str(exc))

        return LoadResult(
            entries=[self._with_photos(stored.to_entry()) for stored in diary.entries]
        )

    def load(self) -> list[Entry]:
        """Read the collection, falling back to an empty one on any error."""
        result = self.load_result()
        if result.error is not None:
            _logger.warning(
                "Discarding unreadable diary: key=%s kind=%s detail=%s",
                self.key,
                result.error.kind,
                result.error.detail,
            )
        return result.entries

    def get(self, entry_id: str) -> Entry | None:
        """Return an entry by id, if present."""
        for entry in self.load():
            if entry.id == entry_id:
                return entry
        return None

    def new_id(self) -> str:
        """Mint an id from the wall clock in milliseconds, unique in the store."""
        taken = {entry.id for entry in self.load()}
        candidate = int(self.wall_clock() * 1000)
        while str(candidate) in taken:
            candidate += 1
        return str(candidate)

    def append(self, entry: Entry) -> Entry:
        """Add an entry at the end of the collection."""
        entries = self.load()
        if any(existing.id == entry.id for existing in entries):
            raise ValueError(f"Duplicate entry id: {entry.id}")
        entries.append(entry)
        self._photos[entry.id] = entry.photos()
        self._write(entries)
        _logger.info("Diary entry appended: id=%s count=%s", entry.id, len(entries))
        return entry

    def update(self, entry_id: str, new_entry: Entry) -> Entry | None:
        """Replace the entry with ``entry_id`` wholesale, keeping its id."""
        entries = self.load()
        updated: Entry | None = None
        for index, existing in enumerate(entries):
            if existing.id == entry_id:
                updated = replace(new_entry, id=entry_id)
                entries[index] = updated
                self._photos[entry_id] = updated.photos()
                break
        self._write(entries)
        _logger.info("Diary entry updated: id=%s found=%s", entry_id, bool(updated))
        return updated

    def remove(self, entry_id: str) -> bool:
        """Drop the entry with ``entry_id``; return whether it existed."""
        entries = self.load()
        remaining = [entry for entry in entries if entry.id != entry_id]
        removed = len(remaining) != len(entries)
        self._photos.pop(entry_id, None)
        self._write(remaining)
        _logger.info("Diary entry removed: id=%s found=%s", entry_id, removed)
        return removed

    def patch_photo(
        self, entry_id: str, slot: PhotoSlot, photo: Photo | None
    ) -> Entry | None:
        """Replace one photo slot of an entry."""
        entries = self.load()
        patched: Entry | None = None
        for index, existing in enumerate(entries):
            if existing.id == entry_id:
                patched = existing.with_photos({slot: photo})
                entries[index] = patched
                self._photos[entry_id] = patched.photos()
                break
        self._write(entries)
        _logger.info(
            "Diary photo patched: id=%s slot=%s found=%s",
            entry_id,
            slot,
            bool(patched),
        )
        return patched

    def _with_photos(self, entry: Entry) -> Entry:
        photos = self._photos.get(entry.id)
        return entry.with_photos(photos) if photos else entry

    def _write(self, entries: list[Entry]) -> None:
        diary = StoredDiary(
            entries=[StoredEntry.from_entry(entry) for entry in entries]
        )
        self.storage.set_item(self.key, diary.model_dump_json(by_alias=True))


def _failed(kind: LoadErrorKind, detail: str) -> LoadResult:
    return LoadResult(entries=[], error=LoadError(kind=kind, detail=detail))
