"""Domain models for diary entries."""

from collections.abc import Mapping
from dataclasses import dataclass, replace
from enum import StrEnum


class PhotoSlot(StrEnum):
    """Photo attachment slots on an entry."""

    BEFORE = "before"
    AFTER = "after"
    LEGACY = "legacy"


@dataclass(frozen=True)
class Formula:
    """One color-mixing line of an entry."""

    shade: str
    parts: int
    color: float


@dataclass(frozen=True)
class Photo:
    """Opaque image blob kept in memory for the session."""

    content: bytes
    filename: str
    content_type: str = "application/octet-stream"


@dataclass(frozen=True)
class Entry:
    """Represents one recorded hair dye session."""

    id: str
    date: str
    name: str
    formulas: tuple[Formula, ...]
    developer: float | None
    processing_time: int
    notes: str = ""
    before_photo: Photo | None = None
    after_photo: Photo | None = None
    photo: Photo | None = None

    def __post_init__(self) -> None:
        if not self.formulas:
            raise ValueError("An entry needs at least one formula")

    def photo_in(self, slot: PhotoSlot) -> Photo | None:
        """Return the photo held in a slot."""
        return getattr(self, _SLOT_FIELDS[slot])

    def photos(self) -> dict[PhotoSlot, Photo]:
        """Return the filled photo slots."""
        return {
            slot: photo
            for slot in PhotoSlot
            if (photo := self.photo_in(slot)) is not None
        }

    def with_photos(self, photos: Mapping[PhotoSlot, Photo | None]) -> "Entry":
        """Return a copy with the given slots replaced."""
        return replace(
            self, **{_SLOT_FIELDS[slot]: photo for slot, photo in photos.items()}
        )


@dataclass(frozen=True)
class EntryDraft:
    """Entry fields as submitted by the form, before an id is assigned."""

    date: str
    name: str
    formulas: tuple[Formula, ...]
    developer: float | None
    processing_time: int
    notes: str = ""

    def to_entry(self, entry_id: str) -> Entry:
        """Build the entry this draft describes under the given id."""
        return Entry(
            id=entry_id,
            date=self.date,
            name=self.name,
            formulas=self.formulas,
            developer=self.developer,
            processing_time=self.processing_time,
            notes=self.notes,
        )


_SLOT_FIELDS = {
    PhotoSlot.BEFORE: "before_photo",
    PhotoSlot.AFTER: "after_photo",
    PhotoSlot.LEGACY: "photo",
}
