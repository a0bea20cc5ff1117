"""Diary application service tying the entry store to the logbook pages."""

from dataclasses import dataclass

from hair_diary.domain.entries import Entry, EntryDraft, Photo, PhotoSlot
from hair_diary.domain.pagination import Direction, ReloadPosition, visible_window
from hair_diary.services.entries import EntryStore
from hair_diary.services.pagination import PaginationController


@dataclass(frozen=True)
class Spread:
    """What the open logbook shows."""

    current_page: int
    total_pages: int
    turning: Direction | None
    left: Entry | None
    right: Entry | None
    is_empty: bool
    can_go_next: bool
    can_go_previous: bool


@dataclass
class DiaryService:
    """Owns the entry store and the pagination of the logbook.

    ``landing`` decides which spread is open after the diary is first read
    and after a new entry is submitted: the last one (newest entries) or the
    first one. Edits, photo uploads and deletes keep the current spread,
    clamped into range.
    """

    store: EntryStore
    pagination: PaginationController
    landing: ReloadPosition = ReloadPosition.LAST

    def __post_init__(self) -> None:
        self.pagination.reload(len(self.store.load()), self.landing)

    def entries(self) -> list[Entry]:
        """Return all entries, oldest first."""
        return self.store.load()

    def get(self, entry_id: str) -> Entry | None:
        """Return an entry by id."""
        return self.store.get(entry_id)

    def submit(
        self, draft: EntryDraft, photos: dict[PhotoSlot, Photo] | None = None
    ) -> Entry:
        """Create an entry from a form submission."""
        entry = draft.to_entry(self.store.new_id()).with_photos(photos or {})
        self.store.append(entry)
        position = (
            ReloadPosition.LAST
            if self.landing is ReloadPosition.LAST
            else ReloadPosition.KEEP
        )
        self._reload(position)
        return entry

    def edit(self, entry_id: str, draft: EntryDraft) -> Entry | None:
        """Replace an entry's fields, carrying over its photos."""
        replacement = draft.to_entry(entry_id)
        existing = self.store.get(entry_id)
        if existing is not None:
            replacement = replacement.with_photos(existing.photos())
        updated = self.store.update(entry_id, replacement)
        self._reload(ReloadPosition.KEEP)
        return updated

    def delete(self, entry_id: str) -> bool:
        """Delete an entry; return whether it existed."""
        removed = self.store.remove(entry_id)
        self._reload(ReloadPosition.KEEP)
        return removed

    def upload_photo(
        self, entry_id: str, slot: PhotoSlot, photo: Photo | None
    ) -> Entry | None:
        """Attach, replace or clear a photo on an entry."""
        return self.store.patch_photo(entry_id, slot, photo)

    def next_page(self) -> Spread:
        """Turn forward and return the spread."""
        self._reload(ReloadPosition.KEEP)
        self.pagination.next()
        return self.spread()

    def previous_page(self) -> Spread:
        """Turn backward and return the spread."""
        self._reload(ReloadPosition.KEEP)
        self.pagination.previous()
        return self.spread()

    def spread(self) -> Spread:
        """Return the currently open spread."""
        entries = self.store.load()
        self.pagination.reload(len(entries))
        state = self.pagination.current()
        left, right = visible_window(entries, state.current_page)
        return Spread(
            current_page=state.current_page,
            total_pages=state.total_pages,
            turning=state.transition.direction if state.transition else None,
            left=left,
            right=right,
            is_empty=not entries,
            can_go_next=state.can_go_next,
            can_go_previous=state.can_go_previous,
        )

    def _reload(self, position: ReloadPosition) -> None:
        self.pagination.reload(len(self.store.load()), position)
