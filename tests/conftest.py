"""Shared test fixtures."""

from dataclasses import dataclass, field

import pytest

from hair_diary.config import Settings
from hair_diary.containers import AppContainer, build_container
from hair_diary.domain.entries import Entry, EntryDraft, Formula
from hair_diary.domain.pagination import ReloadPosition, Timing
from hair_diary.services.diary import DiaryService
from hair_diary.services.entries import EntryStore, KeyValueStorage
from hair_diary.services.pagination import PaginationController


@dataclass
class InMemoryStorage(KeyValueStorage):
    """In-memory key-value storage for tests."""

    items: dict[str, str] = field(default_factory=dict)
    writes: int = 0

    def get_item(self, key: str) -> str | None:
        return self.items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.items[key] = value
        self.writes += 1


@dataclass
class FakeClock:
    """Manually advanced clock."""

    now: float = 100.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def make_draft(name: str = "Copper glow", **overrides: object) -> EntryDraft:
    values: dict[str, object] = {
        "date": "2025-03-01",
        "name": name,
        "formulas": (Formula(shade="7.4", parts=1, color=30.0),),
        "developer": 45.0,
        "processing_time": 35,
        "notes": "",
    }
    values.update(overrides)
    return EntryDraft(**values)  # type: ignore[arg-type]


def make_entry(entry_id: str, name: str | None = None, **overrides: object) -> Entry:
    return make_draft(name or f"Entry {entry_id}", **overrides).to_entry(entry_id)


TIMING = Timing(flip_delay=0.3, settle_delay=0.3)


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(storage_path=tmp_path / "diary.json")


@pytest.fixture
def storage() -> InMemoryStorage:
    return InMemoryStorage()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store(storage: InMemoryStorage) -> EntryStore:
    return EntryStore(storage, wall_clock=lambda: 1_700_000_000.0)


@pytest.fixture
def pagination(clock: FakeClock) -> PaginationController:
    return PaginationController(timing=TIMING, clock=clock)


@pytest.fixture
def diary_service(
    store: EntryStore, pagination: PaginationController
) -> DiaryService:
    return DiaryService(store=store, pagination=pagination, landing=ReloadPosition.LAST)


@pytest.fixture
def container(settings: Settings, storage: InMemoryStorage) -> AppContainer:
    return build_container(settings, storage=storage)
