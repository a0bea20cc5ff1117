"""Dependency container wiring for the application."""

from dataclasses import dataclass

from hair_diary.adapters.json_file_storage import JsonFileStorage
from hair_diary.config import Settings
from hair_diary.domain.pagination import ReloadPosition, Timing
from hair_diary.services.diary import DiaryService
from hair_diary.services.entries import EntryStore, KeyValueStorage
from hair_diary.services.pagination import PaginationController


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    storage: KeyValueStorage
    diary_service: DiaryService


def build_container(
    settings: Settings | None = None, storage: KeyValueStorage | None = None
) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    resolved_storage = storage
    if resolved_storage is None:
        resolved_storage = JsonFileStorage(resolved_settings.storage_path)
    store = EntryStore(resolved_storage, key=resolved_settings.storage_key)
    pagination = PaginationController(
        timing=Timing(
            flip_delay=resolved_settings.flip_delay_seconds,
            settle_delay=resolved_settings.settle_delay_seconds,
        )
    )
    diary_service = DiaryService(
        store=store,
        pagination=pagination,
        landing=ReloadPosition(resolved_settings.landing_page),
    )
    return AppContainer(
        settings=resolved_settings,
        storage=resolved_storage,
        diary_service=diary_service,
    )
