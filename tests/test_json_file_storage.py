"""Tests for the JSON file storage adapter."""

import json
import logging

import pytest

from hair_diary.adapters.json_file_storage import JsonFileStorage
from hair_diary.services.entries import EntryStore, LoadErrorKind, StorageCorruptError
from tests.conftest import make_entry


def test_missing_file_reads_as_empty(tmp_path) -> None:
    storage = JsonFileStorage(tmp_path / "missing.json")

    assert storage.get_item("hairDiary") is None


def test_set_item_keeps_other_keys(tmp_path) -> None:
    path = tmp_path / "nested" / "storage.json"
    storage = JsonFileStorage(path)

    storage.set_item("theme", "dark")
    storage.set_item("hairDiary", "[]")

    assert json.loads(path.read_text()) == {"theme": "dark", "hairDiary": "[]"}
    assert list(path.parent.iterdir()) == [path]


def test_store_survives_reopen(tmp_path) -> None:
    path = tmp_path / "storage.json"
    EntryStore(JsonFileStorage(path)).append(make_entry("1"))

    reopened = EntryStore(JsonFileStorage(path))

    assert reopened.load() == [make_entry("1")]


def test_garbled_file_raises_on_read(tmp_path) -> None:
    path = tmp_path / "storage.json"
    path.write_text("{not json")

    with pytest.raises(StorageCorruptError):
        JsonFileStorage(path).get_item("hairDiary")


def test_non_string_value_raises_on_read(tmp_path) -> None:
    path = tmp_path / "storage.json"
    path.write_text(json.dumps({"hairDiary": [{"id": "1"}]}))

    with pytest.raises(StorageCorruptError):
        JsonFileStorage(path).get_item("hairDiary")


def test_garbled_file_is_reported_by_store(
    tmp_path,
    caplog: pytest.LogCaptureFixture,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    path = tmp_path / "storage.json"
    path.write_text("{not json")
    store = EntryStore(JsonFileStorage(path))
    monkeypatch.setattr(logging.getLogger("hair_diary"), "propagate", True)

    result = store.load_result()
    with caplog.at_level(logging.WARNING, logger="hair_diary"):
        entries = store.load()

    assert not result.ok
    assert result.error is not None
    assert result.error.kind == LoadErrorKind.CORRUPT_JSON
    assert entries == []
    assert "corrupt_json" in caplog.text


def test_write_over_garbled_file_keeps_a_copy(
    tmp_path,
    caplog: pytest.LogCaptureFixture,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    path = tmp_path / "storage.json"
    path.write_text('{"theme": "dark", "hairDiary": ')
    storage = JsonFileStorage(path)
    monkeypatch.setattr(logging.getLogger("hair_diary"), "propagate", True)

    with caplog.at_level(logging.WARNING, logger="hair_diary"):
        EntryStore(storage).append(make_entry("1"))

    assert storage.corrupt_path.read_text() == '{"theme": "dark", "hairDiary": '
    assert EntryStore(storage).load() == [make_entry("1")]
    assert "moved aside" in caplog.text
