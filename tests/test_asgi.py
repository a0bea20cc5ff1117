"""Tests for the ASGI entrypoint."""

import importlib

from fastapi import FastAPI


def test_asgi_app_builds_from_environment(monkeypatch, tmp_path) -> None:
    monkeypatch.setenv("HAIR_DIARY_STORAGE_PATH", str(tmp_path / "diary.json"))

    module = importlib.import_module("hair_diary.api.asgi")

    assert isinstance(module.app, FastAPI)
    assert module.app.state.container.settings.storage_path == tmp_path / "diary.json"
