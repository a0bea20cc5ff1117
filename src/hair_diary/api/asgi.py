"""ASGI entrypoint for the hair diary API."""

from hair_diary.api.app import create_app
from hair_diary.containers import build_container

app = create_app(build_container())
