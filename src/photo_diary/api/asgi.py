"""ASGI entrypoint for the photo diary API."""

from photo_diary.api.app import create_app
from photo_diary.containers import build_container

app = create_app(build_container())
