"""ASGI entrypoint for the practice scheduler API."""

from practice_scheduler.api.app import create_app
from practice_scheduler.containers import build_container

app = create_app(build_container())
