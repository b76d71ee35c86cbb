"""ASGI entrypoint for the SnackTrack API."""

from snacktrack.api.app import create_app
from snacktrack.containers import build_container

app = create_app(build_container())
