"""ASGI entrypoint for the campus dining API."""

from campus_dining.api.app import create_app
from campus_dining.containers import build_container

app = create_app(build_container())
