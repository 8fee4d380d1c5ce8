"""ASGI entrypoint for the dashboard API."""

from kbju_dashboard.api.app import create_app
from kbju_dashboard.containers import build_container

app = create_app(build_container())
