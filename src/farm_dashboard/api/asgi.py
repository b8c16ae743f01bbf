"""ASGI entrypoint for the farm dashboard API."""

from farm_dashboard.api.app import create_app
from farm_dashboard.config import Settings
from farm_dashboard.containers import build_container

settings = Settings()
app = create_app(build_container(settings))
