"""ASGI entrypoint for the SmartFood API."""

from smartfood.api.app import create_app
from smartfood.containers import build_container

app = create_app(build_container())
