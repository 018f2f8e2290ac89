"""ASGI entrypoint for the smoothie builder API."""

from smoothie_builder.api.app import create_app
from smoothie_builder.containers import build_container

app = create_app(build_container())
