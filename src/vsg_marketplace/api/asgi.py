"""ASGI entrypoint for the marketplace API."""

from vsg_marketplace.api.app import create_app
from vsg_marketplace.containers import build_container

app = create_app(build_container())
