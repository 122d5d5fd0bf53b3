"""ASGI entrypoint for the client gallery access API."""

from gallery_access.api.app import create_app
from gallery_access.containers import build_container

app = create_app(build_container())
