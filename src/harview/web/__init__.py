"""Web UI: FastAPI routes and HTML rendering."""

from harview.web.app import create_app
from harview.web.render import render_page

__all__ = ["create_app", "render_page"]
