"""Web layer — Flask app, URL → document resolution and static file serving."""

from mdserver.server.app import create_app, run_server
from mdserver.server.routing import resolve_document_path

__all__ = ["create_app", "resolve_document_path", "run_server"]
