"""Flask application: posts rendered through the document cache, plus static files."""

from __future__ import annotations

import logging
import os
from http import HTTPStatus
from pathlib import Path

from flask import Flask, abort, current_app, render_template, request, send_from_directory
from flask.typing import ResponseReturnValue
from jinja2 import TemplateError
from werkzeug.exceptions import HTTPException
from werkzeug.serving import make_server

from mdserver.cache.document import DocumentCache
from mdserver.config.schema import ServerConfig
from mdserver.errors.exceptions import DocumentError, DocumentNotFoundError
from mdserver.server.routing import resolve_document_path

logger = logging.getLogger(__name__)

_PACKAGE_TEMPLATES = Path(__file__).resolve().parent.parent / "templates"

CACHE_EXTENSION = "mdserver.cache"
CONFIG_EXTENSION = "mdserver.config"


def create_app(config: ServerConfig | None = None, cache: DocumentCache | None = None) -> Flask:
    """Build the app around one shared :class:`DocumentCache`.

    Directory settings are resolved against the current working directory
    once, here, so later ``chdir`` calls do not move them.
    """
    if config is None:
        config = ServerConfig()
    template_folder = config.templates_dir or _PACKAGE_TEMPLATES

    app = Flask(
        __name__,
        static_folder=None,
        template_folder=os.path.abspath(template_folder),
    )
    app.config["POSTS_DIR"] = os.path.abspath(config.posts_dir)
    app.config["STATIC_DIR"] = os.path.abspath(config.static_dir)
    app.config["UPLOAD_DIR"] = os.path.abspath(config.upload_dir)
    app.extensions[CONFIG_EXTENSION] = config
    if cache is None:
        cache = DocumentCache(coalesce=config.coalesce_renders)
    app.extensions[CACHE_EXTENSION] = cache

    app.add_url_rule("/", "index", show_post)
    app.add_url_rule("/<page>", "post", show_post)
    app.add_url_rule("/<page>/", "post_slash", show_post)

    # No directory listings
    app.add_url_rule("/static/", "static_root", _no_listing)
    app.add_url_rule("/uploads/", "uploads_root", _no_listing)
    app.add_url_rule("/static/<path:filename>", "static", serve_static)
    app.add_url_rule("/uploads/<path:filename>", "uploads", serve_upload)

    app.register_error_handler(HTTPException, _http_error)
    return app


def get_cache(app: Flask | None = None) -> DocumentCache:
    return (app or current_app).extensions[CACHE_EXTENSION]


def show_post(page: str = "") -> ResponseReturnValue:
    source = resolve_document_path(current_app.config["POSTS_DIR"], page)

    try:
        post = get_cache().get(source)
    except DocumentNotFoundError as e:
        logger.debug("%s", e)
        return error_page(e.http_status)
    except DocumentError as e:
        logger.error("Cannot load %s: %s", source, e.message)
        return error_page(e.http_status)

    try:
        return render_template("post.html", post=post)
    except TemplateError:
        logger.exception("Template failed for %s", source)
        return error_page(HTTPStatus.INTERNAL_SERVER_ERROR)


def serve_static(filename: str) -> ResponseReturnValue:
    return _serve_file(current_app.config["STATIC_DIR"], filename)


def serve_upload(filename: str) -> ResponseReturnValue:
    return _serve_file(current_app.config["UPLOAD_DIR"], filename)


def error_page(status: int) -> ResponseReturnValue:
    """Render the error template for ``status``, falling back to plain text."""
    status = HTTPStatus(status)
    logger.warning("error %d %s %s", status, request.remote_addr, request.path)
    try:
        body = render_template("error.html", error=status.phrase, status=int(status))
    except TemplateError:
        logger.exception("Error template failed")
        internal = HTTPStatus.INTERNAL_SERVER_ERROR
        return internal.phrase, internal, {"Content-Type": "text/plain; charset=utf-8"}
    return body, status


def run_server(app: Flask, config: ServerConfig) -> None:
    """Serve ``app`` with one thread per request until interrupted."""
    server = make_server(config.host, config.port, app, threaded=True)
    logger.info("Listening %s...", config.listen)
    try:
        server.serve_forever()
    finally:
        server.server_close()


def _serve_file(directory: str, filename: str) -> ResponseReturnValue:
    if filename.endswith("/"):
        abort(HTTPStatus.NOT_FOUND)
    return send_from_directory(directory, filename)


def _no_listing() -> ResponseReturnValue:
    abort(HTTPStatus.NOT_FOUND)


def _http_error(e: HTTPException) -> ResponseReturnValue:
    if e.code is None or e.code < 400:
        return e
    return error_page(e.code)
