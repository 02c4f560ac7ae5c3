"""Markdown rendering — the pure text-to-markup function injected into the cache."""

from mdserver.render.engine import (
    DEFAULT_EXTENSIONS,
    MarkdownRenderer,
    Renderer,
    split_title,
)

__all__ = ["DEFAULT_EXTENSIONS", "MarkdownRenderer", "Renderer", "split_title"]
