"""Markdown → HTML rendering with Python-Markdown."""

from __future__ import annotations

from typing import Protocol

import markdown

# Tables, fenced code, footnotes, definition lists, header ids and smart
# punctuation.
DEFAULT_EXTENSIONS: list[str] = [
    "extra",
    "sane_lists",
    "smarty",
    "toc",
]


class Renderer(Protocol):
    """Pure function from Markdown text to HTML markup."""

    def __call__(self, text: str) -> str: ...


class MarkdownRenderer:
    """Renders Markdown to XHTML-style markup.

    A new ``markdown.Markdown`` instance is built per call; instances carry
    per-conversion state and must not be shared between threads.
    """

    def __init__(
        self,
        extensions: list[str] | None = None,
        extension_configs: dict[str, dict] | None = None,
    ) -> None:
        self._extensions = list(DEFAULT_EXTENSIONS if extensions is None else extensions)
        self._extension_configs = extension_configs or {}

    @property
    def extensions(self) -> list[str]:
        return list(self._extensions)

    def __call__(self, text: str) -> str:
        md = markdown.Markdown(
            extensions=self._extensions,
            extension_configs=self._extension_configs,
            output_format="xhtml",
        )
        return md.convert(text)


def split_title(text: str) -> tuple[str, str]:
    """Split source text into its first line (the title) and the rest (the body).

    A source without a newline is all title and an empty body.
    """
    title, _, body = text.partition("\n")
    return title, body
