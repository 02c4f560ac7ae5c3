"""Shared Pydantic models for mdserver."""

from __future__ import annotations

from enum import StrEnum
from http import HTTPStatus

from pydantic import BaseModel, ConfigDict

# ── Enums ──


class FailureKind(StrEnum):
    NOT_FOUND = "not_found"
    INTERNAL = "internal"

    @property
    def http_status(self) -> int:
        if self is FailureKind.NOT_FOUND:
            return HTTPStatus.NOT_FOUND
        return HTTPStatus.INTERNAL_SERVER_ERROR


# ── Documents ──


class Document(BaseModel):
    """A rendered source file: title line, HTML body and the source's mtime stamp.

    ``body`` is trusted markup and is injected into pages verbatim.
    ``source_version`` is the source's ``st_mtime_ns`` at render time and is
    only meaningful when compared against the same file.
    """

    model_config = ConfigDict(frozen=True)

    title: str
    body: str
    source_version: int
