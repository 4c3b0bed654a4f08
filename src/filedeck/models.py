# Item models - wire shapes returned by the items API.
# Created: 2026-10-12

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

ROOT_ID = "root"
"""Breadcrumb id that stands for the top of the hierarchy."""

Location = str | None
"""Folder currently browsed; None is the root."""


class _WireModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )


class Entry(_WireModel):
    """A file or folder node."""

    id: str
    parent_id: str | None = None
    name: str
    folder: bool = False
    creation: str | None = None
    modification: str | None = None

    # Files only
    file_path: str | None = None
    mime_type: str | None = None
    size: int | None = None


class BreadcrumbSegment(_WireModel):
    """One step of the path from the root to the current location."""

    id: str
    name: str
    folder: bool = True

    @property
    def is_root(self) -> bool:
        return self.id == ROOT_ID


ROOT_SEGMENT = BreadcrumbSegment(id=ROOT_ID, name="Root", folder=True)


def root_breadcrumb() -> tuple[BreadcrumbSegment, ...]:
    return (ROOT_SEGMENT,)


class ItemsResponse(_WireModel):
    """Body of ``GET /items``."""

    items: list[Entry] | None = None


class PathResponse(_WireModel):
    """Body of ``GET /items/{id}/path``."""

    items: list[BreadcrumbSegment] | None = None
