"""Presentation state for the file browser.

Design notes:
- Each remote concern (listing, breadcrumb, upload) has its own Phase
  instead of a loose boolean, so "loading" and "failed" cannot both hold
  for the same concern.
- There is a single error slot shared by every operation; a newer failure
  replaces the older message.
- Entries and breadcrumb are tuples and are replaced wholesale, never
  edited in place.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum

from filedeck.models import BreadcrumbSegment, Entry, root_breadcrumb


class Phase(str, Enum):
    """Lifecycle of one remote concern."""

    IDLE = "idle"  # Nothing requested yet
    LOADING = "loading"  # Request in flight
    READY = "ready"  # Last request succeeded
    ERROR = "error"  # Last request failed (see error_message)


class Concern(str, Enum):
    LISTING = "listing"
    BREADCRUMB = "breadcrumb"
    UPLOAD = "upload"


@dataclass
class ViewState:
    """What the renderer needs to draw the browser.

    Attributes:
        entries: Entries of the current location, as last listed
        breadcrumb: Path from the root to the current location
        listing: Phase of the listing fetch
        breadcrumb_phase: Phase of the path resolution
        upload: Phase of the current/last upload
        error_message: Text of the most recent failure ("" when none)
    """

    entries: tuple[Entry, ...] = ()
    breadcrumb: tuple[BreadcrumbSegment, ...] = field(default_factory=root_breadcrumb)
    listing: Phase = Phase.IDLE
    breadcrumb_phase: Phase = Phase.IDLE
    upload: Phase = Phase.IDLE
    error_message: str = ""

    @property
    def loading(self) -> bool:
        return self.listing is Phase.LOADING

    @property
    def uploading(self) -> bool:
        return self.upload is Phase.LOADING

    @property
    def folders(self) -> tuple[Entry, ...]:
        return tuple(e for e in self.entries if e.folder)

    @property
    def files(self) -> tuple[Entry, ...]:
        return tuple(e for e in self.entries if not e.folder)

    # -- transitions --

    def clear_error(self) -> None:
        self.error_message = ""

    def begin_listing(self) -> None:
        self.error_message = ""
        self.listing = Phase.LOADING
        # a new listing supersedes any path fetch still in flight
        if self.breadcrumb_phase is Phase.LOADING:
            self.breadcrumb_phase = Phase.IDLE

    def listing_loaded(self, entries: Iterable[Entry]) -> None:
        self.entries = tuple(entries)
        self.listing = Phase.READY

    def begin_breadcrumb(self) -> None:
        self.breadcrumb_phase = Phase.LOADING

    def breadcrumb_loaded(self, segments: Iterable[BreadcrumbSegment]) -> None:
        self.breadcrumb = tuple(segments) or root_breadcrumb()
        self.breadcrumb_phase = Phase.READY

    def begin_upload(self) -> None:
        self.error_message = ""
        self.upload = Phase.LOADING

    def upload_finished(self) -> None:
        self.upload = Phase.READY

    def fail(self, message: str, concern: Concern | None = None) -> None:
        """Record a failure.

        Any failure ends a pending listing, and the failing concern (if any)
        moves to ERROR. Entries and breadcrumb are left as they were.
        """
        self.error_message = message
        if self.listing is Phase.LOADING:
            self.listing = Phase.ERROR
        if concern is Concern.LISTING:
            self.listing = Phase.ERROR
        elif concern is Concern.BREADCRUMB:
            self.breadcrumb_phase = Phase.ERROR
        elif concern is Concern.UPLOAD:
            self.upload = Phase.ERROR
