# File browser - navigation and remote synchronization.
# Created: 2026-10-12
#
# FileBrowser owns the current location and the ViewState. Navigation
# reloads the listing and then the breadcrumb; mutations refresh the
# current location when they succeed. Remote failures never raise out of
# the browser, they land in ViewState.error_message.

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from filedeck.client import ItemsClient
from filedeck.config import Settings, get_settings
from filedeck.errors import RemoteRequestError, describe_failure
from filedeck.models import BreadcrumbSegment, Entry, Location
from filedeck.state import Concern, ViewState
from filedeck.transfer import DirectorySaveTarget, SaveTarget, UploadSelection, transient_file

logger = logging.getLogger(__name__)

Listener = Callable[[ViewState], None]

MSG_LOAD_ITEMS = "Unable to load items."
MSG_LOAD_PATH = "Unable to load path."
MSG_UPLOAD = "Unable to upload file."
MSG_CREATE_FOLDER = "Unable to create folder."
MSG_DELETE = "Unable to delete item."
MSG_DOWNLOAD = "Unable to download file."


class FileBrowser:
    """Browse a remote file hierarchy.

    Usage:
        browser = FileBrowser()
        await browser.start()                 # list the root
        await browser.open_entry(folder)      # navigate into it
        browser.new_folder_name = "reports"
        await browser.create_folder()         # create + refresh
        print(browser.state.entries, browser.state.error_message)

    Responses are applied in the order they arrive. With
    ``Settings.discard_stale_responses`` enabled, listing and breadcrumb
    responses belonging to a superseded navigation are dropped instead.
    """

    def __init__(
        self,
        client: ItemsClient | None = None,
        *,
        settings: Settings | None = None,
        save_target: SaveTarget | None = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._client = client or ItemsClient(self._settings)
        self._save_target = save_target or DirectorySaveTarget(self._settings.download_dir)

        self._location: Location = None
        self._generation = 0
        self._listeners: list[Listener] = []

        self.state = ViewState()
        self.new_folder_name = ""
        self.upload_selection: UploadSelection | None = None

    @property
    def location(self) -> Location:
        """Folder currently browsed (None = root)."""
        return self._location

    # -- observation --

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener`` with the state after every change.

        Returns a callable that removes the listener.
        """
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self.state)
            except Exception:
                logger.exception("State listener %r failed", listener)

    # -- navigation --

    async def start(self) -> None:
        """Initial load of the root listing."""
        await self.navigate(None)

    async def navigate(self, location: Location) -> None:
        """Make ``location`` current and reload listing + breadcrumb."""
        location = location or None
        self._location = location
        self._generation += 1
        generation = self._generation

        self.state.begin_listing()
        self._notify()

        try:
            entries = await self._client.list_items(location)
        except RemoteRequestError as e:
            if not self._is_stale(generation, "listing"):
                self._fail(MSG_LOAD_ITEMS, e, Concern.LISTING)
            return

        if self._is_stale(generation, "listing"):
            return
        self.state.listing_loaded(entries)
        self._notify()

        await self._load_breadcrumb(location, generation)

    async def refresh(self) -> None:
        """Re-fetch the current location without moving."""
        await self.navigate(self._location)

    async def open_entry(self, entry: Entry) -> None:
        """Folders are entered, files are downloaded."""
        if entry.folder:
            await self.navigate(entry.id)
        else:
            await self.download(entry)

    async def open_breadcrumb(self, segment: BreadcrumbSegment) -> None:
        await self.navigate(None if segment.is_root else segment.id)

    async def _load_breadcrumb(self, location: Location, generation: int) -> None:
        if location is None:
            self.state.breadcrumb_loaded(())
            self._notify()
            return

        self.state.begin_breadcrumb()
        try:
            segments = await self._client.get_path(location)
        except RemoteRequestError as e:
            if not self._is_stale(generation, "path"):
                self._fail(MSG_LOAD_PATH, e, Concern.BREADCRUMB)
            return

        if self._is_stale(generation, "path"):
            return
        self.state.breadcrumb_loaded(segments)
        self._notify()

    def _is_stale(self, generation: int, what: str) -> bool:
        if not self._settings.discard_stale_responses or generation == self._generation:
            return False
        logger.debug(
            "Dropping stale %s response (generation %d, current %d)",
            what,
            generation,
            self._generation,
        )
        return True

    # -- mutations --

    def select_upload(self, source: UploadSelection | str | Path | None) -> None:
        """Pick the file for the next ``upload()``; None clears the pick."""
        if source is None or isinstance(source, UploadSelection):
            self.upload_selection = source
        else:
            self.upload_selection = UploadSelection.from_path(source)

    async def upload(self, selection: UploadSelection | None = None) -> bool:
        """Upload the selected file into the current location.

        Returns True when the upload succeeded. Without a selection nothing
        is sent and False is returned.
        """
        selection = selection or self.upload_selection
        if selection is None:
            logger.debug("Upload skipped: no file selected")
            return False

        self.state.begin_upload()
        self._notify()
        try:
            await self._client.upload(
                selection.filename,
                selection.content,
                parent_id=self._location,
                content_type=selection.content_type,
            )
        except RemoteRequestError as e:
            self._fail(MSG_UPLOAD, e, Concern.UPLOAD)
            return False

        logger.info("Uploaded %s (%d bytes)", selection.filename, selection.size)
        self.state.upload_finished()
        self.upload_selection = None
        self._notify()
        await self.refresh()
        return True

    async def create_folder(self, name: str | None = None) -> bool:
        """Create a folder in the current location.

        Uses ``new_folder_name`` unless ``name`` is given. Blank names are
        ignored (returns False, no request).
        """
        trimmed = (self.new_folder_name if name is None else name).strip()
        if not trimmed:
            logger.debug("Create folder skipped: blank name")
            return False

        self.state.clear_error()
        self._notify()
        try:
            await self._client.create_folder(trimmed, parent_id=self._location)
        except RemoteRequestError as e:
            self._fail(MSG_CREATE_FOLDER, e)
            return False

        logger.info("Created folder %s", trimmed)
        self.new_folder_name = ""
        await self.refresh()
        return True

    async def delete(self, target: Entry | str) -> bool:
        """Delete an entry (no confirmation) and refresh."""
        item_id = target.id if isinstance(target, Entry) else target

        self.state.clear_error()
        self._notify()
        try:
            await self._client.delete(item_id)
        except RemoteRequestError as e:
            self._fail(MSG_DELETE, e)
            return False

        logger.info("Deleted item %s", item_id)
        await self.refresh()
        return True

    # -- download --

    async def download(self, entry: Entry) -> Path | None:
        """Fetch a file and hand it to the save target.

        The content passes through a temporary file that is removed as soon
        as the save step returns or fails. Location and entries are not
        touched. Returns the saved path, or None on failure.
        """
        if entry.folder:
            logger.debug("Download skipped: %s is a folder", entry.id)
            return None

        self.state.clear_error()
        self._notify()
        try:
            content = await self._client.download(entry.id)
            with transient_file(content, suffix=Path(entry.name).suffix) as tmp:
                saved = self._save_target.save(tmp, entry.name)
        except (RemoteRequestError, OSError) as e:
            self._fail(MSG_DOWNLOAD, e)
            return None

        logger.info("Downloaded %s to %s", entry.name, saved)
        return saved

    # -- errors --

    def _fail(
        self,
        fallback: str,
        error: BaseException,
        concern: Concern | None = None,
    ) -> None:
        """Single place where failures reach the view state."""
        message = describe_failure(fallback, error)
        logger.warning("%s (%s)", message, error)
        self.state.fail(message, concern)
        self._notify()
