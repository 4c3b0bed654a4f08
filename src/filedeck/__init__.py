"""filedeck - browse and manage a remote file hierarchy."""

from filedeck.browser import FileBrowser
from filedeck.client import ItemsClient
from filedeck.config import Settings, get_settings
from filedeck.errors import FiledeckError, RemoteRequestError, describe_failure
from filedeck.formatting import format_size
from filedeck.models import ROOT_ID, ROOT_SEGMENT, BreadcrumbSegment, Entry
from filedeck.state import Phase, ViewState
from filedeck.transfer import DirectorySaveTarget, UploadSelection

__all__ = [
    "ROOT_ID",
    "ROOT_SEGMENT",
    "BreadcrumbSegment",
    "DirectorySaveTarget",
    "Entry",
    "FileBrowser",
    "FiledeckError",
    "ItemsClient",
    "Phase",
    "RemoteRequestError",
    "Settings",
    "UploadSelection",
    "ViewState",
    "describe_failure",
    "format_size",
    "get_settings",
]
