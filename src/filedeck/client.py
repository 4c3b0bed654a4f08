# Items API client - async HTTP client for the remote file hierarchy.
# Created: 2026-10-12

from __future__ import annotations

import logging
from urllib.parse import quote
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel

from filedeck.config import Settings, get_settings
from filedeck.errors import RemoteRequestError, error_detail
from filedeck.models import BreadcrumbSegment, Entry, ItemsResponse, PathResponse

logger = logging.getLogger(__name__)

_ModelT = TypeVar("_ModelT", bound=BaseModel)


class ItemsClient:
    """HTTP client for the ``/items`` API.

    Every method raises ``RemoteRequestError`` on a non-2xx status, a
    transport failure or an unreadable listing body. No retries.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._base_url = self._settings.api_base
        self._transport = transport

    @property
    def base_url(self) -> str:
        return self._base_url

    async def _request(
        self,
        method: str,
        path: str,
        *,
        timeout: float | None = None,
        **kwargs: Any,
    ) -> httpx.Response:
        """Send one request and return the response, raising on failure."""
        url = f"{self._base_url}{path}"
        request_timeout = timeout or self._settings.request_timeout
        logger.debug("%s %s", method, url)

        try:
            async with httpx.AsyncClient(
                timeout=request_timeout, transport=self._transport
            ) as client:
                resp = await client.request(method, url, **kwargs)
        except httpx.TimeoutException as e:
            logger.warning("%s %s timed out after %ss", method, path, request_timeout)
            raise RemoteRequestError(f"Request timed out: {method} {path}") from e
        except httpx.RequestError as e:
            logger.warning("%s %s failed: %s", method, path, e)
            raise RemoteRequestError(f"Request error: {e}") from e

        if resp.status_code >= 400:
            body = _json_or_none(resp)
            logger.warning(
                "%s %s returned %d %s",
                method,
                path,
                resp.status_code,
                error_detail(body),
            )
            raise RemoteRequestError(
                f"{method} {path} failed with status {resp.status_code}",
                status_code=resp.status_code,
                body=body,
            )

        return resp

    async def list_items(self, parent_id: str | None = None) -> list[Entry]:
        """List the entries whose parent is ``parent_id`` (None = root)."""
        params = {"parentId": parent_id} if parent_id else None
        resp = await self._request("GET", "/items", params=params)
        data = _parse(resp, ItemsResponse)
        return list(data.items or [])

    async def get_path(self, item_id: str) -> list[BreadcrumbSegment]:
        """Resolve the ancestor chain of ``item_id``, root first."""
        resp = await self._request("GET", f"/items/{_quote_id(item_id)}/path")
        data = _parse(resp, PathResponse)
        return list(data.items or [])

    async def download(self, item_id: str) -> bytes:
        """Fetch the raw content of a file entry."""
        resp = await self._request(
            "GET", f"/items/{_quote_id(item_id)}", timeout=self._settings.download_timeout
        )
        return resp.content

    async def upload(
        self,
        filename: str,
        content: bytes,
        *,
        parent_id: str | None = None,
        content_type: str | None = None,
    ) -> Entry | None:
        """Upload one file as multipart form data (part name ``files``)."""
        files = {"files": (filename, content, content_type or "application/octet-stream")}
        data = {"parentId": parent_id} if parent_id else None
        resp = await self._request(
            "POST",
            "/items",
            files=files,
            data=data,
            timeout=self._settings.download_timeout,
        )
        return _created_entry(resp)

    async def create_folder(self, name: str, *, parent_id: str | None = None) -> Entry | None:
        """Create a folder under ``parent_id`` (None = root)."""
        body = {"name": name, "folder": True, "parentId": parent_id}
        resp = await self._request("POST", "/items", json=body)
        return _created_entry(resp)

    async def delete(self, item_id: str) -> None:
        """Delete an entry. Any response body is ignored."""
        await self._request("DELETE", f"/items/{_quote_id(item_id)}")


def _quote_id(item_id: str) -> str:
    """Escape an id so it stays a single path segment."""
    return quote(item_id, safe="")


def _json_or_none(resp: httpx.Response) -> Any:
    try:
        return resp.json()
    except ValueError:
        return None


def _parse(resp: httpx.Response, model: type[_ModelT]) -> _ModelT:
    """Validate a JSON body, turning malformed payloads into request errors."""
    try:
        return model.model_validate(resp.json())
    except ValueError as e:
        logger.warning("Malformed response from %s: %s", resp.request.url.path, e)
        raise RemoteRequestError(
            f"Malformed response from {resp.request.url.path}",
            status_code=resp.status_code,
        ) from e


def _created_entry(resp: httpx.Response) -> Entry | None:
    """The created entry, or None when the server sent no usable body."""
    try:
        return Entry.model_validate(resp.json())
    except ValueError:
        logger.debug("No entry in create response from %s", resp.request.url.path)
        return None
