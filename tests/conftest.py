# Shared fixtures: an in-memory items API served through httpx.MockTransport.
# Created: 2026-10-12

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import httpx
import pytest

from filedeck.browser import FileBrowser
from filedeck.client import ItemsClient
from filedeck.config import Settings


def json_response(data: Any, status_code: int = 200) -> httpx.Response:
    return httpx.Response(
        status_code=status_code,
        content=json.dumps(data).encode(),
        headers={"content-type": "application/json"},
    )


@dataclass
class FakeItemsAPI:
    """Minimal stand-in for the items service.

    ``items`` maps id -> item dict (camelCase, like the wire format).
    ``contents`` maps file id -> bytes. ``failures`` maps
    (method, path) -> (status, body) to force error responses.
    """

    items: dict[str, dict[str, Any]] = field(default_factory=dict)
    contents: dict[str, bytes] = field(default_factory=dict)
    failures: dict[tuple[str, str], tuple[int, Any]] = field(default_factory=dict)
    requests: list[httpx.Request] = field(default_factory=list)
    _next_id: int = 100

    def add(self, item_id: str, name: str, parent_id: str | None = None, folder: bool = False,
            size: int | None = None, content: bytes | None = None) -> dict[str, Any]:
        item = {
            "id": item_id,
            "parentId": parent_id,
            "name": name,
            "folder": folder,
            "creation": "2026-10-01T10:00:00Z",
            "modification": "2026-10-02T10:00:00Z",
        }
        if not folder:
            item["filePath"] = f"/store/{item_id}"
            item["mimeType"] = "text/plain"
            item["size"] = size if size is not None else len(content or b"")
        self.items[item_id] = item
        if content is not None:
            self.contents[item_id] = content
        return item

    def calls(self, method: str, path: str | None = None) -> list[httpx.Request]:
        return [
            r for r in self.requests
            if r.method == method and (path is None or r.url.path == path)
        ]

    def _path_of(self, item_id: str) -> list[dict[str, Any]]:
        chain = []
        current = self.items.get(item_id)
        while current is not None:
            chain.append({"id": current["id"], "name": current["name"], "folder": current["folder"]})
            current = self.items.get(current["parentId"]) if current["parentId"] else None
        chain.append({"id": "root", "name": "Root", "folder": True})
        return list(reversed(chain))

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path.removeprefix("/api")
        failure = self.failures.get((request.method, path))
        if failure is not None:
            status, body = failure
            return json_response(body, status_code=status)

        parts = [p for p in path.split("/") if p]
        if request.method == "GET" and parts == ["items"]:
            parent = request.url.params.get("parentId")
            items = [i for i in self.items.values() if i["parentId"] == parent]
            return json_response({"items": items})
        if request.method == "GET" and len(parts) == 3 and parts[2] == "path":
            return json_response({"items": self._path_of(parts[1])})
        if request.method == "GET" and len(parts) == 2:
            if parts[1] not in self.contents:
                return json_response({"message": "Not found"}, status_code=404)
            return httpx.Response(200, content=self.contents[parts[1]])
        if request.method == "POST" and parts == ["items"]:
            return self._create(request)
        if request.method == "DELETE" and len(parts) == 2:
            if self.items.pop(parts[1], None) is None:
                return json_response({"desc": "Item does not exist"}, status_code=404)
            return httpx.Response(204)
        return json_response({"message": "Unsupported"}, status_code=405)

    def _create(self, request: httpx.Request) -> httpx.Response:
        self._next_id += 1
        new_id = f"n{self._next_id}"
        if request.headers.get("content-type", "").startswith("application/json"):
            body = json.loads(request.content)
            item = self.add(new_id, body["name"], parent_id=body.get("parentId"), folder=True)
        else:
            raw = request.content
            parent = None
            marker = b'name="parentId"\r\n\r\n'
            if marker in raw:
                parent = raw.split(marker, 1)[1].split(b"\r\n", 1)[0].decode()
            name = raw.split(b'filename="', 1)[1].split(b'"', 1)[0].decode()
            item = self.add(new_id, name, parent_id=parent)
        return json_response(item, status_code=201)


@pytest.fixture
def api() -> FakeItemsAPI:
    fake = FakeItemsAPI()
    fake.add("f1", "Documents", folder=True)
    fake.add("f2", "Reports", parent_id="f1", folder=True)
    fake.add("a1", "notes.txt", content=b"hello world")
    fake.add("a2", "q3.txt", parent_id="f2", content=b"numbers")
    return fake


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        api_base="http://files.test/api",
        download_dir=tmp_path / "downloads",
        _env_file=None,
    )


@pytest.fixture
def client(api: FakeItemsAPI, settings: Settings) -> ItemsClient:
    return ItemsClient(settings, transport=httpx.MockTransport(api.handler))


@pytest.fixture
def browser(client: ItemsClient, settings: Settings) -> FileBrowser:
    return FileBrowser(client, settings=settings)
