# Tests for the items API client (httpx MockTransport).
# Created: 2026-10-12

import json

import httpx
import pytest

from filedeck.client import ItemsClient
from filedeck.errors import RemoteRequestError
from filedeck.models import Entry


def json_response(data, status_code: int = 200) -> httpx.Response:
    return httpx.Response(status_code, json=data)


def make_client(settings, handler) -> ItemsClient:
    return ItemsClient(settings, transport=httpx.MockTransport(handler))


class TestListItems:
    async def test_root_listing_omits_parent(self, client, api):
        entries = await client.list_items(None)

        assert {e.id for e in entries} == {"f1", "a1"}
        request = api.requests[-1]
        assert request.url.path == "/api/items"
        assert "parentId" not in request.url.params

    async def test_folder_listing_sends_parent(self, client, api):
        entries = await client.list_items("f1")

        assert [e.name for e in entries] == ["Reports"]
        assert api.requests[-1].url.params["parentId"] == "f1"

    async def test_parses_camel_case_fields(self, client):
        entries = await client.list_items(None)
        notes = next(e for e in entries if e.id == "a1")

        assert isinstance(notes, Entry)
        assert notes.parent_id is None
        assert notes.mime_type == "text/plain"
        assert notes.file_path == "/store/a1"
        assert notes.size == 11
        assert notes.folder is False

    async def test_missing_items_key_is_empty(self, settings):
        client = make_client(settings, lambda request: json_response({}))
        assert await client.list_items(None) == []

    async def test_null_items_is_empty(self, settings):
        client = make_client(settings, lambda request: json_response({"items": None}))
        assert await client.list_items("f1") == []

    async def test_error_status_raises_with_body(self, settings):
        client = make_client(
            settings, lambda request: json_response({"desc": "Backend down"}, status_code=503)
        )
        with pytest.raises(RemoteRequestError) as exc_info:
            await client.list_items(None)

        assert exc_info.value.status_code == 503
        assert exc_info.value.detail == "Backend down"

    async def test_non_json_error_body(self, settings):
        client = make_client(settings, lambda request: httpx.Response(502, content=b"<html>"))
        with pytest.raises(RemoteRequestError) as exc_info:
            await client.list_items(None)

        assert exc_info.value.status_code == 502
        assert exc_info.value.body is None

    async def test_malformed_success_body_raises(self, settings):
        client = make_client(settings, lambda request: httpx.Response(200, content=b"not json"))
        with pytest.raises(RemoteRequestError):
            await client.list_items(None)

    async def test_transport_error_raises(self, settings):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        client = make_client(settings, handler)
        with pytest.raises(RemoteRequestError) as exc_info:
            await client.list_items(None)
        assert exc_info.value.status_code is None

    async def test_timeout_raises(self, settings):
        def handler(request):
            raise httpx.ReadTimeout("too slow", request=request)

        client = make_client(settings, handler)
        with pytest.raises(RemoteRequestError, match="timed out"):
            await client.list_items(None)


class TestGetPath:
    async def test_returns_segments_root_first(self, client, api):
        segments = await client.get_path("f2")

        assert [s.id for s in segments] == ["root", "f1", "f2"]
        assert segments[0].is_root
        assert api.requests[-1].url.path == "/api/items/f2/path"

    async def test_id_is_escaped_as_one_segment(self, settings):
        seen = []

        def handler(request):
            seen.append(request)
            return json_response({"items": []})

        client = make_client(settings, handler)
        await client.get_path("a/b?c")

        assert seen[0].url.raw_path == b"/api/items/a%2Fb%3Fc/path"
        assert "c" not in seen[0].url.params


class TestDownload:
    async def test_returns_raw_bytes(self, client, api):
        assert await client.download("a1") == b"hello world"
        assert api.requests[-1].url.path == "/api/items/a1"

    async def test_missing_file_raises(self, client):
        with pytest.raises(RemoteRequestError) as exc_info:
            await client.download("nope")
        assert exc_info.value.detail == "Not found"

    async def test_id_is_escaped(self, settings):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, content=b"x")

        client = make_client(settings, handler)
        await client.download("../secret")

        assert seen[0].url.raw_path == b"/api/items/..%2Fsecret"


class TestMutations:
    async def test_upload_multipart_with_parent(self, client, api):
        entry = await client.upload("a.txt", b"abc", parent_id="f1", content_type="text/plain")

        request = api.calls("POST", "/api/items")[-1]
        assert request.headers["content-type"].startswith("multipart/form-data")
        assert b'name="files"; filename="a.txt"' in request.content
        assert b'name="parentId"' in request.content
        assert entry is not None
        assert entry.parent_id == "f1"

    async def test_upload_at_root_has_no_parent_field(self, client, api):
        await client.upload("a.txt", b"abc")

        request = api.calls("POST", "/api/items")[-1]
        assert b'name="parentId"' not in request.content

    async def test_create_folder_json_body(self, client, api):
        entry = await client.create_folder("Invoices", parent_id="f1")

        body = json.loads(api.calls("POST", "/api/items")[-1].content)
        assert body == {"name": "Invoices", "folder": True, "parentId": "f1"}
        assert entry is not None and entry.folder

    async def test_create_folder_at_root_sends_null_parent(self, client, api):
        await client.create_folder("Top")

        body = json.loads(api.calls("POST", "/api/items")[-1].content)
        assert body["parentId"] is None

    async def test_create_without_body_returns_none(self, settings):
        client = make_client(settings, lambda request: httpx.Response(201))
        assert await client.create_folder("x") is None

    async def test_delete(self, client, api):
        await client.delete("a1")

        assert api.calls("DELETE", "/api/items/a1")
        assert "a1" not in api.items

    async def test_delete_error(self, client):
        with pytest.raises(RemoteRequestError) as exc_info:
            await client.delete("missing")
        assert exc_info.value.detail == "Item does not exist"
