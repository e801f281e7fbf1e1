"""Tests for media routes: listing and streaming over HTTP."""

import asyncio
from unittest.mock import patch

import pytest
from httpx import AsyncClient
from starlette.requests import ClientDisconnect

from lanstream.api.routes.media import MediaStreamResponse
from lanstream.exceptions import ScanIOError
from lanstream.services.media_streamer import MediaStreamer

from conftest import VIDEO_BYTES


@pytest.mark.asyncio
async def test_list_media(client: AsyncClient, media_root):
    resp = await client.get("/media")
    assert resp.status_code == 200
    data = resp.json()

    assert len(data) == 4
    by_name = {item["name"]: item for item in data}
    assert set(by_name["video.mp4"]) == {"name", "size", "extension", "path"}
    assert by_name["video.mp4"]["size"] == len(VIDEO_BYTES)
    assert by_name["video.mp4"]["extension"] == "mp4"
    assert by_name["README"]["extension"] == ""
    assert by_name["episode01.mkv"]["path"] == str(media_root / "shows" / "season1" / "episode01.mkv")


@pytest.mark.asyncio
async def test_list_media_scan_failure(client: AsyncClient):
    with patch(
        "lanstream.services.media_scanner.scan_media_files",
        side_effect=ScanIOError("/media/gone.mp4", FileNotFoundError(2, "No such file")),
    ):
        resp = await client.get("/media")

    assert resp.status_code == 500
    assert resp.json()["detail"] == "Failed to scan media directory"


@pytest.mark.asyncio
async def test_stream_media(client: AsyncClient):
    resp = await client.get("/media/video.mp4")
    assert resp.status_code == 200
    assert resp.headers["content-type"] == "video/mp4"
    assert resp.content == VIDEO_BYTES


@pytest.mark.asyncio
async def test_stream_nested_file(client: AsyncClient):
    resp = await client.get("/media/shows/season1/episode01.mkv")
    assert resp.status_code == 200
    assert resp.headers["content-type"] == "video/x-matroska"
    assert resp.content == b"\x1a\x45\xdf\xa3" * 10


@pytest.mark.asyncio
async def test_stream_unknown_type(client: AsyncClient):
    resp = await client.get("/media/README")
    assert resp.status_code == 200
    assert resp.headers["content-type"] == "application/octet-stream"
    assert resp.content == b"no extension"


@pytest.mark.asyncio
async def test_stream_missing_file(client: AsyncClient):
    resp = await client.get("/media/missing.mp4")
    assert resp.status_code == 404
    assert resp.json()["detail"] == "File not found"


@pytest.mark.asyncio
async def test_stream_open_failure(client: AsyncClient):
    with patch(
        "lanstream.services.media_streamer.open",
        create=True,
        side_effect=PermissionError(13, "Permission denied"),
    ):
        resp = await client.get("/media/video.mp4")

    assert resp.status_code == 500
    assert resp.json()["detail"] == "Could not read media file"


@pytest.mark.asyncio
async def test_stream_traversal_rejected(client: AsyncClient, tmp_path):
    (tmp_path / "secret.txt").write_text("top secret")

    resp = await client.get("/media/..%2Fsecret.txt")

    assert resp.status_code == 403
    assert "top secret" not in resp.text


@pytest.mark.asyncio
async def test_stream_text_has_no_charset(client: AsyncClient, media_root):
    (media_root / "notes.txt").write_text("subtitles")

    resp = await client.get("/media/notes.txt")

    assert resp.status_code == 200
    assert resp.headers["content-type"] == "text/plain"
    assert resp.text == "subtitles"


def _http_scope(path: str, spec_version: str = "2.4") -> dict:
    return {
        "type": "http",
        "asgi": {"version": "3.0", "spec_version": spec_version},
        "http_version": "1.1",
        "method": "GET",
        "scheme": "http",
        "path": path,
        "raw_path": path.encode(),
        "root_path": "",
        "query_string": b"",
        "headers": [],
        "server": ("test", 80),
        "client": ("127.0.0.1", 12345),
    }


@pytest.mark.asyncio
async def test_response_closes_stream_on_client_disconnect(test_settings):
    stream = MediaStreamer(test_settings.folder, chunk_size=1024).open_for_streaming("video.mp4")
    response = MediaStreamResponse(stream)

    async def receive():
        return {"type": "http.disconnect"}

    async def send(message):
        if message["type"] == "http.response.body":
            raise OSError("connection reset")

    with pytest.raises(ClientDisconnect):
        await response(_http_scope("/media/video.mp4"), receive, send)

    assert stream.closed


@pytest.mark.asyncio
async def test_response_closes_stream_when_complete(test_settings):
    stream = MediaStreamer(test_settings.folder).open_for_streaming("README")
    response = MediaStreamResponse(stream)
    sent = []

    async def receive():
        await asyncio.Event().wait()

    async def send(message):
        sent.append(message)

    await response(_http_scope("/media/README"), receive, send)

    assert stream.closed
    assert b"".join(m.get("body", b"") for m in sent) == b"no extension"
