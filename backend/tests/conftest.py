"""Test fixtures: temporary media folder and FastAPI test client."""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from lanstream.config import Settings, get_settings
from lanstream.main import create_app

VIDEO_BYTES = bytes(range(256)) * 1024  # 256 KB, several chunks


@pytest.fixture
def media_root(tmp_path):
    """Media folder with files at three depths."""
    root = tmp_path / "media"
    (root / "shows" / "season1").mkdir(parents=True)
    (root / "video.mp4").write_bytes(VIDEO_BYTES)
    (root / "README").write_bytes(b"no extension")
    (root / "shows" / "poster.JPG").write_bytes(b"\xff\xd8\xff" + b"\x00" * 97)
    (root / "shows" / "season1" / "episode01.mkv").write_bytes(b"\x1a\x45\xdf\xa3" * 10)
    return root


@pytest.fixture
def test_settings(media_root):
    return Settings(folder=str(media_root), device_name="Living Room", stream_chunk_size=4096)


@pytest_asyncio.fixture
async def client(test_settings):
    """Provide an async test client bound to the temporary media folder."""
    app = create_app()
    app.dependency_overrides[get_settings] = lambda: test_settings

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
