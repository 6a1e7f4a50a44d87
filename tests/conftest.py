"""
Pytest configuration and shared fixtures for File Preview tests.
"""

from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from PIL import Image

from file_preview.core.config import Settings
from file_preview.core.factory import create_app
from file_preview.services.preview.cache import PreviewCacheManager
from file_preview.services.preview.icons import IconResolver
from file_preview.services.storage import LocalDrive

ICON_TYPES = ["document", "code", "image", "audio", "video", "archive", "file", "folder"]


@pytest.fixture(scope="function")
def data_dir(tmp_path) -> Path:
    """Drive root with a couple of files"""
    root = tmp_path / "data"
    root.mkdir()
    return root


@pytest.fixture(scope="function")
def icons_dir(tmp_path) -> Path:
    """Icon tree with one svg per file type in the big tier"""
    root = tmp_path / "icons"
    types_dir = root / "big" / "types"
    types_dir.mkdir(parents=True)
    for file_type in ICON_TYPES:
        (types_dir / f"{file_type}.svg").write_text(f"<svg><!-- {file_type} --></svg>")
    return root


@pytest.fixture(scope="function")
def png_file(data_dir) -> Path:
    """A 400x200 PNG in the drive root"""
    path = data_dir / "photo.png"
    Image.new("RGB", (400, 200), (200, 30, 30)).save(path, "PNG")
    return path


@pytest.fixture(scope="function")
def make_settings(data_dir, icons_dir):
    """Build Settings pointing at the test drive and icons"""

    def _make(**overrides) -> Settings:
        values = {"data_folder": str(data_dir), "icons_path": str(icons_dir), "preview": ""}
        values.update(overrides)
        return Settings(**values)

    return _make


@pytest.fixture(scope="function")
def make_manager(make_settings):
    def _make(**overrides) -> PreviewCacheManager:
        settings = make_settings(**overrides)
        return PreviewCacheManager(settings, LocalDrive(settings.data_folder), IconResolver(settings.icons_path))

    return _make


@pytest.fixture(scope="function")
def client(make_settings):
    """TestClient for an app serving the test drive with local thumbnails"""
    app = create_app(make_settings())
    with TestClient(app) as test_client:
        yield test_client
