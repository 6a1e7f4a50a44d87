"""
Unit tests for Settings and command line overrides.
"""

from file_preview.core.config import Settings
from file_preview.main import build_settings, parse_args


def test_local_mode_by_default():
    settings = Settings(preview="")

    assert settings.previews_enabled
    assert settings.external_preview_url is None
    assert settings.preview_features == {"image": True}


def test_external_mode_enables_document_previews():
    settings = Settings(preview="http://render:3201/preview")

    assert settings.external_preview_url == "http://render:3201/preview"
    assert settings.preview_features == {"image": True, "document": True, "code": True}


def test_none_disables_previews():
    settings = Settings(preview="none")

    assert not settings.previews_enabled
    assert settings.external_preview_url is None
    assert settings.preview_features == {}


def test_environment_prefix(monkeypatch):
    monkeypatch.setenv("APP_PREVIEW", "http://env-render/preview")
    monkeypatch.setenv("APP_MAX_PREVIEW_DIMENSION", "1000")

    settings = Settings()

    assert settings.external_preview_url == "http://env-render/preview"
    assert settings.max_preview_dimension == 1000


def test_defaults_match_preview_limits():
    settings = Settings()

    assert settings.max_preview_source_size == 50 * 1000 * 1000
    assert settings.max_preview_dimension == 2000
    assert settings.port == 3200


def test_command_line_overrides_settings():
    base = Settings(preview="", port=3200)

    settings = build_settings(parse_args(["/srv/files", "--preview", "http://r/p", "--port", "9000"]), base)

    assert settings.data_folder == "/srv/files"
    assert settings.external_preview_url == "http://r/p"
    assert settings.port == 9000
    assert settings.icons_path == base.icons_path
