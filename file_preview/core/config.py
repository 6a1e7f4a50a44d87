"""
Application configuration using pydantic-settings
"""

from typing import Dict, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from file_preview.core.app_info import get_app_description, get_app_name, get_app_version

PREVIEWS_DISABLED = "none"


class Settings(BaseSettings):
    """Application settings loaded from APP_* environment variables"""

    model_config = SettingsConfigDict(
        env_prefix="APP_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application - sourced from pyproject.toml
    app_name: str = get_app_name()
    app_version: str = get_app_version()
    app_description: str = get_app_description()
    port: int = Field(default=3200, description="Port for the web server")
    log_level: str = Field(default="INFO")

    # Drive
    data_folder: str = Field(default=".", description="Root folder served by the drive")

    # Previews
    preview: str = Field(
        default="",
        description="URL of the preview generation service, empty for local thumbnails, 'none' to disable",
    )
    icons_path: str = Field(default="icons", description="Folder with fallback icons")
    preview_icon_size: str = Field(default="big", description="Icon size tier served instead of a preview")
    preview_timeout: float = Field(default=60.0, gt=0, description="Render service timeout in seconds")
    max_preview_source_size: int = Field(default=50 * 1000 * 1000)
    max_preview_dimension: int = Field(default=2000)
    preview_jpeg_quality: int = Field(default=95, ge=1, le=100)

    @property
    def previews_enabled(self) -> bool:
        """False when previews are switched off entirely"""
        return self.preview.strip().lower() != PREVIEWS_DISABLED

    @property
    def external_preview_url(self) -> Optional[str]:
        """Render service URL, or None when thumbnails are generated locally"""
        url = self.preview.strip()
        if not url or not self.previews_enabled:
            return None
        return url

    @property
    def preview_features(self) -> Dict[str, bool]:
        """File types that get a real preview instead of an icon"""
        features = {}
        if not self.previews_enabled:
            return features
        features["image"] = True
        if self.external_preview_url:
            features["document"] = True
            features["code"] = True
        return features


# Global settings instance, used by the entry point only
settings = Settings()
