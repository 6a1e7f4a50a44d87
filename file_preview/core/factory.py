"""
Application factory
"""

from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from file_preview.core.config import Settings
from file_preview.core.exceptions import setup_exception_handlers
from file_preview.core.logging import logger
from file_preview.services.preview.cache import PreviewCacheManager
from file_preview.services.preview.icons import IconResolver
from file_preview.services.storage import LocalDrive


def create_app(settings: Settings, preview_manager: Optional[PreviewCacheManager] = None) -> FastAPI:
    """
    Create and configure the FastAPI application

    Services are built from the given settings and kept on app.state; pass
    preview_manager to substitute the cache manager (tests).
    """
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description=settings.app_description,
    )

    setup_exception_handlers(app)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Accept", "Authorization", "Content-Type", "X-CSRF-Token"],
        max_age=300,
    )

    drive = LocalDrive(settings.data_folder)
    icons = IconResolver(settings.icons_path)
    if preview_manager is None:
        preview_manager = PreviewCacheManager(settings, drive, icons)

    app.state.settings = settings
    app.state.drive = drive
    app.state.icons = icons
    app.state.preview_manager = preview_manager

    from file_preview.api.v1.router import api_router

    app.include_router(api_router)

    if not settings.previews_enabled:
        mode = "disabled"
    else:
        mode = settings.external_preview_url or "local"
    logger.info(f"Serving {drive.root} with previews: {mode}")
    return app
