"""
Request dependencies resolving the services stored on the application
"""

from fastapi import Request

from file_preview.core.config import Settings
from file_preview.services.preview.cache import PreviewCacheManager
from file_preview.services.preview.icons import IconResolver
from file_preview.services.storage import LocalDrive


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_drive(request: Request) -> LocalDrive:
    return request.app.state.drive


def get_icon_resolver(request: Request) -> IconResolver:
    return request.app.state.icons


def get_preview_manager(request: Request) -> PreviewCacheManager:
    return request.app.state.preview_manager
