"""
Preview cache manager.

Previews live next to their source in a hidden folder:

    <dir>/.preview/<name>___<width>x<height>.jpg   (or .png)

A zero-length .jpg is a negative entry: generation already failed for this
exact file and size, so the fallback icon is served without trying again.
Entries are never expired here; deleting or renaming the source is what
removes them.
"""

import asyncio
import os
import re
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional, Union

from file_preview.core.config import Settings
from file_preview.core.logging import logger
from file_preview.services.preview.exceptions import (
    AccessDenied,
    InvalidParameter,
    PreviewsDisabled,
    RenderError,
    UnsupportedPreview,
)
from file_preview.services.preview.external_proxy import ExternalPreviewProxy
from file_preview.services.preview.icons import IconResolver
from file_preview.services.preview.local_thumbnailer import LocalThumbnailer
from file_preview.services.preview.locks import KeyedLock
from file_preview.services.storage import FileInfo, LocalDrive

PREVIEW_FOLDER = ".preview"
CACHE_EXTENSIONS = (".jpg", ".png")
PLACEHOLDER_EXTENSION = ".jpg"

_DIMENSION = re.compile(r"[+-]?[0-9]+")


class PreviewOutcome(str, Enum):
    """How a preview request was answered"""

    CACHED = "cached"
    GENERATED = "generated"
    SIZE_LIMIT_EXCEEDED = "size_limit_exceeded"
    NEGATIVE_CACHE = "negative_cache"
    GENERATION_FAILED = "generation_failed"


@dataclass(frozen=True)
class PreviewRequest:
    file_id: str
    width: int
    height: int

    @classmethod
    def parse(cls, file_id: str, width: Union[str, int], height: Union[str, int]) -> "PreviewRequest":
        return cls(file_id, _parse_dimension(width, "width"), _parse_dimension(height, "height"))


@dataclass(frozen=True)
class PreviewResult:
    path: Path
    outcome: PreviewOutcome

    @property
    def is_fallback(self) -> bool:
        return self.outcome not in (PreviewOutcome.CACHED, PreviewOutcome.GENERATED)


def _parse_dimension(value: Union[str, int], name: str) -> int:
    text = str(value).strip()
    if not _DIMENSION.fullmatch(text):
        raise InvalidParameter(name)
    number = int(text)
    if number <= 0:
        raise InvalidParameter(name)
    return number


class PreviewCacheManager:
    """Serves previews from the on-disk cache, generating them on a miss"""

    def __init__(
        self,
        settings: Settings,
        drive: LocalDrive,
        icons: IconResolver,
        thumbnailer: Optional[LocalThumbnailer] = None,
        proxy: Optional[ExternalPreviewProxy] = None,
    ):
        self.settings = settings
        self.drive = drive
        self.icons = icons
        self.thumbnailer = thumbnailer or LocalThumbnailer(quality=settings.preview_jpeg_quality)
        if proxy is None and settings.external_preview_url:
            proxy = ExternalPreviewProxy(settings.external_preview_url, timeout=settings.preview_timeout)
        self.proxy = proxy
        self._locks = KeyedLock()

    def cache_key(self, request: PreviewRequest) -> Path:
        """Cache path for a request, without extension"""
        source = self.drive.path(request.file_id)
        if source == self.drive.root:
            # cache entries must stay inside the drive
            raise AccessDenied(request.file_id, "the drive root has no preview")
        return source.parent / PREVIEW_FOLDER / f"{source.name}___{request.width}x{request.height}"

    def fallback(self, info: FileInfo) -> Path:
        return self.icons.for_file(self.settings.preview_icon_size, info.type, info.name)

    async def get_preview(self, file_id: str, width: Union[str, int], height: Union[str, int]) -> PreviewResult:
        """
        Return a servable image for file_id at the requested size.

        Raises PreviewsDisabled, InvalidParameter or AccessDenied. Every
        generation failure is absorbed: it is logged, remembered with a
        placeholder and answered with the fallback icon.
        """
        if not self.settings.previews_enabled:
            raise PreviewsDisabled()

        request = PreviewRequest.parse(file_id, width, height)
        info = self.drive.info(request.file_id)

        if self._over_limits(request, info):
            # large inputs are a valid case, they just never get a real render
            return PreviewResult(self.fallback(info), PreviewOutcome.SIZE_LIMIT_EXCEEDED)

        key = self.cache_key(request)
        async with self._locks.hold(str(key)):
            cached = self._lookup(key)
            if cached is not None:
                if cached.stat().st_size == 0:
                    logger.debug(f"Negative preview cache hit {cached}")
                    return PreviewResult(self.fallback(info), PreviewOutcome.NEGATIVE_CACHE)
                logger.debug(f"Preview cache hit {cached}")
                return PreviewResult(cached, PreviewOutcome.CACHED)

            self._ensure_folder(key.parent)
            try:
                ext = await self._render(request, info, key)
            except RenderError as e:
                logger.warning(
                    f"Preview generation failed for {request.file_id} "
                    f"({request.width}x{request.height}): {e}"
                )
                self._write_placeholder(key)
                return PreviewResult(self.fallback(info), PreviewOutcome.GENERATION_FAILED)

        return PreviewResult(Path(f"{key}{ext}"), PreviewOutcome.GENERATED)

    def _over_limits(self, request: PreviewRequest, info: FileInfo) -> bool:
        limit = self.settings.max_preview_dimension
        return (
            info.size > self.settings.max_preview_source_size
            or request.width > limit
            or request.height > limit
        )

    @staticmethod
    def _lookup(key: Path) -> Optional[Path]:
        for ext in CACHE_EXTENSIONS:
            candidate = Path(f"{key}{ext}")
            if candidate.is_file():
                return candidate
        return None

    @staticmethod
    def _ensure_folder(folder: Path) -> None:
        try:
            os.mkdir(folder, 0o777)
        except FileExistsError:
            pass
        except OSError as e:
            # the renderer will fail to write and the request falls back to an icon
            logger.warning(f"Cannot create preview folder {folder}: {e}")

    async def _render(self, request: PreviewRequest, info: FileInfo, key: Path) -> str:
        if self.proxy is not None:
            with self.drive.read(request.file_id) as source:
                return await self.proxy.render(source, key, info.name, request.width, request.height)

        if info.type == "image":
            source = self.drive.path(request.file_id)
            return await asyncio.to_thread(self.thumbnailer.render, source, request.width, request.height, key)

        raise UnsupportedPreview(f"no renderer for {info.type!r} files")

    @staticmethod
    def _write_placeholder(key: Path) -> None:
        placeholder = Path(f"{key}{PLACEHOLDER_EXTENSION}")
        try:
            placeholder.write_bytes(b"")
        except OSError as e:
            logger.error(f"Cannot write preview placeholder {placeholder}: {e}")
