"""
API endpoints for file previews and fallback icons.
"""

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response

from file_preview.api.v1.deps import get_icon_resolver, get_preview_manager
from file_preview.api.v1.responses import serve_file
from file_preview.core.logging import logger
from file_preview.services.preview.cache import PreviewCacheManager
from file_preview.services.preview.icons import IconResolver

router = APIRouter(tags=["preview"])


@router.get("/preview")
async def get_file_preview(
    file_id: str = Query("", alias="id", description="File id relative to the drive root"),
    width: str = Query("", description="Width of the preview box in pixels"),
    height: str = Query("", description="Height of the preview box in pixels"),
    manager: PreviewCacheManager = Depends(get_preview_manager),
) -> Response:
    """
    Return a preview image for the file, generating and caching it on first request.

    Files that cannot be previewed get a type icon instead. Bad dimensions and
    inaccessible files answer 500 with a plain text message.
    """
    result = await manager.get_preview(file_id, width, height)
    if result.is_fallback:
        logger.debug(f"Serving icon for {file_id} {width}x{height}: {result.outcome.value}")
    return serve_file(result.path)


@router.get("/icons/{size}/{file_type}/{name}")
def get_icon(size: str, file_type: str, name: str, icons: IconResolver = Depends(get_icon_resolver)) -> Response:
    """Serve a file type icon"""
    return serve_file(icons.resolve(size, file_type, name))
