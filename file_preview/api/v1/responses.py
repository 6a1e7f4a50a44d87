"""
Response helpers shared by the v1 endpoints.
"""

from pathlib import Path

from fastapi.responses import FileResponse, PlainTextResponse, Response


def serve_file(path: Path) -> Response:
    """FileResponse with the media type guessed from the extension, or a plain 404"""
    if not path.is_file():
        return PlainTextResponse("404 page not found", status_code=404)
    return FileResponse(path)
