"""
Local drive: resolves file ids under the data folder.

This is the storage surface the preview subsystem consumes. Ids are
slash-separated paths relative to the root; "/docs/a.pdf" and "docs/a.pdf"
name the same file. Anything that escapes the root is refused.
"""

import mimetypes
import os
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Tuple

from file_preview.services.preview.exceptions import AccessDenied

DOCUMENT_EXTENSIONS = {
    "pdf", "doc", "docx", "odt", "rtf", "txt", "xls", "xlsx", "ods", "csv", "ppt", "pptx", "odp",
}
CODE_EXTENSIONS = {
    "py", "js", "ts", "jsx", "tsx", "go", "c", "h", "cpp", "hpp", "cs", "java", "kt", "rb", "php",
    "rs", "sh", "sql", "html", "css", "scss", "json", "xml", "yml", "yaml", "toml", "md",
}
ARCHIVE_EXTENSIONS = {"zip", "tar", "gz", "tgz", "bz2", "xz", "rar", "7z"}


@dataclass
class FileInfo:
    """Metadata the preview subsystem needs about a file"""

    name: str
    size: int
    type: str


def get_file_type(name: str) -> str:
    """Classify a file name into one of the drive's file types"""
    ext = Path(name).suffix.lower().lstrip(".")
    if ext in DOCUMENT_EXTENSIONS:
        return "document"
    if ext in CODE_EXTENSIONS:
        return "code"
    if ext in ARCHIVE_EXTENSIONS:
        return "archive"

    mime_type, _ = mimetypes.guess_type(name)
    if mime_type:
        category = mime_type.split("/", 1)[0]
        if category in ("image", "audio", "video"):
            return category
    return "file"


class LocalDrive:
    """Read-only view of a folder on disk"""

    def __init__(self, root: str):
        self.root = Path(root).resolve()

    def path(self, file_id: str) -> Path:
        """Map an id to an absolute path inside the root"""
        candidate = (self.root / file_id.lstrip("/")).resolve()
        if candidate != self.root and not candidate.is_relative_to(self.root):
            raise AccessDenied(file_id, "path escapes the drive root")
        return candidate

    def info(self, file_id: str) -> FileInfo:
        path = self.path(file_id)
        try:
            stat = path.stat()
        except OSError as e:
            raise AccessDenied(file_id, str(e)) from e

        if path.is_dir():
            return FileInfo(name=path.name, size=0, type="folder")
        return FileInfo(name=path.name, size=stat.st_size, type=get_file_type(path.name))

    def read(self, file_id: str) -> BinaryIO:
        """Open a file for reading; the caller owns the returned stream"""
        path = self.path(file_id)
        if not path.is_file():
            raise AccessDenied(file_id, "not a file")
        try:
            return open(path, "rb")
        except OSError as e:
            raise AccessDenied(file_id, str(e)) from e

    def stats(self) -> Tuple[int, int]:
        """Return (used, free) bytes of the filesystem holding the root"""
        usage = shutil.disk_usage(self.root)
        return usage.used, usage.free

    def __repr__(self) -> str:
        return f"LocalDrive({os.fspath(self.root)!r})"
