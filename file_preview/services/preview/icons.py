"""
Fallback icons for files that have no rendered preview.
"""

import re
from pathlib import Path

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9.]")


def sanitize(value: str) -> str:
    """Keep only [A-Za-z0-9.]; a value made of dots alone is dropped"""
    value = _UNSAFE_CHARS.sub("", value)
    if value.strip("."):
        return value
    return ""


def _extension(name: str) -> str:
    # ".svg" is an extension here, unlike os.path.splitext
    pos = name.rfind(".")
    return name[pos:] if pos != -1 else ""


class IconResolver:
    """Maps a size tier, file type and file name to an icon under icons_root"""

    def __init__(self, icons_root: str):
        self.icons_root = Path(icons_root)

    def resolve(self, size: str, file_type: str, name: str) -> Path:
        size = sanitize(size)
        name = sanitize(name)
        file_type = sanitize(file_type)

        icon = self.icons_root / size / name if name else None
        if icon is not None and icon.is_file():
            return icon
        return self.icons_root / size / "types" / f"{file_type}{_extension(name)}"

    def for_file(self, size: str, file_type: str, file_name: str) -> Path:
        """Icon named after the file extension, or the generic icon of its type"""
        return self.resolve(size, file_type, _extension(file_name).lstrip(".") + ".svg")
