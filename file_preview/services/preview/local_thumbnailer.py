"""
Local thumbnail generation with Pillow.
"""

from pathlib import Path
from typing import Union

from PIL import Image, ImageOps

from file_preview.services.preview.exceptions import DecodeError, EncodeError
from file_preview.utils.files import atomic_destination


class LocalThumbnailer:
    """Renders image files into JPEG thumbnails"""

    def __init__(self, quality: int = 95):
        self.quality = quality

    def render(self, source: Union[str, Path], width: int, height: int, dest_base: Union[str, Path]) -> str:
        """
        Fit the image at source into width x height and save it as JPEG.

        The aspect ratio is kept and images are never upscaled. Blocking; run
        it in a worker thread from async code.

        Returns:
            ".jpg", the extension appended to dest_base
        """
        try:
            with Image.open(source) as img:
                img.load()
                thumb = ImageOps.exif_transpose(img)
                if thumb.mode != "RGB":
                    thumb = thumb.convert("RGB")
        except (OSError, SyntaxError, ValueError, Image.DecompressionBombError) as e:
            raise DecodeError(f"cannot decode {source}: {e}") from e

        thumb.thumbnail((width, height), Image.Resampling.LANCZOS)

        dest = Path(f"{dest_base}.jpg")
        try:
            with atomic_destination(dest) as tmp:
                thumb.save(tmp, "JPEG", quality=self.quality)
        except (OSError, ValueError) as e:
            raise EncodeError(f"cannot write {dest}: {e}") from e
        return ".jpg"
