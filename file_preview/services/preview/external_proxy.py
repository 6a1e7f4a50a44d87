"""
Preview generation through an external render service.

The source file is posted as multipart/form-data with the fields width,
height, name and file. The body is produced by a separate task writing into an
AsyncPipe that aiohttp reads from, so a large file is never held in memory
and a slow upload only slows the encoder down.
"""

import asyncio
from pathlib import Path
from typing import BinaryIO, Union

import aiohttp
from aiohttp import hdrs, payload

from file_preview.core.logging import logger
from file_preview.services.preview.exceptions import (
    RenderError,
    RenderServiceError,
    RenderServiceUnavailable,
    SourceStreamError,
    WriteError,
)
from file_preview.services.preview.pipe import AsyncPipe, PipeClosed
from file_preview.utils.files import atomic_destination

CHUNK_SIZE = 64 * 1024


def build_form(source: BinaryIO, file_name: str, width: int, height: int) -> aiohttp.MultipartWriter:
    """Multipart body with the text fields first and the file content last"""
    form = aiohttp.MultipartWriter("form-data")

    for field, value in (("width", str(width)), ("height", str(height)), ("name", file_name)):
        part = payload.StringPayload(value)
        part.set_content_disposition("form-data", name=field)
        form.append_payload(part)

    part = payload.get_payload(source, content_type="application/octet-stream")
    part.set_content_disposition("form-data", name="file", filename=file_name)
    form.append_payload(part)

    return form


class ExternalPreviewProxy:
    """Client for the render service configured with --preview"""

    def __init__(self, url: str, timeout: float = 60.0, chunk_size: int = CHUNK_SIZE):
        self.url = url
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self.chunk_size = chunk_size

    async def render(
        self,
        source: BinaryIO,
        dest_base: Union[str, Path],
        file_name: str,
        width: int,
        height: int,
    ) -> str:
        """
        Send source to the render service and store the returned image.

        Args:
            source: Readable binary stream with the file content
            dest_base: Cache path without extension
            file_name: Name sent in the name field and as the file part filename
            width, height: Requested preview box

        Returns:
            ".png" when the service answered with image/png, ".jpg" otherwise
        """
        form = build_form(source, file_name, width, height)
        pipe = AsyncPipe()
        producer = asyncio.create_task(self._encode(form, pipe))

        try:
            async with aiohttp.ClientSession(timeout=self.timeout) as session:
                async with session.post(
                    self.url,
                    data=pipe,
                    headers={hdrs.CONTENT_TYPE: form.content_type},
                ) as response:
                    return await self._save(response, dest_base)
        except RenderError:
            raise
        except Exception as e:
            if pipe.error is not None:
                raise SourceStreamError(f"reading {file_name} failed: {pipe.error}") from pipe.error
            if isinstance(e, (aiohttp.ClientError, asyncio.TimeoutError, ValueError)):
                raise RenderServiceUnavailable(f"preview service {self.url}: {e!r}") from e
            raise
        finally:
            pipe.close_reader()
            if not producer.done():
                producer.cancel()
            await asyncio.wait({producer})

    async def _encode(self, form: aiohttp.MultipartWriter, pipe: AsyncPipe) -> None:
        try:
            await form.write(pipe)
        except PipeClosed:
            # request finished or failed before the whole body was consumed
            return
        except Exception as e:
            logger.warning(f"Encoding preview request failed: {e}")
            await pipe.abort(e)
            return
        await pipe.close()

    async def _save(self, response: aiohttp.ClientResponse, dest_base: Union[str, Path]) -> str:
        if not 200 <= response.status < 300:
            body = await response.text(errors="replace")
            raise RenderServiceError(response.status, body)

        ext = ".png" if response.content_type == "image/png" else ".jpg"
        dest = Path(f"{dest_base}{ext}")
        try:
            with atomic_destination(dest) as tmp:
                with open(tmp, "wb") as out:
                    written = 0
                    async for chunk in response.content.iter_chunked(self.chunk_size):
                        out.write(chunk)
                        written += len(chunk)
                    if not written:
                        # a zero length entry would read as a failed render
                        raise RenderServiceError(response.status, "empty response body")
        except (aiohttp.ClientError, asyncio.TimeoutError):
            # both are OSError subclasses; leave them to the transport handling
            raise
        except OSError as e:
            raise WriteError(f"cannot write {dest}: {e}") from e

        logger.debug(f"Stored rendered preview {dest}")
        return ext
