"""
In-process pipe between a producer coroutine and an async byte consumer.

The multipart encoder writes into the pipe while aiohttp reads the request
body out of it, so only a bounded number of chunks is ever held in memory.
"""

import asyncio
from typing import Optional

_EOF = object()


class PipeClosed(Exception):
    """Raised to a writer once the reading side went away."""


class AsyncPipe:
    """
    Bounded chunk queue with explicit completion.

    Writer side: ``write`` (blocks while the queue is full), ``close`` when
    done, ``abort(exc)`` on failure; the exception is re-raised to the reader.
    Reader side: async iteration, and ``close_reader`` to give up early, which
    unblocks a writer waiting on a full queue.
    """

    def __init__(self, max_chunks: int = 8):
        self._queue: asyncio.Queue = asyncio.Queue(maxsize=max_chunks)
        self._writer_closed = False
        self._reader_closed = asyncio.Event()
        self.error: Optional[BaseException] = None

    async def write(self, data: bytes) -> None:
        if self._reader_closed.is_set():
            raise PipeClosed("reader closed the pipe")
        if self._writer_closed:
            raise PipeClosed("write after close")
        if not data:
            return
        await self._put(bytes(data))

    async def close(self) -> None:
        """Signal end of data to the reader"""
        if self._writer_closed:
            return
        self._writer_closed = True
        await self._put(_EOF)

    async def abort(self, exc: BaseException) -> None:
        """Stop writing and hand exc to the reader"""
        self.error = exc
        if self._writer_closed:
            return
        self._writer_closed = True
        await self._put(_EOF)

    def close_reader(self) -> None:
        self._reader_closed.set()
        # drain so a writer blocked in put() can proceed and notice
        while not self._queue.empty():
            self._queue.get_nowait()

    async def _put(self, item) -> None:
        if not self._reader_closed.is_set():
            put = asyncio.ensure_future(self._queue.put(item))
            gone = asyncio.ensure_future(self._reader_closed.wait())
            try:
                await asyncio.wait({put, gone}, return_when=asyncio.FIRST_COMPLETED)
            finally:
                gone.cancel()
                if not put.done():
                    put.cancel()
        if self._reader_closed.is_set() and item is not _EOF:
            raise PipeClosed("reader closed the pipe")

    def __aiter__(self):
        return self

    async def __anext__(self) -> bytes:
        if self._reader_closed.is_set():
            raise StopAsyncIteration
        item = await self._queue.get()
        if item is _EOF:
            self._reader_closed.set()
            if self.error is not None:
                raise self.error
            raise StopAsyncIteration
        return item
