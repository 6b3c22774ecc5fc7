# ircconduit/stream/chunker.py
"""
Split an inbound byte stream into line frames.

Lines end with '\\n' or '\\r\\n'. Every '\\r' is dropped wherever it
appears, empty lines are skipped, and a partial line still pending
when the stream ends is thrown away.
"""

from collections.abc import AsyncIterable, AsyncIterator

CR = b"\r"
LF = b"\n"


class StreamChunker:
    """Stateful line splitter; carries partial lines between chunks."""

    def __init__(self):
        self._leftover = b""

    @property
    def leftover(self) -> bytes:
        return self._leftover

    def feed(self, chunk: bytes) -> list[bytes]:
        """Consume one chunk and return the complete, nonempty frames in it."""
        buffer = (self._leftover + chunk).replace(CR, b"")
        parts = buffer.split(LF)

        if buffer.endswith(LF):
            self._leftover = b""
        else:
            self._leftover = parts.pop()

        return [part for part in parts if part]


async def chunked(source: AsyncIterable[bytes]) -> AsyncIterator[bytes]:
    chunker = StreamChunker()
    async for chunk in source:
        for frame in chunker.feed(chunk):
            yield frame
