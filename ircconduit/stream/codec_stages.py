# ircconduit/stream/codec_stages.py
"""
Decoding and encoding stages.

irc_decoder:  bytes  -> frames -> events
irc_encoder:  messages -> wire bytes, each terminated with CRLF
"""

from collections.abc import AsyncIterable, AsyncIterator
from typing import Any

from ircconduit.protocol.codec import RAW_CODEC, Codec
from ircconduit.stream.chunker import chunked

TERMINATOR = b"\r\n"


async def decode_frames(
    frames: AsyncIterable[bytes],
    codec: Codec = RAW_CODEC,
) -> AsyncIterator[Any]:
    async for frame in frames:
        yield codec.decode(frame)


def irc_decoder(
    source: AsyncIterable[bytes],
    codec: Codec = RAW_CODEC,
) -> AsyncIterator[Any]:
    """Turn raw byte chunks into decoded events, one per line."""
    return decode_frames(chunked(source), codec)


async def irc_encoder(
    messages: AsyncIterable[Any],
    codec: Codec = RAW_CODEC,
) -> AsyncIterator[bytes]:
    """Turn messages into terminated wire lines, one per message."""
    async for message in messages:
        yield codec.encode(message) + TERMINATOR


def to_bytes(message: Any, codec: Codec = RAW_CODEC) -> bytes:
    """Encode a single message without the line terminator."""
    return codec.encode(message)
