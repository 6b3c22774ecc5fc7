"""
Line framing, flood protection and connection orchestration for
IRC-style clients on asyncio.
"""

from .network.client import (
    ClientOrchestrator,
    SessionOutcome,
    SessionState,
    irc_client,
    irc_tls_client,
    irc_with_conn,
)
from .network.errors import ConnectionLost, TransportConnectionError, TransportError
from .protocol.codec import (
    RAW_CODEC,
    Codec,
    RawCodec,
    RawEvent,
    RawMessage,
    raw_message,
)
from .stream.chunker import StreamChunker, chunked
from .stream.codec_stages import irc_decoder, irc_encoder, to_bytes
from .stream.flood import FloodProtector, flood_protector

__all__ = [
    "ClientOrchestrator",
    "SessionOutcome",
    "SessionState",
    "irc_client",
    "irc_tls_client",
    "irc_with_conn",
    "ConnectionLost",
    "TransportConnectionError",
    "TransportError",
    "Codec",
    "RawCodec",
    "RawEvent",
    "RawMessage",
    "RAW_CODEC",
    "raw_message",
    "StreamChunker",
    "chunked",
    "irc_decoder",
    "irc_encoder",
    "to_bytes",
    "FloodProtector",
    "flood_protector",
]
