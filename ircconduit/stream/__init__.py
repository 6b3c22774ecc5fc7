"""Composable stream stages: line framing, codec stages, flood protection."""

from .chunker import StreamChunker, chunked
from .codec_stages import decode_frames, irc_decoder, irc_encoder, to_bytes
from .flood import FloodProtector, flood_protector

__all__ = [
    "StreamChunker",
    "chunked",
    "decode_frames",
    "irc_decoder",
    "irc_encoder",
    "to_bytes",
    "FloodProtector",
    "flood_protector",
]
