"""Codec interface and the raw fallback codec."""

from .codec import RAW_CODEC, Codec, RawCodec, RawEvent, RawMessage, raw_message

__all__ = [
    "Codec",
    "RawCodec",
    "RawEvent",
    "RawMessage",
    "RAW_CODEC",
    "raw_message",
]
