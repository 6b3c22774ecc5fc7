# ircconduit/protocol/codec.py
"""
Codec interface between wire lines and domain objects.

The framing layer never looks inside a line. Anything that turns a
frame into an event (and a message back into bytes) plugs in here.

RawCodec is the fallback: events and messages are the line itself.
"""

from dataclasses import dataclass
from typing import Any, Protocol


class Codec(Protocol):
    """Pure, total conversion between frames and domain objects."""

    def decode(self, frame: bytes) -> Any: ...

    def encode(self, message: Any) -> bytes: ...


@dataclass(frozen=True)
class RawEvent:
    """An inbound line, undecoded."""

    line: bytes


@dataclass(frozen=True)
class RawMessage:
    """An outbound line, sent as-is (terminator added by the encoder)."""

    line: bytes


class RawCodec:
    def decode(self, frame: bytes) -> RawEvent:
        return RawEvent(frame)

    def encode(self, message: RawMessage) -> bytes:
        return message.line


RAW_CODEC = RawCodec()


def raw_message(command: str | bytes, *params: str | bytes) -> RawMessage:
    """
    Build a RawMessage from a command and its parameters.

    The last parameter is sent as a trailing parameter (prefixed with ':')
    when it contains a space, is empty or already starts with ':'.
    """
    parts = [_as_bytes(command)]
    params_b = [_as_bytes(p) for p in params]

    if params_b:
        *middle, last = params_b
        parts.extend(middle)
        if not last or b" " in last or last.startswith(b":"):
            last = b":" + last
        parts.append(last)

    return RawMessage(b" ".join(parts))


def _as_bytes(value: str | bytes) -> bytes:
    if isinstance(value, bytes):
        return value
    return value.encode("utf-8")
