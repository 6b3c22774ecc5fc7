# ircconduit/network/connection.py
"""
Duplex connection handle and the plaintext/TLS transport pairs.

A transport is a (connector, runner) pair:

- connector(port, host) -> ClientSettings
- runner(settings, app) opens the connection, awaits app(connection)
  and releases the connection exactly once, however app ends.

Swapping the pair is the only difference between plaintext and TLS.
"""

import asyncio
import logging
import ssl
from collections.abc import AsyncIterable, AsyncIterator, Awaitable, Callable
from dataclasses import dataclass, replace
from ssl import SSLContext

from ircconduit.network.errors import ConnectionLost, TransportConnectionError

logger = logging.getLogger(__name__)

DEFAULT_READ_SIZE = 4096


@dataclass(frozen=True)
class ClientSettings:
    """Where and how to connect."""

    host: str
    port: int
    ssl: SSLContext | None = None
    read_size: int = DEFAULT_READ_SIZE


class Connection:
    """
    One open duplex stream.

    The read half (source) belongs to the inbound pipeline and the
    write half (sink) to the outbound pipeline.
    """

    def __init__(
        self,
        reader: asyncio.StreamReader,
        writer: asyncio.StreamWriter,
        read_size: int = DEFAULT_READ_SIZE,
    ):
        self.reader = reader
        self.writer = writer
        self.read_size = read_size
        self.releases: int = 0

    # ------------------------------------------------------------------
    # read half
    # ------------------------------------------------------------------

    async def source(self) -> AsyncIterator[bytes]:
        """Yield byte chunks until the peer closes its side."""
        while data := await self.reader.read(self.read_size):
            yield data

    # ------------------------------------------------------------------
    # write half
    # ------------------------------------------------------------------

    async def sink(self, chunks: AsyncIterable[bytes]) -> None:
        async for data in chunks:
            self.writer.write(data)
            await self.writer.drain()

    # ------------------------------------------------------------------
    # lifecycle
    # ------------------------------------------------------------------

    @property
    def closed(self) -> bool:
        return self.releases > 0

    async def close(self) -> None:
        """Release the connection. Calls after the first are no-ops."""
        if self.closed:
            return
        self.releases += 1

        self.writer.close()
        try:
            await self.writer.wait_closed()
        except OSError as e:
            logger.debug("error while closing connection: %s", e)


async def guarded(source: AsyncIterable[bytes]) -> AsyncIterator[bytes]:
    """Pass chunks through; raise ConnectionLost when the source ends."""
    async for chunk in source:
        yield chunk
    raise ConnectionLost("upstream source closed")


# ======================================================================
# Transports
# ======================================================================

App = Callable[[Connection], Awaitable[None]]


def tcp_client_settings(port: int, host: str) -> ClientSettings:
    return ClientSettings(host=host, port=port)


def tls_client_settings(port: int, host: str) -> ClientSettings:
    return ClientSettings(host=host, port=port, ssl=ssl.create_default_context())


async def _run_client(settings: ClientSettings, app: App) -> None:
    try:
        reader, writer = await asyncio.open_connection(
            settings.host,
            settings.port,
            ssl=settings.ssl,
        )
    except OSError as e:
        raise TransportConnectionError(
            f"could not connect to {settings.host}:{settings.port}: {e}"
        ) from e

    connection = Connection(reader, writer, read_size=settings.read_size)
    try:
        await app(connection)
    finally:
        await connection.close()


async def run_tcp_client(settings: ClientSettings, app: App) -> None:
    """Run app over a plaintext TCP connection."""
    await _run_client(replace(settings, ssl=None), app)


async def run_tls_client(settings: ClientSettings, app: App) -> None:
    """Run app over a TLS connection, verifying the server certificate."""
    if settings.ssl is None:
        settings = replace(settings, ssl=ssl.create_default_context())
    await _run_client(settings, app)
