# ircconduit/network/client.py
"""
Connect to an IRC server and run one session.

A session runs three activities concurrently over one connection:

- init:      the caller's start-up action
- inbound:   socket -> lines -> events -> consumer
- outbound:  producer -> encoder -> socket

The first activity to finish, successfully or not, ends the session.
The other two are cancelled, the connection is released and the call
returns. Nothing is raised to the caller and nothing is retried;
reconnecting is up to whoever calls irc_client() again.
"""

import asyncio
import logging
from collections.abc import AsyncIterable, AsyncIterator, Awaitable, Callable
from contextlib import aclosing
from enum import Enum
from typing import Any

from ircconduit.network.connection import (
    App,
    ClientSettings,
    Connection,
    guarded,
    run_tcp_client,
    run_tls_client,
    tcp_client_settings,
    tls_client_settings,
)
from ircconduit.network.errors import ConnectionLost
from ircconduit.protocol.codec import RAW_CODEC, Codec
from ircconduit.stream.chunker import chunked
from ircconduit.stream.codec_stages import decode_frames, irc_encoder

logger = logging.getLogger(__name__)

Connector = Callable[[int, str], ClientSettings]
Runner = Callable[[ClientSettings, App], Awaitable[None]]
Init = Callable[[], Awaitable[None]]
Consumer = Callable[[AsyncIterator[Any]], Awaitable[None]]


class SessionState(Enum):
    CONNECTING = "connecting"
    ACTIVE = "active"
    TERMINATING = "terminating"
    CLOSED = "closed"


class SessionOutcome(Enum):
    """Why a session ended. Informational only."""

    INIT_FINISHED = "init_finished"
    CONSUMER_FINISHED = "consumer_finished"
    PRODUCER_FINISHED = "producer_finished"
    CONNECTION_LOST = "connection_lost"
    ACTIVITY_FAILED = "activity_failed"
    CONNECT_FAILED = "connect_failed"


class ClientOrchestrator:
    def __init__(
        self,
        connector: Connector,
        runner: Runner,
        port: int,
        host: str,
        init: Init,
        consumer: Consumer,
        producer: AsyncIterable[Any],
        codec: Codec = RAW_CODEC,
    ):
        self.connector = connector
        self.runner = runner
        self.port = port
        self.host = host
        self.init = init
        self.consumer = consumer
        self.producer = producer
        self.codec = codec

        self.state = SessionState.CONNECTING
        self.outcome: SessionOutcome | None = None

    # ------------------------------------------------------------------

    async def run(self) -> None:
        """Run the session to completion. Never raises Exception."""
        self.state = SessionState.CONNECTING
        self.outcome = None

        try:
            settings = self.connector(self.port, self.host)
            await self.runner(settings, self._session)
        except Exception as e:
            if self.outcome is None:
                self.outcome = SessionOutcome.CONNECT_FAILED
            logger.debug(
                "session to %s:%s ended with %s: %r",
                self.host,
                self.port,
                type(e).__name__,
                e,
            )
        finally:
            self.state = SessionState.CLOSED

        logger.debug(
            "session to %s:%s closed (%s)",
            self.host,
            self.port,
            self.outcome.value if self.outcome else "cancelled",
        )

    # ------------------------------------------------------------------
    # activities
    # ------------------------------------------------------------------

    async def _init(self) -> None:
        await self.init()

    async def _inbound(self, connection: Connection) -> None:
        # Every stage is closed on the way out, whichever way the consumer ends
        async with (
            aclosing(connection.source()) as source,
            aclosing(guarded(source)) as chunks,
            aclosing(chunked(chunks)) as frames,
            aclosing(decode_frames(frames, self.codec)) as events,
        ):
            await self.consumer(events)

    async def _outbound(self, connection: Connection) -> None:
        try:
            async with aclosing(irc_encoder(self.producer, self.codec)) as wire:
                await connection.sink(wire)
        finally:
            aclose = getattr(self.producer, "aclose", None)
            if aclose is not None:
                await aclose()

    # ------------------------------------------------------------------
    # supervision
    # ------------------------------------------------------------------

    async def _session(self, connection: Connection) -> None:
        self.state = SessionState.ACTIVE
        logger.debug("connected to %s:%s", self.host, self.port)

        tasks = {
            asyncio.create_task(self._init(), name="init"): (
                SessionOutcome.INIT_FINISHED
            ),
            asyncio.create_task(self._inbound(connection), name="inbound"): (
                SessionOutcome.CONSUMER_FINISHED
            ),
            asyncio.create_task(self._outbound(connection), name="outbound"): (
                SessionOutcome.PRODUCER_FINISHED
            ),
        }

        try:
            done, _ = await asyncio.wait(tasks, return_when=asyncio.FIRST_COMPLETED)
        finally:
            self.state = SessionState.TERMINATING
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)

        first = next(task for task in tasks if task in done)
        self.outcome = self._classify(first, tasks[first])
        logger.debug(
            "%s activity finished first: %s", first.get_name(), self.outcome.value
        )

    @staticmethod
    def _classify(task: asyncio.Task, on_success: SessionOutcome) -> SessionOutcome:
        if task.cancelled():
            return SessionOutcome.ACTIVITY_FAILED

        error = task.exception()
        if error is None:
            return on_success
        if isinstance(error, ConnectionLost):
            return SessionOutcome.CONNECTION_LOST
        return SessionOutcome.ACTIVITY_FAILED


# ======================================================================
# Entry points
# ======================================================================


async def irc_with_conn(
    connector: Connector,
    runner: Runner,
    port: int,
    host: str,
    init: Init,
    consumer: Consumer,
    producer: AsyncIterable[Any],
    codec: Codec = RAW_CODEC,
) -> None:
    """Run one session using the given transport pair."""
    orchestrator = ClientOrchestrator(
        connector, runner, port, host, init, consumer, producer, codec
    )
    await orchestrator.run()


async def irc_client(
    port: int,
    host: str,
    init: Init,
    consumer: Consumer,
    producer: AsyncIterable[Any],
    codec: Codec = RAW_CODEC,
) -> None:
    """Run one session over plaintext TCP."""
    await irc_with_conn(
        tcp_client_settings, run_tcp_client, port, host, init, consumer, producer, codec
    )


async def irc_tls_client(
    port: int,
    host: str,
    init: Init,
    consumer: Consumer,
    producer: AsyncIterable[Any],
    codec: Codec = RAW_CODEC,
) -> None:
    """Run one session over TLS."""
    await irc_with_conn(
        tls_client_settings, run_tls_client, port, host, init, consumer, producer, codec
    )
