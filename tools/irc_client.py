#!/usr/bin/env python3
"""
Minimal non-interactive IRC client built on ircconduit.

Reads config/client.yml (or $IRCCONDUIT_CONFIG), registers, joins the
configured channels, answers PINGs and prints every line it receives.
Runs one session; no reconnect.
"""

import asyncio
import sys

from ircconduit.config.config_loader import ConfigError, ConfigLoader
from ircconduit.log import setup_logger
from ircconduit.network.client import ClientOrchestrator
from ircconduit.network.connection import (
    run_tcp_client,
    run_tls_client,
    tcp_client_settings,
    tls_client_settings,
)
from ircconduit.protocol.codec import RawEvent, RawMessage, raw_message
from ircconduit.stream.flood import FloodProtector


class DemoClient:
    def __init__(self, config):
        self.config = config
        self.outbox: asyncio.Queue[RawMessage] = asyncio.Queue()
        self.quit = asyncio.Event()
        self.flood = FloodProtector(config.flood_delay)

    # ------------------------------------------------------------------

    async def init(self):
        await self.outbox.put(raw_message("NICK", self.config.nick))
        await self.outbox.put(
            raw_message("USER", self.config.user, "0", "*", self.config.realname)
        )
        for channel in self.config.channels:
            await self.outbox.put(raw_message("JOIN", channel))

        # Returning would end the session
        await self.quit.wait()

    async def consume(self, events):
        event: RawEvent
        async for event in events:
            print(event.line.decode("utf-8", errors="replace"))

            if event.line.startswith(b"PING "):
                await self.outbox.put(RawMessage(b"PONG " + event.line[5:]))

    async def produce(self):
        while True:
            yield await self.outbox.get()

    # ------------------------------------------------------------------

    async def run(self):
        if self.config.tls:
            connector, runner = tls_client_settings, run_tls_client
        else:
            connector, runner = tcp_client_settings, run_tcp_client

        orchestrator = ClientOrchestrator(
            connector,
            runner,
            self.config.port,
            self.config.host,
            self.init,
            self.consume,
            self.flood.protect(self.produce()),
        )
        await orchestrator.run()
        return orchestrator.outcome


def main() -> int:
    try:
        config = ConfigLoader().load()
    except ConfigError as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return 1

    logger = setup_logger("ircconduit", config.log_level)
    logger.info("Connecting to %s:%s (tls=%s)", config.host, config.port, config.tls)

    try:
        outcome = asyncio.run(DemoClient(config).run())
    except KeyboardInterrupt:
        logger.info("KeyboardInterrupt received, shutting down...")
        return 0

    logger.info("Session ended: %s", outcome.value if outcome else "unknown")
    return 0


if __name__ == "__main__":
    sys.exit(main())
