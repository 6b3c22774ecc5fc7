"""Connections, transports and session orchestration."""

from .client import (
    ClientOrchestrator,
    SessionOutcome,
    SessionState,
    irc_client,
    irc_tls_client,
    irc_with_conn,
)
from .connection import (
    ClientSettings,
    Connection,
    guarded,
    run_tcp_client,
    run_tls_client,
    tcp_client_settings,
    tls_client_settings,
)
from .errors import ConnectionLost, TransportConnectionError, TransportError

__all__ = [
    "ClientOrchestrator",
    "SessionOutcome",
    "SessionState",
    "irc_client",
    "irc_tls_client",
    "irc_with_conn",
    "ClientSettings",
    "Connection",
    "guarded",
    "run_tcp_client",
    "run_tls_client",
    "tcp_client_settings",
    "tls_client_settings",
    "ConnectionLost",
    "TransportConnectionError",
    "TransportError",
]
