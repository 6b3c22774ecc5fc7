"""Transport error taxonomy."""


class TransportError(Exception):
    """Base class for all transport-layer errors."""


class TransportConnectionError(TransportError):
    """The transport could not establish or maintain a connection."""


class ConnectionLost(TransportConnectionError):
    """The server closed the read side while the session was still active."""
